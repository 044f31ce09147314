import logging
import os
import tempfile

from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import serializers, status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAdminUser, IsAuthenticated
from rest_framework.response import Response

from infrastructure.container import container
from infrastructure.media.interface import MediaHostException
from infrastructure.payments.interface import PaymentException
from marketplace.catalog.api.serializers import (
    LicenseKeySerializer,
    LicenseSerializer,
    ProductImageUploadSerializer,
    ProductSerializer,
    ProductWriteSerializer,
    ReviewCreateSerializer,
    SkuBatchSerializer,
    SkuUpdateSerializer,
)
from marketplace.catalog.domain.exceptions import ClientError, NotFoundError, ReviewPermissionDenied
from marketplace.catalog.domain.services import ProductQuery, is_truthy, service_failure
from marketplace.permissions import IsAdminOrReadOnly


logger = logging.getLogger(__name__)


class ProductViewSet(viewsets.ViewSet):
    """
    Products, their SKUs, license keys and reviews.

    Every response uses the {"message", "success", "result"} envelope.
    """

    permission_classes = [IsAdminOrReadOnly]

    def get_permissions(self):
        if self.action in ["add_review", "remove_review"]:
            return [IsAuthenticated()]
        if self.action == "licenses":
            # License keys are never public, not even for reads
            return [IsAdminUser()]
        return super().get_permissions()

    def handle_exception(self, exc):
        if isinstance(exc, NotFoundError):
            return self._failure(exc.message, status.HTTP_404_NOT_FOUND)
        if isinstance(exc, ReviewPermissionDenied):
            return self._failure(exc.message, status.HTTP_403_FORBIDDEN)
        if isinstance(exc, ClientError):
            return self._failure(exc.message, status.HTTP_400_BAD_REQUEST)
        if isinstance(exc, (PaymentException, MediaHostException)):
            logger.error(f"Upstream failure in {self.action}: {str(exc)}")
            return self._failure(str(exc), status.HTTP_502_BAD_GATEWAY)
        if isinstance(exc, serializers.ValidationError):
            response = self._failure("Invalid request data", status.HTTP_400_BAD_REQUEST)
            response.data["result"] = exc.detail
            return response
        return super().handle_exception(exc)

    # Products

    @extend_schema(request=ProductWriteSerializer)
    def create(self, request):
        serializer = ProductWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        response = container.product_service().create_product(serializer.validated_data)
        return self._respond(response, ProductSerializer(response.result).data, status.HTTP_201_CREATED)

    @extend_schema(
        parameters=[
            OpenApiParameter("homepage", bool, description="Group into latest and top rated products"),
            OpenApiParameter("skip", int),
            OpenApiParameter("limit", int),
            OpenApiParameter("sort", str, description="Comma separated fields, '-' for descending"),
            OpenApiParameter("fields", str, description="Comma separated projection"),
            OpenApiParameter("search", str, description="Substring of the product name"),
        ]
    )
    def list(self, request):
        params = request.query_params.dict()
        service = container.product_service()

        if is_truthy(params.get("homepage") or ""):
            response = service.find_all_products(params)
            data = {
                "latest_products": ProductSerializer(response.result["latest_products"], many=True).data,
                "top_rated_products": ProductSerializer(response.result["top_rated_products"], many=True).data,
            }
            return self._respond(response, data)

        product_query = ProductQuery.from_params(params)
        response = service.search_products(product_query, base_url=request.build_absolute_uri(request.path))
        data = {
            "metadata": response.result["metadata"],
            "products": ProductSerializer(response.result["products"], many=True, fields=product_query.fields).data,
        }
        return self._respond(response, data)

    def retrieve(self, request, pk=None):
        response = container.product_service().find_one_product(pk)
        data = {
            "product": ProductSerializer(response.result["product"]).data,
            "related_products": ProductSerializer(response.result["related_products"], many=True).data,
        }
        return self._respond(response, data)

    @extend_schema(request=ProductWriteSerializer)
    def partial_update(self, request, pk=None):
        serializer = ProductWriteSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        response = container.product_service().update_product(pk, serializer.validated_data)
        return self._respond(response, ProductSerializer(response.result).data)

    def destroy(self, request, pk=None):
        response = container.product_service().remove_product(pk)
        return self._respond(response, response.result)

    @extend_schema(request={"multipart/form-data": ProductImageUploadSerializer})
    @action(detail=True, methods=["post"], url_path="image")
    def upload_image(self, request, pk=None):
        serializer = ProductImageUploadSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        # The service deletes the local file once the upload has been attempted
        file_path = self._local_path(serializer.validated_data["product_image"])
        response = container.product_service().upload_product_image(pk, file_path)
        return self._respond(response, response.result)

    # SKUs

    @extend_schema(request=SkuBatchSerializer)
    @action(detail=True, methods=["post"], url_path="skus")
    def add_skus(self, request, pk=None):
        serializer = SkuBatchSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        response = container.sku_service().add_product_skus(pk, serializer.validated_data["sku_details"])
        return self._respond(response, ProductSerializer(response.result).data, status.HTTP_201_CREATED)

    @extend_schema(request=SkuUpdateSerializer)
    @action(detail=True, methods=["put"], url_path=r"skus/(?P<sku_id>[^/.]+)")
    def sku(self, request, pk=None, sku_id=None):
        serializer = SkuUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        response = container.sku_service().update_product_sku_by_id(pk, sku_id, serializer.validated_data)
        return self._respond(response, ProductSerializer(response.result).data)

    @sku.mapping.delete
    def delete_sku(self, request, pk=None, sku_id=None):
        response = container.sku_service().delete_product_sku_by_id(pk, sku_id)
        return self._respond(response, response.result)

    # Licenses

    @extend_schema(request=LicenseKeySerializer)
    @action(detail=True, methods=["get", "post"], url_path=r"skus/(?P<sku_id>[^/.]+)/licenses")
    def licenses(self, request, pk=None, sku_id=None):
        service = container.sku_service()

        if request.method == "GET":
            response = service.get_product_sku_licenses(pk, sku_id)
            return self._respond(response, LicenseSerializer(response.result, many=True).data)

        serializer = LicenseKeySerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        response = service.add_product_sku_license(pk, sku_id, serializer.validated_data["license_key"])
        return self._respond(response, LicenseSerializer(response.result).data, status.HTTP_201_CREATED)

    @extend_schema(request=LicenseKeySerializer)
    @action(
        detail=True,
        methods=["put"],
        url_path=r"skus/(?P<sku_id>[^/.]+)/licenses/(?P<license_id>[^/.]+)",
    )
    def license(self, request, pk=None, sku_id=None, license_id=None):
        serializer = LicenseKeySerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        response = container.sku_service().update_product_sku_license(
            pk, sku_id, license_id, serializer.validated_data["license_key"]
        )
        data = LicenseSerializer(response.result).data if response.result is not None else None
        return self._respond(response, data)

    @action(detail=False, methods=["delete"], url_path=r"licenses/(?P<license_id>[^/.]+)")
    def remove_license(self, request, license_id=None):
        response = container.sku_service().remove_product_sku_license(license_id)
        return self._respond(response, response.result)

    # Reviews

    @extend_schema(request=ReviewCreateSerializer)
    @action(detail=True, methods=["post"], url_path="reviews")
    def add_review(self, request, pk=None):
        serializer = ReviewCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        response = container.review_service().add_product_review(
            pk,
            rating=serializer.validated_data["rating"],
            review=serializer.validated_data["review"],
            user=request.user,
        )
        return self._respond(response, ProductSerializer(response.result).data, status.HTTP_201_CREATED)

    @action(detail=True, methods=["delete"], url_path=r"reviews/(?P<review_id>[^/.]+)")
    def remove_review(self, request, pk=None, review_id=None):
        response = container.review_service().remove_product_review(pk, review_id, user=request.user)
        return self._respond(response, ProductSerializer(response.result).data)

    # Helpers

    def _respond(self, response, data, status_code=status.HTTP_200_OK):
        body = response.to_dict()
        body["result"] = data
        return Response(body, status=status_code)

    def _failure(self, message, status_code):
        return Response(service_failure(message).to_dict(), status=status_code)

    def _local_path(self, upload):
        """Path of the uploaded file on disk, spooling in-memory uploads to a temporary file."""
        if hasattr(upload, "temporary_file_path"):
            return upload.temporary_file_path()

        _, extension = os.path.splitext(upload.name)
        with tempfile.NamedTemporaryFile(suffix=extension, delete=False) as handle:
            for chunk in upload.chunks():
                handle.write(chunk)
        return handle.name
