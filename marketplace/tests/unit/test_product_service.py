from unittest.mock import MagicMock, call

import pytest

from infrastructure.media.interface import MediaAsset, MediaHostException
from infrastructure.payments.interface import LedgerProduct, PaymentException
from marketplace.catalog.domain.exceptions import InvalidQuery, ProductNotFound
from marketplace.catalog.domain.services.product_service import ProductService, parse_size
from marketplace.models import Product
from marketplace.tests.factories import ProductFactory, ProductFeedbackFactory, ProductSkuFactory


@pytest.fixture
def mock_payment():
    payment = MagicMock()
    payment.create_product.return_value = LedgerProduct(product_id="prod_new", name="Office Suite")
    return payment


@pytest.fixture
def mock_media_host():
    media_host = MagicMock()
    media_host.upload.return_value = MediaAsset(
        public_id="digistore/products/digistore-product-new.jpg",
        secure_url="https://cdn.example.com/digistore/products/digistore-product-new.jpg",
        folder="digistore/products",
        width=400,
        height=420,
        format="jpg",
        bytes=2048,
    )
    return media_host


@pytest.fixture
def product_service(mock_payment, mock_media_host):
    return ProductService(payment=mock_payment, media_host=mock_media_host)


def product_data(**overrides):
    data = {
        "product_name": "Office Suite",
        "description": "Documents, spreadsheets and slides",
        "category": "Application Software",
        "platform_type": "Windows",
        "base_type": "Computer",
        "product_url": "https://example.com/office",
        "download_url": "https://example.com/office/download",
        "requirement_specification": [{"RAM": "8 GB"}],
        "highlights": ["Lifetime updates"],
    }
    data.update(overrides)
    return data


@pytest.mark.unit
def test_parse_size():
    assert parse_size("400x420") == {"width": 400, "height": 420}
    assert parse_size("300") == {"width": 300, "height": 300}


@pytest.mark.unit
@pytest.mark.django_db
class TestCreateProduct:
    def test_creates_ledger_product_when_no_id_given(self, product_service, mock_payment):
        response = product_service.create_product(product_data())

        assert response.success is True
        assert response.message == "Product created successfully"
        assert response.result.stripe_product_id == "prod_new"
        mock_payment.create_product.assert_called_once_with(
            name="Office Suite", description="Documents, spreadsheets and slides"
        )

    def test_keeps_given_ledger_id(self, product_service, mock_payment):
        response = product_service.create_product(product_data(stripe_product_id="prod_existing"))

        assert response.result.stripe_product_id == "prod_existing"
        mock_payment.create_product.assert_not_called()

    def test_ledger_failure_writes_nothing(self, product_service, mock_payment):
        mock_payment.create_product.side_effect = PaymentException("Stripe down")

        with pytest.raises(PaymentException):
            product_service.create_product(product_data())

        assert Product.objects.count() == 0


@pytest.mark.unit
@pytest.mark.django_db
class TestFindProducts:
    def test_homepage_groups_latest_and_top_rated(self, product_service):
        products = ProductFactory.create_batch(10)
        for index, product in enumerate(products):
            product.avg_rating = f"{index % 5 + 0.5:.2f}"
            product.save()

        response = product_service.find_all_products({"homepage": True})

        assert response.message == "Products fetched successfully"
        assert set(response.result) == {"latest_products", "top_rated_products"}
        assert "metadata" not in response.result
        assert len(response.result["latest_products"]) == 4
        assert len(response.result["top_rated_products"]) == 8

        ratings = [float(product.avg_rating) for product in response.result["top_rated_products"]]
        assert ratings == sorted(ratings, reverse=True)

    def test_top_rated_orders_numerically(self, product_service):
        ProductFactory(avg_rating="9.00")
        ProductFactory(avg_rating="10.00")

        response = product_service.find_all_products({"homepage": "true"})

        assert [p.avg_rating for p in response.result["top_rated_products"]] == ["10.00", "9.00"]

    def test_search_mode_returns_metadata(self, product_service):
        ProductFactory.create_batch(3, category="Operating System")
        ProductFactory.create_batch(2, category="Application Software")

        response = product_service.find_all_products(
            {"category": "Operating System", "limit": "2"}, base_url="/api/marketplace/products/"
        )

        metadata = response.result["metadata"]
        assert metadata["total"] == 3
        assert metadata["limit"] == 2
        assert metadata["pages"] == 2
        assert "next" in metadata["links"]
        assert len(response.result["products"]) == 2

    def test_search_mode_without_limit_returns_every_row(self, product_service):
        ProductFactory.create_batch(12)

        response = product_service.find_all_products({})

        metadata = response.result["metadata"]
        assert metadata["skip"] == 0
        assert metadata["limit"] == 10
        assert metadata["total"] == 12
        assert metadata["pages"] == 1
        assert metadata["links"] == {}
        assert len(response.result["products"]) == 12

    def test_zero_limit_returns_every_row(self, product_service):
        ProductFactory.create_batch(12)

        response = product_service.find_all_products({"limit": "0", "skip": "2"})

        assert response.result["metadata"]["pages"] == 1
        assert len(response.result["products"]) == 10

    def test_search_by_name(self, product_service):
        ProductFactory(product_name="Ubuntu Pro")
        ProductFactory(product_name="Windows 11 Pro")
        ProductFactory(product_name="Photo Editor")

        response = product_service.find_all_products({"search": "pro", "sort": "productName"})

        assert [p.product_name for p in response.result["products"]] == ["Ubuntu Pro", "Windows 11 Pro"]

    def test_no_products_message(self, product_service):
        response = product_service.find_all_products({"category": "Operating System"})

        assert response.success is True
        assert response.message == "No products found"
        assert response.result["products"] == []

    def test_invalid_limit(self, product_service):
        with pytest.raises(InvalidQuery):
            product_service.find_all_products({"limit": "-1"})

    def test_find_one_with_related(self, product_service):
        product = ProductFactory(category="Operating System")
        related = ProductFactory.create_batch(2, category="Operating System")
        ProductFactory(category="Application Software")

        response = product_service.find_one_product(product.id)

        assert response.result["product"] == product
        assert {p.id for p in response.result["related_products"]} == {p.id for p in related}

    def test_find_one_not_found(self, product_service):
        with pytest.raises(ProductNotFound):
            product_service.find_one_product("not-a-uuid")


@pytest.mark.unit
@pytest.mark.django_db
class TestUpdateProduct:
    def test_pushes_name_and_description(self, product_service, mock_payment):
        product = ProductFactory(stripe_product_id="prod_1")

        response = product_service.update_product(product.id, {"product_name": "Renamed"})

        assert response.result.product_name == "Renamed"
        mock_payment.update_product.assert_called_once_with(
            "prod_1", name="Renamed", description=product.description
        )

    def test_patch_with_ledger_id_skips_ledger(self, product_service, mock_payment):
        product = ProductFactory()

        response = product_service.update_product(product.id, {"stripe_product_id": "prod_moved"})

        assert response.result.stripe_product_id == "prod_moved"
        mock_payment.update_product.assert_not_called()

    def test_blank_ledger_id_keeps_stored_id_and_pushes(self, product_service, mock_payment):
        product = ProductFactory(stripe_product_id="prod_1")

        response = product_service.update_product(product.id, {"product_name": "Renamed", "stripe_product_id": ""})

        assert response.result.stripe_product_id == "prod_1"
        mock_payment.update_product.assert_called_once_with(
            "prod_1", name="Renamed", description=product.description
        )

    def test_ledger_failure_marks_sync_pending(self, product_service, mock_payment):
        product = ProductFactory()
        mock_payment.update_product.side_effect = PaymentException("Stripe down")

        with pytest.raises(PaymentException):
            product_service.update_product(product.id, {"product_name": "Renamed"})

        product.refresh_from_db()
        assert product.product_name == "Renamed"
        assert product.stripe_sync_pending is True

    def test_not_found(self, product_service):
        with pytest.raises(ProductNotFound):
            product_service.update_product("00000000-0000-0000-0000-000000000000", {"product_name": "x"})


@pytest.mark.unit
@pytest.mark.django_db
class TestRemoveProduct:
    def test_deletes_locally_then_in_ledger(self, product_service, mock_payment):
        product = ProductFactory(stripe_product_id="prod_gone")
        ProductSkuFactory(product=product)
        ProductFeedbackFactory(product=product)

        response = product_service.remove_product(product.id)

        assert response.result == {"id": str(product.id)}
        assert not Product.objects.filter(id=product.id).exists()
        mock_payment.delete_product.assert_called_once_with("prod_gone")

    def test_ledger_failure_keeps_local_delete(self, product_service, mock_payment):
        product = ProductFactory()
        mock_payment.delete_product.side_effect = PaymentException("Stripe down")

        with pytest.raises(PaymentException):
            product_service.remove_product(product.id)

        assert not Product.objects.filter(id=product.id).exists()


@pytest.mark.unit
@pytest.mark.django_db
class TestUploadProductImage:
    @pytest.fixture
    def upload_file(self, tmp_path):
        path = tmp_path / "upload.jpg"
        path.write_bytes(b"not really an image")
        return path

    def test_destroys_old_asset_before_upload(self, product_service, mock_media_host, mock_payment, upload_file):
        product = ProductFactory(image_details={"public_id": "digistore/products/old.jpg"})
        response = product_service.upload_product_image(product.id, str(upload_file))

        assert [c[0] for c in mock_media_host.mock_calls] == ["destroy", "upload"]
        assert mock_media_host.mock_calls[0] == call.destroy("digistore/products/old.jpg", invalidate=True)
        assert response.result == mock_media_host.upload.return_value.secure_url
        mock_payment.update_product.assert_called_once_with(
            product.stripe_product_id, images=[response.result]
        )

    def test_upload_parameters(self, product_service, mock_media_host, upload_file, settings):
        settings.MEDIA_HOST = {
            "FOLDER": "shop/items",
            "PUBLIC_ID_PREFIX": "item-",
            "BIG_SIZE": "400x420",
        }
        product = ProductFactory()

        product_service.upload_product_image(product.id, str(upload_file))

        mock_media_host.destroy.assert_not_called()
        args, kwargs = mock_media_host.upload.call_args
        assert args == (str(upload_file),)
        assert kwargs["folder"] == "shop/items"
        assert kwargs["public_id"].startswith("item-")
        assert len(kwargs["public_id"]) == len("item-") + 32
        assert kwargs["transformation"] == [
            {"width": 400, "height": 420, "crop": "fill"},
            {"quality": "auto"},
        ]

    def test_persists_image_and_removes_local_file(self, product_service, upload_file):
        product = ProductFactory()

        product_service.upload_product_image(product.id, str(upload_file))

        product.refresh_from_db()
        assert product.image.endswith("digistore-product-new.jpg")
        assert product.image_details["public_id"] == "digistore/products/digistore-product-new.jpg"
        assert not upload_file.exists()

    def test_local_file_removed_when_upload_fails(self, product_service, mock_media_host, upload_file):
        product = ProductFactory()
        mock_media_host.upload.side_effect = MediaHostException("Media upload failed")

        with pytest.raises(MediaHostException):
            product_service.upload_product_image(product.id, str(upload_file))

        assert not upload_file.exists()

    def test_ledger_failure_marks_sync_pending(self, product_service, mock_payment, upload_file):
        product = ProductFactory()
        mock_payment.update_product.side_effect = PaymentException("Stripe down")

        with pytest.raises(PaymentException):
            product_service.upload_product_image(product.id, str(upload_file))

        product.refresh_from_db()
        assert product.image.endswith("digistore-product-new.jpg")
        assert product.stripe_sync_pending is True

    def test_not_found_still_removes_file(self, product_service, upload_file):
        with pytest.raises(ProductNotFound):
            product_service.upload_product_image("00000000-0000-0000-0000-000000000000", str(upload_file))

        assert not upload_file.exists()


@pytest.mark.unit
@pytest.mark.django_db
def test_sync_to_ledger_clears_flag(product_service, mock_payment):
    product = ProductFactory(stripe_sync_pending=True, image="https://cdn.example.com/a.jpg")

    product_service.sync_to_ledger(product)

    product.refresh_from_db()
    assert product.stripe_sync_pending is False
    mock_payment.update_product.assert_called_once_with(
        product.stripe_product_id,
        name=product.product_name,
        description=product.description,
        images=["https://cdn.example.com/a.jpg"],
    )
