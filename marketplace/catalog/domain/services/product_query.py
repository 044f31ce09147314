"""
Query-string translation for product listings.

Turns the flat query parameters of a listing request into ORM filters,
ordering, projection and pagination options, and builds the
first/prev/next/last links for the response metadata.

    ?category=Application%20Software&sort=-avgRating,productName&skip=10&limit=5
"""

import math
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional
from urllib.parse import urlencode

from marketplace.catalog.domain.exceptions import InvalidQuery


DEFAULT_LIMIT = 10

RESERVED_KEYS = ("skip", "limit", "sort", "fields", "search", "homepage")

# Fields that may be used as equality filters and sort keys
FILTERABLE_FIELDS = (
    "id",
    "product_name",
    "category",
    "platform_type",
    "base_type",
    "avg_rating",
    "stripe_product_id",
)

SORTABLE_FIELDS = FILTERABLE_FIELDS + ("created_at", "updated_at")

PROJECTABLE_FIELDS = SORTABLE_FIELDS + (
    "description",
    "product_url",
    "download_url",
    "requirement_specification",
    "highlights",
    "image",
    "image_details",
    "sku_details",
    "feedback_details",
)

_CAMEL_RE = re.compile(r"(?<!^)(?=[A-Z])")


def to_snake_case(name: str) -> str:
    """productName -> product_name; snake_case input is returned unchanged."""
    return _CAMEL_RE.sub("_", name.strip()).lower()


def _parse_non_negative_int(key: str, raw: Any) -> int:
    try:
        value = int(raw)
    except (TypeError, ValueError) as e:
        raise InvalidQuery(f"'{key}' must be a non-negative integer") from e
    if value < 0:
        raise InvalidQuery(f"'{key}' must be a non-negative integer")
    return value


@dataclass
class ProductQuery:
    """
    Translated listing query.

    Attributes:
        filters: ORM equality filters keyed by model field name
        skip: Number of records to skip
        limit: Page size reported in the metadata, applied only when supplied
        limit_supplied: Whether the caller passed a limit (controls pages and links)
        sort: ORM ordering expressions ('-' prefix for descending)
        fields: Projection, or None for the full record
        search: Case-insensitive substring matched against the product name
        params: The original parameters, reused to build links
    """

    filters: Dict[str, Any] = field(default_factory=dict)
    skip: int = 0
    limit: int = DEFAULT_LIMIT
    limit_supplied: bool = False
    sort: List[str] = field(default_factory=list)
    fields: Optional[List[str]] = None
    search: Optional[str] = None
    params: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_params(cls, params: Mapping[str, Any]) -> "ProductQuery":
        """
        Translate query parameters.

        Unknown keys and unknown sort/projection fields are ignored.

        Raises:
            InvalidQuery: If skip or limit is not a non-negative integer
        """
        params = dict(params)
        query = cls(params=params)

        if params.get("skip") not in (None, ""):
            query.skip = _parse_non_negative_int("skip", params["skip"])

        if params.get("limit") not in (None, ""):
            limit = _parse_non_negative_int("limit", params["limit"])
            # limit=0 behaves as if no limit was given
            if limit > 0:
                query.limit = limit
                query.limit_supplied = True

        for raw in str(params.get("sort") or "").split(","):
            raw = raw.strip()
            if not raw:
                continue
            descending = raw.startswith("-")
            name = to_snake_case(raw.lstrip("-+"))
            if name in SORTABLE_FIELDS:
                query.sort.append(f"-{name}" if descending else name)

        if params.get("fields"):
            projection = [to_snake_case(name) for name in str(params["fields"]).split(",") if name.strip()]
            projection = [name for name in projection if name in PROJECTABLE_FIELDS]
            if projection:
                if "id" not in projection:
                    projection.insert(0, "id")
                query.fields = projection

        search = str(params.get("search") or "").strip()
        query.search = search or None

        for key, value in params.items():
            if key in RESERVED_KEYS:
                continue
            name = to_snake_case(key)
            if name in FILTERABLE_FIELDS:
                query.filters[name] = value

        return query

    @property
    def options(self) -> Dict[str, Any]:
        """Repository options. Without a supplied limit every matching row is returned."""
        return {
            "search": self.search,
            "sort": list(self.sort),
            "skip": self.skip,
            "limit": self.limit if self.limit_supplied else None,
        }

    def pages(self, total: int) -> int:
        if not self.limit_supplied:
            return 1
        return math.ceil(total / self.limit)

    def links(self, base_url: str, total: int) -> Dict[str, str]:
        """
        Pagination links for the current page.

        Returns an empty dict when no limit was supplied; otherwise only the
        links that point at an existing page.
        """
        if not self.limit_supplied:
            return {}

        links = {"first": self._link(base_url, 0)}

        if self.skip > 0:
            links["prev"] = self._link(base_url, max(self.skip - self.limit, 0))

        if self.skip + self.limit < total:
            links["next"] = self._link(base_url, self.skip + self.limit)

        if total > 0:
            links["last"] = self._link(base_url, (self.pages(total) - 1) * self.limit)

        return links

    def metadata(self, base_url: str, total: int) -> Dict[str, Any]:
        return {
            "skip": self.skip,
            "limit": self.limit,
            "total": total,
            "pages": self.pages(total),
            "links": self.links(base_url, total),
        }

    def _link(self, base_url: str, skip: int) -> str:
        params = {key: value for key, value in self.params.items() if key not in ("skip", "limit")}
        params["skip"] = skip
        params["limit"] = self.limit
        return f"{base_url}?{urlencode(params)}"
