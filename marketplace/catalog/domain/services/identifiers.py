import uuid


def generate_sku_code() -> str:
    """Code shared by every SKU created in one batch."""
    return uuid.uuid4().hex[:12]


def generate_public_id(prefix: str) -> str:
    """Unique media host public id for a product image."""
    return f"{prefix}{uuid.uuid4().hex}"
