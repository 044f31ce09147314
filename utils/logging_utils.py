def mask_value(value: str) -> str:
    """Mask an email address or secret so it can be written to logs."""
    if not isinstance(value, str):
        return value
    if "@" in value:
        name, _, domain = value.partition("@")
        return (name[:2] + "***@" + domain) if name else "***@" + domain
    if len(value) > 12:
        return value[:4] + "..." + value[-4:]
    return "***"
