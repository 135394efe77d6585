import html
import re
from typing import Optional


def sanitize_string(value: Optional[str]) -> Optional[str]:
    """
    Escape HTML special characters in free text shown on the storefront.
    Returns None if input is None.
    """
    if value is None:
        return None
    if not isinstance(value, str):
        return value
    return html.escape(html.unescape(value.strip()), quote=True)


def validate_and_sanitize_input(value: Optional[str], max_length: int = 500) -> str:
    """
    Validate and sanitize user input by removing potentially harmful content.

    Args:
        value: Input string to validate
        max_length: Maximum allowed length

    Returns:
        Sanitized string

    Raises:
        ValueError: If input is invalid
    """
    if not value:
        return ""

    value = str(value).strip()

    if len(value) > max_length:
        raise ValueError(f"Input exceeds maximum length of {max_length} characters")

    # unescape first so already-sanitized text is not escaped twice
    value = html.escape(html.unescape(value), quote=True)

    value = re.sub(r"[\x00-\x08\x0B\x0C\x0E-\x1F\x7F]", "", value)

    return value
