from urllib.parse import urlparse
from typing import Optional, Tuple


def normalize_url(url: str) -> Tuple[str, bool]:

    url = url.strip()

    # "example.com:8080" parses with "example.com" as the scheme
    if "://" not in url:
        normalized = f"https://{url}"
        return normalized, True

    return url, False


def validate_url(url: Optional[str]) -> Tuple[bool, str, str]:
    """
    Returns (is_valid, normalized_url, error_message).
    Bare domains get an https:// prefix before they are checked.
    """
    if not url or not url.strip():
        return False, "", "URL is required"

    normalized_url, _ = normalize_url(url)

    try:
        parsed = urlparse(normalized_url)
        # Raises for a non-numeric or out of range port
        parsed.port
    except ValueError as e:
        return False, normalized_url, f"URL parsing error: {str(e)}"

    if parsed.scheme not in ["http", "https"]:
        return False, normalized_url, f"Invalid URL scheme: {parsed.scheme} (must be http or https)"

    if not parsed.netloc or not parsed.hostname:
        return False, normalized_url, "Invalid URL format: missing domain"

    if any(ch.isspace() for ch in normalized_url):
        return False, normalized_url, "Invalid URL format: contains whitespace"

    return True, normalized_url, ""
