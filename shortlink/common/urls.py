"""Short link addressing: forwarded headers, public base URL, short URLs."""

from typing import Dict, Mapping, Optional

FORWARDED_HEADERS = {
    "forwarded_proto": "x-forwarded-proto",
    "forwarded_host": "x-forwarded-host",
    "forwarded_for": "x-forwarded-for",
}


def _first_hop(value: Optional[str]) -> Optional[str]:
    # Proxies append to the chain; the left-most entry faces the client
    if not value:
        return None
    return value.split(",")[0].strip() or None


def extract_forwarded_headers(headers: Mapping[str, str]) -> Dict[str, Optional[str]]:
    """Pick the X-Forwarded-* headers out of a request, case-insensitively."""
    lowered = {name.lower(): value for name, value in headers.items()}
    return {key: lowered.get(header) for key, header in FORWARDED_HEADERS.items()}


def build_base_url(
    headers: Mapping[str, str],
    fallback_base_url: str,
    request_scheme: Optional[str] = None,
    request_host: Optional[str] = None,
) -> str:
    """Work out the public base URL that short links are served from.

    A proxy's X-Forwarded-Proto/Host pair wins, then the scheme and Host of
    the request itself, then the configured BASE_URL.

    Returns:
        Base URL without trailing slash (e.g., https://sho.rt)
    """
    forwarded = extract_forwarded_headers(headers)
    proto = _first_hop(forwarded["forwarded_proto"])
    host = _first_hop(forwarded["forwarded_host"])

    if not (proto and host):
        proto, host = request_scheme, request_host

    if proto and host:
        return f"{proto}://{host}"
    return fallback_base_url.rstrip("/")


def build_short_url(short_code: str, base_url: str) -> str:
    """Join base URL and short code; the redirect route lives at the root."""
    return f"{base_url.rstrip('/')}/{short_code}"


def client_ip(headers: Mapping[str, str], peer: Optional[str] = None) -> str:
    """Best-effort client address for logging.

    Args:
        headers: Request headers
        peer: Address of the directly connected peer

    Returns:
        First X-Forwarded-For entry, the peer address, or "unknown"
    """
    forwarded_for = _first_hop(extract_forwarded_headers(headers)["forwarded_for"])
    return forwarded_for or peer or "unknown"
