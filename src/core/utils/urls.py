"""Public URL construction for share links."""

from typing import Any

from core.utils.constants import (
    DEFAULT_PUBLIC_HOST,
    DEFAULT_PUBLIC_SCHEME,
    RAW_URL_PATH,
    SHORT_URL_PATH,
)


def resolve_base_url(event: dict[str, Any], configured: str | None = None) -> str:
    """Return ``scheme://host`` for links handed back to clients.

    A configured base URL wins; otherwise the request's Host and
    X-Forwarded-Proto headers are used.
    """
    if configured:
        return configured.rstrip("/")

    headers = {k.lower(): v for k, v in (event.get("headers") or {}).items()}
    host = headers.get("host")

    if not host:
        return f"{DEFAULT_PUBLIC_SCHEME}://{DEFAULT_PUBLIC_HOST}"

    scheme = headers.get("x-forwarded-proto") or "https"
    return f"{scheme}://{host}"


def short_url(base_url: str, image_id: str) -> str:
    return f"{base_url}{SHORT_URL_PATH}/{image_id}"


def raw_url(base_url: str, image_id: str) -> str:
    return f"{base_url}{RAW_URL_PATH}/{image_id}"


def absolute_url(base_url: str, url: str) -> str:
    """Make a service-relative path (e.g. ``/uploads/x.png``) absolute."""
    if url.startswith(("http://", "https://")):
        return url
    return f"{base_url}{url}"
