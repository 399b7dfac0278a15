"""Image host factory and URL helpers.

Provides get_image_host() / set_image_host() to swap implementations.
Defaults to FakeImageHost.
"""

from catalogue.images.fake_adapter import FakeImageHost
from catalogue.images.port import ImageHost

_current_host: ImageHost | None = None


def get_image_host() -> ImageHost:
    """Return the current image host. Defaults to FakeImageHost."""
    global _current_host
    if _current_host is None:
        _current_host = FakeImageHost()
    return _current_host


def set_image_host(host: ImageHost) -> None:
    """Override the active image host (useful for tests)."""
    global _current_host
    _current_host = host


def reset_image_host() -> None:
    """Reset to default host."""
    global _current_host
    _current_host = None


def public_id_from_url(image_url: str | None) -> str | None:
    """Extract the hosted asset id from a delivery URL.

    ``https://res.cloudinary.com/demo/image/upload/v1712/store/shirt.jpg``
    yields ``store/shirt``. URLs from other hosts, or without a version
    segment after ``upload``, yield None.
    """
    if not image_url or "cloudinary.com" not in image_url:
        return None

    parts = image_url.split("/")
    if "upload" not in parts:
        return None
    upload_index = parts.index("upload")
    if upload_index + 2 >= len(parts):
        return None

    public_id, dot, _ = "/".join(parts[upload_index + 2 :]).rpartition(".")
    return public_id if dot else None


__all__ = [
    "FakeImageHost",
    "ImageHost",
    "get_image_host",
    "public_id_from_url",
    "reset_image_host",
    "set_image_host",
]
