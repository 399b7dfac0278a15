"""Configurable fake image host for development and testing."""

from catalogue.images.port import ImageHost
from shared.errors import TransientUpstreamError


class FakeImageHost(ImageHost):
    def __init__(self) -> None:
        self.available: bool = True
        self.deleted: list[str] = []
        self.calls: list[dict] = []

    def configure(self, available: bool) -> None:
        """Make the host reachable or not."""
        self.available = available

    def delete(self, public_id: str) -> bool:
        self.calls.append({"method": "delete", "public_id": public_id})

        if not self.available:
            raise TransientUpstreamError("image-host", f"Could not delete image {public_id}")
        self.deleted.append(public_id)
        return True
