"""Image host port (abstract interface).

Product images live on a third-party asset host. The catalogue only needs to
delete an image when its product goes away or gets a new one; uploads happen
outside this service.
"""

from abc import ABC, abstractmethod


class ImageHost(ABC):
    @abstractmethod
    def delete(self, public_id: str) -> bool:
        """Delete a hosted image.

        Returns False when the host answered but did not delete the image.
        Raises ``TransientUpstreamError`` when the host could not be reached.
        """
        ...
