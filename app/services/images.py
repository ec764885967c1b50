import requests
from app.core.config import settings
from app.core.errors import UpstreamFetchError
from app.core.logging import get_logger

logger = get_logger(__name__)

class ImageService:
    def __init__(self, base_url: str = None, timeout: float = None):
        self.base_url = (base_url or settings.IMAGE_BASE_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.IMAGE_TIMEOUT

    def get_url(self, name: str) -> str:
        """
        Get the upstream URL for an image.

        Args:
            name: Image file name as stored on the product row

        Returns:
            Full upstream URL
        """
        return f"{self.base_url}/{name}"

    def fetch(self, name: str) -> bytes:
        """
        Download an image from the upstream host.

        Raises:
            UpstreamFetchError: on a network failure or a non-2xx answer
        """
        url = self.get_url(name)
        try:
            response = requests.get(url, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise UpstreamFetchError(f"Error fetching {url}: {e}") from e
        return response.content

# Singleton instance
image_service = ImageService()
