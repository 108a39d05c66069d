"""Drone image service API client."""

from dataclasses import dataclass
from typing import Protocol

import httpx
from pydantic import TypeAdapter

from drone_gallery.domain.photos import PendingUpload, Photo

_PHOTO_LIST = TypeAdapter(list[Photo])


class ImageClient(Protocol):
    """Interface for the remote image storage service."""

    async def list_images(self) -> list[Photo]:
        """Return every stored photo in server order."""

    async def upload_image(
        self, upload: PendingUpload, fields: dict[str, str] | None = None
    ) -> str:
        """Upload a file as multipart form data and return the server message."""

    async def get_image_bytes(self, photo_id: int) -> tuple[bytes, str | None]:
        """Return raw image bytes and their content type."""

    async def delete_image(self, photo_id: int) -> None:
        """Delete a stored photo."""


@dataclass
class HttpxImageClient(ImageClient):
    """HTTPX-backed image service client."""

    base_url: str
    http_client: httpx.AsyncClient
    timeout: float | None = None

    @classmethod
    def create(cls, base_url: str, timeout: float | None = None) -> "HttpxImageClient":
        """Create an image client with a managed httpx session."""
        return cls(base_url=base_url, http_client=httpx.AsyncClient(), timeout=timeout)

    async def list_images(self) -> list[Photo]:
        """Fetch the photo list."""
        response = await self.http_client.get(
            f"{self.base_url}/api/images", timeout=self.timeout
        )
        response.raise_for_status()
        return _PHOTO_LIST.validate_json(response.content)

    async def upload_image(
        self, upload: PendingUpload, fields: dict[str, str] | None = None
    ) -> str:
        """Post the file and any classification fields."""
        response = await self.http_client.post(
            f"{self.base_url}/api/images/upload",
            files={"file": (upload.filename, upload.content, upload.content_type)},
            data=fields or {},
            timeout=self.timeout,
        )
        response.raise_for_status()
        return response.text

    async def get_image_bytes(self, photo_id: int) -> tuple[bytes, str | None]:
        """Download the stored image."""
        response = await self.http_client.get(
            self.image_url(photo_id), timeout=self.timeout
        )
        response.raise_for_status()
        return response.content, response.headers.get("content-type")

    async def delete_image(self, photo_id: int) -> None:
        """Delete the stored image."""
        response = await self.http_client.delete(
            self.image_url(photo_id), timeout=self.timeout
        )
        response.raise_for_status()

    def image_url(self, photo_id: int) -> str:
        """Return the backend address of a single image."""
        return f"{self.base_url}/api/images/{photo_id}"

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
