"""Shared test fixtures."""

from dataclasses import dataclass, field

import httpx
import pytest

from drone_gallery.adapters.image_client import ImageClient
from drone_gallery.config import Settings
from drone_gallery.containers import AppContainer
from drone_gallery.domain.photos import PendingUpload, Photo, ProcessStage
from drone_gallery.services.gallery import GalleryStore


@dataclass
class FakeImageClient(ImageClient):
    """In-memory image service that records every call."""

    photos: list[Photo] = field(default_factory=list)
    images: dict[int, bytes] = field(default_factory=dict)
    uploads: list[tuple[PendingUpload, dict[str, str] | None]] = field(
        default_factory=list
    )
    deleted: list[int] = field(default_factory=list)
    failing: set[str] = field(default_factory=set)
    calls: list[str] = field(default_factory=list)
    reply: str = "업로드 성공"
    next_id: int = 100

    def _maybe_fail(self, operation: str) -> None:
        self.calls.append(operation)
        if operation in self.failing:
            raise httpx.ConnectError(f"{operation} unavailable")

    async def list_images(self) -> list[Photo]:
        self._maybe_fail("list")
        return list(self.photos)

    async def upload_image(
        self, upload: PendingUpload, fields: dict[str, str] | None = None
    ) -> str:
        self._maybe_fail("upload")
        self.uploads.append((upload, fields))
        fields = fields or {}
        photo = Photo(
            id=self.next_id,
            original_filename=upload.filename,
            process_id=ProcessStage(fields["processId"])
            if "processId" in fields
            else None,
            location_id=int(fields["locationId"]) if "locationId" in fields else None,
        )
        self.next_id += 1
        self.photos.append(photo)
        self.images[photo.id] = upload.content
        return self.reply

    async def get_image_bytes(self, photo_id: int) -> tuple[bytes, str | None]:
        self._maybe_fail("get")
        if photo_id not in self.images:
            raise httpx.HTTPStatusError(
                "not found",
                request=httpx.Request("GET", f"http://drone.test/api/images/{photo_id}"),
                response=httpx.Response(404),
            )
        return self.images[photo_id], "image/png"

    async def delete_image(self, photo_id: int) -> None:
        self._maybe_fail("delete")
        self.deleted.append(photo_id)
        self.photos = [photo for photo in self.photos if photo.id != photo_id]
        self.images.pop(photo_id, None)


def make_photo(photo_id: int, filename: str) -> Photo:
    return Photo(id=photo_id, original_filename=filename)


@pytest.fixture
def settings() -> Settings:
    return Settings(api_base_url="http://drone.test:8084")


@pytest.fixture
def image_client() -> FakeImageClient:
    return FakeImageClient(
        photos=[make_photo(1, "a.jpg"), make_photo(7, "b.jpg")],
        images={1: b"\x89PNG\r\n\x1a\nfirst", 7: b"\xff\xd8\xffsecond"},
    )


@pytest.fixture
def store(image_client: FakeImageClient) -> GalleryStore:
    return GalleryStore(client=image_client)


@pytest.fixture
def container(
    settings: Settings, image_client: FakeImageClient, store: GalleryStore
) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        image_client=image_client,
        gallery_store=store,
        close_resources=close_resources,
    )
