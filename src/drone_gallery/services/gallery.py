"""Gallery view state and its transitions."""

import base64
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum

import httpx
from pydantic import ValidationError

from drone_gallery.adapters.image_client import ImageClient
from drone_gallery.domain.photos import (
    LOCATION_IDS,
    PendingUpload,
    Photo,
    ProcessStage,
)
from drone_gallery.services import messages

logger = logging.getLogger(__name__)


class UploadState(str, Enum):
    """Upload controller states."""

    IDLE = "IDLE"
    FILE_SELECTED = "FILE_SELECTED"
    FIELDS_SELECTED = "FIELDS_SELECTED"
    UPLOADING = "UPLOADING"


class UploadBlockedError(ValueError):
    """Raised when an upload is submitted before its preconditions hold."""


@dataclass
class GalleryStore:
    """Single owner of the gallery view state.

    The photo list is only ever replaced by a successful fetch. Uploads and
    deletes never touch it directly; they re-run ``load`` instead.
    """

    client: ImageClient
    require_classification: bool = True
    fixed_location_id: int | None = None
    photos: list[Photo] = field(default_factory=list)
    selected_image_id: int | None = None
    status_message: str = ""
    pending_upload: PendingUpload | None = None
    process_id: ProcessStage | None = None
    location_id: int | None = None
    upload_state: UploadState = UploadState.IDLE

    async def load(self) -> list[Photo] | None:
        """Fetch the photo list and replace the current one."""
        try:
            photos = await self.client.list_images()
        except (httpx.HTTPError, ValidationError):
            logger.exception("Failed to load photo list")
            self.status_message = messages.LOAD_FAILED
            return None
        self.photos = list(photos)
        return self.photos

    def select_file(
        self, filename: str | None, content: bytes, content_type: str | None = None
    ) -> None:
        """Store the chosen file without uploading it."""
        self.status_message = ""
        if not filename:
            self.pending_upload = None
        else:
            self.pending_upload = PendingUpload(
                filename=filename, content=content, content_type=content_type
            )
        self._sync_upload_state()

    def select_process(self, process_id: ProcessStage | str | None) -> None:
        if process_id is None or process_id == "":
            self.process_id = None
        else:
            self.process_id = ProcessStage(process_id)
        self._sync_upload_state()

    def select_location(self, location_id: int | str | None) -> None:
        if location_id is None or location_id == "":
            self.location_id = None
        else:
            value = int(location_id)
            if value not in LOCATION_IDS:
                raise ValueError(f"Unknown location id: {value}")
            self.location_id = value
        self._sync_upload_state()

    @property
    def can_upload(self) -> bool:
        """Return true when the submit control should be enabled."""
        if self.pending_upload is None:
            return False
        if not self.require_classification:
            return True
        return self.process_id is not None and self.location_id is not None

    @property
    def preview_url(self) -> str | None:
        """Return a data URL of the pending file for previewing."""
        if self.pending_upload is None:
            return None
        return _to_data_url(
            self.pending_upload.content, self.pending_upload.content_type
        )

    async def upload(self) -> bool:
        """Submit the pending file and refresh the gallery on success."""
        upload = self.pending_upload
        if upload is None or not self.can_upload:
            raise UploadBlockedError(self._blocked_reason())
        self.status_message = messages.UPLOADING
        self.upload_state = UploadState.UPLOADING
        try:
            reply = await self.client.upload_image(upload, self._upload_fields())
        except httpx.HTTPError:
            logger.exception(
                "Failed to upload photo", extra={"upload_filename": upload.filename}
            )
            self.status_message = messages.UPLOAD_FAILED
            self._sync_upload_state()
            return False
        self.status_message = reply
        self.pending_upload = None
        self.process_id = None
        self.location_id = None
        self.upload_state = UploadState.IDLE
        await self.load()
        return True

    async def delete(self, photo_id: int, confirm: Callable[[str], bool]) -> bool:
        """Delete a photo after the user confirms it."""
        if not confirm(messages.delete_confirmation(photo_id)):
            return False
        try:
            await self.client.delete_image(photo_id)
        except httpx.HTTPError:
            logger.exception("Failed to delete photo", extra={"photo_id": photo_id})
            self.status_message = messages.DELETE_FAILED
            return False
        self.status_message = messages.DELETED
        if self.selected_image_id == photo_id:
            self.selected_image_id = None
        await self.load()
        return True

    @property
    def selected_image(self) -> Photo | None:
        """Resolve the viewer selection against the current list."""
        if self.selected_image_id is None:
            return None
        for photo in self.photos:
            if photo.id == self.selected_image_id:
                return photo
        return None

    def open_viewer(self, photo_id: int) -> None:
        self.selected_image_id = photo_id

    def close_viewer(self) -> None:
        self.selected_image_id = None

    def click_backdrop(self) -> None:
        self.close_viewer()

    def click_viewer_image(self) -> None:
        """Clicks on the enlarged image itself keep the viewer open."""

    def _upload_fields(self) -> dict[str, str] | None:
        if not self.require_classification or self.process_id is None:
            return None
        location_id = self.fixed_location_id or self.location_id
        return {"processId": self.process_id.value, "locationId": str(location_id)}

    def _blocked_reason(self) -> str:
        if self.pending_upload is None:
            return messages.SELECT_FILE_FIRST
        return messages.SELECT_FIELDS_FIRST

    def _sync_upload_state(self) -> None:
        if self.pending_upload is None:
            self.upload_state = UploadState.IDLE
        elif self.require_classification and self.can_upload:
            self.upload_state = UploadState.FIELDS_SELECTED
        else:
            self.upload_state = UploadState.FILE_SELECTED


def _to_data_url(image_bytes: bytes, content_type: str | None = None) -> str:
    """Convert bytes to a base64 data URL, preferring the declared content type."""
    mime_type = content_type or _detect_mime_type(image_bytes)
    encoded = base64.b64encode(image_bytes).decode("utf-8")
    return f"data:{mime_type};base64,{encoded}"


def _detect_mime_type(image_bytes: bytes) -> str:
    """Infer a basic image MIME type from file signatures."""
    if image_bytes.startswith(b"\xff\xd8\xff"):
        return "image/jpeg"
    if image_bytes.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    if image_bytes[:4] == b"RIFF" and image_bytes[8:12] == b"WEBP":
        return "image/webp"
    if image_bytes[:6] in {b"GIF87a", b"GIF89a"}:
        return "image/gif"
    return "image/jpeg"
