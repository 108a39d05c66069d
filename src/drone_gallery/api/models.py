"""Pydantic models for the gallery page API."""

from pydantic import BaseModel, ConfigDict, Field


class FieldSelection(BaseModel):
    """Classification fields chosen in the upload form."""

    model_config = ConfigDict(populate_by_name=True)

    process_id: str | None = Field(default=None, alias="processId")
    location_id: int | None = Field(default=None, alias="locationId")


class DeleteRequest(BaseModel):
    """Outcome of the browser's confirmation prompt."""

    confirmed: bool = False


class PhotoView(BaseModel):
    """Photo as rendered by the page."""

    model_config = ConfigDict(populate_by_name=True)

    id: int
    original_filename: str = Field(alias="originalFilename")
    process_id: str | None = Field(default=None, alias="processId")
    location_id: int | None = Field(default=None, alias="locationId")
    image_url: str = Field(alias="imageUrl")


class UploadView(BaseModel):
    """Upload form state."""

    model_config = ConfigDict(populate_by_name=True)

    state: str
    filename: str | None = None
    process_id: str | None = Field(default=None, alias="processId")
    location_id: int | None = Field(default=None, alias="locationId")
    can_upload: bool = Field(alias="canUpload")
    preview_url: str | None = Field(default=None, alias="previewUrl")
    require_classification: bool = Field(alias="requireClassification")


class ProcessOption(BaseModel):
    """Selectable process stage."""

    id: str
    label: str


class GalleryView(BaseModel):
    """Full view state snapshot."""

    model_config = ConfigDict(populate_by_name=True)

    photos: list[PhotoView]
    selected_image: PhotoView | None = Field(default=None, alias="selectedImage")
    status_message: str = Field(alias="statusMessage")
    upload: UploadView
    processes: list[ProcessOption]
    locations: list[int]
