"""Domain models for drone photos."""

from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

LOCATION_IDS: tuple[int, ...] = (1, 2, 3, 4, 5, 6)


class ProcessStage(str, Enum):
    """Production stage a photo was captured at."""

    CUT = "CUT"
    PROCESS = "PROCESS"
    ASSEMBLE = "ASSEMBLE"
    PAINT = "PAINT"
    LOAD = "LOAD"
    LAUNCH = "LAUNCH"

    @property
    def label(self) -> str:
        return PROCESS_LABELS[self]


PROCESS_LABELS: dict[ProcessStage, str] = {
    ProcessStage.CUT: "절단",
    ProcessStage.PROCESS: "가공",
    ProcessStage.ASSEMBLE: "조립",
    ProcessStage.PAINT: "도장",
    ProcessStage.LOAD: "적재",
    ProcessStage.LAUNCH: "출하",
}


class Photo(BaseModel):
    """Photo record as returned by the image service."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: int
    original_filename: str = Field(alias="originalFilename")
    process_id: ProcessStage | None = Field(default=None, alias="processId")
    location_id: int | None = Field(default=None, alias="locationId", ge=1, le=6)


@dataclass(frozen=True)
class PendingUpload:
    """A file chosen by the user but not yet uploaded."""

    filename: str
    content: bytes
    content_type: str | None = None
