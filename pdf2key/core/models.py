"""
Data model shared by the conversion stages.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal

from PIL import Image
from pydantic import BaseModel, ConfigDict, Field

StatusState = Literal["idle", "in_progress", "succeeded", "failed"]
Phase = Literal["idle", "rendering", "spooling", "assembling", "succeeded", "failed"]


@dataclass(frozen=True)
class PageInfo:
    """Size of a source page in points (72 per inch)."""

    index: int
    width_pt: float
    height_pt: float


@dataclass(frozen=True)
class RenderedImage:
    """Decoded RGBA raster of one page."""

    index: int
    image: Image.Image

    @property
    def width(self) -> int:
        return self.image.width

    @property
    def height(self) -> int:
        return self.image.height


@dataclass(frozen=True)
class SpooledSlide:
    index: int
    path: Path


@dataclass
class ConversionJob:
    """Transient state of one conversion invocation."""

    source_path: Path
    destination_path: Path
    workspace: Path
    slides: list[SpooledSlide] = field(default_factory=list)
    status: ConversionStatus | None = None

    @property
    def slide_paths(self) -> list[Path]:
        return [slide.path for slide in self.slides]


class ConversionStatus(BaseModel):
    """Immutable snapshot of a conversion's progress."""

    model_config = ConfigDict(frozen=True)

    message: str = ""
    progress: float = Field(default=0.0, ge=0.0, le=1.0)
    state: StatusState = "idle"
    phase: Phase = "idle"
    error: str | None = None

    @property
    def is_error(self) -> bool:
        return self.state == "failed"

    @property
    def is_success(self) -> bool:
        return self.state == "succeeded"

    @property
    def is_terminal(self) -> bool:
        return self.state in ("succeeded", "failed")
