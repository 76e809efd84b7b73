"""
Pydantic models for conversion requests.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field, ValidationInfo, field_validator

from pdf2key.configs.config import PRESENTATION_SUFFIX, config, default_output_path


class ConversionRequest(BaseModel):
    """Validated input for a single PDF to Keynote conversion."""

    source_path: Path = Field(..., description="PDF document to convert")
    destination_path: Path | None = Field(
        None,
        validate_default=True,
        description="Keynote file to create; defaults next to the source",
    )
    dpi: int = Field(
        default_factory=lambda: config.dpi,
        ge=1,
        le=1200,
        description="Render resolution in dots per inch",
    )

    @field_validator("source_path")
    @classmethod
    def validate_source_path(cls, value: Path) -> Path:
        path = value.expanduser()
        if path.suffix.lower() != ".pdf":
            raise ValueError(f"Source must be a .pdf file: {path}")
        if not path.is_file():
            raise ValueError(f"Source file not found: {path}")
        return path.resolve()

    @field_validator("destination_path")
    @classmethod
    def validate_destination_path(
        cls, value: Path | None, info: ValidationInfo
    ) -> Path | None:
        if value is None:
            source = info.data.get("source_path")
            return default_output_path(source) if source else None
        path = value.expanduser()
        if path.suffix.lower() != PRESENTATION_SUFFIX:
            path = path.with_name(path.name + PRESENTATION_SUFFIX)
        return path.resolve()

    @property
    def output_path(self) -> Path:
        if self.destination_path is None:
            return default_output_path(self.source_path)
        return self.destination_path
