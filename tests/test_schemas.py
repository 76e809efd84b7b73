"""
Unit tests for request validation.
"""

import pytest
from pydantic import ValidationError

from pdf2key.schemas.conversion import ConversionRequest


class TestConversionRequest:
    """Test cases for the ConversionRequest model."""

    def test_default_destination_next_to_source(self, make_pdf):
        source = make_pdf("quarterly review.pdf")

        request = ConversionRequest(source_path=source)

        assert request.output_path == source.resolve().with_suffix(".key")
        assert request.destination_path == request.output_path

    def test_destination_gets_key_suffix(self, make_pdf, tmp_path):
        request = ConversionRequest(
            source_path=make_pdf(), destination_path=tmp_path / "talk"
        )

        assert request.output_path == (tmp_path / "talk.key").resolve()

    def test_destination_keeps_existing_suffix(self, make_pdf, tmp_path):
        request = ConversionRequest(
            source_path=make_pdf(), destination_path=tmp_path / "Talk.KEY"
        )

        assert request.output_path.name == "Talk.KEY"

    def test_rejects_non_pdf(self, tmp_path):
        source = tmp_path / "slides.pptx"
        source.write_bytes(b"PK")

        with pytest.raises(ValidationError, match=r"\.pdf"):
            ConversionRequest(source_path=source)

    def test_rejects_missing_source(self, tmp_path):
        with pytest.raises(ValidationError, match="not found"):
            ConversionRequest(source_path=tmp_path / "missing.pdf")

    def test_accepts_uppercase_extension(self, make_pdf):
        request = ConversionRequest(source_path=make_pdf("DECK.PDF"))

        assert request.output_path.name == "DECK.key"

    @pytest.mark.parametrize("dpi", [0, -1, 5000])
    def test_dpi_bounds(self, make_pdf, dpi):
        with pytest.raises(ValidationError):
            ConversionRequest(source_path=make_pdf(), dpi=dpi)

    def test_dpi_defaults_to_config(self, make_pdf, monkeypatch):
        monkeypatch.setattr("pdf2key.schemas.conversion.config.dpi", 150)

        assert ConversionRequest(source_path=make_pdf()).dpi == 150
