"""Tests for the Tesseract OCR wrapper."""

import pytest
import pytesseract
from PIL import Image

from expense_capture import ocr
from expense_capture.ocr import (
    EmptyImageError, OCRError, OCRProcessor, UnsupportedImageFormatError,
)


@pytest.fixture
def receipt_png(tmp_path):
    path = tmp_path / "receipt.png"
    Image.new("RGB", (40, 20), "white").save(path)
    return path


class TestOCRProcessor:
    """Test suite for OCRProcessor."""
    
    def setup_method(self):
        """Set up test fixtures."""
        self.processor = OCRProcessor()
    
    def test_missing_file(self, tmp_path):
        """Test a path that does not exist."""
        with pytest.raises(FileNotFoundError):
            self.processor.load_image(tmp_path / "missing.png")
    
    def test_empty_file(self, tmp_path):
        """Test a zero-byte image file."""
        path = tmp_path / "empty.png"
        path.write_bytes(b"")
        
        with pytest.raises(EmptyImageError):
            self.processor.load_image(path)
    
    def test_not_an_image(self, tmp_path):
        """Test a text file with an image extension."""
        path = tmp_path / "notes.png"
        path.write_text("TOTAL 5.00")
        
        with pytest.raises(UnsupportedImageFormatError):
            self.processor.load_image(path)
    
    def test_format_errors_are_ocr_errors(self):
        """Test the error hierarchy."""
        assert issubclass(EmptyImageError, OCRError)
        assert issubclass(UnsupportedImageFormatError, OCRError)
    
    def test_load_converts_to_grayscale(self, receipt_png):
        """Test that images are decoded to grayscale."""
        image = self.processor.load_image(receipt_png)
        
        assert image.mode == "L"
        assert image.size == (40, 20)
    
    def test_extract_text(self, receipt_png, monkeypatch):
        """Test that Tesseract output is returned as is."""
        calls = {}
        
        def fake_image_to_string(image, lang, config):
            calls.update(lang=lang, config=config)
            return "SHOP\nTOTAL 5.00\n"
        
        monkeypatch.setattr(ocr.pytesseract, "image_to_string", fake_image_to_string)
        processor = OCRProcessor(language="deu", config="--psm 6")
        
        assert processor.extract_text(receipt_png) == "SHOP\nTOTAL 5.00\n"
        assert calls == {"lang": "deu", "config": "--psm 6"}
    
    def test_tesseract_missing(self, receipt_png, monkeypatch):
        """Test that a missing Tesseract binary becomes an OCRError."""
        def fake_image_to_string(image, lang, config):
            raise pytesseract.TesseractNotFoundError()
        
        monkeypatch.setattr(ocr.pytesseract, "image_to_string", fake_image_to_string)
        
        with pytest.raises(OCRError):
            self.processor.extract_text(receipt_png)
