"""Tesseract OCR wrapper turning receipt images into text."""

import logging
from pathlib import Path
from typing import Optional

import pytesseract
from PIL import Image, UnidentifiedImageError

logger = logging.getLogger(__name__)


class OCRError(Exception):
    """OCR could not produce text for an image."""


class EmptyImageError(OCRError):
    """The image file has no content."""


class UnsupportedImageFormatError(OCRError):
    """The file is not an image format Pillow can read."""


class OCRProcessor:
    """Wrapper for pytesseract with receipt-friendly preprocessing."""
    
    def __init__(self, language: str = "eng", config: Optional[str] = None):
        """
        Initialize OCR processor.
        
        Args:
            language: Tesseract language code
            config: Extra Tesseract command line options
        """
        self.language = language
        self.config = config or ""
    
    def load_image(self, image_path: Path) -> Image.Image:
        """
        Open and decode an image file.

        Args:
            image_path: Path to the image

        Returns:
            Decoded grayscale image

        Raises:
            FileNotFoundError: If the file does not exist
            EmptyImageError: If the file is empty
            UnsupportedImageFormatError: If Pillow cannot identify the image
            OCRError: If the image cannot be decoded
        """
        image_path = Path(image_path)
        if not image_path.exists():
            raise FileNotFoundError(f"Image not found: {image_path}")
        if image_path.stat().st_size == 0:
            raise EmptyImageError(f"Empty image file: {image_path.name}")

        try:
            with Image.open(image_path) as img:
                img.load()
                # Grayscale improves OCR on thermal paper receipts
                return img.convert("L") if img.mode != "L" else img.copy()
        except UnidentifiedImageError as e:
            raise UnsupportedImageFormatError(f"Unsupported image format: {image_path.name}") from e
        except OSError as e:
            raise OCRError(f"Failed to decode image {image_path.name}: {e}") from e

    def extract_text(self, image_path: Path) -> str:
        """
        Extract raw text from a receipt image.
        
        Args:
            image_path: Path to the image
            
        Returns:
            Raw OCR text, possibly empty
        """
        image = self.load_image(image_path)
        logger.info(f"Running OCR on {Path(image_path).name} ({image.width}x{image.height})")
        try:
            text = pytesseract.image_to_string(image, lang=self.language, config=self.config)
        except (pytesseract.TesseractError, pytesseract.TesseractNotFoundError) as e:
            logger.error(f"OCR failed for {Path(image_path).name}: {e}")
            raise OCRError(f"OCR failed for {Path(image_path).name}: {e}") from e
        
        logger.info(f"Extracted {len(text)} characters from {Path(image_path).name}")
        return text or ""
