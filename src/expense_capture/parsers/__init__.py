"""Parsing components for free text and receipt OCR output."""

from .amount_extractor import AmountExtractor, extract_amounts
from .description_extractor import DescriptionExtractor
from .amount_parser import AmountParser
from .date_parser import DateParser
from .vendor_parser import VendorParser

__all__ = [
    'AmountExtractor',
    'extract_amounts',
    'DescriptionExtractor',
    'AmountParser',
    'DateParser',
    'VendorParser',
]
