"""Base classes for receipt parsers."""

from abc import ABC, abstractmethod
from typing import Optional, Any, Dict, List
from dataclasses import dataclass
import logging
import re

from ..models import is_plausible_amount

logger = logging.getLogger(__name__)

# Money-shaped numeral: digit groups, optional thousands separators, optional cents
MONEY_PATTERN = re.compile(r'\d{1,3}(?:,\d{3})*(?:\.\d{2})?')


@dataclass
class ParseResult:
    """Result of a parsing operation with confidence and metadata."""
    value: Any
    confidence: float
    source_text: str = ""
    metadata: Dict[str, Any] = None
    
    def __post_init__(self):
        if self.metadata is None:
            self.metadata = {}


@dataclass
class ReceiptContext:
    """OCR text of one receipt, pre-split into trimmed non-empty lines."""
    full_text: str
    lines: List[str] = None
    
    def __post_init__(self):
        if self.lines is None:
            self.lines = [line.strip() for line in re.split(r'\r?\n', self.full_text or '')
                          if line.strip()]

    @property
    def normalized_text(self) -> str:
        """Full text with every whitespace run collapsed to one space."""
        return re.sub(r'\s+', ' ', self.full_text or '')


class BaseParser(ABC):
    """Base class for all receipt parsers."""
    
    def __init__(self):
        self.logger = logging.getLogger(self.__class__.__name__)
    
    @abstractmethod
    def parse(self, context: ReceiptContext) -> Optional[ParseResult]:
        """
        Parse the specific field from receipt context.
        
        Args:
            context: Receipt context with text and lines
            
        Returns:
            ParseResult with value and confidence, or None if parsing failed
        """
        pass
    
    def _log_result(self, result: Optional[ParseResult], context: ReceiptContext):
        """Log parsing result for debugging."""
        if result:
            self.logger.info(f"Parsed: {result.value} (confidence: {result.confidence:.2f})")
        else:
            self.logger.warning("Parsing failed - no result")


def extract_money_values(text: str) -> List[float]:
    """Return every plausible money-shaped value in text, in order of appearance."""
    values = []
    for token in MONEY_PATTERN.findall(text):
        value = float(token.replace(',', ''))
        if is_plausible_amount(value):
            values.append(value)
    return values
