"""Purchase date detection on receipt OCR text."""

import re
import logging
from datetime import date
from typing import Optional

from .base import BaseParser, ParseResult, ReceiptContext

logger = logging.getLogger(__name__)

MONTH_NAMES = [
    'january', 'february', 'march', 'april', 'may', 'june',
    'july', 'august', 'september', 'october', 'november', 'december',
]


class DateParser(BaseParser):
    """Specialized parser for extracting the purchase date from receipts."""
    
    def __init__(self):
        super().__init__()
        
        # Date patterns in priority order (pattern, type, confidence)
        self.date_patterns = [
            (re.compile(r'\b(\d{4})[/\-.](\d{1,2})[/\-.](\d{1,2})\b'), 'year_first', 0.9),
            (re.compile(r'\b(\d{1,2})[/\-.](\d{1,2})[/\-.](\d{2,4})\b'), 'month_first', 0.7),
            (re.compile(r'\b([A-Za-z]{3,9})\s+(\d{1,2}),?\s*(\d{2,4})\b'), 'month_name', 0.8),
        ]
    
    def parse(self, context: ReceiptContext) -> Optional[ParseResult]:
        """
        Extract the receipt date.
        
        Args:
            context: Receipt context with full text and lines
            
        Returns:
            ParseResult with a datetime.date, or None if no valid date is found
        """
        text = context.normalized_text

        for pattern, pattern_type, confidence in self.date_patterns:
            for match in pattern.finditer(text):
                parsed = self._parse_date_match(match, pattern_type)
                if parsed is None:
                    self.logger.debug(f"Invalid date candidate: {match.group()}")
                    continue
                
                result = ParseResult(
                    value=parsed,
                    confidence=confidence,
                    source_text=match.group(),
                    metadata={'pattern_type': pattern_type},
                )
                self._log_result(result, context)
                return result

        self.logger.warning("No valid date found in text")
        return None
    
    def _parse_date_match(self, match, pattern_type: str) -> Optional[date]:
        """Turn a regex match into a date, or None if it is not a real calendar date."""
        first, second, third = match.groups()

        if pattern_type == 'year_first':
            year, month, day = int(first), int(second), int(third)
        elif pattern_type == 'month_first':
            month, day, year = int(first), int(second), self._expand_year(third)
            # Day-first input such as 25/03/2024
            if month > 12 and day <= 12:
                month, day = day, month
        else:
            month = self._month_from_name(first)
            if month is None:
                return None
            day, year = int(second), self._expand_year(third)

        try:
            return date(year, month, day)
        except ValueError:
            return None

    @staticmethod
    def _expand_year(value: str) -> int:
        year = int(value)
        return year + 2000 if year < 100 else year

    @staticmethod
    def _month_from_name(name: str) -> Optional[int]:
        prefix = name.lower()
        for index, month_name in enumerate(MONTH_NAMES):
            if month_name.startswith(prefix):
                return index + 1
        return None
