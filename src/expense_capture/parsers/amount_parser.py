"""Total amount detection on receipt OCR text."""

import logging
from typing import Optional

from .base import BaseParser, ParseResult, ReceiptContext, extract_money_values

logger = logging.getLogger(__name__)


class AmountParser(BaseParser):
    """Locates the amount actually paid on a receipt."""

    KEYWORD_CONFIDENCE = 0.85
    BOTTOM_LINES_CONFIDENCE = 0.6
    MAX_VALUE_CONFIDENCE = 0.55
    MISSING_CONFIDENCE = 0.4
    
    def __init__(self):
        super().__init__()
        
        # Lines mentioning any of these usually carry the total
        self.total_keywords = [
            'total', 'grand total', 'amount due', 'balance due', 'total due',
            'amount received', 'card payment', 'net amount', 'payable',
            'bill amount', 'amount',
        ]
        
        # Lines that mention a total but are not the amount paid
        self.avoid_keywords = ['subtotal', 'taxable']

        # Totals are printed near the bottom
        self.bottom_line_count = 10
    
    def parse(self, context: ReceiptContext) -> Optional[ParseResult]:
        """
        Extract the total amount from receipt text.
        
        Args:
            context: Receipt context with full text and lines
            
        Returns:
            ParseResult with the amount and confidence, or None if no money value exists
        """
        result = (self._find_keyword_total(context)
                  or self._find_bottom_amount(context)
                  or self._find_largest_amount(context))
        
        self._log_result(result, context)
        return result

    def _is_total_line(self, line: str) -> bool:
        line_lower = line.lower()
        if not any(keyword in line_lower for keyword in self.total_keywords):
            return False
        return not any(keyword in line_lower for keyword in self.avoid_keywords)
    
    def _find_keyword_total(self, context: ReceiptContext) -> Optional[ParseResult]:
        """Last money value on the lowest keyword line that has one."""
        total_lines = [(idx, line) for idx, line in enumerate(context.lines) if self._is_total_line(line)]
        for line_idx, line in reversed(total_lines):
            values = extract_money_values(line)
            if values:
                return ParseResult(
                    value=values[-1],
                    confidence=self.KEYWORD_CONFIDENCE,
                    source_text=line,
                    metadata={'type': 'keyword', 'line_idx': line_idx},
                )
        return None

    def _find_bottom_amount(self, context: ReceiptContext) -> Optional[ParseResult]:
        """Last money value on the lowest of the bottom lines."""
        for line in reversed(context.lines[-self.bottom_line_count:]):
            values = extract_money_values(line)
            if values:
                return ParseResult(
                    value=values[-1],
                    confidence=self.BOTTOM_LINES_CONFIDENCE,
                    source_text=line,
                    metadata={'type': 'bottom_lines'},
                )
        return None

    def _find_largest_amount(self, context: ReceiptContext) -> Optional[ParseResult]:
        """Largest money value anywhere in the text."""
        values = extract_money_values(context.full_text)
        if not values:
            return None
        return ParseResult(
            value=max(values),
            confidence=self.MAX_VALUE_CONFIDENCE,
            metadata={'type': 'max_value', 'candidates': len(values)},
        )
