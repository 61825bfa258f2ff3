"""Merchant name extraction from receipt headers."""

import re
import logging
from typing import Optional

from .base import BaseParser, ParseResult, ReceiptContext

logger = logging.getLogger(__name__)


class VendorParser(BaseParser):
    """Specialized parser for extracting the merchant name from a receipt."""
    
    def __init__(self):
        super().__init__()

        # Merchant names sit in the receipt header
        self.header_line_count = 8
        self.min_line_length = 3
        
        # Receipt and payment jargon that never names a merchant
        self.noise_keywords = [
            'thank you', 'thanks', 'receipt', 'invoice', 'total', 'subtotal',
            'tax', 'gst', 'cgst', 'sgst', 'cess', 'visa', 'mastercard', 'amex',
            'cash', 'change', 'balance', 'due', 'payment', 'debit', 'credit',
            'tip', 'gratuity', 'rounding', 'discount',
        ]
        
        # Retail words that make a header line more likely to be the store name
        self.name_bonuses = [
            ('mart', 10),
            ('super', 8),
            ('store', 8),
            ('market', 6),
        ]
    
    def parse(self, context: ReceiptContext) -> Optional[ParseResult]:
        """
        Extract merchant name from receipt text.
        
        Args:
            context: Receipt context with full text and lines
            
        Returns:
            ParseResult with the cleaned merchant name, or None if no header line qualifies
        """
        best_line, best_score, best_idx = None, None, None
        for line_idx, line in enumerate(context.lines[:self.header_line_count]):
            if not self._is_candidate(line):
                continue
            score = self._score_line(line)
            if best_score is None or score > best_score:
                best_line, best_score, best_idx = line, score, line_idx

        if best_line is None:
            self.logger.warning("No merchant name found")
            return None

        result = ParseResult(
            value=self._clean_vendor_name(best_line),
            confidence=min(0.9, 0.4 + best_score * 0.01),
            source_text=best_line,
            metadata={'type': 'header_line', 'line_idx': best_idx, 'score': best_score},
        )
        self._log_result(result, context)
        return result

    def _is_candidate(self, line: str) -> bool:
        if len(line) < self.min_line_length:
            return False
        if not re.search(r'[A-Za-z]', line):
            return False
        line_lower = line.lower()
        return not any(keyword in line_lower for keyword in self.noise_keywords)

    def _score_line(self, line: str) -> int:
        line_lower = line.lower()
        score = len(line)
        for word, bonus in self.name_bonuses:
            if word in line_lower:
                score += bonus
        return score
    
    def _clean_vendor_name(self, vendor: str) -> str:
        """Strip digits and stray punctuation from a merchant line."""
        cleaned = re.sub(r'\d+', '', vendor)
        cleaned = re.sub(r'[^A-Za-z\s&.\-]', '', cleaned).strip()
        return re.sub(r'\s{2,}', ' ', cleaned or vendor).strip()
