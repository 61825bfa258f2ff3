"""Description extraction for amounts mentioned in free text."""

import re
import logging
from typing import Optional

from ..models import AmountCandidate
from .amount_extractor import CURRENCY_SYMBOL_PATTERN

logger = logging.getLogger(__name__)

DEFAULT_DESCRIPTION = "Expense"


class DescriptionExtractor:
    """Picks the most plausible label for one amount inside a sentence."""

    def __init__(self):
        # "$15 lunch", "$15 for lunch" - run of text up to the next delimiter or amount
        self.after_pattern = re.compile(
            r'^\s*(?:(?:for|on|at)\b)?\s*([^,;+]+?)'
            r'(?=\s*(?:\band\b|,|\+|;|$|\$|\d+\s*(?:dollars?|usd)))',
            re.IGNORECASE,
        )
        # "lunch cost $15" - segments of the text before the amount
        self.delimiter_pattern = re.compile(r'(?:,|\band\b|\+|;)', re.IGNORECASE)
        self.filler_pattern = re.compile(r'^\s*(?:spent|paid|for|on|at)\b\s*', re.IGNORECASE)
        self.min_length = 2
        self.min_token_length = 3
        self.max_tokens = 3

    def extract(self,
                text: str,
                candidate: AmountCandidate,
                next_candidate: Optional[AmountCandidate] = None) -> str:
        """
        Extract a description for one amount occurrence.

        Args:
            text: Full input text
            candidate: Amount whose description is wanted
            next_candidate: Following amount in the text, bounds the lookahead

        Returns:
            Non-empty description with its first letter capitalized
        """
        end = candidate.end_offset
        boundary = len(text)
        if next_candidate is not None and next_candidate.source_offset > end:
            boundary = next_candidate.source_offset

        before = text[:candidate.source_offset]
        after = text[end:boundary]

        segment = ''
        match = self.after_pattern.match(after)
        if match and match.group(1).strip():
            segment = match.group(1).strip()
        else:
            segment = self.delimiter_pattern.split(before)[-1].strip()

        segment = self.filler_pattern.sub('', segment, count=1)
        segment = ' '.join(segment.split())

        if len(segment) < self.min_length:
            segment = self._salvage_tokens(text)
            logger.debug(f"Fell back to token salvage for {candidate.matched_text!r}: {segment!r}")

        return segment[:1].upper() + segment[1:]

    def _salvage_tokens(self, text: str) -> str:
        """Build a label from the first meaningful words of the whole text."""
        # Only "$" amounts are removed; "dollars"/"USD" mentions stay in the text
        stripped = CURRENCY_SYMBOL_PATTERN.sub('', text).strip()
        words = [word for word in stripped.split() if len(word) >= self.min_token_length]
        return ' '.join(words[:self.max_tokens]) or DEFAULT_DESCRIPTION
