"""Monetary amount detection in free-form expense text."""

import re
import logging
from typing import List

from ..models import AmountCandidate, is_plausible_amount

logger = logging.getLogger(__name__)

# Surface forms in scan order; on an offset collision the earlier pattern wins
CURRENCY_SYMBOL_PATTERN = re.compile(r'\$(\d+(?:\.\d{2})?)')
DOLLAR_WORD_PATTERN = re.compile(r'(\d+(?:\.\d{2})?)\s*dollars?', re.IGNORECASE)
CURRENCY_CODE_PATTERN = re.compile(r'(\d+(?:\.\d{2})?)\s*usd', re.IGNORECASE)

AMOUNT_PATTERNS = (
    CURRENCY_SYMBOL_PATTERN,
    DOLLAR_WORD_PATTERN,
    CURRENCY_CODE_PATTERN,
)


class AmountExtractor:
    """Finds every amount mention in a sentence, ordered by position."""

    def __init__(self, patterns=AMOUNT_PATTERNS):
        self.patterns = tuple(patterns)

    def extract(self, text: str) -> List[AmountCandidate]:
        """
        Scan text with every amount pattern.

        Args:
            text: Arbitrary input text

        Returns:
            Candidates sorted by source offset, at most one per offset
        """
        matches = []
        for pattern in self.patterns:
            for match in pattern.finditer(text):
                value = float(match.group(1))
                if not is_plausible_amount(value):
                    logger.debug(f"Discarding implausible amount {match.group(0)!r}")
                    continue
                matches.append(AmountCandidate(
                    value=value,
                    source_offset=match.start(),
                    matched_text=match.group(0),
                ))

        # sort is stable, so pattern order decides among equal offsets
        matches.sort(key=lambda candidate: candidate.source_offset)

        candidates = []
        for candidate in matches:
            if candidates and candidates[-1].source_offset == candidate.source_offset:
                continue
            candidates.append(candidate)
        return candidates


_default_extractor = AmountExtractor()


def extract_amounts(text: str) -> List[AmountCandidate]:
    """Extract amount candidates from text with the default patterns."""
    return _default_extractor.extract(text)
