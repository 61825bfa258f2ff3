"""Free-text expense parsing: one sentence in, one expense per amount out."""

import logging
import time
from typing import Optional

from .classify import CategoryClassifier, default_classifier
from .models import ParsedExpense, ParsingResult
from .parsers import AmountExtractor, DescriptionExtractor

logger = logging.getLogger(__name__)


class ExpenseParser:
    """
    Rule-based expense parser.

    Every amount mentioned in the input becomes its own expense, so
    "$15 lunch and $40 fuel" yields two records.
    """
    
    def __init__(self, classifier: Optional[CategoryClassifier] = None):
        self.amount_extractor = AmountExtractor()
        self.description_extractor = DescriptionExtractor()
        self.classifier = classifier or default_classifier()
    
    def parse(self, raw_input: str) -> ParsingResult:
        """
        Parse a free-form sentence into expenses.
        
        Args:
            raw_input: Text typed by the user
            
        Returns:
            ParsingResult; succeeded is False when no amount was found
        """
        started = time.perf_counter()
        text = raw_input.strip()
        if not text:
            return self._failure(raw_input, started)

        candidates = self.amount_extractor.extract(text)
        if not candidates:
            logger.info("No amount found in input")
            return self._failure(raw_input, started)

        expenses = []
        for index, candidate in enumerate(candidates):
            next_candidate = candidates[index + 1] if index + 1 < len(candidates) else None
            description = self.description_extractor.extract(text, candidate, next_candidate)
            category, confidence = self.classifier.detect_category(description)
            expenses.append(ParsedExpense.create(
                amount=candidate.value,
                description=description,
                category=category,
                confidence=confidence,
            ))
            logger.debug(f"Parsed {candidate.matched_text!r} as {description!r} "
                         f"({category.value}, confidence {confidence:.2f})")

        logger.info(f"Parsed {len(expenses)} expense(s) from input")
        return ParsingResult(
            succeeded=True,
            raw_input=raw_input,
            expenses=expenses,
            elapsed_time=time.perf_counter() - started,
        )

    @staticmethod
    def _failure(raw_input: str, started: float) -> ParsingResult:
        return ParsingResult(
            succeeded=False,
            raw_input=raw_input,
            expenses=[],
            elapsed_time=time.perf_counter() - started,
        )


def parse_expenses(raw_input: str) -> ParsingResult:
    """Parse free text with the default rules."""
    return ExpenseParser().parse(raw_input)
