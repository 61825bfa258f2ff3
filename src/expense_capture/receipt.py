"""Receipt interpretation: noisy OCR text in, one expense out."""

import logging
from datetime import datetime, time
from pathlib import Path
from typing import Optional

from .classify import CategoryClassifier, default_classifier
from .models import Category, ParsedExpense, ReceiptExtraction, ReceiptParseResult
from .parse import ExpenseParser
from .parsers import AmountParser, DateParser, VendorParser
from .parsers.base import ReceiptContext

logger = logging.getLogger(__name__)

DEFAULT_DESCRIPTION = "Receipt"


class ReceiptParser:
    """
    Interprets OCR text of a scanned receipt.

    The total, merchant and date locators each degrade to a lower confidence
    or a missing value instead of failing. The free-text expense parser runs
    over the same text as a fallback source of amount, description and
    category. Receipt expenses are always flagged for review.
    """
    
    def __init__(self, classifier: Optional[CategoryClassifier] = None):
        """Initialize with locator components sharing one classifier."""
        self.classifier = classifier or default_classifier()
        self.amount_parser = AmountParser()
        self.vendor_parser = VendorParser()
        self.date_parser = DateParser()
        self.expense_parser = ExpenseParser(classifier=self.classifier)
    
    def extract(self, text: str) -> ReceiptExtraction:
        """
        Locate total, merchant and date in receipt text.
        
        Args:
            text: Raw OCR text from receipt
            
        Returns:
            ReceiptExtraction with whatever could be found
        """
        context = ReceiptContext(full_text=text)

        total_result = self.amount_parser.parse(context)
        vendor_result = self.vendor_parser.parse(context)
        date_result = self.date_parser.parse(context)

        return ReceiptExtraction(
            total_amount=total_result.value if total_result else None,
            total_confidence=(total_result.confidence if total_result
                              else AmountParser.MISSING_CONFIDENCE),
            merchant_name=vendor_result.value if vendor_result else None,
            receipt_date=date_result.value if date_result else None,
        )

    def parse(self, text: str) -> ReceiptParseResult:
        """
        Parse receipt text into a single expense.
        
        Args:
            text: Raw OCR text from receipt
            
        Returns:
            ReceiptParseResult holding the expense and the OCR text
        """
        text = text or ''
        extraction = self.extract(text)

        parsed = self.expense_parser.parse(text)
        rule_expense = parsed.expenses[0] if parsed.expenses else None

        if extraction.total_amount is not None:
            amount = extraction.total_amount
        elif rule_expense is not None:
            amount = rule_expense.amount
        else:
            amount = 0.0

        description = self._normalize_description(
            extraction.merchant_name
            or (rule_expense.description if rule_expense else None)
            or DEFAULT_DESCRIPTION
        )

        merchant_match = self.classifier.classify_merchant(extraction.merchant_name)
        if merchant_match.category is not Category.OTHER:
            category, confidence = merchant_match
        elif rule_expense is not None:
            category, confidence = rule_expense.category, rule_expense.confidence
        else:
            category, confidence = Category.OTHER, extraction.total_confidence

        occurred_at = None
        if extraction.receipt_date is not None:
            occurred_at = datetime.combine(extraction.receipt_date, time())

        expense = ParsedExpense.create(
            amount=amount,
            description=description,
            category=category,
            confidence=confidence,
            occurred_at=occurred_at,
            needs_review=True,
        )

        logger.info(f"Parsed receipt: amount=${amount:.2f}, merchant={extraction.merchant_name}, "
                    f"date={extraction.receipt_date}, category={category.value}")
        if amount == 0:
            logger.warning("No amount found on receipt")
        return ReceiptParseResult(expense=expense, text=text)

    @staticmethod
    def _normalize_description(value: str) -> str:
        value = value.strip()
        if not value:
            return DEFAULT_DESCRIPTION
        return value[:1].upper() + value[1:]


def parse_receipt_text(ocr_text: str) -> ReceiptParseResult:
    """Interpret receipt OCR text with the default rules."""
    return ReceiptParser().parse(ocr_text)


def parse_receipt_image(image_path: Path, ocr_processor=None,
                        classifier: Optional[CategoryClassifier] = None) -> ReceiptParseResult:
    """
    OCR a receipt image and interpret the text.

    Raises:
        FileNotFoundError: If the image does not exist
        EmptyImageError: If the image file is empty
        UnsupportedImageFormatError: If the file is not a readable image
        OCRError: If the OCR engine fails
    """
    from .ocr import OCRProcessor

    processor = ocr_processor or OCRProcessor()
    text = processor.extract_text(Path(image_path))
    return ReceiptParser(classifier=classifier).parse(text)
