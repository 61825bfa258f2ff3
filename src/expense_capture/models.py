"""Data models for parsed expenses and receipts."""

import random
import string
import time
from dataclasses import dataclass, field, asdict
from datetime import date, datetime
from enum import Enum
from typing import List, NamedTuple, Optional

# Expenses below this confidence must be confirmed by a human
REVIEW_THRESHOLD = 0.7

# Amounts outside (MIN_AMOUNT, MAX_AMOUNT) are treated as pattern false-positives
MIN_AMOUNT = 0
MAX_AMOUNT = 100000

_ID_ALPHABET = string.digits + string.ascii_lowercase


class Category(str, Enum):
    """Expense categories. Declaration order is the tie-break order."""
    FOOD = "food"
    TRANSPORT = "transport"
    SHOPPING = "shopping"
    ENTERTAINMENT = "entertainment"
    UTILITIES = "utilities"
    HEALTH = "health"
    TRAVEL = "travel"
    OTHER = "other"


class CategoryMatch(NamedTuple):
    """Best category for a piece of text and how sure we are about it."""
    category: Category
    confidence: float


def is_plausible_amount(value: float) -> bool:
    return MIN_AMOUNT < value < MAX_AMOUNT


def generate_id() -> str:
    """Generate an expense id unique enough within a session."""
    suffix = ''.join(random.choices(_ID_ALPHABET, k=9))
    return f"exp_{int(time.time() * 1000)}_{suffix}"


@dataclass(frozen=True)
class AmountCandidate:
    """A monetary value detected in free text and where it was found."""
    value: float
    source_offset: int
    matched_text: str

    @property
    def end_offset(self) -> int:
        return self.source_offset + len(self.matched_text)


@dataclass(frozen=True)
class ParsedExpense:
    """A single structured expense extracted from text or a receipt."""
    id: str
    amount: float
    description: str
    category: Category
    confidence: float
    needs_review: bool
    occurred_at: datetime

    @classmethod
    def create(cls,
               amount: float,
               description: str,
               category: Category,
               confidence: float,
               occurred_at: Optional[datetime] = None,
               needs_review: Optional[bool] = None) -> "ParsedExpense":
        """
        Build an expense with a fresh id.

        Args:
            amount: Expense amount
            description: Human readable label
            category: Detected category
            confidence: Category confidence in [0, 1]
            occurred_at: When the expense happened, defaults to now
            needs_review: Force the review flag; derived from confidence if None

        Returns:
            New ParsedExpense
        """
        if needs_review is None:
            needs_review = confidence < REVIEW_THRESHOLD
        return cls(
            id=generate_id(),
            amount=amount,
            description=description,
            category=category,
            confidence=confidence,
            needs_review=needs_review,
            occurred_at=occurred_at or datetime.now(),
        )

    def to_dict(self):
        """Convert to a JSON friendly dictionary."""
        data = asdict(self)
        data['category'] = self.category.value
        data['occurred_at'] = self.occurred_at.isoformat()
        return data


@dataclass
class ParsingResult:
    """Outcome of parsing one free-text input."""
    succeeded: bool
    raw_input: str
    expenses: List[ParsedExpense] = field(default_factory=list)
    elapsed_time: float = 0.0  # seconds

    def to_dict(self):
        return {
            'succeeded': self.succeeded,
            'raw_input': self.raw_input,
            'expenses': [expense.to_dict() for expense in self.expenses],
            'elapsed_time': self.elapsed_time,
        }


@dataclass
class ReceiptExtraction:
    """Fields located in receipt OCR text before the expense is assembled."""
    total_amount: Optional[float] = None
    total_confidence: float = 0.0
    merchant_name: Optional[str] = None
    receipt_date: Optional[date] = None


@dataclass
class ReceiptParseResult:
    """Expense interpreted from a receipt, together with the OCR text it came from."""
    expense: ParsedExpense
    text: str

    def to_dict(self):
        return {'expense': self.expense.to_dict(), 'text': self.text}
