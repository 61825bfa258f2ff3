"""Expense capture - extract categorized expenses from free text and receipts."""

__version__ = "1.0.0"
__author__ = "Expense Capture Team"
__email__ = ""

from .models import Category, CategoryMatch, ParsedExpense, ParsingResult, ReceiptParseResult
from .classify import CategoryClassifier, detect_category
from .parse import ExpenseParser, parse_expenses
from .receipt import ReceiptParser, parse_receipt_text, parse_receipt_image
from .review import ReviewQueue, ReviewItem

__all__ = [
    'Category',
    'CategoryMatch',
    'ParsedExpense',
    'ParsingResult',
    'ReceiptParseResult',
    'CategoryClassifier',
    'detect_category',
    'ExpenseParser',
    'parse_expenses',
    'ReceiptParser',
    'parse_receipt_text',
    'parse_receipt_image',
    'ReviewQueue',
    'ReviewItem',
]
