"""Review queue for expenses that must be confirmed by a person."""

import logging
from typing import Dict, List, Optional, Any
from dataclasses import dataclass

from .models import Category, ParsedExpense, REVIEW_THRESHOLD

logger = logging.getLogger(__name__)


@dataclass
class ReviewItem:
    """Represents an expense that needs manual review."""
    expense_id: str
    source: str
    reason: str
    suggested_amount: Optional[float] = None
    suggested_description: Optional[str] = None
    suggested_category: Optional[str] = None
    confidence: Optional[float] = None
    raw_snippet: str = ""


class ReviewQueue:
    """Manages expenses that need manual review."""
    
    def __init__(self, confidence_thresholds: Optional[Dict[str, float]] = None):
        """
        Initialize review queue.
        
        Args:
            confidence_thresholds: Minimum confidence scores per check
        """
        self.items: List[ReviewItem] = []
        self.thresholds = confidence_thresholds or {
            'category': REVIEW_THRESHOLD,
        }
    
    def review_reasons(self, expense: ParsedExpense) -> List[str]:
        """
        List why an expense should be reviewed.
        
        Args:
            expense: Parsed expense to check
            
        Returns:
            Reasons, empty if the expense can be accepted as is
        """
        reasons = []
        
        if not expense.amount:
            reasons.append("missing amount")
        
        if expense.confidence < self.thresholds['category']:
            reasons.append(f"low confidence ({expense.confidence:.2f})")
        
        if expense.category is Category.OTHER:
            reasons.append("category could not be determined")

        if expense.needs_review and not reasons:
            reasons.append("flagged for review")
        
        return reasons
    
    def add_expense(self, expense: ParsedExpense, source: str = "", raw_text: str = "") -> bool:
        """
        Add an expense to the queue if it needs review.
        
        Args:
            expense: Parsed expense
            source: Where the expense came from (input line, file name)
            raw_text: Original text, kept as a short snippet
            
        Returns:
            True if the expense was queued
        """
        reasons = self.review_reasons(expense)
        if not reasons:
            return False
        
        snippet = ' '.join(raw_text.split())[:200]
        if len(raw_text) > 200:
            snippet += "..."
        
        self.items.append(ReviewItem(
            expense_id=expense.id,
            source=source,
            reason="; ".join(reasons),
            suggested_amount=expense.amount,
            suggested_description=expense.description,
            suggested_category=expense.category.value,
            confidence=expense.confidence,
            raw_snippet=snippet,
        ))
        logger.info(f"Sending {expense.description!r} to review: {'; '.join(reasons)}")
        return True
    
    def get_summary(self) -> Dict[str, Any]:
        """Get summary statistics for the review queue."""
        if not self.items:
            return {"total": 0}
        
        reason_counts = {}
        for item in self.items:
            for reason in item.reason.split(';'):
                reason = reason.strip().split(' (')[0]
                reason_counts[reason] = reason_counts.get(reason, 0) + 1
        
        return {
            "total": len(self.items),
            "missing_amount": reason_counts.get("missing amount", 0),
            "low_confidence": reason_counts.get("low confidence", 0),
            "unknown_category": reason_counts.get("category could not be determined", 0),
            "reason_breakdown": reason_counts,
        }
    
    def clear(self):
        """Clear all items from the review queue."""
        self.items.clear()
