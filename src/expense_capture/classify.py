"""Category classification using keyword rules."""

import yaml
import logging
from functools import lru_cache
from pathlib import Path
from typing import Optional, Tuple

from .models import Category, CategoryMatch

logger = logging.getLogger(__name__)

DEFAULT_RULES_PATH = Path(__file__).parent / "rules" / "categories.yml"

# Ordered (category, keywords) pairs; order decides ties
KeywordTable = Tuple[Tuple[Category, Tuple[str, ...]], ...]


class CategoryClassifier:
    """Classify text into expense categories using keyword length scoring."""

    UNKNOWN_CONFIDENCE = 0.4
    
    def __init__(self, rules_path: Optional[Path] = None):
        """
        Initialize classifier with category rules.
        
        Args:
            rules_path: Path to categories.yml file, defaults to the packaged rules
        """
        self.rules_path = Path(rules_path) if rules_path else DEFAULT_RULES_PATH
        self.keywords: KeywordTable = ()
        self.merchants: KeywordTable = ()
        self.load_rules()
    
    def load_rules(self):
        """Load keyword tables from the YAML rules file."""
        try:
            with open(self.rules_path, 'r', encoding='utf-8') as f:
                rules = yaml.safe_load(f) or {}
            self.keywords = self._freeze_table(rules.get('keywords', {}))
            self.merchants = self._freeze_table(rules.get('merchants', {}))
            logger.info(f"Loaded {len(self.keywords)} keyword and {len(self.merchants)} merchant category rules")
        except Exception as e:
            logger.error(f"Failed to load category rules from {self.rules_path}: {e}")
            raise

    @staticmethod
    def _freeze_table(table) -> KeywordTable:
        frozen = []
        for name, keywords in table.items():
            category = Category(name)
            if category is Category.OTHER:
                continue
            frozen.append((category, tuple(str(keyword).lower() for keyword in keywords or ())))
        return tuple(frozen)
    
    def detect_category(self, text: str) -> CategoryMatch:
        """
        Classify free text by activity keywords.
        
        Args:
            text: Text fragment, usually an expense description
            
        Returns:
            CategoryMatch with the best category and its confidence
        """
        category, score = self._best_category(text, self.keywords)
        if score > 0:
            return CategoryMatch(category, min(0.95, 0.6 + score * 0.05))
        return CategoryMatch(Category.OTHER, self.UNKNOWN_CONFIDENCE)

    def classify_merchant(self, merchant: Optional[str]) -> CategoryMatch:
        """
        Classify a receipt merchant name.

        Known retailer and venue names are tried first, then the general
        activity keywords.

        Args:
            merchant: Merchant name from the receipt header

        Returns:
            CategoryMatch with the best category and its confidence
        """
        if not merchant:
            return CategoryMatch(Category.OTHER, self.UNKNOWN_CONFIDENCE)

        category, score = self._best_category(merchant, self.merchants)
        if score > 0:
            return CategoryMatch(category, min(0.9, 0.6 + score * 0.05))

        return self.detect_category(merchant)

    @staticmethod
    def _best_category(text: str, table: KeywordTable) -> Tuple[Category, int]:
        """Sum matched keyword lengths per category; first strictly highest wins."""
        text_lower = text.lower()
        best, highest = Category.OTHER, 0
        for category, keywords in table:
            score = sum(len(keyword) for keyword in keywords if keyword in text_lower)
            if score > highest:
                best, highest = category, score
        return best, highest


@lru_cache(maxsize=None)
def default_classifier() -> CategoryClassifier:
    """Classifier over the packaged rules, built once per process."""
    return CategoryClassifier()


def detect_category(text: str) -> CategoryMatch:
    """Classify text with the packaged keyword rules."""
    return default_classifier().detect_category(text)
