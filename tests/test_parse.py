"""Tests for free-text expense parsing."""

from datetime import datetime, timedelta

import pytest
from expense_capture.models import Category
from expense_capture.parse import ExpenseParser, parse_expenses


class TestExpenseParser:
    """Test suite for ExpenseParser."""
    
    def setup_method(self):
        """Set up test fixtures."""
        self.parser = ExpenseParser()
    
    def test_two_expenses_in_one_sentence(self):
        """Test "$15 lunch and $40 fuel"."""
        result = self.parser.parse("$15 lunch and $40 fuel")
        
        assert result.succeeded
        assert len(result.expenses) == 2
        lunch, fuel = result.expenses
        assert lunch.amount == 15
        assert "lunch" in lunch.description.lower()
        assert lunch.category is Category.FOOD
        assert fuel.amount == 40
        assert "fuel" in fuel.description.lower()
        assert fuel.category is Category.TRANSPORT
    
    def test_spent_on_groceries_and_uber(self):
        """Test "Spent $45 on groceries and $12 uber"."""
        result = self.parser.parse("Spent $45 on groceries and $12 uber")
        
        assert [e.amount for e in result.expenses] == [45, 12]
        assert result.expenses[0].description == "Groceries"
        assert result.expenses[0].category is Category.FOOD
        assert result.expenses[1].description == "Uber"
        assert result.expenses[1].category is Category.TRANSPORT
    
    def test_single_textual_amount(self):
        """Test a single "dollars" amount with cents."""
        result = self.parser.parse("Paid 42.50 dollars for dinner")
        
        assert len(result.expenses) == 1
        expense = result.expenses[0]
        assert expense.amount == 42.5
        assert expense.description == "Dinner"
        assert expense.category is Category.FOOD
    
    def test_expenses_ordered_by_position(self):
        """Test that expenses follow their order in the text."""
        result = self.parser.parse("$5 coffee, $12 taxi, $30 movie")
        
        assert [e.amount for e in result.expenses] == [5, 12, 30]
        assert [e.category for e in result.expenses] == [
            Category.FOOD, Category.TRANSPORT, Category.ENTERTAINMENT,
        ]
    
    @pytest.mark.parametrize("text", ["", "   ", "\n\t", "no numbers here", "I owe 3 friends"])
    def test_no_amount_fails(self, text):
        """Test the failure shape for empty input or no amounts."""
        result = self.parser.parse(text)
        
        assert result.succeeded is False
        assert result.expenses == []
        assert result.raw_input == text
    
    def test_raw_input_kept_untrimmed(self):
        """Test that raw_input is the original input."""
        result = self.parser.parse("  $5 coffee  ")
        
        assert result.raw_input == "  $5 coffee  "
        assert result.expenses[0].amount == 5
        assert result.expenses[0].description == "Coffee"
    
    def test_review_flag_follows_confidence(self):
        """Test needs_review is set exactly when confidence < 0.7."""
        result = self.parser.parse("$20 misc stuff and $15 lunch")
        misc, lunch = result.expenses
        
        assert misc.category is Category.OTHER
        assert misc.confidence == pytest.approx(0.4)
        assert misc.needs_review is True
        assert lunch.needs_review is False
        for expense in result.expenses:
            assert 0.0 <= expense.confidence <= 1.0
            assert expense.needs_review == (expense.confidence < 0.7)
    
    def test_unique_ids(self):
        """Test that every expense gets its own id."""
        result = self.parser.parse("$1 gum, $2 gum, $3 gum, $4 gum")
        ids = [e.id for e in result.expenses]
        
        assert len(ids) == 4
        assert len(set(ids)) == 4
        assert all(expense_id.startswith("exp_") for expense_id in ids)
    
    def test_occurred_at_is_now(self):
        """Test that typed expenses are dated at parse time."""
        before = datetime.now()
        result = self.parser.parse("$7 snack")
        
        occurred_at = result.expenses[0].occurred_at
        assert before - timedelta(seconds=1) <= occurred_at <= datetime.now() + timedelta(seconds=1)
    
    def test_elapsed_time_recorded(self):
        """Test that parse time is measured for success and failure."""
        assert self.parser.parse("$7 snack").elapsed_time >= 0
        assert self.parser.parse("").elapsed_time >= 0
    
    def test_module_level_entry_point(self):
        """Test parse_expenses with the default rules."""
        result = parse_expenses("$60 hotel")
        
        assert result.succeeded
        assert result.expenses[0].category is Category.TRAVEL
    
    def test_to_dict(self):
        """Test the JSON friendly representation."""
        data = parse_expenses("$15 lunch").to_dict()
        
        assert data['succeeded'] is True
        assert data['expenses'][0]['amount'] == 15
        assert data['expenses'][0]['category'] == 'food'
        assert data['expenses'][0]['needs_review'] is False
        assert isinstance(data['expenses'][0]['occurred_at'], str)
