"""Tests for receipt date detection."""

from datetime import date

import pytest
from expense_capture.parsers.date_parser import DateParser
from expense_capture.parsers.base import ReceiptContext


class TestDateParser:
    """Test suite for DateParser."""
    
    def setup_method(self):
        """Set up test fixtures."""
        self.parser = DateParser()

    def parse(self, text):
        return self.parser.parse(ReceiptContext(full_text=text))
    
    @pytest.mark.parametrize("text, expected", [
        ("2024-03-15", date(2024, 3, 15)),
        ("Date: 2024/3/5 10:42", date(2024, 3, 5)),
        ("2023.12.31", date(2023, 12, 31)),
    ])
    def test_year_first(self, text, expected):
        """Test YYYY-MM-DD style dates."""
        result = self.parse(text)
        
        assert result.value == expected
        assert result.metadata['pattern_type'] == 'year_first'
    
    def test_month_first(self):
        """Test MM/DD/YYYY dates."""
        result = self.parse("03/15/2024 14:32")
        
        assert result.value == date(2024, 3, 15)
        assert result.metadata['pattern_type'] == 'month_first'
    
    def test_two_digit_year(self):
        """Test MM/DD/YY dates."""
        assert self.parse("03/04/24").value == date(2024, 3, 4)
    
    def test_day_first_swapped(self):
        """Test that day and month swap when the first part exceeds 12."""
        assert self.parse("25/03/2024").value == date(2024, 3, 25)
    
    def test_month_name(self):
        """Test written month dates."""
        result = self.parse("Mar 5, 2024")
        
        assert result.value == date(2024, 3, 5)
        assert result.metadata['pattern_type'] == 'month_name'
        assert self.parse("September 9 2023").value == date(2023, 9, 9)
    
    def test_whitespace_normalized(self):
        """Test dates broken across lines by OCR."""
        assert self.parse("Mar\n5,\n2024").value == date(2024, 3, 5)
    
    def test_year_first_has_priority(self):
        """Test pattern order over text order."""
        result = self.parse("Printed Mar 5, 2024\nSale 2024-01-10")
        
        assert result.value == date(2024, 1, 10)
    
    def test_invalid_dates_skipped(self):
        """Test that impossible calendar dates are rejected."""
        assert self.parse("2024-13-45") is None
        assert self.parse("2024-02-30\n2024-02-28").value == date(2024, 2, 28)
    
    def test_not_a_month(self):
        """Test words that are not month names."""
        assert self.parse("Table 12, 2024") is None
    
    def test_no_date_found(self):
        """Test handling when no date is present."""
        assert self.parse("TOTAL 5.00\nThanks") is None
