"""Tests for receipt merchant detection."""

from expense_capture.parsers.vendor_parser import VendorParser
from expense_capture.parsers.base import ReceiptContext


class TestVendorParser:
    """Test suite for VendorParser."""
    
    def setup_method(self):
        """Set up test fixtures."""
        self.parser = VendorParser()

    def parse(self, text):
        return self.parser.parse(ReceiptContext(full_text=text))
    
    def test_store_header(self):
        """Test a typical supermarket header."""
        text = """
        WALMART SUPERCENTER
        123 Main St
        TOTAL 5.00
        """
        result = self.parse(text)
        
        assert result.value == "WALMART SUPERCENTER"
        assert result.metadata['line_idx'] == 0
    
    def test_noise_lines_skipped(self):
        """Test that payment jargon is never a merchant."""
        text = """
        Thank you for shopping
        VISA ****1234
        Blue Door Bakery
        """
        result = self.parse(text)
        
        assert result.value == "Blue Door Bakery"
    
    def test_retail_words_get_bonus(self):
        """Test that retail words outweigh plain length."""
        text = """
        FRESH FOODS CORNER
        SUPER SAVER MART
        """
        result = self.parse(text)
        
        assert result.value == "SUPER SAVER MART"
        assert result.metadata['score'] == 16 + 10 + 8
    
    def test_digits_and_punctuation_removed(self):
        """Test merchant name cleanup."""
        result = self.parse("#1234 Joe's   Coffee & Tea")
        
        assert result.value == "Joes Coffee & Tea"
    
    def test_ties_keep_first_line(self):
        """Test that the earliest line wins equal scores."""
        assert self.parse("ABC\nXYZ").value == "ABC"
    
    def test_only_header_lines_considered(self):
        """Test that merchants are only looked for in the first 8 lines."""
        lines = ["12.00"] * 8 + ["Late Line Store"]
        
        assert self.parse("\n".join(lines)) is None
    
    def test_no_candidates(self):
        """Test a header without any usable line."""
        assert self.parse("12.00\n**\nTOTAL 5.00\nab") is None
        assert self.parse("") is None
