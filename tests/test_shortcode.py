"""Tests for short code generation."""

import pytest
from shortener.shortcode import ShortCodeGenerator


class TestShortCodeGenerator:
    """Test short code generation."""
    
    def test_generate_from_url_is_deterministic(self):
        """Same URL always yields the same code."""
        generator = ShortCodeGenerator(default_length=8)
        
        url = "https://example.com/test"
        code1 = generator.generate_from_url(url)
        code2 = ShortCodeGenerator(default_length=8).generate_from_url(url)
        
        assert code1 == code2
        assert len(code1) == 8
        assert generator.is_valid_format(code1)
    
    def test_different_urls_differ(self):
        generator = ShortCodeGenerator()
        
        assert generator.generate_from_url("https://a.com") != generator.generate_from_url("https://b.com")
    
    @pytest.mark.parametrize("length", [4, 6, 10, 16])
    def test_custom_length(self, length):
        code = ShortCodeGenerator().generate_from_url("https://example.com", length=length)
        assert len(code) == length
    
    def test_int_to_base62(self):
        generator = ShortCodeGenerator()
        
        assert generator._int_to_base62(0) == "a"
        assert generator._int_to_base62(61) == "9"
        assert generator._int_to_base62(62) == "ba"
    
    def test_is_valid_format(self):
        assert ShortCodeGenerator.is_valid_format("abc123")
        assert ShortCodeGenerator.is_valid_format("ABCxyz09")
        
        assert not ShortCodeGenerator.is_valid_format("")
        assert not ShortCodeGenerator.is_valid_format("abc 123")
        assert not ShortCodeGenerator.is_valid_format("abc-123")
        assert not ShortCodeGenerator.is_valid_format("abc@123")
