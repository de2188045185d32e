# this_file: tests/test_card.py

"""Tests for card parameter validation."""

import pytest

from ogcard import CardParamError, validate_card_params


class TestValidateCardParams:
    """Test validate_card_params."""

    def test_valid(self):
        """All three parameters are returned in (text, title, author) order."""
        params = {"text": "Hello", "title": "Blog", "author": "me"}
        assert validate_card_params(params) == ("Hello", "Blog", "me")

    def test_empty_strings_allowed(self):
        """Present but empty parameters are accepted."""
        assert validate_card_params({"text": "", "title": "", "author": ""}) == ("", "", "")

    @pytest.mark.parametrize("missing", ["text", "title", "author"])
    def test_missing(self, missing):
        """Each parameter is required."""
        params = {"text": "t", "title": "t", "author": "a"}
        del params[missing]
        with pytest.raises(CardParamError, match=f"{missing} parameter is required"):
            validate_card_params(params)

    def test_text_too_long(self):
        """Text over the limit is rejected."""
        with pytest.raises(CardParamError, match="too long"):
            validate_card_params({"text": "a" * 151, "title": "", "author": ""})

    def test_text_at_limit(self):
        """Text exactly at the limit is accepted."""
        text, _title, _author = validate_card_params({"text": "a" * 150, "title": "", "author": ""})
        assert len(text) == 150

    def test_limit_counts_utf8_bytes(self):
        """Multi-byte characters count by their encoded length."""
        # 51 * 3 bytes = 153
        with pytest.raises(CardParamError):
            validate_card_params({"text": "あ" * 51, "title": "", "author": ""})
        validate_card_params({"text": "あ" * 50, "title": "", "author": ""})

    def test_custom_limit(self):
        """The limit is configurable."""
        with pytest.raises(CardParamError):
            validate_card_params({"text": "abcdef", "title": "", "author": ""}, max_text_length=5)

    def test_error_is_value_error(self):
        """CardParamError is also a ValueError."""
        with pytest.raises(ValueError):
            validate_card_params({})
