"""
Tests for minutely two-factor code generation.
"""

import re
from datetime import datetime, timezone
from unittest.mock import patch

import pytest
from services.validators.helpers.two_factor import (
    generate_minutely_two_factor,
    minute_stamp,
)


# 2024-01-15 11:30 in Santiago (UTC-3 in summer)
LOCAL_NOW = datetime(2024, 1, 15, 11, 30)
UTC_NOW = datetime(2024, 1, 15, 14, 30, tzinfo=timezone.utc)

# 202401151130 * 97 + 31
EXPECTED_MIXED = "19632911659641"


class TestMinuteStamp:
    """Tests for the yyyyMMddHHmm stamp."""

    def test_naive_datetime_is_local(self):
        assert minute_stamp(LOCAL_NOW) == 202401151130

    def test_seconds_are_truncated(self):
        assert minute_stamp(datetime(2024, 1, 15, 11, 30, 59, 999999)) == 202401151130

    def test_aware_datetime_is_converted(self):
        assert minute_stamp(UTC_NOW) == 202401151130

    def test_winter_offset(self):
        # Santiago is UTC-4 in July
        winter = datetime(2024, 7, 15, 15, 30, tzinfo=timezone.utc)
        assert minute_stamp(winter) == 202407151130

    def test_other_timezone(self):
        assert minute_stamp(UTC_NOW, timezone="UTC") == 202401151430


class TestGenerateMinutelyTwoFactor:
    """Tests for code generation."""

    @pytest.mark.parametrize(
        "length,expected",
        [
            (4, "9641"),
            (5, "59641"),
            (6, "659641"),
            (7, "1659641"),
            (8, "11659641"),
        ],
    )
    def test_known_codes(self, length, expected):
        assert generate_minutely_two_factor(length, now=LOCAL_NOW) == expected
        assert EXPECTED_MIXED.endswith(expected)

    def test_default_length_is_four(self):
        assert generate_minutely_two_factor(now=LOCAL_NOW) == "9641"

    def test_aware_and_local_agree(self):
        assert generate_minutely_two_factor(6, now=UTC_NOW) == generate_minutely_two_factor(
            6, now=LOCAL_NOW
        )

    def test_same_code_within_minute(self):
        codes = {
            generate_minutely_two_factor(6, now=datetime(2024, 1, 15, 11, 30, second))
            for second in (0, 15, 30, 59)
        }
        assert codes == {"659641"}

    def test_changes_next_minute(self):
        assert generate_minutely_two_factor(4, now=datetime(2024, 1, 15, 11, 31)) == "9738"

    def test_shorter_code_is_suffix_of_longer(self):
        code4 = generate_minutely_two_factor(4, now=LOCAL_NOW)
        code8 = generate_minutely_two_factor(8, now=LOCAL_NOW)
        assert code8[4:] == code4

    def test_pads_short_results(self):
        with patch(
            "services.validators.helpers.two_factor.minute_stamp",
            return_value=0,
        ):
            assert generate_minutely_two_factor(4, now=LOCAL_NOW) == "0031"
            assert generate_minutely_two_factor(8, now=LOCAL_NOW) == "00000031"

    @pytest.mark.parametrize("length", [4, 5, 6, 7, 8])
    def test_current_time(self, length):
        code = generate_minutely_two_factor(length)
        assert re.fullmatch(rf"\d{{{length}}}", code)

    @pytest.mark.parametrize("length", [-1, 0, 3, 9, 10])
    def test_invalid_length(self, length):
        with pytest.raises(ValueError, match="Length must be between 4 and 8."):
            generate_minutely_two_factor(length)
