from datetime import datetime, timedelta

import pytest

from taskflow.utils.text import capitalize_first, format_file_size, format_time_ago, get_initials, truncate_text


@pytest.mark.parametrize("size, expected", [
    (0, "0 Bytes"),
    (13, "13 Bytes"),
    (100, "100 Bytes"),
    (1024, "1 KB"),
    (1536, "1.5 KB"),
    (10 * 1024 * 1024, "10 MB"),
    (3 * 1024 ** 3, "3 GB"),
])
def test_format_file_size(size, expected):
    assert format_file_size(size) == expected


def test_get_initials():
    assert get_initials("Ana Lopez") == "AL"
    assert get_initials("ana maria lopez") == "AM"
    assert get_initials("  Cher  ") == "C"
    assert get_initials("") == ""
    assert get_initials(None) == ""


def test_truncate_text():
    assert truncate_text("short", 10) == "short"
    assert truncate_text("exactly10!", 10) == "exactly10!"
    assert truncate_text("hello world again", 6) == "hello..."
    long_text = "x" * 80
    truncated = truncate_text(long_text, 50)
    assert truncated.endswith("...")
    assert len(truncated) <= 53


def test_capitalize_first():
    assert capitalize_first("hELLO") == "Hello"
    assert capitalize_first("") == ""


def test_format_time_ago():
    now = datetime(2026, 6, 15, 12, 0)
    assert format_time_ago(now - timedelta(seconds=20), now) == "now"
    assert format_time_ago(now - timedelta(minutes=5), now) == "5 min"
    assert format_time_ago(now - timedelta(hours=3), now) == "3 h"
    assert format_time_ago(now - timedelta(days=2), now) == "2 d"
    assert format_time_ago(datetime(2026, 5, 1), now) == "01 May"
    assert format_time_ago(datetime(2025, 5, 1), now) == "01 May 2025"
