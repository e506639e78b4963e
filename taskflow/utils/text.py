"""Display helpers shared by schemas and notification messages."""

from datetime import datetime
from typing import Optional

FILE_SIZE_UNITS = ["Bytes", "KB", "MB", "GB"]


def format_file_size(size: int) -> str:
    if not size:
        return "0 Bytes"
    i = 0
    scaled = float(size)
    while scaled >= 1024 and i < len(FILE_SIZE_UNITS) - 1:
        scaled /= 1024
        i += 1
    value = f"{scaled:.2f}".rstrip("0").rstrip(".")
    return f"{value} {FILE_SIZE_UNITS[i]}"


def get_initials(name: Optional[str]) -> str:
    if not name:
        return ""
    words = [word for word in name.split(" ") if word]
    return "".join(word[0].upper() for word in words[:2])


def truncate_text(text: Optional[str], max_length: int) -> Optional[str]:
    if not text or len(text) <= max_length:
        return text
    return text[:max_length].strip() + "..."


def capitalize_first(text: Optional[str]) -> str:
    if not text:
        return ""
    return text[0].upper() + text[1:].lower()


def format_time_ago(when: datetime, now: datetime) -> str:
    minutes = int((now - when).total_seconds() // 60)
    if minutes < 1:
        return "now"
    if minutes < 60:
        return f"{minutes} min"
    if minutes < 1440:
        return f"{minutes // 60} h"
    if minutes < 10080:
        return f"{minutes // 1440} d"
    if when.year != now.year:
        return when.strftime("%d %b %Y")
    return when.strftime("%d %b")
