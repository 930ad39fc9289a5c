"""Utility functions for formatting chat replies."""

from __future__ import annotations

from functools import cache


def mention(user_id: int) -> str:
    return f"<@{user_id}>"


@cache
def format_duration_ms(duration_ms: int | None) -> str:
    if duration_ms is None:
        return "–"

    total_seconds = int(duration_ms) // 1000
    hours = total_seconds // 3600
    minutes = (total_seconds % 3600) // 60
    secs = total_seconds % 60

    if hours > 0:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"
