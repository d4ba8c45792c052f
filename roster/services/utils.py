from __future__ import annotations

# roster/services/utils.py
from datetime import date


def today_iso() -> str:
    """Local date as yyyy-MM-dd."""
    return date.today().strftime("%Y-%m-%d")
