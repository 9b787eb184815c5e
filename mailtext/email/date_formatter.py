"""
Date handling for message listings.

Handles:
- Email header Date fields (RFC 2822 + fallback patterns)
- Relative, tiered display strings ("14:30", "Tue", "Jan 15", "Jun 15 2020")
"""

from __future__ import annotations

import re
from datetime import datetime
from email.utils import parsedate_to_datetime
from typing import Optional, Tuple

from mailtext.config import get_settings
from mailtext.email.config import HEADER_DATE_PATTERNS, MONTH_ABBR, MONTH_MAP, WEEKDAY_ABBR


class RelativeTimeFormatter:
    """Stateless helper that renders timestamps relative to a "now" reference.

    Tiers, first match wins:

    1. unset timestamp          -> ``""``
    2. same calendar day as now -> ``HH:MM`` (24-hour)
    3. 1-6 calendar days ago    -> weekday, e.g. ``Tue``
    4. same calendar year       -> ``Jan 15``
    5. any other year           -> ``Jun 15 2020``
    """

    # ------------------------------------------------------------------
    # Sentinel / zone alignment
    # ------------------------------------------------------------------

    @staticmethod
    def is_unset(ts: Optional[datetime]) -> bool:
        """*None* and ``datetime.min`` (with or without tzinfo) mean "unknown"."""
        return ts is None or ts.replace(tzinfo=None) == datetime.min

    @staticmethod
    def align(ts: datetime, now: Optional[datetime]) -> Tuple[datetime, datetime]:
        """Express *ts* in the zone of *now* so calendar fields compare directly.

        A naive *now* means local wall-clock time; a naive *ts* is taken to
        already be in the zone of *now*.
        """
        if now is None:
            now = datetime.now().astimezone() if ts.tzinfo is not None else datetime.now()

        if ts.tzinfo is None:
            if now.tzinfo is not None:
                ts = ts.replace(tzinfo=now.tzinfo)
            return ts, now

        try:
            if now.tzinfo is None:
                ts = ts.astimezone().replace(tzinfo=None)
            else:
                ts = ts.astimezone(now.tzinfo)
        except (OverflowError, ValueError):
            ts = ts.replace(tzinfo=now.tzinfo)
        return ts, now

    # ------------------------------------------------------------------
    # Formatting
    # ------------------------------------------------------------------

    @classmethod
    def format(cls, ts: Optional[datetime], now: Optional[datetime] = None) -> str:
        """Return the tiered display string for *ts*; ``""`` when unset."""
        if cls.is_unset(ts):
            return ""
        ts, now = cls.align(ts, now)

        days_ago = (now.date() - ts.date()).days
        if days_ago == 0:
            return f"{ts.hour:02d}:{ts.minute:02d}"
        if 0 < days_ago < get_settings().RECENT_DAYS:
            return WEEKDAY_ABBR[ts.weekday()]

        month_day = f"{MONTH_ABBR[ts.month - 1]} {ts.day}"
        if ts.year == now.year:
            return month_day
        return f"{month_day} {ts.year:04d}"

    # ------------------------------------------------------------------
    # Email header Date
    # ------------------------------------------------------------------

    @staticmethod
    def parse_email_header_date(date_str: Optional[str]) -> Optional[datetime]:
        """Parse an RFC 2822 *Date* header with fallback patterns.

        Returns *None* (the unset sentinel) when nothing matches.
        """
        if not date_str:
            return None
        try:
            return parsedate_to_datetime(date_str)
        except (TypeError, ValueError, IndexError):
            pass

        for pat in HEADER_DATE_PATTERNS:
            match = re.search(pat, date_str, re.IGNORECASE)
            if match:
                groups = match.groups()
                try:
                    if groups[1].title() in MONTH_MAP:
                        return datetime(int(groups[2]), MONTH_MAP[groups[1].title()], int(groups[0]))
                    return datetime(int(groups[0]), int(groups[1]), int(groups[2]))
                except ValueError:
                    pass
        return None


def format_relative_time(ts: Optional[datetime], now: Optional[datetime] = None) -> str:
    return RelativeTimeFormatter.format(ts, now)


def parse_email_header_date(date_str: Optional[str]) -> Optional[datetime]:
    return RelativeTimeFormatter.parse_email_header_date(date_str)
