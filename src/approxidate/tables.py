"""Static vocabulary tables used for recognizing date tokens.

All tables are module-level tuples and never mutated, so they are safe for
concurrent reads. The English words here are recognition vocabulary, not
user-facing text.
"""

from __future__ import annotations

from enum import Enum
from typing import NamedTuple, Tuple


MONTH_NAMES: Tuple[str, ...] = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)

# Plural so that "mondays" matches in relative phrases; output uses the
# three-letter prefix only.
WEEKDAY_NAMES: Tuple[str, ...] = (
    "Sundays", "Mondays", "Tuesdays", "Wednesdays", "Thursdays", "Fridays", "Saturdays",
)

NUMBER_NAMES: Tuple[str, ...] = (
    "zero", "one", "two", "three", "four",
    "five", "six", "seven", "eight", "nine", "ten",
)


class ZoneName(NamedTuple):
    """Abbreviated zone name with its whole-hour offset and summer flag."""

    name: str
    hours: int
    dst: int

    @property
    def offset_minutes(self) -> int:
        # No summer-time calendar: a daylight zone is simply one hour ahead.
        return 60 * (self.hours + self.dst)


TIMEZONE_NAMES: Tuple[ZoneName, ...] = (
    ZoneName("IDLW", -12, 0),  # International Date Line West
    ZoneName("NT", -11, 0),    # Nome
    ZoneName("CAT", -10, 0),   # Central Alaska
    ZoneName("HST", -10, 0),   # Hawaii Standard
    ZoneName("HDT", -10, 1),   # Hawaii Daylight
    ZoneName("YST", -9, 0),    # Yukon Standard
    ZoneName("YDT", -9, 1),    # Yukon Daylight
    ZoneName("PST", -8, 0),    # Pacific Standard
    ZoneName("PDT", -8, 1),    # Pacific Daylight
    ZoneName("MST", -7, 0),    # Mountain Standard
    ZoneName("MDT", -7, 1),    # Mountain Daylight
    ZoneName("CST", -6, 0),    # Central Standard
    ZoneName("CDT", -6, 1),    # Central Daylight
    ZoneName("EST", -5, 0),    # Eastern Standard
    ZoneName("EDT", -5, 1),    # Eastern Daylight
    ZoneName("AST", -3, 0),    # Atlantic Standard
    ZoneName("ADT", -3, 1),    # Atlantic Daylight
    ZoneName("WAT", -1, 0),    # West Africa

    ZoneName("GMT", 0, 0),     # Greenwich Mean
    ZoneName("UTC", 0, 0),     # Universal (Coordinated)
    ZoneName("Z", 0, 0),       # Zulu, alias for UTC

    ZoneName("WET", 0, 0),     # Western European
    ZoneName("BST", 0, 1),     # British Summer
    ZoneName("CET", 1, 0),     # Central European
    ZoneName("MET", 1, 0),     # Middle European
    ZoneName("MEWT", 1, 0),    # Middle European Winter
    ZoneName("MEST", 1, 1),    # Middle European Summer
    ZoneName("CEST", 1, 1),    # Central European Summer
    ZoneName("MESZ", 1, 1),    # Middle European Summer
    ZoneName("FWT", 1, 0),     # French Winter
    ZoneName("FST", 1, 1),     # French Summer
    ZoneName("EET", 2, 0),     # Eastern Europe, USSR Zone 1
    ZoneName("EEST", 2, 1),    # Eastern European Daylight
    ZoneName("WAST", 7, 0),    # West Australian Standard
    ZoneName("WADT", 7, 1),    # West Australian Daylight
    ZoneName("CCT", 8, 0),     # China Coast, USSR Zone 7
    ZoneName("JST", 9, 0),     # Japan Standard, USSR Zone 8
    ZoneName("EAST", 10, 0),   # Eastern Australian Standard
    ZoneName("EADT", 10, 1),   # Eastern Australian Daylight
    ZoneName("GST", 10, 0),    # Guam Standard, USSR Zone 9
    ZoneName("NZT", 12, 0),    # New Zealand
    ZoneName("NZST", 12, 0),   # New Zealand Standard
    ZoneName("NZDT", 12, 1),   # New Zealand Daylight
    ZoneName("IDLE", 12, 0),   # International Date Line East
)


RELATIVE_UNITS: Tuple[Tuple[str, int], ...] = (
    ("seconds", 1),
    ("minutes", 60),
    ("hours", 60 * 60),
    ("days", 24 * 60 * 60),
    ("weeks", 7 * 24 * 60 * 60),
)


class SpecialKeyword(Enum):
    """Keywords that rewrite the working moment in a relative phrase."""

    YESTERDAY = "yesterday"
    NOON = "noon"
    MIDNIGHT = "midnight"
    TEA = "tea"
    PM = "pm"
    AM = "am"
    NEVER = "never"
    NOW = "now"


SPECIAL_KEYWORDS: Tuple[Tuple[str, SpecialKeyword], ...] = (
    ("yesterday", SpecialKeyword.YESTERDAY),
    ("noon", SpecialKeyword.NOON),
    ("midnight", SpecialKeyword.MIDNIGHT),
    ("tea", SpecialKeyword.TEA),
    ("PM", SpecialKeyword.PM),
    ("AM", SpecialKeyword.AM),
    ("never", SpecialKeyword.NEVER),
    ("now", SpecialKeyword.NOW),
    ("today", SpecialKeyword.NOW),
)


def match_string(text: str, pos: int, word: str) -> int:
    """Count how many characters of ``text[pos:]`` match ``word``.

    Comparison is case-insensitive. Matching stops quietly at the first
    non-alphanumeric character; an alphanumeric mismatch (including running
    past the end of ``word``) means no match at all and returns 0.
    """
    count = 0
    for char in text[pos:]:
        expected = word[count] if count < len(word) else ""
        if expected and char.upper() == expected.upper():
            count += 1
            continue
        if not char.isalnum():
            break
        return 0
    return count
