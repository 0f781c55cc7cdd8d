"""Type definitions for interpreted scheduling rules."""

import re
from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Callable, Optional


DEFAULT_MAX_DAYS_PER_WEEK = 7
DEFAULT_MAX_HOURS_PER_DAY = 12


class RuleCategory(str, Enum):
    """Rule families recognised in constraint text."""
    MAX_DAYS_PER_WEEK = "max_days_per_week"
    MAX_HOURS_PER_DAY = "max_hours_per_day"
    MIN_DAYS_PER_WEEK = "min_days_per_week"
    MIN_HOURS_PER_DAY = "min_hours_per_day"
    FREE_WEEKEND = "require_free_weekend"


@dataclass
class StructuredRules:
    """Numeric and boolean parameters derived from constraint text."""
    max_days_per_week: int = DEFAULT_MAX_DAYS_PER_WEEK
    max_hours_per_day: int = DEFAULT_MAX_HOURS_PER_DAY
    min_days_per_week: Optional[int] = None
    min_hours_per_day: Optional[int] = None
    require_free_weekend: bool = False

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class RuleTemplate:
    """A sentence template and the rule field it sets."""
    category: RuleCategory
    pattern: re.Pattern
    extract: Callable[[re.Match], Any]

    def match(self, text: str) -> Optional[Any]:
        """Return the extracted value if the lower-cased text matches, else None."""
        found = self.pattern.search(text.lower())
        if not found:
            return None
        return self.extract(found)
