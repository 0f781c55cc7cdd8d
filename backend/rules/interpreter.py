"""Turns free-text constraints into structured rule parameters."""

import logging
import re
from typing import Any, Iterable, Optional

from grid import Constraint

from .types import RuleCategory, RuleTemplate, StructuredRules

logger = logging.getLogger(__name__)


def _first_integer(found: re.Match) -> int:
    return int(found.group(1))


def _flag(found: re.Match) -> bool:
    return True


# Order is significant: the first template that matches decides the category
RULE_TEMPLATES: tuple[RuleTemplate, ...] = (
    RuleTemplate(
        RuleCategory.MAX_DAYS_PER_WEEK,
        re.compile(r"no one can work more than (\d+) days per week"),
        _first_integer,
    ),
    RuleTemplate(
        RuleCategory.MAX_HOURS_PER_DAY,
        re.compile(r"no one can work more than (\d+) hours per day"),
        _first_integer,
    ),
    RuleTemplate(
        RuleCategory.MIN_DAYS_PER_WEEK,
        re.compile(r"no one can work less than (\d+) days per week"),
        _first_integer,
    ),
    RuleTemplate(
        RuleCategory.MIN_HOURS_PER_DAY,
        re.compile(r"no one can work less than (\d+) hours per day"),
        _first_integer,
    ),
    RuleTemplate(
        RuleCategory.FREE_WEEKEND,
        re.compile(r"free whole weekend"),
        _flag,
    ),
)

# Keys accepted in a constraint's pre-formalised representation
STRUCTURED_KEYS: dict[str, RuleCategory] = {
    "maxDaysPerWeek": RuleCategory.MAX_DAYS_PER_WEEK,
    "maxHoursPerDay": RuleCategory.MAX_HOURS_PER_DAY,
    "minDaysPerWeek": RuleCategory.MIN_DAYS_PER_WEEK,
    "minHoursPerDay": RuleCategory.MIN_HOURS_PER_DAY,
    "requireFreeWeekend": RuleCategory.FREE_WEEKEND,
}
STRUCTURED_KEYS.update({category.value: category for category in RuleCategory})


def match_template(text: str) -> Optional[tuple[RuleCategory, Any]]:
    """
    Find the first template matching the text.

    Args:
        text: Constraint text, any case

    Returns:
        (category, extracted value) or None when no template matches
    """
    for template in RULE_TEMPLATES:
        value = template.match(text)
        if value is not None:
            return template.category, value
    return None


def _structured_values(structured: dict) -> list[tuple[RuleCategory, Any]]:
    values = []
    for key, raw in structured.items():
        category = STRUCTURED_KEYS.get(key)
        if category is None or raw is None:
            continue
        if category == RuleCategory.FREE_WEEKEND:
            values.append((category, bool(raw)))
        elif isinstance(raw, int) and not isinstance(raw, bool):
            values.append((category, raw))
        elif isinstance(raw, str) and raw.strip().isdigit():
            values.append((category, int(raw.strip())))
        else:
            logger.debug(f"Ignoring non-integer value {raw!r} for {key}")
    return values


def match_templates(text: str) -> list[tuple[RuleCategory, Any]]:
    """Every template matching the text, in template order."""
    # A sentence may carry more than one rule, e.g. a day limit plus a free weekend
    values = []
    for template in RULE_TEMPLATES:
        value = template.match(text)
        if value is not None:
            values.append((template.category, value))
    return values


def interpret(constraints: Iterable[Constraint]) -> StructuredRules:
    """
    Build structured rules from a list of constraints.

    Later constraints of the same category overwrite earlier ones. Text that
    matches no template is ignored, and a constraint carrying a formalised
    representation is applied from it directly. When that representation has
    no recognised keys the text is matched instead.

    Args:
        constraints: Constraints in authoring order

    Returns:
        StructuredRules, with defaults for every category nothing matched
    """
    rules = StructuredRules()

    for constraint in constraints:
        values = _structured_values(constraint.structured) if constraint.structured else []
        # Structured forms with no recognised keys still carry their text
        if not values:
            values = match_templates(constraint.text)

        if not values:
            logger.debug(f"Constraint {constraint.id} matched no rule template: {constraint.text!r}")
            continue

        for category, value in values:
            setattr(rules, category.value, value)

    return rules
