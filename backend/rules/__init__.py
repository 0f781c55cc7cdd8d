"""Constraint interpretation: free-text rules to structured parameters."""

from .types import (
    DEFAULT_MAX_DAYS_PER_WEEK,
    DEFAULT_MAX_HOURS_PER_DAY,
    RuleCategory,
    RuleTemplate,
    StructuredRules,
)
from .interpreter import RULE_TEMPLATES, interpret, match_template, match_templates

__all__ = [
    "DEFAULT_MAX_DAYS_PER_WEEK",
    "DEFAULT_MAX_HOURS_PER_DAY",
    "RuleCategory",
    "RuleTemplate",
    "StructuredRules",
    "RULE_TEMPLATES",
    "interpret",
    "match_template",
    "match_templates",
]
