"""Input adapters that normalize signups and rule records."""

from .roster import (
    MIN_ROSTER_SIZE,
    GuestRecord,
    ProfileRecord,
    SignupRecord,
    ensure_playable_roster,
    normalize_roster,
)
from .rules import (
    AvoidPair,
    BalanceRating,
    ForcePair,
    MinDefenders,
    MinGoalkeepers,
    Rule,
    RuleRecord,
    RuleSet,
    compile_rules,
)

__all__ = [
    "MIN_ROSTER_SIZE",
    "AvoidPair",
    "BalanceRating",
    "ForcePair",
    "GuestRecord",
    "MinDefenders",
    "MinGoalkeepers",
    "ProfileRecord",
    "Rule",
    "RuleRecord",
    "RuleSet",
    "SignupRecord",
    "compile_rules",
    "ensure_playable_roster",
    "normalize_roster",
]
