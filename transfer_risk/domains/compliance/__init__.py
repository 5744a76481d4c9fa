"""AML/sanctions compliance domain."""

from .checks import (
    DEFAULT_CHECKS,
    ComplianceCheck,
    DailyLimitCheck,
    RoundAmountCheck,
    SanctionsCheck,
    StructuringCheck,
    UnverifiedUserCheck,
)
from .config import ComplianceConfig
from .evaluator import ComplianceEvaluator
from .models import CheckFinding, ComplianceResult, Violation

__all__ = [
    "DEFAULT_CHECKS",
    "CheckFinding",
    "ComplianceCheck",
    "ComplianceConfig",
    "ComplianceEvaluator",
    "ComplianceResult",
    "DailyLimitCheck",
    "RoundAmountCheck",
    "SanctionsCheck",
    "StructuringCheck",
    "UnverifiedUserCheck",
    "Violation",
]
