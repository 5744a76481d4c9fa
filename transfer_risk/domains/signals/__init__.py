"""Signal probes shared by the compliance, fraud and account-risk domains."""

from .account import account_age_days, is_kyc_verified
from .amount import AmountDeviationProbe, rolling_total_with
from .base import RiskRule, ScoringProbe, SignalResult
from .device import DeviceProbe, count_failed_transfers
from .geo import LocationProbe, SanctionsHit, SanctionsProbe, is_private_range
from .patterns import RapidSuccession, RapidSuccessionProbe, RoundAmountProbe
from .velocity import VelocityProbe, count_recent_transfers

__all__ = [
    "AmountDeviationProbe",
    "DeviceProbe",
    "LocationProbe",
    "RapidSuccession",
    "RapidSuccessionProbe",
    "RiskRule",
    "RoundAmountProbe",
    "SanctionsHit",
    "SanctionsProbe",
    "ScoringProbe",
    "SignalResult",
    "VelocityProbe",
    "account_age_days",
    "count_failed_transfers",
    "count_recent_transfers",
    "is_kyc_verified",
    "is_private_range",
    "rolling_total_with",
]
