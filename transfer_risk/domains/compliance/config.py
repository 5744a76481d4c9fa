"""Compliance gate configuration.

Defaults reproduce the reference behavior; every value can be overridden
through ``COMPLIANCE_`` environment variables.
"""

import os
from dataclasses import dataclass, field
from decimal import Decimal

from ..models import TransferStatus


@dataclass
class DailyLimitConfig:
    """Hard check: rolling same-currency total, strictly greater-than."""

    limit: Decimal = Decimal("10000")
    window_hours: int = 24
    counted_statuses: tuple[TransferStatus, ...] = (
        TransferStatus.PENDING,
        TransferStatus.COMPLETED,
    )


@dataclass
class StructuringConfig:
    """Hard check: consecutive transfers closer than ``min_gap_seconds``."""

    lookback_hours: int = 24
    min_gap_seconds: int = 300


@dataclass
class SanctionsConfig:
    """Hard check: owning-user country of either account."""

    sanctioned_countries: tuple[str, ...] = ("KP", "IR", "CU", "SY")


@dataclass
class RoundAmountConfig:
    """Soft check: repeated large round-number transfers."""

    round_unit: Decimal = Decimal("1000")
    min_amount: Decimal = Decimal("10000")
    lookback_hours: int = 24
    # Counts the in-flight transfer
    alert_count: int = 3


@dataclass
class UnverifiedUserConfig:
    """Soft check: large transfer by a user whose KYC is not verified."""

    amount_threshold: Decimal = Decimal("1000")


@dataclass
class ComplianceConfig:
    daily_limit: DailyLimitConfig = field(default_factory=DailyLimitConfig)
    structuring: StructuringConfig = field(default_factory=StructuringConfig)
    sanctions: SanctionsConfig = field(default_factory=SanctionsConfig)
    round_amount: RoundAmountConfig = field(default_factory=RoundAmountConfig)
    unverified_user: UnverifiedUserConfig = field(default_factory=UnverifiedUserConfig)

    @classmethod
    def from_env(cls) -> "ComplianceConfig":
        """Load config with env var overrides. Env vars use COMPLIANCE_ prefix."""
        config = cls()

        if v := os.getenv("COMPLIANCE_DAILY_LIMIT"):
            config.daily_limit.limit = Decimal(v)
        if v := os.getenv("COMPLIANCE_STRUCTURING_MIN_GAP_SECONDS"):
            config.structuring.min_gap_seconds = int(v)
        if v := os.getenv("COMPLIANCE_SANCTIONED_COUNTRIES"):
            config.sanctions.sanctioned_countries = tuple(
                c.strip().upper() for c in v.split(",") if c.strip()
            )
        if v := os.getenv("COMPLIANCE_ROUND_AMOUNT_ALERT_COUNT"):
            config.round_amount.alert_count = int(v)
        if v := os.getenv("COMPLIANCE_UNVERIFIED_AMOUNT_THRESHOLD"):
            config.unverified_user.amount_threshold = Decimal(v)

        return config


# Module-level default instance
default_config = ComplianceConfig()
