"""Fraud scoring configuration with sensible defaults."""

import os
from dataclasses import dataclass, field
from decimal import Decimal


@dataclass
class VelocitySignal:
    window_minutes: int = 60
    points_per_transfer: int = 10


@dataclass
class AmountSignal:
    lookback_days: int = 7
    points_per: Decimal = Decimal("100")
    cap: int = 100


@dataclass
class LocationSignal:
    window_hours: int = 24
    high_volume: int = 50
    high_volume_points: int = 40
    elevated_volume: int = 20
    elevated_volume_points: int = 20
    private_range_points: int = 10
    cap: int = 100


@dataclass
class DeviceSignal:
    window_days: int = 7
    failed_threshold: int = 5
    failed_points: int = 30
    min_device_id_length: int = 10
    short_id_points: int = 20
    cap: int = 100


@dataclass
class TransactionRiskSettings:
    """Qualitative per-transaction analysis bands and weights."""

    velocity_window_minutes: int = 60
    high_velocity_count: int = 5
    high_velocity_points: int = 30
    elevated_velocity_count: int = 3
    elevated_velocity_points: int = 15
    high_amount_ratio: Decimal = Decimal("10")
    high_amount_points: int = 40
    elevated_amount_ratio: Decimal = Decimal("5")
    elevated_amount_points: int = 20
    new_recipient_points: int = 10
    new_account_days: int = 7
    new_account_points: int = 25
    young_account_days: int = 30
    young_account_points: int = 10
    unverified_kyc_points: int = 30
    critical_threshold: int = 80
    high_threshold: int = 50
    medium_threshold: int = 30
    # Scores at or above this open a HIGH_RISK_TRANSACTION alert
    alert_threshold: int = 50


@dataclass
class FraudConfig:
    block_threshold: int = 70
    signal_trigger_score: int = 50
    velocity: VelocitySignal = field(default_factory=VelocitySignal)
    amount: AmountSignal = field(default_factory=AmountSignal)
    location: LocationSignal = field(default_factory=LocationSignal)
    device: DeviceSignal = field(default_factory=DeviceSignal)
    transaction_risk: TransactionRiskSettings = field(default_factory=TransactionRiskSettings)

    @classmethod
    def from_env(cls) -> "FraudConfig":
        """Load config with env var overrides. Env vars use FRAUD_ prefix."""
        config = cls()

        if v := os.getenv("FRAUD_BLOCK_THRESHOLD"):
            config.block_threshold = int(v)
        if v := os.getenv("FRAUD_SIGNAL_TRIGGER_SCORE"):
            config.signal_trigger_score = int(v)
        if v := os.getenv("FRAUD_VELOCITY_POINTS_PER_TRANSFER"):
            config.velocity.points_per_transfer = int(v)
        if v := os.getenv("FRAUD_AMOUNT_LOOKBACK_DAYS"):
            config.amount.lookback_days = int(v)
        if v := os.getenv("FRAUD_TRANSACTION_ALERT_THRESHOLD"):
            config.transaction_risk.alert_threshold = int(v)

        return config


# Module-level default instance
default_config = FraudConfig()
