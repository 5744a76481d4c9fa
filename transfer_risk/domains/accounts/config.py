"""Standing account-risk configuration."""

import os
from dataclasses import dataclass


@dataclass
class AccountRiskConfig:
    new_account_days: int = 7
    new_account_points: int = 20
    unverified_kyc_points: int = 30
    failed_window_days: int = 30
    failed_threshold: int = 5
    failed_points: int = 25
    points_per_pending_alert: int = 20

    # Level bands (score >= threshold)
    critical_threshold: int = 70
    high_threshold: int = 40
    medium_threshold: int = 20

    @classmethod
    def from_env(cls) -> "AccountRiskConfig":
        """Load config with env var overrides. Env vars use ACCOUNT_RISK_ prefix."""
        config = cls()

        if v := os.getenv("ACCOUNT_RISK_NEW_ACCOUNT_DAYS"):
            config.new_account_days = int(v)
        if v := os.getenv("ACCOUNT_RISK_FAILED_THRESHOLD"):
            config.failed_threshold = int(v)
        if v := os.getenv("ACCOUNT_RISK_CRITICAL_THRESHOLD"):
            config.critical_threshold = int(v)
        if v := os.getenv("ACCOUNT_RISK_HIGH_THRESHOLD"):
            config.high_threshold = int(v)
        if v := os.getenv("ACCOUNT_RISK_MEDIUM_THRESHOLD"):
            config.medium_threshold = int(v)

        return config


default_config = AccountRiskConfig()
