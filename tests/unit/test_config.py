"""Tests for settings and domain threshold configuration."""

from decimal import Decimal

from transfer_risk.config import Settings
from transfer_risk.domains.accounts.config import AccountRiskConfig
from transfer_risk.domains.compliance.config import ComplianceConfig
from transfer_risk.domains.fraud.config import FraudConfig
from transfer_risk.domains.models import TransferStatus


class TestSettings:
    def test_defaults(self):
        settings = Settings()
        assert settings.app_name == "transfer-risk"
        assert settings.store_timeout_seconds == 2.0
        assert settings.alert_dedup_window_seconds is None

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("STORE_TIMEOUT_SECONDS", "0.5")
        monkeypatch.setenv("ALERT_DEDUP_WINDOW_SECONDS", "3600")
        settings = Settings()
        assert settings.store_timeout_seconds == 0.5
        assert settings.alert_dedup_window_seconds == 3600


class TestComplianceConfig:
    def test_defaults(self):
        config = ComplianceConfig()
        assert config.daily_limit.limit == Decimal("10000")
        assert config.daily_limit.counted_statuses == (
            TransferStatus.PENDING,
            TransferStatus.COMPLETED,
        )
        assert config.structuring.min_gap_seconds == 300
        assert set(config.sanctions.sanctioned_countries) == {"KP", "IR", "CU", "SY"}
        assert config.round_amount.alert_count == 3

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("COMPLIANCE_DAILY_LIMIT", "5000.50")
        monkeypatch.setenv("COMPLIANCE_SANCTIONED_COUNTRIES", "kp, ru")
        config = ComplianceConfig.from_env()
        assert config.daily_limit.limit == Decimal("5000.50")
        assert config.sanctions.sanctioned_countries == ("KP", "RU")

    def test_from_env_does_not_leak_into_defaults(self, monkeypatch):
        monkeypatch.setenv("COMPLIANCE_STRUCTURING_MIN_GAP_SECONDS", "60")
        ComplianceConfig.from_env()
        assert ComplianceConfig().structuring.min_gap_seconds == 300


class TestFraudConfig:
    def test_defaults(self):
        config = FraudConfig()
        assert config.block_threshold == 70
        assert config.signal_trigger_score == 50
        assert config.velocity.points_per_transfer == 10
        assert config.amount.cap == 100

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("FRAUD_BLOCK_THRESHOLD", "90")
        assert FraudConfig.from_env().block_threshold == 90


class TestAccountRiskConfig:
    def test_defaults(self):
        config = AccountRiskConfig()
        assert (config.critical_threshold, config.high_threshold, config.medium_threshold) == (
            70,
            40,
            20,
        )

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("ACCOUNT_RISK_FAILED_THRESHOLD", "2")
        assert AccountRiskConfig.from_env().failed_threshold == 2
