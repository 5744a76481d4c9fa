"""FastAPI dependencies wiring the risk core to the SQL store."""

from functools import lru_cache

from transfer_risk.config import settings
from transfer_risk.db.database import get_session_factory
from transfer_risk.db.repositories import AlertRepository, RiskDataRepository
from transfer_risk.domains.accounts.config import AccountRiskConfig
from transfer_risk.domains.compliance.config import ComplianceConfig
from transfer_risk.domains.fraud.config import FraudConfig
from transfer_risk.domains.guard import RiskCore


@lru_cache
def get_risk_core() -> RiskCore:
    session_factory = get_session_factory()
    return RiskCore(
        store=RiskDataRepository(session_factory, timeout_seconds=settings.store_timeout_seconds),
        alert_sink=AlertRepository(session_factory),
        compliance_config=ComplianceConfig.from_env(),
        fraud_config=FraudConfig.from_env(),
        account_config=AccountRiskConfig.from_env(),
        dedup_window_seconds=settings.alert_dedup_window_seconds,
        alert_timeout_seconds=settings.store_timeout_seconds,
    )
