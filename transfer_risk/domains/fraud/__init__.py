"""Fraud scoring domain."""

from .config import FraudConfig
from .models import FraudScoreResult, TransactionRiskResult
from .scorer import FraudRiskScorer, build_probes
from .transaction_risk import TransactionRiskAnalyzer

__all__ = [
    "FraudConfig",
    "FraudRiskScorer",
    "FraudScoreResult",
    "TransactionRiskAnalyzer",
    "TransactionRiskResult",
    "build_probes",
]
