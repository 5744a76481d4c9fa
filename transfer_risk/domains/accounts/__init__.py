"""Standing account-risk domain."""

from .aggregator import AccountRiskAggregator
from .config import AccountRiskConfig
from .models import AccountRiskResult

__all__ = ["AccountRiskAggregator", "AccountRiskConfig", "AccountRiskResult"]
