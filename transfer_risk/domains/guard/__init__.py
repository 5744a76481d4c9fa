"""Transfer authorization."""

from .guard import RiskCore, TransactionGuard
from .models import AuthorizationResult

__all__ = ["AuthorizationResult", "RiskCore", "TransactionGuard"]
