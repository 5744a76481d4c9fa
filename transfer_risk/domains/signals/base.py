"""Abstract base class for scoring signal probes."""

from abc import ABC, abstractmethod
from datetime import datetime
from enum import StrEnum

import structlog
from pydantic import BaseModel

from ..exceptions import StoreUnavailableError
from ..models import TransferRequest

logger = structlog.get_logger()


class RiskRule(StrEnum):
    HIGH_VELOCITY = "HIGH_VELOCITY"
    UNUSUAL_AMOUNT = "UNUSUAL_AMOUNT"
    HIGH_RISK_LOCATION = "HIGH_RISK_LOCATION"
    SUSPICIOUS_DEVICE = "SUSPICIOUS_DEVICE"


class SignalResult(BaseModel):
    rule: RiskRule
    score: int = 0
    triggered: bool = False
    failed: bool = False
    error: str | None = None


class ScoringProbe(ABC):
    """Base class for additive signal probes.

    ``measure`` computes a non-negative score. ``evaluate`` wraps it with the
    probe's failure policy: exceptions listed in ``fail_open_on`` are logged and
    turned into a zero, failed result; anything else propagates.
    """

    rule: RiskRule
    fail_open_on: tuple[type[BaseException], ...] = (StoreUnavailableError,)

    def __init__(self, store, trigger_score: int = 50) -> None:
        self._store = store
        self._trigger_score = trigger_score

    def applies_to(self, request: TransferRequest) -> bool:
        return True

    @abstractmethod
    async def measure(self, request: TransferRequest, now: datetime) -> int:
        """Return this probe's score for ``request``."""
        ...

    async def evaluate(self, request: TransferRequest, now: datetime) -> SignalResult:
        try:
            score = await self.measure(request, now)
        except self.fail_open_on as exc:
            logger.warning(
                "signal_probe_failed_open",
                rule=self.rule.value,
                from_account_id=request.from_account_id,
                error=str(exc),
            )
            return SignalResult(rule=self.rule, failed=True, error=str(exc))

        return SignalResult(rule=self.rule, score=score, triggered=score > self._trigger_score)
