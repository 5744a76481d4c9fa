"""Velocity signals."""

from datetime import datetime, timedelta

from ..models import TransferRequest
from .base import RiskRule, ScoringProbe


async def count_recent_transfers(
    store, account_id: str, now: datetime, window: timedelta
) -> int:
    """Transfers sent by ``account_id`` within ``window`` before ``now``."""
    return await store.count_transfers(from_account_id=account_id, since=now - window)


class VelocityProbe(ScoringProbe):
    """Scores the sender's transfer count in a short window, uncapped."""

    rule = RiskRule.HIGH_VELOCITY

    def __init__(
        self,
        store,
        window: timedelta = timedelta(hours=1),
        points_per_transfer: int = 10,
        trigger_score: int = 50,
    ) -> None:
        super().__init__(store, trigger_score)
        self._window = window
        self._points_per_transfer = points_per_transfer

    async def measure(self, request: TransferRequest, now: datetime) -> int:
        count = await count_recent_transfers(
            self._store, request.from_account_id, now, self._window
        )
        return count * self._points_per_transfer
