"""Device signals and failure-history primitives."""

from datetime import datetime, timedelta

from ..models import TransferRequest, TransferStatus
from .base import RiskRule, ScoringProbe


async def count_failed_transfers(
    store, now: datetime, window: timedelta, account_id: str | None = None
) -> int:
    """FAILED transfers within ``window``; platform-wide unless ``account_id`` is given.

    With an account id, transfers in either direction count.
    """
    filters = {"statuses": (TransferStatus.FAILED,), "since": now - window}
    if account_id is not None:
        filters["involving_account_id"] = account_id
    return await store.count_transfers(**filters)


class DeviceProbe(ScoringProbe):
    """Placeholder device-fingerprint heuristic; fails open on any error."""

    rule = RiskRule.SUSPICIOUS_DEVICE
    fail_open_on = (Exception,)

    def __init__(
        self,
        store,
        window: timedelta = timedelta(days=7),
        failed_threshold: int = 5,
        failed_points: int = 30,
        min_device_id_length: int = 10,
        short_id_points: int = 20,
        cap: int = 100,
        trigger_score: int = 50,
    ) -> None:
        super().__init__(store, trigger_score)
        self._window = window
        self._failed_threshold = failed_threshold
        self._failed_points = failed_points
        self._min_device_id_length = min_device_id_length
        self._short_id_points = short_id_points
        self._cap = cap

    def applies_to(self, request: TransferRequest) -> bool:
        return bool(request.device_id)

    async def measure(self, request: TransferRequest, now: datetime) -> int:
        device_id = request.device_id or ""
        failed = await count_failed_transfers(self._store, now, self._window)

        score = 0
        if failed > self._failed_threshold:
            score += self._failed_points
        if len(device_id) < self._min_device_id_length:
            score += self._short_id_points

        return min(score, self._cap)
