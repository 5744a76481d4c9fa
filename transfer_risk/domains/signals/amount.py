"""Amount-based signals: rolling totals and deviation from the sender's baseline."""

from collections.abc import Iterable
from datetime import datetime, timedelta
from decimal import Decimal

from transfer_risk.shared.money import abs_deviation, money_sum, points

from ..models import TransferRequest, TransferStatus
from .base import RiskRule, ScoringProbe


async def rolling_total_with(
    store,
    request: TransferRequest,
    now: datetime,
    window: timedelta,
    statuses: Iterable[TransferStatus],
) -> Decimal:
    """Sender's same-currency total over ``window`` plus the request amount."""
    prior = await store.sum_transfer_amounts(
        from_account_id=request.from_account_id,
        currency=request.currency,
        statuses=tuple(statuses),
        since=now - window,
    )
    return money_sum(prior, request.amount)


class AmountDeviationProbe(ScoringProbe):
    """One point per ``points_per`` units of distance from the sender's average.

    The average covers COMPLETED transfers in the lookback window. With no
    history the average is zero, so the whole amount counts as deviation.
    """

    rule = RiskRule.UNUSUAL_AMOUNT

    def __init__(
        self,
        store,
        lookback: timedelta = timedelta(days=7),
        points_per: Decimal = Decimal("100"),
        cap: int = 100,
        trigger_score: int = 50,
    ) -> None:
        super().__init__(store, trigger_score)
        self._lookback = lookback
        self._points_per = points_per
        self._cap = cap

    async def measure(self, request: TransferRequest, now: datetime) -> int:
        average = await self._store.average_transfer_amount(
            from_account_id=request.from_account_id,
            statuses=(TransferStatus.COMPLETED,),
            since=now - self._lookback,
        )
        deviation = abs_deviation(request.amount, average)
        return points(deviation, self._points_per, cap=self._cap)
