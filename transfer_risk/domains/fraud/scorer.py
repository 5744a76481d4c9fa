"""Additive fraud scoring over independent signal probes."""

import asyncio
from datetime import UTC, datetime, timedelta

import structlog

from ..models import TransferRequest
from ..signals import (
    AmountDeviationProbe,
    DeviceProbe,
    LocationProbe,
    ScoringProbe,
    VelocityProbe,
)
from .config import FraudConfig, default_config
from .models import FraudScoreResult

logger = structlog.get_logger()


def build_probes(store, config: FraudConfig) -> list[ScoringProbe]:
    """Probes in reporting order: velocity, amount, location, device."""
    trigger = config.signal_trigger_score
    return [
        VelocityProbe(
            store,
            window=timedelta(minutes=config.velocity.window_minutes),
            points_per_transfer=config.velocity.points_per_transfer,
            trigger_score=trigger,
        ),
        AmountDeviationProbe(
            store,
            lookback=timedelta(days=config.amount.lookback_days),
            points_per=config.amount.points_per,
            cap=config.amount.cap,
            trigger_score=trigger,
        ),
        LocationProbe(
            store,
            window=timedelta(hours=config.location.window_hours),
            high_volume=config.location.high_volume,
            high_volume_points=config.location.high_volume_points,
            elevated_volume=config.location.elevated_volume,
            elevated_volume_points=config.location.elevated_volume_points,
            private_range_points=config.location.private_range_points,
            cap=config.location.cap,
            trigger_score=trigger,
        ),
        DeviceProbe(
            store,
            window=timedelta(days=config.device.window_days),
            failed_threshold=config.device.failed_threshold,
            failed_points=config.device.failed_points,
            min_device_id_length=config.device.min_device_id_length,
            short_id_points=config.device.short_id_points,
            cap=config.device.cap,
            trigger_score=trigger,
        ),
    ]


class FraudRiskScorer:
    """Sums probe scores; the transfer is allowed while the total stays below
    ``block_threshold``. Probes run concurrently and are reported in order.

    This is a recommendation only. Acting on ``allowed`` is the caller's job.
    """

    def __init__(
        self,
        store,
        config: FraudConfig | None = None,
        probes: list[ScoringProbe] | None = None,
    ) -> None:
        self._config = config or default_config
        self._probes = probes if probes is not None else build_probes(store, self._config)

    async def score(self, request: TransferRequest) -> FraudScoreResult:
        now = request.initiated_at or datetime.now(UTC)
        applicable = [probe for probe in self._probes if probe.applies_to(request)]

        signals = await asyncio.gather(*(probe.evaluate(request, now) for probe in applicable))

        total = sum(signal.score for signal in signals)
        rules = [signal.rule for signal in signals if signal.triggered]
        allowed = total < self._config.block_threshold

        logger.info(
            "transfer_fraud_scored",
            from_account_id=request.from_account_id,
            score=total,
            allowed=allowed,
            rules=[rule.value for rule in rules],
            failed_open=[s.rule.value for s in signals if s.failed],
        )

        return FraudScoreResult(score=total, allowed=allowed, rules=rules, signals=list(signals))
