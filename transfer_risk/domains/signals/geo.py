"""Geography signals: sanctioned-country screening and IP location risk.

The location probe is a placeholder heuristic for a real IP-reputation
service. It uses platform-wide volume and a private-range check, and it fails
open on any error.
"""

import asyncio
import ipaddress
from collections.abc import Iterable
from datetime import datetime, timedelta

from pydantic import BaseModel

from ..models import TransferRequest
from .base import RiskRule, ScoringProbe

RFC1918_NETWORKS = (
    ipaddress.ip_network("10.0.0.0/8"),
    ipaddress.ip_network("172.16.0.0/12"),
    ipaddress.ip_network("192.168.0.0/16"),
)


def is_private_range(ip: str) -> bool:
    """True for RFC1918 IPv4 addresses; unparseable input is not private."""
    try:
        address = ipaddress.ip_address(ip.strip())
    except ValueError:
        return False
    return any(address in network for network in RFC1918_NETWORKS)


class SanctionsHit(BaseModel):
    side: str  # "sender" | "recipient"
    account_id: str
    country: str


class SanctionsProbe:
    """Matches the owning users' countries of both accounts against a sanctions set.

    Missing accounts or countries never match.
    """

    def __init__(self, store, sanctioned_countries: Iterable[str]) -> None:
        self._store = store
        self._countries = frozenset(c.upper() for c in sanctioned_countries)

    async def screen(self, from_account_id: str, to_account_id: str) -> list[SanctionsHit]:
        # A failed lookup cancels its sibling and surfaces unwrapped
        try:
            async with asyncio.TaskGroup() as tg:
                sender_task = tg.create_task(self._store.get_account(from_account_id))
                recipient_task = tg.create_task(self._store.get_account(to_account_id))
        except ExceptionGroup as group:
            raise group.exceptions[0] from None
        sender, recipient = sender_task.result(), recipient_task.result()

        hits: list[SanctionsHit] = []
        for side, account_id, account in (
            ("sender", from_account_id, sender),
            ("recipient", to_account_id, recipient),
        ):
            country = (account.country or "").upper() if account else ""
            if country and country in self._countries:
                hits.append(SanctionsHit(side=side, account_id=account_id, country=country))
        return hits


class LocationProbe(ScoringProbe):
    rule = RiskRule.HIGH_RISK_LOCATION
    fail_open_on = (Exception,)

    def __init__(
        self,
        store,
        window: timedelta = timedelta(hours=24),
        high_volume: int = 50,
        high_volume_points: int = 40,
        elevated_volume: int = 20,
        elevated_volume_points: int = 20,
        private_range_points: int = 10,
        cap: int = 100,
        trigger_score: int = 50,
    ) -> None:
        super().__init__(store, trigger_score)
        self._window = window
        self._high_volume = high_volume
        self._high_volume_points = high_volume_points
        self._elevated_volume = elevated_volume
        self._elevated_volume_points = elevated_volume_points
        self._private_range_points = private_range_points
        self._cap = cap

    def applies_to(self, request: TransferRequest) -> bool:
        return bool(request.ip_address)

    async def measure(self, request: TransferRequest, now: datetime) -> int:
        # Platform-wide volume stands in for per-IP volume until an IP service exists
        volume = await self._store.count_transfers(since=now - self._window)

        score = 0
        if volume > self._high_volume:
            score += self._high_volume_points
        elif volume > self._elevated_volume:
            score += self._elevated_volume_points

        if is_private_range(request.ip_address or ""):
            score += self._private_range_points

        return min(score, self._cap)
