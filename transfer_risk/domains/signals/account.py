"""Account-level primitives: age and KYC standing."""

from datetime import datetime

from ..models import Account, User

SECONDS_PER_DAY = 86_400


def account_age_days(account: Account, now: datetime) -> float:
    return (now - account.created_at).total_seconds() / SECONDS_PER_DAY


def is_kyc_verified(user: User | None) -> bool:
    """Unknown users are treated as unverified."""
    return user is not None and user.is_verified
