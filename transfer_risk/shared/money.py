"""Decimal arithmetic for monetary amounts.

Every amount that is compared, added or subtracted inside the risk core goes
through these helpers. Binary floats are rejected outright: a float that
reaches this module has already lost precision somewhere upstream.
"""

from decimal import ROUND_FLOOR, ROUND_HALF_EVEN, Context, Decimal, localcontext

# 34 significant digits (IEEE decimal128) is far beyond any ledger amount.
MONEY_CONTEXT = Context(prec=34, rounding=ROUND_HALF_EVEN)

ZERO = Decimal("0")

AmountLike = Decimal | int | str


def to_decimal(value: AmountLike | None) -> Decimal:
    """Coerce a stored or submitted amount to Decimal.

    ``None`` (an empty SQL aggregate) becomes zero.
    """
    if value is None:
        return ZERO
    if isinstance(value, bool) or isinstance(value, float):
        raise TypeError(f"monetary amounts must not be {type(value).__name__}: {value!r}")
    if isinstance(value, Decimal):
        return value
    return Decimal(value)


def money_sum(*amounts: AmountLike | None) -> Decimal:
    """Exact sum of amounts; ``money_sum("0.1", "0.2") == Decimal("0.3")``."""
    with localcontext(MONEY_CONTEXT):
        total = ZERO
        for amount in amounts:
            total += to_decimal(amount)
        return total


def exceeds(total: AmountLike, limit: AmountLike) -> bool:
    """Strictly greater-than; an amount equal to the limit does not exceed it."""
    return to_decimal(total) > to_decimal(limit)


def abs_deviation(amount: AmountLike, reference: AmountLike | None) -> Decimal:
    with localcontext(MONEY_CONTEXT):
        return abs(to_decimal(amount) - to_decimal(reference))


def ratio(amount: AmountLike, reference: AmountLike) -> Decimal:
    with localcontext(MONEY_CONTEXT):
        return to_decimal(amount) / to_decimal(reference)


def is_multiple_of(amount: AmountLike, unit: AmountLike) -> bool:
    with localcontext(MONEY_CONTEXT):
        return to_decimal(amount) % to_decimal(unit) == ZERO


def points(value: AmountLike, per: AmountLike, cap: int | None = None) -> int:
    """Whole risk points for ``value``: one point per ``per`` units, floored.

    >>> points(Decimal("5150"), 100)
    51
    """
    with localcontext(MONEY_CONTEXT):
        whole = int((to_decimal(value) / to_decimal(per)).to_integral_value(rounding=ROUND_FLOOR))
    if cap is not None:
        whole = min(whole, cap)
    return whole
