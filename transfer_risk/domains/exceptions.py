"""Error taxonomy for the risk core.

Blocking verdicts (limit exceeded, structuring, sanctions) are results, not
exceptions. Exceptions here are for conditions where no trustworthy verdict
can be produced.
"""


class RiskCoreError(Exception):
    """Base exception for the risk core."""


class StoreUnavailableError(RiskCoreError):
    """A read against the transfer/account/user store timed out or failed."""

    def __init__(self, operation: str, detail: str = "") -> None:
        self.operation = operation
        self.detail = detail
        message = f"store operation '{operation}' unavailable"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class ComplianceCheckUnavailableError(RiskCoreError):
    """A hard compliance check could not read its inputs.

    Raised instead of returning a compliant verdict so the caller blocks by
    default.
    """

    def __init__(self, check_id: str, cause: StoreUnavailableError) -> None:
        self.check_id = check_id
        self.cause = cause
        super().__init__(f"compliance check '{check_id}' could not complete: {cause}")


class AccountNotFoundError(RiskCoreError, LookupError):
    """Account risk was requested for an account that does not exist."""

    def __init__(self, account_id: str) -> None:
        self.account_id = account_id
        super().__init__(f"Account not found: {account_id}")


class DuplicateAlertError(RiskCoreError):
    """An alert with the same idempotency key was already recorded."""

    def __init__(self, idempotency_key: str) -> None:
        self.idempotency_key = idempotency_key
        super().__init__(f"duplicate alert for key {idempotency_key}")
