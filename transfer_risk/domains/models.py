"""Pydantic models shared by the compliance, fraud and account-risk domains."""

from datetime import datetime
from decimal import Decimal
from enum import StrEnum

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field, field_validator


class TransferStatus(StrEnum):
    PENDING = "PENDING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"


class AlertType(StrEnum):
    AML = "AML"
    SANCTIONS = "SANCTIONS"
    HIGH_RISK_TRANSACTION = "HIGH_RISK_TRANSACTION"


class AlertSeverity(StrEnum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"


class AlertStatus(StrEnum):
    PENDING = "PENDING"
    RESOLVED = "RESOLVED"


class RiskLevel(StrEnum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"


class TransferMetadata(BaseModel):
    model_config = ConfigDict(frozen=True)

    ip_address: str | None = None
    device_id: str | None = None


class TransferRequest(BaseModel):
    """An outbound transfer about to be committed. Evaluated, never stored."""

    model_config = ConfigDict(frozen=True)

    from_account_id: str = Field(min_length=1)
    to_account_id: str = Field(min_length=1)
    # Matches the Numeric(20, 4) ledger column
    amount: Decimal = Field(gt=0, max_digits=20, decimal_places=4)
    currency: str = Field(pattern=r"^[A-Z]{3}$")
    user_id: str | None = None
    metadata: TransferMetadata | None = None
    initiated_at: AwareDatetime | None = None

    @field_validator("amount", mode="before")
    @classmethod
    def _float_via_repr(cls, value):
        # JSON numbers arrive as float; re-read their shortest repr so 0.1
        # stays 0.1 instead of 0.1000000000000000055511151231257827
        if isinstance(value, float):
            return Decimal(repr(value))
        return value

    @property
    def ip_address(self) -> str | None:
        return self.metadata.ip_address if self.metadata else None

    @property
    def device_id(self) -> str | None:
        return self.metadata.device_id if self.metadata else None


class Account(BaseModel):
    id: str
    user_id: str | None = None
    created_at: datetime
    country: str | None = None


class User(BaseModel):
    id: str
    kyc_status: str | None = None
    country: str | None = None

    @property
    def is_verified(self) -> bool:
        return self.kyc_status == "verified"


class TransferRecord(BaseModel):
    id: str
    from_account_id: str
    to_account_id: str
    amount: Decimal
    currency: str
    status: TransferStatus
    created_at: datetime


class ComplianceAlert(BaseModel):
    alert_id: str | None = None
    alert_type: AlertType
    severity: AlertSeverity
    account_id: str
    description: str
    status: AlertStatus = AlertStatus.PENDING
    metadata: dict = Field(default_factory=dict)
    idempotency_key: str | None = None
    created_at: datetime
