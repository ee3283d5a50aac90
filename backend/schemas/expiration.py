"""Data contracts for the expiration scan and notification dispatch."""

from datetime import date
from typing import List, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator

from backend.models import ContractRecord, ExpirationNotificationConfig

UrgencyBand = Literal["urgent", "warning", "info"]


class ExpiringContractEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    fullName: str
    identificationNumber: str
    companyName: str
    endDate: date
    daysRemaining: int


class ScanRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    contracts: List[ContractRecord] = Field(default_factory=list)
    config: Optional[ExpirationNotificationConfig] = None
    today: Optional[date] = None


class ScanEntry(ExpiringContractEntry):
    band: UrgencyBand


class ScanResponse(BaseModel):
    entries: List[ScanEntry]


class NotificationSchedule(BaseModel):
    """Settings of the scheduled expiration e-mail."""

    model_config = ConfigDict(extra="forbid")

    isEnabled: bool = False
    # 0 = Sunday ... 6 = Saturday
    sendDaysOfWeek: List[int] = Field(default_factory=list)
    sendTime: str = Field(default="08:00", pattern=r"^([01]\d|2[0-3]):[0-5]\d$")
    recipientEmails: List[str] = Field(default_factory=list)
    daysBeforeExpiration: List[int] = Field(default_factory=lambda: [14])

    @model_validator(mode="after")
    def ensure_validity(self) -> "NotificationSchedule":
        bad_days = [day for day in self.sendDaysOfWeek if not 0 <= day <= 6]
        if bad_days:
            raise ValueError(f"sendDaysOfWeek must be between 0 and 6, got {bad_days}")
        self.sendDaysOfWeek = sorted(set(self.sendDaysOfWeek))
        self.daysBeforeExpiration = ExpirationNotificationConfig(
            daysBeforeExpiration=self.daysBeforeExpiration
        ).daysBeforeExpiration
        return self


class NotificationSection(BaseModel):
    daysBefore: int
    contracts: List[ExpiringContractEntry]


class SentNotification(BaseModel):
    contractId: str
    daysBeforeExpiration: int
    expirationDate: date
    recipientEmail: str


class DispatchPlan(BaseModel):
    send: bool
    reason: str
    subject: Optional[str] = None
    sections: List[NotificationSection] = Field(default_factory=list)
    records: List[SentNotification] = Field(default_factory=list)

    @property
    def total_contracts(self) -> int:
        return sum(len(section.contracts) for section in self.sections)


class DispatchRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    schedule: NotificationSchedule
    contracts: List[ContractRecord] = Field(default_factory=list)
    # (contractId, daysBeforeExpiration) pairs already notified today
    alreadySent: List[Tuple[str, int]] = Field(default_factory=list)
    manual: bool = True
    today: Optional[date] = None
