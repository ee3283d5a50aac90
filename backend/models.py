from __future__ import annotations

from datetime import date
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from backend import config


class RenewalRules(BaseModel):
    """Statutory limits for renewing a fixed-term contract."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    ceilingYears: float = Field(default=4.0, gt=0)
    approachingYears: float = Field(default=3.5, gt=0)
    minimumDurationPeriod: int = Field(default=5, ge=1)
    minimumDurationDays: int = Field(default=365, ge=1)
    daysPerYear: int = Field(default=365, ge=1)

    @model_validator(mode="after")
    def ensure_validity(self) -> "RenewalRules":
        if self.approachingYears > self.ceilingYears:
            raise ValueError("approachingYears must not exceed ceilingYears")
        return self


def default_rules() -> RenewalRules:
    return RenewalRules(
        ceilingYears=config.CEILING_YEARS,
        approachingYears=config.APPROACHING_YEARS,
        minimumDurationPeriod=config.MINIMUM_DURATION_PERIOD,
        minimumDurationDays=config.MINIMUM_DURATION_DAYS,
    )


class ContractRenewalStatus(BaseModel):
    # no range bounds: the evaluator reports whatever the arithmetic yields
    model_config = ConfigDict(extra="forbid")

    totalPeriods: int = 0
    currentPeriod: int = 0
    totalYearsWorked: float = 0.0
    nextPeriod: int = 0
    mustBeIndefinite: bool = False


class ExpirationNotificationConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    daysBeforeExpiration: List[int] = Field(default_factory=list)

    @model_validator(mode="after")
    def ensure_validity(self) -> "ExpirationNotificationConfig":
        negatives = [days for days in self.daysBeforeExpiration if days < 0]
        if negatives:
            raise ValueError(f"daysBeforeExpiration must be non-negative, got {negatives}")
        self.daysBeforeExpiration = sorted(set(self.daysBeforeExpiration))
        return self


class ContractRecord(BaseModel):
    """An approved, unarchived contract with an end date.

    ``fullName`` may be omitted when the split name columns are given.
    """

    model_config = ConfigDict(extra="forbid")

    id: str
    fullName: str = ""
    firstName: Optional[str] = None
    middleName: Optional[str] = None
    lastName: Optional[str] = None
    secondLastName: Optional[str] = None
    identificationNumber: str
    companyName: Optional[str] = None
    endDate: date

    @model_validator(mode="after")
    def ensure_validity(self) -> "ContractRecord":
        if not self.fullName.strip():
            self.fullName = compose_full_name(
                self.firstName, self.middleName, self.lastName, self.secondLastName
            )
        if not self.fullName:
            raise ValueError("fullName or at least one name part is required")
        return self


def compose_full_name(
    first: Optional[str],
    middle: Optional[str],
    last: Optional[str],
    second_last: Optional[str],
) -> str:
    """Join the stored name columns, skipping blanks."""
    parts = [part.strip() for part in (first, middle, last, second_last) if part and part.strip()]
    return " ".join(parts)
