"""Data contracts for the fixed-term compliance endpoints."""

from datetime import date
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from backend.models import ContractRenewalStatus

AlertType = Literal["success", "info", "warning", "danger"]


class LegalAlert(BaseModel):
    """Legal risk classification of a renewal. Styling is left to the caller."""

    model_config = ConfigDict(frozen=True)

    type: AlertType
    title: str
    message: str
    prediction: Optional[str] = None


class StatusSummary(BaseModel):
    """Display facts about a contract's renewal state."""

    model_config = ConfigDict(frozen=True)

    currentPeriod: int
    nextPeriod: int
    yearsWorked: str = Field(..., description="Current tenure, one decimal.")
    projectedYears: str = Field(..., description="Tenure including the proposed renewal, one decimal.")
    projectedHighlighted: bool = Field(..., description="True when the projection exceeds the ceiling.")


class EvaluationRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    status: ContractRenewalStatus
    proposedEndDate: Optional[date] = None


class RenewalValidationRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    status: ContractRenewalStatus
    currentEndDate: Optional[date] = None
    proposedEndDate: date
    fixedTerm: bool = True


class RenewalValidationResponse(BaseModel):
    valid: bool
