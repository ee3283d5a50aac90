"""Legal renewal risk of fixed-term contracts.

Rules are evaluated in strict priority order, first match wins:

  1) tenure already requires an indefinite contract         -> danger
  2) the proposed renewal pushes tenure past the ceiling     -> danger
  3) the next period is the minimum-duration renewal         -> warning
  4) tenure (with the renewal) is approaching the ceiling    -> warning
  5) otherwise                                               -> success
"""

from __future__ import annotations

import logging
from datetime import date
from decimal import ROUND_HALF_UP, Decimal, localcontext
from math import isfinite
from typing import Optional

from backend.models import ContractRenewalStatus, RenewalRules, default_rules
from backend.schemas.compliance import LegalAlert, StatusSummary

logger = logging.getLogger(__name__)


def format_years(value: float) -> str:
    """Round half-up to one decimal (3.25 -> "3.3")."""
    if not isfinite(value):
        return str(value)
    exact = Decimal(repr(value))
    with localcontext() as ctx:
        # quantize needs room for every integer digit plus the decimal
        ctx.prec = max(28, exact.adjusted() + 3)
        return str(exact.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def _format_limit(value: float) -> str:
    return f"{value:g}"


def extension_days(proposed_end_date: date, start: date) -> int:
    """Whole days between ``start`` and the proposed end date (may be negative)."""
    return (proposed_end_date - start).days


def projected_total_years(
    status: ContractRenewalStatus,
    proposed_end_date: Optional[date],
    today: date,
    rules: Optional[RenewalRules] = None,
) -> float:
    """Tenure in years once the proposed renewal runs to its end date."""
    if proposed_end_date is None:
        return status.totalYearsWorked

    rules = rules or default_rules()
    days = extension_days(proposed_end_date, today)
    return status.totalYearsWorked + days / rules.daysPerYear


def evaluate(
    status: ContractRenewalStatus,
    proposed_end_date: Optional[date] = None,
    *,
    today: date,
    rules: Optional[RenewalRules] = None,
) -> LegalAlert:
    """Classify the legal risk of renewing a fixed-term contract."""
    rules = rules or default_rules()
    projected = projected_total_years(status, proposed_end_date, today, rules)
    ceiling = _format_limit(rules.ceilingYears)

    if status.mustBeIndefinite:
        logger.debug("compliance rule fired: indefinite required (years=%s)", status.totalYearsWorked)
        return LegalAlert(
            type="danger",
            title="DEBE SER CONTRATO INDEFINIDO",
            message=(
                f"Con {format_years(status.totalYearsWorked)} años trabajados, "
                "la ley exige que sea contrato indefinido."
            ),
            prediction="No es posible hacer más prórrogas a término fijo.",
        )

    if projected > rules.ceilingYears:
        logger.debug("compliance rule fired: ceiling exceeded (projected=%s)", projected)
        return LegalAlert(
            type="danger",
            title=f"PRÓRROGA EXCEDE {ceiling} AÑOS",
            message=(
                f"Esta prórroga resultaría en {format_years(projected)} años totales. "
                "Por ley, debe ser contrato indefinido."
            ),
            prediction="Cambie a contrato indefinido en lugar de prórroga.",
        )

    if status.nextPeriod == rules.minimumDurationPeriod:
        logger.debug("compliance rule fired: minimum-duration renewal (next=%s)", status.nextPeriod)
        prediction = (
            f"Verifique que la duración sea mínimo {rules.minimumDurationDays} días."
            if proposed_end_date is not None
            else "La próxima prórroga debe ser mínimo 1 año."
        )
        return LegalAlert(
            type="warning",
            title=f"PRÓRROGA #{status.nextPeriod} - MÍNIMO 1 AÑO",
            message=(
                f"La próxima será la prórroga #{status.nextPeriod}. "
                "Por ley, debe ser mínimo de 1 año."
            ),
            prediction=prediction,
        )

    if projected > rules.approachingYears:
        logger.debug("compliance rule fired: approaching ceiling (projected=%s)", projected)
        return LegalAlert(
            type="warning",
            title=f"CERCA DEL LÍMITE DE {ceiling} AÑOS",
            message=(
                f"Con esta prórroga tendrá {format_years(projected)} años. "
                "Considere contrato indefinido."
            ),
            prediction=f"La siguiente prórroga podría exceder los {ceiling} años.",
        )

    logger.debug("compliance rule fired: renewal allowed (projected=%s)", projected)
    prediction = (
        f"Con esta prórroga: {format_years(projected)} años totales."
        if proposed_end_date is not None
        else "Sin restricciones especiales."
    )
    return LegalAlert(
        type="success",
        title="PRÓRROGA PERMITIDA",
        message=(
            "Puede hacer prórroga normal. "
            f"Actualmente {format_years(status.totalYearsWorked)} años trabajados."
        ),
        prediction=prediction,
    )


def status_summary(
    status: ContractRenewalStatus,
    proposed_end_date: Optional[date] = None,
    *,
    today: date,
    rules: Optional[RenewalRules] = None,
) -> StatusSummary:
    """Current period, next period, years worked and years with this renewal."""
    rules = rules or default_rules()
    projected = projected_total_years(status, proposed_end_date, today, rules)
    return StatusSummary(
        currentPeriod=status.currentPeriod,
        nextPeriod=status.nextPeriod,
        yearsWorked=format_years(status.totalYearsWorked),
        projectedYears=format_years(projected),
        projectedHighlighted=projected > rules.ceilingYears,
    )
