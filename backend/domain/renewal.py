from __future__ import annotations

from datetime import date
from typing import List, Optional

from backend.core.compliance import extension_days, format_years
from backend.models import ContractRenewalStatus, RenewalRules, default_rules


class RenewalValidationError(ValueError):
    def __init__(self, errors: List[str]):
        super().__init__("; ".join(errors))
        self.errors = errors


def renewal_number(status: ContractRenewalStatus) -> int:
    # the original term is period 1 and is not a renewal
    return status.nextPeriod - 1


def validate_renewal(
    status: ContractRenewalStatus,
    current_end_date: Optional[date],
    proposed_end_date: date,
    *,
    fixed_term: bool = True,
    rules: Optional[RenewalRules] = None,
) -> List[str]:
    """Check a renewal request before it is submitted. Returns error messages."""
    rules = rules or default_rules()
    errors: List[str] = []

    if current_end_date is not None and proposed_end_date <= current_end_date:
        errors.append("La nueva fecha debe ser posterior a la fecha actual de finalización")
        return errors

    if not fixed_term or current_end_date is None:
        return errors

    days = extension_days(proposed_end_date, current_end_date)
    number = renewal_number(status)

    if number >= rules.minimumDurationPeriod and days < rules.minimumDurationDays:
        errors.append(
            f"La prórroga #{number} debe ser mínimo de 1 año "
            f"({rules.minimumDurationDays} días). Actualmente son {days} días."
        )

    total_years = status.totalYearsWorked + days / rules.daysPerYear
    if total_years > rules.ceilingYears:
        errors.append(
            "No se puede prorrogar. Esta prórroga resultaría en "
            f"{format_years(total_years)} años totales. Después de "
            f"{rules.ceilingYears:g} años debe ser contrato indefinido."
        )

    return errors


def ensure_renewal_allowed(
    status: ContractRenewalStatus,
    current_end_date: Optional[date],
    proposed_end_date: date,
    *,
    fixed_term: bool = True,
    rules: Optional[RenewalRules] = None,
) -> None:
    errors = validate_renewal(
        status,
        current_end_date,
        proposed_end_date,
        fixed_term=fixed_term,
        rules=rules,
    )
    if errors:
        raise RenewalValidationError(errors)
