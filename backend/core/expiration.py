"""Contracts reaching a configured notification lead time."""

from __future__ import annotations

import logging
from datetime import date, datetime, timedelta
from typing import Iterable, List, Optional, Union

from backend import config
from backend.models import ContractRecord, ExpirationNotificationConfig
from backend.schemas.expiration import ExpiringContractEntry, UrgencyBand

logger = logging.getLogger(__name__)

URGENT_MAX_DAYS = 7
WARNING_MAX_DAYS = 14


def _as_date(value: Union[date, datetime]) -> date:
    return value.date() if isinstance(value, datetime) else value


def days_remaining(end_date: Union[date, datetime], today: Union[date, datetime]) -> int:
    """Whole calendar days from ``today`` until ``end_date``; time of day is dropped."""
    return (_as_date(end_date) - _as_date(today)).days


def urgency_band(days: int) -> UrgencyBand:
    if days <= URGENT_MAX_DAYS:
        return "urgent"
    if days <= WARNING_MAX_DAYS:
        return "warning"
    return "info"


def to_entry(contract: ContractRecord, days: int) -> ExpiringContractEntry:
    return ExpiringContractEntry(
        id=contract.id,
        fullName=contract.fullName,
        identificationNumber=contract.identificationNumber,
        companyName=contract.companyName or config.MISSING_COMPANY_LABEL,
        endDate=contract.endDate,
        daysRemaining=days,
    )


def scan(
    contracts: Iterable[ContractRecord],
    notification_config: Optional[ExpirationNotificationConfig],
    today: date,
    *,
    limit: int = 10,
) -> List[ExpiringContractEntry]:
    """
    Select the contracts whose remaining days equal one of the configured lead times.

    Contracts are expected to be pre-filtered by the caller (approved, not
    archived, with an end date). The result is ordered by end date, then id,
    and capped at ``limit`` entries.
    """
    thresholds = set(notification_config.daysBeforeExpiration) if notification_config else set()
    if not thresholds:
        return []

    today = _as_date(today)
    window_end = today + timedelta(days=max(thresholds))

    entries: List[ExpiringContractEntry] = []
    for contract in contracts:
        if not today <= contract.endDate <= window_end:
            continue
        days = days_remaining(contract.endDate, today)
        if days in thresholds:
            entries.append(to_entry(contract, days))

    entries.sort(key=lambda entry: (entry.endDate, entry.id))
    logger.debug(
        "expiration scan matched %d contract(s) for thresholds %s",
        len(entries),
        sorted(thresholds),
    )
    return entries[: max(limit, 0)]
