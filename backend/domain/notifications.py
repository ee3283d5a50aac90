from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Collection, Dict, Iterable, List, Tuple

from backend.core.expiration import days_remaining, to_entry
from backend.models import ContractRecord
from backend.schemas.expiration import (
    DispatchPlan,
    ExpiringContractEntry,
    NotificationSchedule,
    NotificationSection,
    SentNotification,
)

logger = logging.getLogger(__name__)

SUBJECT_PREFIX = "Notificación de Vencimiento de Contratos"


class NotificationConfigError(ValueError):
    pass


@dataclass
class DispatchDecision:
    proceed: bool
    reason: str


def weekday_index(day: date) -> int:
    """0 = Sunday ... 6 = Saturday."""
    return (day.weekday() + 1) % 7


def format_date_co(day: date) -> str:
    return day.strftime("%d/%m/%Y")


def should_dispatch(schedule: NotificationSchedule, today: date, *, manual: bool) -> DispatchDecision:
    if manual:
        return DispatchDecision(proceed=True, reason="manual run")
    if not schedule.isEnabled:
        return DispatchDecision(proceed=False, reason="automatic dispatch disabled")
    weekday = weekday_index(today)
    if weekday not in schedule.sendDaysOfWeek:
        return DispatchDecision(proceed=False, reason=f"day {weekday} is not a scheduled send day")
    logger.info("scheduled dispatch on day %d (configured time %s)", weekday, schedule.sendTime)
    return DispatchDecision(proceed=True, reason="scheduled run")


def plan_dispatch(
    contracts: Iterable[ContractRecord],
    schedule: NotificationSchedule,
    today: date,
    already_sent: Collection[Tuple[str, int]] = (),
) -> DispatchPlan:
    """
    Group the contracts due for a notification today, one section per lead time.

    A contract is due for lead time N when it ends exactly N days from today
    and no notification for (contract, N) was recorded today. Sections are
    ordered from the largest lead time to the smallest.
    """
    contracts = list(contracts)
    sent = {(contract_id, days) for contract_id, days in already_sent}
    by_threshold: Dict[int, List[ExpiringContractEntry]] = {}

    for threshold in schedule.daysBeforeExpiration:
        due: List[ExpiringContractEntry] = []
        for contract in contracts:
            if days_remaining(contract.endDate, today) != threshold:
                continue
            if (contract.id, threshold) in sent:
                logger.info("contract %s already notified for %d day(s)", contract.id, threshold)
                continue
            due.append(to_entry(contract, threshold))
        if due:
            by_threshold[threshold] = due

    if not by_threshold:
        return DispatchPlan(send=False, reason="no contracts due for notification")

    if not schedule.recipientEmails:
        raise NotificationConfigError("no recipient e-mails configured")

    sections = [
        NotificationSection(daysBefore=threshold, contracts=by_threshold[threshold])
        for threshold in sorted(by_threshold, reverse=True)
    ]
    records = [
        SentNotification(
            contractId=entry.id,
            daysBeforeExpiration=section.daysBefore,
            expirationDate=entry.endDate,
            recipientEmail=email,
        )
        for section in sections
        for entry in section.contracts
        for email in schedule.recipientEmails
    ]

    plan = DispatchPlan(
        send=True,
        reason="contracts due for notification",
        subject=f"{SUBJECT_PREFIX} - {format_date_co(today)}",
        sections=sections,
        records=records,
    )
    logger.info(
        "dispatch planned: %d contract(s) in %d section(s) to %d recipient(s)",
        plan.total_contracts,
        len(sections),
        len(schedule.recipientEmails),
    )
    return plan
