from __future__ import annotations

from datetime import date, timedelta

import pytest

from backend.domain.notifications import (
    NotificationConfigError,
    plan_dispatch,
    should_dispatch,
    weekday_index,
)
from backend.models import ContractRecord
from backend.schemas.expiration import NotificationSchedule

TODAY = date(2025, 3, 10)  # Monday


def contract(contract_id: str, days_out: int) -> ContractRecord:
    return ContractRecord(
        id=contract_id,
        fullName=f"Empleado {contract_id}",
        identificationNumber=f"10{contract_id}",
        endDate=TODAY + timedelta(days=days_out),
    )


def schedule(**overrides) -> NotificationSchedule:
    fields = {
        "isEnabled": True,
        "sendDaysOfWeek": [1, 3, 5],
        "sendTime": "08:00",
        "recipientEmails": ["rrhh@example.com", "legal@example.com"],
        "daysBeforeExpiration": [7, 30, 14],
    }
    fields.update(overrides)
    return NotificationSchedule(**fields)


def test_weekday_index_starts_on_sunday():
    assert weekday_index(TODAY) == 1
    assert weekday_index(TODAY - timedelta(days=1)) == 0
    assert weekday_index(TODAY + timedelta(days=5)) == 6


def test_manual_runs_always_proceed():
    assert should_dispatch(schedule(isEnabled=False), TODAY, manual=True).proceed


def test_automatic_run_requires_enabled_schedule():
    decision = should_dispatch(schedule(isEnabled=False), TODAY, manual=False)

    assert not decision.proceed
    assert "disabled" in decision.reason


def test_automatic_run_requires_send_day():
    assert should_dispatch(schedule(), TODAY, manual=False).proceed
    assert not should_dispatch(schedule(sendDaysOfWeek=[0, 6]), TODAY, manual=False).proceed


def test_sections_are_ordered_from_largest_lead_time():
    contracts = [contract("a", 7), contract("b", 30), contract("c", 14), contract("d", 10)]

    plan = plan_dispatch(contracts, schedule(), TODAY)

    assert plan.send
    assert [section.daysBefore for section in plan.sections] == [30, 14, 7]
    assert plan.total_contracts == 3
    assert plan.subject == "Notificación de Vencimiento de Contratos - 10/03/2025"


def test_records_cover_every_recipient():
    plan = plan_dispatch([contract("a", 7)], schedule(), TODAY)

    assert [(r.contractId, r.daysBeforeExpiration, r.recipientEmail) for r in plan.records] == [
        ("a", 7, "rrhh@example.com"),
        ("a", 7, "legal@example.com"),
    ]
    assert plan.records[0].expirationDate == TODAY + timedelta(days=7)


def test_already_notified_contracts_are_skipped():
    contracts = [contract("a", 7), contract("b", 7)]

    plan = plan_dispatch(contracts, schedule(), TODAY, already_sent=[("a", 7)])

    assert [entry.id for entry in plan.sections[0].contracts] == ["b"]


def test_nothing_due_needs_no_recipients():
    plan = plan_dispatch([contract("a", 3)], schedule(recipientEmails=[]), TODAY)

    assert not plan.send
    assert plan.sections == []


def test_due_contracts_without_recipients_is_a_config_error():
    with pytest.raises(NotificationConfigError):
        plan_dispatch([contract("a", 7)], schedule(recipientEmails=[]), TODAY)


def test_schedule_validation():
    assert schedule(sendDaysOfWeek=[5, 1, 5]).sendDaysOfWeek == [1, 5]
    assert schedule(daysBeforeExpiration=[14, 7, 14]).daysBeforeExpiration == [7, 14]
    with pytest.raises(ValueError):
        schedule(sendDaysOfWeek=[7])
    with pytest.raises(ValueError):
        schedule(sendTime="8am")
