"""HTTP routes for the Flask API."""

from datetime import date
from http import HTTPStatus
from typing import Any, Dict, Optional

from flask import Blueprint, current_app, jsonify, request
from pydantic import ValidationError

from backend import config
from backend.core.compliance import evaluate, status_summary
from backend.core.expiration import scan, urgency_band
from backend.domain.notifications import (
    NotificationConfigError,
    plan_dispatch,
    should_dispatch,
)
from backend.domain.renewal import RenewalValidationError, ensure_renewal_allowed
from backend.models import RenewalRules
from backend.schemas.compliance import (
    EvaluationRequest,
    RenewalValidationRequest,
    RenewalValidationResponse,
)
from backend.schemas.expiration import (
    DispatchPlan,
    DispatchRequest,
    ScanEntry,
    ScanRequest,
    ScanResponse,
)
from backend.schemas.health import HealthResponse

api_bp = Blueprint("api", __name__)


def _today(override: Optional[date] = None) -> date:
    return override or current_app.config["CLOCK"].today()


def _rules() -> RenewalRules:
    return current_app.config["RENEWAL_RULES"]


def _payload() -> Dict[str, Any]:
    return request.get_json(force=True, silent=False)


@api_bp.errorhandler(ValidationError)
def _handle_validation_error(exc: ValidationError):
    """Convert Pydantic validation errors into JSON responses."""
    return jsonify({"detail": exc.errors(include_url=False, include_context=False)}), HTTPStatus.UNPROCESSABLE_ENTITY


@api_bp.errorhandler(RenewalValidationError)
def _handle_renewal_error(exc: RenewalValidationError):
    return jsonify({"error": exc.errors}), HTTPStatus.BAD_REQUEST


@api_bp.errorhandler(NotificationConfigError)
def _handle_notification_config_error(exc: NotificationConfigError):
    current_app.logger.warning("dispatch rejected: %s", exc)
    return jsonify({"error": [str(exc)]}), HTTPStatus.BAD_REQUEST


@api_bp.get("/health")
def health() -> Any:
    """Health-check endpoint."""
    response = HealthResponse(
        status="ok",
        service="fixed-term-compliance",
        jurisdiction=config.JURISDICTION,
    )
    return jsonify(response.model_dump())


@api_bp.post("/compliance/evaluate")
def compliance_evaluate() -> Any:
    """Legal alert for a contract and an optional proposed renewal end date."""
    payload = EvaluationRequest.model_validate(_payload())
    alert = evaluate(payload.status, payload.proposedEndDate, today=_today(), rules=_rules())
    return jsonify(alert.model_dump())


@api_bp.post("/compliance/summary")
def compliance_summary() -> Any:
    payload = EvaluationRequest.model_validate(_payload())
    summary = status_summary(payload.status, payload.proposedEndDate, today=_today(), rules=_rules())
    return jsonify(summary.model_dump())


@api_bp.post("/compliance/validate-renewal")
def compliance_validate_renewal() -> Any:
    """Reject renewals that break the minimum-duration or ceiling limits."""
    payload = RenewalValidationRequest.model_validate(_payload())
    ensure_renewal_allowed(
        payload.status,
        payload.currentEndDate,
        payload.proposedEndDate,
        fixed_term=payload.fixedTerm,
        rules=_rules(),
    )
    return jsonify(RenewalValidationResponse(valid=True).model_dump())


@api_bp.post("/expirations/scan")
def expirations_scan() -> Any:
    """Contracts that hit one of the configured lead times today."""
    payload = ScanRequest.model_validate(_payload())
    entries = scan(
        payload.contracts,
        payload.config,
        _today(payload.today),
        limit=current_app.config["EXPIRATION_SCAN_LIMIT"],
    )
    response = ScanResponse(
        entries=[
            ScanEntry(**entry.model_dump(), band=urgency_band(entry.daysRemaining))
            for entry in entries
        ]
    )
    return jsonify(response.model_dump(mode="json"))


@api_bp.post("/expirations/dispatch")
def expirations_dispatch() -> Any:
    """Plan the expiration e-mail: who gets notified, grouped by lead time."""
    payload = DispatchRequest.model_validate(_payload())
    today = _today(payload.today)

    decision = should_dispatch(payload.schedule, today, manual=payload.manual)
    if not decision.proceed:
        plan = DispatchPlan(send=False, reason=decision.reason)
    else:
        plan = plan_dispatch(payload.contracts, payload.schedule, today, payload.alreadySent)

    body = plan.model_dump(mode="json")
    body["totalContracts"] = plan.total_contracts
    return jsonify(body)
