# roomshare/routes/v1/recurring_rules.py
"""
Recurring rule routes - API v1

Endpoints under /api/v1/recurring-rules, all ADMIN only:
    POST / - Create a weekly rule
    POST /{rule_id}/exceptions - Cancel one dated occurrence
    POST /{rule_id}/cancel - Cancel the whole series
"""

import asyncio
import logging

from fastapi import APIRouter, Body, Depends, status
from fastapi.params import Path

from ...api.dependencies import get_recurring_booking_service, require_admin
from ...core.exceptions import DomainException
from ...principal import CallerPrincipal
from ...schemas.recurring import OccurrenceCancel, RecurringRuleCreate, RecurringRuleResponse
from ...services.recurring_booking_service import RecurringBookingService
from .bookings import ULID_PATH_PATTERN, handle_domain_exception

logger = logging.getLogger(__name__)

router = APIRouter(tags=["recurring-rules-v1"])


@router.post(
    "",
    response_model=RecurringRuleResponse,
    status_code=status.HTTP_201_CREATED,
    responses={403: {"description": "Admin only"}, 409: {"description": "Time conflict"}},
)
async def create_recurring_rule(
    principal: CallerPrincipal = Depends(require_admin),
    rule_data: RecurringRuleCreate = Body(...),
    service: RecurringBookingService = Depends(get_recurring_booking_service),
) -> RecurringRuleResponse:
    try:
        rule = await asyncio.to_thread(
            service.create_rule,
            principal,
            room_id=rule_data.room_id,
            title=rule_data.title,
            notes=rule_data.notes,
            day_of_week=rule_data.day_of_week,
            start_minute=rule_data.start_minute,
            end_minute=rule_data.end_minute,
        )
        return RecurringRuleResponse.model_validate(rule)
    except DomainException as e:
        handle_domain_exception(e)


@router.post(
    "/{rule_id}/exceptions",
    response_model=RecurringRuleResponse,
    responses={404: {"description": "Rule not found"}},
)
async def cancel_recurring_occurrence(
    rule_id: str = Path(..., description="Rule ULID", pattern=ULID_PATH_PATTERN),
    principal: CallerPrincipal = Depends(require_admin),
    payload: OccurrenceCancel = Body(...),
    service: RecurringBookingService = Depends(get_recurring_booking_service),
) -> RecurringRuleResponse:
    """Suppress the occurrence on ``payload.date``. Repeating it is harmless."""
    try:
        rule = await asyncio.to_thread(service.cancel_occurrence, rule_id, payload.date, principal)
        return RecurringRuleResponse.model_validate(rule)
    except DomainException as e:
        handle_domain_exception(e)


@router.post(
    "/{rule_id}/cancel",
    response_model=RecurringRuleResponse,
    responses={404: {"description": "Rule not found"}},
)
async def cancel_recurring_series(
    rule_id: str = Path(..., description="Rule ULID", pattern=ULID_PATH_PATTERN),
    principal: CallerPrincipal = Depends(require_admin),
    service: RecurringBookingService = Depends(get_recurring_booking_service),
) -> RecurringRuleResponse:
    try:
        rule = await asyncio.to_thread(service.cancel_series, rule_id, principal)
        return RecurringRuleResponse.model_validate(rule)
    except DomainException as e:
        handle_domain_exception(e)
