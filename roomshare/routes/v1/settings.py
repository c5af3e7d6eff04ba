# roomshare/routes/v1/settings.py
"""Booking settings routes - API v1."""

import asyncio
import logging

from fastapi import APIRouter, Body, Depends

from ...api.dependencies import get_current_principal, get_settings_service, require_admin
from ...core.exceptions import DomainException
from ...principal import CallerPrincipal
from ...schemas.settings import SettingsResponse, SettingsUpdate
from ...services.settings_service import SettingsService
from .bookings import handle_domain_exception

logger = logging.getLogger(__name__)

router = APIRouter(tags=["settings-v1"])


@router.get("", response_model=SettingsResponse)
async def get_settings(
    principal: CallerPrincipal = Depends(get_current_principal),
    settings_service: SettingsService = Depends(get_settings_service),
) -> SettingsResponse:
    snapshot = await asyncio.to_thread(settings_service.get_snapshot)
    return SettingsResponse.model_validate(snapshot)


@router.put("", response_model=SettingsResponse)
async def update_settings(
    principal: CallerPrincipal = Depends(require_admin),
    payload: SettingsUpdate = Body(...),
    settings_service: SettingsService = Depends(get_settings_service),
) -> SettingsResponse:
    try:
        snapshot = await asyncio.to_thread(
            settings_service.update_settings, principal, **payload.model_dump()
        )
        return SettingsResponse.model_validate(snapshot)
    except DomainException as e:
        handle_domain_exception(e)
