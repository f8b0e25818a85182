"""
Admin Settings Router

Store configuration backed by `app_settings` rows.
"""
from fastapi import APIRouter, Depends, HTTPException

from core.notifications import Notifier
from core.routers.deps import get_context, get_notifier, require_ok
from core.routers.serializers import settings_to_dict
from core.services.app_settings import SETTING_KEYS
from .models import UpdateSettingRequest, UpdateSettingsRequest

router = APIRouter(tags=["admin-settings"])


@router.get("/settings")
async def admin_get_settings(refresh: bool = False, ctx=Depends(get_context)):
    domain = ctx.db.settings
    if refresh:
        require_ok(await domain.fetch())
    return {"settings": settings_to_dict(domain.settings), "keys": list(SETTING_KEYS)}


@router.put("/settings/{key}")
async def admin_update_setting(
    key: str,
    request: UpdateSettingRequest,
    ctx=Depends(get_context),
    notifier: Notifier = Depends(get_notifier),
):
    if key not in SETTING_KEYS:
        raise HTTPException(status_code=404, detail=f"Configuración desconocida: {key}")
    settings = require_ok(await ctx.db.settings.update_setting(key, request.value))
    notifier.success("Configuración guardada")
    return {"success": True, "settings": settings_to_dict(settings), "notifications": notifier.drain()}


@router.patch("/settings")
async def admin_update_settings(
    request: UpdateSettingsRequest,
    ctx=Depends(get_context),
    notifier: Notifier = Depends(get_notifier),
):
    """Save a whole settings form; stops at the first failing key."""
    unknown = [key for key in request.values if key not in SETTING_KEYS]
    if unknown:
        raise HTTPException(status_code=400, detail=f"Configuración desconocida: {', '.join(unknown)}")

    domain = ctx.db.settings
    for key, value in request.values.items():
        result = await domain.update_setting(key, value)
        if not result.success:
            notifier.error(f"Error al guardar {key}")
            raise HTTPException(status_code=502, detail=result.error)

    notifier.success("Configuración guardada")
    return {"success": True, "settings": settings_to_dict(domain.settings), "notifications": notifier.drain()}
