# src/clinicsync/routes/settings.py
from fastapi import APIRouter, Depends
from typing import Any
from clinicsync.dependencies.session_deps import get_settings_store
from clinicsync.schemas.settings_schemas import (
    ClinicInfo,
    MessageTemplate,
    MessageTemplateUpdate,
)
from clinicsync.services.settings_service import SettingsStore, TEMPLATE_KEYS
from clinicsync.utils.exceptions import BadRequestException, NotFoundException

router = APIRouter(prefix="/settings", tags=["settings"])


@router.get("/clinic-info", response_model=ClinicInfo)
async def get_clinic_info(store: SettingsStore = Depends(get_settings_store)) -> Any:
    return store.clinic_info


@router.put("/clinic-info", response_model=ClinicInfo)
async def update_clinic_info(
    info: ClinicInfo, store: SettingsStore = Depends(get_settings_store)
) -> Any:
    return store.update_clinic_info(info)


@router.get("/templates/{name}", response_model=MessageTemplate)
async def get_template(name: str, store: SettingsStore = Depends(get_settings_store)) -> Any:
    if name not in TEMPLATE_KEYS:
        raise NotFoundException(f"Message template '{name}' not found")
    return MessageTemplate(name=name, template=store.get_template(name))


@router.put("/templates/{name}", response_model=MessageTemplate)
async def update_template(
    name: str,
    payload: MessageTemplateUpdate,
    store: SettingsStore = Depends(get_settings_store),
) -> Any:
    if name not in TEMPLATE_KEYS:
        raise NotFoundException(f"Message template '{name}' not found")
    if payload.template is None:
        raise BadRequestException("template is required")
    return MessageTemplate(name=name, template=store.update_template(name, payload.template))
