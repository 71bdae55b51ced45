# src/clinicsync/dependencies/session_deps.py
from fastapi import Depends, Header, HTTPException, Request, status
from clinicsync.core.config import settings
from clinicsync.services.clinic_data_service import ClinicDataService
from clinicsync.services.settings_service import SettingsStore


async def get_session_id(
    x_session_id: str = Header(None, alias=settings.SESSION_ID_HEADER),
) -> str:
    """The owning session is issued elsewhere; it is only received here"""
    if not x_session_id or not x_session_id.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Session identifier required. Provide the {settings.SESSION_ID_HEADER} header",
        )
    return x_session_id.strip()


async def get_clinic_data(
    request: Request,
    session_id: str = Depends(get_session_id),
) -> ClinicDataService:
    return await request.app.state.registry.get(session_id)


def get_settings_store(request: Request) -> SettingsStore:
    return request.app.state.settings_store
