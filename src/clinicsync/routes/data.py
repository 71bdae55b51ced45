# src/clinicsync/routes/data.py
from fastapi import APIRouter, Depends, Request
from typing import Any
from clinicsync.dependencies.session_deps import get_clinic_data, get_session_id
from clinicsync.schemas.base_schemas import ResponseBase
from clinicsync.schemas.snapshot_schemas import ClinicSnapshot
from clinicsync.services.clinic_data_service import ClinicDataService
from clinicsync.utils.logger import setup_logger

router = APIRouter(prefix="/data", tags=["data"])
logger = setup_logger("DATA_ROUTES")


@router.post("/refresh", response_model=ResponseBase, summary="Reload from the remote store")
async def refresh(data: ClinicDataService = Depends(get_clinic_data)) -> Any:
    await data.refresh()
    return ResponseBase(message="Clinic data reloaded")


@router.get("/export", response_model=ClinicSnapshot, summary="Export all clinic data")
async def export_snapshot(data: ClinicDataService = Depends(get_clinic_data)) -> Any:
    return data.export_snapshot()


@router.post(
    "/restore",
    response_model=ResponseBase,
    summary="Restore clinic data",
    description="Replace every row of the session with the posted snapshot",
)
async def restore(
    snapshot: ClinicSnapshot,
    data: ClinicDataService = Depends(get_clinic_data),
) -> Any:
    logger.info(f"Restoring snapshot for session {data.owner_id}")
    await data.restore(snapshot)
    return ResponseBase(message="Clinic data restored")


@router.delete(
    "/session",
    response_model=ResponseBase,
    summary="Release the session's loaded data",
    description="The next request for the session reloads it from the remote store",
)
async def release_session(request: Request, session_id: str = Depends(get_session_id)) -> Any:
    released = request.app.state.registry.evict(session_id)
    return ResponseBase(
        message="Clinic data released" if released else "Clinic data was not loaded"
    )
