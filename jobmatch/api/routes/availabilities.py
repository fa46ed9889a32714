"""
求職者可工作時段相關 API 路由
"""
from typing import Annotated, List
from fastapi import APIRouter, Depends, Query

from jobmatch.api.dependencies import get_availability_service, get_save_coordinator, to_http_exception
from jobmatch.models.schemas import AvailabilitySummary, SaveAvailabilityRequest, TimeSlot, WorkerAvailability
from jobmatch.services.availability_service import WorkerAvailabilityService
from jobmatch.services.save_coordinator import SaveCoordinator

router = APIRouter(prefix="/api/workers/{worker_id}/availabilities", tags=["可工作時段"])


@router.get("", response_model=List[WorkerAvailability])
def get_availabilities(
    worker_id: str,
    availability_service: Annotated[WorkerAvailabilityService, Depends(get_availability_service)]
):
    """取得每小時可工作記錄"""
    try:
        return availability_service.get_worker_availabilities(worker_id)
    except Exception as e:
        raise to_http_exception(e, "取得可工作時段")


@router.put("", response_model=List[WorkerAvailability])
def save_availabilities(
    worker_id: str,
    request: SaveAvailabilityRequest,
    availability_service: Annotated[WorkerAvailabilityService, Depends(get_availability_service)],
    save_coordinator: Annotated[SaveCoordinator, Depends(get_save_coordinator)]
):
    """儲存可工作時段（覆蓋既有資料）"""
    try:
        with save_coordinator.saving(f"availability:{worker_id}"):
            return availability_service.save_worker_availabilities(worker_id, request.time_slots)
    except Exception as e:
        raise to_http_exception(e, "儲存可工作時段")


@router.delete("")
def delete_availabilities(
    worker_id: str,
    availability_service: Annotated[WorkerAvailabilityService, Depends(get_availability_service)],
    save_coordinator: Annotated[SaveCoordinator, Depends(get_save_coordinator)]
):
    """刪除所有可工作時段"""
    try:
        with save_coordinator.saving(f"availability:{worker_id}"):
            deleted = availability_service.delete_worker_availabilities(worker_id)
    except Exception as e:
        raise to_http_exception(e, "刪除可工作時段")
    return {"worker_id": worker_id, "deleted": deleted}


@router.get("/time-slots", response_model=List[TimeSlot])
def get_time_slots(
    worker_id: str,
    availability_service: Annotated[WorkerAvailabilityService, Depends(get_availability_service)],
    merged: bool = Query(True, description="是否合併連續時段")
):
    """取得以時段表示的可工作時間"""
    try:
        return availability_service.get_worker_time_slots(worker_id, merged=merged)
    except Exception as e:
        raise to_http_exception(e, "取得可工作時段")


@router.get("/summary", response_model=AvailabilitySummary)
def get_summary(
    worker_id: str,
    availability_service: Annotated[WorkerAvailabilityService, Depends(get_availability_service)]
):
    """取得可工作時段統計"""
    try:
        return availability_service.get_availability_summary(worker_id)
    except Exception as e:
        raise to_http_exception(e, "取得可工作時段統計")
