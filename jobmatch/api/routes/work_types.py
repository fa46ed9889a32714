"""
工作類型相關 API 路由
"""
from typing import Annotated, List
from fastapi import APIRouter, Depends, HTTPException, Query

from jobmatch.api.dependencies import get_save_coordinator, get_work_type_service, to_http_exception
from jobmatch.models.schemas import (
    CreateWorkTypeRequest,
    SaveSchedulesRequest,
    UpdateWorkTypeRequest,
    WorkType,
)
from jobmatch.scheduling.slots import format_schedule
from jobmatch.services.save_coordinator import SaveCoordinator
from jobmatch.services.work_type_service import WorkTypeService

router = APIRouter(prefix="/api/work-types", tags=["工作類型"])


@router.post("", response_model=WorkType, status_code=201)
def create_work_type(
    work_type_data: CreateWorkTypeRequest,
    work_type_service: Annotated[WorkTypeService, Depends(get_work_type_service)]
):
    """建立工作類型"""
    try:
        return work_type_service.create_work_type(work_type_data)
    except Exception as e:
        raise to_http_exception(e, "建立工作類型")


@router.get("", response_model=List[WorkType])
def get_work_types(
    work_type_service: Annotated[WorkTypeService, Depends(get_work_type_service)],
    employer_id: str = Query(..., description="雇主 ID"),
    include_inactive: bool = Query(False, description="是否包含停用的工作類型")
):
    """取得雇主的工作類型（新到舊）"""
    try:
        return work_type_service.get_work_types_by_employer(employer_id, include_inactive=include_inactive)
    except Exception as e:
        raise to_http_exception(e, "取得工作類型")


@router.get("/{work_type_id}", response_model=WorkType)
def get_work_type(
    work_type_id: str,
    work_type_service: Annotated[WorkTypeService, Depends(get_work_type_service)]
):
    """取得特定工作類型"""
    work_type = work_type_service.get_work_type(work_type_id)
    if not work_type:
        raise HTTPException(status_code=404, detail="工作類型不存在")
    return work_type


@router.patch("/{work_type_id}", response_model=WorkType)
def update_work_type(
    work_type_id: str,
    updates: UpdateWorkTypeRequest,
    work_type_service: Annotated[WorkTypeService, Depends(get_work_type_service)],
    save_coordinator: Annotated[SaveCoordinator, Depends(get_save_coordinator)]
):
    """更新工作類型"""
    try:
        with save_coordinator.saving(f"work_type:{work_type_id}"):
            work_type = work_type_service.update_work_type(work_type_id, updates)
    except Exception as e:
        raise to_http_exception(e, "更新工作類型")
    if not work_type:
        raise HTTPException(status_code=404, detail="工作類型不存在")
    return work_type


@router.put("/{work_type_id}/schedules", response_model=WorkType)
def save_work_type_schedules(
    work_type_id: str,
    request: SaveSchedulesRequest,
    work_type_service: Annotated[WorkTypeService, Depends(get_work_type_service)],
    save_coordinator: Annotated[SaveCoordinator, Depends(get_save_coordinator)]
):
    """儲存工作類型班表（連續時段會合併）"""
    try:
        with save_coordinator.saving(f"work_type:{work_type_id}"):
            work_type = work_type_service.update_schedules(work_type_id, request.schedules)
    except Exception as e:
        raise to_http_exception(e, "儲存班表")
    if not work_type:
        raise HTTPException(status_code=404, detail="工作類型不存在")
    return work_type


@router.get("/{work_type_id}/schedule-text")
def get_work_type_schedule_text(
    work_type_id: str,
    work_type_service: Annotated[WorkTypeService, Depends(get_work_type_service)]
):
    """取得班表文字（例如：一 09:00-17:00）"""
    work_type = work_type_service.get_work_type(work_type_id)
    if not work_type:
        raise HTTPException(status_code=404, detail="工作類型不存在")
    return {"work_type_id": work_type.id, "schedule": format_schedule(work_type.schedules)}


@router.delete("/{work_type_id}", status_code=204)
def delete_work_type(
    work_type_id: str,
    work_type_service: Annotated[WorkTypeService, Depends(get_work_type_service)],
    save_coordinator: Annotated[SaveCoordinator, Depends(get_save_coordinator)]
):
    """刪除工作類型"""
    try:
        with save_coordinator.saving(f"work_type:{work_type_id}"):
            deleted = work_type_service.delete_work_type(work_type_id)
    except Exception as e:
        raise to_http_exception(e, "刪除工作類型")
    if not deleted:
        raise HTTPException(status_code=404, detail="工作類型不存在")
