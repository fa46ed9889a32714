"""
職缺相關 API 路由
"""
from typing import Annotated, List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query

from jobmatch.api.dependencies import get_job_post_service, get_save_coordinator, to_http_exception
from jobmatch.models.schemas import CreateJobPostRequest, JobPost, UpdateJobPostRequest
from jobmatch.services.job_post_service import JobPostService
from jobmatch.services.save_coordinator import SaveCoordinator

router = APIRouter(prefix="/api/job-posts", tags=["職缺"])


@router.post("", response_model=JobPost, status_code=201)
def create_job_post(
    job_post_data: CreateJobPostRequest,
    job_post_service: Annotated[JobPostService, Depends(get_job_post_service)]
):
    """建立職缺"""
    try:
        return job_post_service.create_job_post(job_post_data)
    except Exception as e:
        raise to_http_exception(e, "建立職缺")


@router.get("", response_model=List[JobPost])
def get_job_posts(
    job_post_service: Annotated[JobPostService, Depends(get_job_post_service)],
    employer_id: Optional[str] = Query(None, description="雇主 ID（未提供時取得所有開放中的職缺）")
):
    """取得職缺列表"""
    try:
        if employer_id:
            return job_post_service.get_job_posts_by_employer(employer_id)
        return job_post_service.get_active_job_posts()
    except Exception as e:
        raise to_http_exception(e, "取得職缺")


@router.get("/{job_post_id}", response_model=JobPost)
def get_job_post(
    job_post_id: str,
    job_post_service: Annotated[JobPostService, Depends(get_job_post_service)]
):
    """取得特定職缺"""
    job_post = job_post_service.get_job_post(job_post_id)
    if not job_post:
        raise HTTPException(status_code=404, detail="職缺不存在")
    return job_post


@router.patch("/{job_post_id}", response_model=JobPost)
def update_job_post(
    job_post_id: str,
    updates: UpdateJobPostRequest,
    job_post_service: Annotated[JobPostService, Depends(get_job_post_service)],
    save_coordinator: Annotated[SaveCoordinator, Depends(get_save_coordinator)]
):
    """更新職缺"""
    try:
        with save_coordinator.saving(f"job_post:{job_post_id}"):
            job_post = job_post_service.update_job_post(job_post_id, updates)
    except Exception as e:
        raise to_http_exception(e, "更新職缺")
    if not job_post:
        raise HTTPException(status_code=404, detail="職缺不存在")
    return job_post


@router.delete("/{job_post_id}", status_code=204)
def delete_job_post(
    job_post_id: str,
    job_post_service: Annotated[JobPostService, Depends(get_job_post_service)]
):
    """刪除職缺"""
    try:
        deleted = job_post_service.delete_job_post(job_post_id)
    except Exception as e:
        raise to_http_exception(e, "刪除職缺")
    if not deleted:
        raise HTTPException(status_code=404, detail="職缺不存在")
