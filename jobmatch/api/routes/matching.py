"""
媒合相關 API 路由
"""
from typing import Annotated, List
from fastapi import APIRouter, Depends, HTTPException, Query

from jobmatch.api.dependencies import get_matching_service, to_http_exception
from jobmatch.config import RECOMMENDATION_LIMIT
from jobmatch.models.schemas import MatchingResult, ScoreRequest, ScoreResponse
from jobmatch.services.matching_service import MatchingService, score_time_slots

router = APIRouter(prefix="/api/matching", tags=["媒合"])


@router.post("/score", response_model=ScoreResponse)
def calculate_score(request: ScoreRequest):
    """以傳入的時段計算覆蓋率與加權分數（不存取資料庫）"""
    return score_time_slots(request.availabilities, request.requirements)


@router.get("/workers/{worker_id}/recommendations", response_model=List[MatchingResult])
def get_recommendations(
    worker_id: str,
    matching_service: Annotated[MatchingService, Depends(get_matching_service)],
    limit: int = Query(RECOMMENDATION_LIMIT, ge=1, le=100, description="最多筆數")
):
    """取得求職者的推薦職缺"""
    try:
        return matching_service.get_recommended_jobs(worker_id, limit=limit)
    except Exception as e:
        raise to_http_exception(e, "取得推薦職缺")


@router.get("/workers/{worker_id}/work-types/{work_type_id}", response_model=ScoreResponse)
def get_work_type_score(
    worker_id: str,
    work_type_id: str,
    matching_service: Annotated[MatchingService, Depends(get_matching_service)]
):
    """計算求職者與特定工作類型的分數"""
    try:
        score = matching_service.score_work_type(worker_id, work_type_id)
    except Exception as e:
        raise to_http_exception(e, "計算媒合分數")
    if score is None:
        raise HTTPException(status_code=404, detail="工作類型不存在")
    return score
