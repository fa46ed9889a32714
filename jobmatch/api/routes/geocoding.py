"""
地理編碼相關 API 路由
"""
from typing import Annotated, Optional
from fastapi import APIRouter, Depends, HTTPException, Query

from jobmatch.api.dependencies import get_geocoding_service
from jobmatch.models.schemas import GeocodeResponse
from jobmatch.services.geocoding_service import GeocodingError, GeocodingService, validate_search_query

router = APIRouter(prefix="/api/geocoding", tags=["地理編碼"])


@router.get("/search", response_model=GeocodeResponse)
def search_address(
    geocoding_service: Annotated[GeocodingService, Depends(get_geocoding_service)],
    query: Optional[str] = Query(None, description="搜尋地址")
):
    """搜尋地址並取得座標"""
    error_message = validate_search_query(query)
    if error_message:
        raise HTTPException(status_code=400, detail=error_message)

    try:
        addresses = geocoding_service.search_address(query)
    except GeocodingError as e:
        raise HTTPException(status_code=502, detail=str(e))

    return GeocodeResponse(
        query=query,
        addresses=addresses,
        success=bool(addresses),
        message="成功取得地址" if addresses else "找不到符合的地址"
    )
