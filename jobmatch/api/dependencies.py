"""
FastAPI 依賴注入
"""
from fastapi import HTTPException

from jobmatch.core.logger import setup_logger
from jobmatch.services.availability_service import WorkerAvailabilityService
from jobmatch.services.geocoding_service import GeocodingService
from jobmatch.services.job_post_service import JobPostService
from jobmatch.services.matching_service import MatchingService
from jobmatch.services.save_coordinator import SaveCoordinator, SaveInProgressError
from jobmatch.services.work_type_service import WorkTypeService

# 設置 logger
logger = setup_logger(__name__)

# 服務實例（單例模式）
_work_type_service_instance = None
_availability_service_instance = None
_job_post_service_instance = None
_matching_service_instance = None
_geocoding_service_instance = None
_save_coordinator_instance = None


def get_work_type_service() -> WorkTypeService:
    """取得 WorkTypeService 實例"""
    global _work_type_service_instance
    if _work_type_service_instance is None:
        _work_type_service_instance = WorkTypeService()
    return _work_type_service_instance


def get_availability_service() -> WorkerAvailabilityService:
    """取得 WorkerAvailabilityService 實例"""
    global _availability_service_instance
    if _availability_service_instance is None:
        _availability_service_instance = WorkerAvailabilityService()
    return _availability_service_instance


def get_geocoding_service() -> GeocodingService:
    """取得 GeocodingService 實例"""
    global _geocoding_service_instance
    if _geocoding_service_instance is None:
        _geocoding_service_instance = GeocodingService()
    return _geocoding_service_instance


def get_job_post_service() -> JobPostService:
    """取得 JobPostService 實例"""
    global _job_post_service_instance
    if _job_post_service_instance is None:
        _job_post_service_instance = JobPostService(geocoding_service=get_geocoding_service())
    return _job_post_service_instance


def get_matching_service() -> MatchingService:
    """取得 MatchingService 實例"""
    global _matching_service_instance
    if _matching_service_instance is None:
        _matching_service_instance = MatchingService(
            work_type_service=get_work_type_service(),
            availability_service=get_availability_service(),
            job_post_service=get_job_post_service()
        )
    return _matching_service_instance


def get_save_coordinator() -> SaveCoordinator:
    """取得 SaveCoordinator 實例（所有請求共用同一個儲存狀態）"""
    global _save_coordinator_instance
    if _save_coordinator_instance is None:
        _save_coordinator_instance = SaveCoordinator()
    return _save_coordinator_instance


def to_http_exception(e: Exception, action: str) -> HTTPException:
    """
    將服務層例外轉換為 HTTP 錯誤

    ValueError 為輸入驗證錯誤（400），SaveInProgressError 為重複送出（409），
    其他例外記錄完整錯誤後回傳一般錯誤訊息（500）。
    """
    if isinstance(e, HTTPException):
        return e
    if isinstance(e, ValueError):
        return HTTPException(status_code=400, detail=str(e))
    if isinstance(e, SaveInProgressError):
        return HTTPException(status_code=409, detail=str(e))
    logger.error(f"{action}失敗：{e}", exc_info=True)
    return HTTPException(status_code=500, detail=f"{action}失敗，請稍後再試")
