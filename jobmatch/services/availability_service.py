"""
求職者可工作時段服務
"""
from typing import List, Optional
from sqlalchemy.orm import Session

from jobmatch.core.database import SessionLocal
from jobmatch.core.logger import setup_logger
from jobmatch.core.time_utils import format_datetime
from jobmatch.models.availability import WorkerAvailabilityModel
from jobmatch.models.schemas import AvailabilitySummary, TimeSlot, WorkerAvailability
from jobmatch.scheduling.scoring import summarize_availabilities
from jobmatch.scheduling.slots import compress_availabilities, expand_time_slots, merge_time_slots

# 設置 logger
logger = setup_logger(__name__)


def _to_availability(model: WorkerAvailabilityModel) -> WorkerAvailability:
    return WorkerAvailability(
        id=model.id,
        worker_id=model.worker_id,
        day=model.day,
        hour=model.hour,
        priority=model.priority,
        created_at=format_datetime(model.created_at)
    )


class WorkerAvailabilityService:
    """求職者可工作時段服務"""

    def __init__(self, db: Optional[Session] = None):
        """
        初始化可工作時段服務

        參數:
            db: 資料庫會話（可選，如果提供則使用，否則創建新會話）
        """
        self.db = db

    def _get_db(self) -> Session:
        """取得資料庫會話"""
        if self.db:
            return self.db
        return SessionLocal()

    def save_worker_availabilities(self, worker_id: str, time_slots: List[TimeSlot],
                                   db: Optional[Session] = None) -> List[WorkerAvailability]:
        """
        儲存可工作時段（刪除既有資料後重新寫入）

        時段展開為每小時一筆，同一小時重複時只保留較強的偏好，
        確保每個 (worker_id, day, hour) 最多一筆。

        參數:
            worker_id: 求職者 ID
            time_slots: 可工作時段
            db: 資料庫會話（可選）

        返回:
            List[WorkerAvailability]: 儲存後的每小時記錄
        """
        hourly_slots = compress_availabilities(expand_time_slots(time_slots, worker_id))
        records = expand_time_slots(hourly_slots, worker_id)

        if db is None:
            db = self._get_db()
            should_close = True
        else:
            should_close = False

        try:
            deleted = db.query(WorkerAvailabilityModel).filter(
                WorkerAvailabilityModel.worker_id == worker_id
            ).delete(synchronize_session=False)

            models = [
                WorkerAvailabilityModel(
                    worker_id=worker_id,
                    day=record.day,
                    hour=record.hour,
                    priority=record.priority
                )
                for record in records
            ]
            db.add_all(models)
            db.commit()

            logger.info(f"已儲存可工作時段：worker_id: {worker_id}, 刪除 {deleted} 筆, 新增 {len(models)} 筆")
            return self.get_worker_availabilities(worker_id, db)
        except Exception as e:
            db.rollback()
            raise e
        finally:
            if should_close:
                db.close()

    def get_worker_availabilities(self, worker_id: str, db: Optional[Session] = None) -> List[WorkerAvailability]:
        """取得可工作時段（依星期、小時排序）"""
        if db is None:
            db = self._get_db()
            should_close = True
        else:
            should_close = False

        try:
            models = db.query(WorkerAvailabilityModel).filter(
                WorkerAvailabilityModel.worker_id == worker_id
            ).order_by(WorkerAvailabilityModel.day, WorkerAvailabilityModel.hour).all()
            return [_to_availability(model) for model in models]
        finally:
            if should_close:
                db.close()

    def delete_worker_availabilities(self, worker_id: str, db: Optional[Session] = None) -> int:
        """
        刪除求職者所有可工作時段

        返回:
            int: 刪除筆數
        """
        if db is None:
            db = self._get_db()
            should_close = True
        else:
            should_close = False

        try:
            deleted = db.query(WorkerAvailabilityModel).filter(
                WorkerAvailabilityModel.worker_id == worker_id
            ).delete(synchronize_session=False)
            db.commit()
            logger.info(f"已刪除可工作時段：worker_id: {worker_id}, {deleted} 筆")
            return deleted
        except Exception as e:
            db.rollback()
            raise e
        finally:
            if should_close:
                db.close()

    def get_worker_time_slots(self, worker_id: str, merged: bool = True,
                              db: Optional[Session] = None) -> List[TimeSlot]:
        """
        取得以時段表示的可工作時間

        參數:
            merged: 是否合併連續且優先順序相同的時段（False 時每小時一個時段）
        """
        time_slots = compress_availabilities(self.get_worker_availabilities(worker_id, db))
        if merged:
            return merge_time_slots(time_slots)
        return time_slots

    def get_availability_summary(self, worker_id: str, db: Optional[Session] = None) -> AvailabilitySummary:
        """取得可工作時段統計"""
        return summarize_availabilities(self.get_worker_availabilities(worker_id, db))
