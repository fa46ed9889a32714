"""
職缺管理服務
"""
from typing import List, Optional
from sqlalchemy.orm import Session

from jobmatch.core.database import SessionLocal
from jobmatch.core.logger import setup_logger
from jobmatch.core.time_utils import format_datetime, utc_now
from jobmatch.models.job_post import JobPostModel
from jobmatch.models.schemas import JobPost, CreateJobPostRequest, UpdateJobPostRequest
from jobmatch.services.geocoding_service import GeocodingService

# 設置 logger
logger = setup_logger(__name__)


def _to_job_post(model: JobPostModel) -> JobPost:
    return JobPost(
        id=model.id,
        employer_id=model.employer_id,
        employer_name=model.employer_name,
        title=model.title,
        description=model.description,
        location=model.location,
        latitude=model.latitude,
        longitude=model.longitude,
        schedule_type=model.schedule_type,
        work_type_ids=list(model.work_type_ids or []),
        is_active=model.is_active,
        created_at=format_datetime(model.created_at),
        updated_at=format_datetime(model.updated_at)
    )


class JobPostService:
    """職缺管理服務"""

    def __init__(self, db: Optional[Session] = None, geocoding_service: Optional[GeocodingService] = None):
        """
        初始化職缺服務

        參數:
            db: 資料庫會話（可選，如果提供則使用，否則創建新會話）
            geocoding_service: 地理編碼服務（可選）
        """
        self.db = db
        self.geocoding_service = geocoding_service

    def _get_db(self) -> Session:
        """取得資料庫會話"""
        if self.db:
            return self.db
        return SessionLocal()

    def _get_next_job_post_id(self, db: Session) -> str:
        """
        取得下一個職缺編號

        返回:
            str: 職缺編號（格式：POST001, POST002, ...）
        """
        sequences = [
            int(job_post_id[4:])
            for (job_post_id,) in db.query(JobPostModel.id).filter(JobPostModel.id.like('POST%'))
            if job_post_id[4:].isdigit()
        ]
        next_sequence = max(sequences, default=0) + 1

        return f"POST{next_sequence:03d}"

    def create_job_post(self, job_post_data: CreateJobPostRequest, db: Optional[Session] = None) -> JobPost:
        """
        建立職缺

        參數:
            job_post_data: 職缺資料
            db: 資料庫會話（可選）

        返回:
            JobPost: 建立的職缺
        """
        if not job_post_data.title.strip():
            raise ValueError("請輸入職缺標題")
        if not job_post_data.location.strip():
            raise ValueError("請輸入工作地點")

        # 取得座標（如果未提供）
        latitude = job_post_data.latitude
        longitude = job_post_data.longitude
        if (latitude is None or longitude is None) and self.geocoding_service:
            coordinates = self.geocoding_service.get_coordinates(job_post_data.location)
            if coordinates:
                latitude, longitude = coordinates

        if db is None:
            db = self._get_db()
            should_close = True
        else:
            should_close = False

        try:
            job_post_model = JobPostModel(
                id=self._get_next_job_post_id(db),
                employer_id=job_post_data.employer_id,
                employer_name=job_post_data.employer_name,
                title=job_post_data.title.strip(),
                description=job_post_data.description,
                location=job_post_data.location.strip(),
                latitude=latitude,
                longitude=longitude,
                schedule_type=job_post_data.schedule_type,
                work_type_ids=list(job_post_data.work_type_ids),
                is_active=job_post_data.is_active
            )

            db.add(job_post_model)
            db.commit()
            db.refresh(job_post_model)

            logger.info(f"已建立職缺：{job_post_model.title} (ID: {job_post_model.id})")
            return _to_job_post(job_post_model)
        except Exception as e:
            db.rollback()
            raise e
        finally:
            if should_close:
                db.close()

    def update_job_post(self, job_post_id: str, updates: UpdateJobPostRequest,
                        db: Optional[Session] = None) -> Optional[JobPost]:
        """更新職缺（只更新有提供的欄位），不存在時返回 None"""
        fields = {key: value for key, value in updates.model_dump(exclude_unset=True).items() if value is not None}
        if "title" in fields and not fields["title"].strip():
            raise ValueError("請輸入職缺標題")
        if "location" in fields and not fields["location"].strip():
            raise ValueError("請輸入工作地點")

        if db is None:
            db = self._get_db()
            should_close = True
        else:
            should_close = False

        try:
            job_post_model = db.query(JobPostModel).filter(JobPostModel.id == job_post_id).first()
            if not job_post_model:
                return None

            for field, value in fields.items():
                setattr(job_post_model, field, value)
            job_post_model.updated_at = utc_now()

            db.commit()
            db.refresh(job_post_model)
            return _to_job_post(job_post_model)
        except Exception as e:
            db.rollback()
            raise e
        finally:
            if should_close:
                db.close()

    def delete_job_post(self, job_post_id: str, db: Optional[Session] = None) -> bool:
        """刪除職缺（不存在時返回 False）"""
        if db is None:
            db = self._get_db()
            should_close = True
        else:
            should_close = False

        try:
            job_post_model = db.query(JobPostModel).filter(JobPostModel.id == job_post_id).first()
            if not job_post_model:
                return False

            db.delete(job_post_model)
            db.commit()
            logger.info(f"已刪除職缺：{job_post_id}")
            return True
        except Exception as e:
            db.rollback()
            raise e
        finally:
            if should_close:
                db.close()

    def get_job_post(self, job_post_id: str, db: Optional[Session] = None) -> Optional[JobPost]:
        """取得職缺"""
        if db is None:
            db = self._get_db()
            should_close = True
        else:
            should_close = False

        try:
            job_post_model = db.query(JobPostModel).filter(JobPostModel.id == job_post_id).first()
            if not job_post_model:
                return None
            return _to_job_post(job_post_model)
        finally:
            if should_close:
                db.close()

    def get_active_job_posts(self, db: Optional[Session] = None) -> List[JobPost]:
        """取得開放中的職缺（新到舊）"""
        if db is None:
            db = self._get_db()
            should_close = True
        else:
            should_close = False

        try:
            models = db.query(JobPostModel).filter(
                JobPostModel.is_active.is_(True)
            ).order_by(JobPostModel.created_at.desc()).all()
            return [_to_job_post(model) for model in models]
        finally:
            if should_close:
                db.close()

    def get_job_posts_by_employer(self, employer_id: str, db: Optional[Session] = None) -> List[JobPost]:
        """取得雇主的所有職缺（新到舊）"""
        if db is None:
            db = self._get_db()
            should_close = True
        else:
            should_close = False

        try:
            models = db.query(JobPostModel).filter(
                JobPostModel.employer_id == employer_id
            ).order_by(JobPostModel.created_at.desc()).all()
            return [_to_job_post(model) for model in models]
        finally:
            if should_close:
                db.close()
