"""
職缺相關資料模型
"""
from sqlalchemy import Column, String, Float, Boolean, Text, DateTime, JSON
from jobmatch.core.database import Base
from jobmatch.core.time_utils import utc_now


class JobPostModel(Base):
    """職缺資料表模型"""
    __tablename__ = "job_posts"

    id = Column(String, primary_key=True, index=True)
    employer_id = Column(String, nullable=False, index=True)
    employer_name = Column(String, nullable=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    location = Column(String, nullable=False)
    latitude = Column(Float, nullable=True)
    longitude = Column(Float, nullable=True)
    schedule_type = Column(String, nullable=False, default="traditional")
    # 工作類型 ID 列表（鬆散參照，不建立外鍵）
    work_type_ids = Column(JSON, nullable=False, default=list)
    is_active = Column(Boolean, nullable=False, default=True, index=True)
    created_at = Column(DateTime, default=utc_now, nullable=False)
    updated_at = Column(DateTime, default=utc_now, onupdate=utc_now, nullable=False)
