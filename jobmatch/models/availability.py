"""
求職者可工作時段資料模型
"""
from sqlalchemy import Column, String, Integer, DateTime, Index
from jobmatch.core.database import Base
from jobmatch.core.time_utils import utc_now


class WorkerAvailabilityModel(Base):
    """每小時可工作時段資料表模型（一筆代表一個星期幾的一個小時）"""
    __tablename__ = "worker_availabilities"
    __table_args__ = (
        Index("ix_worker_availabilities_worker_day_hour", "worker_id", "day", "hour"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    worker_id = Column(String, nullable=False, index=True)
    day = Column(Integer, nullable=False)  # 0=星期日 ... 6=星期六
    hour = Column(Integer, nullable=False)  # 0-23
    priority = Column(Integer, nullable=False, default=1)  # 1=非常偏好, 2=偏好
    created_at = Column(DateTime, default=utc_now, nullable=False)
