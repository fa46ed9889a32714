"""
工作類型相關資料模型
"""
from sqlalchemy import Column, String, Integer, Boolean, Text, DateTime, JSON
from jobmatch.core.database import Base
from jobmatch.core.time_utils import utc_now


class WorkTypeModel(Base):
    """工作類型資料表模型（雇主定義的每週班表範本）"""
    __tablename__ = "work_types"

    id = Column(String, primary_key=True, index=True)
    employer_id = Column(String, nullable=False, index=True)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    hourly_wage = Column(Integer, nullable=False, default=0)
    is_active = Column(Boolean, nullable=False, default=True)
    schedules = Column(JSON, nullable=False, default=list)  # TimeSlot 字典陣列
    created_at = Column(DateTime, default=utc_now, nullable=False)
    updated_at = Column(DateTime, default=utc_now, onupdate=utc_now, nullable=False)
