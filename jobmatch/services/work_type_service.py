"""
工作類型管理服務
"""
from typing import List, Optional
from sqlalchemy.orm import Session

from jobmatch.core.database import SessionLocal
from jobmatch.core.logger import setup_logger
from jobmatch.core.time_utils import format_datetime, utc_now
from jobmatch.models.work_type import WorkTypeModel
from jobmatch.models.schemas import (
    TimeSlot,
    WorkType,
    CreateWorkTypeRequest,
    UpdateWorkTypeRequest,
)
from jobmatch.scheduling.slots import merge_time_slots

# 設置 logger
logger = setup_logger(__name__)


def _to_work_type(model: WorkTypeModel) -> WorkType:
    """資料庫模型轉換為 Pydantic 模型"""
    return WorkType(
        id=model.id,
        employer_id=model.employer_id,
        name=model.name,
        description=model.description,
        hourly_wage=model.hourly_wage or 0,
        is_active=model.is_active,
        schedules=[TimeSlot(**slot) for slot in (model.schedules or [])],
        created_at=format_datetime(model.created_at),
        updated_at=format_datetime(model.updated_at)
    )


def _dump_slots(slots: List[TimeSlot]) -> List[dict]:
    return [slot.model_dump() for slot in slots]


class WorkTypeService:
    """工作類型管理服務"""

    def __init__(self, db: Optional[Session] = None):
        """
        初始化工作類型服務

        參數:
            db: 資料庫會話（可選，如果提供則使用，否則創建新會話）
        """
        self.db = db

    def _get_db(self) -> Session:
        """取得資料庫會話"""
        if self.db:
            return self.db
        return SessionLocal()

    def _get_next_work_type_id(self, db: Session) -> str:
        """
        取得下一個工作類型編號

        返回:
            str: 工作類型編號（格式：WT001, WT002, ...）
        """
        # 字串排序下 WT999 會排在 WT1000 之後，因此以數字部分取最大值
        sequences = [
            int(work_type_id[2:])
            for (work_type_id,) in db.query(WorkTypeModel.id).filter(WorkTypeModel.id.like('WT%'))
            if work_type_id[2:].isdigit()
        ]
        next_sequence = max(sequences, default=0) + 1

        return f"WT{next_sequence:03d}"

    @staticmethod
    def _validate_name(name: Optional[str]) -> str:
        if name is None or not name.strip():
            raise ValueError("請輸入工作類型名稱")
        return name.strip()

    @staticmethod
    def _validate_hourly_wage(hourly_wage: int) -> int:
        if hourly_wage < 0:
            raise ValueError("時薪不可為負數")
        return hourly_wage

    def create_work_type(self, work_type_data: CreateWorkTypeRequest, db: Optional[Session] = None) -> WorkType:
        """
        建立工作類型

        參數:
            work_type_data: 工作類型資料
            db: 資料庫會話（可選）

        返回:
            WorkType: 建立的工作類型（含編號與建立時間）
        """
        name = self._validate_name(work_type_data.name)
        hourly_wage = self._validate_hourly_wage(work_type_data.hourly_wage)

        if db is None:
            db = self._get_db()
            should_close = True
        else:
            should_close = False

        try:
            work_type_model = WorkTypeModel(
                id=self._get_next_work_type_id(db),
                employer_id=work_type_data.employer_id,
                name=name,
                description=work_type_data.description,
                hourly_wage=hourly_wage,
                is_active=work_type_data.is_active,
                schedules=_dump_slots(work_type_data.schedules)
            )

            db.add(work_type_model)
            db.commit()
            db.refresh(work_type_model)

            logger.info(f"已建立工作類型：{work_type_model.name} (ID: {work_type_model.id})")
            return _to_work_type(work_type_model)
        except Exception as e:
            db.rollback()
            raise e
        finally:
            if should_close:
                db.close()

    def update_work_type(self, work_type_id: str, updates: UpdateWorkTypeRequest,
                         db: Optional[Session] = None) -> Optional[WorkType]:
        """
        更新工作類型（只更新有提供的欄位）

        返回:
            Optional[WorkType]: 更新後的工作類型，不存在時返回 None
        """
        fields = updates.model_dump(exclude_unset=True)
        if "name" in fields:
            fields["name"] = self._validate_name(fields["name"])
        if fields.get("hourly_wage") is not None:
            self._validate_hourly_wage(fields["hourly_wage"])
        if "schedules" in fields:
            if not updates.schedules:
                raise ValueError("請至少設定一個時段")
            fields["schedules"] = _dump_slots(updates.schedules)

        if db is None:
            db = self._get_db()
            should_close = True
        else:
            should_close = False

        try:
            work_type_model = db.query(WorkTypeModel).filter(WorkTypeModel.id == work_type_id).first()
            if not work_type_model:
                return None

            for field, value in fields.items():
                if value is None and field in ("hourly_wage", "is_active"):
                    continue
                setattr(work_type_model, field, value)
            work_type_model.updated_at = utc_now()

            db.commit()
            db.refresh(work_type_model)
            return _to_work_type(work_type_model)
        except Exception as e:
            db.rollback()
            raise e
        finally:
            if should_close:
                db.close()

    def update_schedules(self, work_type_id: str, schedules: List[TimeSlot],
                         db: Optional[Session] = None) -> Optional[WorkType]:
        """儲存工作類型班表（先合併連續時段）"""
        if not schedules:
            raise ValueError("請至少設定一個時段")
        merged = merge_time_slots(schedules)
        return self.update_work_type(work_type_id, UpdateWorkTypeRequest(schedules=merged), db)

    def delete_work_type(self, work_type_id: str, db: Optional[Session] = None) -> bool:
        """
        刪除工作類型

        返回:
            bool: 是否成功刪除（不存在時為 False）
        """
        if db is None:
            db = self._get_db()
            should_close = True
        else:
            should_close = False

        try:
            work_type_model = db.query(WorkTypeModel).filter(WorkTypeModel.id == work_type_id).first()
            if not work_type_model:
                return False

            db.delete(work_type_model)
            db.commit()
            logger.info(f"已刪除工作類型：{work_type_id}")
            return True
        except Exception as e:
            db.rollback()
            raise e
        finally:
            if should_close:
                db.close()

    def get_work_type(self, work_type_id: str, db: Optional[Session] = None) -> Optional[WorkType]:
        """取得工作類型"""
        if db is None:
            db = self._get_db()
            should_close = True
        else:
            should_close = False

        try:
            work_type_model = db.query(WorkTypeModel).filter(WorkTypeModel.id == work_type_id).first()
            if not work_type_model:
                return None
            return _to_work_type(work_type_model)
        finally:
            if should_close:
                db.close()

    def get_work_types_by_ids(self, work_type_ids: List[str], db: Optional[Session] = None) -> List[WorkType]:
        """依 ID 取得多個工作類型（不存在的 ID 直接略過，保持傳入順序）"""
        if not work_type_ids:
            return []

        if db is None:
            db = self._get_db()
            should_close = True
        else:
            should_close = False

        try:
            models = db.query(WorkTypeModel).filter(WorkTypeModel.id.in_(work_type_ids)).all()
            by_id = {model.id: model for model in models}
            return [_to_work_type(by_id[wt_id]) for wt_id in work_type_ids if wt_id in by_id]
        finally:
            if should_close:
                db.close()

    def get_work_types_by_employer(self, employer_id: str, include_inactive: bool = False,
                                   db: Optional[Session] = None) -> List[WorkType]:
        """
        取得雇主的工作類型

        查詢只用 employer_id 條件，停用過濾與排序（新到舊）在取回後處理。
        """
        if db is None:
            db = self._get_db()
            should_close = True
        else:
            should_close = False

        try:
            models = db.query(WorkTypeModel).filter(WorkTypeModel.employer_id == employer_id).all()
            logger.debug(f"get_work_types_by_employer: employer_id: {employer_id}, 筆數: {len(models)}")

            if not include_inactive:
                models = [model for model in models if model.is_active is not False]
            models.sort(key=lambda model: model.created_at, reverse=True)
            return [_to_work_type(model) for model in models]
        finally:
            if should_close:
                db.close()
