"""
打工排班媒合系統 - 主入口點

注意：此檔案應該通過根目錄的 main.py 或使用 'python -m jobmatch.main' 執行
"""
import sys

from jobmatch.core.logger import setup_logger

# 設置 logger
logger = setup_logger(__name__)

try:
    import uvicorn
except ImportError:
    logger.error("錯誤：未安裝 uvicorn")
    logger.info("請執行：pip install uvicorn[standard]")
    sys.exit(1)

from jobmatch.config import FASTAPI_PORT, CREATE_SAMPLE_DATA
from jobmatch.core.database import init_db
from jobmatch.core.logger import get_uvicorn_log_config
from jobmatch.models.schemas import CreateWorkTypeRequest, TimeSlot
from jobmatch.services.work_type_service import WorkTypeService

SAMPLE_EMPLOYER_ID = "EMPLOYER-SAMPLE"


def _weekday_slots(start: int, end: int, days=range(1, 6)):
    return [TimeSlot(day=day, start=start, end=end) for day in days]


def create_sample_work_types(work_type_service: WorkTypeService) -> int:
    """
    建立範例工作類型（雇主已有資料時略過）

    返回:
        int: 建立的筆數
    """
    if work_type_service.get_work_types_by_employer(SAMPLE_EMPLOYER_ID, include_inactive=True):
        logger.info("已有範例工作類型，跳過建立測試資料")
        return 0

    sample_work_types = [
        CreateWorkTypeRequest(
            employer_id=SAMPLE_EMPLOYER_ID,
            name="平日早班",
            description="櫃檯與客房整理",
            hourly_wage=190,
            schedules=_weekday_slots(9, 13)
        ),
        CreateWorkTypeRequest(
            employer_id=SAMPLE_EMPLOYER_ID,
            name="平日晚班",
            description="餐廳外場",
            hourly_wage=200,
            schedules=_weekday_slots(18, 22)
        ),
        CreateWorkTypeRequest(
            employer_id=SAMPLE_EMPLOYER_ID,
            name="週末全天",
            hourly_wage=220,
            schedules=_weekday_slots(10, 19, days=(0, 6))
        ),
    ]

    for work_type_data in sample_work_types:
        work_type = work_type_service.create_work_type(work_type_data)
        logger.info(f"已建立範例工作類型：{work_type.name} (ID: {work_type.id})")

    logger.info(f"共建立 {len(sample_work_types)} 個範例工作類型")
    return len(sample_work_types)


def main():
    """主函數"""
    try:
        init_db()
        logger.info("資料庫初始化完成")
    except Exception as e:
        logger.error(f"資料庫初始化失敗：{e}", exc_info=True)
        sys.exit(1)

    if CREATE_SAMPLE_DATA:
        create_sample_work_types(WorkTypeService())

    from jobmatch.api.main import api_app

    logger.info(f"FastAPI 伺服器啟動，監聽 http://0.0.0.0:{FASTAPI_PORT}")
    logger.info(f"API 文件：http://localhost:{FASTAPI_PORT}/docs")
    uvicorn.run(
        api_app,
        host="0.0.0.0",
        port=FASTAPI_PORT,
        log_config=get_uvicorn_log_config()
    )


if __name__ == "__main__":
    main()
