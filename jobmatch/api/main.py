"""
FastAPI 主應用程式
"""
from fastapi import FastAPI
from jobmatch.core.database import init_db
from jobmatch.core.logger import setup_logger
from jobmatch.api.routes import availabilities, geocoding, job_posts, matching, schedule_grid, work_types

# 設置 logger
logger = setup_logger(__name__)

API_TITLE = "打工排班媒合系統 API"
API_VERSION = "1.0.0"

# 建立 FastAPI 應用程式
api_app = FastAPI(title=API_TITLE, version=API_VERSION)

# 初始化資料庫
try:
    init_db()
    logger.info("資料庫初始化完成")
except Exception as e:
    logger.warning(f"資料庫初始化失敗：{e}", exc_info=True)

# 註冊路由
api_app.include_router(work_types.router)
api_app.include_router(availabilities.router)
api_app.include_router(job_posts.router)
api_app.include_router(matching.router)
api_app.include_router(schedule_grid.router)
api_app.include_router(geocoding.router)


@api_app.get("/")
def root():
    """根路徑"""
    return {
        "message": API_TITLE,
        "version": API_VERSION,
        "docs": "/docs"
    }
