"""
資料庫核心設定
"""
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker, Session
from sqlalchemy.pool import StaticPool
from jobmatch.config import DATABASE_URL
from jobmatch.core.logger import setup_logger

# 設置 logger
logger = setup_logger(__name__)

# 建立 Base 類別
Base = declarative_base()


def _create_engine(url: str):
    """建立資料庫引擎（SQLite 用於本機開發與測試）"""
    if url.startswith("sqlite"):
        engine_kwargs = {"connect_args": {"check_same_thread": False}}
        # 記憶體資料庫需共用同一個連線，否則每個會話都會看到空資料庫
        if ":memory:" in url or url in ("sqlite://", "sqlite:///"):
            engine_kwargs["poolclass"] = StaticPool
        return create_engine(url, echo=False, **engine_kwargs)
    return create_engine(url, pool_pre_ping=True, echo=False)


# 建立資料庫引擎
engine = _create_engine(DATABASE_URL)

# 建立會話工廠
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Session:
    """取得資料庫會話（用於 FastAPI 依賴注入）"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db():
    """初始化資料庫，建立所有資料表"""
    # 導入所有模型，確保它們被註冊到 Base.metadata
    from jobmatch.models import (  # noqa: F401
        WorkTypeModel,
        WorkerAvailabilityModel,
        JobPostModel,
    )

    try:
        Base.metadata.create_all(bind=engine)
        logger.info("資料庫表已建立")
    except Exception as e:
        logger.warning(f"資料庫初始化失敗：{e}", exc_info=True)
        raise
