"""
測試設定

匯入 jobmatch 之前先把資料庫指向記憶體 SQLite。
"""
import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.pop("NAVER_MAPS_API_KEY_ID", None)
os.environ.pop("NAVER_MAPS_API_KEY", None)

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

import jobmatch.models  # noqa: E402,F401
from jobmatch.core.database import Base, engine  # noqa: E402
from jobmatch.api.main import api_app  # noqa: E402


@pytest.fixture(autouse=True)
def clean_database():
    """每個測試使用空的資料表"""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def client():
    """API 測試用 client"""
    return TestClient(api_app)
