"""
應用程式配置設定
"""
import os

# 資料庫設定
POSTGRES_USER = os.getenv("POSTGRES_USER", "jobmatch")
POSTGRES_PASSWORD = os.getenv("POSTGRES_PASSWORD", "jobmatch")
POSTGRES_HOST = os.getenv("POSTGRES_HOST", "localhost")
POSTGRES_PORT = os.getenv("POSTGRES_PORT", "5432")
POSTGRES_DB = os.getenv("POSTGRES_DB", "jobmatch_db")

DATABASE_URL = os.getenv(
    "DATABASE_URL",
    f"postgresql://{POSTGRES_USER}:{POSTGRES_PASSWORD}@{POSTGRES_HOST}:{POSTGRES_PORT}/{POSTGRES_DB}"
)

# Naver Maps Geocoding（未設定時地址搜尋會回報錯誤，建立職缺時略過座標）
NAVER_MAPS_API_KEY_ID = os.getenv("NAVER_MAPS_API_KEY_ID")
NAVER_MAPS_API_KEY = os.getenv("NAVER_MAPS_API_KEY")
NAVER_GEOCODE_URL = os.getenv(
    "NAVER_GEOCODE_URL",
    "https://naveropenapi.apigw.ntruss.com/map-geocode/v2/geocode"
)
GEOCODING_TIMEOUT_SECONDS = int(os.getenv("GEOCODING_TIMEOUT_SECONDS", "10"))

# 媒合設定
RECOMMENDATION_LIMIT = int(os.getenv("RECOMMENDATION_LIMIT", "10"))

# 伺服器設定
FASTAPI_PORT = int(os.getenv("FASTAPI_PORT", "8880"))

# 啟動時若資料庫為空則建立範例工作類型
CREATE_SAMPLE_DATA = os.getenv("CREATE_SAMPLE_DATA", "false").lower() == "true"
