"""
Gunicorn 配置文件

啟動方式：gunicorn -c gunicorn_config.py jobmatch.api.main:api_app
"""
import multiprocessing
import os

# 綁定地址和端口
bind = f"0.0.0.0:{os.getenv('FASTAPI_PORT', '8880')}"

# Worker 數量（建議：CPU 核心數 * 2 + 1）
workers = int(os.getenv('GUNICORN_WORKERS', multiprocessing.cpu_count() * 2 + 1))

# FastAPI 為 ASGI 應用程式，使用 Uvicorn worker
worker_class = "uvicorn.workers.UvicornWorker"

# 超時設定（秒）
timeout = 120

# Keep-alive 連接時間（秒）
keepalive = 5

# 日誌設定
accesslog = "-"  # 輸出到 stdout
errorlog = "-"   # 輸出到 stderr
loglevel = os.getenv("LOG_LEVEL", "info").lower()

# 進程名稱
proc_name = "jobmatch-api"

# 最大請求數（達到後重啟 worker）
max_requests = 1000
max_requests_jitter = 50

# 優雅重啟超時時間
graceful_timeout = 30


def on_starting(server):
    """Gunicorn 啟動時確保日誌使用統一格式"""
    from jobmatch.core.logger import setup_gunicorn_logger
    setup_gunicorn_logger()
