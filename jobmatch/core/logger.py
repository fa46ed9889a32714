"""
應用程式日誌配置
"""
import logging
import sys
import os
from typing import Optional, Dict, Any

# 統一日誌格式（用於所有組件：logger, Gunicorn, Uvicorn）
DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# 日誌級別映射
LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def _get_log_level(default: str = "INFO") -> int:
    level = os.getenv("LOG_LEVEL", default).upper()
    return LOG_LEVELS.get(level, logging.INFO)


def _build_handler(level: int, format_string: str = DEFAULT_LOG_FORMAT,
                   date_format: str = DEFAULT_DATE_FORMAT) -> logging.Handler:
    # 使用 stderr 確保日誌能被 docker logs / Gunicorn error-logfile 捕獲
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(format_string, date_format))
    return handler


def setup_logger(
    name: str = "jobmatch",
    level: Optional[str] = None,
    format_string: Optional[str] = None,
    date_format: Optional[str] = None
) -> logging.Logger:
    """
    設置並返回 logger 實例

    參數:
        name: logger 名稱（通常是模組名稱）
        level: 日誌級別（從環境變數 LOG_LEVEL 讀取，預設為 INFO）
        format_string: 日誌格式字串
        date_format: 日期格式字串

    返回:
        logging.Logger: 配置好的 logger 實例
    """
    if level is None:
        log_level = _get_log_level()
    else:
        log_level = LOG_LEVELS.get(level.upper(), logging.INFO)

    # 確保 root logger 有基本配置（避免日誌丟失）
    root_logger = logging.getLogger()
    if not root_logger.handlers:
        root_logger.addHandler(_build_handler(logging.WARNING))
        root_logger.setLevel(logging.WARNING)

    logger = logging.getLogger(name)
    logger.setLevel(log_level)

    # 日誌只在當前 logger 處理，不向上傳播
    logger.propagate = False
    logger.handlers.clear()
    logger.addHandler(_build_handler(
        log_level,
        format_string or DEFAULT_LOG_FORMAT,
        date_format or DEFAULT_DATE_FORMAT
    ))

    return logger


def setup_gunicorn_logger():
    """
    配置 Gunicorn 的 logger 使用統一的日誌格式
    這需要在 Gunicorn 啟動時調用（見 gunicorn_config.on_starting）
    """
    log_level_value = _get_log_level()

    for logger_name in ("gunicorn.error", "gunicorn.access"):
        gunicorn_logger = logging.getLogger(logger_name)
        gunicorn_logger.setLevel(log_level_value)
        gunicorn_logger.propagate = False
        gunicorn_logger.handlers.clear()
        gunicorn_logger.addHandler(_build_handler(log_level_value))


def get_uvicorn_log_config() -> Dict[str, Any]:
    """
    獲取 Uvicorn 的日誌配置（統一格式）

    返回:
        Dict: Uvicorn log_config 字典
    """
    log_level = os.getenv("LOG_LEVEL", "INFO").upper()
    if log_level not in LOG_LEVELS:
        log_level = "INFO"

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {
                "format": DEFAULT_LOG_FORMAT,
                "datefmt": DEFAULT_DATE_FORMAT,
            },
        },
        "handlers": {
            "default": {
                "formatter": "default",
                "class": "logging.StreamHandler",
                "stream": "ext://sys.stderr",
            },
        },
        "loggers": {
            name: {
                "handlers": ["default"],
                "level": log_level,
                "propagate": False,
            }
            for name in ("uvicorn", "uvicorn.error", "uvicorn.access")
        },
    }
