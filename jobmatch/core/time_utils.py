"""
時間相關工具（寫入 DB 用 UTC，顯示用服務時區）
"""
import os
from datetime import datetime, timezone, timedelta
from typing import Optional

# 顯示用時區，預設 UTC+9
DISPLAY_TZ = timezone(timedelta(hours=int(os.getenv("DISPLAY_TZ_OFFSET_HOURS", "9"))))
DISPLAY_FORMAT = '%Y-%m-%d %H:%M:%S'


def utc_now() -> datetime:
    """回傳目前 UTC 時間（naive datetime，供寫入 DB 使用）。"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def format_datetime(dt: Optional[datetime]) -> Optional[str]:
    """
    將 datetime 轉為顯示時區字串，格式為 YYYY-MM-DD HH:MM:SS。
    若 dt 為 naive（無時區），視為 UTC 再換算。
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(DISPLAY_TZ).strftime(DISPLAY_FORMAT)
