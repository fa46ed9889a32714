"""
儲存狀態協調

同一個實體（例如某個工作類型、某位求職者的可工作時段）同時只允許一個儲存動作。
狀態：idle -> saving -> idle / error
"""
import threading
from contextlib import contextmanager
from enum import Enum
from typing import Dict, Iterator, Optional

from jobmatch.core.logger import setup_logger

# 設置 logger
logger = setup_logger(__name__)


class SaveState(str, Enum):
    """儲存狀態枚舉"""
    IDLE = "idle"
    SAVING = "saving"
    ERROR = "error"


class SaveInProgressError(Exception):
    """同一實體已有儲存動作進行中"""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"{key} 正在儲存中，請稍後再試")


class SaveCoordinator:
    """儲存狀態協調器（執行緒安全）"""

    def __init__(self):
        self._states: Dict[str, SaveState] = {}
        self._errors: Dict[str, str] = {}
        self._lock = threading.Lock()

    def get_state(self, key: str) -> SaveState:
        with self._lock:
            return self._states.get(key, SaveState.IDLE)

    def get_last_error(self, key: str) -> Optional[str]:
        with self._lock:
            return self._errors.get(key)

    def is_saving(self, key: str) -> bool:
        return self.get_state(key) == SaveState.SAVING

    @contextmanager
    def saving(self, key: str) -> Iterator[None]:
        """
        標記實體為儲存中

        參數:
            key: 實體鍵值（例如 "work_type:WT001"）

        例外:
            SaveInProgressError: 該實體已在儲存中
        """
        with self._lock:
            if self._states.get(key) == SaveState.SAVING:
                raise SaveInProgressError(key)
            self._states[key] = SaveState.SAVING
            self._errors.pop(key, None)

        try:
            yield
        except BaseException as e:
            # 包含 KeyboardInterrupt 等中斷，否則該實體會一直停在 saving
            with self._lock:
                self._states[key] = SaveState.ERROR
                self._errors[key] = str(e) or type(e).__name__
            logger.warning(f"儲存失敗：{key} - {e!r}")
            raise
        else:
            with self._lock:
                self._states[key] = SaveState.IDLE
