"""
排班表格互動控制

將 7×24 表格上的點擊與拖曳轉換為時段的新增、更新、刪除。
每個格子的狀態循環：未設定 -> 1（非常偏好）-> 2（偏好）-> 未設定。
所有操作只改變記憶體中的時段，儲存由呼叫端另外處理。
"""
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from jobmatch.core.logger import setup_logger
from jobmatch.core.weekdays import DAYS_PER_WEEK, HOURS_PER_DAY
from jobmatch.models.schemas import TimeSlot

# 設置 logger
logger = setup_logger(__name__)

Cell = Tuple[int, int]
ChangeCallback = Callable[[List[TimeSlot]], None]


def _is_valid_cell(day: int, hour: int) -> bool:
    return 0 <= day < DAYS_PER_WEEK and 0 <= hour < HOURS_PER_DAY


def _explode(time_slots: Iterable[TimeSlot]) -> Dict[Cell, Optional[int]]:
    """將多小時的時段拆成每小時一格"""
    cells: Dict[Cell, Optional[int]] = {}
    for slot in time_slots:
        for hour in range(slot.start, min(slot.end, HOURS_PER_DAY)):
            cells.setdefault((slot.day, hour), slot.priority)
    return cells


class ScheduleGridController:
    """排班表格控制器"""

    def __init__(
        self,
        time_slots: Optional[Iterable[TimeSlot]] = None,
        on_change: Optional[ChangeCallback] = None,
        read_only: bool = False,
        max_selections: Optional[int] = None
    ):
        """
        初始化排班表格控制器

        參數:
            time_slots: 初始時段（多小時時段會拆成每小時一格）
            on_change: 時段變更時的回呼（即時同步給上層）
            read_only: 唯讀模式，所有操作都不會改變時段
            max_selections: 最多可選取的格子數（None 為不限制）
        """
        self.on_change = on_change
        self.read_only = read_only
        self.max_selections = max_selections
        self._cells: Dict[Cell, Optional[int]] = _explode(time_slots or [])
        self._anchor: Optional[Cell] = None
        self._current: Optional[Cell] = None
        self._drag_priority: Optional[int] = None

    @property
    def time_slots(self) -> List[TimeSlot]:
        """目前的時段（每小時一個，依星期、小時排序）"""
        return [
            TimeSlot(day=day, start=hour, end=hour + 1, priority=priority)
            for (day, hour), priority in sorted(self._cells.items())
        ]

    @property
    def is_dragging(self) -> bool:
        return self._anchor is not None

    @property
    def drag_priority(self) -> Optional[int]:
        return self._drag_priority

    def get_cell_priority(self, day: int, hour: int) -> Optional[int]:
        """
        取得格子的優先順序

        返回:
            Optional[int]: 未設定為 None；有時段但沒有優先順序時視為 1
        """
        if (day, hour) not in self._cells:
            return None
        return self._cells[(day, hour)] or 1

    def reset(self, time_slots: Iterable[TimeSlot]) -> None:
        """以新的時段取代目前內容（例如取消編輯、重新載入）"""
        self.cancel_drag()
        self._replace(_explode(time_slots))

    def clear(self) -> None:
        self.reset([])

    def click_cell(self, day: int, hour: int) -> bool:
        """
        點擊格子，依 未設定 -> 1 -> 2 -> 未設定 循環

        返回:
            bool: 時段是否有變更
        """
        if self.read_only or not _is_valid_cell(day, hour):
            return False

        cells = dict(self._cells)
        self._cycle_cell(cells, (day, hour), new_priority=1)
        return self._replace(cells)

    def begin_drag(self, day: int, hour: int) -> bool:
        """
        開始拖曳（按下滑鼠）

        起點已是優先順序 1 時，拖曳範圍內的新格子設為 2，否則設為 1。
        """
        if self.read_only or not _is_valid_cell(day, hour):
            return False

        self._anchor = (day, hour)
        self._current = (day, hour)
        self._drag_priority = 2 if self.get_cell_priority(day, hour) == 1 else 1
        return True

    def update_drag(self, day: int, hour: int) -> None:
        """拖曳中移動到另一個格子"""
        if not self.is_dragging or not _is_valid_cell(day, hour):
            return
        self._current = (day, hour)

    def selection_bounds(self) -> Optional[Tuple[int, int, int, int]]:
        """
        拖曳中的選取範圍

        返回:
            Optional[Tuple[int, int, int, int]]: (最小星期, 最大星期, 最小小時, 最大小時)，未拖曳時為 None
        """
        if self._anchor is None or self._current is None:
            return None
        (anchor_day, anchor_hour), (current_day, current_hour) = self._anchor, self._current
        return (
            min(anchor_day, current_day),
            max(anchor_day, current_day),
            min(anchor_hour, current_hour),
            max(anchor_hour, current_hour),
        )

    def is_highlighted(self, day: int, hour: int) -> bool:
        bounds = self.selection_bounds()
        if bounds is None:
            return False
        min_day, max_day, min_hour, max_hour = bounds
        return min_day <= day <= max_day and min_hour <= hour <= max_hour

    def end_drag(self) -> bool:
        """
        結束拖曳（放開滑鼠，不論游標是否仍在表格內）

        範圍內每一格：未設定 -> 拖曳優先順序、1 -> 2、2 -> 刪除。
        沒有進行中的拖曳時不做任何事。

        返回:
            bool: 時段是否有變更
        """
        bounds = self.selection_bounds()
        if bounds is None:
            return False

        min_day, max_day, min_hour, max_hour = bounds
        drag_priority = self._drag_priority or 1
        cells = dict(self._cells)
        for day in range(min_day, max_day + 1):
            for hour in range(min_hour, max_hour + 1):
                self._cycle_cell(cells, (day, hour), new_priority=drag_priority)

        self.cancel_drag()
        return self._replace(cells)

    def cancel_drag(self) -> None:
        self._anchor = None
        self._current = None
        self._drag_priority = None

    def _cycle_cell(self, cells: Dict[Cell, Optional[int]], cell: Cell, new_priority: int) -> None:
        if cell not in cells:
            if self.max_selections is not None and len(cells) >= self.max_selections:
                logger.info(f"已達最多 {self.max_selections} 個時段，略過 {cell}")
                return
            cells[cell] = new_priority
        elif (cells[cell] or 1) == 1:
            cells[cell] = 2
        else:
            del cells[cell]

    def _replace(self, cells: Dict[Cell, Optional[int]]) -> bool:
        if cells == self._cells:
            return False
        self._cells = cells
        if self.on_change is not None:
            self.on_change(self.time_slots)
        return True
