"""
時段基本運算

重疊判斷、依星期分組、合併連續時段，以及每小時記錄與時段之間的轉換。
所有函式皆為純函式，不修改傳入的時段。
"""
from typing import Dict, Iterable, List, Protocol, Tuple

from jobmatch.core.weekdays import get_day_name
from jobmatch.models.schemas import TimeSlot, WorkerAvailabilityCreate


class HourRecord(Protocol):
    """每小時記錄（WorkerAvailability / WorkerAvailabilityCreate / ORM 模型皆符合）"""
    day: int
    hour: int
    priority: int


def intervals_overlap(a_start: int, a_end: int, b_start: int, b_end: int) -> bool:
    """半開區間 [start, end) 是否重疊"""
    return not (a_end <= b_start or a_start >= b_end)


def slots_overlap(a: TimeSlot, b: TimeSlot) -> bool:
    """兩個時段是否在同一天且時間重疊"""
    return a.day == b.day and intervals_overlap(a.start, a.end, b.start, b.end)


def group_by_day(slots: Iterable[TimeSlot]) -> Dict[int, List[TimeSlot]]:
    """
    依星期分組

    返回:
        Dict[int, List[TimeSlot]]: 星期索引 -> 時段列表（星期由小到大，組內保持原順序）
    """
    groups: Dict[int, List[TimeSlot]] = {}
    for slot in slots:
        groups.setdefault(slot.day, []).append(slot)
    return dict(sorted(groups.items()))


def merge_consecutive_slots(slots: List[TimeSlot], respect_priority: bool = True) -> List[TimeSlot]:
    """
    合併同一天內首尾相接的時段

    參數:
        slots: 同一天、已依 start 由小到大排序的時段
        respect_priority: 為 True 時只合併優先順序相同的時段

    返回:
        List[TimeSlot]: 合併後的時段
    """
    if not slots:
        return []

    merged: List[TimeSlot] = []
    current = slots[0].model_copy()

    for slot in slots[1:]:
        same_priority = slot.priority == current.priority
        if slot.start == current.end and (same_priority or not respect_priority):
            current = current.model_copy(update={"end": slot.end})
        else:
            merged.append(current)
            current = slot.model_copy()

    merged.append(current)
    return merged


def merge_time_slots(slots: Iterable[TimeSlot], respect_priority: bool = True) -> List[TimeSlot]:
    """依星期分組、排序後合併所有連續時段"""
    merged: List[TimeSlot] = []
    for day_slots in group_by_day(slots).values():
        ordered = sorted(day_slots, key=lambda slot: slot.start)
        merged.extend(merge_consecutive_slots(ordered, respect_priority=respect_priority))
    return merged


def expand_time_slots(slots: Iterable[TimeSlot], worker_id: str = "") -> List[WorkerAvailabilityCreate]:
    """
    將時段展開為每小時記錄

    [start, end) 內每個整點一筆，未設定優先順序時視為 1。
    不去除重複：重疊的時段會產生重複的記錄。
    """
    availabilities: List[WorkerAvailabilityCreate] = []
    for slot in slots:
        for hour in range(slot.start, min(slot.end, 24)):
            availabilities.append(WorkerAvailabilityCreate(
                worker_id=worker_id,
                day=slot.day,
                hour=hour,
                priority=slot.priority or 1
            ))
    return availabilities


def compress_availabilities(records: Iterable[HourRecord]) -> List[TimeSlot]:
    """
    將每小時記錄轉回時段（每小時一個時段，不合併）

    同一 (day, hour) 有多筆時取數字最小的優先順序，也就是較強的偏好。
    需要合併成較長時段時請再呼叫 merge_time_slots。
    """
    priorities: Dict[Tuple[int, int], int] = {}
    for record in records:
        key = (record.day, record.hour)
        priority = record.priority or 1
        priorities[key] = min(priorities.get(key, priority), priority)

    return [
        TimeSlot(day=day, start=hour, end=hour + 1, priority=priority)
        for (day, hour), priority in sorted(priorities.items())
    ]


def availabilities_to_time_slots(records: Iterable[HourRecord]) -> List[TimeSlot]:
    """每小時記錄轉為合併後的時段"""
    return merge_time_slots(compress_availabilities(records))


def total_hours(slots: Iterable[TimeSlot]) -> int:
    """時段總時數"""
    return sum(max(slot.end - slot.start, 0) for slot in slots)


def format_time_range(slot: TimeSlot) -> str:
    """格式化為 HH:00-HH:00"""
    return f"{slot.start:02d}:00-{slot.end:02d}:00"


def format_schedule(slots: Iterable[TimeSlot]) -> str:
    """
    將班表格式化為文字，例如 "一 09:00-12:00, 三 13:00-17:00"

    顯示用，合併時忽略優先順序。
    """
    parts = []
    for day, day_slots in group_by_day(slots).items():
        ordered = sorted(day_slots, key=lambda slot: slot.start)
        merged = merge_consecutive_slots(ordered, respect_priority=False)
        time_strings = ", ".join(format_time_range(slot) for slot in merged)
        parts.append(f"{get_day_name(day)} {time_strings}")
    return ", ".join(parts)
