"""
星期編碼（Sunday=0 ... Saturday=6）

所有星期字串轉索引只在資料進入系統時做一次（見 TimeSlot 驗證器），
內部比較一律使用整數索引。
"""
from typing import Any, Union

DAYS_PER_WEEK = 7
HOURS_PER_DAY = 24

DAY_KEYS = ["sunday", "monday", "tuesday", "wednesday", "thursday", "friday", "saturday"]
DAY_NAMES = ["日", "一", "二", "三", "四", "五", "六"]

_DAY_INDEX = {key: index for index, key in enumerate(DAY_KEYS)}
# 常見縮寫
_DAY_INDEX.update({key[:3]: index for index, key in enumerate(DAY_KEYS)})


def get_day_index(day: Union[int, float, str, None]) -> Any:
    """
    將星期轉為索引

    參數:
        day: 整數索引、整數值的浮點數（3.0）、數字字串（"3"）或英文星期名稱（"monday" / "mon"）

    返回:
        0-6 的索引；無法辨識的名稱視為 0。其他型別原樣返回，交由驗證拒絕
    """
    if day is None:
        return 0
    if isinstance(day, bool):
        return int(day)
    if isinstance(day, int):
        return day
    if isinstance(day, float):
        return int(day) if day.is_integer() else day
    if not isinstance(day, str):
        return day
    value = day.strip().lower()
    if value.lstrip("-").isdigit():
        return int(value)
    return _DAY_INDEX.get(value, 0)


def get_day_name(day: int) -> str:
    """取得星期顯示名稱（日、一、二...）"""
    return DAY_NAMES[day % DAYS_PER_WEEK]
