"""
排班與媒合計算模組（純計算，不存取資料庫）
"""
from jobmatch.scheduling.slots import (
    intervals_overlap,
    slots_overlap,
    group_by_day,
    merge_consecutive_slots,
    merge_time_slots,
    expand_time_slots,
    compress_availabilities,
    availabilities_to_time_slots,
    total_hours,
    format_schedule,
)
from jobmatch.scheduling.scoring import (
    calculate_coverage_score,
    calculate_weighted_score,
    calculate_match_percentage,
    get_match_quality,
    get_matching_score_label,
    summarize_availabilities,
)
from jobmatch.scheduling.grid import ScheduleGridController

__all__ = [
    "intervals_overlap",
    "slots_overlap",
    "group_by_day",
    "merge_consecutive_slots",
    "merge_time_slots",
    "expand_time_slots",
    "compress_availabilities",
    "availabilities_to_time_slots",
    "total_hours",
    "format_schedule",
    "calculate_coverage_score",
    "calculate_weighted_score",
    "calculate_match_percentage",
    "get_match_quality",
    "get_matching_score_label",
    "summarize_availabilities",
    "ScheduleGridController",
]
