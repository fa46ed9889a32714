"""
媒合分數計算

兩種計分方式互不通用：
- calculate_coverage_score: 需求時段被涵蓋的百分比（0-100）
- calculate_weighted_score: 逐小時加權累加（無上限的整數）
"""
from typing import Dict, Iterable, List, Sequence, Tuple

from jobmatch.core.weekdays import DAYS_PER_WEEK, DAY_NAMES
from jobmatch.models.schemas import (
    AvailabilitySummary,
    DayHours,
    DayMatchDetail,
    MatchingScoreResult,
    TimeSlot,
)
from jobmatch.scheduling.slots import HourRecord, group_by_day, intervals_overlap

PRIORITY_WEIGHTS = {1: 2, 2: 1}


def calculate_coverage_score(
    availabilities: Sequence[TimeSlot],
    requirements: Sequence[TimeSlot],
) -> MatchingScoreResult:
    """
    計算需求時段的覆蓋率

    同一天內只要有任一可工作時段與需求時段重疊（哪怕只有一小時），
    該需求時段即算符合；分數以符合的時段數計算，不以時數計算。

    參數:
        availabilities: 求職者可工作時段
        requirements: 工作需求時段

    返回:
        MatchingScoreResult: score 為 round(符合數 / 需求數 * 100)
    """
    if not availabilities or not requirements:
        return MatchingScoreResult(
            score=0,
            matched_slots=0,
            total_slots=len(requirements),
            details=[]
        )

    available_by_day = group_by_day(availabilities)
    total_matched = 0
    details: List[DayMatchDetail] = []

    for day, day_requirements in group_by_day(requirements).items():
        day_availabilities = available_by_day.get(day, [])
        day_matched = 0

        for requirement in day_requirements:
            if any(
                intervals_overlap(slot.start, slot.end, requirement.start, requirement.end)
                for slot in day_availabilities
            ):
                day_matched += 1

        total_matched += day_matched
        details.append(DayMatchDetail(
            day=day,
            matched=day_matched,
            total=len(day_requirements),
            percentage=day_matched / len(day_requirements) * 100
        ))

    return MatchingScoreResult(
        score=round(total_matched / len(requirements) * 100),
        matched_slots=total_matched,
        total_slots=len(requirements),
        details=details
    )


def _index_by_hour(records: Iterable[HourRecord]) -> Dict[Tuple[int, int], int]:
    """(day, hour) -> priority，重複時保留第一筆"""
    index: Dict[Tuple[int, int], int] = {}
    for record in records:
        index.setdefault((record.day, record.hour), record.priority)
    return index


def calculate_weighted_score(
    availabilities: Sequence[HourRecord],
    requirements: Sequence[TimeSlot],
) -> int:
    """
    計算加權分數

    需求時段內的每個小時查找相同 (day, hour) 的可工作記錄：
    優先順序 1 加 2 分、優先順序 2 加 1 分、沒有記錄不加分。
    """
    if not availabilities or not requirements:
        return 0

    index = _index_by_hour(availabilities)
    score = 0
    for requirement in requirements:
        for hour in range(requirement.start, requirement.end):
            priority = index.get((requirement.day, hour))
            if priority is not None:
                score += PRIORITY_WEIGHTS.get(priority, 1)
    return score


def count_priority_matches(
    availabilities: Sequence[HourRecord],
    requirements: Sequence[TimeSlot],
) -> Dict[int, int]:
    """
    統計需求時段內各優先順序的符合時數

    返回:
        Dict[int, int]: {1: 非常偏好時數, 2: 偏好時數}
    """
    index = _index_by_hour(availabilities)
    counts = {1: 0, 2: 0}
    for requirement in requirements:
        for hour in range(requirement.start, requirement.end):
            priority = index.get((requirement.day, hour))
            if priority in counts:
                counts[priority] += 1
    return counts


def calculate_match_percentage(match_score: int, total_hours: int) -> int:
    """加權分數換算百分比"""
    if total_hours == 0:
        return 0
    return round(match_score / total_hours * 100)


def get_match_quality(match_percentage: int) -> str:
    """依百分比取得媒合品質等級"""
    if match_percentage >= 90:
        return "excellent"
    if match_percentage >= 75:
        return "good"
    if match_percentage >= 50:
        return "fair"
    if match_percentage >= 25:
        return "poor"
    return "very_poor"


def get_matching_score_label(score: int) -> str:
    """覆蓋率分數的顯示文字"""
    if score >= 80:
        return "非常高"
    if score >= 60:
        return "高"
    if score >= 40:
        return "普通"
    if score >= 20:
        return "低"
    return "非常低"


def summarize_availabilities(records: Sequence[HourRecord]) -> AvailabilitySummary:
    """統計可工作時數（依優先順序、依星期）"""
    hours_per_day = [0] * DAYS_PER_WEEK
    for record in records:
        hours_per_day[record.day % DAYS_PER_WEEK] += 1

    return AvailabilitySummary(
        total_hours=len(records),
        priority1_hours=sum(1 for record in records if record.priority == 1),
        priority2_hours=sum(1 for record in records if record.priority == 2),
        days_available=len({record.day for record in records}),
        day_breakdown=[
            DayHours(day=day, name=DAY_NAMES[day], hours=hours)
            for day, hours in enumerate(hours_per_day)
        ]
    )
