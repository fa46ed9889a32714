"""
媒合服務
"""
from typing import List, Optional, Sequence
from sqlalchemy.orm import Session

from jobmatch.config import RECOMMENDATION_LIMIT
from jobmatch.core.logger import setup_logger
from jobmatch.models.schemas import (
    CompanyInfo,
    DetailedScore,
    JobPost,
    MatchingResult,
    ScoreResponse,
    TimeSlot,
    WorkType,
)
from jobmatch.scheduling.scoring import (
    PRIORITY_WEIGHTS,
    calculate_coverage_score,
    calculate_match_percentage,
    calculate_weighted_score,
    count_priority_matches,
    get_match_quality,
    get_matching_score_label,
)
from jobmatch.scheduling.slots import HourRecord, compress_availabilities, expand_time_slots, total_hours
from jobmatch.services.availability_service import WorkerAvailabilityService
from jobmatch.services.job_post_service import JobPostService
from jobmatch.services.work_type_service import WorkTypeService

# 設置 logger
logger = setup_logger(__name__)

# 每小時可得的最高加權分數（優先順序 1）
MAX_HOURLY_WEIGHT = max(PRIORITY_WEIGHTS.values())


def score_records(records: Sequence[HourRecord], requirements: Sequence[TimeSlot]) -> ScoreResponse:
    """以每小時記錄與需求時段計算兩種分數"""
    coverage = calculate_coverage_score(compress_availabilities(records), requirements)
    weighted_score = calculate_weighted_score(records, requirements)
    hours = total_hours(requirements)
    match_percentage = calculate_match_percentage(weighted_score, hours * MAX_HOURLY_WEIGHT)

    return ScoreResponse(
        coverage=coverage,
        coverage_label=get_matching_score_label(coverage.score),
        weighted_score=weighted_score,
        total_hours=hours,
        match_percentage=match_percentage,
        match_quality=get_match_quality(match_percentage)
    )


def score_time_slots(availabilities: Sequence[TimeSlot], requirements: Sequence[TimeSlot]) -> ScoreResponse:
    """以可工作時段與需求時段計算兩種分數"""
    return score_records(expand_time_slots(availabilities), requirements)


class MatchingService:
    """求職者與職缺媒合服務"""

    def __init__(
        self,
        work_type_service: Optional[WorkTypeService] = None,
        availability_service: Optional[WorkerAvailabilityService] = None,
        job_post_service: Optional[JobPostService] = None
    ):
        self.work_type_service = work_type_service or WorkTypeService()
        self.availability_service = availability_service or WorkerAvailabilityService()
        self.job_post_service = job_post_service or JobPostService()

    def build_result(self, job_post: JobPost, work_type: WorkType,
                     records: Sequence[HourRecord]) -> MatchingResult:
        """計算單一職缺、單一工作類型的媒合結果"""
        scores = score_records(records, work_type.schedules)
        priority_matches = count_priority_matches(records, work_type.schedules)

        return MatchingResult(
            job_post_id=job_post.id,
            work_type_id=work_type.id,
            work_type_name=work_type.name,
            match_score=scores.weighted_score,
            coverage_score=scores.coverage.score,
            match_quality=scores.match_quality,
            detailed_score=DetailedScore(
                priority1_matches=priority_matches[1],
                priority2_matches=priority_matches[2],
                total_possible_matches=scores.total_hours,
                overlap_hours=priority_matches[1] + priority_matches[2]
            ),
            company=CompanyInfo(name=job_post.employer_name, location=job_post.location),
            schedule_preview=work_type.schedules
        )

    def calculate_matching_results(self, worker_id: str, job_posts: List[JobPost],
                                   db: Optional[Session] = None) -> List[MatchingResult]:
        """
        計算求職者與職缺的媒合結果

        只計算排班方式為 smart_matching 且有工作類型的職缺，
        加權分數為 0 的結果不列入，依加權分數由高到低排序。
        """
        records = self.availability_service.get_worker_availabilities(worker_id, db)
        if not records:
            logger.debug(f"calculate_matching_results: worker_id: {worker_id} 沒有可工作時段")
            return []

        results: List[MatchingResult] = []
        for job_post in job_posts:
            if job_post.schedule_type != "smart_matching" or not job_post.work_type_ids:
                continue

            work_types = self.work_type_service.get_work_types_by_ids(job_post.work_type_ids, db)
            for work_type in work_types:
                result = self.build_result(job_post, work_type, records)
                if result.match_score > 0:
                    results.append(result)

        results.sort(key=lambda result: result.match_score, reverse=True)
        logger.debug(f"calculate_matching_results: worker_id: {worker_id}, 結果: {len(results)} 筆")
        return results

    def get_recommended_jobs(self, worker_id: str, limit: int = RECOMMENDATION_LIMIT,
                             db: Optional[Session] = None) -> List[MatchingResult]:
        """取得推薦職缺（開放中的職缺，依媒合分數取前 limit 筆）"""
        job_posts = self.job_post_service.get_active_job_posts(db)
        return self.calculate_matching_results(worker_id, job_posts, db)[:limit]

    def score_work_type(self, worker_id: str, work_type_id: str,
                        db: Optional[Session] = None) -> Optional[ScoreResponse]:
        """計算求職者與單一工作類型的分數，工作類型不存在時返回 None"""
        work_type = self.work_type_service.get_work_type(work_type_id, db)
        if work_type is None:
            return None
        records = self.availability_service.get_worker_availabilities(worker_id, db)
        return score_records(records, work_type.schedules)
