"""
資料模型模組
"""
from jobmatch.models.work_type import WorkTypeModel
from jobmatch.models.availability import WorkerAvailabilityModel
from jobmatch.models.job_post import JobPostModel
from jobmatch.models.schemas import (
    TimeSlot,
    WorkerAvailability,
    WorkerAvailabilityCreate,
    WorkType,
    CreateWorkTypeRequest,
    UpdateWorkTypeRequest,
    JobPost,
    CreateJobPostRequest,
    UpdateJobPostRequest,
    MatchingScoreResult,
    MatchingResult,
)

__all__ = [
    "WorkTypeModel",
    "WorkerAvailabilityModel",
    "JobPostModel",
    "TimeSlot",
    "WorkerAvailability",
    "WorkerAvailabilityCreate",
    "WorkType",
    "CreateWorkTypeRequest",
    "UpdateWorkTypeRequest",
    "JobPost",
    "CreateJobPostRequest",
    "UpdateJobPostRequest",
    "MatchingScoreResult",
    "MatchingResult",
]
