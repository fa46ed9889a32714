"""
服務層模組
"""
from jobmatch.services.work_type_service import WorkTypeService
from jobmatch.services.availability_service import WorkerAvailabilityService
from jobmatch.services.job_post_service import JobPostService
from jobmatch.services.matching_service import MatchingService
from jobmatch.services.geocoding_service import GeocodingService
from jobmatch.services.save_coordinator import SaveCoordinator, SaveInProgressError, SaveState

__all__ = [
    "WorkTypeService",
    "WorkerAvailabilityService",
    "JobPostService",
    "MatchingService",
    "GeocodingService",
    "SaveCoordinator",
    "SaveInProgressError",
    "SaveState",
]
