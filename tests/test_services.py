"""
服務層測試（使用記憶體 SQLite）
"""
import pytest

from jobmatch.core.database import SessionLocal
from jobmatch.models.job_post import JobPostModel
from jobmatch.models.work_type import WorkTypeModel
from jobmatch.models.schemas import (
    CreateJobPostRequest,
    CreateWorkTypeRequest,
    TimeSlot,
    UpdateJobPostRequest,
    UpdateWorkTypeRequest,
)
from jobmatch.services.availability_service import WorkerAvailabilityService
from jobmatch.services.job_post_service import JobPostService
from jobmatch.services.matching_service import MatchingService
from jobmatch.services.work_type_service import WorkTypeService


def slot(day, start, end, priority=None):
    return TimeSlot(day=day, start=start, end=end, priority=priority)


def create_work_type(service, name="平日早班", schedules=None, employer_id="E1", **kwargs):
    return service.create_work_type(CreateWorkTypeRequest(
        employer_id=employer_id,
        name=name,
        schedules=schedules if schedules is not None else [slot(1, 9, 13)],
        **kwargs
    ))


def create_job_post(service, work_type_ids, schedule_type="smart_matching", **kwargs):
    return service.create_job_post(CreateJobPostRequest(
        employer_id="E1",
        employer_name="海景民宿",
        title="櫃檯人員",
        location="花蓮市中正路 1 號",
        schedule_type=schedule_type,
        work_type_ids=work_type_ids,
        **kwargs
    ))


class TestWorkTypeService:
    """工作類型"""

    def test_create_assigns_sequential_ids(self):
        service = WorkTypeService()
        first = create_work_type(service)
        second = create_work_type(service, name="平日晚班")
        assert first.id == "WT001"
        assert second.id == "WT002"
        assert first.created_at is not None

    def test_ids_continue_past_three_digits(self):
        db = SessionLocal()
        db.add(WorkTypeModel(id="WT999", employer_id="E1", name="舊資料", schedules=[]))
        db.commit()
        db.close()

        service = WorkTypeService()
        assert create_work_type(service).id == "WT1000"
        assert create_work_type(service).id == "WT1001"

    def test_create_requires_name(self):
        with pytest.raises(ValueError):
            create_work_type(WorkTypeService(), name="   ")

    def test_create_rejects_negative_wage(self):
        with pytest.raises(ValueError):
            create_work_type(WorkTypeService(), hourly_wage=-1)

    def test_schedules_round_trip_through_json_column(self):
        service = WorkTypeService()
        created = create_work_type(service, schedules=[slot(1, 9, 13, 1), slot(6, 22, 24)])
        loaded = service.get_work_type(created.id)
        assert [(s.day, s.start, s.end, s.priority) for s in loaded.schedules] == [
            (1, 9, 13, 1), (6, 22, 24, None)
        ]

    def test_partial_update_keeps_other_fields(self):
        service = WorkTypeService()
        created = create_work_type(service, hourly_wage=190, description="櫃檯")
        updated = service.update_work_type(created.id, UpdateWorkTypeRequest(hourly_wage=210))
        assert updated.hourly_wage == 210
        assert updated.description == "櫃檯"
        assert updated.name == created.name

    def test_update_with_empty_schedules_is_rejected(self):
        service = WorkTypeService()
        created = create_work_type(service)
        with pytest.raises(ValueError):
            service.update_work_type(created.id, UpdateWorkTypeRequest(schedules=[]))

    def test_update_missing_work_type_returns_none(self):
        assert WorkTypeService().update_work_type("WT999", UpdateWorkTypeRequest(name="x")) is None

    def test_update_schedules_merges_consecutive_slots(self):
        service = WorkTypeService()
        created = create_work_type(service)
        updated = service.update_schedules(created.id, [slot(2, 10, 11), slot(2, 9, 10), slot(4, 13, 14)])
        assert [(s.day, s.start, s.end) for s in updated.schedules] == [(2, 9, 11), (4, 13, 14)]

    def test_delete(self):
        service = WorkTypeService()
        created = create_work_type(service)
        assert service.delete_work_type(created.id) is True
        assert service.get_work_type(created.id) is None
        assert service.delete_work_type(created.id) is False

    def test_by_employer_filters_inactive(self):
        service = WorkTypeService()
        create_work_type(service, name="啟用")
        create_work_type(service, name="停用", is_active=False)
        create_work_type(service, name="其他雇主", employer_id="E2")

        active = service.get_work_types_by_employer("E1")
        assert [work_type.name for work_type in active] == ["啟用"]

        everything = service.get_work_types_by_employer("E1", include_inactive=True)
        assert {work_type.name for work_type in everything} == {"啟用", "停用"}

    def test_by_ids_keeps_order_and_skips_missing(self):
        service = WorkTypeService()
        first = create_work_type(service)
        second = create_work_type(service, name="平日晚班")
        work_types = service.get_work_types_by_ids([second.id, "WT999", first.id])
        assert [work_type.id for work_type in work_types] == [second.id, first.id]
        assert service.get_work_types_by_ids([]) == []


class TestWorkerAvailabilityService:
    """可工作時段"""

    def test_save_expands_into_hourly_records(self):
        service = WorkerAvailabilityService()
        records = service.save_worker_availabilities("W1", [slot(1, 9, 12, 1)])
        assert [(r.day, r.hour, r.priority) for r in records] == [(1, 9, 1), (1, 10, 1), (1, 11, 1)]

    def test_overlapping_slots_keep_one_record_per_hour(self):
        service = WorkerAvailabilityService()
        records = service.save_worker_availabilities("W1", [slot(1, 9, 11, 2), slot(1, 10, 12, 1)])
        assert [(r.day, r.hour, r.priority) for r in records] == [(1, 9, 2), (1, 10, 1), (1, 11, 1)]

    def test_save_replaces_previous_records(self):
        service = WorkerAvailabilityService()
        service.save_worker_availabilities("W1", [slot(1, 9, 12)])
        service.save_worker_availabilities("W2", [slot(5, 9, 10)])

        records = service.save_worker_availabilities("W1", [slot(3, 18, 19, 2)])
        assert [(r.day, r.hour, r.priority) for r in records] == [(3, 18, 2)]
        assert len(service.get_worker_availabilities("W2")) == 1

    def test_save_empty_clears_records(self):
        service = WorkerAvailabilityService()
        service.save_worker_availabilities("W1", [slot(1, 9, 12)])
        assert service.save_worker_availabilities("W1", []) == []

    def test_time_slots_merged_by_priority(self):
        service = WorkerAvailabilityService()
        service.save_worker_availabilities("W1", [slot(1, 9, 10, 2), slot(1, 10, 12, 1)])

        merged = service.get_worker_time_slots("W1")
        assert [(s.start, s.end, s.priority) for s in merged] == [(9, 10, 2), (10, 12, 1)]

        hourly = service.get_worker_time_slots("W1", merged=False)
        assert len(hourly) == 3

    def test_delete_returns_count(self):
        service = WorkerAvailabilityService()
        service.save_worker_availabilities("W1", [slot(1, 9, 12)])
        assert service.delete_worker_availabilities("W1") == 3
        assert service.get_worker_availabilities("W1") == []

    def test_summary(self):
        service = WorkerAvailabilityService()
        service.save_worker_availabilities("W1", [slot(1, 9, 11, 1), slot(2, 9, 10, 2)])
        summary = service.get_availability_summary("W1")
        assert summary.total_hours == 3
        assert summary.priority1_hours == 2
        assert summary.days_available == 2


class TestJobPostService:
    """職缺"""

    def test_create_and_get(self):
        service = JobPostService()
        created = create_job_post(service, ["WT001"])
        assert created.id == "POST001"
        assert service.get_job_post(created.id).work_type_ids == ["WT001"]

    def test_ids_continue_past_three_digits(self):
        db = SessionLocal()
        db.add(JobPostModel(id="POST999", employer_id="E1", title="舊職缺", location="花蓮市", work_type_ids=[]))
        db.commit()
        db.close()

        service = JobPostService()
        assert create_job_post(service, []).id == "POST1000"
        assert create_job_post(service, []).id == "POST1001"

    def test_create_requires_title(self):
        with pytest.raises(ValueError):
            JobPostService().create_job_post(CreateJobPostRequest(
                employer_id="E1", title=" ", location="花蓮市"
            ))

    def test_provided_coordinates_skip_geocoding(self):
        class FailingGeocoder:
            def get_coordinates(self, address):
                raise AssertionError("不應呼叫地理編碼")

        service = JobPostService(geocoding_service=FailingGeocoder())
        created = create_job_post(service, [], latitude=23.97, longitude=121.6)
        assert created.latitude == pytest.approx(23.97)

    def test_missing_coordinates_are_geocoded(self):
        class StubGeocoder:
            def get_coordinates(self, address):
                return (37.5, 127.0)

        created = create_job_post(JobPostService(geocoding_service=StubGeocoder()), [])
        assert (created.latitude, created.longitude) == (37.5, 127.0)

    def test_active_posts_exclude_closed(self):
        service = JobPostService()
        open_post = create_job_post(service, [])
        closed_post = create_job_post(service, [])
        service.update_job_post(closed_post.id, UpdateJobPostRequest(is_active=False))

        assert [post.id for post in service.get_active_job_posts()] == [open_post.id]
        assert len(service.get_job_posts_by_employer("E1")) == 2

    def test_delete(self):
        service = JobPostService()
        created = create_job_post(service, [])
        assert service.delete_job_post(created.id) is True
        assert service.delete_job_post(created.id) is False


class TestMatchingService:
    """媒合結果"""

    @pytest.fixture
    def services(self):
        work_type_service = WorkTypeService()
        availability_service = WorkerAvailabilityService()
        job_post_service = JobPostService()
        matching_service = MatchingService(work_type_service, availability_service, job_post_service)
        return work_type_service, availability_service, job_post_service, matching_service

    def test_weighted_results_sorted_by_score(self, services):
        work_type_service, availability_service, job_post_service, matching_service = services
        morning = create_work_type(work_type_service, name="早班", schedules=[slot(1, 9, 13)])
        evening = create_work_type(work_type_service, name="晚班", schedules=[slot(1, 18, 22)])
        night = create_work_type(work_type_service, name="大夜", schedules=[slot(3, 0, 6)])
        create_job_post(job_post_service, [morning.id, evening.id, night.id])

        availability_service.save_worker_availabilities("W1", [
            slot(1, 9, 11, 1), slot(1, 11, 12, 2), slot(1, 18, 19, 2)
        ])

        results = matching_service.get_recommended_jobs("W1")
        assert [result.work_type_id for result in results] == [morning.id, evening.id]

        best = results[0]
        assert best.match_score == 5
        assert best.coverage_score == 100
        assert best.detailed_score.priority1_matches == 2
        assert best.detailed_score.priority2_matches == 1
        assert best.detailed_score.total_possible_matches == 4
        assert best.detailed_score.overlap_hours == 3
        assert best.company.name == "海景民宿"

    def test_traditional_posts_are_skipped(self, services):
        work_type_service, availability_service, job_post_service, matching_service = services
        work_type = create_work_type(work_type_service)
        create_job_post(job_post_service, [work_type.id], schedule_type="traditional")
        availability_service.save_worker_availabilities("W1", [slot(1, 9, 13, 1)])

        assert matching_service.get_recommended_jobs("W1") == []

    def test_worker_without_availability_gets_nothing(self, services):
        work_type_service, _, job_post_service, matching_service = services
        work_type = create_work_type(work_type_service)
        create_job_post(job_post_service, [work_type.id])
        assert matching_service.get_recommended_jobs("W1") == []

    def test_limit(self, services):
        work_type_service, availability_service, job_post_service, matching_service = services
        ids = [create_work_type(work_type_service, name=f"班別{i}").id for i in range(3)]
        create_job_post(job_post_service, ids)
        availability_service.save_worker_availabilities("W1", [slot(1, 9, 13, 1)])
        assert len(matching_service.get_recommended_jobs("W1", limit=2)) == 2

    def test_score_work_type(self, services):
        work_type_service, availability_service, _, matching_service = services
        work_type = create_work_type(work_type_service, schedules=[slot(1, 9, 17)])
        availability_service.save_worker_availabilities("W1", [slot(1, 9, 17, 1)])

        score = matching_service.score_work_type("W1", work_type.id)
        assert score.coverage.score == 100
        assert score.weighted_score == 16
        assert score.match_percentage == 100
        assert score.match_quality == "excellent"
        assert matching_service.score_work_type("W1", "WT999") is None
