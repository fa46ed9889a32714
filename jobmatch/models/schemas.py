"""
Pydantic 資料模型（用於 API 與排班計算）
"""
from typing import Any, List, Literal, Optional
from pydantic import BaseModel, Field, model_validator

from jobmatch.core.weekdays import get_day_index

Priority = Literal[1, 2]
ScheduleType = Literal["traditional", "flexible", "smart_matching"]


def _hour_from_time_string(value: Any) -> Optional[int]:
    """從 "09:00" 形式的字串取出小時"""
    if not isinstance(value, str) or not value:
        return None
    try:
        return int(value.split(":")[0])
    except ValueError:
        return None


class TimeSlot(BaseModel):
    """每週重複的時段（day, start, end, priority）"""
    day: int = Field(..., ge=0, le=6, description="星期索引，0=星期日 ... 6=星期六")
    start: int = Field(0, ge=0, le=24, description="開始小時")
    end: int = Field(0, ge=0, le=24, description="結束小時（不含），24 代表午夜")
    priority: Optional[Priority] = Field(None, description="1=非常偏好, 2=偏好, 未設定=無偏好")

    @model_validator(mode="before")
    @classmethod
    def normalize_shape(cls, data: Any) -> Any:
        """
        統一處理不同來源的時段格式

        - day 可能是英文星期名稱或數字字串
        - start/end 缺少時改用 startTime/endTime，仍缺少則為 0
        - 明確的 end=0 且 start>0 表示跨到午夜（23:00-00:00），存為 24
        """
        if not isinstance(data, dict):
            return data
        data = dict(data)
        data["day"] = get_day_index(data.get("day"))

        start = data.get("start")
        if start is None:
            start = _hour_from_time_string(data.get("startTime"))
        end = data.get("end")
        if end is None:
            end = _hour_from_time_string(data.get("endTime"))

        data["start"] = 0 if start is None else start
        if end is None:
            data["end"] = 0
        elif end in (0, "0") and data["start"] not in (0, "0"):
            data["end"] = 24
        else:
            data["end"] = end
        return data


class WorkerAvailabilityCreate(BaseModel):
    """單一小時的可工作時段（尚未儲存）"""
    worker_id: str
    day: int = Field(..., ge=0, le=6)
    hour: int = Field(..., ge=0, le=23)
    priority: Priority = 1


class WorkerAvailability(WorkerAvailabilityCreate):
    """單一小時的可工作時段（已儲存）"""
    id: int
    created_at: Optional[str] = None


class SaveAvailabilityRequest(BaseModel):
    """儲存可工作時段請求（以時段表示）"""
    time_slots: List[TimeSlot] = Field(default_factory=list, description="可工作時段")


class DayHours(BaseModel):
    """每日可工作時數"""
    day: int
    name: str
    hours: int


class AvailabilitySummary(BaseModel):
    """可工作時段統計"""
    total_hours: int
    priority1_hours: int
    priority2_hours: int
    days_available: int
    day_breakdown: List[DayHours]


class WorkType(BaseModel):
    """工作類型資料模型"""
    id: str
    employer_id: str
    name: str
    description: Optional[str] = None
    hourly_wage: int = 0
    is_active: bool = True
    schedules: List[TimeSlot] = Field(default_factory=list)
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class CreateWorkTypeRequest(BaseModel):
    """建立工作類型請求"""
    employer_id: str = Field(..., description="雇主 ID")
    name: str = Field(..., description="工作類型名稱")
    description: Optional[str] = Field(None, description="說明")
    hourly_wage: int = Field(0, description="時薪")
    is_active: bool = Field(True, description="是否啟用")
    schedules: List[TimeSlot] = Field(default_factory=list, description="每週班表")


class UpdateWorkTypeRequest(BaseModel):
    """更新工作類型請求（只更新有提供的欄位）"""
    name: Optional[str] = None
    description: Optional[str] = None
    hourly_wage: Optional[int] = None
    is_active: Optional[bool] = None
    schedules: Optional[List[TimeSlot]] = None


class SaveSchedulesRequest(BaseModel):
    """儲存工作類型班表請求"""
    schedules: List[TimeSlot] = Field(..., description="每週班表")


class JobPost(BaseModel):
    """職缺資料模型"""
    id: str
    employer_id: str
    employer_name: Optional[str] = None
    title: str
    description: Optional[str] = None
    location: str
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    schedule_type: ScheduleType = "traditional"
    work_type_ids: List[str] = Field(default_factory=list)
    is_active: bool = True
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class CreateJobPostRequest(BaseModel):
    """建立職缺請求"""
    employer_id: str = Field(..., description="雇主 ID")
    employer_name: Optional[str] = Field(None, description="雇主名稱")
    title: str = Field(..., description="職缺標題")
    description: Optional[str] = Field(None, description="職缺說明")
    location: str = Field(..., description="工作地點")
    latitude: Optional[float] = Field(None, description="緯度（可選，未提供時會自動從地址取得）")
    longitude: Optional[float] = Field(None, description="經度（可選，未提供時會自動從地址取得）")
    schedule_type: ScheduleType = Field("traditional", description="排班方式")
    work_type_ids: List[str] = Field(default_factory=list, description="工作類型 ID 列表")
    is_active: bool = Field(True, description="是否開放")


class UpdateJobPostRequest(BaseModel):
    """更新職缺請求（只更新有提供的欄位）"""
    employer_name: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    location: Optional[str] = None
    schedule_type: Optional[ScheduleType] = None
    work_type_ids: Optional[List[str]] = None
    is_active: Optional[bool] = None


class DayMatchDetail(BaseModel):
    """單日覆蓋率明細"""
    day: int
    matched: int
    total: int
    percentage: float


class MatchingScoreResult(BaseModel):
    """覆蓋率計算結果（0-100）"""
    score: int
    matched_slots: int
    total_slots: int
    details: List[DayMatchDetail] = Field(default_factory=list)


class DetailedScore(BaseModel):
    """加權分數明細"""
    priority1_matches: int
    priority2_matches: int
    total_possible_matches: int
    overlap_hours: int


class CompanyInfo(BaseModel):
    """公司資訊"""
    name: Optional[str] = None
    location: Optional[str] = None


class MatchingResult(BaseModel):
    """媒合結果（即時計算，不儲存）"""
    job_post_id: str
    work_type_id: str
    work_type_name: Optional[str] = None
    match_score: int
    coverage_score: int
    match_quality: str
    detailed_score: DetailedScore
    company: CompanyInfo
    schedule_preview: List[TimeSlot] = Field(default_factory=list)


class ScoreRequest(BaseModel):
    """以時段直接計算媒合分數的請求"""
    availabilities: List[TimeSlot] = Field(default_factory=list, description="求職者可工作時段")
    requirements: List[TimeSlot] = Field(default_factory=list, description="工作需求時段")


class ScoreResponse(BaseModel):
    """媒合分數回應"""
    coverage: MatchingScoreResult
    coverage_label: str
    weighted_score: int
    total_hours: int
    match_percentage: int
    match_quality: str


class GridClickRequest(BaseModel):
    """排班表格點擊請求"""
    time_slots: List[TimeSlot] = Field(default_factory=list)
    day: int
    hour: int
    max_selections: Optional[int] = None


class GridDragRequest(BaseModel):
    """排班表格拖曳請求"""
    time_slots: List[TimeSlot] = Field(default_factory=list)
    anchor_day: int
    anchor_hour: int
    current_day: int
    current_hour: int
    max_selections: Optional[int] = None


class GridResponse(BaseModel):
    """排班表格操作結果"""
    time_slots: List[TimeSlot]
    merged_time_slots: List[TimeSlot]
    changed: bool


class AddressCandidate(BaseModel):
    """地址搜尋結果"""
    road_address: Optional[str] = None
    jibun_address: Optional[str] = None
    english_address: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None


class GeocodeResponse(BaseModel):
    """地址搜尋回應"""
    query: str
    addresses: List[AddressCandidate] = Field(default_factory=list)
    success: bool
    message: Optional[str] = None
