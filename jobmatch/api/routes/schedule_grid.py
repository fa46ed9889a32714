"""
排班表格操作 API 路由（無狀態，傳入目前時段、回傳操作後的時段）
"""
from fastapi import APIRouter

from jobmatch.models.schemas import GridClickRequest, GridDragRequest, GridResponse
from jobmatch.scheduling.grid import ScheduleGridController
from jobmatch.scheduling.slots import merge_time_slots

router = APIRouter(prefix="/api/schedule-grid", tags=["排班表格"])


def _grid_response(controller: ScheduleGridController, changed: bool) -> GridResponse:
    time_slots = controller.time_slots
    return GridResponse(
        time_slots=time_slots,
        merged_time_slots=merge_time_slots(time_slots),
        changed=changed
    )


@router.post("/click", response_model=GridResponse)
def click_cell(request: GridClickRequest):
    """點擊格子（未設定 -> 1 -> 2 -> 未設定）"""
    controller = ScheduleGridController(request.time_slots, max_selections=request.max_selections)
    changed = controller.click_cell(request.day, request.hour)
    return _grid_response(controller, changed)


@router.post("/drag", response_model=GridResponse)
def drag_cells(request: GridDragRequest):
    """拖曳選取矩形範圍"""
    controller = ScheduleGridController(request.time_slots, max_selections=request.max_selections)
    changed = False
    if controller.begin_drag(request.anchor_day, request.anchor_hour):
        controller.update_drag(request.current_day, request.current_hour)
        changed = controller.end_drag()
    return _grid_response(controller, changed)
