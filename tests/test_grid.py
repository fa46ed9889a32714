"""
排班表格互動控制測試
"""
from jobmatch.models.schemas import TimeSlot
from jobmatch.scheduling.grid import ScheduleGridController


def cells(controller):
    return [(s.day, s.start, s.priority) for s in controller.time_slots]


def drag(controller, anchor, current):
    controller.begin_drag(*anchor)
    controller.update_drag(*current)
    return controller.end_drag()


class TestClickCycle:
    """點擊循環"""

    def test_click_cycles_through_priorities(self):
        controller = ScheduleGridController()

        assert controller.click_cell(2, 9) is True
        assert controller.get_cell_priority(2, 9) == 1

        controller.click_cell(2, 9)
        assert controller.get_cell_priority(2, 9) == 2

        controller.click_cell(2, 9)
        assert controller.get_cell_priority(2, 9) is None
        assert controller.time_slots == []

    def test_click_creates_one_hour_slot(self):
        controller = ScheduleGridController()
        controller.click_cell(6, 23)
        time_slot = controller.time_slots[0]
        assert (time_slot.day, time_slot.start, time_slot.end, time_slot.priority) == (6, 23, 24, 1)

    def test_slot_without_priority_reads_as_one(self):
        controller = ScheduleGridController([TimeSlot(day=1, start=9, end=10)])
        assert controller.get_cell_priority(1, 9) == 1
        controller.click_cell(1, 9)
        assert controller.get_cell_priority(1, 9) == 2

    def test_multi_hour_slots_are_split_into_cells(self):
        controller = ScheduleGridController([TimeSlot(day=1, start=9, end=12, priority=2)])
        assert cells(controller) == [(1, 9, 2), (1, 10, 2), (1, 11, 2)]

    def test_invalid_cell_is_ignored(self):
        controller = ScheduleGridController()
        assert controller.click_cell(7, 9) is False
        assert controller.click_cell(1, 24) is False
        assert controller.time_slots == []

    def test_read_only_ignores_clicks(self):
        controller = ScheduleGridController([TimeSlot(day=1, start=9, end=10, priority=1)], read_only=True)
        assert controller.click_cell(1, 9) is False
        assert controller.begin_drag(1, 9) is False
        assert controller.get_cell_priority(1, 9) == 1

    def test_max_selections_refuses_new_cells(self):
        controller = ScheduleGridController(max_selections=1)
        controller.click_cell(1, 9)
        assert controller.click_cell(1, 10) is False
        assert len(controller.time_slots) == 1
        # 既有格子仍可循環
        assert controller.click_cell(1, 9) is True


class TestDragSelection:
    """拖曳選取"""

    def test_drag_over_empty_cells_adds_them(self):
        controller = ScheduleGridController()
        assert drag(controller, (2, 5), (2, 7)) is True
        assert cells(controller) == [(2, 5, 1), (2, 6, 1), (2, 7, 1)]

    def test_repeated_drag_demotes_then_removes(self):
        controller = ScheduleGridController()
        drag(controller, (2, 5), (2, 7))

        drag(controller, (2, 5), (2, 7))
        assert cells(controller) == [(2, 5, 2), (2, 6, 2), (2, 7, 2)]

        drag(controller, (2, 5), (2, 7))
        assert controller.time_slots == []

    def test_drag_priority_from_anchor(self):
        controller = ScheduleGridController([TimeSlot(day=1, start=9, end=10, priority=1)])
        controller.begin_drag(1, 9)
        assert controller.drag_priority == 2
        controller.cancel_drag()

        controller.begin_drag(1, 10)
        assert controller.drag_priority == 1

    def test_drag_from_priority_one_anchor_sets_new_cells_to_two(self):
        controller = ScheduleGridController([TimeSlot(day=1, start=9, end=10, priority=1)])
        drag(controller, (1, 9), (1, 11))
        assert cells(controller) == [(1, 9, 2), (1, 10, 2), (1, 11, 2)]

    def test_drag_selects_rectangle_in_any_direction(self):
        controller = ScheduleGridController()
        controller.begin_drag(3, 10)
        controller.update_drag(1, 8)
        assert controller.selection_bounds() == (1, 3, 8, 10)
        assert controller.is_highlighted(2, 9)
        assert not controller.is_highlighted(4, 9)
        controller.end_drag()
        assert len(controller.time_slots) == 9

    def test_cells_outside_rectangle_untouched(self):
        controller = ScheduleGridController([TimeSlot(day=0, start=0, end=1, priority=2)])
        drag(controller, (1, 9), (2, 10))
        assert controller.get_cell_priority(0, 0) == 2

    def test_mixed_cells_resolve_individually(self):
        controller = ScheduleGridController([
            TimeSlot(day=4, start=9, end=10, priority=1),
            TimeSlot(day=4, start=10, end=11, priority=2),
        ])
        drag(controller, (4, 8), (4, 10))
        assert cells(controller) == [(4, 8, 1), (4, 9, 2)]

    def test_pointer_up_without_drag_is_noop(self):
        controller = ScheduleGridController()
        assert controller.end_drag() is False
        assert controller.is_dragging is False

    def test_end_drag_clears_drag_state(self):
        controller = ScheduleGridController()
        controller.begin_drag(1, 1)
        assert controller.is_dragging
        controller.end_drag()
        assert not controller.is_dragging
        assert controller.selection_bounds() is None

    def test_pointer_outside_grid_keeps_last_cell(self):
        controller = ScheduleGridController()
        controller.begin_drag(1, 5)
        controller.update_drag(1, 6)
        controller.update_drag(9, 30)
        controller.end_drag()
        assert cells(controller) == [(1, 5, 1), (1, 6, 1)]

    def test_cancel_drag_discards_selection(self):
        controller = ScheduleGridController()
        controller.begin_drag(1, 5)
        controller.update_drag(1, 8)
        controller.cancel_drag()
        assert controller.end_drag() is False
        assert controller.time_slots == []


class TestChangeCallback:
    """變更通知"""

    def test_on_change_receives_new_slots(self):
        received = []
        controller = ScheduleGridController(on_change=received.append)
        controller.click_cell(1, 9)
        drag(controller, (2, 5), (2, 6))
        assert len(received) == 2
        assert [(s.day, s.start) for s in received[-1]] == [(1, 9), (2, 5), (2, 6)]

    def test_no_callback_when_nothing_changes(self):
        received = []
        controller = ScheduleGridController(on_change=received.append)
        controller.click_cell(8, 9)
        controller.end_drag()
        assert received == []

    def test_reset_and_clear(self):
        received = []
        controller = ScheduleGridController(on_change=received.append)
        controller.reset([TimeSlot(day=1, start=9, end=11, priority=1)])
        assert len(controller.time_slots) == 2
        controller.clear()
        assert controller.time_slots == []
        assert len(received) == 2
