import calendar
from datetime import date
from types import MappingProxyType

import pytest

from app.core.exceptions import ValidationFailedError
from app.models.milestone import MilestoneType
from app.schemas.milestone import MilestoneCreate
from app.services.calendar_grid import (
    build_month_grid,
    default_month,
    leading_blanks,
    month_start,
    shift_month,
)
from app.services.milestone import milestone_service


DEMO_MILESTONES = [
    {"title": "Kickoff Meeting", "date": "2025-01-15", "type": "kickoff"},
    {"title": "Security Review", "date": "2025-01-22", "type": "review"},
    {"title": "Final Delivery", "date": "2025-01-29", "type": "delivery"},
]


def day_cells(weeks):
    return [cell for week in weeks for cell in week if not cell.is_blank]


@pytest.mark.parametrize("year, month", [
    (2025, 1), (2025, 2), (2024, 2), (2026, 3), (2023, 12), (2021, 8),
])
def test_grid_shape(year, month):
    weeks = build_month_grid(year, month, [])

    assert all(len(week) == 7 for week in weeks)
    assert len(day_cells(weeks)) == calendar.monthrange(year, month)[1]
    assert [cell.day for cell in day_cells(weeks)] == list(range(1, len(day_cells(weeks)) + 1))
    first_week = weeks[0]
    assert sum(1 for cell in first_week if cell.is_blank) == leading_blanks(year, month)


def test_january_2025_places_demo_milestones():
    weeks = build_month_grid(2025, 1, DEMO_MILESTONES)

    # 2025-01-01 is a Wednesday
    assert leading_blanks(2025, 1) == 3
    assert [cell.day for cell in weeks[0][:4]] == [None, None, None, 1]

    by_day = {cell.day: cell.milestones for cell in day_cells(weeks)}
    assert [m["title"] for m in by_day[15]] == ["Kickoff Meeting"]
    assert [m["title"] for m in by_day[22]] == ["Security Review"]
    assert [m["title"] for m in by_day[29]] == ["Final Delivery"]
    assert sum(len(items) for items in by_day.values()) == 3


def test_milestones_outside_month_are_ignored():
    weeks = build_month_grid(2025, 2, DEMO_MILESTONES)

    assert all(cell.milestones == [] for week in weeks for cell in week)


def test_same_day_milestones_keep_input_order():
    milestones = [
        {"title": "Morning", "date": date(2025, 3, 4)},
        {"title": "Afternoon", "date": date(2025, 3, 4)},
    ]

    cell = next(c for c in day_cells(build_month_grid(2025, 3, milestones)) if c.day == 4)

    assert [m["title"] for m in cell.milestones] == ["Morning", "Afternoon"]


def test_month_starting_sunday_has_no_leading_blanks():
    # 2025-06-01 is a Sunday
    weeks = build_month_grid(2025, 6, [])
    assert weeks[0][0].day == 1


@pytest.mark.parametrize("month", [0, 13, -1])
def test_invalid_month(month):
    with pytest.raises(ValidationFailedError):
        build_month_grid(2025, month, [])


@pytest.mark.parametrize("year, month, delta, expected", [
    (2025, 1, -1, (2024, 12)),
    (2025, 12, 1, (2026, 1)),
    (2025, 6, 0, (2025, 6)),
    (2025, 3, 14, (2026, 5)),
    (2025, 3, -27, (2022, 12)),
])
def test_shift_month(year, month, delta, expected):
    assert shift_month(year, month, delta) == expected


def test_default_month_is_earliest_milestone():
    milestones = [
        {"date": "2025-03-02"},
        {"date": "2024-11-20"},
        {"date": "2025-01-15"},
    ]
    assert default_month(milestones) == (2024, 11)


def test_default_month_without_milestones_is_today():
    assert default_month([], today=date(2026, 10, 19)) == (2026, 10)


class TestCalendarService:

    def test_calendar_defaults_to_first_milestone_month(self, db, make_client):
        created = make_client()
        for item in DEMO_MILESTONES:
            milestone_service.create_milestone(db, created.id, MilestoneCreate(**item))

        grid = milestone_service.get_calendar(db, created.id)

        assert (grid.year, grid.month, grid.month_name) == (2025, 1, "January")
        assert grid.weekdays == ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]
        assert grid.previous == date(2024, 12, 1)
        assert grid.next == date(2025, 2, 1)
        cell = next(c for week in grid.weeks for c in week if c.day == 15)
        assert cell.date == date(2025, 1, 15)
        assert [m.type for m in cell.milestones] == [MilestoneType.kickoff]

    def test_calendar_explicit_month(self, db, make_client):
        created = make_client()

        grid = milestone_service.get_calendar(db, created.id, year=2025, month=2)

        assert grid.month_name == "February"
        assert sum(1 for week in grid.weeks for c in week if c.day is not None) == 28


def test_month_start_outside_date_range():
    assert month_start(9999, 12) == date(9999, 12, 1)
    assert month_start(10000, 1) is None
    assert month_start(0, 12) is None


def test_milestones_as_read_only_mappings():
    milestones = [MappingProxyType({"title": "Kickoff Meeting", "date": "2025-01-15"})]

    cell = next(c for c in day_cells(build_month_grid(2025, 1, milestones)) if c.day == 15)

    assert [m["title"] for m in cell.milestones] == ["Kickoff Meeting"]
