import asyncio
from datetime import datetime

import pytest

from conftest import NOW, OTHER_USER_ID, USER_ID, InMemoryRecordStore, goal, make_service, meal, run, workout
from models.enums import WorkoutCategory
from schemas.statistics import NoActiveGoalOut
from services.statistics import InvalidRangeError, StoreUnavailableError
from services.statistics.service import gather_all


def test_empty_week_report(service) -> None:
    report = run(service.get_weekly_stats(USER_ID))

    assert (report.start_date, report.end_date) == ("2024-05-13", "2024-05-19")
    assert report.total_workouts == 0
    assert report.total_calories_burned == 0
    assert report.total_calories_consumed == 0
    assert len(report.daily_data) == 7
    for day in report.daily_data:
        assert day.workout.session_count == 0
        assert day.workout.total_duration == 0
        assert day.nutrition.entry_count == 0


def test_weekly_report_with_one_wednesday_workout() -> None:
    store = InMemoryRecordStore(records=[workout(datetime(2024, 5, 15, 8), duration=45, burned=300)])

    data = run(make_service(store).get_weekly_stats(USER_ID)).model_dump(by_alias=True)

    assert data["totalWorkoutDuration"] == 45
    assert data["totalCaloriesBurned"] == 300
    wednesday = data["dailyData"][2]
    assert (wednesday["date"], wednesday["dayName"]) == ("2024-05-15", "Wednesday")
    assert wednesday["workout"]["sessionCount"] == 1
    assert [d["workout"]["sessionCount"] for d in data["dailyData"]] == [0, 0, 1, 0, 0, 0, 0]


def test_weekly_report_mixes_workouts_and_meals_of_this_user_only() -> None:
    store = InMemoryRecordStore(
        records=[
            workout(datetime(2024, 5, 13, 7), duration=30, burned=200),
            meal(datetime(2024, 5, 13, 8), calories=450.5),
            meal(datetime(2024, 5, 19, 21), calories=600),
            workout(datetime(2024, 5, 14, 7), duration=60, burned=500, user_id=OTHER_USER_ID),
        ]
    )

    report = run(make_service(store).get_weekly_stats(USER_ID))

    assert report.total_workouts == 1
    assert report.total_calories_consumed == 1050.5
    assert report.daily_data[0].nutrition.entry_count == 1
    assert report.daily_data[6].nutrition.total_calories == 600


def test_weekly_report_is_idempotent() -> None:
    store = InMemoryRecordStore(records=[workout(NOW, duration=20, burned=0.1), meal(NOW, calories=0.2)])
    service = make_service(store)

    first = run(service.get_weekly_stats(USER_ID, "2024-05-14"))
    second = run(service.get_weekly_stats(USER_ID, "2024-05-14"))

    assert first.model_dump_json(by_alias=True) == second.model_dump_json(by_alias=True)


def test_explicit_range_gives_totals_only() -> None:
    store = InMemoryRecordStore(
        records=[workout(datetime(2024, 5, 1, 9), duration=15), workout(datetime(2024, 5, 20, 9), duration=25)]
    )

    report = run(make_service(store).get_weekly_stats(USER_ID, "2024-05-01", "2024-05-20"))

    assert (report.start_date, report.end_date) == ("2024-05-01", "2024-05-20")
    assert report.total_workouts == 2
    assert report.total_workout_duration == 40
    assert report.daily_data == []
    _, start, end = store.calls[0][:3]
    assert (start, end) == (datetime(2024, 5, 1), datetime(2024, 5, 20, 23, 59, 59, 999999))


def test_start_date_alone_selects_its_week() -> None:
    report = run(make_service(InMemoryRecordStore()).get_weekly_stats(USER_ID, "2024-02-29"))

    assert (report.start_date, report.end_date) == ("2024-02-26", "2024-03-03")
    assert len(report.daily_data) == 7


@pytest.mark.parametrize(
    "start, end",
    [(None, "2024-05-19"), ("2024-05-19", "2024-05-13"), ("13/05/2024", None), ("2024-05-13", "soon")],
)
def test_invalid_weekly_input_fails_before_any_query(start, end) -> None:
    store = InMemoryRecordStore()

    with pytest.raises(InvalidRangeError):
        run(make_service(store).get_weekly_stats(USER_ID, start, end))
    assert store.calls == []


def test_monthly_report_for_month_starting_mid_week() -> None:
    store = InMemoryRecordStore(
        records=[
            workout(datetime(2024, 5, 1, 6), duration=20, burned=150),
            workout(datetime(2024, 5, 31, 23, 59), duration=40, burned=350),
            meal(datetime(2024, 5, 6, 0, 0), calories=300),
            workout(datetime(2024, 6, 1, 0, 0), duration=99),
        ]
    )

    report = run(make_service(store).get_monthly_stats(USER_ID, 5, 2024))

    assert (report.month, report.year, report.month_name) == (5, 2024, "May")
    assert report.weekly_data[0].week_start == "2024-05-01"
    assert report.weekly_data[0].week_end == "2024-05-05"
    assert report.weekly_data[-1].week_end == "2024-05-31"
    assert report.total_workouts == 2
    assert report.total_workout_duration == 60
    assert [w.workout.session_count for w in report.weekly_data] == [1, 0, 0, 0, 1]
    assert report.weekly_data[1].nutrition.total_calories == 300


def test_monthly_defaults_to_current_month() -> None:
    report = run(make_service(InMemoryRecordStore()).get_monthly_stats(USER_ID))

    assert (report.month, report.year) == (5, 2024)
    assert len(report.weekly_data) == 5


def test_invalid_month_fails_before_any_query() -> None:
    store = InMemoryRecordStore()

    with pytest.raises(InvalidRangeError):
        run(make_service(store).get_monthly_stats(USER_ID, 13, 2024))
    assert store.calls == []


def test_dashboard_merges_week_month_and_goal() -> None:
    store = InMemoryRecordStore(
        records=[
            workout(datetime(2024, 5, 3, 7), burned=100),
            workout(datetime(2024, 5, 14, 7), burned=250),
            meal(datetime(2024, 5, 14, 12), calories=800),
        ],
        goals=[goal(weekly_workout_goal=4)],
    )

    dashboard = run(make_service(store).get_dashboard(USER_ID))
    summary = dashboard.summary

    assert (summary.weekly_workouts, summary.weekly_calories_burned, summary.weekly_calories_consumed) == (1, 250, 800)
    assert (summary.monthly_workouts, summary.monthly_calories_burned, summary.monthly_calories_consumed) == (2, 350, 800)
    assert dashboard.goal_progress.weekly.progress.workouts.percentage == 25

    data = dashboard.model_dump(by_alias=True)
    assert set(data) == {"thisWeek", "thisMonth", "goalProgress", "summary"}


def test_dashboard_without_goal() -> None:
    dashboard = run(make_service(InMemoryRecordStore()).get_dashboard(USER_ID))

    assert isinstance(dashboard.goal_progress, NoActiveGoalOut)
    assert dashboard.model_dump(by_alias=True)["goalProgress"] == {"hasActiveGoal": False}


@pytest.mark.parametrize("failing", ["workouts", "food", "goal"])
def test_dashboard_fails_as_a_unit(failing) -> None:
    store = InMemoryRecordStore(records=[workout(NOW)], goals=[goal(weekly_workout_goal=3)], fail_on=[failing])

    with pytest.raises(StoreUnavailableError):
        run(make_service(store).get_dashboard(USER_ID))


def test_gather_all_cancels_siblings_on_failure() -> None:
    cancelled = []

    async def slow():
        try:
            await asyncio.sleep(10)
        except asyncio.CancelledError:
            cancelled.append(True)
            raise

    async def broken():
        await asyncio.sleep(0)
        raise StoreUnavailableError("down")

    with pytest.raises(StoreUnavailableError):
        run(gather_all(slow(), broken()))
    assert cancelled == [True]


def test_workout_summary_counts_completed_sessions_by_category() -> None:
    store = InMemoryRecordStore(
        records=[
            workout(datetime(2024, 5, 1, 7), duration=30, burned=200, category=WorkoutCategory.cardio),
            workout(datetime(2024, 5, 10, 7), duration=45, burned=250, category=WorkoutCategory.strength),
            workout(datetime(2024, 5, 12, 7), duration=40, burned=150, category=WorkoutCategory.strength),
            workout(datetime(2024, 5, 14, 7), duration=20),
            workout(datetime(2024, 4, 1, 7), duration=60, category=WorkoutCategory.cardio),
        ],
        pending=[workout(datetime(2024, 5, 14, 9), duration=500, category=WorkoutCategory.flexibility)],
    )

    summary = run(make_service(store).get_workout_summary(USER_ID, "month"))

    assert summary.time_range == "month"
    assert (summary.start_date, summary.end_date) == ("2024-04-15", "2024-05-15")
    assert summary.total_workouts == 4
    assert summary.total_duration == 135
    assert summary.total_calories == 600
    assert summary.average_duration == 34
    assert summary.workouts_by_category == {"strength": 2, "cardio": 1, "flexibility": 0, "other": 1}
    assert store.calls[0][-1] is True


def test_workout_summary_with_no_sessions() -> None:
    summary = run(make_service(InMemoryRecordStore()).get_workout_summary(USER_ID, "week"))

    assert summary.total_workouts == 0
    assert summary.average_duration == 0
    assert set(summary.workouts_by_category.values()) == {0}
