from datetime import datetime

from availability import (
    available_pools,
    day_matches,
    is_available_at,
    is_lap_swim_available,
    pools_with_sessions,
    sessions_overlapping,
)
from swim_session import LapSwimSession, PoolSchedule


def make_schedule(pool_id, *sessions, is_manual=False):
    return PoolSchedule(
        pool_id=pool_id,
        pool_name=pool_id.title(),
        sessions=sessions,
        raw_text="",
        is_manual=is_manual,
        pool={"id": pool_id, "name": pool_id.title()},
    )


MONDAY_MORNING = LapSwimSession(days=["MONDAY"], times=["7:00 am", "9:00 am"])


def test_point_in_time_includes_both_boundaries():
    schedule = make_schedule("balboa", MONDAY_MORNING)

    assert is_lap_swim_available(schedule, "MONDAY", 7, 0)
    assert is_lap_swim_available(schedule, "MONDAY", 9, 0)
    assert is_lap_swim_available(schedule, "Monday", 8, 15)
    assert not is_lap_swim_available(schedule, "MONDAY", 9, 1)
    assert not is_lap_swim_available(schedule, "MONDAY", 6, 59)
    assert not is_lap_swim_available(schedule, "TUESDAY", 8, 0)


def test_day_matching_uses_first_three_letters():
    assert day_matches(MONDAY_MORNING, "mon")
    assert day_matches(MONDAY_MORNING, "Monday")
    assert day_matches(MONDAY_MORNING, 1)
    assert not day_matches(MONDAY_MORNING, 0)
    assert not day_matches(LapSwimSession(days=["THURSDAY"], times=[]), "Tuesday")


def test_numeric_days_start_on_sunday():
    schedule = make_schedule("rossi", LapSwimSession(days=["SUNDAY"], times=["10:00 am", "11:00 am"]))

    assert is_lap_swim_available(schedule, 0, 10, 30)
    assert not is_lap_swim_available(schedule, 6, 10, 30)


def test_is_available_at_datetime():
    schedule = make_schedule("balboa", MONDAY_MORNING)

    # 2026-10-19 is a Monday
    assert is_available_at(schedule, datetime(2026, 10, 19, 8, 30))
    assert not is_available_at(schedule, datetime(2026, 10, 20, 8, 30))


def test_session_without_hours_never_matches():
    schedule = make_schedule("brisbane", LapSwimSession(days=["MONDAY"], times=[], notes="call ahead"), is_manual=True)

    assert not is_lap_swim_available(schedule, "MONDAY", 12, 0)
    assert sessions_overlapping(schedule, "MONDAY", 0, 24 * 60) == []


def test_range_overlap_is_strict():
    schedule = make_schedule("balboa", MONDAY_MORNING)

    assert sessions_overlapping(schedule, "MONDAY", 5 * 60, 7 * 60) == []
    assert sessions_overlapping(schedule, "MONDAY", 9 * 60, 12 * 60) == []
    assert sessions_overlapping(schedule, "MONDAY", 5 * 60, 7 * 60 + 1) == [MONDAY_MORNING]
    assert sessions_overlapping(schedule, "MONDAY", 8 * 60, 8 * 60 + 30) == [MONDAY_MORNING]
    assert sessions_overlapping(schedule, "TUESDAY", 0, 24 * 60) == []


def test_manual_day_group_matches_every_day():
    session = LapSwimSession(days=["MONDAY", "WEDNESDAY"], times=["6:00 am", "8:00 am"])
    schedule = make_schedule("mission", session, is_manual=True)

    assert is_lap_swim_available(schedule, "WEDNESDAY", 6, 0)
    assert not is_lap_swim_available(schedule, "FRIDAY", 6, 0)


def test_available_pools():
    open_pool = make_schedule("balboa", MONDAY_MORNING)
    closed_pool = make_schedule("coffman", LapSwimSession(days=["MONDAY"], times=["6:00 pm", "8:00 pm"]))

    available = available_pools([open_pool, closed_pool], datetime(2026, 10, 19, 7, 0))

    assert [item["pool"]["id"] for item in available] == ["balboa"]
    assert available[0]["schedule"][0]["times"] == ["7:00 am", "9:00 am"]


def test_pools_with_sessions_puts_favorites_first():
    evening = LapSwimSession(days=["MONDAY"], times=["6:00 pm", "8:00 pm"])
    schedules = [
        make_schedule("balboa", MONDAY_MORNING),
        make_schedule("coffman", evening),
        make_schedule("garfield", MONDAY_MORNING, evening),
        make_schedule("empty"),
    ]

    evening_pools = pools_with_sessions(schedules, "Monday", "evening")
    assert [item["pool_id"] for item in evening_pools] == ["coffman", "garfield"]
    assert evening_pools[1]["sessions"] == [evening]

    all_day = pools_with_sessions(schedules, "Monday", favorites=["garfield"])
    assert [item["pool_id"] for item in all_day] == ["garfield", "balboa", "coffman"]


def test_unknown_time_range_falls_back_to_all_day():
    schedules = [make_schedule("balboa", MONDAY_MORNING)]

    assert len(pools_with_sessions(schedules, "Monday", "late-night")) == 1


def test_combined_day_tokens_match_each_day():
    session = LapSwimSession(days=["MON/WED/FRI"], times=["7:00 am", "9:00 am"])
    weekdays = make_schedule("mission", LapSwimSession(days=["Monday-Friday"], times=["12:00 pm", "1:00 pm"]))
    schedule = make_schedule("balboa", session, is_manual=True)

    assert is_lap_swim_available(schedule, 3, 8, 0)
    assert is_lap_swim_available(schedule, "Friday", 7, 0)
    assert not is_lap_swim_available(schedule, "Tuesday", 8, 0)
    assert sessions_overlapping(schedule, "Wednesday", 0, 24 * 60) == [session]
    assert is_lap_swim_available(weekdays, "friday", 12, 30)
