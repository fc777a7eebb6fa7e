from datetime import datetime, timezone, timedelta

from seriesmeta.core.dates import utc_now, to_current_timezone


def test_utc_now_is_naive():
    now = utc_now()
    assert now.tzinfo is None
    assert abs(now.replace(tzinfo=timezone.utc) - datetime.now(timezone.utc)) < timedelta(seconds=5)


def test_naive_values_are_treated_as_utc():
    stored = datetime(2024, 5, 1, 12, 0, 0)

    local = to_current_timezone(stored)

    assert local.tzinfo is not None
    assert local == datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc)


def test_aware_values_keep_their_instant():
    aware = datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone(timedelta(hours=5)))

    assert to_current_timezone(aware) == aware


def test_none_passes_through():
    assert to_current_timezone(None) is None
