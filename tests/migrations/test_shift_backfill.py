from __future__ import annotations

import logging
from datetime import datetime, timezone

import pytest

from src.bakery_timekeeping.bakery_timekeeping.core.exceptions import FatalIOError
from src.bakery_timekeeping.bakery_timekeeping.migrations.shift_backfill import ShiftBackfill, main


def utc(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


def _legacy(repo, **overrides) -> int:
    fields = dict(start_date="2024-03-01", end_date="2024-03-01", start_time="08:00", end_time="17:00")
    fields.update(overrides)
    return repo.add_legacy(**fields)


def test_legacy_row_is_converted_and_legacy_fields_cleared(shifts_repo):
    sid = _legacy(shifts_repo)

    summary = ShiftBackfill(shifts_repo).run()

    assert (summary.migrated, summary.skipped, summary.failed) == (1, 0, 0)
    row = shifts_repo.rows[sid]
    assert row["start_instant"] == utc(2024, 3, 1, 7, 0)
    assert row["end_instant"] == utc(2024, 3, 1, 16, 0)
    assert row["start_date"] is row["end_date"] is row["start_time"] is row["end_time"] is None


def test_second_run_changes_nothing(shifts_repo):
    _legacy(shifts_repo)
    _legacy(shifts_repo, end_date="2024-03-02", start_time="22:00", end_time="06:00")
    ShiftBackfill(shifts_repo).run()
    snapshot = {sid: dict(r) for sid, r in shifts_repo.rows.items()}
    writes = shifts_repo.writes

    summary = ShiftBackfill(shifts_repo).run()

    assert summary.migrated == 0
    assert summary.skipped == 2
    assert shifts_repo.writes == writes
    assert shifts_repo.rows == snapshot


def test_missing_end_time_is_skipped_and_left_intact(shifts_repo, caplog):
    sid = _legacy(shifts_repo, end_time=None)

    with caplog.at_level(logging.WARNING):
        summary = ShiftBackfill(shifts_repo).run()

    assert (summary.migrated, summary.skipped) == (0, 1)
    row = shifts_repo.rows[sid]
    assert row["start_instant"] is None
    assert row["start_time"] == "08:00"
    assert "missing end_time" in caplog.text


def test_unparsable_or_inverted_legacy_rows_are_skipped(shifts_repo):
    _legacy(shifts_repo, start_time="8 o'clock")
    _legacy(shifts_repo, start_time="17:00", end_time="08:00")

    summary = ShiftBackfill(shifts_repo).run()

    assert (summary.migrated, summary.skipped) == (0, 2)
    assert shifts_repo.writes == 0


def test_half_migrated_row_is_reprocessed(shifts_repo):
    sid = _legacy(shifts_repo, start_instant=utc(2024, 3, 1, 7, 0))

    summary = ShiftBackfill(shifts_repo).run()

    assert summary.migrated == 1
    assert shifts_repo.rows[sid]["end_instant"] == utc(2024, 3, 1, 16, 0)


def test_write_failure_is_counted_and_the_run_continues(shifts_repo):
    bad = _legacy(shifts_repo)
    good = _legacy(shifts_repo, start_date="2024-03-02", end_date="2024-03-02")
    shifts_repo.fail_writes_for.add(bad)

    summary = ShiftBackfill(shifts_repo).run()

    assert (summary.migrated, summary.skipped, summary.failed) == (1, 0, 1)
    assert shifts_repo.rows[bad]["start_instant"] is None
    assert shifts_repo.rows[good]["start_instant"] == utc(2024, 3, 2, 7, 0)


def test_keep_legacy_and_dry_run(shifts_repo):
    sid = _legacy(shifts_repo)

    dry = ShiftBackfill(shifts_repo, dry_run=True).run()
    assert dry.migrated == 1
    assert shifts_repo.writes == 0

    ShiftBackfill(shifts_repo, keep_legacy=True).run()
    row = shifts_repo.rows[sid]
    assert row["start_instant"] == utc(2024, 3, 1, 7, 0)
    assert row["start_date"] == "2024-03-01"


def test_unreachable_store_aborts(shifts_repo):
    shifts_repo.unreachable = True

    with pytest.raises(FatalIOError):
        ShiftBackfill(shifts_repo).run()


def test_cli_exit_codes(shifts_repo, monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    _legacy(shifts_repo)

    assert main([], shifts=shifts_repo) == 0
    assert shifts_repo.writes == 1

    shifts_repo.unreachable = True
    assert main(["--dry-run"], shifts=shifts_repo) == 1


def test_row_outside_datetime_range_is_skipped_and_the_run_continues(shifts_repo, caplog):
    # 00:30 local on the first representable day falls before year 1 in UTC.
    bad = _legacy(shifts_repo, start_date="0001-01-01", end_date="0001-01-01", start_time="00:30", end_time="08:00")
    good = _legacy(shifts_repo)

    with caplog.at_level(logging.WARNING):
        summary = ShiftBackfill(shifts_repo).run()

    assert (summary.migrated, summary.skipped, summary.failed) == (1, 1, 0)
    assert shifts_repo.rows[bad]["start_instant"] is None
    assert shifts_repo.rows[bad]["start_date"] == "0001-01-01"
    assert shifts_repo.rows[good]["start_instant"] == utc(2024, 3, 1, 7, 0)
    assert f"Shift {bad} skipped" in caplog.text
