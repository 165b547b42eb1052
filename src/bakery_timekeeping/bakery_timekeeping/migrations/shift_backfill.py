"""One-off backfill: legacy split date/time shift fields -> UTC instants.

Each row is handled on its own. Rows that already carry both instants are
skipped, so the job can be re-run safely. Incomplete legacy rows are logged and
left untouched. A failed write is logged and counted; only an unreachable
database aborts the run (exit status 1).
"""

from __future__ import annotations

import argparse
import importlib
import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from dotenv import load_dotenv

from config import get_settings_module

from ..common.datetime_utils import parse_iso_date, parse_wall_clock, to_utc_instant
from ..core.exceptions import FatalIOError, TransientIOError
from ..database.connection import DBConfig, DatabaseConnection
from ..shifts.model import LegacyShiftRow
from ..shifts.mysql_shift_repository import MySQLShiftRepository
from ..shifts.repository import ShiftRepository

logger = logging.getLogger(__name__)


@dataclass
class MigrationSummary:
    migrated: int = 0
    skipped: int = 0
    failed: int = 0

    def as_dict(self) -> dict:
        return {"migratedCount": self.migrated, "skippedCount": self.skipped, "failedCount": self.failed}


class ShiftBackfill:
    def __init__(self, shifts: ShiftRepository, *, keep_legacy: bool = False, dry_run: bool = False):
        self._shifts = shifts
        self._keep_legacy = keep_legacy
        self._dry_run = dry_run

    def run(self) -> MigrationSummary:
        """Process every shift row sequentially.

        Raises FatalIOError when the rows cannot be loaded or the database goes away.
        """
        summary = MigrationSummary()
        rows = self._shifts.list_raw()
        logger.info("Loaded %d shift rows", len(rows))

        for row in rows:
            self._migrate_one(row, summary)

        logger.info(
            "Shift backfill finished%s: migrated=%d skipped=%d failed=%d",
            " (dry run)" if self._dry_run else "", summary.migrated, summary.skipped, summary.failed,
        )
        return summary

    def _migrate_one(self, row: LegacyShiftRow, summary: MigrationSummary) -> None:
        if row.is_migrated:
            logger.debug("Shift %s already migrated", row.shift_id)
            summary.skipped += 1
            return

        missing = row.missing_legacy_fields()
        if missing:
            logger.warning("Shift %s skipped: missing %s", row.shift_id, ", ".join(missing))
            summary.skipped += 1
            return

        try:
            start_instant = to_utc_instant(parse_iso_date(row.start_date.strip()), parse_wall_clock(row.start_time))
            end_instant = to_utc_instant(parse_iso_date(row.end_date.strip()), parse_wall_clock(row.end_time))
        except (ValueError, OverflowError) as e:
            logger.warning("Shift %s skipped: unparsable legacy fields (%s)", row.shift_id, e)
            summary.skipped += 1
            return

        if end_instant <= start_instant:
            logger.warning(
                "Shift %s skipped: end %s is not after start %s", row.shift_id, end_instant, start_instant
            )
            summary.skipped += 1
            return

        if self._dry_run:
            logger.info("Shift %s would become %s -> %s", row.shift_id, start_instant, end_instant)
            summary.migrated += 1
            return

        try:
            saved = self._shifts.save_instants(
                row.shift_id,
                start_instant=start_instant,
                end_instant=end_instant,
                clear_legacy=not self._keep_legacy,
            )
        except TransientIOError as e:
            logger.error("Shift %s failed: %s", row.shift_id, e)
            summary.failed += 1
            return

        if not saved:
            logger.error("Shift %s failed: row no longer exists", row.shift_id)
            summary.failed += 1
            return

        logger.info("Shift %s migrated: %s -> %s", row.shift_id, start_instant, end_instant)
        summary.migrated += 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Backfill shift start/end instants from legacy date/time fields."
    )
    parser.add_argument("--dry-run", action="store_true", help="report what would change without writing")
    parser.add_argument(
        "--keep-legacy",
        action="store_true",
        help="write the instants but keep the legacy fields for a later verification pass",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None, *, shifts: Optional[ShiftRepository] = None) -> int:
    args = build_parser().parse_args(argv)

    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        if shifts is None:
            config = DBConfig.from_dict(dict(settings.DB_CONFIG))
            logger.info("Backfilling shifts in %s", config.describe())
            shifts = MySQLShiftRepository(DatabaseConnection(config))

        summary = ShiftBackfill(shifts, keep_legacy=args.keep_legacy, dry_run=args.dry_run).run()
    except FatalIOError as e:
        logger.error("Shift backfill aborted: %s", e)
        return 1

    logger.info("Summary: %s", summary.as_dict())
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
