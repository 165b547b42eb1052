"""Backfill shift instants from legacy date/time fields.

    python scripts/migrate_shifts.py [--dry-run] [--keep-legacy]

Exit status is 0 on completion and 1 when the database is unreachable.
"""

from __future__ import annotations

import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from src.bakery_timekeeping.bakery_timekeeping.migrations.shift_backfill import main


if __name__ == "__main__":
    raise SystemExit(main())
