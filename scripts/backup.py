"""Dump the database (or selected tables) with `mysqldump`.

Run before `migrate_shifts.py`, which clears legacy shift fields by default:

    python scripts/backup.py --tables shifts
"""

from __future__ import annotations

import argparse
import importlib
import subprocess
import sys
from datetime import datetime
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module


def main(argv=None) -> None:
    parser = argparse.ArgumentParser(description="Back up the bakery database with mysqldump.")
    parser.add_argument("--tables", nargs="*", default=[], help="only dump these tables")
    args = parser.parse_args(argv)

    settings = importlib.import_module(get_settings_module())
    db = settings.DB_CONFIG

    out_dir = REPO_ROOT / "backups"
    out_dir.mkdir(parents=True, exist_ok=True)

    ts = datetime.now().strftime("%Y%m%d_%H%M%S")
    suffix = "_" + "-".join(args.tables) if args.tables else ""
    out_file = out_dir / f"{db['database']}{suffix}_{ts}.sql"

    cmd = [
        "mysqldump",
        f"-h{db['host']}",
        f"-P{db.get('port', 3306)}",
        f"-u{db['user']}",
        f"-p{db['password']}",
        db["database"],
        *args.tables,
    ]

    try:
        with out_file.open("wb") as f:
            subprocess.run(cmd, stdout=f, stderr=subprocess.PIPE, check=True)
        print(f"OK: Backup created: {out_file}")
    except FileNotFoundError:
        raise SystemExit("`mysqldump` not found. Install the MySQL client tools first.")


if __name__ == "__main__":
    main()
