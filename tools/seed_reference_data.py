"""Seed the moodboard and style-vibe tables."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from fitmuse_app.config import AppConfig
from fitmuse_app.logging_config import configure_logging
from tools.reference_store import SQLiteReferenceStore, seed_reference_data


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Seed FitMuse moodboards and style vibes")
    parser.add_argument(
        "--database",
        default=None,
        help="Path to the SQLite database (defaults to DATABASE_PATH or data/fitmuse.db).",
    )
    args = parser.parse_args(argv)

    configure_logging()
    db_path = Path(args.database or AppConfig.from_env().database_path)
    seeded = seed_reference_data(SQLiteReferenceStore(db_path))
    print(
        f"Seeded {seeded['moodboards']} moodboards and {seeded['style_vibes']} style vibes into {db_path}"
    )
    if seeded["failed"]:
        print(f"Failed: {', '.join(seeded['failed'])}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
