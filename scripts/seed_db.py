from __future__ import annotations

import importlib
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
for p in (REPO_ROOT, REPO_ROOT / "src"):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))

from dotenv import load_dotenv

from config import get_settings_module

from workforce_scheduler.database.bootstrap import apply_schema, apply_sql_file
from workforce_scheduler.database.connection import DBConfig

logger = logging.getLogger("seed_db")


def main() -> None:
    load_dotenv(override=False)
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    apply_schema(db_config, schema_path=REPO_ROOT / "database" / "schema.sql")
    apply_sql_file(db_config, path=REPO_ROOT / "database" / "seed.sql")
    logger.info("OK: seeded demo data -> %s", DBConfig.from_dict(db_config).describe())


if __name__ == "__main__":
    main()
