from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.visitor_checkin.visitor_checkin.core.settings import load_settings
from src.visitor_checkin.visitor_checkin.database.bootstrap import apply_schema, list_tables


def main() -> None:
    settings = load_settings(importlib.import_module(get_settings_module()))
    db_config = settings.db.as_dict()

    schema_path = REPO_ROOT / "database" / "schema.sql"
    apply_schema(db_config, schema_path=schema_path)
    tables = list_tables(db_config)
    print(
        "OK: Applied schema.sql -> "
        f"{settings.db.user}@{settings.db.host}:{settings.db.port}/{settings.db.database} "
        f"(tables={len(tables)})"
    )


if __name__ == "__main__":
    main()
