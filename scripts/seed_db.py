from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.visitor_checkin.visitor_checkin.core.settings import load_settings
from src.visitor_checkin.visitor_checkin.database.bootstrap import apply_seed_sql, ensure_demo_admin


def main() -> None:
    settings = load_settings(importlib.import_module(get_settings_module()))
    db_config = settings.db.as_dict()

    # seed.sql attaches its rows to the demo admin, so create it first.
    admin_id = ensure_demo_admin(db_config)
    apply_seed_sql(db_config, seed_path=REPO_ROOT / "database" / "seed.sql")

    print(
        "OK: Seeded database -> "
        f"{settings.db.user}@{settings.db.host}:{settings.db.port}/{settings.db.database} "
        f"(demo admin id={admin_id})"
    )


if __name__ == "__main__":
    main()
