from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .catalog.controller import register as register_catalog
from .common.http import register_error_handlers
from .container import Container, build_container
from .core.settings import AppSettings, load_settings
from .database.bootstrap import apply_schema, apply_seed_sql, ensure_demo_admin, list_tables
from .locations.controller import register as register_locations
from .notifications.controller import register as register_notifications
from .qrcodes.controller import register as register_qrcodes
from .submissions.controller import register as register_submissions
from .users.controller import register as register_users

logger = logging.getLogger("visitor_checkin")

_ROOT = Path(__file__).resolve().parents[3]


def _prepare_database(settings: AppSettings) -> None:
    db_config = settings.db.as_dict()
    if settings.auto_init_db:
        apply_schema(db_config, schema_path=_ROOT / "database" / "schema.sql")
        logger.info("schema ready (tables=%s)", len(list_tables(db_config)))
    if settings.auto_seed_db:
        admin_id = ensure_demo_admin(db_config)
        apply_seed_sql(db_config, seed_path=_ROOT / "database" / "seed.sql")
        logger.info("demo seed ready (admin id=%s)", admin_id)


def create_app(settings: Optional[AppSettings] = None, container: Optional[Container] = None) -> Flask:
    """Application factory.

    Without arguments settings come from the APP_ENV-selected config module and
    repositories are MySQL-backed; tests pass both explicitly.
    """

    load_dotenv(override=False)
    if settings is None:
        settings_module = get_settings_module()
        settings = load_settings(importlib.import_module(settings_module))
        logging.basicConfig(
            level=logging.DEBUG if settings.debug else logging.INFO,
            format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        )
        # Helpful startup info to avoid "connected but no tables" confusion.
        logger.info("settings=%s db=%s@%s:%s/%s", settings_module, settings.db.user,
                    settings.db.host, settings.db.port, settings.db.database)

    app = Flask(__name__)
    app.secret_key = settings.secret_key
    app.config["DEBUG"] = settings.debug
    app.config["TESTING"] = settings.testing
    # Room for the resume plus the other multipart fields.
    app.config["MAX_CONTENT_LENGTH"] = settings.max_resume_bytes + 1024 * 1024

    if container is None:
        _prepare_database(settings)
        container = build_container(settings)

    register_error_handlers(app)
    register_users(app, container)
    register_locations(app, container)
    register_qrcodes(app, container)
    register_catalog(app, container)
    register_submissions(app, container)
    register_notifications(app, container)

    return app
