from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .container import build_container, build_kv_store
from .database.bootstrap import apply_schema, list_tables
from .storage.repository import KeyValueStore
from .users.controller import register as register_users

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def create_app(*, kv_store: Optional[KeyValueStore] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["SESSION_DAYS"] = int(getattr(settings, "SESSION_DAYS", 7))

    backend = str(getattr(settings, "STORAGE_BACKEND", "json"))
    db_config = dict(getattr(settings, "DB_CONFIG", {}))

    if kv_store is None:
        if backend == "mysql" and bool(getattr(settings, "AUTO_INIT_DB", False)):
            schema_path = Path(__file__).resolve().parents[3] / "database" / "schema.sql"
            apply_schema(db_config, schema_path=schema_path)
            logger.info("Schema ready (tables=%d)", len(list_tables(db_config)))

        kv_store = build_kv_store(
            backend=backend,
            data_dir=getattr(settings, "DATA_DIR", "data"),
            db_config=db_config,
        )

    logger.info("Starting with settings=%s storage=%s", settings_module, type(kv_store).__name__)

    container = build_container(kv_store=kv_store)
    app.extensions["self_attendance"] = container

    register_users(app, container)
    register_attendance(app, container)

    return app
