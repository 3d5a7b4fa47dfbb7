from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .container import build_container
from .storage.bootstrap import apply_schema, list_tables
from .students.controller import register as register_students
from .users.controller import register as register_users

logger = logging.getLogger(__name__)

SETTING_NAMES = (
    "SECRET_KEY",
    "DEBUG",
    "TESTING",
    "LOG_LEVEL",
    "STORAGE_BACKEND",
    "STORAGE_PATH",
    "DB_CONFIG",
    "AUTO_INIT_DB",
    "SEED_DEMO_DATA",
)


def load_settings(overrides: Optional[dict] = None) -> dict:
    settings_module = get_settings_module()
    module = importlib.import_module(settings_module)
    settings = {name: getattr(module, name) for name in SETTING_NAMES if hasattr(module, name)}
    settings["SETTINGS_MODULE"] = settings_module
    settings.update(overrides or {})
    return settings


def create_app(overrides: Optional[dict] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__, template_folder="../../../templates")

    settings = load_settings(overrides)
    logging.basicConfig(
        level=str(settings.get("LOG_LEVEL", "INFO")).upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    app.secret_key = settings["SECRET_KEY"]
    app.config["DEBUG"] = bool(settings.get("DEBUG", False))
    app.config["TESTING"] = bool(settings.get("TESTING", False))

    backend = str(settings.get("STORAGE_BACKEND", "file"))
    db_config = dict(settings.get("DB_CONFIG") or {})
    logger.info("settings=%s storage=%s", settings["SETTINGS_MODULE"], backend)

    if backend == "mysql" and settings.get("AUTO_INIT_DB"):
        schema_path = Path(__file__).resolve().parents[3] / "database" / "schema.sql"
        apply_schema(db_config, schema_path=schema_path)
        logger.info("schema ready (tables=%d)", len(list_tables(db_config)))

    container = build_container(
        storage_config={"backend": backend, "path": settings.get("STORAGE_PATH"), "db": db_config},
        store=settings.get("STORE"),
        seed_demo_data=bool(settings.get("SEED_DEMO_DATA", True)),
    )
    app.extensions["journal"] = container

    register_users(app, container)
    register_students(app, container)
    register_attendance(app, container)

    return app
