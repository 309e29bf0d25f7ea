import importlib
import os


def get_settings_module() -> str:
    # APP_ENV selects the settings module, development by default
    env = os.getenv("APP_ENV", "development").lower()

    if env in {"prod", "production"}:
        return "attendance_records.config.production"

    if env in {"test", "testing"}:
        return "attendance_records.config.testing"

    return "attendance_records.config.development"


def load_settings():
    return importlib.import_module(get_settings_module())
