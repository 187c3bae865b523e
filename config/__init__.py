import os


def get_settings_module() -> str:
    """Settings module for APP_ENV.

    Each module provides TENANT_ID, POLICY_SNAPSHOT_PATH, DEBUG and
    JSON_SORT_KEYS for ``attendance_policy.main.create_app``; unknown
    environments load development settings.
    """
    env = os.getenv("APP_ENV", "development").lower()

    if env in {"prod", "production"}:
        return "config.production"

    if env in {"test", "testing"}:
        return "config.testing"

    return "config.development"
