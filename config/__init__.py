import os


def get_settings_module() -> str:
    # APP_ENV picks the settings module, development by default
    env = os.getenv("APP_ENV", "development").lower()

    if env in {"prod", "production"}:
        return "config.production"

    if env in {"test", "testing"}:
        return "config.testing"

    return "config.development"


def _int_list(value: str) -> tuple[int, ...]:
    return tuple(int(v) for v in value.replace(" ", "").split(",") if v)
