import importlib
import os
from dataclasses import dataclass
from functools import lru_cache

ENV_PREFIX = "AMM_"

_dotenv_path: str | None = None


def _load_dotenv_once() -> None:
    """Read the nearest .env (searching up from the cwd) without overriding real env vars."""
    global _dotenv_path
    if _dotenv_path is not None:
        return
    try:
        dotenv = importlib.import_module("dotenv")
    except Exception as exc:  # pragma: no cover - missing dependency
        raise SystemExit("python-dotenv is required (pip install python-dotenv)") from exc
    _dotenv_path = dotenv.find_dotenv(usecwd=True)
    if _dotenv_path:
        dotenv.load_dotenv(_dotenv_path, override=False)


def env_name(name: str) -> str:
    """``SIGNIFICANT_DIGITS`` -> ``AMM_SIGNIFICANT_DIGITS``."""
    return name if name.startswith(ENV_PREFIX) else ENV_PREFIX + name


def get_env(
    name: str, default: str | None = None, required: bool = False
) -> str | None:
    _load_dotenv_once()
    key = env_name(name)
    value = os.environ.get(key, default)
    if required and (value is None or value == ""):
        raise SystemExit(f"{key} env var is required")
    return value


def get_int_env(name: str, default: int, minimum: int | None = None) -> int:
    raw = get_env(name, str(default))
    try:
        value = int(raw)
    except (TypeError, ValueError) as exc:
        raise SystemExit(f"{env_name(name)} must be an integer, got {raw!r}") from exc
    if minimum is not None and value < minimum:
        raise SystemExit(f"{env_name(name)} must be >= {minimum}, got {value}")
    return value


@dataclass(frozen=True)
class Settings:
    log_level: str = "WARNING"
    significant_digits: int = 6

    @classmethod
    def from_env(cls) -> "Settings":
        level = (get_env("LOG_LEVEL") or cls.log_level).upper()
        digits = get_int_env("SIGNIFICANT_DIGITS", cls.significant_digits, minimum=1)
        return cls(log_level=level, significant_digits=digits)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Settings read once from the environment (and .env, if present)."""
    return Settings.from_env()
