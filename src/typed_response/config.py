from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, replace
from pathlib import Path

from .logging import setup_logging

ENV_DEBUG = "TYPED_RESPONSE_DEBUG"

CONFIG_TABLE = "typed_response"
LOCAL_CONFIG_NAME = Path("typed_response.toml")

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off", ""}


class ConfigError(RuntimeError):
    pass


@dataclass(frozen=True, slots=True)
class Settings:
    debug: bool = False


def _read_config(cfg_path: Path) -> dict:
    try:
        raw = cfg_path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise ConfigError(f"Missing config file {cfg_path}.") from None
    except OSError as e:
        raise ConfigError(f"Failed to read config file {cfg_path}: {e}") from e
    try:
        return tomllib.loads(raw)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Malformed TOML in {cfg_path}: {e}") from None


def _parse_bool(value: str, *, source: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUTHY:
        return True
    if lowered in _FALSY:
        return False
    raise ConfigError(f"Invalid boolean {value!r} in {source}.")


def _settings_from_table(table: object, cfg_path: Path) -> Settings:
    if not isinstance(table, dict):
        raise ConfigError(f"[{CONFIG_TABLE}] in {cfg_path} must be a table.")
    unknown = sorted(set(table) - {"debug"})
    if unknown:
        raise ConfigError(
            f"Unknown keys in [{CONFIG_TABLE}] of {cfg_path}: {', '.join(unknown)}."
        )
    debug = table.get("debug", Settings.debug)
    if not isinstance(debug, bool):
        raise ConfigError(f"{CONFIG_TABLE}.debug in {cfg_path} must be a boolean.")
    return Settings(debug=debug)


def _apply_env(settings: Settings, environ: dict[str, str]) -> Settings:
    if ENV_DEBUG in environ:
        settings = replace(
            settings, debug=_parse_bool(environ[ENV_DEBUG], source=ENV_DEBUG)
        )
    return settings


def load_settings(
    path: str | Path | None = None, *, environ: dict[str, str] | None = None
) -> Settings:
    """Load settings from a TOML file (if any) and the environment.

    An explicit ``path`` must exist. Without one, ``typed_response.toml`` in
    the working directory is used when present.
    """
    if environ is None:
        environ = dict(os.environ)

    settings = Settings()
    cfg_path: Path | None = None
    if path:
        cfg_path = Path(path).expanduser()
    else:
        candidate = Path.cwd() / LOCAL_CONFIG_NAME
        if candidate.is_file():
            cfg_path = candidate

    if cfg_path is not None:
        data = _read_config(cfg_path)
        if CONFIG_TABLE in data:
            settings = _settings_from_table(data[CONFIG_TABLE], cfg_path)

    return _apply_env(settings, environ)


def configure(settings: Settings | None = None) -> Settings:
    if settings is None:
        settings = load_settings()
    setup_logging(debug=settings.debug)
    return settings
