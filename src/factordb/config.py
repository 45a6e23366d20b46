from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import tomllib as toml

from factordb.errors import UserInputError

DEFAULT_ENDPOINT = "http://factordb.com/api"

# Values used when the settings file is missing or silent on a key.
DEFAULTS: dict[str, dict[str, Any]] = {
    "API": {"ENDPOINT": DEFAULT_ENDPOINT, "TIMEOUT": None},
    "OUTPUT": {"COLOR": True},
    "BEHAVIOUR": {"DEBUG": False, "MAX_DIGITS": 100_000},
}


@dataclass
class Settings:
    """
    Wrap the TOML dict merged over DEFAULTS.
    .as_dict() feeds runtime.apply().
    """
    data: dict[str, Any] = field(default_factory=dict)
    _source: Path | None = None

    def as_dict(self) -> dict[str, Any]:
        return self.data


# --- Paths -----------------------------------------------------------------

def workspace_dir() -> Path:
    env = os.environ.get("FACTORDB_HOME")
    if env:
        return Path(env).expanduser().resolve()
    return (Path.home() / ".config" / "factordb").resolve()


def config_path() -> Path:
    env = os.environ.get("FACTORDB_CONFIG")
    if env:
        return Path(env).expanduser().resolve()
    return workspace_dir() / "config.toml"


# --- I/O -------------------------------------------------------------------


def _load_toml(path: Path) -> dict[str, object]:
    try:
        with path.open("rb") as f:
            return toml.load(f)
    except OSError as e:
        raise UserInputError(f"reading {path}: {e.strerror or e}.") from None
    except toml.TOMLDecodeError as e:
        lineno = getattr(e, "lineno", None)
        colno = getattr(e, "colno", None)
        msg = getattr(e, "msg", str(e))
        where = []
        if lineno is not None:
            where.append(f"line {lineno}")
        if colno is not None:
            where.append(f"column {colno}")
        loc = f" (at {', '.join(where)})" if where else ""
        # No traceback chaining
        raise UserInputError(f"reading {path.name}: {msg}{loc}.") from None


def _merge(base: dict[str, Any], over: dict[str, Any]) -> dict[str, Any]:
    out = {k: (dict(v) if isinstance(v, dict) else v) for k, v in base.items()}
    for k, v in over.items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = _merge(out[k], v)
        else:
            out[k] = v
    return out


def _validate(data: dict[str, Any], source: Path | None) -> None:
    where = source.name if source else "settings"
    api = data.get("API", {})
    endpoint = api.get("ENDPOINT")
    if not isinstance(endpoint, str) or not endpoint.startswith(("http://", "https://")):
        raise UserInputError(f"{where}: API.ENDPOINT must be an http(s) URL, got {endpoint!r}.")
    timeout = api.get("TIMEOUT")
    if timeout is not None and (isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0):
        raise UserInputError(f"{where}: API.TIMEOUT must be a positive number of seconds, got {timeout!r}.")
    max_digits = data.get("BEHAVIOUR", {}).get("MAX_DIGITS")
    if isinstance(max_digits, bool) or not isinstance(max_digits, int) or max_digits < 0:
        raise UserInputError(f"{where}: BEHAVIOUR.MAX_DIGITS must be a non-negative integer, got {max_digits!r}.")


# --- Public API ------------------------------------------------------------


def load_settings(path: Path | str | None = None) -> Settings:
    """
    Load the settings file (default: config_path()) merged over DEFAULTS.
    A missing default file is not an error; an explicitly named one is.
    """
    explicit = path is not None
    p = Path(path).expanduser() if explicit else config_path()

    if not p.exists():
        if explicit:
            raise UserInputError(f"Settings file not found: {p}")
        return Settings(data=_merge(DEFAULTS, {}), _source=None)

    raw = _load_toml(p)
    data = _merge(DEFAULTS, raw)
    _validate(data, p)
    return Settings(data=data, _source=p)
