# runtime.py
from __future__ import annotations

import sys
from collections.abc import Mapping
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Any

from colorama import Fore, Style

from factordb.config import Settings


@dataclass
class Runtime:
    settings: dict[str, Any] = field(default_factory=dict)
    debug: bool = False  # controls [debug] lines / tracebacks
    color: bool = True

    def apply(self, settings: Settings | Mapping[str, Any]) -> None:
        """Install a Settings object or a plain nested mapping."""
        if isinstance(settings, Settings):
            cfg = settings.as_dict()
        elif isinstance(settings, Mapping):
            cfg = settings
        else:
            raise TypeError(f"expected Settings or a mapping, got {type(settings).__name__}")
        self.settings = dict(cfg)

        # sync runtime flags from the settings file
        dbg = self.get("BEHAVIOUR.DEBUG", None)
        if isinstance(dbg, bool):
            self.debug = dbg

        col = self.get("OUTPUT.COLOR", None)
        if isinstance(col, bool):
            self.color = col

    def get(self, key: str, default: Any = None) -> Any:
        """Support dotted lookups, e.g., 'API.TIMEOUT'."""
        if not key:
            return default
        cur = self.settings
        if isinstance(key, str) and "." in key:
            for part in key.split("."):
                if isinstance(cur, dict) and part in cur:
                    cur = cur[part]
                else:
                    return default
            return cur
        return cur.get(key, default)


# --- Context management ---

_current_runtime: ContextVar[Runtime | None] = ContextVar("factordb_runtime", default=None)


def current() -> Runtime:
    rt = _current_runtime.get()
    if rt is None:
        rt = Runtime()
        _current_runtime.set(rt)
    return rt


def reset() -> Runtime:
    """Install a fresh Runtime in the current context and return it."""
    rt = Runtime()
    _current_runtime.set(rt)
    return rt


def APPLY(settings: Settings | Mapping[str, Any]) -> None:
    current().apply(settings)


def CFG(key: str, default: Any = None) -> Any:
    return current().get(key, default)


def debug_print(msg: str) -> None:
    """Emit a single ``[debug]`` line to STDERR when debug is on."""
    rt = current()
    if not rt.debug:
        return
    tag = f"{Fore.CYAN}[debug]{Style.RESET_ALL}" if rt.color else "[debug]"
    print(f"{tag} {msg}", file=sys.stderr)
