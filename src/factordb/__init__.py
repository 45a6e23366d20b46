"""Python wrapper for the FactorDB (http://factordb.com/) API."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _pkg_version

# Version
try:
    __version__ = _pkg_version("factordb-client")
except PackageNotFoundError:
    __version__ = "0+unknown"

# Public API re-exports
from .client import FactorDbClient
from .config import load_settings
from .errors import FactorDbError, HttpError, ParseError, UserInputError
from .factor import Factor
from .number import FactorizationResult, NumberStatus
from .runtime import APPLY, CFG

__all__ = [
    "APPLY",
    "CFG",
    "Factor",
    "FactorDbClient",
    "FactorDbError",
    "FactorizationResult",
    "HttpError",
    "NumberStatus",
    "ParseError",
    "UserInputError",
    "__version__",
    "load_settings",
]
