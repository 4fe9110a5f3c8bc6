"""Runtime environment detection."""

from __future__ import annotations

import platform as _platform
import struct
import sys
from enum import Enum
from typing import Any

__all__ = [
    "EnvType",
    "get_env_type",
    "get_runtime_info",
    "is_browser",
    "is_native",
    "is_wasi",
]


class EnvType(str, Enum):
    """Where the interpreter is running."""

    BROWSER = "browser"  # Pyodide / Emscripten
    WASI = "wasi"
    NATIVE = "native"
    UNKNOWN = "unknown"


def get_env_type() -> EnvType:
    """Classify the current runtime."""
    if sys.platform == "emscripten":
        return EnvType.BROWSER
    if sys.platform == "wasi":
        return EnvType.WASI
    if sys.platform:
        return EnvType.NATIVE
    return EnvType.UNKNOWN


def is_browser() -> bool:
    return get_env_type() is EnvType.BROWSER


def is_wasi() -> bool:
    return get_env_type() is EnvType.WASI


def is_native() -> bool:
    return get_env_type() is EnvType.NATIVE


def get_runtime_info() -> dict[str, Any]:
    """Describe the interpreter and host.

    Returns
    -------
    dict
        ``env``, ``system``, ``release``, ``machine``, ``implementation``,
        ``python_version`` and ``is_64bit``.
    """
    return {
        "env": get_env_type().value,
        "system": _platform.system(),
        "release": _platform.release(),
        "machine": _platform.machine(),
        "implementation": _platform.python_implementation(),
        "python_version": _platform.python_version(),
        "is_64bit": struct.calcsize("P") * 8 == 64,
    }
