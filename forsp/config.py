from __future__ import annotations
import logging
import os
from pathlib import Path
from typing import Optional


# Resolve installation dir (forsp package directory)
_FORSP_DIR = Path(__file__).resolve().parent

# Defaults
DEFAULT_PRELUDE = _FORSP_DIR / 'prelude' / 'core.fp'
DEFAULT_RECURSION_LIMIT = 10000
DEFAULT_LOG_LEVEL = 'WARNING'
DEFAULT_REPL_HOST = '127.0.0.1'
DEFAULT_REPL_PORT = 8765


def _int_from_env(var: str, default: int) -> int:
    raw = os.environ.get(var, '').strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{var} must be an integer, got {raw!r}") from None


def get_prelude_path() -> Optional[Path]:
    """Prelude to compute before running a program, or None for a bare machine.

    FORSP_PRELUDE_PATH=default selects the bundled core prelude.
    """
    raw = os.environ.get('FORSP_PRELUDE_PATH', '').strip()
    if not raw:
        return None
    if raw == 'default':
        return DEFAULT_PRELUDE
    return Path(raw)


def get_recursion_limit() -> int:
    return _int_from_env('FORSP_RECURSION_LIMIT', DEFAULT_RECURSION_LIMIT)


def get_log_level() -> int:
    name = os.environ.get('FORSP_LOG_LEVEL', DEFAULT_LOG_LEVEL).strip().upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.WARNING


def get_repl_address() -> tuple[str, int]:
    host = os.environ.get('FORSP_REPL_HOST', '').strip() or DEFAULT_REPL_HOST
    return host, _int_from_env('FORSP_REPL_PORT', DEFAULT_REPL_PORT)


def configure_logging() -> None:
    logging.basicConfig(
        level=get_log_level(),
        format='%(levelname)s %(name)s: %(message)s',
    )
