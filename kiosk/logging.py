"""
Kiosk logging.

Two channels:

- Console messages, ``[module] LEVEL: message`` on stdout, filtered by a
  global level and optional per-module levels.
- Structured records (plain dicts) routed to a sink registered for the
  module. The games emit one ``session`` record per finished run; the
  standalone host writes them to JSONL when session logging is enabled.

Usage:
    from kiosk.logging import get_logger, emit_record

    log = get_logger('game_mode')
    log.debug("Spawned item %d", handle)
    emit_record('session', {'type': 'game_end', 'score': 120})

Environment:
    KIOSK_LOG_LEVEL=DEBUG                  # default console level
    KIOSK_LOG_POOL=TRACE                   # level for one module
    KIOSK_LOG_DIR=/var/log/kiosk           # where FileSink writes by default
    KIOSK_LOGGING_SESSION_ENABLED=true     # per-module record settings
    KIOSK_LOGGING_SESSION_DIR=/tmp/runs
"""

import json
import os
import time
from abc import ABC, abstractmethod
from enum import IntEnum
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, IO, Optional


class LogLevel(IntEnum):
    """Console levels, numerically compatible with the stdlib logging module."""
    TRACE = 5      # per-frame detail
    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40
    OFF = 100


_LEVEL_NAMES = {
    'TRACE': LogLevel.TRACE,
    'DEBUG': LogLevel.DEBUG,
    'INFO': LogLevel.INFO,
    'WARNING': LogLevel.WARNING,
    'WARN': LogLevel.WARNING,
    'ERROR': LogLevel.ERROR,
    'OFF': LogLevel.OFF,
}


def _level_from_string(name: str) -> LogLevel:
    return _LEVEL_NAMES.get(name.upper(), LogLevel.INFO)


# =============================================================================
# Record sinks
# =============================================================================

class LogSink(ABC):
    """Destination for structured records."""

    @abstractmethod
    def emit(self, module: str, record: Dict[str, Any]) -> None:
        """Write one JSON-serializable record for ``module``."""
        pass

    @abstractmethod
    def flush(self) -> None:
        pass

    @abstractmethod
    def close(self) -> None:
        pass

    def __enter__(self) -> 'LogSink':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


class FileSink(LogSink):
    """JSON Lines files, one per module, opened on first record.

    Every file starts with a ``header`` line and gets a ``footer`` line on
    close. Records without a ``wall_time`` get one.

    Args:
        log_dir: Target directory (configured default when None)
        session_name: File name prefix (start timestamp when None)
    """

    def __init__(self, log_dir: Optional[str] = None, session_name: Optional[str] = None):
        self._log_dir = Path(log_dir) if log_dir else None
        self._session_name = session_name or time.strftime("%Y%m%d_%H%M%S")
        self._files: Dict[str, IO[str]] = {}

    def _path_for(self, module: str) -> Path:
        if self._log_dir is None:
            self._log_dir = default_log_dir()
        return self._log_dir / f"{self._session_name}_{module}.jsonl"

    def _open(self, module: str) -> IO[str]:
        handle = self._files.get(module)
        if handle is None:
            path = self._path_for(module)
            path.parent.mkdir(parents=True, exist_ok=True)
            handle = open(path, 'a')
            self._files[module] = handle
            _write_line(handle, {
                'type': 'header',
                'module': module,
                'session_name': self._session_name,
                'start_time': time.time(),
            })
        return handle

    def emit(self, module: str, record: Dict[str, Any]) -> None:
        if 'wall_time' not in record:
            record = {'wall_time': time.time(), **record}
        _write_line(self._open(module), record)

    def flush(self) -> None:
        for handle in self._files.values():
            handle.flush()

    def close(self) -> None:
        for module, handle in self._files.items():
            _write_line(handle, {'type': 'footer', 'module': module, 'end_time': time.time()})
            handle.close()
        self._files.clear()

    @property
    def log_paths(self) -> Dict[str, Path]:
        """Files opened so far, by module."""
        return {module: self._path_for(module) for module in self._files}


def _write_line(handle: IO[str], record: Dict[str, Any]) -> None:
    handle.write(json.dumps(record) + "\n")


class NullSink(LogSink):
    """Drops every record."""

    def emit(self, module: str, record: Dict[str, Any]) -> None:
        pass

    def flush(self) -> None:
        pass

    def close(self) -> None:
        pass


_sinks: Dict[str, LogSink] = {}
_default_sink: Optional[LogSink] = None


def register_sink(module: str, sink: LogSink) -> None:
    """Route records for ``module`` to ``sink``."""
    _sinks[module] = sink


def set_default_sink(sink: Optional[LogSink]) -> None:
    """Sink for modules that have none registered."""
    global _default_sink
    _default_sink = sink


def get_sink(module: str) -> Optional[LogSink]:
    return _sinks.get(module, _default_sink)


def emit_record(module: str, record: Dict[str, Any]) -> bool:
    """Send a record to the module's sink.

    Returns:
        False when no sink is registered (the record is dropped)
    """
    sink = get_sink(module)
    if sink is None:
        return False
    sink.emit(module, record)
    return True


def close_all_sinks() -> None:
    """Close and unregister every sink, the default sink included."""
    global _default_sink
    for sink in _sinks.values():
        sink.close()
    _sinks.clear()
    if _default_sink is not None:
        _default_sink.close()
        _default_sink = None


def create_sink_for_module(module: str, session_name: Optional[str] = None) -> LogSink:
    """FileSink if ``KIOSK_LOGGING_<MODULE>_ENABLED`` is set, else NullSink."""
    settings = get_module_config(module)
    if not settings.get('enabled', False):
        return NullSink()
    return FileSink(log_dir=settings.get('dir'), session_name=session_name)


# =============================================================================
# Configuration
# =============================================================================

_config: Dict[str, Any] = {
    'default_level': LogLevel.INFO,
    'module_levels': {},
    'log_dir': None,
    'modules': {},           # record settings per module, nested by key
}


def default_log_dir() -> Path:
    """Configured log directory, or ``~/.kiosk/logs``."""
    if _config.get('log_dir'):
        return Path(_config['log_dir']).expanduser()
    return Path.home() / '.kiosk' / 'logs'


def get_module_config(module: str) -> Dict[str, Any]:
    """Record settings for a module, e.g. ``{'enabled': True, 'dir': '/tmp/runs'}``."""
    return _config.get('modules', {}).get(module.lower(), {})


def _coerce(value: str) -> Any:
    lower = value.lower()
    if lower in ('true', 'yes', 'on'):
        return True
    if lower in ('false', 'no', 'off'):
        return False
    for cast in (int, float):
        try:
            return cast(value)
        except ValueError:
            continue
    return value


def configure_logging(
    level: str = 'INFO',
    modules: Optional[Dict[str, str]] = None,
    log_dir: Optional[str] = None,
) -> None:
    """Set the default console level, per-module levels and the log directory."""
    _config['default_level'] = _level_from_string(level)
    for module, module_level in (modules or {}).items():
        _config['module_levels'][module] = _level_from_string(module_level)
    if log_dir is not None:
        _config['log_dir'] = log_dir


def _load_env_config() -> None:
    """Read KIOSK_LOG_* levels and KIOSK_LOGGING_<MODULE>_<KEY> settings."""
    for key, value in os.environ.items():
        if key == 'KIOSK_LOG_LEVEL':
            _config['default_level'] = _level_from_string(value)
        elif key == 'KIOSK_LOG_DIR':
            _config['log_dir'] = value
        elif key.startswith('KIOSK_LOG_'):
            _config['module_levels'][key[len('KIOSK_LOG_'):].lower()] = _level_from_string(value)
        elif key.startswith('KIOSK_LOGGING_'):
            module, *path = key[len('KIOSK_LOGGING_'):].lower().split('_')
            if not path:
                continue
            node = _config['modules'].setdefault(module, {})
            for part in path[:-1]:
                node = node.setdefault(part, {})
            node[path[-1]] = _coerce(value)


_load_env_config()


# =============================================================================
# Console logger
# =============================================================================

class KioskLogger:
    """Console logger for one module. Arguments are %-formatted lazily."""

    def __init__(self, module: str):
        self.module = module
        self._key = module.lower().replace('.', '_')

    @property
    def level(self) -> LogLevel:
        return _config['module_levels'].get(self._key, _config['default_level'])

    def is_enabled_for(self, level: LogLevel) -> bool:
        return level >= self.level

    def _log(self, level: LogLevel, label: str, msg: str, args: tuple) -> None:
        if not self.is_enabled_for(level):
            return
        if args:
            try:
                msg = msg % args
            except (TypeError, ValueError):
                msg = f"{msg} {args}"
        print(f"[{self.module}] {label}: {msg}")

    def trace(self, msg: str, *args) -> None:
        self._log(LogLevel.TRACE, 'TRACE', msg, args)

    def debug(self, msg: str, *args) -> None:
        self._log(LogLevel.DEBUG, 'DEBUG', msg, args)

    def info(self, msg: str, *args) -> None:
        self._log(LogLevel.INFO, 'INFO', msg, args)

    def warning(self, msg: str, *args) -> None:
        self._log(LogLevel.WARNING, 'WARN', msg, args)

    def error(self, msg: str, *args) -> None:
        self._log(LogLevel.ERROR, 'ERROR', msg, args)


@lru_cache(maxsize=64)
def get_logger(module: str) -> KioskLogger:
    """Cached logger for ``module``."""
    return KioskLogger(module)
