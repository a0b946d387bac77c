"""Concrete sinks - console, ANSI console, enhanced console, file, null, composite.

Each sink filters by its own minimum level before taking its lock, then
writes one whole line while holding the lock so concurrent emits never
interleave. Output failures are reported through loguru and swallowed.
"""
from __future__ import annotations

import datetime
import os
import sys
import threading
from typing import Any, TextIO

from loguru import logger as _loguru

from sinklog.capabilities import Capability, supports
from sinklog.colors import ANSI_RESET, Color, color_for, enable_ansi, set_color
from sinklog.levels import Severity, as_severity, level_tag, rank

__all__ = [
    'AnsiConsoleSink',
    'CompositeSink',
    'ConsoleSink',
    'EnhancedConsoleSink',
    'FileSink',
    'NullSink',
    ]


class _Threshold:
    """Minimum-level state shared by the filterable sinks.
    """

    def __init__(self) -> None:
        self._min_level: Severity = Severity.DEBUG

    def set_min_level(self, level: Severity | str) -> None:
        """Set the threshold; values that name no severity are ignored.
        """
        severity = as_severity(level)
        if severity is not None:
            self._min_level = severity

    def get_min_level(self) -> Severity:
        return self._min_level

    def _accepts(self, level: Any) -> bool:
        return rank(level) >= rank(self._min_level)


class _StreamSink(_Threshold):
    """Base for sinks writing lines to a text stream (stdout by default).
    """
    capabilities = Capability.EMIT | Capability.LEVEL_FILTER | Capability.COLOR_CONTROL

    def __init__(self, stream: TextIO | None = None) -> None:
        super().__init__()
        self._stream = stream
        self._color_enabled = True
        self._lock = threading.Lock()

    @property
    def stream(self) -> TextIO:
        """Target stream, resolving `sys.stdout` at call time when unset.
        """
        return self._stream if self._stream is not None else sys.stdout

    def set_color_enabled(self, enabled: bool) -> None:
        self._color_enabled = bool(enabled)

    def is_color_enabled(self) -> bool:
        return self._color_enabled

    def emit(self, level: Severity, message: str) -> None:
        if not self._accepts(level):
            return
        with self._lock:
            stream = self.stream
            try:
                self._write(stream, level, message)
                stream.flush()
            except (OSError, ValueError) as e:
                _loguru.opt(depth=1).warning(f'{type(self).__name__} write failed: {e}')

    def _write(self, stream: TextIO, level: Severity, message: str) -> None:
        raise NotImplementedError


class ConsoleSink(_StreamSink):
    """Single-line console output colored through the native console API.

    Falls back to ANSI escapes where there is no Windows console.
    """

    def _write(self, stream: TextIO, level: Severity, message: str) -> None:
        text = f'{level_tag(level)} {message}'
        if self._color_enabled:
            with set_color(color_for(level), stream):
                stream.write(text)
        else:
            stream.write(text)
        stream.write('\n')


class AnsiConsoleSink(_StreamSink):
    """Console output colored with portable ANSI escape sequences.

    `init` enables escape interpretation on consoles that need it.
    """
    capabilities = _StreamSink.capabilities | Capability.LIFECYCLE

    def init(self, parameter: str | None = None) -> None:
        enable_ansi()

    def close(self) -> None:
        pass

    def _write(self, stream: TextIO, level: Severity, message: str) -> None:
        text = f'{level_tag(level)} {message}'
        if self._color_enabled:
            text = f'{color_for(level).ansi}{text}{ANSI_RESET}'
        stream.write(text + '\n')


class EnhancedConsoleSink(_StreamSink):
    """Console output in three segments: time, level tag, message.

    When color is enabled each segment gets its own color.
    """

    def _write(self, stream: TextIO, level: Severity, message: str) -> None:
        stamp = f'[{datetime.datetime.now():%H:%M:%S}]'
        tag = level_tag(level)
        if not self._color_enabled:
            stream.write(f'{stamp} {tag} {message}\n')
            return
        with set_color(Color.DARK_GRAY, stream):
            stream.write(f'{stamp} ')
        with set_color(color_for(level), stream):
            stream.write(f'{tag} ')
        with set_color(Color.WHITE, stream):
            stream.write(message)
        stream.write('\n')


class FileSink(_Threshold):
    """Append-only log file, flushed to storage after every line.

    Lines look like `[YYYY-MM-DD HH:MM:SS] [LEVEL] message` and end in CRLF.
    Emitting before `init` (or after a failed open) does nothing.
    """
    capabilities = Capability.EMIT | Capability.LIFECYCLE | Capability.LEVEL_FILTER

    def __init__(self, path: str | os.PathLike | None = None, *,
                 durable: bool = True, encoding: str = 'utf-8') -> None:
        super().__init__()
        self._lock = threading.Lock()
        self._file: TextIO | None = None
        self._path: str | None = None
        self.durable = durable
        self.encoding = encoding
        if path is not None:
            self.init(path)

    def __del__(self) -> None:
        if getattr(self, '_lock', None) is not None:
            self.close()

    @property
    def path(self) -> str | None:
        return self._path

    @property
    def is_open(self) -> bool:
        return self._file is not None

    def init(self, parameter: str | os.PathLike | None = None) -> None:
        """Open (or create) `parameter` for appending; existing content is kept.
        """
        if not parameter:
            return
        with self._lock:
            self._release()
            self._path = os.fspath(parameter)
            try:
                self._file = open(self._path, 'a', encoding=self.encoding, newline='')
            except OSError as e:
                _loguru.opt(depth=1).warning(f'FileSink could not open {self._path}: {e}')

    def close(self) -> None:
        with self._lock:
            self._release()

    def _release(self) -> None:
        handle, self._file = self._file, None
        if handle is None:
            return
        try:
            handle.close()
        except OSError as e:
            _loguru.opt(depth=2).warning(f'FileSink close of {self._path} failed: {e}')

    def emit(self, level: Severity, message: str) -> None:
        if not self._accepts(level) or self._file is None:
            return
        line = f'[{datetime.datetime.now():%Y-%m-%d %H:%M:%S}] {level_tag(level)} {message}\r\n'
        with self._lock:
            if self._file is None:
                return
            try:
                self._file.write(line)
                self._file.flush()
                if self.durable:
                    os.fsync(self._file.fileno())
            except (OSError, ValueError) as e:
                _loguru.opt(depth=1).warning(f'FileSink write to {self._path} failed: {e}')


class NullSink:
    """Accepts everything, emits nothing.
    """
    capabilities = Capability.EMIT | Capability.LIFECYCLE | Capability.LEVEL_FILTER

    def emit(self, level: Severity, message: str) -> None:
        pass

    def init(self, parameter: str | None = None) -> None:
        pass

    def close(self) -> None:
        pass

    def set_min_level(self, level: Severity) -> None:
        pass

    def get_min_level(self) -> Severity:
        return Severity.FATAL


class CompositeSink(_Threshold):
    """Fans out to an enhanced console sink and a file sink.

    The composite applies its own threshold first, then each child applies
    its own. Level changes reach every filterable child, color changes reach
    the color-capable child, and `init`/`close` reach the child that owns a
    resource (the file).
    """
    capabilities = (Capability.EMIT | Capability.LIFECYCLE
                    | Capability.LEVEL_FILTER | Capability.COLOR_CONTROL)

    def __init__(self, stream: TextIO | None = None) -> None:
        super().__init__()
        self._console = EnhancedConsoleSink(stream)
        self._file = FileSink()
        children = (self._console, self._file)
        self._filters = [s for s in children if supports(s, Capability.LEVEL_FILTER)]
        self._colored = next((s for s in children if supports(s, Capability.COLOR_CONTROL)), None)
        self._resource = next((s for s in children if supports(s, Capability.LIFECYCLE)), None)

    @property
    def console(self) -> EnhancedConsoleSink:
        return self._console

    @property
    def file(self) -> FileSink:
        return self._file

    def emit(self, level: Severity, message: str) -> None:
        if not self._accepts(level):
            return
        self._console.emit(level, message)
        self._file.emit(level, message)

    def init(self, parameter: str | os.PathLike | None = None) -> None:
        if parameter and self._resource is not None:
            self._resource.init(parameter)

    def close(self) -> None:
        if self._resource is not None:
            self._resource.close()

    def set_min_level(self, level: Severity | str) -> None:
        severity = as_severity(level)
        if severity is None:
            return
        self._min_level = severity
        for sink in self._filters:
            sink.set_min_level(severity)

    def set_color_enabled(self, enabled: bool) -> None:
        if self._colored is not None:
            self._colored.set_color_enabled(enabled)

    def is_color_enabled(self) -> bool:
        return self._colored.is_color_enabled() if self._colored is not None else False
