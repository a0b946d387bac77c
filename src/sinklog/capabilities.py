"""Sink contracts and capability discovery.

Every sink implements `Logger`. The other contracts are optional; a sink
advertises which ones it implements through its `capabilities` descriptor,
and callers ask `supports()` before using one. An unsupported capability is
simply skipped by callers, never treated as an error.
"""
from __future__ import annotations

from enum import Flag, auto
from typing import Any, Protocol, runtime_checkable

from sinklog.levels import Severity

__all__ = [
    'Capability',
    'ColorControl',
    'LevelFilter',
    'Lifecycle',
    'Logger',
    'capabilities_of',
    'supports',
    ]


class Capability(Flag):
    """Contracts a sink may implement.
    """
    NONE = 0
    EMIT = auto()
    LIFECYCLE = auto()
    LEVEL_FILTER = auto()
    COLOR_CONTROL = auto()


@runtime_checkable
class Logger(Protocol):
    """Emit one leveled, already formatted message."""

    def emit(self, level: Severity, message: str) -> None:
        ...


@runtime_checkable
class Lifecycle(Protocol):
    """Acquire and release sink resources."""

    def init(self, parameter: str | None = None) -> None:
        ...

    def close(self) -> None:
        ...


@runtime_checkable
class LevelFilter(Protocol):
    """Minimum severity a sink accepts."""

    def set_min_level(self, level: Severity) -> None:
        ...

    def get_min_level(self) -> Severity:
        ...


@runtime_checkable
class ColorControl(Protocol):
    """Toggle colored output."""

    def set_color_enabled(self, enabled: bool) -> None:
        ...

    def is_color_enabled(self) -> bool:
        ...


_PROTOCOLS = (
    (Capability.EMIT, Logger),
    (Capability.LIFECYCLE, Lifecycle),
    (Capability.LEVEL_FILTER, LevelFilter),
    (Capability.COLOR_CONTROL, ColorControl),
)


def capabilities_of(sink: Any) -> Capability:
    """Return the capability set a sink supports.

    Sinks in this package declare a `capabilities` class attribute. Objects
    that do not are checked structurally against the protocols above.
    """
    if sink is None:
        return Capability.NONE
    declared = getattr(sink, 'capabilities', None)
    if isinstance(declared, Capability):
        return declared
    found = Capability.NONE
    for capability, protocol in _PROTOCOLS:
        if isinstance(sink, protocol):
            found |= capability
    return found


def supports(sink: Any, capability: Capability) -> bool:
    """Check whether `sink` implements every contract in `capability`.
    """
    return capability in capabilities_of(sink)
