"""Pin-capability contract - behavioral contract.

An I/O plugin is anything a generic device component (LED, button,
joystick) can drive through pin operations without knowing what backs
the pins: a native microcontroller, or a virtual backend such as an I2C
port expander. Every concrete backend must implement this interface.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from concurrent.futures import Future
from dataclasses import dataclass
from typing import Callable, Optional

ANALOG_CHANNEL_NONE = 127
"""Sentinel analog channel for pins that are not analog capable."""

ReadCallback = Callable[[int], None]


@dataclass
class PinEntry:
    """Per-pin metadata exposed to device components.

    Attributes:
        supported_modes: Modes the pin accepts in pin_mode().
        mode: Current mode, or None until pin_mode() is called.
        value: Last known logical value (written or last read).
        report: True while read listeners are attached to the pin.
        analog_channel: ANALOG_CHANNEL_NONE unless the pin is analog.
    """

    supported_modes: tuple[int, ...]
    mode: Optional[int] = None
    value: int = 0
    report: bool = False
    analog_channel: int = ANALOG_CHANNEL_NONE


@dataclass(frozen=True)
class Modes:
    """Mode constants a backend exposes to its consumers."""

    INPUT: int
    OUTPUT: int


class IOPlugin(ABC):
    """Base class for pin-capability backends.

    Consumers may rely on:
    - "connect" firing immediately before "ready"
    - "ready" firing exactly once, after every pin is in a known state
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable backend name (e.g., 'Expander:MCP23017')."""
        ...

    @property
    @abstractmethod
    def pins(self) -> list[PinEntry]:
        """Pin table indexed by flat pin number."""
        ...

    @property
    def analog_pins(self) -> list[int]:
        """Flat indices of analog-capable pins."""
        return []

    @property
    def pin_count(self) -> int:
        """Number of addressable pins."""
        return len(self.pins)

    @property
    @abstractmethod
    def is_ready(self) -> bool:
        """True once initialization completed."""
        ...

    def normalize(self, pin: int) -> int:
        """Map a user-facing pin identifier to a flat pin index."""
        return pin

    @abstractmethod
    def on(self, event: str, listener: Callable[..., None]) -> None:
        """Subscribe to a backend notification ("connect", "ready")."""
        ...

    @abstractmethod
    def off(self, event: str, listener: Callable[..., None]) -> None:
        """Unsubscribe from a backend notification."""
        ...

    @abstractmethod
    def pin_mode(self, pin: int, mode: int) -> None:
        """Configure a pin's mode."""
        ...

    @abstractmethod
    def digital_write(self, pin: int, value: int) -> None:
        """Drive a pin HIGH (nonzero) or LOW (zero)."""
        ...

    @abstractmethod
    def digital_read(
        self, pin: int, callback: Optional[ReadCallback] = None
    ) -> Future:
        """Sample a pin; callback and returned future receive the bit."""
        ...

    @abstractmethod
    def pull_up(self, pin: int, value: int) -> None:
        """Enable (nonzero) or disable (zero) a pin's pull-up."""
        ...

    @abstractmethod
    def analog_write(self, pin: int, value: int) -> None:
        """Write an analog (PWM) value."""
        ...

    @abstractmethod
    def analog_read(self, pin: int, callback: ReadCallback) -> None:
        """Read an analog value."""
        ...

    @abstractmethod
    def servo_write(self, pin: int, value: int) -> None:
        """Position a servo."""
        ...
