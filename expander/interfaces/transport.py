"""Transport contract consumed by I/O backends.

A transport owns the physical (or simulated) I2C bus. It is expected to
serialize all operations in submission order; the expander driver relies
on that ordering and never reorders writes itself.

PROTOCOL CONTRACT:
- i2c_config() prepares the bus; it is called once per driver instance
- i2c_write() is fire-and-forget from the caller's perspective, but a
  transport that detects failure synchronously raises TransportError
- i2c_read() returns immediately; completion(data) runs later, possibly
  on another thread
- Timeouts and retries belong to the transport, never to the driver
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional, Protocol, Sequence, runtime_checkable

from expander.core.exceptions import TransportError
from expander.interfaces.io_enums import PinLevel, PinMode

ReadCompletion = Callable[[bytes], None]
ReadErrorHandler = Callable[[TransportError], None]


@dataclass(frozen=True)
class ModeVocabulary:
    """Mode and level constants as understood by a transport.

    Queried once by the driver at initialization and stored locally.
    """

    INPUT: int = int(PinMode.INPUT)
    OUTPUT: int = int(PinMode.OUTPUT)
    HIGH: int = int(PinLevel.HIGH)
    LOW: int = int(PinLevel.LOW)


@runtime_checkable
class I2CTransport(Protocol):
    """Raw asynchronous I2C primitives (structural subtyping)."""

    @property
    def modes(self) -> ModeVocabulary:
        """Mode vocabulary of this transport."""
        ...

    def i2c_config(self) -> None:
        """Configure the bus for I2C traffic."""
        ...

    def i2c_write(self, address: int, data: Sequence[int]) -> None:
        """Write bytes to a device.

        Args:
            address: 7-bit device address
            data: [register, byte, ...] payload

        Raises:
            TransportError: If the write fails synchronously
        """
        ...

    def i2c_read(
        self,
        address: int,
        register: int,
        length: int,
        completion: ReadCompletion,
        on_error: Optional[ReadErrorHandler] = None,
    ) -> None:
        """Submit a register read.

        Args:
            address: 7-bit device address
            register: Register to start reading at
            length: Number of bytes to read
            completion: Receives the raw bytes once the read completes
            on_error: Receives a TransportError if the read fails
        """
        ...
