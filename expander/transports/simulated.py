"""In-memory I2C bus hosting simulated expander chips.

SimulatedBus implements the I2CTransport contract without hardware.
Every transaction is recorded in bus.log so tests and tools can assert
exactly what a driver put on the wire.

Read completion:
- immediate (default): completion runs inside i2c_read()
- deferred: completions queue until complete_next()/complete_all(), which
  lets callers interleave completions with further driver calls

Data for a read is sampled when the read is submitted, since the bus
executes transactions in submission order; only delivery is deferred.
"""

from __future__ import annotations

import logging
import threading
from collections import deque
from dataclasses import dataclass, field
from typing import Callable, Optional, Sequence

from expander.core.chip import SimulatedChip
from expander.core.exceptions import TransportError
from expander.interfaces.transport import (
    ModeVocabulary,
    ReadCompletion,
    ReadErrorHandler,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BusTransaction:
    """One recorded bus operation."""

    kind: str  # "config", "write" or "read"
    address: Optional[int] = None
    register: Optional[int] = None
    data: tuple[int, ...] = field(default_factory=tuple)


class SimulatedBus:
    """Simulated I2C bus with attachable chips."""

    def __init__(
        self, modes: Optional[ModeVocabulary] = None, deferred: bool = False
    ) -> None:
        self._modes = modes or ModeVocabulary()
        self.deferred = deferred
        self.log: list[BusTransaction] = []
        self._chips: dict[int, SimulatedChip] = {}
        self._pending: deque[Callable[[], None]] = deque()
        self._failures_pending = 0
        self._lock = threading.RLock()

    @property
    def modes(self) -> ModeVocabulary:
        return self._modes

    # ==========================================================
    # Bus topology
    # ==========================================================

    def attach(self, chip: SimulatedChip, address: Optional[int] = None) -> SimulatedChip:
        """Attach a chip at address (defaults to the family address)."""
        address = chip.descriptor.address if address is None else address
        with self._lock:
            if address in self._chips:
                raise ValueError(f"Address 0x{address:02X} already in use")
            self._chips[address] = chip
        return chip

    def detach(self, address: int) -> SimulatedChip:
        with self._lock:
            return self._chips.pop(address)

    def chip(self, address: int) -> SimulatedChip:
        return self._chips[address]

    # ==========================================================
    # Failure injection
    # ==========================================================

    def fail_next(self, count: int = 1) -> None:
        """Make the next count writes/reads fail with TransportError."""
        with self._lock:
            self._failures_pending += count

    # ==========================================================
    # I2CTransport implementation
    # ==========================================================

    def i2c_config(self) -> None:
        with self._lock:
            self.log.append(BusTransaction(kind="config"))

    def i2c_write(self, address: int, data: Sequence[int]) -> None:
        if not data:
            raise ValueError("i2c_write needs at least a register byte")
        register, payload = data[0], tuple(data[1:])
        with self._lock:
            self.log.append(
                BusTransaction(kind="write", address=address, register=register, data=payload)
            )
            chip = self._target(address, register)
            if self._consume_failure():
                raise TransportError("Injected write failure", address=address, register=register)
            # Sequential addressing: each further byte goes to the next register.
            for i, value in enumerate(payload):
                chip.write(register + i, value)

    def i2c_read(
        self,
        address: int,
        register: int,
        length: int,
        completion: ReadCompletion,
        on_error: Optional[ReadErrorHandler] = None,
    ) -> None:
        with self._lock:
            self.log.append(
                BusTransaction(kind="read", address=address, register=register, data=(length,))
            )
            chip = self._target(address, register)
            if self._consume_failure():
                error = TransportError("Injected read failure", address=address, register=register)
                deliver = self._error_delivery(error, on_error)
            else:
                data = bytes(chip.read(register + i) for i in range(length))
                deliver = lambda: completion(data)  # noqa: E731

            if self.deferred:
                self._pending.append(deliver)
                return

        deliver()

    # ==========================================================
    # Deferred completion control
    # ==========================================================

    @property
    def pending_reads(self) -> int:
        return len(self._pending)

    def complete_next(self) -> None:
        """Deliver the oldest pending read completion."""
        with self._lock:
            if not self._pending:
                raise RuntimeError("No pending reads")
            deliver = self._pending.popleft()
        deliver()

    def complete_all(self) -> None:
        """Deliver every pending read completion in submission order."""
        while self.pending_reads:
            self.complete_next()

    # ==========================================================
    # Log helpers
    # ==========================================================

    def writes(self, address: Optional[int] = None) -> list[BusTransaction]:
        return [
            t for t in self.log
            if t.kind == "write" and (address is None or t.address == address)
        ]

    def reads(self, address: Optional[int] = None) -> list[BusTransaction]:
        return [
            t for t in self.log
            if t.kind == "read" and (address is None or t.address == address)
        ]

    def clear_log(self) -> None:
        with self._lock:
            self.log.clear()

    # Private helpers -------------------------------------------------------

    def _target(self, address: int, register: int) -> SimulatedChip:
        chip = self._chips.get(address)
        if chip is None:
            raise TransportError(
                f"No device acknowledged address 0x{address:02X}",
                address=address,
                register=register,
            )
        return chip

    def _consume_failure(self) -> bool:
        if self._failures_pending:
            self._failures_pending -= 1
            return True
        return False

    @staticmethod
    def _error_delivery(
        error: TransportError, on_error: Optional[ReadErrorHandler]
    ) -> Callable[[], None]:
        def deliver() -> None:
            if on_error is not None:
                on_error(error)
            else:
                logger.error(f"Unhandled read failure: {error}")

        return deliver
