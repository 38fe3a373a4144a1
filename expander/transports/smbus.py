"""I2C transport over Linux i2c-dev using smbus2.

Writes run synchronously on the caller's thread, so a bus failure is
raised straight back to the driver call that caused it. Reads run on a
single worker thread and complete through their callbacks, in
submission order. A bus lock serializes every SMBus access.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Callable, Optional, Sequence

from smbus2 import SMBus

from expander.core.exceptions import TransportError
from expander.interfaces.transport import (
    ModeVocabulary,
    ReadCompletion,
    ReadErrorHandler,
)

logger = logging.getLogger(__name__)


class SMBusTransport:
    """I2CTransport backed by an smbus2.SMBus.

    Args:
        bus: I2C bus number (/dev/i2c-<bus>).
        modes: Mode vocabulary to expose; Firmata defaults if omitted.
        bus_factory: Callable opening the bus; SMBus by default.

    Usable as a context manager; close() releases the bus and stops the
    read worker.
    """

    def __init__(
        self,
        bus: int = 1,
        modes: Optional[ModeVocabulary] = None,
        bus_factory: Callable[[int], Any] = SMBus,
    ) -> None:
        self.bus_id = bus
        self._modes = modes or ModeVocabulary()
        self._bus_factory = bus_factory
        self._bus: Optional[Any] = None
        self._lock = threading.Lock()
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="i2c-read")

    @property
    def modes(self) -> ModeVocabulary:
        return self._modes

    def i2c_config(self) -> None:
        """Open the bus. Calling it again on an open bus is a no-op."""
        with self._lock:
            if self._bus is not None:
                return
            try:
                self._bus = self._bus_factory(self.bus_id)
            except OSError as exc:
                raise TransportError(
                    f"Cannot open I2C bus {self.bus_id}: {exc}",
                    details={"bus": self.bus_id},
                ) from exc
            logger.info(f"Opened I2C bus {self.bus_id}")

    def i2c_write(self, address: int, data: Sequence[int]) -> None:
        if not data:
            raise ValueError("i2c_write needs at least a register byte")
        register, payload = data[0], list(data[1:])
        with self._lock:
            bus = self._require_bus()
            try:
                if len(payload) == 1:
                    bus.write_byte_data(address, register, payload[0])
                else:
                    bus.write_i2c_block_data(address, register, payload)
            except OSError as exc:
                raise TransportError(
                    f"I2C write failed: {exc}", address=address, register=register
                ) from exc

    def i2c_read(
        self,
        address: int,
        register: int,
        length: int,
        completion: ReadCompletion,
        on_error: Optional[ReadErrorHandler] = None,
    ) -> None:
        future = self._executor.submit(
            self._read, address, register, length, completion, on_error
        )
        future.add_done_callback(self._log_worker_failure)

    def close(self) -> None:
        """Wait for pending reads, then close the bus."""
        self._executor.shutdown(wait=True)
        with self._lock:
            if self._bus is not None:
                self._bus.close()
                self._bus = None

    def __enter__(self) -> "SMBusTransport":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    # Private helpers -------------------------------------------------------

    def _read(
        self,
        address: int,
        register: int,
        length: int,
        completion: ReadCompletion,
        on_error: Optional[ReadErrorHandler],
    ) -> None:
        # Callbacks run after the bus lock is released; they may write.
        try:
            with self._lock:
                bus = self._require_bus()
                try:
                    data = bytes(bus.read_i2c_block_data(address, register, length))
                except OSError as exc:
                    raise TransportError(
                        f"I2C read failed: {exc}", address=address, register=register
                    ) from exc
        except TransportError as error:
            if on_error is None:
                raise
            on_error(error)
            return
        completion(data)

    def _require_bus(self) -> Any:
        if self._bus is None:
            raise TransportError(f"I2C bus {self.bus_id} is not configured")
        return self._bus

    @staticmethod
    def _log_worker_failure(future: Future) -> None:
        exc = future.exception()
        if exc is not None:
            logger.error(f"I2C read worker failed: {exc}")
