"""I2C GPIO expander driver.

Emulates a native board's pin interface on top of a register-mapped
expander chip reachable only through asynchronous I2C transactions.

REGISTER DISCIPLINE:
The chip's direction, output and pull-up registers can only be replaced
a whole byte at a time. The driver keeps a shadow copy of every port
(see ShadowRegisterState) and recomputes the full byte on each pin
operation:

  pin_mode      -> direction byte  -> port direction register
  digital_write -> output latch    -> port GPIO register
  pull_up       -> pull-up byte    -> port pull-up register
  digital_read  -> 1-byte read of the port GPIO register

Reads complete out of band. Each digital_read() call issues its own bus
read; there is no polling loop.
"""

from __future__ import annotations

import logging
from concurrent.futures import Future
from typing import Callable, Optional

from overrides import override  # type: ignore

from expander.core.controller import (
    ControllerDescriptor,
    ControllerSpec,
    resolve_controller,
)
from expander.core.events import EventEmitter, Listener
from expander.core.exceptions import (
    ConfigurationError,
    ExpanderError,
    TransportError,
    UnsupportedOperationError,
)
from expander.core.shadow import ShadowRegisterState
from expander.interfaces.io import IOPlugin, Modes, PinEntry, ReadCallback
from expander.interfaces.io_enums import PinLevel
from expander.interfaces.transport import I2CTransport
from expander.utils.consts import ConstUtils, get_bit

logger = logging.getLogger(__name__)

EVENTS = ("connect", "ready")


class _PendingRead:
    """Completion handler for one submitted digital_read().

    Holds only what the completion needs: where the bit lives, which pin
    entry to update and the listeners registered when the read was
    submitted.
    """

    def __init__(
        self,
        pin: int,
        port: int,
        bit: int,
        entry: PinEntry,
        shadow: ShadowRegisterState,
        listeners: list[Listener],
    ) -> None:
        self.pin = pin
        self.port = port
        self.bit = bit
        self.entry = entry
        self.shadow = shadow
        self.listeners = listeners
        self.future: Future = Future()
        # Submitted reads cannot be cancelled.
        self.future.set_running_or_notify_cancel()

    def complete(self, data: bytes) -> None:
        if not data:
            self.fail(TransportError(f"Empty read for pin {self.pin}"))
            return

        byte = data[0]
        value = get_bit(byte, self.bit)
        with self.shadow.lock(self.port):
            self.shadow.commit("input_snapshot", self.port, byte)
        self.entry.value = value

        EventEmitter.notify(self.listeners, value)
        self.future.set_result(value)

    def fail(self, error: TransportError) -> None:
        logger.error(f"Read of pin {self.pin} failed: {error}")
        self.future.set_exception(error)


class Expander(IOPlugin):
    """Virtual I/O backend for an MCP230xx port expander.

    Args:
        controller: Family name ("MCP23008", "mcp23017", ...) or a
            ControllerDescriptor.
        transport: Bus transport implementing I2CTransport.
        address: Bus address override; defaults to the family default.
        initialize: Run the reset sequence immediately. Pass False to
            subscribe to "connect"/"ready" before calling initialize().

    Raises:
        ConfigurationError: If the controller cannot be resolved. Raised
            before any bus traffic.
    """

    HIGH = int(PinLevel.HIGH)
    LOW = int(PinLevel.LOW)

    def __init__(
        self,
        controller: ControllerSpec,
        transport: I2CTransport,
        address: Optional[int] = None,
        initialize: bool = True,
    ) -> None:
        self._descriptor: ControllerDescriptor = resolve_controller(controller)
        self._transport = transport
        self.address = self._validate_address(
            self._descriptor.address if address is None else address
        )

        self._shadow = ShadowRegisterState(self._descriptor.port_count)
        self._pins: list[PinEntry] = []
        self._events = EventEmitter()
        self._read_channels = EventEmitter()
        self.MODES: Optional[Modes] = None

        self._started = False
        self._is_ready = False

        if initialize:
            self.initialize()

    # ==========================================================
    # Properties
    # ==========================================================

    @property
    def name(self) -> str:
        return f"Expander:{self._descriptor.name}"

    @property
    def descriptor(self) -> ControllerDescriptor:
        return self._descriptor

    @property
    def shadow(self) -> ShadowRegisterState:
        """Shadow register state (read for diagnostics only)."""
        return self._shadow

    @property
    def pins(self) -> list[PinEntry]:
        return self._pins

    @property
    def pin_count(self) -> int:
        return self._descriptor.pin_count

    @property
    def is_ready(self) -> bool:
        return self._is_ready

    # ==========================================================
    # Lifecycle
    # ==========================================================

    def initialize(self, address: Optional[int] = None) -> None:
        """Reset the chip to a known state and announce readiness.

        Every direction register is re-asserted to all-inputs, then each
        pin in ascending order is switched to output and driven low.
        "connect" then "ready" are emitted once the last pin is set.

        Raises:
            ExpanderError: If the instance was already initialized.
            TransportError: If any bus write fails. The instance stays
                not-ready and cannot be initialized again.
        """
        if self._started:
            raise ExpanderError(f"{self.name} is already initialized")
        self._started = True

        if address is not None:
            self.address = self._validate_address(address)

        vocabulary = self._transport.modes
        self.MODES = Modes(INPUT=vocabulary.INPUT, OUTPUT=vocabulary.OUTPUT)
        self.HIGH = vocabulary.HIGH
        self.LOW = vocabulary.LOW
        supported_modes = (self.MODES.INPUT, self.MODES.OUTPUT)

        self._shadow.reset()
        self._pins = []

        logger.info(f"Initializing {self.name} at 0x{self.address:02X}")
        try:
            self._transport.i2c_config()
            for port, registers in enumerate(self._descriptor.ports):
                self._write(registers.direction, self._shadow.direction[port])

            for pin in range(self._descriptor.pin_count):
                self._pins.append(PinEntry(supported_modes=supported_modes))
                self.pin_mode(pin, self.MODES.OUTPUT)
                self.digital_write(pin, self.LOW)
        except TransportError:
            logger.error(f"{self.name} at 0x{self.address:02X} failed to initialize")
            raise

        self._is_ready = True
        logger.info(f"{self.name} at 0x{self.address:02X} ready")

        self._events.emit("connect")
        self._events.emit("ready")

    @override
    def on(self, event: str, listener: Callable[..., None]) -> None:
        self._check_event(event)
        self._events.on(event, listener)

    @override
    def off(self, event: str, listener: Callable[..., None]) -> None:
        self._check_event(event)
        self._events.off(event, listener)

    # ==========================================================
    # Pin operations
    # ==========================================================

    @override
    def pin_mode(self, pin: int, mode: int) -> None:
        """Configure a pin as INPUT or OUTPUT (I/O direction register).

        Raises:
            ValueError: If pin is out of range or mode is unsupported.
        """
        port, bit = self._locate(pin)
        entry = self._pins[pin]
        if mode not in entry.supported_modes:
            raise ValueError(f"Mode {mode} is not supported by {self.name} pin {pin}")

        register = self._descriptor.ports[port].direction
        with self._shadow.lock(port):
            iodir = self._shadow.with_bit(
                "direction", port, bit, mode == self.MODES.INPUT
            )
            self._write(register, iodir)
            self._shadow.commit("direction", port, iodir)
            entry.mode = mode

    @override
    def digital_write(self, pin: int, value: int) -> None:
        """Drive a pin through the port register.

        The latch bit is updated whatever the pin's current mode, so a
        value written to an input pin is applied when it becomes an
        output. The written byte is also assumed to be what the port now
        reads back.
        """
        port, bit = self._locate(pin)
        entry = self._pins[pin]
        high = bool(value)

        register = self._descriptor.ports[port].gpio
        with self._shadow.lock(port):
            gpio = self._shadow.with_bit("output_latch", port, bit, high)
            self._write(register, gpio)
            self._shadow.commit("output_latch", port, gpio)
            self._shadow.commit("input_snapshot", port, gpio)
            entry.report = False
            entry.value = self.HIGH if high else self.LOW

    @override
    def pull_up(self, pin: int, value: int) -> None:
        """Enable or disable a pin's pull-up resistor."""
        port, bit = self._locate(pin)

        register = self._descriptor.ports[port].pull_up
        with self._shadow.lock(port):
            gppu = self._shadow.with_bit("pull_up", port, bit, bool(value))
            self._write(register, gppu)
            self._shadow.commit("pull_up", port, gppu)

    @override
    def digital_read(
        self, pin: int, callback: Optional[ReadCallback] = None
    ) -> Future:
        """Sample a pin with a fresh one-byte read of its port.

        The callback joins the pin's listener list. When this read
        completes, every listener registered up to and including this
        call is notified with the sampled bit, in registration order.
        Listeners stay registered until removed with
        remove_read_listener() or stop_reporting().

        Returns:
            Future resolving to the sampled bit, or failing with
            TransportError if the transport reports a failed read.
        """
        port, bit = self._locate(pin)
        entry = self._pins[pin]

        was_reporting = entry.report
        added = callback is not None and callback not in self._read_channels.listeners(pin)
        entry.report = True
        if added:
            self._read_channels.on(pin, callback)

        request = _PendingRead(
            pin=pin,
            port=port,
            bit=bit,
            entry=entry,
            shadow=self._shadow,
            listeners=self._read_channels.listeners(pin),
        )
        register = self._descriptor.ports[port].gpio
        try:
            self._transport.i2c_read(
                self.address, register, 1, request.complete, request.fail
            )
        except TransportError:
            logger.error(
                f"{self.name}: read of register 0x{register:02X} "
                f"at 0x{self.address:02X} failed"
            )
            # The read never reached the bus; undo this call's subscription.
            if added:
                self._read_channels.off(pin, callback)
            entry.report = was_reporting
            raise
        return request.future

    def remove_read_listener(self, pin: int, callback: ReadCallback) -> None:
        """Stop notifying callback about future reads of pin."""
        self._locate(pin)
        self._read_channels.off(pin, callback)
        if not self._read_channels.listeners(pin):
            self._pins[pin].report = False

    def stop_reporting(self, pin: int) -> None:
        """Drop every read listener of pin."""
        self._locate(pin)
        self._read_channels.clear(pin)
        self._pins[pin].report = False

    # ==========================================================
    # Unsupported capabilities
    # ==========================================================

    @override
    def analog_write(self, pin: int, value: int) -> None:
        raise UnsupportedOperationError(self._descriptor.name, "analog_write")

    @override
    def analog_read(self, pin: int, callback: ReadCallback) -> None:
        raise UnsupportedOperationError(self._descriptor.name, "analog_read")

    @override
    def servo_write(self, pin: int, value: int) -> None:
        raise UnsupportedOperationError(self._descriptor.name, "servo_write")

    # Private helpers -------------------------------------------------------

    def _locate(self, pin: int) -> tuple[int, int]:
        port, bit = self._descriptor.split(pin)
        if pin >= len(self._pins):
            raise ExpanderError(f"{self.name} pin {pin} is not initialized")
        return port, bit

    def _write(self, register: int, value: int) -> None:
        try:
            self._transport.i2c_write(self.address, [register, value])
        except TransportError:
            logger.error(
                f"{self.name}: write of 0x{value:02X} to register "
                f"0x{register:02X} at 0x{self.address:02X} failed"
            )
            raise
        logger.debug(f"{self.name}: wrote 0x{value:02X} to register 0x{register:02X}")

    @staticmethod
    def _validate_address(address: int) -> int:
        if not 0 <= address <= ConstUtils.MAX_I2C_ADDRESS:
            raise ConfigurationError(
                "address", f"0x{address:X} is not a 7-bit bus address"
            )
        return address

    @staticmethod
    def _check_event(event: str) -> None:
        if event not in EVENTS:
            raise ValueError(f"Unknown event '{event}'. Available: {list(EVENTS)}")
