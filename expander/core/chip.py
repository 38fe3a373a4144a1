"""Register-level simulation of an MCP230xx expander.

A SimulatedChip answers bus register reads and writes the way the real
part does, so a driver can run end-to-end without hardware:

  IODIR  (direction)  @ per-port offset, reset 0xFF (all inputs)
  GPPU   (pull-up)    @ per-port offset, reset 0x00
  GPIO   (port)       read: pin levels; write: goes to OLAT
  OLAT   (latch)      read/write output latch, reset 0x00

Pin levels seen through GPIO:
- output pins (IODIR bit 0) reflect OLAT
- input pins reflect an externally driven level if one was set with
  drive_input(), else 1 when the pull-up is enabled, else 0
"""

from __future__ import annotations

from typing import Optional

from expander.core.controller import ControllerDescriptor
from expander.core.register import Register, RegisterFile, SimpleRegister
from expander.interfaces.io_enums import PinLevel
from expander.utils.consts import ConstUtils, get_bit, set_bit


class LatchRegister(SimpleRegister):
    """OLAT: output latch."""
    pass


class PortRegister(Register):
    """GPIO: reads pin levels, writes the output latch."""

    def __init__(
        self,
        offset: int,
        latch: Register,
        direction: Register,
        pull_up: Register,
        name: Optional[str] = None,
    ):
        super().__init__(offset, 0, name=name)
        self.latch = latch
        self.direction = direction
        self.pull_up = pull_up
        self._driven_mask = 0
        self._driven_levels = 0

    def read(self) -> int:
        inputs = self.direction.read()
        undriven_inputs = inputs & ~self._driven_mask
        input_levels = (self._driven_levels & self._driven_mask) | (
            self.pull_up.read() & undriven_inputs
        )
        return ((self.latch.read() & ~inputs) | (input_levels & inputs)) & 0xFF

    def write(self, val: int) -> None:
        self.latch.write(val)

    def reset(self) -> None:
        self._driven_mask = 0
        self._driven_levels = 0

    def drive(self, bit: int, level: Optional[PinLevel]) -> None:
        """Drive an input bit externally; None releases it."""
        self._driven_mask = set_bit(self._driven_mask, bit, level is not None)
        self._driven_levels = set_bit(
            self._driven_levels, bit, level == PinLevel.HIGH
        )


class SimulatedChip:
    """Expander chip described by a ControllerDescriptor.

    Subclasses add the family's remaining registers (polarity, interrupt
    control, IOCON) as plain storage through extra_registers().
    """

    def __init__(self, descriptor: ControllerDescriptor, name: Optional[str] = None):
        self.descriptor = descriptor
        self.name = name or descriptor.name
        self._registers = RegisterFile()
        self._ports: list[PortRegister] = []

        for index, port in enumerate(descriptor.ports):
            suffix = "AB"[index] if descriptor.port_count > 1 else ""
            direction = SimpleRegister(
                port.direction, ConstUtils.REGISTER_BYTE_ALL_INPUTS, name=f"IODIR{suffix}"
            )
            pull_up = SimpleRegister(
                port.pull_up, ConstUtils.REGISTER_BYTE_CLEAR, name=f"GPPU{suffix}"
            )
            latch = LatchRegister(port.latch, ConstUtils.REGISTER_BYTE_CLEAR, name=f"OLAT{suffix}")
            gpio = PortRegister(port.gpio, latch, direction, pull_up, name=f"GPIO{suffix}")

            for reg in (direction, pull_up, latch, gpio):
                self._registers.add(reg)
            self._ports.append(gpio)

        for reg in self.extra_registers():
            if reg.offset not in self._registers:
                self._registers.add(reg)

    def extra_registers(self) -> list[Register]:
        """Registers beyond the four per-port ones (override in subclasses)."""
        return []

    def read(self, register: int) -> int:
        """Read a register byte (undefined registers read as 0)."""
        return self._registers.read(register, default_reset=0)

    def write(self, register: int, value: int) -> None:
        """Write a register byte (undefined registers ignore writes)."""
        self._registers.write(register, value)

    def reset(self) -> None:
        """Return to power-on state."""
        self._registers.reset()

    # Convenience methods for testing/debugging
    def drive_input(self, pin: int, level: Optional[PinLevel]) -> None:
        """Set the externally driven level of a pin (None to release)."""
        port, bit = self.descriptor.split(pin)
        self._ports[port].drive(bit, level)

    def get_pin(self, pin: int) -> PinLevel:
        """Level of a pin as seen through its port register."""
        port, bit = self.descriptor.split(pin)
        return PinLevel(get_bit(self._ports[port].read(), bit))

    def port_state(self, port: int = 0) -> int:
        """Whole port as seen through its GPIO register."""
        return self._ports[port].read()

    def dump(self) -> dict[str, int]:
        """Stored byte of every register by datasheet name."""
        return self._registers.dump()

    def register_value(self, register: int) -> int:
        """Raw stored value of a register."""
        reg = self._registers.get_register(register)
        if reg is None:
            raise ValueError(f"{self.name} has no register at 0x{register:02X}")
        return reg.value
