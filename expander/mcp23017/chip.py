"""Simulated MCP23017 (two 8-bit ports, IOCON.BANK = 0)."""

from __future__ import annotations

from typing import Optional

from expander.core.chip import SimulatedChip
from expander.core.register import (
    ReadOnlyRegister,
    Register,
    SimpleRegister,
)
from expander.utils.config_loader import get_controller_config

from .consts import (
    CONTROLLER_NAME,
    READ_ONLY_REGISTERS,
    REG_IOCON,
    REG_IOCON_ALT,
    REGISTER_OFFSETS,
)


class MirroredRegister(Register):
    """Second address of a register (IOCON appears at 0x0A and 0x0B)."""

    def __init__(self, offset: int, target: Register):
        super().__init__(offset, target.reset_value, name=target.name)
        self.target = target

    def read(self) -> int:
        return self.target.read()

    def write(self, val: int) -> None:
        self.target.write(val)

    def reset(self) -> None:
        pass  # target resets itself


class MCP23017Chip(SimulatedChip):
    """MCP23017 register file.

    BANK = 1 addressing is not simulated: writes to IOCON are stored but
    do not remap registers.
    """

    def __init__(self, name: Optional[str] = None):
        super().__init__(get_controller_config(CONTROLLER_NAME), name=name)

    def extra_registers(self) -> list[Register]:
        iocon = SimpleRegister(REG_IOCON, name="IOCON")
        registers: list[Register] = [iocon, MirroredRegister(REG_IOCON_ALT, iocon)]
        for offset in REGISTER_OFFSETS:
            if offset in (REG_IOCON, REG_IOCON_ALT):
                continue
            if offset in READ_ONLY_REGISTERS:
                registers.append(ReadOnlyRegister(offset, name=REGISTER_OFFSETS[offset]))
            else:
                registers.append(SimpleRegister(offset, name=REGISTER_OFFSETS[offset]))
        return registers
