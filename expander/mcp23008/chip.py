"""Simulated MCP23008 (single 8-bit port)."""

from __future__ import annotations

from typing import Optional

from expander.core.chip import SimulatedChip
from expander.core.register import ReadOnlyRegister, Register, SimpleRegister
from expander.utils.config_loader import get_controller_config

from .consts import CONTROLLER_NAME, READ_ONLY_REGISTERS, REGISTER_OFFSETS


class MCP23008Chip(SimulatedChip):
    """MCP23008 register file.

    Polarity, interrupt and IOCON registers are plain storage; the
    simulation does not raise interrupts.
    """

    def __init__(self, name: Optional[str] = None):
        super().__init__(get_controller_config(CONTROLLER_NAME), name=name)

    def extra_registers(self) -> list[Register]:
        return [
            ReadOnlyRegister(offset, name=name) if offset in READ_ONLY_REGISTERS
            else SimpleRegister(offset, name=name)
            for offset, name in REGISTER_OFFSETS.items()
        ]
