"""Byte registers of a simulated expander chip.

Every MCP230xx register is a single byte addressed by its offset on the
chip. Plain configuration registers only store what the bus writes;
registers with side effects (the port register, mirrored IOCON)
subclass Register and override read()/write().
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterator, Optional

from expander.utils.consts import ConstUtils


class Register(ABC):
    """One byte-wide chip register.

    Attributes:
        offset: Register address on the chip.
        name: Datasheet mnemonic, used in diagnostics only.
        reset_value: Power-on value restored by reset().
        value: Stored byte.
    """

    def __init__(self, offset: int, reset_value: int = 0, name: Optional[str] = None):
        self.offset = offset
        self.name = name or f"REG_{offset:02X}"
        self.reset_value = reset_value & ConstUtils.MASK_8_BITS
        self.value = self.reset_value

    @abstractmethod
    def read(self) -> int:
        """Byte returned to a bus read."""
        ...

    @abstractmethod
    def write(self, val: int) -> None:
        """Apply a byte written by the bus."""
        ...

    def reset(self) -> None:
        self.value = self.reset_value

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name}@0x{self.offset:02X}=0x{self.value:02X})"


class SimpleRegister(Register):
    """Configuration byte with no side effects."""

    def read(self) -> int:
        return self.value

    def write(self, val: int) -> None:
        self.value = val & ConstUtils.MASK_8_BITS


class ReadOnlyRegister(SimpleRegister):
    """Status byte (INTF, INTCAP); bus writes are dropped."""

    def write(self, val: int) -> None:
        pass


class RegisterFile:
    """A chip's registers keyed by offset.

    Offsets with no register behave like unimplemented addresses on the
    part: reads return a default byte and writes are dropped.
    """

    def __init__(self):
        self._by_offset: dict[int, Register] = {}

    def add(self, reg: Register) -> None:
        """Add a register.

        Raises:
            ValueError: If the offset is already taken.
        """
        if reg.offset in self._by_offset:
            existing = self._by_offset[reg.offset]
            raise ValueError(
                f"Offset 0x{reg.offset:02X} already holds {existing.name}"
            )
        self._by_offset[reg.offset] = reg

    def read(self, offset: int, default_reset: int = 0) -> int:
        reg = self._by_offset.get(offset)
        if reg is None:
            return default_reset & ConstUtils.MASK_8_BITS
        return reg.read()

    def write(self, offset: int, val: int) -> None:
        reg = self._by_offset.get(offset)
        if reg is not None:
            reg.write(val)

    def reset(self) -> None:
        """Return every register to its power-on value."""
        for reg in self:
            reg.reset()

    def get_register(self, offset: int) -> Optional[Register]:
        return self._by_offset.get(offset)

    def dump(self) -> dict[str, int]:
        """Stored byte of every register by name, in offset order."""
        return {reg.name: reg.value for reg in self}

    def __iter__(self) -> Iterator[Register]:
        return iter(sorted(self._by_offset.values(), key=lambda reg: reg.offset))

    def __contains__(self, offset: int) -> bool:
        return offset in self._by_offset
