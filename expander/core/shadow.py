"""Shadow copies of expander registers.

Bus writes replace a whole register byte, so changing one pin means
recomputing the full byte from a local mirror. ShadowRegisterState keeps
that mirror, one byte per port for each write-relevant register.

Every mutation follows the same sequence while holding the port lock:

    with shadow.lock(port):
        byte = shadow.with_bit("output_latch", port, bit, True)
        transport.i2c_write(address, [register, byte])
        shadow.commit("output_latch", port, byte)

so two pins of the same port never lose each other's update, and the
mirror only changes after the bus accepted the write.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass

from expander.utils.consts import ConstUtils, set_bit

SHADOW_REGISTERS = ("direction", "output_latch", "input_snapshot", "pull_up")


@dataclass(frozen=True)
class PortSnapshot:
    """Point-in-time copy of one port's shadow bytes."""

    direction: int
    output_latch: int
    input_snapshot: int
    pull_up: int


class ShadowRegisterState:
    """Per-port register mirror owned by exactly one Expander.

    Attributes:
        direction: bit i = 1 means pin i is an input.
        output_latch: last byte commanded to the port.
        input_snapshot: last byte observed (or assumed) on the port.
        pull_up: bit i = 1 enables the pull-up on pin i.
    """

    def __init__(self, port_count: int) -> None:
        if port_count <= 0:
            raise ValueError("port_count must be positive")
        self.port_count = port_count
        self._locks = [threading.RLock() for _ in range(port_count)]
        self.direction: list[int] = []
        self.output_latch: list[int] = []
        self.input_snapshot: list[int] = []
        self.pull_up: list[int] = []
        self.reset()

    def reset(self) -> None:
        """Restore chip power-on defaults on every port."""
        n = self.port_count
        self.direction = [ConstUtils.REGISTER_BYTE_ALL_INPUTS] * n
        self.output_latch = [ConstUtils.MASK_8_BITS] * n
        self.input_snapshot = [ConstUtils.MASK_8_BITS] * n
        self.pull_up = [ConstUtils.REGISTER_BYTE_CLEAR] * n

    def lock(self, port: int) -> threading.RLock:
        """Lock serializing read-modify-write cycles on a port.

        Reentrant: a transport may deliver a read completion, which
        commits input_snapshot, from inside the write it is serving.
        """
        return self._locks[port]

    def read(self, register: str, port: int) -> int:
        return self._bytes(register)[port]

    def with_bit(self, register: str, port: int, bit: int, enabled: bool) -> int:
        """Return the register byte with one bit changed, without storing it."""
        return set_bit(self._bytes(register)[port], bit, enabled)

    def commit(self, register: str, port: int, value: int) -> None:
        """Store a byte that was successfully written to the chip."""
        self._bytes(register)[port] = value & ConstUtils.MASK_8_BITS

    def snapshot(self, port: int) -> PortSnapshot:
        return PortSnapshot(
            direction=self.direction[port],
            output_latch=self.output_latch[port],
            input_snapshot=self.input_snapshot[port],
            pull_up=self.pull_up[port],
        )

    def _bytes(self, register: str) -> list[int]:
        if register not in SHADOW_REGISTERS:
            raise ValueError(f"Unknown shadow register '{register}'")
        return getattr(self, register)
