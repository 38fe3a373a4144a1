"""Controller descriptors and the controller registry.

A controller descriptor is the immutable, per-chip-family static data the
driver needs: register addresses per port, the default bus address and
the flat-pin to (port, bit) splitting rule.

Chip-family subpackages call register_controller() in their
__init__.py, so importing expander.mcp23008 / expander.mcp23017 makes
the family resolvable by name.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from expander.core.exceptions import ConfigurationError
from expander.utils.consts import ConstUtils

PINS_PER_PORT = 8


@dataclass(frozen=True)
class PortRegisters:
    """Register addresses of one 8-bit port."""

    direction: int
    pull_up: int
    gpio: int
    latch: int

    def addresses(self) -> tuple[int, ...]:
        return (self.direction, self.pull_up, self.gpio, self.latch)


@dataclass(frozen=True)
class ControllerDescriptor:
    """Static description of an expander chip family.

    Attributes:
        name: Family name, e.g. "MCP23017".
        address: Default 7-bit bus address.
        ports: Register addresses, one entry per port (A, B).
    """

    name: str
    address: int
    ports: tuple[PortRegisters, ...]

    def __post_init__(self) -> None:
        if not self.name:
            raise ConfigurationError("name", "controller name must not be empty")
        if len(self.ports) not in (1, 2):
            raise ConfigurationError(
                "ports",
                f"controller must have 1 or 2 ports, got {len(self.ports)}",
            )
        if not 0 <= self.address <= ConstUtils.MAX_I2C_ADDRESS:
            raise ConfigurationError(
                "address", f"0x{self.address:X} is not a 7-bit bus address"
            )
        for port in self.ports:
            for register in port.addresses():
                if not 0 <= register <= ConstUtils.MASK_8_BITS:
                    raise ConfigurationError(
                        "ports", f"register 0x{register:X} does not fit in a byte"
                    )

    @property
    def port_count(self) -> int:
        return len(self.ports)

    @property
    def pins_per_port(self) -> int:
        return PINS_PER_PORT

    @property
    def pin_count(self) -> int:
        return PINS_PER_PORT * len(self.ports)

    @property
    def max_pin(self) -> int:
        return self.pin_count - 1

    def split(self, pin: int) -> tuple[int, int]:
        """Split a flat pin index into (port, local bit).

        Raises:
            ValueError: If pin is outside [0, pin_count).
        """
        if not 0 <= pin <= self.max_pin:
            raise ValueError(f"Pin {pin} is out of range [0-{self.max_pin}]")
        return divmod(pin, PINS_PER_PORT)

    def join(self, port: int, bit: int) -> int:
        """Inverse of split()."""
        if not 0 <= port < self.port_count:
            raise ValueError(f"Port {port} is out of range [0-{self.port_count - 1}]")
        if not 0 <= bit < PINS_PER_PORT:
            raise ValueError(f"Bit {bit} is out of range [0-{PINS_PER_PORT - 1}]")
        return port * PINS_PER_PORT + bit


ControllerSpec = Union[str, ControllerDescriptor]


class ControllerRegistry:
    """Registry of available controller families.

    Names are stored upper-cased; lookups are case-insensitive.

    THREAD SAFETY: Not thread-safe. All registration should happen
    during module initialization before any threads are spawned.
    """

    def __init__(self):
        self._controllers: dict[str, ControllerDescriptor] = {}

    def register(self, descriptor: ControllerDescriptor) -> None:
        """Register a controller family under its descriptor name."""
        key = descriptor.name.upper()
        if key in self._controllers:
            raise ValueError(f"Controller '{key}' already registered")
        self._controllers[key] = descriptor

    def get(self, name: str) -> ControllerDescriptor:
        """Get a controller descriptor by (case-insensitive) name."""
        key = name.upper()
        if key not in self._controllers:
            raise ValueError(
                f"Unknown controller '{name}'. Available: {self.list_controllers()}"
            )
        return self._controllers[key]

    def list_controllers(self) -> list[str]:
        """List all registered controller names."""
        return list(self._controllers.keys())

    def resolve(self, controller: ControllerSpec) -> ControllerDescriptor:
        """Turn a family name or a descriptor into a descriptor.

        Raises:
            ConfigurationError: If the name is unknown or controller is
                neither a string nor a ControllerDescriptor.
        """
        if isinstance(controller, ControllerDescriptor):
            return controller
        if isinstance(controller, str) and controller.upper() in self._controllers:
            return self._controllers[controller.upper()]
        raise ConfigurationError(
            "controller",
            "Expander expects a valid controller",
            details={
                "provided": repr(controller),
                "available": self.list_controllers(),
            },
        )


# Global registry
_REGISTRY = ControllerRegistry()


def register_controller(descriptor: ControllerDescriptor) -> None:
    """Register a controller family globally."""
    _REGISTRY.register(descriptor)


def get_controller(name: str) -> ControllerDescriptor:
    """Get a controller descriptor by name."""
    return _REGISTRY.get(name)


def resolve_controller(controller: ControllerSpec) -> ControllerDescriptor:
    """Resolve a name or descriptor against the global registry."""
    return _REGISTRY.resolve(controller)


def list_available_controllers() -> list[str]:
    """List all registered controllers."""
    return _REGISTRY.list_controllers()


def verify_controllers_registered() -> None:
    """Verify that at least one controller family is registered.

    Raises:
        RuntimeError: If no controllers are registered
    """
    if not list_available_controllers():
        raise RuntimeError(
            "No controllers registered! Ensure chip modules are imported. "
            "Example: import expander.mcp23017"
        )
