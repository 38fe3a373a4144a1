"""Virtual I/O backend for I2C GPIO expanders.

Drives MCP23008 (8 pins) and MCP23017 (16 pins) port expanders through
the same pin-capability contract a native board offers, so generic
device components can run on expander pins unchanged.

Getting started:
    from expander import Expander, SimulatedBus, MCP23017Chip

    bus = SimulatedBus()
    bus.attach(MCP23017Chip())
    io = Expander("MCP23017", bus)
    io.digital_write(9, io.HIGH)
"""

# Core abstractions
from expander.core.controller import (
    ControllerDescriptor,
    PortRegisters,
    get_controller,
    list_available_controllers,
    register_controller,
    verify_controllers_registered,
)
from expander.core.exceptions import (
    ConfigurationError,
    ExpanderError,
    TransportError,
    UnsupportedOperationError,
)
from expander.core.expander import Expander
from expander.interfaces import IOPlugin, ModeVocabulary, PinEntry, PinLevel, PinMode

# Chip families (auto-register when imported)
from expander.mcp23008 import MCP23008, MCP23008Chip
from expander.mcp23017 import MCP23017, MCP23017Chip

from expander.transports import SimulatedBus, SMBusTransport

__all__ = [
    # Core
    "Expander",
    "IOPlugin",
    "PinEntry",
    "PinLevel",
    "PinMode",
    "ModeVocabulary",
    # Controllers
    "ControllerDescriptor",
    "PortRegisters",
    "get_controller",
    "list_available_controllers",
    "register_controller",
    "verify_controllers_registered",
    "MCP23008",
    "MCP23017",
    # Errors
    "ExpanderError",
    "ConfigurationError",
    "TransportError",
    "UnsupportedOperationError",
    # Transports and simulation
    "SimulatedBus",
    "SMBusTransport",
    "MCP23008Chip",
    "MCP23017Chip",
]
