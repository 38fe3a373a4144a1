"""Core modules for the expander package.

Board-agnostic infrastructure:
- exceptions: error hierarchy
- controller: controller descriptors and registry
- shadow: per-port register mirror
- events: pub/sub notification channels
- register / chip: byte register model and simulated chips
- expander: the Expander driver
"""

from expander.core.exceptions import (
    ConfigurationError,
    ExpanderError,
    TransportError,
    UnsupportedOperationError,
)
from expander.core.controller import (
    ControllerDescriptor,
    ControllerRegistry,
    PortRegisters,
    get_controller,
    list_available_controllers,
    register_controller,
    resolve_controller,
)
from expander.core.events import EventEmitter
from expander.core.register import (
    ReadOnlyRegister,
    Register,
    RegisterFile,
    SimpleRegister,
)
from expander.core.shadow import PortSnapshot, ShadowRegisterState
from expander.core.chip import SimulatedChip
from expander.core.expander import Expander

__all__ = [
    # Errors
    "ExpanderError",
    "ConfigurationError",
    "TransportError",
    "UnsupportedOperationError",
    # Controllers
    "ControllerDescriptor",
    "ControllerRegistry",
    "PortRegisters",
    "get_controller",
    "list_available_controllers",
    "register_controller",
    "resolve_controller",
    # Register abstractions
    "Register",
    "SimpleRegister",
    "ReadOnlyRegister",
    "RegisterFile",
    "SimulatedChip",
    # Driver state
    "EventEmitter",
    "PortSnapshot",
    "ShadowRegisterState",
    "Expander",
]
