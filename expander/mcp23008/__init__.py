"""MCP23008 chip family.

Importing this package registers the family with the controller
registry under the name "MCP23008".
"""

from expander.core.controller import register_controller
from expander.utils.config_loader import get_controller_config

from .chip import MCP23008Chip
from .consts import CONTROLLER_NAME

MCP23008 = get_controller_config(CONTROLLER_NAME)
register_controller(MCP23008)

__all__ = ["MCP23008", "MCP23008Chip"]
