"""MCP23017 chip family.

Importing this package registers the family with the controller
registry under the name "MCP23017".
"""

from expander.core.controller import register_controller
from expander.utils.config_loader import get_controller_config

from .chip import MCP23017Chip
from .consts import CONTROLLER_NAME

MCP23017 = get_controller_config(CONTROLLER_NAME)
register_controller(MCP23017)

__all__ = ["MCP23017", "MCP23017Chip"]
