"""Interface abstractions for the expander package.

Defines behavioral contracts that all implementations must satisfy:
- IOPlugin: pin-capability contract consumed by device components
- I2CTransport: raw asynchronous I2C primitives consumed by the driver
- PinLevel, PinMode: pin enumerations
"""

from expander.interfaces.io import ANALOG_CHANNEL_NONE, IOPlugin, Modes, PinEntry
from expander.interfaces.io_enums import PinLevel, PinMode
from expander.interfaces.transport import I2CTransport, ModeVocabulary

__all__ = [
    "IOPlugin",
    "PinEntry",
    "Modes",
    "ANALOG_CHANNEL_NONE",
    "I2CTransport",
    "ModeVocabulary",
    "PinLevel",
    "PinMode",
]
