"""Pin mode and level enumerations."""

from enum import IntEnum


class PinMode(IntEnum):
    """Pin mode enumeration.

    Values follow the Firmata mode numbering used by host-side I/O
    plugins, so a transport that speaks Firmata can hand them through
    unchanged.
    """

    INPUT = 0
    """Pin configured as digital input."""

    OUTPUT = 1
    """Pin configured as digital output."""

    ANALOG = 2
    """Pin configured as analog input (never supported by expanders)."""

    PWM = 3
    """Pin configured for PWM output (never supported by expanders)."""

    SERVO = 4
    """Pin configured for servo output (never supported by expanders)."""


class PinLevel(IntEnum):
    """Pin logic level enumeration."""

    LOW = 0
    """Logic level LOW (digital 0)."""

    HIGH = 1
    """Logic level HIGH (digital 1)."""
