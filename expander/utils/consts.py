"""Constants and utility values for the expander package."""


class ConstUtils:
    """Bitwise masks and bus constants."""

    MASK_8_BITS = 0xFF
    """8-bit mask: 0xFF"""

    MAX_I2C_ADDRESS = 0x7F
    """Highest 7-bit I2C address."""

    REGISTER_BYTE_ALL_INPUTS = 0xFF
    """Direction byte with every pin configured as input."""

    REGISTER_BYTE_CLEAR = 0x00


def set_bit(byte: int, bit: int, enabled: bool) -> int:
    """Return byte with bit set (enabled) or cleared, masked to 8 bits."""
    if enabled:
        byte |= 1 << bit
    else:
        byte &= ~(1 << bit)
    return byte & ConstUtils.MASK_8_BITS


def get_bit(byte: int, bit: int) -> int:
    """Return bit of byte as 0 or 1."""
    return (byte >> bit) & 0x01
