"""MCP23008 register map.

Single 8-bit port. Addresses from the datasheet register summary
(table 1-3).
"""

CONTROLLER_NAME = "MCP23008"

DEFAULT_ADDRESS = 0x20
"""A2..A0 tied low. Address range is 0x20-0x27."""

REG_IODIR = 0x00
REG_IPOL = 0x01
REG_GPINTEN = 0x02
REG_DEFVAL = 0x03
REG_INTCON = 0x04
REG_IOCON = 0x05
REG_GPPU = 0x06
REG_INTF = 0x07
REG_INTCAP = 0x08
REG_GPIO = 0x09
REG_OLAT = 0x0A

REGISTER_OFFSETS = {
    REG_IODIR: "IODIR",      # I/O direction (1 = input)
    REG_IPOL: "IPOL",        # Input polarity
    REG_GPINTEN: "GPINTEN",  # Interrupt-on-change enable
    REG_DEFVAL: "DEFVAL",    # Default compare value
    REG_INTCON: "INTCON",    # Interrupt control
    REG_IOCON: "IOCON",      # Configuration
    REG_GPPU: "GPPU",        # Pull-up enable
    REG_INTF: "INTF",        # Interrupt flags (read-only)
    REG_INTCAP: "INTCAP",    # Interrupt capture (read-only)
    REG_GPIO: "GPIO",        # Port
    REG_OLAT: "OLAT",        # Output latch
}

READ_ONLY_REGISTERS = (REG_INTF, REG_INTCAP)
