"""MCP23017 register map.

Two 8-bit ports (A, B), IOCON.BANK = 0 layout where A/B registers are
interleaved. Addresses from the datasheet register summary (table 3-5).
"""

CONTROLLER_NAME = "MCP23017"

DEFAULT_ADDRESS = 0x20
"""A2..A0 tied low. Address range is 0x20-0x27."""

REG_IODIRA = 0x00
REG_IODIRB = 0x01
REG_IPOLA = 0x02
REG_IPOLB = 0x03
REG_GPINTENA = 0x04
REG_GPINTENB = 0x05
REG_DEFVALA = 0x06
REG_DEFVALB = 0x07
REG_INTCONA = 0x08
REG_INTCONB = 0x09
REG_IOCON = 0x0A
REG_IOCON_ALT = 0x0B
"""IOCON is mirrored at 0x0B."""
REG_GPPUA = 0x0C
REG_GPPUB = 0x0D
REG_INTFA = 0x0E
REG_INTFB = 0x0F
REG_INTCAPA = 0x10
REG_INTCAPB = 0x11
REG_GPIOA = 0x12
REG_GPIOB = 0x13
REG_OLATA = 0x14
REG_OLATB = 0x15

REGISTER_OFFSETS = {
    REG_IODIRA: "IODIRA",
    REG_IODIRB: "IODIRB",
    REG_IPOLA: "IPOLA",
    REG_IPOLB: "IPOLB",
    REG_GPINTENA: "GPINTENA",
    REG_GPINTENB: "GPINTENB",
    REG_DEFVALA: "DEFVALA",
    REG_DEFVALB: "DEFVALB",
    REG_INTCONA: "INTCONA",
    REG_INTCONB: "INTCONB",
    REG_IOCON: "IOCON",
    REG_IOCON_ALT: "IOCON",
    REG_GPPUA: "GPPUA",
    REG_GPPUB: "GPPUB",
    REG_INTFA: "INTFA",
    REG_INTFB: "INTFB",
    REG_INTCAPA: "INTCAPA",
    REG_INTCAPB: "INTCAPB",
    REG_GPIOA: "GPIOA",
    REG_GPIOB: "GPIOB",
    REG_OLATA: "OLATA",
    REG_OLATB: "OLATB",
}

READ_ONLY_REGISTERS = (REG_INTFA, REG_INTFB, REG_INTCAPA, REG_INTCAPB)
