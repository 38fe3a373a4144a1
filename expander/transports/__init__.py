"""Concrete I2C transports.

- SimulatedBus: in-memory bus hosting simulated chips
- SMBusTransport: Linux i2c-dev through smbus2
"""

from expander.transports.simulated import BusTransaction, SimulatedBus
from expander.transports.smbus import SMBusTransport

__all__ = ["BusTransaction", "SimulatedBus", "SMBusTransport"]
