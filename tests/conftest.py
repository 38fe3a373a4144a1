"""
Pytest configuration and shared fixtures for the expander test suite.
"""

import sys
import tempfile
from pathlib import Path

import pytest
import yaml

# Ensure project root is on PYTHONPATH so 'expander' can be imported
PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from expander.core.exceptions import TransportError  # noqa: E402
from expander.interfaces.transport import ModeVocabulary  # noqa: E402
from expander.mcp23008 import MCP23008Chip  # noqa: E402
from expander.mcp23017 import MCP23017Chip  # noqa: E402
from expander.transports.simulated import SimulatedBus  # noqa: E402


class RecordingTransport:
    """Transport double that records calls and answers reads with a fixed byte.

    calls holds ("config",), ("write", address, [register, byte]) and
    ("read", address, register, length) tuples in submission order.
    """

    def __init__(self, read_response=b"\x00", modes=None):
        self.calls = []
        self.read_response = read_response
        self.deferred = False
        self.pending = []
        self.fail_writes = False
        self.fail_reads = False
        self._modes = modes or ModeVocabulary()

    @property
    def modes(self):
        return self._modes

    def i2c_config(self):
        self.calls.append(("config",))

    def i2c_write(self, address, data):
        self.calls.append(("write", address, list(data)))
        if self.fail_writes:
            raise TransportError("write failed", address=address, register=data[0])

    def i2c_read(self, address, register, length, completion, on_error=None):
        self.calls.append(("read", address, register, length))
        if self.fail_reads:
            raise TransportError("read failed", address=address, register=register)
        response = self.read_response
        if self.deferred:
            self.pending.append(lambda: completion(response))
        else:
            completion(response)

    def writes(self):
        return [call for call in self.calls if call[0] == "write"]

    def reads(self):
        return [call for call in self.calls if call[0] == "read"]


@pytest.fixture
def transport():
    """Recording transport answering every read with 0x00."""
    return RecordingTransport()


@pytest.fixture
def bus():
    """Simulated bus with immediate read completion."""
    return SimulatedBus()


@pytest.fixture
def deferred_bus():
    """Simulated bus that queues read completions."""
    return SimulatedBus(deferred=True)


@pytest.fixture
def mcp23008_chip(bus):
    return bus.attach(MCP23008Chip())


@pytest.fixture
def mcp23017_chip(bus):
    return bus.attach(MCP23017Chip())


@pytest.fixture
def temp_yaml_file():
    """
    Fixture that provides a temporary YAML file.

    Yields:
        Path: Path to the temporary YAML file
    """
    with tempfile.NamedTemporaryFile(
        mode="w",
        suffix=".yaml",
        delete=False,
    ) as f:
        temp_path = Path(f.name)

    yield temp_path

    # Cleanup
    if temp_path.exists():
        temp_path.unlink()


MCP23008_CFG = {
    "name": "MCP23008",
    "address": 0x20,
    "ports": {
        "A": {"direction": 0x00, "pull_up": 0x06, "gpio": 0x09, "latch": 0x0A},
    },
}

MCP23017_CFG = {
    "name": "MCP23017",
    "address": 0x20,
    "ports": {
        "A": {"direction": 0x00, "pull_up": 0x0C, "gpio": 0x12, "latch": 0x14},
        "B": {"direction": 0x01, "pull_up": 0x0D, "gpio": 0x13, "latch": 0x15},
    },
}


@pytest.fixture
def valid_controller_config_dict():
    """
    Fixture providing a complete valid dual-port controller configuration.
    """
    return {
        "name": "MCP23017",
        "address": MCP23017_CFG["address"],
        "ports": {name: dict(regs) for name, regs in MCP23017_CFG["ports"].items()},
    }


@pytest.fixture
def temp_config_yaml_file(temp_yaml_file, valid_controller_config_dict):
    """
    Fixture that creates a temporary YAML file with valid configuration.

    Yields:
        Path: Path to the temporary YAML file with valid configuration
    """
    with open(temp_yaml_file, "w", encoding="utf-8") as f:
        yaml.dump(valid_controller_config_dict, f)

    yield temp_yaml_file


def pytest_configure(config):
    """
    Hook for initial pytest configuration.

    Used to add custom markers and configuration.
    """
    config.addinivalue_line(
        "markers",
        "slow: marks tests as slow (deselect with '-m \"not slow\"')",
    )
    config.addinivalue_line(
        "markers",
        "integration: marks tests as integration tests",
    )
    config.addinivalue_line("markers", "unit: marks tests as unit tests")


@pytest.fixture
def transport_factory():
    """Factory for RecordingTransport with a custom read response."""
    return RecordingTransport
