import pytest

from expander.core.expander import Expander
from expander.interfaces.io import ANALOG_CHANNEL_NONE, IOPlugin, PinEntry
from expander.interfaces.io_enums import PinLevel, PinMode
from expander.interfaces.transport import I2CTransport, ModeVocabulary


def test_io_plugin_is_abstract():
    with pytest.raises(TypeError):
        IOPlugin()


def test_expander_is_io_plugin():
    assert issubclass(Expander, IOPlugin)


def test_pin_entry_defaults():
    entry = PinEntry(supported_modes=(PinMode.INPUT, PinMode.OUTPUT))

    assert entry.mode is None
    assert entry.value == 0
    assert entry.report is False
    assert entry.analog_channel == ANALOG_CHANNEL_NONE


def test_mode_vocabulary_defaults():
    modes = ModeVocabulary()

    assert (modes.INPUT, modes.OUTPUT, modes.HIGH, modes.LOW) == (0, 1, 1, 0)


def test_pin_enums():
    assert PinMode.INPUT == 0
    assert PinMode.OUTPUT == 1
    assert PinLevel.HIGH == 1
    assert PinLevel.LOW == 0


def test_simulated_bus_satisfies_transport_protocol(bus):
    assert isinstance(bus, I2CTransport)
