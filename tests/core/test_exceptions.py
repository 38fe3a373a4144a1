import pytest

from expander.core.exceptions import (
    ConfigurationError,
    ExpanderError,
    TransportError,
    UnsupportedOperationError,
)


class TestExpanderError:
    """Test ExpanderError base exception class."""

    def test_expander_error_creation_basic(self):
        msg = "Test error message"
        exc = ExpanderError(msg)

        assert str(exc) == msg
        assert exc.details == {}

    def test_expander_error_with_details(self):
        details = {"key1": "value1", "key2": 42}
        exc = ExpanderError("Test error message", details=details)

        assert exc.details == details

    def test_expander_error_none_details_defaults_to_empty(self):
        exc = ExpanderError("message", details=None)

        assert exc.details == {}

    def test_expander_error_inheritance(self):
        assert isinstance(ExpanderError("test"), Exception)


class TestConfigurationError:
    """Test ConfigurationError exception class."""

    def test_configuration_error_with_key_and_message(self):
        exc = ConfigurationError(
            config_key="controller", message="Expander expects a valid controller"
        )

        assert "controller" in str(exc)
        assert "Expander expects a valid controller" in str(exc)
        assert exc.config_key == "controller"

    def test_configuration_error_message_none_uses_key_as_message(self):
        exc = ConfigurationError(config_key="address")

        assert "address" in str(exc)
        assert exc.config_key == "configuration"

    def test_configuration_error_none_key_defaults(self):
        exc = ConfigurationError(config_key=None, message="Something is wrong")

        assert "Configuration error for 'configuration'" in str(exc)
        assert "Something is wrong" in str(exc)

    def test_configuration_error_no_args(self):
        exc = ConfigurationError()

        assert "Invalid configuration" in str(exc)
        assert exc.details == {}

    def test_configuration_error_inheritance(self):
        exc = ConfigurationError(config_key="test")

        assert isinstance(exc, ExpanderError)


class TestUnsupportedOperationError:
    def test_message_names_controller_and_operation(self):
        exc = UnsupportedOperationError("MCP23017", "analog_write")

        assert str(exc) == "Expander:MCP23017 does not support analog_write"
        assert exc.controller == "MCP23017"
        assert exc.operation == "analog_write"

    def test_inheritance(self):
        assert isinstance(UnsupportedOperationError("MCP23008", "servo_write"), ExpanderError)


class TestTransportError:
    def test_address_and_register_in_details(self):
        exc = TransportError("write failed", address=0x20, register=0x12)

        assert str(exc) == "write failed"
        assert exc.details == {"address": "0x20", "register": "0x12"}
        assert exc.address == 0x20
        assert exc.register == 0x12

    def test_address_only(self):
        exc = TransportError("nack", address=0x27)

        assert exc.details == {"address": "0x27"}
        assert exc.register is None

    def test_details_merged(self):
        exc = TransportError("failed", address=0x21, details={"bus": 1})

        assert exc.details == {"bus": 1, "address": "0x21"}

    def test_no_location(self):
        exc = TransportError("bus closed")

        assert exc.details == {}

    def test_catch_all_with_base(self):
        with pytest.raises(ExpanderError):
            raise TransportError("boom")
