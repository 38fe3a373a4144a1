"""Custom exceptions used throughout the expander package."""

from typing import Any, Optional


class ExpanderError(Exception):
    """Base exception for all expander errors.

    All expander-specific exceptions should inherit from this class.
    This allows catching all driver errors with a single except clause.
    """

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        """Initialize the exception.

        Args:
            message: Human-readable error message
            details: Additional context about the error
        """

        super().__init__(message)
        self.details = details or {}


class ConfigurationError(ExpanderError):
    """Raised when there's an error in configuration.

    This includes:
    - Unknown or missing controller identifier
    - Invalid controller descriptor values
    - Controller config file parse/validation failures
    """

    def __init__(
        self,
        config_key: Optional[str] = None,
        message: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        """Initialize configuration error.

        Args:
            config_key: The configuration key that caused the error
            message: Description of what's wrong. If omitted, config_key is
                treated as the message and the key defaults to "configuration".
            details: Additional context
        """
        if message is None:
            message = config_key or "Invalid configuration"
            config_key = "configuration"
        if config_key is None:
            config_key = "configuration"

        full_message = f"Configuration error for '{config_key}': {message}"
        super().__init__(message=full_message, details=details)
        self.config_key = config_key


class UnsupportedOperationError(ExpanderError):
    """Raised when a chip family lacks a capability (analog, servo).

    Raised synchronously, before any bus traffic and without touching
    driver state.
    """

    def __init__(
        self,
        controller: str,
        operation: str,
        details: Optional[dict[str, Any]] = None,
    ):
        message = f"Expander:{controller} does not support {operation}"
        super().__init__(message=message, details=details)
        self.controller = controller
        self.operation = operation


class TransportError(ExpanderError):
    """Raised by a transport when a bus transaction fails.

    Examples:
    - Device did not acknowledge its address (NACK)
    - Bus I/O error reported by the OS
    """

    def __init__(
        self,
        message: str,
        address: Optional[int] = None,
        register: Optional[int] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        if address is not None or register is not None:
            details = details or {}
            if address is not None:
                details["address"] = f"0x{address:02X}"
            if register is not None:
                details["register"] = f"0x{register:02X}"

        super().__init__(message=message, details=details)
        self.address = address
        self.register = register
