"""Custom exceptions for leanquery.

Serialization and validation errors are programmer errors and propagate.
Transport failures are never raised by the query layer; they come back as
a failed `Response` (see `leanquery.client`).
"""

from typing import Any, Dict


class LeanQueryError(Exception):
    """Base exception for all leanquery errors.

    Attributes:
        message: Error message
        details: Additional error context as key-value pairs
    """

    def __init__(self, message: str = "", **kwargs: Any) -> None:
        self.message = message
        self.details: Dict[str, Any] = kwargs
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        if not self.details:
            return self.message

        details_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
        if self.message:
            return f"{self.message} ({details_str})"
        return details_str

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message={self.message!r}, details={self.details!r})"


# Validation exceptions
class ValidationError(LeanQueryError):
    """Raised when caller-supplied input is rejected.

    Example:
        >>> raise ValidationError("Invalid input", field="limit", value=-1)
    """


class InvalidConstraintError(ValidationError):
    """Raised when a constraint cannot be built from the given payload.

    Example:
        >>> raise InvalidConstraintError("Unknown constraint kind", key="age", kind="between")
    """


class InvalidFieldError(ValidationError):
    """Raised when a field has an invalid value or type.

    Example:
        >>> raise InvalidFieldError("Invalid field value", field="class_name", value="")
    """


# Serialization exceptions
class SerializationError(LeanQueryError):
    """Raised when a value has no JSON-safe representation.

    Example:
        >>> raise SerializationError("Cannot serialize value", type="set")
    """


# Configuration exceptions
class ConfigurationError(LeanQueryError):
    """Raised when configuration is invalid or missing."""


class MissingConfigError(ConfigurationError):
    """Raised when required configuration values are not set.

    Example:
        >>> raise MissingConfigError("Configuration not set", config_key="LEANCLOUD_API_SERVER")
    """


class InvalidConfigError(ConfigurationError):
    """Raised when configuration values are invalid.

    Example:
        >>> raise InvalidConfigError("Invalid config value", config_key="LEANCLOUD_REQUEST_TIMEOUT", value=0)
    """


# Registry exceptions
class RegistryError(LeanQueryError):
    """Base exception for object class registry errors."""


class ClassAlreadyRegisteredError(RegistryError):
    """Raised when a different class is registered under a taken class name.

    Example:
        >>> raise ClassAlreadyRegisteredError("Class name already registered", class_name="Todo")
    """


# Request exceptions
class RequestError(LeanQueryError):
    """Raised by `Response.raise_for_error()` for a failed request.

    Example:
        >>> raise RequestError("Request failed", status_code=404, error="Class not found")
    """
