#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the bbhtml library.

Bad user markup never raises: nesting violations, unmatched tags and invalid
tag parameters are reported as diagnostics on the render result. The
exceptions below cover configuration mistakes and caller errors.

Exception Hierarchy
-------------------
- BBHtmlError (base exception)

  - ValidationError (parameter/option validation)
    - InvalidOptionsError (wrong options class)
    - InputTooLargeError (input above the configured length limit)

  - ConfigurationError (tag registry configuration)
    - DuplicateTagError (tag name already registered)
    - InvalidTagDefinitionError (unusable tag name or definition)

  - RenderingError (a tag callback failed while rendering)

"""

from typing import Any


class BBHtmlError(Exception):
    """Base exception class for all bbhtml-specific errors.

    Parameters
    ----------
    message : str
        Human-readable description of the error
    original_error : Exception, optional
        The original exception that caused this error, if applicable

    Attributes
    ----------
    message : str
        The error message
    original_error : Exception or None
        The wrapped original exception, if any

    """

    def __init__(self, message: str, original_error: Exception | None = None):
        """Initialize the error with a message and optional original exception."""
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ValidationError(BBHtmlError):
    """Exception raised for invalid input parameters or options.

    Parameters
    ----------
    message : str
        Description of the validation error
    parameter_name : str, optional
        Name of the invalid parameter
    parameter_value : any, optional
        The invalid value that was provided
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(
        self,
        message: str,
        parameter_name: str | None = None,
        parameter_value: Any = None,
        original_error: Exception | None = None,
    ):
        """Initialize the validation error with parameter details."""
        super().__init__(message, original_error=original_error)
        self.parameter_name = parameter_name
        self.parameter_value = parameter_value


class InvalidOptionsError(ValidationError):
    """Exception raised when an options object of the wrong type is supplied.

    Parameters
    ----------
    expected_type : type
        The expected options class type
    received_type : type
        The actual options class type that was received
    message : str, optional
        Custom error message

    """

    def __init__(self, expected_type: type, received_type: type, message: str | None = None):
        """Initialize the invalid options error."""
        if message is None:
            message = (
                f"Expected options of type '{expected_type.__name__}' "
                f"but received '{received_type.__name__}'."
            )
        super().__init__(message, parameter_name="options", parameter_value=received_type)
        self.expected_type = expected_type
        self.received_type = received_type


class InputTooLargeError(ValidationError):
    """Exception raised when markup exceeds the configured ``max_input_length``.

    Parameters
    ----------
    length : int
        Length of the rejected input
    limit : int
        Configured maximum length

    """

    def __init__(self, length: int, limit: int):
        """Initialize the input size error."""
        super().__init__(
            f"Markup length {length} exceeds the maximum of {limit} characters",
            parameter_name="text",
            parameter_value=length,
        )
        self.length = length
        self.limit = limit


class ConfigurationError(BBHtmlError):
    """Base exception for tag registry configuration errors.

    Configuration errors are raised at registration time and never while
    rendering user markup.
    """


class DuplicateTagError(ConfigurationError):
    """Exception raised when registering a tag name that already exists.

    Parameters
    ----------
    tag_name : str
        The conflicting tag name
    message : str, optional
        Custom error message

    Attributes
    ----------
    tag_name : str
        The conflicting tag name

    """

    def __init__(self, tag_name: str, message: str | None = None):
        """Initialize the duplicate tag error."""
        if message is None:
            message = f"Tag '{tag_name}' is already registered. Pass override=True to replace it."
        super().__init__(message)
        self.tag_name = tag_name


class InvalidTagDefinitionError(ConfigurationError):
    """Exception raised for a tag definition that cannot be registered.

    Parameters
    ----------
    tag_name : str
        The offending tag name
    message : str
        Description of the problem

    """

    def __init__(self, tag_name: str, message: str):
        """Initialize the invalid tag definition error."""
        super().__init__(message)
        self.tag_name = tag_name


class RenderingError(BBHtmlError):
    """Exception raised when a tag's open or close callback fails.

    Parameters
    ----------
    message : str
        Description of the rendering failure
    tag_name : str, optional
        The tag whose callback failed
    original_error : Exception, optional
        The underlying exception raised by the callback

    """

    def __init__(self, message: str, tag_name: str | None = None, original_error: Exception | None = None):
        """Initialize the rendering error."""
        super().__init__(message, original_error)
        self.tag_name = tag_name


__all__ = [
    "BBHtmlError",
    "ValidationError",
    "InvalidOptionsError",
    "InputTooLargeError",
    "ConfigurationError",
    "DuplicateTagError",
    "InvalidTagDefinitionError",
    "RenderingError",
]
