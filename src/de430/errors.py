"""Error codes and exception hierarchy for the de430 package.

Every public entry point either returns a complete result or raises one of
the exceptions below. Each exception carries an ErrorCode so callers that
need a numeric status (the CLI, foreign callers) can get one without string
matching.
"""

from enum import Enum
from typing import Union


class ErrorCode(Enum):
    """Status codes reported by public entry points."""

    NONE = 0
    COMMAND_FAILED = -1
    MEMORY_ALLOCATION = -2
    PARSE_FAILED = -3
    INVALID_CONFIG = -4
    FILE_IO = -5
    JSON_PARSE = -6


_ERROR_MESSAGES = {
    ErrorCode.NONE: "Success",
    ErrorCode.COMMAND_FAILED: "Ephemeris command execution failed",
    ErrorCode.MEMORY_ALLOCATION: "Memory allocation failed",
    ErrorCode.PARSE_FAILED: "Failed to parse output data",
    ErrorCode.INVALID_CONFIG: "Invalid configuration",
    ErrorCode.FILE_IO: "File I/O failed",
    ErrorCode.JSON_PARSE: "Failed to parse JSON data",
}

UNKNOWN_ERROR_MESSAGE = "Unknown error"


def error_message(code: Union[ErrorCode, int]) -> str:
    """Get the human-readable message for an error code.

    Args:
        code: An ErrorCode member or its integer value

    Returns:
        The fixed message for the code, or "Unknown error" if the code is not recognized
    """
    if not isinstance(code, ErrorCode):
        if isinstance(code, bool) or not isinstance(code, int):
            return UNKNOWN_ERROR_MESSAGE
        try:
            code = ErrorCode(code)
        except ValueError:
            return UNKNOWN_ERROR_MESSAGE
    return _ERROR_MESSAGES.get(code, UNKNOWN_ERROR_MESSAGE)


class De430Error(Exception):
    """Base exception for all de430 failures."""

    code = ErrorCode.NONE

    @property
    def message(self) -> str:
        """The fixed message for this error's code."""
        return error_message(self.code)


class CommandFailedError(De430Error, RuntimeError):
    """Raised when the external ephemeris command cannot be run or fails."""

    code = ErrorCode.COMMAND_FAILED


class AllocationError(De430Error, MemoryError):
    """Raised when buffers for a collection cannot be allocated."""

    code = ErrorCode.MEMORY_ALLOCATION


class ParseError(De430Error, ValueError):
    """Raised when input content is malformed."""

    code = ErrorCode.PARSE_FAILED


class InvalidConfigError(De430Error, ValueError):
    """Raised for invalid arguments or configuration."""

    code = ErrorCode.INVALID_CONFIG


class FileIOError(De430Error, OSError):
    """Raised when storage cannot be opened, read or written."""

    code = ErrorCode.FILE_IO


class JSONParseError(ParseError):
    """Raised when a JSON document is malformed or has the wrong shape."""

    code = ErrorCode.JSON_PARSE
