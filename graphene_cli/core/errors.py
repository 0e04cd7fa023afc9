"""
Error Types
===========

Exceptions raised by the batch pipeline.

Fatal errors (configuration, unsupported input mode, engine failure) stop
the run and are reported by the CLI runner. The remaining errors are
recoverable per item: they are logged and leave a gap in the output.
"""

from __future__ import annotations


class GrapheneCLIError(Exception):
    """Base class for all graphene-cli errors."""

    pass


class ConfigurationError(GrapheneCLIError):
    """Invalid or missing options, or no input tokens."""

    pass


class UnsupportedInputModeError(GrapheneCLIError):
    """The selected input mode is recognized but not implemented (WIKI)."""

    def __init__(self, mode: str):
        self.mode = mode
        super().__init__(f"Input mode {mode} is not (yet) implemented.")


class InputReadError(GrapheneCLIError):
    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Can't read from file {path}: {reason}")


class AnalysisEngineError(GrapheneCLIError):
    """An external analysis call failed.

    Attributes:
        index: Batch index of the failing item, if known
        status_code: HTTP status code returned by the engine, if any
    """

    def __init__(
        self,
        message: str,
        index: int | None = None,
        status_code: int | None = None,
    ):
        self.index = index
        self.status_code = status_code
        super().__init__(message)


class FormatSerializationError(GrapheneCLIError):
    def __init__(self, name: str, reason: str):
        self.name = name
        self.reason = reason
        super().__init__(f"Could not convert the result of '{name}' to JSON: {reason}")


class OutputWriteError(GrapheneCLIError):
    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Could not write file {path}: {reason}")
