"""Exception hierarchy for resource generation and dispatch."""
from __future__ import annotations

from typing import Optional


class KubegenError(Exception):
    """Base class for every error surfaced to the command layer."""


class ValidationError(KubegenError):
    """A flag or parameter value is malformed or missing."""


class InvalidRestartPolicyError(ValidationError):
    def __init__(self, value: str) -> None:
        super().__init__(f"invalid restart policy: {value}")
        self.value = value


class MissingParameterError(ValidationError):
    def __init__(self, name: str, message: Optional[str] = None) -> None:
        super().__init__(message or f"{name} is a required parameter")
        self.name = name


class GeneratorError(KubegenError):
    """The selected generator rejected the parameter map."""


class UnknownGeneratorError(GeneratorError):
    def __init__(self, group: str, name: str) -> None:
        super().__init__(f"unknown {group} generator: {name}")
        self.group = group
        self.name = name


class TransportError(KubegenError):
    """The request could not be delivered or no response was received.

    The server may still have applied the create when this is raised after
    the request body was sent.
    """


class APIStatusError(KubegenError):
    """The API server answered with a non-success status."""

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(f"server responded {status_code}: {message}")
        self.status_code = status_code
        self.message = message


class DecodeError(KubegenError):
    """A response body could not be read back into a resource."""


class OutputFormatError(KubegenError):
    """Unknown output format or a template that fails to render."""


class ConfigError(KubegenError):
    """The client configuration could not be loaded."""
