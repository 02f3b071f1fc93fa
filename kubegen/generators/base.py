"""Generator protocol and the name-keyed registry of generators."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Protocol, Union

from ..errors import GeneratorError, MissingParameterError, UnknownGeneratorError
from ..models import Resource

log = logging.getLogger(__name__)

ParamValue = Union[str, List[str], Dict[str, "ParamValue"]]
ParameterMap = Dict[str, ParamValue]


@dataclass(frozen=True)
class GeneratorParam:
    """A parameter a generator understands and whether it must be present."""

    name: str
    required: bool = False


class Generator(Protocol):
    """Protocol shared by every generator: parameters in, resource out."""

    name: str

    def param_names(self) -> List[GeneratorParam]:
        ...

    def generate(self, params: ParameterMap) -> Resource:
        ...


def validate_params(param_names: List[GeneratorParam], params: ParameterMap) -> None:
    """Raise for the first required parameter that is absent or empty."""
    for param in param_names:
        if not param.required:
            continue
        value = params.get(param.name)
        if value is None or (isinstance(value, (str, list, dict)) and len(value) == 0):
            raise MissingParameterError(param.name)


def get_string(params: ParameterMap, key: str, default: str = "") -> str:
    """Return a scalar parameter, rejecting lists and maps."""
    value = params.get(key, default)
    if not isinstance(value, str):
        raise GeneratorError(f"expected a string for parameter {key!r}, got {type(value).__name__}")
    return value


def get_list(params: ParameterMap, key: str) -> List[str]:
    value = params.get(key)
    if value is None:
        return []
    if isinstance(value, str):
        return [value] if value else []
    if not isinstance(value, list):
        raise GeneratorError(f"expected a list for parameter {key!r}, got {type(value).__name__}")
    return list(value)


def get_bool(params: ParameterMap, key: str) -> bool:
    value = get_string(params, key, "false").lower()
    if value in {"true", "1", "yes"}:
        return True
    if value in {"false", "0", "no", ""}:
        return False
    raise GeneratorError(f"invalid boolean for parameter {key!r}: {value}")


def parse_labels(spec: str) -> Dict[str, str]:
    """Parse ``k1=v1,k2=v2`` into a dict, keeping the last value of a key."""
    labels: Dict[str, str] = {}
    for item in spec.split(","):
        item = item.strip()
        key, sep, value = item.partition("=")
        if not sep or not key:
            raise GeneratorError(f"invalid label spec: {item!r}")
        labels[key] = value
    return labels


class GeneratorRegistry:
    """Generators grouped by the command that uses them, looked up by name."""

    def __init__(self) -> None:
        self._groups: Dict[str, Dict[str, Generator]] = {}

    def register(self, group: str, generator: Generator) -> None:
        generators = self._groups.setdefault(group, {})
        if generator.name in generators:
            raise ValueError(f"generator {generator.name!r} already registered for {group}")
        generators[generator.name] = generator

    def lookup(self, group: str, name: str) -> Generator:
        generator = self._groups.get(group, {}).get(name)
        if generator is None:
            raise UnknownGeneratorError(group, name)
        log.debug("Using %s generator %s", group, name)
        return generator

    def names(self, group: str) -> List[str]:
        return sorted(self._groups.get(group, {}))
