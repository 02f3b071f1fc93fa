"""Flag registration and collection of flag values into generator parameters."""
from __future__ import annotations

import argparse
from typing import Any, List

from .constants import DEFAULT_SERVICE_GENERATOR
from .generators.base import GeneratorParam, ParameterMap
from .printers import OUTPUT_FORMATS


def add_output_flags(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("-o", "--output", default="", choices=("",) + OUTPUT_FORMATS,
                        help="Output format for the created object")
    parser.add_argument("--template", default="",
                        help="Jinja2 template used with -o template")
    parser.add_argument("--dry-run", action="store_true",
                        help="Only print the object that would be created")
    parser.add_argument("--save-config", action="store_true",
                        help="Store the object's configuration in its last-applied annotation")


def add_run_flags(parser: argparse.ArgumentParser) -> None:
    """Register the flags understood by ``run`` and its generators."""
    parser.add_argument("--generator", default="",
                        help="Generator to use (run/v1 or run-pod/v1); chosen from --restart if unset")
    parser.add_argument("--image", default="", help="Container image to run")
    parser.add_argument("-r", "--replicas", type=int, default=1,
                        help="Number of replicas for run/v1")
    parser.add_argument("--env", action="append", default=[], metavar="KEY=VALUE",
                        help="Environment variable for the container, repeatable")
    parser.add_argument("--port", type=int, default=None,
                        help="Port the container exposes")
    parser.add_argument("--hostport", type=int, default=None,
                        help="Host port mapping for the container port")
    parser.add_argument("-l", "--labels", default="",
                        help="Labels as k1=v1,k2=v2; defaults to run=NAME")
    parser.add_argument("-i", "--stdin", action="store_true",
                        help="Keep stdin open on the container")
    parser.add_argument("-t", "--tty", action="store_true",
                        help="Allocate a TTY for the container, requires --stdin")
    parser.add_argument("--restart", default="",
                        help="Restart policy: Always, OnFailure or Never")
    parser.add_argument("--command", action="store_true",
                        help="Use trailing arguments as the container command instead of args")
    parser.add_argument("--requests", default="",
                        help="Resource requests, e.g. cpu=100m,memory=256Mi")
    parser.add_argument("--limits", default="",
                        help="Resource limits, e.g. cpu=200m,memory=512Mi")
    parser.add_argument("--expose", action="store_true",
                        help="Also create a service for the container port")
    parser.add_argument("--service-generator", default=DEFAULT_SERVICE_GENERATOR,
                        help="Generator used for the service created by --expose")
    add_output_flags(parser)


def _dest(name: str) -> str:
    return name.replace("-", "_")


def get_flag_string_list(flags: argparse.Namespace, name: str) -> List[str]:
    """Values of a repeated flag in the order given, duplicates kept."""
    value = getattr(flags, _dest(name), None)
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    return [str(item) for item in value]


def _param_value(value: Any) -> Any:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return [str(item) for item in value]
    return str(value)


def make_params(flags: argparse.Namespace, param_names: List[GeneratorParam]) -> ParameterMap:
    """Copy every flag that matches a generator parameter into a parameter map."""
    params: ParameterMap = {}
    for param in param_names:
        value = getattr(flags, _dest(param.name), None)
        if value is None:
            continue
        value = _param_value(value)
        if len(value) == 0:
            continue
        params[param.name] = value
    return params
