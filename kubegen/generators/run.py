"""Workload generators for ``run``: a ReplicationController or a bare Pod."""
from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import ValidationError as ModelValidationError

from ..constants import DEFAULT_DNS_POLICY, RUN_CONTROLLER_V1, RUN_LABEL, RUN_POD_V1
from ..errors import GeneratorError, MissingParameterError
from ..models import (
    Container,
    ContainerPort,
    EnvVar,
    ObjectMeta,
    Pod,
    PodSpec,
    PodTemplateSpec,
    ReplicationController,
    ReplicationControllerSpec,
    ResourceRequirements,
    RestartPolicy,
)
from .base import GeneratorParam, ParameterMap, get_bool, get_list, get_string, parse_labels

_CONTAINER_PARAMS = [
    GeneratorParam("labels", required=False),
    GeneratorParam("default-name", required=False),
    GeneratorParam("name", required=True),
    GeneratorParam("image", required=True),
    GeneratorParam("port", required=False),
    GeneratorParam("hostport", required=False),
    GeneratorParam("stdin", required=False),
    GeneratorParam("tty", required=False),
    GeneratorParam("command", required=False),
    GeneratorParam("args", required=False),
    GeneratorParam("env", required=False),
    GeneratorParam("requests", required=False),
    GeneratorParam("limits", required=False),
]


def parse_env(specs: List[str]) -> List[EnvVar]:
    env: List[EnvVar] = []
    for spec in specs:
        key, sep, value = spec.partition("=")
        if not sep or not key:
            raise GeneratorError(f"invalid env: {spec!r}, expected KEY=VALUE")
        env.append(EnvVar(name=key, value=value))
    return env


def parse_resource_list(spec: str) -> Optional[Dict[str, str]]:
    if not spec:
        return None
    resources: Dict[str, str] = {}
    for item in spec.split(","):
        key, sep, quantity = item.strip().partition("=")
        if not sep or not key or not quantity:
            raise GeneratorError(f"invalid resource spec: {item!r}, expected NAME=QUANTITY")
        if key not in {"cpu", "memory"}:
            raise GeneratorError(f"unsupported resource name: {key}")
        resources[key] = quantity
    return resources


def _port_number(params: ParameterMap, key: str) -> Optional[int]:
    value = get_string(params, key)
    if not value:
        return None
    try:
        number = int(value)
    except ValueError as exc:
        raise GeneratorError(f"invalid {key}: {value!r}") from exc
    return number if number > 0 else None


def _resource_name(params: ParameterMap) -> str:
    name = get_string(params, "name") or get_string(params, "default-name")
    if not name:
        raise MissingParameterError("name")
    return name


def _labels(params: ParameterMap, name: str) -> Dict[str, str]:
    spec = get_string(params, "labels")
    if spec:
        return parse_labels(spec)
    return {RUN_LABEL: name}


def build_container(name: str, params: ParameterMap, stdin_once: bool = False) -> Container:
    port = _port_number(params, "port")
    hostport = _port_number(params, "hostport")
    if hostport is not None and port is None:
        raise GeneratorError("--hostport requires --port to be specified")

    ports = None
    if port is not None:
        ports = [ContainerPort(container_port=port, host_port=hostport)]

    command = None
    args = get_list(params, "args") or None
    if args and get_bool(params, "command"):
        command, args = args, None

    requests = parse_resource_list(get_string(params, "requests"))
    limits = parse_resource_list(get_string(params, "limits"))
    resources = None
    if requests or limits:
        resources = ResourceRequirements(requests=requests, limits=limits)

    stdin = get_bool(params, "stdin")
    tty = get_bool(params, "tty")
    env = parse_env(get_list(params, "env"))

    return Container(
        name=name,
        image=get_string(params, "image"),
        command=command,
        args=args,
        env=env or None,
        ports=ports,
        resources=resources,
        stdin=stdin or None,
        stdin_once=(stdin and stdin_once) or None,
        tty=tty or None,
    )


class ReplicationControllerGenerator:
    """``run/v1``: a replication controller whose selector is its labels."""

    name = RUN_CONTROLLER_V1

    def param_names(self) -> List[GeneratorParam]:
        return _CONTAINER_PARAMS + [GeneratorParam("replicas", required=True)]

    def generate(self, params: ParameterMap) -> ReplicationController:
        name = _resource_name(params)
        labels = _labels(params, name)
        replicas_value = get_string(params, "replicas")
        try:
            replicas = int(replicas_value)
        except ValueError as exc:
            raise GeneratorError(f"invalid replicas: {replicas_value!r}") from exc

        try:
            return ReplicationController(
                metadata=ObjectMeta(name=name, labels=labels),
                spec=ReplicationControllerSpec(
                    replicas=replicas,
                    selector=labels,
                    template=PodTemplateSpec(
                        metadata=ObjectMeta(name=name, labels=labels),
                        spec=PodSpec(containers=[build_container(name, params)]),
                    ),
                ),
            )
        except ModelValidationError as exc:
            raise GeneratorError(f"invalid replication controller {name!r}: {exc}") from exc


class PodGenerator:
    """``run-pod/v1``: a single pod carrying the resolved restart policy."""

    name = RUN_POD_V1

    def param_names(self) -> List[GeneratorParam]:
        return _CONTAINER_PARAMS + [GeneratorParam("restart", required=False)]

    def generate(self, params: ParameterMap) -> Pod:
        name = _resource_name(params)
        restart = get_string(params, "restart") or RestartPolicy.always.value
        try:
            restart_policy = RestartPolicy(restart)
        except ValueError as exc:
            raise GeneratorError(f"invalid restart policy: {restart}") from exc

        try:
            return Pod(
                metadata=ObjectMeta(name=name, labels=_labels(params, name)),
                spec=PodSpec(
                    containers=[build_container(name, params, stdin_once=True)],
                    restart_policy=restart_policy,
                    dns_policy=DEFAULT_DNS_POLICY,
                ),
            )
        except ModelValidationError as exc:
            raise GeneratorError(f"invalid pod {name!r}: {exc}") from exc


def run_generators() -> list:
    return [ReplicationControllerGenerator(), PodGenerator()]
