"""Service generators used when exposing a workload."""
from __future__ import annotations

from typing import List, Optional, Union

from pydantic import ValidationError as ModelValidationError

from ..constants import (
    DEFAULT_PROTOCOL,
    DEFAULT_SERVICE_TYPE,
    DEFAULT_SESSION_AFFINITY,
    SERVICE_TYPES,
    SERVICE_V1,
    SERVICE_V2,
    SESSION_AFFINITIES,
)
from ..errors import GeneratorError, MissingParameterError
from ..models import ObjectMeta, Service, ServicePort, ServiceSpec
from .base import GeneratorParam, ParameterMap, get_bool, get_string, parse_labels


class ServiceGenerator:
    """Build a single-port Service from string parameters.

    ``service/v1`` names its port ``default``; ``service/v2`` leaves the
    port unnamed. Otherwise both fill in the same defaults: TCP, a target
    port equal to the service port, ``ClusterIP`` and no session affinity.
    """

    def __init__(self, name: str, port_name: Optional[str] = None) -> None:
        self.name = name
        self.port_name = port_name

    def param_names(self) -> List[GeneratorParam]:
        return [
            GeneratorParam("default-name", required=True),
            GeneratorParam("name", required=False),
            GeneratorParam("selector", required=True),
            GeneratorParam("port", required=True),
            GeneratorParam("labels", required=False),
            GeneratorParam("external-ip", required=False),
            GeneratorParam("create-external-load-balancer", required=False),
            GeneratorParam("type", required=False),
            GeneratorParam("protocol", required=False),
            GeneratorParam("container-port", required=False),
            GeneratorParam("target-port", required=False),
            GeneratorParam("session-affinity", required=False),
        ]

    def generate(self, params: ParameterMap) -> Service:
        selector = parse_labels(get_string(params, "selector"))

        name = get_string(params, "name") or get_string(params, "default-name")
        if not name:
            raise MissingParameterError("name")

        labels = None
        label_spec = get_string(params, "labels")
        if label_spec:
            labels = parse_labels(label_spec)

        port_value = get_string(params, "port")
        try:
            port = int(port_value)
        except ValueError as exc:
            raise GeneratorError(f"invalid port: {port_value!r}") from exc

        target_port: Union[int, str] = port
        target_spec = get_string(params, "target-port") or get_string(params, "container-port")
        if target_spec:
            target_port = int(target_spec) if target_spec.isdigit() else target_spec
            if isinstance(target_port, int) and not 1 <= target_port <= 65535:
                raise GeneratorError(f"invalid target port: {target_spec!r}, must be 1-65535")

        service_type = get_string(params, "type") or DEFAULT_SERVICE_TYPE
        if get_bool(params, "create-external-load-balancer"):
            service_type = "LoadBalancer"
        if service_type not in SERVICE_TYPES:
            raise GeneratorError(
                f"invalid service type {service_type!r}, must be one of {', '.join(SERVICE_TYPES)}"
            )

        affinity = get_string(params, "session-affinity") or DEFAULT_SESSION_AFFINITY
        if affinity not in SESSION_AFFINITIES:
            raise GeneratorError(
                f"invalid session affinity {affinity!r}, must be one of {', '.join(SESSION_AFFINITIES)}"
            )

        external_ip = get_string(params, "external-ip")

        try:
            return Service(
                metadata=ObjectMeta(name=name, labels=labels),
                spec=ServiceSpec(
                    ports=[
                        ServicePort(
                            name=self.port_name,
                            port=port,
                            protocol=get_string(params, "protocol") or DEFAULT_PROTOCOL,
                            target_port=target_port,
                        )
                    ],
                    selector=selector,
                    type=service_type,
                    session_affinity=affinity,
                    external_ips=[external_ip] if external_ip else None,
                ),
            )
        except ModelValidationError as exc:
            raise GeneratorError(f"invalid service {name!r}: {exc}") from exc


def service_generators() -> List[ServiceGenerator]:
    return [
        ServiceGenerator(SERVICE_V1, port_name="default"),
        ServiceGenerator(SERVICE_V2),
    ]
