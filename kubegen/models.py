"""Pydantic models for the API resources produced by the generators."""
from __future__ import annotations

from enum import Enum
from typing import Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .constants import API_VERSION


class RestartPolicy(str, Enum):
    always = "Always"
    on_failure = "OnFailure"
    never = "Never"


class DispatchMode(str, Enum):
    printed = "printed"
    submitted = "submitted"


class APIModel(BaseModel):
    """Base for wire objects: camelCase aliases, immutable once built."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)


class ObjectMeta(APIModel):
    name: str
    namespace: Optional[str] = None
    labels: Optional[Dict[str, str]] = None
    annotations: Optional[Dict[str, str]] = None
    # Assigned by the server on create.
    uid: Optional[str] = None
    resource_version: Optional[str] = Field(default=None, alias="resourceVersion")
    creation_timestamp: Optional[str] = Field(default=None, alias="creationTimestamp")


class EnvVar(APIModel):
    name: str
    value: str = ""


class ContainerPort(APIModel):
    container_port: int = Field(alias="containerPort", ge=1, le=65535)
    host_port: Optional[int] = Field(default=None, alias="hostPort", ge=1, le=65535)


class ResourceRequirements(APIModel):
    limits: Optional[Dict[str, str]] = None
    requests: Optional[Dict[str, str]] = None


class Container(APIModel):
    name: str
    image: str
    command: Optional[List[str]] = None
    args: Optional[List[str]] = None
    env: Optional[List[EnvVar]] = None
    ports: Optional[List[ContainerPort]] = None
    resources: Optional[ResourceRequirements] = None
    stdin: Optional[bool] = None
    stdin_once: Optional[bool] = Field(default=None, alias="stdinOnce")
    tty: Optional[bool] = None


class PodSpec(APIModel):
    containers: List[Container]
    restart_policy: Optional[RestartPolicy] = Field(default=None, alias="restartPolicy")
    dns_policy: Optional[str] = Field(default=None, alias="dnsPolicy")


class PodTemplateSpec(APIModel):
    metadata: Optional[ObjectMeta] = None
    spec: PodSpec


class Pod(APIModel):
    api_version: str = Field(default=API_VERSION, alias="apiVersion")
    kind: Literal["Pod"] = "Pod"
    metadata: ObjectMeta
    spec: PodSpec


class ReplicationControllerSpec(APIModel):
    replicas: int = Field(default=1, ge=0)
    selector: Dict[str, str]
    template: PodTemplateSpec


class ReplicationController(APIModel):
    api_version: str = Field(default=API_VERSION, alias="apiVersion")
    kind: Literal["ReplicationController"] = "ReplicationController"
    metadata: ObjectMeta
    spec: ReplicationControllerSpec


class ServicePort(APIModel):
    name: Optional[str] = None
    protocol: str = "TCP"
    port: int = Field(ge=1, le=65535)
    target_port: Optional[Union[int, str]] = Field(default=None, alias="targetPort")
    node_port: Optional[int] = Field(default=None, alias="nodePort")

    @field_validator("protocol")
    def ensure_known_protocol(cls, value: str) -> str:
        if value not in {"TCP", "UDP"}:
            raise ValueError(f"unsupported protocol {value!r}")
        return value


class ServiceSpec(APIModel):
    ports: List[ServicePort]
    selector: Optional[Dict[str, str]] = None
    type: Optional[str] = None
    session_affinity: Optional[str] = Field(default=None, alias="sessionAffinity")
    external_ips: Optional[List[str]] = Field(default=None, alias="externalIPs")
    cluster_ip: Optional[str] = Field(default=None, alias="clusterIP")


class Service(APIModel):
    api_version: str = Field(default=API_VERSION, alias="apiVersion")
    kind: Literal["Service"] = "Service"
    metadata: ObjectMeta
    spec: ServiceSpec


Resource = Union[Pod, ReplicationController, Service]

RESOURCE_KINDS: Dict[str, type] = {
    "Pod": Pod,
    "ReplicationController": ReplicationController,
    "Service": Service,
}


class DispatchOutcome(BaseModel):
    """What happened to a generated resource: printed locally or submitted."""

    mode: DispatchMode
    resource: Resource
    # Server copy; present only when mode is ``submitted``.
    server_resource: Optional[Resource] = None

    @property
    def submitted(self) -> bool:
        return self.mode is DispatchMode.submitted
