"""Centralized constants for resource generation.

Generator names, API defaults and well-known annotation keys live here so
generators, the dispatcher and the CLI agree on them.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Generator groups and names
# A group is the command that consumes the generators ("run" builds the
# workload, "expose" builds the service in front of it).
# ---------------------------------------------------------------------------
RUN_GROUP = "run"
EXPOSE_GROUP = "expose"

RUN_CONTROLLER_V1 = "run/v1"
RUN_POD_V1 = "run-pod/v1"
SERVICE_V1 = "service/v1"
SERVICE_V2 = "service/v2"

DEFAULT_SERVICE_GENERATOR = SERVICE_V2

# ---------------------------------------------------------------------------
# Resource kind -> REST collection under /namespaces/{namespace}/
# ---------------------------------------------------------------------------
RESOURCE_COLLECTIONS: dict[str, str] = {
    "Pod": "pods",
    "ReplicationController": "replicationcontrollers",
    "Service": "services",
}

API_VERSION = "v1"

# ---------------------------------------------------------------------------
# Service defaults filled in by the service generators
# ---------------------------------------------------------------------------
DEFAULT_PROTOCOL = "TCP"
SERVICE_TYPES = ("ClusterIP", "NodePort", "LoadBalancer")
DEFAULT_SERVICE_TYPE = "ClusterIP"
SESSION_AFFINITIES = ("None", "ClientIP")
DEFAULT_SESSION_AFFINITY = "None"

# Label used to tie a generated workload to its service when the user gives
# no explicit labels.
RUN_LABEL = "run"

DEFAULT_DNS_POLICY = "ClusterFirst"

# ---------------------------------------------------------------------------
# Annotations and client defaults
# ---------------------------------------------------------------------------
LAST_APPLIED_ANNOTATION = "kubectl.kubernetes.io/last-applied-configuration"

DEFAULT_SERVER = "http://localhost:8080"
DEFAULT_API_PREFIX = "/api/v1"
DEFAULT_NAMESPACE = "default"
DEFAULT_TIMEOUT = 30.0
