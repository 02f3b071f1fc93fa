"""Generate resources from flags and either print or submit them."""
from __future__ import annotations

import argparse
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, TextIO

from .constants import EXPOSE_GROUP, RUN_CONTROLLER_V1, RUN_GROUP, RUN_LABEL, RUN_POD_V1
from .dispatch import PostClient, dispatch
from .errors import MissingParameterError, TransportError, ValidationError
from .flags import get_flag_string_list, make_params
from .generators import GeneratorRegistry, default_registry, validate_params
from .generators.base import Generator, ParameterMap
from .models import DispatchMode, DispatchOutcome, RestartPolicy
from .policy import resolve_restart_policy
from .printers import ResourcePrinter, print_success

log = logging.getLogger(__name__)


@dataclass
class Factory:
    """Collaborators for one invocation: the generators and the API client."""

    registry: GeneratorRegistry = field(default_factory=default_registry)
    client: Optional[PostClient] = None


def run_object(
    factory: Factory,
    flags: argparse.Namespace,
    generator: Generator,
    params: ParameterMap,
    namespace: str,
    out: TextIO,
) -> DispatchOutcome:
    """Generate one resource, then print it (dry-run) or create it."""
    validate_params(generator.param_names(), params)

    output = getattr(flags, "output", "") or ""
    printer = ResourcePrinter(output, getattr(flags, "template", None)) if output else None

    resource = generator.generate(params)

    if getattr(flags, "dry_run", False):
        log.debug("Dry run, not creating %s %s", resource.kind, resource.metadata.name)
        if printer:
            printer.print(resource, out)
        else:
            print_success(resource, out, dry_run=True)
        return DispatchOutcome(mode=DispatchMode.printed, resource=resource)

    if factory.client is None:
        raise TransportError("no API client configured")

    created = dispatch(
        factory.client,
        namespace,
        resource,
        save_config=bool(getattr(flags, "save_config", False)),
    )
    if printer:
        printer.print(created, out)
    else:
        print_success(created, out)
    return DispatchOutcome(mode=DispatchMode.submitted, resource=resource, server_resource=created)


def generate_service(
    factory: Factory,
    flags: argparse.Namespace,
    args: Sequence[str],
    generator_name: str,
    params: Optional[ParameterMap],
    namespace: str,
    out: TextIO,
) -> DispatchOutcome:
    """Expose a workload through a service built by ``generator_name``.

    Only string parameters carry over from the workload. Explicit labels
    become the selector; otherwise the service selects ``run=<name>``.
    """
    port = _flag_port(flags, "--port must be a positive integer when exposing a service")

    generator = factory.registry.lookup(EXPOSE_GROUP, generator_name)

    service_params: ParameterMap = {
        key: value for key, value in (params or {}).items() if isinstance(value, str)
    }
    service_params.setdefault("port", str(port))

    name = service_params.get("name") or (args[0] if args else "")
    if not name:
        raise MissingParameterError("name")
    service_params["name"] = name

    service_params["selector"] = service_params.get("labels") or f"{RUN_LABEL}={name}"
    if not service_params.get("default-name"):
        service_params["default-name"] = name

    return run_object(factory, flags, generator, service_params, namespace, out)


def _flag_port(flags: argparse.Namespace, message: str) -> int:
    """Return ``flags.port`` as a positive int; string values are accepted."""
    value = getattr(flags, "port", None)
    try:
        port = int(value)
    except (TypeError, ValueError):
        raise MissingParameterError("port", message) from None
    if port < 1:
        raise MissingParameterError("port", message)
    return port


def select_run_generator(flags: argparse.Namespace, policy: RestartPolicy) -> str:
    name = getattr(flags, "generator", "") or ""
    if not name:
        return RUN_CONTROLLER_V1 if policy is RestartPolicy.always else RUN_POD_V1
    if name == RUN_CONTROLLER_V1 and policy is not RestartPolicy.always:
        raise ValidationError(
            f"--restart={policy.value} is not supported by {RUN_CONTROLLER_V1}, use {RUN_POD_V1}"
        )
    return name


def run(
    factory: Factory,
    flags: argparse.Namespace,
    namespace: str,
    out: TextIO,
) -> List[DispatchOutcome]:
    """Create a workload for one image and, with ``--expose``, a service for it."""
    name = getattr(flags, "name", "") or ""
    if not name:
        raise MissingParameterError("name", "NAME is required for run")
    if not getattr(flags, "image", ""):
        raise MissingParameterError("image", "--image is required")

    interactive = bool(getattr(flags, "stdin", False))
    if getattr(flags, "tty", False) and not interactive:
        raise ValidationError("-i/--stdin is required for containers with -t/--tty=true")
    replicas = getattr(flags, "replicas", 1)
    if interactive and replicas != 1:
        raise ValidationError(f"-i/--stdin requires that replicas is 1, found {replicas}")

    expose = bool(getattr(flags, "expose", False))
    if expose:
        _flag_port(flags, "--port must be set when exposing a service")

    policy = resolve_restart_policy(getattr(flags, "restart", ""), interactive)
    generator = factory.registry.lookup(RUN_GROUP, select_run_generator(flags, policy))

    param_names = generator.param_names()
    params = make_params(flags, param_names)
    params["name"] = name
    params["default-name"] = name
    params["args"] = list(getattr(flags, "args", []) or [])
    params["env"] = get_flag_string_list(flags, "env")
    if any(param.name == "restart" for param in param_names):
        params["restart"] = policy.value

    outcomes = [run_object(factory, flags, generator, params, namespace, out)]

    if expose:
        outcomes.append(
            generate_service(
                factory,
                flags,
                [name],
                getattr(flags, "service_generator", ""),
                params,
                namespace,
                out,
            )
        )
    return outcomes
