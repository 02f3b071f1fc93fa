from ..constants import EXPOSE_GROUP, RUN_GROUP
from .base import (
    Generator,
    GeneratorParam,
    GeneratorRegistry,
    ParameterMap,
    ParamValue,
    validate_params,
)
from .run import PodGenerator, ReplicationControllerGenerator, run_generators
from .service import ServiceGenerator, service_generators


def default_registry() -> GeneratorRegistry:
    """Registry holding every built-in generator."""
    registry = GeneratorRegistry()
    for generator in run_generators():
        registry.register(RUN_GROUP, generator)
    for generator in service_generators():
        registry.register(EXPOSE_GROUP, generator)
    return registry
