"""Generate API resources from command-line flags and submit them."""

from .errors import KubegenError
from .models import DispatchOutcome, RestartPolicy
from .pipeline import Factory, generate_service, run, run_object
from .policy import resolve_restart_policy

__version__ = "0.1.0"
