"""Restart policy resolution."""
from __future__ import annotations

from typing import Optional

from .errors import InvalidRestartPolicyError
from .models import RestartPolicy


def resolve_restart_policy(raw: Optional[str], interactive: bool) -> RestartPolicy:
    """Map the ``--restart`` flag onto a canonical policy.

    An empty value defaults to ``OnFailure`` for interactive sessions, so a
    failing container can be inspected, and to ``Always`` otherwise. Any
    other value must be one of the exact enum spellings.
    """
    if not raw:
        if interactive:
            return RestartPolicy.on_failure
        return RestartPolicy.always

    for policy in RestartPolicy:
        if policy.value == raw:
            return policy
    raise InvalidRestartPolicyError(raw)
