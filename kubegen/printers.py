"""Rendering of resources for ``-o`` output and success messages."""
from __future__ import annotations

import json
from typing import Optional, TextIO

import yaml
from jinja2 import Environment, StrictUndefined, TemplateError

from .codec import to_wire
from .errors import OutputFormatError
from .models import Resource

OUTPUT_FORMATS = ("json", "yaml", "name", "template")


class ResourcePrinter:
    """Formats resources in one of the supported output formats."""

    def __init__(self, output: str, template: Optional[str] = None) -> None:
        if output not in OUTPUT_FORMATS:
            raise OutputFormatError(
                f"unknown output format {output!r}, expected one of {', '.join(OUTPUT_FORMATS)}"
            )
        if output == "template" and not template:
            raise OutputFormatError("--template is required with -o template")
        self.output = output
        self.template = template
        self.env = Environment(undefined=StrictUndefined, keep_trailing_newline=True)

    def render(self, resource: Resource) -> str:
        wire = to_wire(resource)
        if self.output == "json":
            return json.dumps(wire, indent=2) + "\n"
        if self.output == "yaml":
            return yaml.safe_dump(wire, sort_keys=False)
        if self.output == "name":
            return f"{resource.kind.lower()}/{resource.metadata.name}\n"
        try:
            return self.env.from_string(self.template).render(resource=wire, **wire)
        except TemplateError as exc:
            raise OutputFormatError(f"error rendering template: {exc}") from exc

    def print(self, resource: Resource, out: TextIO) -> None:
        out.write(self.render(resource))


def print_success(resource: Resource, out: TextIO, dry_run: bool = False) -> None:
    suffix = " (dry run)" if dry_run else ""
    out.write(f'{resource.kind.lower()} "{resource.metadata.name}" created{suffix}\n')
