"""Jinja2 rendering of planned page files.

Templates live in ``pagegen/scaffolder/templates/`` grouped by layout
(``ddd/``, ``simplified/``) plus the ``shared/`` files both layouts use.
Each :class:`~pagegen.models.PlannedFile` names its template and carries the
context the planner built for it.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from pagegen.models import PlannedFile
from pagegen.utils import pluralize, to_camel_case, to_kebab_case, to_pascal_case, to_snake_case

TEMPLATE_ROOT = Path(__file__).parent / "templates"

FILTERS: dict[str, Callable[[str], str]] = {
    "pascal_case": to_pascal_case,
    "camel_case": to_camel_case,
    "kebab_case": to_kebab_case,
    "snake_case": to_snake_case,
    "pluralize": pluralize,
}


def _environment(template_dir: Path) -> Environment:
    # TSX is not HTML: no autoescaping.  Undefined names fail the render.
    env = Environment(
        loader=FileSystemLoader(str(template_dir)),
        autoescape=False,
        undefined=StrictUndefined,
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters.update(FILTERS)
    return env


class TemplateRenderer:
    """Renders the TypeScript/TSX templates for page scaffolding.

    A context key the planner forgot raises :class:`jinja2.UndefinedError`
    instead of producing a file with a blank in it.
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        self.template_dir = Path(template_dir) if template_dir else TEMPLATE_ROOT
        self.env = _environment(self.template_dir)

    def render(self, template_path: str, context: dict[str, Any]) -> str:
        """Render *template_path* (relative to the template root) with *context*."""
        return self.env.get_template(template_path).render(context)

    def render_planned(self, planned: PlannedFile) -> str:
        """Render the template the planner chose for *planned*."""
        return self.render(planned.template, planned.context)

    def list_templates(self, prefix: str = "") -> list[str]:
        """Sorted ``.j2`` template names, optionally limited to one directory."""
        wanted = f"{prefix.rstrip('/')}/" if prefix else ""
        return sorted(
            name
            for name in self.env.list_templates(extensions=["j2"])
            if name.startswith(wanted)
        )
