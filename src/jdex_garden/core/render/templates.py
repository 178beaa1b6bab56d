"""Compile and render the user's templates with jinja2."""

from collections.abc import Mapping
from typing import Any

import jinja2

from jdex_garden.errors import TemplateError
from jdex_garden.models.node import Kind

LEVEL_TEMPLATES: tuple[str, ...] = ("system", "area", "category", "folder", "xfolder")
TEMPLATE_NAMES: tuple[str, ...] = (*LEVEL_TEMPLATES, "markdown")

DEFAULT_TEMPLATES: dict[str, str] = {
    "system": "# JDex {{ name }}",
    "area": "## {{ id }} {{ topic }}",
    "category": "- {{ id }} {{ topic }}",
    "folder": (
        "  - {% if is_folder(kind) %}{{ id }} {{ topic }}"
        "{% else %}[[{{ id }} {{ topic }}]]{% endif %}"
    ),
    "xfolder": (
        "    - {% if is_folder(kind) %}{{ id }} {{ topic }}"
        "{% else %}[[{{ id }} {{ topic }}]]{% endif %}"
    ),
    "markdown": "---\ntags: [johnny-decimal, librarian]\n---\n",
}


def is_folder(kind: str) -> bool:
    """True for plain folders, which have no note to link to."""
    return kind == Kind.FOLDER


class TemplateRenderer:
    """Holds the compiled templates for one system.

    Templates are compiled up front so syntax errors are reported before any
    planning starts. Rendering uses strict undefined handling: a template that
    names a variable the context does not provide fails instead of printing
    an empty string.
    """

    def __init__(self, templates: Mapping[str, str] | None = None) -> None:
        self._env = jinja2.Environment(
            undefined=jinja2.StrictUndefined,
            keep_trailing_newline=True,
            autoescape=False,
        )
        self._env.globals["is_folder"] = is_folder

        sources = {**DEFAULT_TEMPLATES, **(templates or {})}
        self._templates: dict[str, jinja2.Template] = {}
        for name in TEMPLATE_NAMES:
            try:
                self._templates[name] = self._env.from_string(sources[name])
            except jinja2.TemplateSyntaxError as e:
                raise TemplateError(name, f"line {e.lineno}: {e.message}") from e

    def render(self, template_name: str, context: Mapping[str, Any]) -> str:
        """Render a named template.

        Raises:
            TemplateError: For unknown template names or render failures.
        """
        template = self._templates.get(template_name)
        if template is None:
            raise TemplateError(template_name, "unknown template")
        try:
            return template.render(context)
        except jinja2.TemplateError as e:
            raise TemplateError(template_name, str(e)) from e
