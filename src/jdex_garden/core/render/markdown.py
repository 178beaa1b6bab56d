"""Render the JDex listing and note contents as markdown."""

import io

from jdex_garden.core.render.context import build_context
from jdex_garden.models.node import ResolvedNode, ResolvedSystem
from jdex_garden.protocols import RendererProtocol


def render_jdex(system: ResolvedSystem, renderer: RendererProtocol) -> str:
    """Render the whole system as the JDex index note.

    The note starts with the markdown front matter, then one rendered line for
    the system and one for every node below it, in source order. Each node
    uses the template of its level.
    """
    out = io.StringIO()
    front_matter = renderer.render("markdown", build_context(system))
    out.write(front_matter)
    if front_matter and not front_matter.endswith("\n"):
        out.write("\n")
    out.write(renderer.render("system", build_context(system)))
    out.write("\n")
    for node in system.walk():
        out.write(renderer.render(node.level.template_name, build_context(node)))
        out.write("\n")
    return out.getvalue()


def render_note(node: ResolvedNode, renderer: RendererProtocol) -> str:
    """Render the initial contents of a new note (front matter only)."""
    return renderer.render("markdown", build_context(node))
