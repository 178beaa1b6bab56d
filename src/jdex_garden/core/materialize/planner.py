"""Walk a resolved system and decide which directories and notes to create."""

import re
from pathlib import Path

from loguru import logger

from jdex_garden.config import GardenConfig
from jdex_garden.core.hierarchy.parser import parse_system
from jdex_garden.core.hierarchy.resolver import resolve_system
from jdex_garden.core.render.markdown import render_jdex, render_note
from jdex_garden.errors import PathConflict
from jdex_garden.models.node import Kind, ResolvedNode, ResolvedSystem
from jdex_garden.models.plan import Action, ActionKind, Plan
from jdex_garden.protocols import FileSystemProtocol, RendererProtocol

NOTES_LABEL = "Notes Folders"
REFERENCE_LABEL = "Reference Archive"

_UNSAFE_NAME_RE = re.compile(r"[/\\\x00]")


def path_name(name: str) -> str:
    """Make a display name usable as a single path component."""
    return _UNSAFE_NAME_RE.sub("_", name)


class _Planner:
    """Collects actions for one root during a single depth-first walk."""

    def __init__(
        self,
        system: ResolvedSystem,
        fs: FileSystemProtocol,
        renderer: RendererProtocol,
        *,
        directories_only: bool,
    ) -> None:
        self.system = system
        self.fs = fs
        self.renderer = renderer
        self.directories_only = directories_only
        self.actions: list[Action] = []
        self._jdex: str | None = None

    def plan_root(self, root: Path) -> None:
        """Create the root and any missing ancestors, outermost first."""
        missing: list[Path] = []
        current = root
        while not self.fs.exists(current) and current.parent != current:
            missing.append(current)
            current = current.parent
        if self.fs.exists(current) and not self.fs.dir_exists(current):
            raise PathConflict(current, "directory")
        for path in reversed(missing):
            self.actions.append(Action(ActionKind.CREATE_DIR, path, "missing base folder"))

    def plan_dir(self, path: Path) -> None:
        if self.fs.dir_exists(path):
            self.actions.append(Action(ActionKind.SKIP, path, "directory exists"))
        elif self.fs.exists(path):
            raise PathConflict(path, "directory")
        else:
            self.actions.append(Action(ActionKind.CREATE_DIR, path, "missing directory"))

    def plan_note(self, path: Path, node: ResolvedNode) -> None:
        if self.directories_only:
            return
        if self.fs.file_exists(path):
            self.actions.append(Action(ActionKind.SKIP, path, "note exists"))
        elif self.fs.exists(path):
            raise PathConflict(path, "file")
        else:
            content = render_note(node, self.renderer)
            self.actions.append(Action(ActionKind.WRITE_FILE, path, "new note", content))

    def plan_index(self, path: Path) -> None:
        if self.directories_only:
            return
        exists = self.fs.file_exists(path)
        if not exists and self.fs.exists(path):
            raise PathConflict(path, "file")
        if self._jdex is None:
            self._jdex = render_jdex(self.system, self.renderer)
        reason = "regenerate index" if exists else "new index"
        self.actions.append(Action(ActionKind.WRITE_FILE, path, reason, self._jdex))

    def plan_nodes(self, nodes: tuple[ResolvedNode, ...], parent_dir: Path) -> None:
        for node in nodes:
            name = path_name(node.name)
            if node.kind is Kind.FOLDER:
                self.plan_dir(parent_dir / name)
            elif node.kind is Kind.FOLDER_AND_NOTE:
                self.plan_dir(parent_dir / name)
                self.plan_note(parent_dir / name / f"{name}.md", node)
            elif node.kind is Kind.NOTE:
                self.plan_note(parent_dir / f"{name}.md", node)
            elif node.kind is Kind.INDEX:
                self.plan_index(parent_dir / f"{name}.md")
            else:
                msg = f"Unhandled entry kind: {node.kind!r}"
                raise ValueError(msg)

            if node.kind.creates_directory:
                self.plan_nodes(node.children, parent_dir / name)


def plan_materialization(
    system: ResolvedSystem,
    root: Path,
    fs: FileSystemProtocol,
    renderer: RendererProtocol,
    *,
    directories_only: bool = False,
    label: str = NOTES_LABEL,
) -> Plan:
    """Compute the ordered actions that bring root in line with the system.

    The walk is depth-first with children in source order. Existing
    directories and notes become ``SKIP`` actions; the JDex index is always
    written. Note contents are rendered here, so template errors surface
    before anything is written.

    Args:
        system: The resolved system.
        root: Folder the system directory lives in.
        fs: Filesystem used to inspect the current state. Nothing is written.
        renderer: Template renderer for note and index contents.
        directories_only: Plan only directory actions (used for the
            reference archive, which mirrors folder shape but holds no notes).
        label: Name shown when the plan is printed.

    Raises:
        PathConflict: When a path exists with the wrong type.
        TemplateError: When a note or index fails to render.
    """
    planner = _Planner(system, fs, renderer, directories_only=directories_only)
    planner.plan_root(root)
    system_dir = root / path_name(system.system_id)
    planner.plan_dir(system_dir)
    planner.plan_nodes(system.areas, system_dir)

    plan = Plan(label=label, root=root, actions=tuple(planner.actions))
    logger.debug("Planned {}: {}", label, plan.summary())
    return plan


def build_plans(
    config: GardenConfig,
    fs: FileSystemProtocol,
    renderer: RendererProtocol,
) -> list[Plan]:
    """Parse, resolve and plan every configured root.

    Parsing and resolution run once; all validation happens before any plan
    is returned, so a failure here means nothing was touched.
    """
    system = resolve_system(
        parse_system(config.system_id, config.name, config.hierarchy),
        separator=config.separator,
    )
    plans = [plan_materialization(system, config.base_folder, fs, renderer, label=NOTES_LABEL)]
    if config.reference_folder is not None:
        plans.append(
            plan_materialization(
                system,
                config.reference_folder,
                fs,
                renderer,
                directories_only=True,
                label=REFERENCE_LABEL,
            )
        )
    return plans
