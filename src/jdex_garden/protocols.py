"""Protocols for the collaborators the materializer depends on."""

from collections.abc import Mapping
from pathlib import Path
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class RendererProtocol(Protocol):
    """Protocol for template renderers."""

    def render(self, template_name: str, context: Mapping[str, Any]) -> str:
        """Render the named template with the given context."""
        ...


@runtime_checkable
class FileSystemProtocol(Protocol):
    """Protocol for the filesystem primitives used to plan and apply changes."""

    def exists(self, path: Path) -> bool:
        """Return True if anything exists at path."""
        ...

    def dir_exists(self, path: Path) -> bool:
        """Return True if path is an existing directory."""
        ...

    def file_exists(self, path: Path) -> bool:
        """Return True if path is an existing regular file."""
        ...

    def create_dir(self, path: Path) -> None:
        """Create a directory whose parent already exists. No-op if it exists."""
        ...

    def write_file(self, path: Path, content: str) -> None:
        """Write content to path, replacing any existing file."""
        ...
