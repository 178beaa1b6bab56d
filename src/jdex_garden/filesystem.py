"""Filesystem primitives backed by the local disk."""

from pathlib import Path

from loguru import logger

from jdex_garden.errors import IoError, PathConflict


class LocalFileSystem:
    """Create directories and write files, one level at a time.

    - ``create_dir`` never creates missing parents; the plan creates every
      directory it needs in walk order.
    - ``create_dir`` on an existing directory is a no-op, on an existing file
      it raises ``PathConflict``.
    - ``write_file`` replaces existing files. Deciding whether a file may be
      replaced is the planner's job, not this class's.
    """

    def exists(self, path: Path) -> bool:
        return path.exists()

    def dir_exists(self, path: Path) -> bool:
        return path.is_dir()

    def file_exists(self, path: Path) -> bool:
        return path.is_file()

    def create_dir(self, path: Path) -> None:
        if path.is_dir():
            return
        if path.exists():
            raise PathConflict(path, "directory")
        logger.debug("Creating directory {}", path)
        try:
            path.mkdir()
        except FileExistsError as e:
            # Lost a race with something else creating the path.
            if not path.is_dir():
                raise PathConflict(path, "directory") from e
        except OSError as e:
            raise IoError(path, e.strerror or str(e)) from e

    def write_file(self, path: Path, content: str) -> None:
        if path.is_dir():
            raise PathConflict(path, "file")
        logger.debug("Writing {} ({} bytes)", path, len(content))
        try:
            with open(path, "w", encoding="utf-8") as f:
                f.write(content)
        except OSError as e:
            raise IoError(path, e.strerror or str(e)) from e
