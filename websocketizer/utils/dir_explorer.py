from pathlib import Path
from typing import Callable, Set

from loguru import logger

# (level, path, file): nesting depth, root-relative path, file on disk
FileHandler = Callable[[int, str, Path], None]
FileFilter = Callable[[int, str, Path], bool]


class DirExplorer:
    """Depth-first walk that hands every file accepted by the filter to a handler."""

    def __init__(self, file_filter: FileFilter, handler: FileHandler):
        self.file_filter = file_filter
        self.handler = handler

    def explore(self, root: Path) -> None:
        root = Path(root)
        if not root.is_dir():
            logger.warning(f"Not a directory, nothing to explore: {root}")
            return
        self._explore(0, "", root, set())

    def _explore(self, level: int, path: str, directory: Path, visited: Set[Path]) -> None:
        # symlinks may point back up the tree; every real directory is walked once
        real_directory = directory.resolve()
        if real_directory in visited:
            logger.debug(f"Already explored {real_directory}, skipping {directory}")
            return
        visited.add(real_directory)

        try:
            entries = sorted(directory.iterdir(), key=lambda p: p.name)
        except OSError as e:
            logger.warning(f"Cannot list directory {directory}: {e}")
            return

        for entry in entries:
            entry_path = f"{path}/{entry.name}"
            if entry.is_dir():
                self._explore(level + 1, entry_path, entry, visited)
            elif self.file_filter(level, entry_path, entry):
                self.handler(level, entry_path, entry)
