import os
from typing import Optional

from websocketizer.config.rest_constants import SourceLayoutConstants


class PathLocator:
    """
    Reconstructs where a service's sources live and where generated code goes.

    The output directory is the folder containing the source file. The source
    root is everything up to and including the conventional Maven/Gradle
    ``src/main/java`` (or ``src/test/java``) segment; files outside such a
    layout use their own folder as source root.
    """

    def __init__(self, separator: str = os.sep):
        self.separator = separator
        self.markers = (
            self._marker(SourceLayoutConstants.MAIN_SOURCE_SEGMENTS),
            self._marker(SourceLayoutConstants.TEST_SOURCE_SEGMENTS),
        )

    def _marker(self, segments) -> str:
        sep = self.separator
        return sep + sep.join(segments) + sep

    def output_dir(self, file_path: str) -> str:
        segments = file_path.split(self.separator)
        return "".join(segment + self.separator for segment in segments[:-1])

    def source_root(self, file_path: str) -> str:
        marker = self._find_marker(file_path)
        if marker is None:
            return self.output_dir(file_path)
        return file_path[:file_path.index(marker)] + marker

    def _find_marker(self, file_path: str) -> Optional[str]:
        for marker in self.markers:
            if marker in file_path:
                return marker
        return None
