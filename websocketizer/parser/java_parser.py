from pathlib import Path

from loguru import logger
from tree_sitter import Language, Parser, Tree
from tree_sitter_language_pack import get_language

from websocketizer.utils.common import read_file_content


class JavaParseError(Exception):
    """Raised when a source file does not parse into an error-free syntax tree."""


class JavaSourceParser:

    def __init__(self):
        self.language: Language = get_language("java")
        self.parser = Parser(self.language)

    def parse(self, content: str) -> Tree:
        tree = self.parser.parse(bytes(content, "utf8"))
        if tree.root_node.has_error:
            raise JavaParseError(f"syntax error near line {self._first_error_line(tree) + 1}")
        return tree

    def parse_file(self, file_path: Path) -> Tree:
        content = read_file_content(file_path)
        logger.debug(f"Parsing {file_path} ({len(content)} chars)")
        return self.parse(content)

    def _first_error_line(self, tree: Tree) -> int:
        stack = [tree.root_node]
        while stack:
            node = stack.pop()
            if node.type == "ERROR" or node.is_missing:
                return node.start_point[0]
            if node.has_error:
                stack.extend(reversed(node.children))
        return tree.root_node.start_point[0]
