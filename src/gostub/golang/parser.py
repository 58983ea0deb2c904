from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, List, NamedTuple, Optional, Tuple

import tree_sitter_go as tsgo
from tree_sitter import Language, Node, Parser, Tree

GO_LANGUAGE = Language(tsgo.language())

_parser: Optional[Parser] = None


def get_parser() -> Parser:
    global _parser
    if _parser is None:
        _parser = Parser(GO_LANGUAGE)
    return _parser


class GoSyntaxError(Exception):
    def __init__(self, filename: str, line: int, column: int):
        self.filename = filename
        self.line = line
        self.column = column
        super().__init__(f"{filename}:{line}:{column}: syntax error")


def node_text(node: Node) -> str:
    return node.text.decode("utf-8")


def is_exported(name: str) -> bool:
    return name[:1].isupper()


def iter_named(node: Node, *types: str) -> Iterator[Node]:
    for child in node.named_children:
        if child.type in types:
            yield child


class Position(NamedTuple):
    filename: str
    line: int
    column: int

    def __str__(self) -> str:
        return f"{self.filename}:{self.line}:{self.column}"


@dataclass
class SourceFile:
    path: Path
    source: bytes
    tree: Tree
    # Offset of this file inside its FileSet.
    base: int

    @property
    def root(self) -> Node:
        return self.tree.root_node

    @property
    def package_name(self) -> Optional[str]:
        for clause in iter_named(self.root, "package_clause"):
            for ident in iter_named(clause, "package_identifier", "identifier"):
                return node_text(ident)
        return None


class FileSet:
    """
    Position table for files parsed together.

    Every file gets its own base offset, so ``pos(file, node)`` values from
    different files never overlap and map back to ``file:line:column``.
    """

    def __init__(self):
        self._files: List[SourceFile] = []
        self._next_base = 1

    @property
    def files(self) -> List[SourceFile]:
        return list(self._files)

    def parse_file(self, path: Path) -> SourceFile:
        """Raises ``OSError`` if the file can't be read, ``GoSyntaxError`` if it doesn't parse."""
        return self.parse_source(path.read_bytes(), path)

    def parse_source(self, source: bytes, path: Path = Path("<input>")) -> SourceFile:
        tree = get_parser().parse(source)
        if tree.root_node.has_error:
            line, column = _first_error(tree.root_node)
            raise GoSyntaxError(str(path), line, column)

        parsed = SourceFile(path=path, source=source, tree=tree, base=self._next_base)
        self._files.append(parsed)
        self._next_base += len(source) + 1
        return parsed

    def pos(self, file: SourceFile, node: Node) -> int:
        return file.base + node.start_byte

    def position(self, pos: int) -> Position:
        for file in self._files:
            if file.base <= pos <= file.base + len(file.source):
                offset = pos - file.base
                line = file.source.count(b"\n", 0, offset) + 1
                column = offset - (file.source.rfind(b"\n", 0, offset) + 1) + 1
                return Position(str(file.path), line, column)
        raise ValueError(f"position {pos} is not in this file set")


def _first_error(root: Node) -> Tuple[int, int]:
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type == "ERROR" or node.is_missing:
            row, column = node.start_point
            return row + 1, column + 1
        if node.has_error:
            stack.extend(reversed(node.children))
    row, column = root.start_point
    return row + 1, column + 1
