from pathlib import Path
from typing import Dict, List, Optional, Tuple

from tree_sitter import Node

from gostub.golang.parser import FileSet, GoSyntaxError, iter_named, node_text
from gostub.spec import FormatterError


class FakeFormatter:
    """
    Stands in for goimports in tests.

    Rejects sources that don't parse and adds an import for every package
    short name in ``known_packages`` that the source uses but doesn't import.
    The rest of the text is returned unchanged.
    """

    def __init__(
        self,
        known_packages: Optional[Dict[str, str]] = None,
        error: Optional[str] = None,
    ):
        self.known_packages = dict(known_packages or {})
        self.error = error
        self.calls: List[Tuple[str, Optional[Path]]] = []

    def process(self, source: str, srcdir: Optional[Path] = None) -> str:
        self.calls.append((source, srcdir))
        if self.error is not None:
            raise FormatterError(self.error)

        try:
            parsed = FileSet().parse_source(source.encode("utf-8"))
        except GoSyntaxError as e:
            raise FormatterError(str(e)) from e

        used = _used_package_names(parsed.root)
        imported = _imported_paths(parsed.root)
        missing = sorted(
            self.known_packages[name]
            for name in used
            if name in self.known_packages and self.known_packages[name] not in imported
        )
        if not missing:
            return source

        clause = next(iter_named(parsed.root, "package_clause"))
        end = clause.end_byte
        block = "\n\nimport (\n" + "".join(f'\t"{path}"\n' for path in missing) + ")"
        raw = source.encode("utf-8")
        return (raw[:end] + block.encode("utf-8") + raw[end:]).decode("utf-8")


def _used_package_names(root: Node) -> set:
    names = set()
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type == "qualified_type":
            names.add(node_text(node.child_by_field_name("package")))
            continue
        stack.extend(node.named_children)
    return names


def _imported_paths(root: Node) -> set:
    paths = set()
    for decl in iter_named(root, "import_declaration"):
        specs = list(iter_named(decl, "import_spec"))
        for spec_list in iter_named(decl, "import_spec_list"):
            specs.extend(iter_named(spec_list, "import_spec"))
        for spec in specs:
            paths.add(node_text(spec.child_by_field_name("path")).strip('"`'))
    return paths
