"""
Turns an interface reference string into an import path and identifier.

Two forms are accepted:

- ``path/to/pkg.Identifier`` is split directly;
- ``pkg.Identifier`` has its import path inferred by asking the formatter
  collaborator to add the missing import to a throwaway declaration.
"""

import logging
from typing import Optional

from tree_sitter import Node

from gostub.needle import L
from gostub.spec import (
    FormatterError,
    InterfaceRef,
    MalformedReferenceError,
    SourceFormatterProtocol,
    UnrecognizedInterfaceError,
    UnresolvedImportError,
)
from .parser import FileSet, GoSyntaxError, iter_named, node_text

log = logging.getLogger(__name__)


class ReferenceParser:
    def __init__(self, formatter: SourceFormatterProtocol):
        self.formatter = formatter

    def parse(self, reference: str) -> InterfaceRef:
        if len(reference.split()) != 1:
            raise MalformedReferenceError(reference, L.error.reference.whitespace)

        slash = reference.rfind("/")
        if slash == -1:
            return self.infer(reference)

        dot = reference.rfind(".")
        # e.g. net/http/
        if slash + 1 == len(reference):
            raise MalformedReferenceError(reference, L.error.reference.trailing_slash)
        # e.g. net/http.
        if dot + 1 == len(reference):
            raise MalformedReferenceError(reference, L.error.reference.trailing_dot)
        # e.g. net/http/httputil or pkg/sub.Id.Extra
        if reference[slash:].count(".") != 1:
            raise MalformedReferenceError(reference, L.error.reference.invalid)

        return InterfaceRef(import_path=reference[:dot], identifier=reference[dot + 1 :])

    def infer(self, reference: str) -> InterfaceRef:
        source = f"package hack\n\nvar i {reference}\n"
        try:
            annotated = self.formatter.process(source)
        except FormatterError as e:
            raise UnresolvedImportError(reference, str(e)) from e

        try:
            parsed = FileSet().parse_source(annotated.encode("utf-8"))
        except GoSyntaxError as e:
            raise UnresolvedImportError(reference, str(e)) from e

        declared = _declared_type(parsed.root)
        if declared is None or declared.type != "qualified_type":
            # Built-in or unqualified, e.g. error.
            raise UnrecognizedInterfaceError(reference)

        import_path = _first_import_path(parsed.root)
        if import_path is None:
            package = node_text(declared.child_by_field_name("package"))
            raise UnresolvedImportError(reference, f"no package found for {package}")

        identifier = node_text(declared.child_by_field_name("name"))
        log.debug(f"Inferred {reference} -> {import_path}.{identifier}")
        return InterfaceRef(import_path=import_path, identifier=identifier)


def unquote(literal: str) -> str:
    if len(literal) >= 2 and literal[0] in "\"`" and literal[-1] == literal[0]:
        return literal[1:-1]
    return literal


def _first_import_path(root: Node) -> Optional[str]:
    for decl in iter_named(root, "import_declaration"):
        specs = list(iter_named(decl, "import_spec"))
        for spec_list in iter_named(decl, "import_spec_list"):
            specs.extend(iter_named(spec_list, "import_spec"))
        for spec in specs:
            path = spec.child_by_field_name("path")
            if path is not None:
                return unquote(node_text(path))
    return None


def _declared_type(root: Node) -> Optional[Node]:
    # var i pkg.Identifier
    for decl in iter_named(root, "var_declaration"):
        specs = list(iter_named(decl, "var_spec"))
        for spec_list in iter_named(decl, "var_spec_list"):
            specs.extend(iter_named(spec_list, "var_spec"))
        for spec in specs:
            type_node = spec.child_by_field_name("type")
            if type_node is not None:
                return type_node
    return None
