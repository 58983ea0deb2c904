from typing import Iterator, List

from tree_sitter import Node

from .parser import is_exported, node_text


class TypeQualifier:
    """
    Renders Go type expressions so they compile outside their own package.

    Exported bare type names declared in the loaded package get the package's
    short name as prefix; already-qualified names are left alone. Assuming
    package ``http``::

        int          -> int
        Handler      -> http.Handler
        io.Reader    -> io.Reader
        *Request     -> *http.Request
        map[string][]Cookie -> map[string][]http.Cookie
        [MaxHeaders]Header  -> [http.MaxHeaders]http.Header

    Identifiers brought in by dot-imports are not recognised and stay bare.
    """

    def __init__(self, package_name: str):
        self.package_name = package_name

    def qualify(self, node: Node) -> str:
        return self._render(node)

    def _render(self, node: Node) -> str:
        kind = node.type
        if kind == "qualified_type":
            package = node.child_by_field_name("package")
            name = node.child_by_field_name("name")
            return f"{node_text(package)}.{node_text(name)}"
        if kind in ("type_identifier", "identifier"):
            return self._qualify_name(node_text(node))

        handler = getattr(self, f"_render_{kind}", None)
        if handler is not None:
            return handler(node)
        return self._render_verbatim(node)

    def _qualify_name(self, name: str) -> str:
        if is_exported(name):
            return f"{self.package_name}.{name}"
        return name

    def _types(self, node: Node) -> List[Node]:
        return [c for c in node.named_children if c.type != "comment"]

    def _render_pointer_type(self, node: Node) -> str:
        return "*" + self._render(self._types(node)[0])

    def _render_slice_type(self, node: Node) -> str:
        return "[]" + self._render(node.child_by_field_name("element"))

    def _render_array_type(self, node: Node) -> str:
        length = self._render_length(node.child_by_field_name("length"))
        return f"[{length}]" + self._render(node.child_by_field_name("element"))

    def _render_map_type(self, node: Node) -> str:
        key = self._render(node.child_by_field_name("key"))
        value = self._render(node.child_by_field_name("value"))
        return f"map[{key}]{value}"

    def _render_channel_type(self, node: Node) -> str:
        tokens = [c.type for c in node.children if not c.is_named]
        value = self._render(node.child_by_field_name("value"))
        if tokens[:1] == ["<-"]:
            return f"<-chan {value}"
        if "<-" in tokens:
            return f"chan<- {value}"
        return f"chan {value}"

    def _render_parenthesized_type(self, node: Node) -> str:
        return f"({self._render(self._types(node)[0])})"

    def _render_negated_type(self, node: Node) -> str:
        return "~" + self._render(self._types(node)[0])

    def _render_generic_type(self, node: Node) -> str:
        base = self._render(node.child_by_field_name("type"))
        return base + self._render(node.child_by_field_name("type_arguments"))

    def _render_type_arguments(self, node: Node) -> str:
        return "[" + ", ".join(self._render(t) for t in self._types(node)) + "]"

    def _render_type_elem(self, node: Node) -> str:
        return " | ".join(self._render(t) for t in self._types(node))

    def _render_function_type(self, node: Node) -> str:
        rendered = "func" + self._render(node.child_by_field_name("parameters"))
        result = node.child_by_field_name("result")
        if result is not None:
            rendered += " " + self._render(result)
        return rendered

    def _render_parameter_list(self, node: Node) -> str:
        return "(" + ", ".join(self._render(p) for p in self._types(node)) + ")"

    def _render_parameter_declaration(self, node: Node) -> str:
        names = [node_text(n) for n in node.children_by_field_name("name")]
        rendered = self._render(node.child_by_field_name("type"))
        if names:
            return f"{', '.join(names)} {rendered}"
        return rendered

    def _render_variadic_parameter_declaration(self, node: Node) -> str:
        name = node.child_by_field_name("name")
        rendered = "..." + self._render(node.child_by_field_name("type"))
        if name is not None:
            return f"{node_text(name)} {rendered}"
        return rendered

    def _render_length(self, node: Node) -> str:
        # Lengths may name exported constants of the package.
        if node.type == "identifier":
            return self._qualify_name(node_text(node))
        return self._splice_prefix(node, _exported_names(node, in_length=True))

    def _render_verbatim(self, node: Node) -> str:
        # struct and interface literals keep their source layout.
        return self._splice_prefix(node, _exported_names(node))

    def _splice_prefix(self, node: Node, idents: Iterator[Node]) -> str:
        source = node.text
        out: List[bytes] = []
        cursor = 0
        prefix = f"{self.package_name}.".encode("utf-8")
        for ident in idents:
            offset = ident.start_byte - node.start_byte
            out.append(source[cursor:offset])
            out.append(prefix)
            cursor = offset
        out.append(source[cursor:])
        return b"".join(out).decode("utf-8")


def _exported_names(node: Node, in_length: bool = False) -> Iterator[Node]:
    length = node.child_by_field_name("length") if node.type == "array_type" else None
    for child in node.named_children:
        if child.type in ("qualified_type", "selector_expression"):
            continue
        if child.type == "type_identifier" or (in_length and child.type == "identifier"):
            if is_exported(node_text(child)):
                yield child
            continue
        yield from _exported_names(child, in_length or (length is not None and child == length))
