import logging
from typing import Dict, List, Optional

from tree_sitter import Node

from gostub.spec import ExtractedInterface, Func, Param
from .packages import LoadedPackage, PackageLoader, find_interface, interface_elements
from .parser import SourceFile, iter_named, node_text
from .qualifier import TypeQualifier
from .reference import ReferenceParser, unquote

log = logging.getLogger(__name__)

METHOD_ELEMENTS = ("method_elem", "method_spec")


class SignatureExtractor:
    """
    Flattens an interface into the ordered list of method signatures needed
    to implement it.

    Embedded interfaces are resolved by running the whole pipeline again on
    their reference. There is no visited set: an interface that embeds itself,
    directly or not, recurses until Python's recursion limit.
    """

    def __init__(self, references: ReferenceParser, loader: PackageLoader):
        self.references = references
        self.loader = loader

    def extract(self, reference: str) -> ExtractedInterface:
        ref = self.references.parse(reference)
        package = self.loader.load(ref.import_path)
        decl = find_interface(package, ref)
        qualifier = TypeQualifier(package.name)

        funcs: List[Func] = []
        for element in interface_elements(decl.type_node):
            if element.type in METHOD_ELEMENTS:
                funcs.append(self._funcsig(element, qualifier))
                continue

            embedded = self._embedded_reference(element, qualifier, package, decl.file)
            log.debug(f"{ref} embeds {embedded}")
            funcs.extend(self.extract(embedded).funcs)

        return ExtractedInterface(ref=ref, package_name=package.name, funcs=funcs)

    def _funcsig(self, element: Node, qualifier: TypeQualifier) -> Func:
        func = Func(name=node_text(element.child_by_field_name("name")))
        parameters = element.child_by_field_name("parameters")
        if parameters is not None:
            func.params = self._params(parameters, qualifier)

        result = element.child_by_field_name("result")
        if result is not None:
            if result.type == "parameter_list":
                func.results = self._params(result, qualifier)
            else:
                func.results = [Param(name="", type=qualifier.qualify(result))]
        return func

    def _params(self, parameter_list: Node, qualifier: TypeQualifier) -> List[Param]:
        params: List[Param] = []
        for decl in iter_named(
            parameter_list, "parameter_declaration", "variadic_parameter_declaration"
        ):
            typ = qualifier.qualify(decl.child_by_field_name("type"))
            if decl.type == "variadic_parameter_declaration":
                typ = "..." + typ

            names = [node_text(n) for n in decl.children_by_field_name("name")]
            if names:
                params.extend(Param(name=name, type=typ) for name in names)
            else:
                params.append(Param(name="", type=typ))
        return params

    def _embedded_reference(
        self,
        element: Node,
        qualifier: TypeQualifier,
        package: LoadedPackage,
        file: SourceFile,
    ) -> str:
        # type_elem/constraint_elem wrap the embedded type in newer grammars.
        type_node = element
        if element.type in ("type_elem", "constraint_elem", "interface_type_name"):
            named = [c for c in element.named_children if c.type != "comment"]
            if len(named) == 1:
                type_node = named[0]

        qualified = qualifier.qualify(type_node)
        if type_node.type == "qualified_type":
            short_name, _, identifier = qualified.rpartition(".")
            import_path: Optional[str] = _file_imports(file).get(short_name)
        elif type_node.type == "type_identifier":
            identifier = node_text(type_node)
            import_path = package.import_path
        else:
            return qualified

        # Only hand over a full path the reference parser will accept.
        if import_path and "/" in import_path and "." not in import_path.rsplit("/", 1)[-1]:
            return f"{import_path}.{identifier}"
        return qualified


def _file_imports(file: SourceFile) -> Dict[str, str]:
    """Maps the names a file's imports are used by to their import paths."""
    imports: Dict[str, str] = {}
    for decl in iter_named(file.root, "import_declaration"):
        specs = list(iter_named(decl, "import_spec"))
        for spec_list in iter_named(decl, "import_spec_list"):
            specs.extend(iter_named(spec_list, "import_spec"))
        for spec in specs:
            path_node = spec.child_by_field_name("path")
            if path_node is None:
                continue
            path = unquote(node_text(path_node))
            alias = spec.child_by_field_name("name")
            if alias is not None:
                if alias.type in ("dot", "blank_identifier"):
                    continue
                imports[node_text(alias)] = path
            else:
                imports.setdefault(path.rsplit("/", 1)[-1], path)
    return imports
