import json
import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from tree_sitter import Node

from gostub.spec import (
    EmptyInterfaceError,
    InterfaceRef,
    NotAnInterfaceError,
    PackageNotFoundError,
    PackageResolverProtocol,
    ResolvedPackage,
    TypeNotFoundError,
)
from .parser import FileSet, GoSyntaxError, SourceFile, iter_named, node_text

log = logging.getLogger(__name__)


class GoListResolver:
    """Resolves import paths with ``go list``, honouring modules and build tags."""

    def __init__(self, command: str = "go", workdir: Optional[Path] = None):
        self.command = command
        self.workdir = workdir

    def resolve(self, import_path: str) -> ResolvedPackage:
        args = [self.command, "list", "-e", "-json", import_path]
        log.debug(f"Running {' '.join(args)}")
        try:
            result = subprocess.run(
                args,
                cwd=self.workdir,
                capture_output=True,
                text=True,
                check=True,
            )
        except FileNotFoundError as e:
            raise PackageNotFoundError(import_path, str(e)) from e
        except subprocess.CalledProcessError as e:
            detail = (e.stderr or "").strip() or f"go list exited with status {e.returncode}"
            raise PackageNotFoundError(import_path, detail) from e

        try:
            data = json.loads(result.stdout)
        except ValueError as e:
            raise PackageNotFoundError(import_path, f"unreadable go list output: {e}") from e

        error = data.get("Error")
        if error:
            raise PackageNotFoundError(import_path, error.get("Err", str(error)))
        directory = data.get("Dir")
        if not directory:
            raise PackageNotFoundError(import_path, "go list reported no directory")

        return ResolvedPackage(
            import_path=data.get("ImportPath", import_path),
            directory=Path(directory),
            files=[Path(directory) / name for name in data.get("GoFiles", [])],
            name=data.get("Name") or None,
        )


class SearchPathResolver:
    """
    GOPATH-style resolution: the package lives in ``<root>/<import path>`` for
    the first root that has non-test Go files there.
    """

    def __init__(self, roots: List[Path]):
        self.roots = list(roots)

    def resolve(self, import_path: str) -> ResolvedPackage:
        for root in self.roots:
            directory = root / import_path
            if not directory.is_dir():
                continue
            files = sorted(
                p for p in directory.glob("*.go") if not p.name.endswith("_test.go")
            )
            if files:
                return ResolvedPackage(
                    import_path=import_path, directory=directory, files=files
                )

        searched = ", ".join(str(root) for root in self.roots) or "<no search paths>"
        raise PackageNotFoundError(import_path, f"no Go files under {searched}")


@dataclass
class LoadedPackage:
    import_path: str
    # Short name from the package clause, e.g. "http" for net/http.
    name: str
    directory: Path
    files: List[SourceFile]
    fileset: FileSet


@dataclass
class TypeDecl:
    file: SourceFile
    name: str
    spec: Node
    type_node: Optional[Node]


class PackageLoader:
    def __init__(self, resolver: PackageResolverProtocol):
        self.resolver = resolver

    def load(self, import_path: str) -> LoadedPackage:
        resolved = self.resolver.resolve(import_path)

        # One position table for the whole package.
        fileset = FileSet()
        files: List[SourceFile] = []
        for path in resolved.files:
            try:
                files.append(fileset.parse_file(path))
            except (OSError, GoSyntaxError) as e:
                # The declaration we want may still be in a sibling file.
                log.debug(f"Skipping {path}: {e}")
                continue
        if resolved.files and not files:
            log.warning(f"No file of {import_path} could be parsed")

        name = resolved.name or next(
            (f.package_name for f in files if f.package_name), None
        )
        if name is None:
            name = import_path.rsplit("/", 1)[-1]

        return LoadedPackage(
            import_path=resolved.import_path,
            name=name,
            directory=resolved.directory,
            files=files,
            fileset=fileset,
        )


def find_type_spec(package: LoadedPackage, identifier: str) -> TypeDecl:
    for file in package.files:
        for decl in iter_named(file.root, "type_declaration"):
            for spec in iter_named(decl, "type_spec", "type_alias"):
                name = spec.child_by_field_name("name")
                if name is None or node_text(name) != identifier:
                    continue
                return TypeDecl(
                    file=file,
                    name=identifier,
                    spec=spec,
                    type_node=spec.child_by_field_name("type"),
                )
    raise TypeNotFoundError(identifier, package.import_path)


def interface_elements(interface_node: Node) -> List[Node]:
    """Method and embedded-type elements of an ``interface_type``, in source order."""
    elements = []
    for child in interface_node.named_children:
        if child.type == "comment":
            continue
        if child.type == "method_spec_list":
            elements.extend(interface_elements(child))
            continue
        elements.append(child)
    return elements


def find_interface(package: LoadedPackage, ref: InterfaceRef) -> TypeDecl:
    decl = find_type_spec(package, ref.identifier)
    if decl.type_node is None or decl.type_node.type != "interface_type":
        raise NotAnInterfaceError(str(ref))
    if not interface_elements(decl.type_node):
        raise EmptyInterfaceError(str(ref))

    position = package.fileset.position(package.fileset.pos(decl.file, decl.spec))
    log.debug(f"Found interface {ref} at {position}")
    return decl
