"""Go source introspection built on tree-sitter."""

from .parser import FileSet, GoSyntaxError, SourceFile, get_parser, is_exported
from .reference import ReferenceParser
from .packages import (
    GoListResolver,
    SearchPathResolver,
    PackageLoader,
    LoadedPackage,
    TypeDecl,
    find_type_spec,
    find_interface,
)
from .qualifier import TypeQualifier
from .extractor import SignatureExtractor
from .formatter import GoImportsFormatter

__all__ = [
    "FileSet",
    "GoSyntaxError",
    "SourceFile",
    "get_parser",
    "is_exported",
    "ReferenceParser",
    "GoListResolver",
    "SearchPathResolver",
    "PackageLoader",
    "LoadedPackage",
    "TypeDecl",
    "find_type_spec",
    "find_interface",
    "TypeQualifier",
    "SignatureExtractor",
    "GoImportsFormatter",
]
