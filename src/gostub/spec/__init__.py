__path__ = __import__("pkgutil").extend_path(__path__, __name__)

from .models import (
    InterfaceRef,
    Param,
    Func,
    Method,
    ExtractedInterface,
    StubSpec,
    ResolvedPackage,
    GenerateResult,
)
from .errors import (
    GostubError,
    ConfigError,
    GenerationError,
    MalformedReferenceError,
    UnresolvedImportError,
    UnrecognizedInterfaceError,
    PackageNotFoundError,
    TypeNotFoundError,
    NotAnInterfaceError,
    EmptyInterfaceError,
    RenderFailureError,
    WriteFailureError,
    FormatterError,
)
from .protocols import (
    SourceFormatterProtocol,
    PackageResolverProtocol,
    StubRendererProtocol,
)

__all__ = [
    "InterfaceRef",
    "Param",
    "Func",
    "Method",
    "ExtractedInterface",
    "StubSpec",
    "ResolvedPackage",
    "GenerateResult",
    # Errors
    "GostubError",
    "ConfigError",
    "GenerationError",
    "MalformedReferenceError",
    "UnresolvedImportError",
    "UnrecognizedInterfaceError",
    "PackageNotFoundError",
    "TypeNotFoundError",
    "NotAnInterfaceError",
    "EmptyInterfaceError",
    "RenderFailureError",
    "WriteFailureError",
    "FormatterError",
    # Collaborators
    "SourceFormatterProtocol",
    "PackageResolverProtocol",
    "StubRendererProtocol",
]
