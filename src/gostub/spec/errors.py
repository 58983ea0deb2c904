from pathlib import Path
from typing import Any, Optional, Union

from gostub.common import needle
from gostub.needle import L, SemanticPointer


class GostubError(Exception):
    """
    Base class for user-facing failures.

    Each error carries a message pointer and its parameters so the CLI can
    report it through the message bus; ``str(error)`` is the rendered message.
    """

    pointer: SemanticPointer = L.error.generic

    def __init__(self, pointer: Optional[SemanticPointer] = None, **params: Any):
        self.pointer = pointer or type(self).pointer
        self.params = params
        super().__init__(self._format())

    def _format(self) -> str:
        template = needle.get(self.pointer)
        try:
            return template.format(**self.params)
        except (KeyError, IndexError, ValueError):
            return f"{self.pointer} {self.params}"


class ConfigError(GostubError):
    pointer = L.error.config.resolver


class GenerationError(GostubError):
    """A failure that terminates one generate invocation."""


class MalformedReferenceError(GenerationError):
    pointer = L.error.reference.invalid

    def __init__(self, reference: str, pointer: Optional[SemanticPointer] = None):
        self.reference = reference
        super().__init__(pointer, reference=reference)


class UnresolvedImportError(GenerationError):
    pointer = L.error.imports.unresolved

    def __init__(self, reference: str, detail: str):
        self.reference = reference
        self.detail = detail
        super().__init__(reference=reference, detail=detail)


class UnrecognizedInterfaceError(GenerationError):
    pointer = L.error.interface.unrecognized

    def __init__(self, reference: str):
        self.reference = reference
        super().__init__(reference=reference)


class PackageNotFoundError(GenerationError):
    pointer = L.error.package.not_found

    def __init__(self, path: str, detail: str):
        self.path = path
        self.detail = detail
        super().__init__(path=path, detail=detail)


class TypeNotFoundError(GenerationError):
    pointer = L.error.type.not_found

    def __init__(self, identifier: str, path: str):
        self.identifier = identifier
        self.path = path
        super().__init__(identifier=identifier, path=path)


class NotAnInterfaceError(GenerationError):
    pointer = L.error.interface.not_interface

    def __init__(self, reference: str):
        self.reference = reference
        super().__init__(reference=reference)


class EmptyInterfaceError(GenerationError):
    pointer = L.error.interface.empty

    def __init__(self, reference: str):
        self.reference = reference
        super().__init__(reference=reference)


class RenderFailureError(GenerationError):
    pointer = L.error.render.failed

    def __init__(self, detail: str, source: str):
        self.detail = detail
        # The unformatted buffer, kept for diagnosis.
        self.source = source
        super().__init__(detail=detail)


class WriteFailureError(GenerationError):
    pointer = L.error.write.failed

    def __init__(self, path: Union[str, Path], detail: str):
        self.path = Path(path)
        self.detail = detail
        super().__init__(path=str(path), detail=detail)


class FormatterError(Exception):
    """Raised by a source formatter that rejects its input."""
