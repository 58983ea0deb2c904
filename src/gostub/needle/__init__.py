__path__ = __import__("pkgutil").extend_path(__path__, __name__)

from .pointer import L, SemanticPointer
from .runtime import needle, Needle
from .loader import CatalogueLoader, CatalogueHandler, JsonHandler

__all__ = [
    "L",
    "SemanticPointer",
    "needle",
    "Needle",
    "CatalogueLoader",
    "CatalogueHandler",
    "JsonHandler",
]
