from .renderer import StubRenderer
from .runners import GenerateRunner

__all__ = ["StubRenderer", "GenerateRunner"]
