from .bus import SpyBus
from .workspace import GoWorkspaceFactory
from .formatter import FakeFormatter

__all__ = ["SpyBus", "GoWorkspaceFactory", "FakeFormatter"]
