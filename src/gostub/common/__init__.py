__path__ = __import__("pkgutil").extend_path(__path__, __name__)

from pathlib import Path

from gostub.needle import needle

from .messaging.bus import MessageBus, bus
from .transaction import TransactionManager

# Packaged catalogues are the defaults; project overrides take precedence.
needle.add_root(Path(__file__).parent / "assets")

__all__ = ["bus", "MessageBus", "needle", "TransactionManager"]
