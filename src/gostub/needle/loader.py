import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Protocol

log = logging.getLogger(__name__)


class CatalogueHandler(Protocol):
    """Parses one message catalogue file format."""

    def match(self, path: Path) -> bool: ...

    def load(self, path: Path) -> Dict[str, Any]: ...


class JsonHandler:
    def match(self, path: Path) -> bool:
        return path.suffix.lower() == ".json"

    def load(self, path: Path) -> Dict[str, Any]:
        with path.open("r", encoding="utf-8") as f:
            return json.load(f)


class CatalogueLoader:
    def __init__(self, handlers: Optional[List[CatalogueHandler]] = None):
        self.handlers = handlers or [JsonHandler()]

    def _merge_file(self, path: Path, registry: Dict[str, str]) -> None:
        handler = next((h for h in self.handlers if h.match(path)), None)
        if handler is None:
            return
        try:
            content = handler.load(path)
        except (OSError, ValueError) as e:
            log.debug(f"Skipping unreadable catalogue {path}: {e}")
            return
        if not isinstance(content, dict):
            log.debug(f"Skipping catalogue {path}: top level is not a mapping")
            return
        # Keys are full dotted message ids at the top level.
        for key, value in content.items():
            registry[key] = str(value)

    def load_directory(self, root_path: Path) -> Dict[str, str]:
        registry: Dict[str, str] = {}
        if not root_path.is_dir():
            return registry

        for dirpath, _, filenames in sorted(os.walk(root_path)):
            for filename in sorted(filenames):
                self._merge_file(Path(dirpath) / filename, registry)
        return registry
