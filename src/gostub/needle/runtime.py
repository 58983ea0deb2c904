import os
from pathlib import Path
from typing import Dict, List, Optional, Set, Union

from .loader import CatalogueLoader
from .pointer import SemanticPointer

_PROJECT_MARKERS = ("go.mod", "pyproject.toml", ".git")


class Needle:
    """
    Resolves semantic pointers to message templates.

    Catalogues are looked up under every registered root, in
    ``<root>/needle/<lang>`` (packaged defaults) and
    ``<root>/.gostub/needle/<lang>`` (project overrides). Later roots win.
    """

    def __init__(self, roots: Optional[List[Path]] = None):
        self.default_lang = "en"
        self._registry: Dict[str, Dict[str, str]] = {}
        self._loader = CatalogueLoader()
        self._loaded_langs: Set[str] = set()
        self.roots = list(roots) if roots else [self._find_project_root()]

    def add_root(self, path: Path) -> None:
        """Adds a root with the lowest priority (checked first, overridden by all others)."""
        if path not in self.roots:
            self.roots.insert(0, path)
            self._registry.clear()
            self._loaded_langs.clear()

    def _find_project_root(self, start_dir: Optional[Path] = None) -> Path:
        current_dir = (start_dir or Path.cwd()).resolve()
        while current_dir.parent != current_dir:
            if any((current_dir / marker).exists() for marker in _PROJECT_MARKERS):
                return current_dir
            current_dir = current_dir.parent
        return start_dir or Path.cwd()

    def _ensure_lang_loaded(self, lang: str) -> None:
        if lang in self._loaded_langs:
            return

        merged: Dict[str, str] = {}
        for root in self.roots:
            for candidate in (root / "needle" / lang, root / ".gostub" / "needle" / lang):
                if candidate.is_dir():
                    merged.update(self._loader.load_directory(candidate))

        self._registry[lang] = merged
        self._loaded_langs.add(lang)

    def get(
        self, pointer: Union[SemanticPointer, str], lang: Optional[str] = None
    ) -> str:
        """
        Resolves a pointer to its template.

        Lookup order: requested language (``GOSTUB_LANG`` when not given),
        then English, then the key itself.
        """
        key = str(pointer)
        target_lang = lang or os.getenv("GOSTUB_LANG", self.default_lang)

        self._ensure_lang_loaded(target_lang)
        value = self._registry.get(target_lang, {}).get(key)
        if value is not None:
            return value

        if target_lang != self.default_lang:
            self._ensure_lang_loaded(self.default_lang)
            value = self._registry.get(self.default_lang, {}).get(key)
            if value is not None:
                return value

        return key


needle = Needle()
