from pathlib import Path
from textwrap import dedent
from typing import Any, Dict, List

import tomli_w


class GoWorkspaceFactory:
    """
    Builds a GOPATH-style tree of Go packages under ``<root>/gopath/src`` and,
    when configured, a ``pyproject.toml`` with a ``[tool.gostub]`` table.
    """

    def __init__(self, root_path: Path):
        self.root_path = root_path
        self.src_root = root_path / "gopath" / "src"
        self._files: List[Dict[str, Any]] = []
        self._pyproject_data: Dict[str, Any] = {}

    def with_config(self, gostub_config: Dict[str, Any]) -> "GoWorkspaceFactory":
        tool = self._pyproject_data.setdefault("tool", {})
        tool["gostub"] = gostub_config
        return self

    def with_searchpath_config(self) -> "GoWorkspaceFactory":
        return self.with_config(
            {
                "resolver": "searchpath",
                "search_paths": ["gopath/src"],
                "module_root": "gopath/src",
            }
        )

    def with_source(self, import_path: str, filename: str, content: str) -> "GoWorkspaceFactory":
        self._files.append(
            {"path": self.src_root / import_path / filename, "content": dedent(content)}
        )
        return self

    def build(self) -> Path:
        if self._pyproject_data:
            with (self.root_path / "pyproject.toml").open("wb") as f:
                tomli_w.dump(self._pyproject_data, f)

        for spec in self._files:
            output_path: Path = spec["path"]
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_text(spec["content"], encoding="utf-8")

        return self.root_path
