import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

if sys.version_info < (3, 11):
    import tomli as tomllib
else:
    import tomllib

from gostub.spec import ConfigError

RESOLVERS = ("golist", "searchpath")


@dataclass
class GostubConfig:
    # Root under which a relative OUTPUT path is resolved.
    module_root: Path
    # Working directory for go/goimports subprocesses.
    workdir: Path
    resolver: str = "golist"
    search_paths: List[Path] = field(default_factory=list)
    go: str = "go"
    goimports: str = "goimports"
    config_path: Optional[Path] = None


def _find_pyproject_toml(search_path: Path) -> Path:
    current_dir = search_path.resolve()
    while True:
        pyproject_path = current_dir / "pyproject.toml"
        if pyproject_path.is_file():
            return pyproject_path
        if current_dir.parent == current_dir:
            break
        current_dir = current_dir.parent
    raise FileNotFoundError("Could not find pyproject.toml in any parent directory.")


def default_module_root() -> Path:
    gopath = os.getenv("GOPATH")
    if gopath:
        # GOPATH may list several workspaces; outputs go to the first one.
        first = gopath.split(os.pathsep)[0]
        if first:
            return Path(first) / "src"
    return Path.home() / "go" / "src"


def _resolve(base: Path, value: str) -> Path:
    path = Path(value).expanduser()
    return path if path.is_absolute() else base / path


def load_config_from_path(search_path: Path) -> GostubConfig:
    gostub_data: Dict[str, Any] = {}
    config_path: Optional[Path] = None
    base = search_path.resolve()

    try:
        config_path = _find_pyproject_toml(search_path)
    except FileNotFoundError:
        pass
    else:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
        gostub_data = data.get("tool", {}).get("gostub", {})
        base = config_path.parent

    module_root_value = os.getenv("GOSTUB_MODULE_ROOT") or gostub_data.get(
        "module_root"
    )
    module_root = (
        _resolve(base, module_root_value) if module_root_value else default_module_root()
    )

    resolver = gostub_data.get("resolver", "golist")
    if resolver not in RESOLVERS:
        raise ConfigError(
            resolver=resolver,
            path=str(config_path),
            choices=", ".join(RESOLVERS),
        )

    search_paths = [_resolve(base, p) for p in gostub_data.get("search_paths", [])]

    return GostubConfig(
        module_root=module_root,
        workdir=_resolve(base, gostub_data.get("workdir", ".")),
        resolver=resolver,
        search_paths=search_paths or [module_root],
        go=gostub_data.get("go", "go"),
        goimports=os.getenv("GOSTUB_GOIMPORTS") or gostub_data.get("goimports", "goimports"),
        config_path=config_path,
    )
