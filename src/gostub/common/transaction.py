from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Protocol, Union


class FileSystemAdapter(Protocol):
    def write_text(self, path: Path, content: str) -> None: ...


class RealFileSystem:
    def write_text(self, path: Path, content: str) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")


@dataclass
class WriteFileOp:
    path: Path
    content: str

    def execute(self, fs: FileSystemAdapter, root: Path) -> Path:
        target = root / self.path
        fs.write_text(target, self.content)
        return target

    def describe(self) -> str:
        return f"[WRITE] {self.path}"


class TransactionManager:
    """
    Collects file writes relative to ``root_path`` and applies them on commit.

    Absolute paths passed to :meth:`add_write` are used as-is.
    """

    def __init__(self, root_path: Path, fs: Optional[FileSystemAdapter] = None):
        self.root_path = root_path
        self.fs = fs or RealFileSystem()
        self._ops: List[WriteFileOp] = []

    def add_write(self, path: Union[str, Path], content: str) -> None:
        self._ops.append(WriteFileOp(Path(path), content))

    def preview(self) -> List[str]:
        return [op.describe() for op in self._ops]

    def commit(self) -> List[Path]:
        written = []
        for op in self._ops:
            written.append(op.execute(self.fs, self.root_path))
        self._ops.clear()
        return written

    @property
    def pending_count(self) -> int:
        return len(self._ops)
