from pathlib import Path
from unittest.mock import Mock

from gostub.common import TransactionManager
from gostub.common.transaction import FileSystemAdapter, WriteFileOp


def test_transaction_add_ops():
    mock_fs = Mock(spec=FileSystemAdapter)
    tm = TransactionManager(Path("/tmp"), fs=mock_fs)

    tm.add_write("pkg/stub.go", "package pkg\n")

    assert tm.preview() == ["[WRITE] pkg/stub.go"]
    assert tm.pending_count == 1
    assert isinstance(tm._ops[0], WriteFileOp)
    mock_fs.write_text.assert_not_called()


def test_transaction_commit():
    mock_fs = Mock(spec=FileSystemAdapter)
    root = Path("/root")
    tm = TransactionManager(root, fs=mock_fs)

    tm.add_write("stub.go", "content")
    tm.add_write(Path("/elsewhere/other.go"), "other")
    written = tm.commit()

    assert written == [root / "stub.go", Path("/elsewhere/other.go")]
    mock_fs.write_text.assert_any_call(root / "stub.go", "content")
    mock_fs.write_text.assert_any_call(Path("/elsewhere/other.go"), "other")
    assert tm.pending_count == 0


def test_real_filesystem_creates_parent_directories(tmp_path: Path):
    tm = TransactionManager(tmp_path)
    tm.add_write("a/b/c/stub.go", "package c\n")

    tm.commit()

    assert (tmp_path / "a/b/c/stub.go").read_text() == "package c\n"
