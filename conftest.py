import pytest
from gostub.test_utils import GoWorkspaceFactory


@pytest.fixture
def workspace_factory(tmp_path, monkeypatch):
    # Clean workspace per test, with the process rooted in it.
    factory = GoWorkspaceFactory(tmp_path)
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("GOSTUB_MODULE_ROOT", raising=False)
    monkeypatch.delenv("GOSTUB_GOIMPORTS", raising=False)
    return factory
