"""
Shared fixtures: every test runs in its own working directory so the
relative resource paths land under pytest's tmp_path.
"""
import pytest

from protected_access.services.access_service import access_service


@pytest.fixture
def workspace(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def prepared(workspace):
    """Return a function seeding one category's fixtures in the workspace."""
    def prepare(category):
        access_service.prepare_resources(category)
        return access_service.list_handled_resources(category)

    return prepare
