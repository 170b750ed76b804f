"""
Tests for the category lookup, invocation and fixture preparation service.
"""
import os
import sys

import pytest

from protected_access.config import ACCESS_CATEGORIES, SEED_CONTENT
from protected_access.services.access_service import AccessService, access_service
from protected_access.services.base import ProtectedResourceAccess
from protected_access.services.file_read import FileSystemReadAccess

EXPECTED_METHOD_COUNTS = {
    "file-create": 10,
    "file-read": 12,
    "file-write": 12,
    "file-delete": 10,
    "file-execute": 3,
    "command-execute": 3,
    "network-connect": 6,
    "network-send": 6,
    "network-receive": 6,
    "thread-create": 12,
}


class TestLookup:
    def test_every_category_resolves(self):
        assert set(access_service.categories()) == set(EXPECTED_METHOD_COUNTS)
        for category, count in EXPECTED_METHOD_COUNTS.items():
            access_class = access_service.access_class(category)
            assert issubclass(access_class, ProtectedResourceAccess)
            assert access_service.amount_of_methods(category) == count
            assert len(access_service.instantiate(category).operations()) == count

    def test_unknown_category_raises_key_error(self):
        with pytest.raises(KeyError):
            access_service.access_class("file-teleport")
        with pytest.raises(KeyError):
            access_service.get_category("file-teleport")

    def test_classes_are_cached(self):
        service = AccessService()
        assert service.access_class("file-read") is service.access_class("file-read")

    def test_get_category(self):
        category = access_service.get_category("file-read")
        assert category.class_name == "FileSystemReadAccess"
        assert category.amount_of_methods == 12
        assert category.resource_kind == ACCESS_CATEGORIES["file-read"]["resource_kind"]
        assert category.handled_resources == [os.path.join("resources", "FileToRead.txt")]

    def test_list_categories_preserves_order(self):
        assert [c.key for c in access_service.list_categories()] == list(ACCESS_CATEGORIES)


class TestInvoke:
    def test_success_result(self, prepared):
        prepared("file-read")
        result = access_service.invoke("file-read", 1)
        assert result.completed
        assert result.success
        assert result.error_type is None
        assert result.message.endswith(SEED_CONTENT["file-read"])

    def test_failure_message_is_completed_but_unsuccessful(self, workspace):
        result = access_service.invoke("file-read", 99)
        assert result.completed
        assert not result.success
        assert result.message.startswith("Failed to read resource at")

    def test_raised_error_is_captured(self, prepared, monkeypatch):
        def broken(self, path):
            raise PermissionError(f"denied: {path}")

        prepared("file-read")
        monkeypatch.setattr(FileSystemReadAccess, "read_with_open", broken)
        result = access_service.invoke("file-read", 1)
        assert not result.completed
        assert not result.success
        assert result.error_type == "PermissionError"
        assert result.message.startswith("denied: ")

    def test_invoke_all_counts(self):
        run = access_service.invoke_all("network-connect")
        assert [r.method_id for r in run.results] == [1, 2, 3, 4, 5, 6]
        assert run.succeeded == 6
        assert run.failed == 0


class TestPrepareResources:
    @pytest.mark.parametrize("category", sorted(SEED_CONTENT))
    def test_seeds_content(self, workspace, category):
        prepared = access_service.prepare_resources(category)
        path, = prepared.prepared
        with open(path, encoding="utf-8") as handle:
            assert handle.read() == SEED_CONTENT[category]

    def test_create_target_is_removed(self, workspace):
        path = access_service.list_handled_resources("file-create")[0]
        os.makedirs(os.path.dirname(path))
        open(path, "w").close()
        prepared = access_service.prepare_resources("file-create")
        assert prepared.removed == [path]
        assert not os.path.exists(path)

    @pytest.mark.skipif(sys.platform.startswith("win"), reason="execute bits")
    def test_script_is_executable(self, workspace):
        prepared = access_service.prepare_resources("file-execute")
        script, = prepared.prepared
        assert os.access(script, os.X_OK)

    def test_network_categories_need_nothing(self, workspace):
        prepared = access_service.prepare_resources("network-send")
        assert prepared.prepared == []
        assert prepared.removed == []
        assert os.listdir(workspace) == []
