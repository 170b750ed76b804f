"""
Tests for the file create, read, write, delete and execute demonstrations.
"""
import os
import stat
import sys

import pytest

from protected_access.config import SEED_CONTENT
from protected_access.services import file_delete
from protected_access.services.file_create import FileSystemCreateAccess
from protected_access.services.file_delete import FileSystemDeleteAccess
from protected_access.services.file_execute import FileSystemExecuteAccess
from protected_access.services.file_read import FileSystemReadAccess
from protected_access.services.file_write import FileSystemWriteAccess

posix_only = pytest.mark.skipif(sys.platform.startswith("win"), reason="uses /bin/sh and execute bits")


def read_text(path):
    with open(path, encoding="utf-8") as handle:
        return handle.read()


class TestFileCreate:
    @pytest.mark.parametrize("method_id", range(1, FileSystemCreateAccess.amount_of_methods() + 1))
    def test_creates_missing_file(self, prepared, method_id):
        path, = prepared("file-create")
        message = FileSystemCreateAccess().access_resource_by_id(method_id)
        assert message.startswith(f"Successfully created resource at {path}")
        assert os.path.isfile(path)

    def test_existing_file_is_not_recreated(self, prepared):
        path, = prepared("file-create")
        with open(path, "w", encoding="utf-8") as handle:
            handle.write("keep")
        message = FileSystemCreateAccess().access_resource_by_id(1)
        assert message == f"Failed to create resource at {path} for operation id 1"
        assert read_text(path) == "keep"

    @pytest.mark.parametrize("method_id", [6, 7])
    def test_temporary_file_variants_never_overwrite(self, prepared, monkeypatch, method_id):
        """A target appearing after the precondition check is kept"""
        path, = prepared("file-create")
        with open(path, "w", encoding="utf-8") as handle:
            handle.write("keep")
        monkeypatch.setattr(FileSystemCreateAccess, "check_preconditions", lambda self, resource: True)
        with pytest.raises(FileExistsError):
            FileSystemCreateAccess().access_resource_by_id(method_id)
        assert read_text(path) == "keep"
        assert os.listdir(os.path.dirname(path)) == [os.path.basename(path)]

    @pytest.mark.parametrize("method_id", [0, 11, -1])
    def test_unsupported_id_creates_nothing(self, prepared, method_id):
        path, = prepared("file-create")
        message = FileSystemCreateAccess().access_resource_by_id(method_id)
        assert message.startswith("Failed to create resource at")
        assert not os.path.exists(path)

    def test_prepare_removes_leftover_target(self, prepared):
        path, = prepared("file-create")
        FileSystemCreateAccess().access_resource_by_id(1)
        prepared("file-create")
        assert not os.path.exists(path)


class TestFileRead:
    @pytest.mark.parametrize("method_id", range(1, FileSystemReadAccess.amount_of_methods() + 1))
    def test_reads_without_modifying(self, prepared, method_id):
        path, = prepared("file-read")
        message = FileSystemReadAccess().access_resource_by_id(method_id)
        assert message.startswith(f"Successfully read resource at {path} with result: ")
        assert read_text(path) == SEED_CONTENT["file-read"]

    @pytest.mark.parametrize("method_id", [1, 2, 3, 4, 7, 8, 9, 10, 11, 12])
    def test_result_carries_file_content(self, prepared, method_id):
        prepared("file-read")
        message = FileSystemReadAccess().access_resource_by_id(method_id)
        assert message.endswith(SEED_CONTENT["file-read"])

    def test_struct_read_of_plain_text_reports_eof(self, prepared):
        prepared("file-read")
        message = FileSystemReadAccess().access_resource_by_id(5)
        assert message.endswith("Hello from expected EOFError")

    def test_pickle_read_of_plain_text_reports_error(self, prepared):
        prepared("file-read")
        message = FileSystemReadAccess().access_resource_by_id(6)
        assert "Hello from expected " in message

    def test_mmap_read_of_empty_file(self, prepared):
        path, = prepared("file-read")
        open(path, "w").close()
        message = FileSystemReadAccess().access_resource_by_id(10)
        assert message == f"Successfully read resource at {path}"

    def test_missing_file_fails(self, workspace):
        message = FileSystemReadAccess().access_resource_by_id(1)
        assert message.startswith("Failed to read resource at")

    @pytest.mark.parametrize("method_id", [0, 13])
    def test_unsupported_id_fails(self, prepared, method_id):
        path, = prepared("file-read")
        message = FileSystemReadAccess().access_resource_by_id(method_id)
        assert message == f"Failed to read resource at {path} for operation id {method_id}"


class TestFileWrite:
    @pytest.mark.parametrize("method_id", range(1, FileSystemWriteAccess.amount_of_methods() + 1))
    def test_overwrites_content(self, prepared, method_id):
        path, = prepared("file-write")
        message = FileSystemWriteAccess().access_resource_by_id(method_id)
        assert message.startswith(f"Successfully written resource at {path}")
        with open(path, "rb") as handle:
            content = handle.read()
        assert content
        assert content != SEED_CONTENT["file-write"].encode("utf-8")

    def test_struct_record_round_trips_through_read(self, prepared, monkeypatch):
        path, = prepared("file-write")
        FileSystemWriteAccess().access_resource_by_id(5)
        monkeypatch.setattr(FileSystemReadAccess, "list_handled_resources", lambda self: [path])
        assert FileSystemReadAccess().access_resource_by_id(5).endswith("Hello from struct.pack")

    def test_missing_file_is_not_created(self, workspace):
        path, = FileSystemWriteAccess().list_handled_resources()
        message = FileSystemWriteAccess().access_resource_by_id(1)
        assert message.startswith("Failed to write resource at")
        assert not os.path.exists(path)

    @pytest.mark.parametrize("method_id", [0, 13, -1])
    def test_unsupported_id_leaves_content(self, prepared, method_id):
        path, = prepared("file-write")
        message = FileSystemWriteAccess().access_resource_by_id(method_id)
        assert message.startswith("Failed to write resource at")
        assert read_text(path) == SEED_CONTENT["file-write"]


class TestFileDelete:
    @pytest.mark.parametrize("method_id", [1, 3, 4, 5, 6, 7, 8, 9, 10])
    def test_removes_file(self, prepared, method_id):
        if method_id == 10 and os.unlink not in os.supports_dir_fd:
            pytest.skip("os.unlink has no dir_fd support here")
        path, = prepared("file-delete")
        message = FileSystemDeleteAccess().access_resource_by_id(method_id)
        assert message.startswith(f"Successfully deleted file at path: {path}")
        assert not os.path.exists(path)

    def test_atexit_variant_keeps_file(self, prepared):
        path, = prepared("file-delete")
        message = FileSystemDeleteAccess().access_resource_by_id(2)
        assert message == f"Successfully deleted file at path: {path}"
        assert os.path.isfile(path)

    def test_atexit_variant_registers_once_per_path(self, prepared, monkeypatch):
        registered = []
        monkeypatch.setattr(file_delete, "_DELETE_ON_EXIT", set())
        monkeypatch.setattr(file_delete.atexit, "register", registered.append)
        for _ in range(5):
            prepared("file-delete")
            assert FileSystemDeleteAccess().access_resource_by_id(2).startswith("Successfully deleted")
        assert len(registered) == 1

    def test_dir_fd_unsupported_is_failure(self, prepared, monkeypatch):
        path, = prepared("file-delete")
        monkeypatch.setattr(os, "supports_dir_fd", set())
        message = FileSystemDeleteAccess().access_resource_by_id(10)
        assert message == f"Failed to delete resource at {path} for operation id 10"
        assert os.path.isfile(path)

    def test_moves_leave_no_trash_directory(self, prepared):
        path, = prepared("file-delete")
        FileSystemDeleteAccess().access_resource_by_id(8)
        assert os.listdir(os.path.dirname(path)) == []

    def test_missing_file_fails(self, workspace):
        message = FileSystemDeleteAccess().access_resource_by_id(1)
        assert message.startswith("Failed to delete resource at")

    @pytest.mark.parametrize("method_id", [0, 11])
    def test_unsupported_id_keeps_file(self, prepared, method_id):
        path, = prepared("file-delete")
        message = FileSystemDeleteAccess().access_resource_by_id(method_id)
        assert message == f"Failed to delete resource at {path} for operation id {method_id}"
        assert read_text(path) == SEED_CONTENT["file-delete"]


@posix_only
class TestFileExecute:
    def test_reports_script_not_shell(self):
        access = FileSystemExecuteAccess()
        shell, script = access.list_handled_resources()
        assert shell == "/bin/sh -c"
        assert access.primary_resource() == script

    @pytest.mark.parametrize("method_id", range(1, FileSystemExecuteAccess.amount_of_methods() + 1))
    def test_executes_script(self, prepared, method_id):
        _, script = prepared("file-execute")
        message = FileSystemExecuteAccess().access_resource_by_id(method_id)
        assert message.startswith(f"Successfully executed path at {script}")
        assert "exit=0" in message
        assert "Hello FileSystemExecuteAccess" in message
        assert os.access(script, os.X_OK)

    def test_non_executable_script_fails(self, prepared):
        _, script = prepared("file-execute")
        os.chmod(script, stat.S_IRUSR | stat.S_IWUSR)
        message = FileSystemExecuteAccess().access_resource_by_id(1)
        assert message == f"Failed to execute path at {script} for operation id 1"

    @pytest.mark.parametrize("method_id", [0, 4])
    def test_unsupported_id_fails(self, prepared, method_id):
        prepared("file-execute")
        assert FileSystemExecuteAccess().access_resource_by_id(method_id).startswith("Failed to execute path at")
