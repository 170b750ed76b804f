"""
Demonstrations for creating a file through various APIs.
"""
import io
import os
import shutil
import tempfile
from pathlib import Path
from typing import List

from protected_access.config import settings
from protected_access.services.base import ProtectedResourceAccess


class FileSystemCreateAccess(ProtectedResourceAccess):
    """Creates ``FileToCreate.txt`` with one of ten file APIs."""

    AMOUNT_OF_METHODS = 10

    SUCCESS_TEMPLATE = "Successfully created resource at {resource}{suffix}"
    FAILURE_TEMPLATE = "Failed to create resource at {resource} for operation id {id}"

    def list_handled_resources(self) -> List[str]:
        return [os.path.join(settings.resources_dir, "FileToCreate.txt")]

    def check_preconditions(self, resource: str) -> bool:
        return not os.path.exists(resource)

    def operations(self):
        return (
            self.create_with_path_touch,
            self.create_with_os_open,
            self.create_with_open_exclusive,
            self.create_with_file_io,
            self.create_with_path_open,
            self.create_with_mkstemp,
            self.create_with_named_temporary_file,
            self.create_with_write_bytes,
            self.create_with_write_text,
            self.create_with_copyfile,
        )

    def create_with_path_touch(self, path: str) -> str:
        Path(path).touch(exist_ok=False)
        return self.success(path, "Path.touch")

    def create_with_os_open(self, path: str) -> str:
        fd = os.open(path, os.O_CREAT | os.O_EXCL | os.O_WRONLY, 0o644)
        os.close(fd)
        return self.success(path, f"os.open fd={fd}")

    def create_with_open_exclusive(self, path: str) -> str:
        with open(path, "x", encoding="utf-8") as handle:
            return self.success(path, type(handle).__name__)

    def create_with_file_io(self, path: str) -> str:
        with io.FileIO(path, "x") as handle:
            return self.success(path, type(handle).__name__)

    def create_with_path_open(self, path: str) -> str:
        with Path(path).open("xb") as handle:
            return self.success(path, type(handle).__name__)

    @staticmethod
    def _link_exclusive(temp_path: str, path: str) -> None:
        """Publish a temporary file under ``path``, failing if ``path`` already exists."""
        try:
            os.link(temp_path, path)
        finally:
            os.unlink(temp_path)

    def create_with_mkstemp(self, path: str) -> str:
        fd, temp_path = tempfile.mkstemp(dir=os.path.dirname(path) or None)
        os.close(fd)
        self._link_exclusive(temp_path, path)
        return self.success(path, temp_path)

    def create_with_named_temporary_file(self, path: str) -> str:
        with tempfile.NamedTemporaryFile(dir=os.path.dirname(path) or None, delete=False) as handle:
            temp_path = handle.name
        self._link_exclusive(temp_path, path)
        return self.success(path, temp_path)

    def create_with_write_bytes(self, path: str) -> str:
        return self.success(path, str(Path(path).write_bytes(b"")))

    def create_with_write_text(self, path: str) -> str:
        return self.success(path, str(Path(path).write_text("", encoding="utf-8")))

    def create_with_copyfile(self, path: str) -> str:
        return self.success(path, shutil.copyfile(os.devnull, path))
