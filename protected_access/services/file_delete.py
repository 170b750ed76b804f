"""
Demonstrations for deleting a file through various APIs.
"""
import atexit
import functools
import os
import shutil
import tempfile
import threading
from pathlib import Path
from typing import List, Set

from protected_access.config import settings
from protected_access.services.base import ProtectedResourceAccess

# Resolved paths already scheduled for removal at interpreter exit
_DELETE_ON_EXIT: Set[Path] = set()
_DELETE_ON_EXIT_LOCK = threading.Lock()


class FileSystemDeleteAccess(ProtectedResourceAccess):
    """Removes ``FileToDelete.txt`` with one of ten file APIs.

    Method id 2 only registers the removal for interpreter exit, so the file
    is still present when the call returns.
    """

    AMOUNT_OF_METHODS = 10

    SUCCESS_TEMPLATE = "Successfully deleted file at path: {resource}{suffix}"
    FAILURE_TEMPLATE = "Failed to delete resource at {resource} for operation id {id}"

    def list_handled_resources(self) -> List[str]:
        return [os.path.join(settings.resources_dir, "FileToDelete.txt")]

    def check_preconditions(self, resource: str) -> bool:
        return os.path.isfile(resource) and os.access(resource, os.W_OK)

    def operations(self):
        return (
            self.delete_with_os_remove,
            self.delete_with_atexit,
            self.delete_with_os_unlink,
            self.delete_with_path_unlink,
            self.delete_with_path_unlink_missing_ok,
            self.delete_while_open,
            self.delete_with_os_replace,
            self.delete_with_shutil_move,
            self.delete_with_path_rename,
            self.delete_with_dir_fd,
        )

    def delete_with_os_remove(self, path: str) -> str:
        os.remove(path)
        return self.success(path, "")

    def delete_with_atexit(self, path: str) -> str:
        # Absolute so the cwd at exit does not matter
        target = Path(path).resolve()
        with _DELETE_ON_EXIT_LOCK:
            if target not in _DELETE_ON_EXIT:
                _DELETE_ON_EXIT.add(target)
                atexit.register(functools.partial(target.unlink, missing_ok=True))
        return self.success(path, "")

    def delete_with_os_unlink(self, path: str) -> str:
        os.unlink(path)
        return self.success(path, "")

    def delete_with_path_unlink(self, path: str) -> str:
        Path(path).unlink()
        return self.success(path, "")

    def delete_with_path_unlink_missing_ok(self, path: str) -> str:
        Path(path).unlink(missing_ok=True)
        return self.success(path, str(not os.path.exists(path)))

    def delete_while_open(self, path: str) -> str:
        with open(path, "rb") as handle:
            os.remove(path)
            return self.success(path, type(handle).__name__)

    def delete_with_os_replace(self, path: str) -> str:
        with tempfile.TemporaryDirectory(dir=os.path.dirname(path) or None) as trash:
            os.replace(path, os.path.join(trash, os.path.basename(path)))
        return self.success(path, "")

    def delete_with_shutil_move(self, path: str) -> str:
        with tempfile.TemporaryDirectory(dir=os.path.dirname(path) or None) as trash:
            moved = shutil.move(path, trash)
            return self.success(path, str(moved))

    def delete_with_path_rename(self, path: str) -> str:
        with tempfile.TemporaryDirectory(dir=os.path.dirname(path) or None) as trash:
            renamed = Path(path).rename(Path(trash) / Path(path).name)
            return self.success(path, str(renamed))

    def delete_with_dir_fd(self, path: str) -> str:
        if os.unlink not in os.supports_dir_fd:
            return self.failure(path, 10)
        directory, name = os.path.split(path)
        dir_fd = os.open(directory or ".", os.O_RDONLY)
        try:
            os.unlink(name, dir_fd=dir_fd)
        finally:
            os.close(dir_fd)
        return self.success(path, "")
