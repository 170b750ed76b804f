"""
Demonstrations for overwriting a file through various APIs.
"""
import io
import json
import os
import pickle
import struct
from pathlib import Path
from typing import List

from protected_access.config import settings
from protected_access.services.base import ProtectedResourceAccess


class FileSystemWriteAccess(ProtectedResourceAccess):
    """Overwrites ``FileToWrite.txt`` with one of twelve file APIs."""

    AMOUNT_OF_METHODS = 12

    SUCCESS_TEMPLATE = "Successfully written resource at {resource}{suffix}"
    FAILURE_TEMPLATE = "Failed to write resource at {resource} for operation id {id}"

    def list_handled_resources(self) -> List[str]:
        return [os.path.join(settings.resources_dir, "FileToWrite.txt")]

    def check_preconditions(self, resource: str) -> bool:
        return os.path.isfile(resource) and os.access(resource, os.W_OK)

    def operations(self):
        return (
            self.write_with_open,
            self.write_with_binary_open,
            self.write_with_print,
            self.write_with_buffered_writer,
            self.write_with_struct,
            self.write_with_pickle,
            self.write_with_writelines,
            self.write_with_write_text,
            self.write_with_write_bytes,
            self.write_with_os_write,
            self.write_with_json_dump,
            self.write_with_truncate,
        )

    def write_with_open(self, path: str) -> str:
        with open(path, "w", encoding="utf-8") as handle:
            handle.write("Hello from open")
        return self.success(path, "")

    def write_with_binary_open(self, path: str) -> str:
        with open(path, "wb") as handle:
            handle.write(b"Hello from open(wb)")
        return self.success(path, "")

    def write_with_print(self, path: str) -> str:
        with open(path, "w", encoding="utf-8") as handle:
            print("Hello from print", file=handle)
        return self.success(path, "")

    def write_with_buffered_writer(self, path: str) -> str:
        with io.BufferedWriter(io.FileIO(path, "w")) as handle:
            handle.write(b"Hello from BufferedWriter")
        return self.success(path, "")

    def write_with_struct(self, path: str) -> str:
        data = "Hello from struct.pack".encode("utf-8")
        with open(path, "wb") as handle:
            handle.write(struct.pack(">H", len(data)) + data)
        return self.success(path, "")

    def write_with_pickle(self, path: str) -> str:
        with open(path, "wb") as handle:
            pickle.dump("Hello from pickle.dump", handle)
        return self.success(path, "")

    def write_with_writelines(self, path: str) -> str:
        with open(path, "w", encoding="utf-8") as handle:
            handle.writelines(["Hello from ", "writelines\n"])
        return self.success(path, "")

    def write_with_write_text(self, path: str) -> str:
        return self.success(path, str(Path(path).write_text("Hello from Path.write_text", encoding="utf-8")))

    def write_with_write_bytes(self, path: str) -> str:
        return self.success(path, str(Path(path).write_bytes(b"Hello from Path.write_bytes")))

    def write_with_os_write(self, path: str) -> str:
        fd = os.open(path, os.O_WRONLY | os.O_TRUNC)
        try:
            written = os.write(fd, b"Hello from os.write")
        finally:
            os.close(fd)
        return self.success(path, f"os.write bytes={written}")

    def write_with_json_dump(self, path: str) -> str:
        with open(path, "w", encoding="utf-8") as handle:
            json.dump({"message": "Hello from json.dump"}, handle)
        return self.success(path, "")

    def write_with_truncate(self, path: str) -> str:
        with open(path, "r+b") as handle:
            handle.truncate(0)
            handle.seek(0)
            handle.write(b"Hello from truncate")
            return self.success(path, type(handle).__name__)
