"""
Demonstrations for reading a file through various APIs.
"""
import fileinput
import io
import mmap
import os
import pickle
import struct
from pathlib import Path
from typing import List

from protected_access.config import settings
from protected_access.services.base import ProtectedResourceAccess

# Errors pickle.load raises for data that is not a pickle stream
UNPICKLING_ERRORS = (
    pickle.UnpicklingError,
    EOFError,
    ValueError,
    IndexError,
    KeyError,
    AttributeError,
    ImportError,
    TypeError,
)


class FileSystemReadAccess(ProtectedResourceAccess):
    """Reads ``FileToRead.txt`` with one of twelve file APIs."""

    AMOUNT_OF_METHODS = 12

    SUCCESS_TEMPLATE = "Successfully read resource at {resource}{suffix}"
    FAILURE_TEMPLATE = "Failed to read resource at {resource} for operation id {id}"
    RESULT_PREFIX = " with result: "

    def list_handled_resources(self) -> List[str]:
        return [os.path.join(settings.resources_dir, "FileToRead.txt")]

    def check_preconditions(self, resource: str) -> bool:
        return os.path.isfile(resource) and os.access(resource, os.R_OK)

    def operations(self):
        return (
            self.read_with_open,
            self.read_with_binary_open,
            self.read_with_fileinput,
            self.read_with_buffered_reader,
            self.read_with_struct,
            self.read_with_pickle,
            self.read_with_readline,
            self.read_with_read_text,
            self.read_with_read_bytes,
            self.read_with_mmap,
            self.read_with_os_read,
            self.read_with_readinto,
        )

    def read_with_open(self, path: str) -> str:
        with open(path, encoding="utf-8") as handle:
            return self.success(path, handle.read())

    def read_with_binary_open(self, path: str) -> str:
        with open(path, "rb") as handle:
            return self.success(path, handle.read().decode("utf-8"))

    def read_with_fileinput(self, path: str) -> str:
        with fileinput.input(files=(path,), encoding="utf-8") as lines:
            return self.success(path, os.linesep.join(line.rstrip("\r\n") for line in lines))

    def read_with_buffered_reader(self, path: str) -> str:
        with io.BufferedReader(io.FileIO(path, "r")) as handle:
            return self.success(path, handle.read().decode("utf-8"))

    def read_with_struct(self, path: str) -> str:
        # Length-prefixed UTF-8 record: 2-byte big-endian size, then the text
        try:
            with open(path, "rb") as handle:
                header = handle.read(2)
                if len(header) < 2:
                    raise EOFError("missing record header")
                (length,) = struct.unpack(">H", header)
                data = handle.read(length)
                if len(data) < length:
                    raise EOFError(f"record needs {length} bytes, found {len(data)}")
            return self.success(path, data.decode("utf-8"))
        except EOFError:
            return self.success(path, "Hello from expected EOFError")

    def read_with_pickle(self, path: str) -> str:
        try:
            with open(path, "rb") as handle:
                return self.success(path, str(pickle.load(handle)))
        except UNPICKLING_ERRORS as e:
            return self.success(path, f"Hello from expected {type(e).__name__}")

    def read_with_readline(self, path: str) -> str:
        with open(path, encoding="utf-8") as handle:
            return self.success(path, handle.readline().rstrip("\r\n"))

    def read_with_read_text(self, path: str) -> str:
        return self.success(path, Path(path).read_text(encoding="utf-8"))

    def read_with_read_bytes(self, path: str) -> str:
        return self.success(path, Path(path).read_bytes().decode("utf-8"))

    def read_with_mmap(self, path: str) -> str:
        with open(path, "rb") as handle:
            if os.fstat(handle.fileno()).st_size == 0:
                return self.success(path, "")
            with mmap.mmap(handle.fileno(), 0, access=mmap.ACCESS_READ) as mapped:
                return self.success(path, mapped[:].decode("utf-8"))

    def read_with_os_read(self, path: str) -> str:
        fd = os.open(path, os.O_RDONLY)
        try:
            size = os.fstat(fd).st_size
            return self.success(path, os.read(fd, size).decode("utf-8"))
        finally:
            os.close(fd)

    def read_with_readinto(self, path: str) -> str:
        with open(path, "rb") as handle:
            buffer = bytearray(os.fstat(handle.fileno()).st_size)
            count = handle.readinto(buffer)
            return self.success(path, bytes(buffer[:count]).decode("utf-8"))
