"""
Demonstrations for executing a script file through various process APIs.
"""
import os
import subprocess
from typing import List

from protected_access.config import settings, WINDOWS
from protected_access.services.base import ProtectedResourceAccess


class FileSystemExecuteAccess(ProtectedResourceAccess):
    """Executes ``FileToExecute.sh`` (``.bat`` on Windows) with one of three process APIs."""

    AMOUNT_OF_METHODS = 3

    SUCCESS_TEMPLATE = "Successfully executed path at {resource}{suffix}"
    FAILURE_TEMPLATE = "Failed to execute path at {resource} for operation id {id}"

    def list_handled_resources(self) -> List[str]:
        if WINDOWS:
            return ["cmd /c", os.path.join(settings.executables_dir, "FileToExecute.bat")]
        return ["/bin/sh -c", os.path.join(settings.executables_dir, "FileToExecute.sh")]

    def primary_resource(self) -> str:
        return self.list_handled_resources()[1]

    def check_preconditions(self, resource: str) -> bool:
        return os.path.isfile(resource) and os.access(resource, os.X_OK)

    def operations(self):
        return (
            self.execute_with_run,
            self.execute_with_popen,
            self.execute_with_pipeline,
        )

    def shell_command(self, path: str) -> List[str]:
        shell = self.list_handled_resources()[0].split(" ")
        return shell + [path]

    def script_command(self, path: str) -> List[str]:
        if WINDOWS:
            return self.shell_command(path)
        # A bare relative name would be looked up on PATH
        return [path if os.path.dirname(path) else os.path.join(".", path)]

    def execute_with_run(self, path: str) -> str:
        completed = subprocess.run(
            self.shell_command(path),
            stdin=subprocess.DEVNULL,
            capture_output=True,
            text=True,
            timeout=settings.command_timeout_seconds,
        )
        return self.success(
            path, self.describe_process("subprocess.run", completed.returncode, completed.stdout, completed.stderr)
        )

    def execute_with_popen(self, path: str) -> str:
        process = subprocess.Popen(
            self.script_command(path),
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
        )
        return self.success(path, self.capture_process_result("subprocess.Popen", process))

    def execute_with_pipeline(self, path: str) -> str:
        consumer_command = ["cmd", "/c", "more"] if WINDOWS else ["/bin/sh", "-c", "cat"]
        producer = subprocess.Popen(
            self.script_command(path),
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
        )
        consumer = subprocess.Popen(
            consumer_command,
            stdin=producer.stdout,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
        )
        # Consumer owns the read end now
        producer.stdout.close()
        return self.success(path, self.capture_pipeline_result("subprocess pipeline", [producer, consumer]))
