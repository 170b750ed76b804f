"""
Demonstrations for running a shell command through various process APIs.
"""
import subprocess
from typing import List

from protected_access.config import settings, WINDOWS
from protected_access.services.base import ProtectedResourceAccess


class CommandSystemExecutionAccess(ProtectedResourceAccess):
    """Runs ``echo Hello World!`` through a shell with one of three process APIs."""

    AMOUNT_OF_METHODS = 3

    SUCCESS_TEMPLATE = "Successfully executed command at {resource}{suffix}"
    FAILURE_TEMPLATE = "Failed to execute command at {resource} for operation id {id}"

    def list_handled_resources(self) -> List[str]:
        if WINDOWS:
            return ["cmd /c echo Hello World!", "cmd /c more"]
        return ["/bin/sh -c echo Hello World!", "/bin/sh -c cat"]

    def operations(self):
        return (
            self.execute_with_run,
            self.execute_with_popen,
            self.execute_with_pipeline,
        )

    @staticmethod
    def split_command(command: str) -> List[str]:
        """Split ``<shell> <flag> <script>`` keeping the script as one argument."""
        return command.split(" ", 2)

    def execute_with_run(self, command: str) -> str:
        completed = subprocess.run(
            self.split_command(command),
            stdin=subprocess.DEVNULL,
            capture_output=True,
            text=True,
            timeout=settings.command_timeout_seconds,
        )
        return self.success(
            command,
            self.describe_process("subprocess.run", completed.returncode, completed.stdout, completed.stderr),
        )

    def execute_with_popen(self, command: str) -> str:
        process = subprocess.Popen(
            self.split_command(command),
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
        )
        return self.success(command, self.capture_process_result("subprocess.Popen", process))

    def execute_with_pipeline(self, command: str) -> str:
        producer = subprocess.Popen(
            self.split_command(command),
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
        )
        consumer = subprocess.Popen(
            self.split_command(self.list_handled_resources()[1]),
            stdin=producer.stdout,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
        )
        producer.stdout.close()
        return self.success(command, self.capture_pipeline_result("subprocess pipeline", [producer, consumer]))
