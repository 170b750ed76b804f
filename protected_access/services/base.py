"""
Base class shared by every protected resource access demonstration.
"""
import importlib
import logging
import subprocess
import threading
from abc import ABC, abstractmethod
from typing import Callable, List, Optional, Sequence

from protected_access.config import settings

logger = logging.getLogger(__name__)


class ProtectedResourceAccess(ABC):
    """Uniform contract for one category of protected resource accesses.

    Subclasses provide the handled resources, the message templates and an
    ordered table of operations. Method ids are 1-based indices into that
    table.
    """

    AMOUNT_OF_METHODS = 0

    # Message templates, formatted with resource, suffix and id
    SUCCESS_TEMPLATE = "Successfully accessed {resource}{suffix}"
    FAILURE_TEMPLATE = "Failed to access {resource} for operation id {id}"
    RESULT_PREFIX = " Result: "

    @classmethod
    def amount_of_methods(cls) -> int:
        """Number of supported method ids."""
        return cls.AMOUNT_OF_METHODS

    @abstractmethod
    def list_handled_resources(self) -> List[str]:
        """Resources targeted by this category."""

    @abstractmethod
    def operations(self) -> Sequence[Callable[[str], str]]:
        """Ordered operations; id ``n`` selects ``operations()[n - 1]``."""

    def primary_resource(self) -> str:
        """Resource reported in messages."""
        return self.list_handled_resources()[0]

    def check_preconditions(self, resource: str) -> bool:
        """Whether the resource is in a state the operations can act on."""
        return True

    def get_messages(self, parameters: Sequence[str]) -> List[str]:
        """Build success and failure messages from ``[resource, payload, id]``."""
        resource = parameters[0] if len(parameters) > 0 else ""
        payload = parameters[1] if len(parameters) > 1 else ""
        method_id = parameters[2] if len(parameters) > 2 else ""
        suffix = f"{self.RESULT_PREFIX}{payload}" if payload else ""
        return [
            self.SUCCESS_TEMPLATE.format(resource=resource, suffix=suffix),
            self.FAILURE_TEMPLATE.format(resource=resource, id=method_id),
        ]

    def success(self, resource: str, payload: str) -> str:
        return self.get_messages([resource, payload])[0]

    def failure(self, resource: str, method_id: int) -> str:
        return self.get_messages([resource, "", str(method_id)])[1]

    def is_supported_method_id(self, method_id: int) -> bool:
        return 1 <= method_id <= self.amount_of_methods()

    def access_resource_by_id(self, method_id: int) -> str:
        """Run the operation selected by ``method_id`` and return its message."""
        resource = self.primary_resource()
        if not self.is_supported_method_id(method_id):
            logger.debug(f"{type(self).__name__}: unsupported method id {method_id}")
            return self.failure(resource, method_id)
        if not self.check_preconditions(resource):
            logger.debug(f"{type(self).__name__}: precondition failed for {resource}")
            return self.failure(resource, method_id)
        operation = self.operations()[method_id - 1]
        logger.debug(f"{type(self).__name__}: running {operation.__name__} on {resource}")
        return operation(resource)

    # Processes

    @staticmethod
    def describe_process(prefix: str, exit_code: int, stdout: Optional[str], stderr: Optional[str]) -> str:
        """Format a finished process as ``prefix exit=N stdout=.. stderr=..``."""
        out = (stdout or "").strip()
        err = (stderr or "").strip()
        description = f"{prefix} exit={exit_code}"
        if out:
            description += f" stdout={out}"
        if err:
            description += f" stderr={err}"
        return description

    def capture_process_result(self, prefix: str, process: subprocess.Popen) -> str:
        """Wait for a started process and describe its result."""
        try:
            stdout, stderr = process.communicate(timeout=settings.command_timeout_seconds)
        except subprocess.TimeoutExpired:
            process.kill()
            process.communicate()
            raise TimeoutError(f"Timed out while executing {prefix}")
        return self.describe_process(prefix, process.returncode, stdout, stderr)

    def capture_pipeline_result(self, prefix: str, processes: List[subprocess.Popen]) -> str:
        """Describe the last stage of a pipeline after every stage has exited."""
        description = self.capture_process_result(prefix, processes[-1])
        for index, process in enumerate(processes[:-1], start=1):
            try:
                process.wait(timeout=settings.command_timeout_seconds)
            except subprocess.TimeoutExpired:
                process.kill()
                raise TimeoutError(f"Timed out while waiting for pipeline stage {index}")
        return description

    # Threads

    def instantiate_threads(self) -> threading.Thread:
        """Build a fresh thread from the first handled resource."""
        resources = self.list_handled_resources()
        if not resources:
            raise ValueError("No thread classes configured")
        return self.instantiate_thread(resources[0])

    @staticmethod
    def instantiate_thread(class_path: str) -> threading.Thread:
        """Instantiate a ``threading.Thread`` subclass or wrap a callable class."""
        module_name, _, class_name = class_path.rpartition(".")
        target = getattr(importlib.import_module(module_name), class_name)
        if not isinstance(target, type):
            raise TypeError(f"Resource {class_path} is not a class")
        if issubclass(target, threading.Thread):
            thread = target()
        else:
            runnable = target()
            if not callable(runnable):
                raise TypeError(f"Resource {class_path} is not a Thread or callable class")
            thread = threading.Thread(target=runnable)
        thread.name = class_name
        return thread

    @staticmethod
    def start_thread_and_await(thread: threading.Thread, context: str = "starting configured threads") -> None:
        thread.start()
        thread.join(settings.thread_join_timeout_seconds)
        if thread.is_alive():
            raise TimeoutError(f"Timed out while {context}")

    @staticmethod
    def await_event(event: threading.Event, context: str) -> None:
        if not event.wait(settings.loopback_timeout_seconds):
            raise TimeoutError(f"Timed out while waiting for {context}")

    # Description helpers

    @staticmethod
    def describe_port(description: str, port: int) -> str:
        return f"{description}@{port}"

    @staticmethod
    def describe_result(description: str, result: str) -> str:
        return f"{description} -> {result}"
