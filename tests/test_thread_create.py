"""
Tests for starting threads through the concurrency APIs.
"""
import logging
import time

import pytest

from protected_access.config import settings
from protected_access.services.thread_create import ThreadSystemCreateAccess, THREAD_TARGETS_MODULE
from protected_access.services.thread_targets import ThreadToCreate

THREAD_RESOURCE = f"{THREAD_TARGETS_MODULE}.ThreadToCreate"


class RunnableFirstAccess(ThreadSystemCreateAccess):
    def list_handled_resources(self):
        return list(reversed(super().list_handled_resources()))


class TestThreadCreate:
    @pytest.mark.parametrize("method_id", range(1, ThreadSystemCreateAccess.amount_of_methods() + 1))
    def test_starts_thread(self, method_id, caplog):
        caplog.set_level(logging.INFO, logger=THREAD_TARGETS_MODULE)
        message = ThreadSystemCreateAccess().access_resource_by_id(method_id)
        assert message.startswith(f"Successfully triggered thread creation on {THREAD_RESOURCE} Result: ")
        assert message.endswith("via ThreadToCreate")
        assert "Thread is running" in caplog.messages

    def test_parallel_sort_result(self):
        message = ThreadSystemCreateAccess().access_resource_by_id(11)
        assert "ThreadPoolExecutor.map(sorted) -> [1, 2, 3]" in message

    def test_parallel_prefix_result(self):
        message = ThreadSystemCreateAccess().access_resource_by_id(12)
        assert "itertools.accumulate -> [1, 3, 6]" in message

    @pytest.mark.parametrize("method_id", [1, 5, 9])
    def test_runnable_resource(self, method_id, caplog):
        caplog.set_level(logging.INFO, logger=THREAD_TARGETS_MODULE)
        message = RunnableFirstAccess().access_resource_by_id(method_id)
        assert message.endswith("via RunnableToCreate")
        assert "Runnable is running" in caplog.messages

    def test_no_resources_raises(self, monkeypatch):
        monkeypatch.setattr(ThreadSystemCreateAccess, "list_handled_resources", lambda self: [])
        with pytest.raises(ValueError):
            ThreadSystemCreateAccess().instantiate_threads()

    @pytest.mark.parametrize("method_id", [0, 13])
    def test_unsupported_id(self, method_id):
        message = ThreadSystemCreateAccess().access_resource_by_id(method_id)
        assert message == f"Failed to trigger thread creation on {THREAD_RESOURCE} for operation id {method_id}"


class TestJoinTimeout:
    @pytest.mark.parametrize("method_id", range(1, ThreadSystemCreateAccess.amount_of_methods() + 1))
    def test_thread_outliving_join_raises_builtin_timeout(self, method_id, monkeypatch):
        """Every concurrency API reports an overrunning thread the same way"""
        monkeypatch.setattr(settings, "thread_join_timeout_seconds", 0.2)
        monkeypatch.setattr(ThreadToCreate, "run", lambda self: time.sleep(0.6))
        with pytest.raises(TimeoutError) as excinfo:
            ThreadSystemCreateAccess().access_resource_by_id(method_id)
        assert type(excinfo.value) is TimeoutError
