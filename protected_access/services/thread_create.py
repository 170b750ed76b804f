"""
Demonstrations for starting a thread through various concurrency APIs.
"""
import _thread
import asyncio
import functools
import heapq
import itertools
import queue
import threading
from concurrent.futures import ThreadPoolExecutor, wait, FIRST_EXCEPTION
from multiprocessing.pool import ThreadPool
from typing import List

from protected_access.config import settings
from protected_access.services.base import ProtectedResourceAccess

THREAD_TARGETS_MODULE = "protected_access.services.thread_targets"


class ThreadSystemCreateAccess(ProtectedResourceAccess):
    """Starts and joins a configured thread with one of twelve concurrency APIs.

    Every operation builds a fresh thread from the first handled resource,
    since a ``threading.Thread`` can only be started once. Joins are bounded
    by ``start_thread_and_await``, which raises the builtin ``TimeoutError``.
    """

    AMOUNT_OF_METHODS = 12

    SUCCESS_TEMPLATE = "Successfully triggered thread creation on {resource}{suffix}"
    FAILURE_TEMPLATE = "Failed to trigger thread creation on {resource} for operation id {id}"

    def list_handled_resources(self) -> List[str]:
        return [
            f"{THREAD_TARGETS_MODULE}.ThreadToCreate",
            f"{THREAD_TARGETS_MODULE}.RunnableToCreate",
        ]

    def operations(self):
        return (
            self.create_with_thread_start,
            self.create_with_executor_submit,
            self.create_with_executor_map,
            self.create_with_futures_wait,
            self.create_with_timer,
            self.create_with_thread_pool,
            self.create_with_to_thread,
            self.create_with_run_in_executor,
            self.create_with_start_new_thread,
            self.create_with_queue_worker,
            self.create_with_parallel_sort,
            self.create_with_parallel_prefix,
        )

    def _run_on_helper_thread(self, start, thread: threading.Thread, context: str) -> None:
        """Run start-and-await on a helper started by ``start`` and re-raise its error."""
        finished = threading.Event()
        errors = []

        def task():
            try:
                self.start_thread_and_await(thread, context)
            except Exception as e:
                errors.append(e)
            finally:
                finished.set()

        start(task)
        # The helper itself may wait a full join timeout for the target
        if not finished.wait(2 * settings.thread_join_timeout_seconds):
            raise TimeoutError(f"Timed out while waiting for {context}")
        if errors:
            raise errors[0]

    def create_with_thread_start(self, resource: str) -> str:
        thread = self.instantiate_threads()
        self.start_thread_and_await(thread, f"Thread.start for {thread.name}")
        return self.success(resource, f"Thread.start via {thread.name}")

    def create_with_executor_submit(self, resource: str) -> str:
        thread = self.instantiate_threads()
        with ThreadPoolExecutor(max_workers=1) as executor:
            future = executor.submit(
                self.start_thread_and_await, thread, f"ThreadPoolExecutor.submit for {thread.name}"
            )
            future.result()
        return self.success(resource, f"ThreadPoolExecutor.submit via {thread.name}")

    def create_with_executor_map(self, resource: str) -> str:
        thread = self.instantiate_threads()
        with ThreadPoolExecutor(max_workers=1) as executor:
            context = f"ThreadPoolExecutor.map for {thread.name}"
            list(executor.map(self.start_thread_and_await, [thread], [context]))
        return self.success(resource, f"ThreadPoolExecutor.map via {thread.name}")

    def create_with_futures_wait(self, resource: str) -> str:
        thread = self.instantiate_threads()
        with ThreadPoolExecutor(max_workers=1) as executor:
            futures = [executor.submit(self.start_thread_and_await, thread, f"futures.wait for {thread.name}")]
            # Must outlast the join timeout
            done, not_done = wait(futures, timeout=2 * settings.thread_join_timeout_seconds,
                                  return_when=FIRST_EXCEPTION)
            if not_done:
                raise TimeoutError(f"Timed out while waiting for futures.wait for {thread.name}")
            for future in done:
                future.result()
        return self.success(resource, f"concurrent.futures.wait via {thread.name}")

    def create_with_timer(self, resource: str) -> str:
        thread = self.instantiate_threads()

        def start(task):
            timer = threading.Timer(0, task)
            timer.daemon = True
            timer.start()

        self._run_on_helper_thread(start, thread, f"threading.Timer for {thread.name}")
        return self.success(resource, f"threading.Timer via {thread.name}")

    def create_with_thread_pool(self, resource: str) -> str:
        thread = self.instantiate_threads()
        with ThreadPool(processes=1) as pool:
            result = pool.apply_async(
                self.start_thread_and_await, (thread, f"ThreadPool.apply_async for {thread.name}")
            )
            result.get()
        return self.success(resource, f"ThreadPool.apply_async via {thread.name}")

    def create_with_to_thread(self, resource: str) -> str:
        thread = self.instantiate_threads()
        asyncio.run(asyncio.to_thread(
            self.start_thread_and_await, thread, f"asyncio.to_thread for {thread.name}"
        ))
        return self.success(resource, f"asyncio.to_thread via {thread.name}")

    def create_with_run_in_executor(self, resource: str) -> str:
        thread = self.instantiate_threads()

        async def run():
            loop = asyncio.get_running_loop()
            await loop.run_in_executor(None, functools.partial(
                self.start_thread_and_await, thread, f"loop.run_in_executor for {thread.name}"
            ))

        asyncio.run(run())
        return self.success(resource, f"loop.run_in_executor via {thread.name}")

    def create_with_start_new_thread(self, resource: str) -> str:
        thread = self.instantiate_threads()
        self._run_on_helper_thread(
            lambda task: _thread.start_new_thread(task, ()),
            thread,
            f"_thread.start_new_thread for {thread.name}",
        )
        return self.success(resource, f"_thread.start_new_thread via {thread.name}")

    def create_with_queue_worker(self, resource: str) -> str:
        thread = self.instantiate_threads()
        jobs = queue.Queue()

        def start(task):
            def worker():
                job = jobs.get()
                try:
                    job()
                finally:
                    jobs.task_done()

            threading.Thread(target=worker, name="queue-worker", daemon=True).start()
            jobs.put(task)

        self._run_on_helper_thread(start, thread, f"queue.Queue worker for {thread.name}")
        return self.success(resource, f"queue.Queue worker via {thread.name}")

    def create_with_parallel_sort(self, resource: str) -> str:
        thread = self.instantiate_threads()
        self.start_thread_and_await(thread, f"parallel sort pre-start for {thread.name}")
        with ThreadPoolExecutor(max_workers=2) as executor:
            chunks = list(executor.map(sorted, ([3], [1, 2])))
        values = list(heapq.merge(*chunks))
        return self.success(resource, f"ThreadPoolExecutor.map(sorted) -> {values} via {thread.name}")

    def create_with_parallel_prefix(self, resource: str) -> str:
        thread = self.instantiate_threads()
        self.start_thread_and_await(thread, f"parallel prefix pre-start for {thread.name}")
        with ThreadPoolExecutor(max_workers=1) as executor:
            values = executor.submit(lambda: list(itertools.accumulate([1, 2, 3]))).result()
        return self.success(resource, f"itertools.accumulate -> {values} via {thread.name}")
