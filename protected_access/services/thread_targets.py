"""
Work units started by the thread creation demonstrations.
"""
import logging
import threading

logger = logging.getLogger(__name__)


class ThreadToCreate(threading.Thread):
    """Thread subclass started directly."""

    def run(self):
        logger.info("Thread is running")


class RunnableToCreate:
    """Callable wrapped in a ``threading.Thread``."""

    def __call__(self):
        logger.info("Runnable is running")
