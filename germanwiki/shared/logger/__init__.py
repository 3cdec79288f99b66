from __future__ import annotations

import logging
import queue
import sys
import threading
from os import environ as env
from loguru import logger
from .interception import InterceptHandler

FORMAT = (
    "<le>{time:HH:mm:ss.SSS}</le>|<ly>{extra[app]}</ly> |<level>{level:<7}</level>|"
    "<cyan>{name}</cyan>(<cyan>{function}</cyan>:<cyan>{line}</cyan>) <level>{message}</level>"
)


class AsyncLogEmitter(object):
    """Writes formatted records to stderr from a background thread."""

    def __init__(self, name: str) -> None:
        self.name = name
        self.intercept_handler = InterceptHandler()
        self.queue: queue.Queue[str] = queue.Queue()
        self.shutdown_event = threading.Event()
        self.thread = threading.Thread(
            target=self.runner,
            daemon=True,
            name=f"{name}-logger",
        )
        self.thread.start()

    def __repr__(self) -> str:
        return f"<AsyncLogEmitter name={self.name} pending={self.queue.qsize()}>"

    def runner(self) -> None:
        while not self.shutdown_event.is_set():
            try:
                msg = self.queue.get(timeout=0.2)
            except queue.Empty:
                continue

            sys.__stderr__.buffer.write(msg.encode("UTF-8"))
            sys.__stderr__.buffer.flush()
            self.queue.task_done()

    def emit(self, msg) -> None:
        self.queue.put_nowait(msg)

    def close(self) -> None:
        """Flush what is queued, then stop the writer thread."""

        self.queue.join()
        self.shutdown_event.set()
        self.thread.join(timeout=1)


def build_logger(name: str = "germanwiki") -> AsyncLogEmitter:
    level = "DEBUG" if env.get("LOCAL") else "INFO"
    emitter = AsyncLogEmitter(name)
    logger.configure(
        handlers=[
            {
                "sink": emitter.emit,
                "colorize": True,
                "backtrace": True,
                "enqueue": False,
                "diagnose": level == "DEBUG",
                "level": level,
                "catch": True,
                "format": FORMAT,
            },
        ],
        extra={"app": name},
    )
    logger.level(name="DEBUG", color="<magenta>")

    # uvicorn and aiohttp log through the standard library
    logging.basicConfig(handlers=[emitter.intercept_handler], level=level, force=True)
    logging.captureWarnings(True)
    logger.bind(app=name).debug("Logging to stderr at {} via {!r}", level, emitter)
    return emitter
