from __future__ import annotations

import asyncio
import os
import sys
import threading
import traceback
from typing import Any, Callable, Optional

import structlog


log = structlog.get_logger(__name__)

# Hard exit: a crash skips finally blocks and atexit hooks
_exit: Callable[[int], Any] = os._exit


def _error_fields(exc: Optional[BaseException]) -> dict:
    if exc is None:
        return {"message": None, "stack": None}
    return {
        "message": str(exc),
        "stack": "".join(traceback.format_exception(type(exc), exc, exc.__traceback__)),
    }


def _fatal(event: str, exc: Optional[BaseException], **extra) -> None:
    log.error(event, error=_error_fields(exc), **extra)
    sys.stdout.flush()
    _exit(1)


def _excepthook(exc_type, exc, tb) -> None:
    if issubclass(exc_type, KeyboardInterrupt):
        sys.__excepthook__(exc_type, exc, tb)
        return
    _fatal("Uncaught exception", exc)


def _thread_excepthook(args: threading.ExceptHookArgs) -> None:
    if args.exc_type is SystemExit:
        return
    thread_name = args.thread.name if args.thread is not None else None
    _fatal("Uncaught exception", args.exc_value, thread=thread_name)


def _loop_exception_handler(loop: asyncio.AbstractEventLoop, context: dict) -> None:
    # Fired for task exceptions nobody awaited, among others
    exc = context.get("exception")
    if exc is None:
        exc = RuntimeError(context.get("message", "unhandled event loop error"))
    _fatal("Unhandled rejection", exc)


def install_crash_handlers() -> None:
    """Log and terminate with exit code 1 on any error that escapes the app."""
    sys.excepthook = _excepthook
    threading.excepthook = _thread_excepthook


def install_loop_handler(loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
    (loop or asyncio.get_running_loop()).set_exception_handler(_loop_exception_handler)
