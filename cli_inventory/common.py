"""
Common utilities shared across cli_inventory modules.
"""

from __future__ import annotations

import asyncio
import os
import sys
from typing import Awaitable, Iterable, TypeVar

T = TypeVar("T")

WINDOWS_PLATFORMS = ("win32", "cygwin")


def is_windows(platform: str | None = None) -> bool:
    """
    Check whether a platform identifier denotes Windows.

    Args:
        platform: sys.platform-style identifier (default: current platform)

    Returns:
        True for win32/cygwin, False otherwise.
    """
    return (platform or sys.platform) in WINDOWS_PLATFORMS


def is_linux(platform: str | None = None) -> bool:
    """Check whether a platform identifier denotes Linux."""
    return (platform or sys.platform).startswith("linux")


def normalize_path(path: str) -> str:
    """
    Canonicalize a path for the host filesystem.

    Resolves '.' and '..' segments, unifies separators and makes the
    path absolute. Symlinks are left untouched.
    """
    return os.path.normpath(os.path.abspath(path))


async def gather_bounded(aws: Iterable[Awaitable[T]], limit: int) -> list[T]:
    """
    Await several awaitables concurrently with at most `limit` in flight.

    Results come back in input order, after every awaitable completed.
    """
    semaphore = asyncio.Semaphore(max(1, limit))

    async def _run(aw: Awaitable[T]) -> T:
        async with semaphore:
            return await aw

    return list(await asyncio.gather(*(_run(aw) for aw in aws)))


def vlog(msg: str, verbose: bool = False) -> None:
    """
    Log a verbose trace message.

    Emits at INFO level when verbose is set or CLI_INVENTORY_DEBUG=1,
    otherwise at DEBUG so that a --log-file still captures it.

    Args:
        msg: Message to log
        verbose: Whether verbose mode is enabled
    """
    from .logging_config import get_logger

    logger = get_logger()
    if verbose or os.environ.get("CLI_INVENTORY_DEBUG", "0") == "1":
        logger.info(msg)
    else:
        logger.debug(msg)
