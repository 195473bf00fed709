"""Directory-based mutex shared by every writer of one output directory."""

import asyncio
import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from dataclasses import dataclass
from pathlib import Path

from spec_reporter.errors import LockError, LockTimeoutError

log = logging.getLogger(__name__)

LOCK_DIR_NAME = ".lock"


@dataclass(frozen=True, kw_only=True)
class DirectoryLock:
    """Advisory lock held while a directory exists at ``path``.

    Creating a directory is atomic on the filesystems reports are written to,
    so the first writer to create it owns the lock and every other writer
    polls until it disappears. Writers only exclude each other if they all
    use the same lock path.
    """

    path: Path
    poll_interval: float = 0.2
    timeout: float | None = 60.0

    @classmethod
    def for_directory(
        cls,
        directory: Path,
        poll_interval: float = 0.2,
        timeout: float | None = 60.0,
    ) -> "DirectoryLock":
        """Create the lock guarding files in ``directory``."""
        return cls(
            path=directory / LOCK_DIR_NAME,
            poll_interval=poll_interval,
            timeout=timeout,
        )

    @property
    def held(self) -> bool:
        """Whether some writer currently holds the lock."""
        return self.path.is_dir()

    def try_acquire(self) -> bool:
        """Take the lock if it is free.

        Returns:
            True if the lock was taken, False if another writer holds it

        Raises:
            LockError: If the lock directory cannot be created for another
                reason (e.g. missing permissions)

        """
        try:
            self.path.mkdir()
        except FileExistsError:
            return False
        except OSError as e:
            raise LockError(f"Cannot create lock directory {self.path}: {e}") from e
        log.debug("Acquired lock %s", self.path)
        return True

    async def acquire(self) -> None:
        """Wait until the lock is taken.

        Raises:
            LockTimeoutError: If the lock is not free within ``timeout`` seconds
            LockError: If the lock directory cannot be created

        """
        loop = asyncio.get_event_loop()
        deadline = None if self.timeout is None else loop.time() + self.timeout

        while not self.try_acquire():
            if deadline is not None and loop.time() >= deadline:
                raise LockTimeoutError(
                    f"Lock {self.path} not released within {self.timeout} seconds"
                )
            log.debug(
                "Lock %s is held, retrying in %.2fs", self.path, self.poll_interval
            )
            await asyncio.sleep(self.poll_interval)

    def release(self) -> None:
        """Give the lock back."""
        try:
            self.path.rmdir()
        except FileNotFoundError:
            log.warning("Lock %s was already removed", self.path)
            return
        log.debug("Released lock %s", self.path)

    @asynccontextmanager
    async def hold(self) -> AsyncGenerator["DirectoryLock", None]:
        """Hold the lock for the duration of the block, releasing it on any exit."""
        await self.acquire()
        try:
            yield self
        finally:
            self.release()
