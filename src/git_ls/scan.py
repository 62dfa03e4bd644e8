"""Run one status probe per folder concurrently and collect the entries."""

import logging
import queue
import threading
import time
from collections.abc import Callable, Iterable
from concurrent.futures import FIRST_EXCEPTION, Future, ThreadPoolExecutor, wait
from functools import partial
from pathlib import Path

from .git_ls import Entry, FolderItem, list_folder, probe_folder, sort_entries

logger = logging.getLogger(__name__)

DEFAULT_WORKERS = 16
DEFAULT_CHANNEL_SIZE = 1000

Probe = Callable[[FolderItem], "Entry | None"]


class ScanCoordinator:
    """Fan folders out to probes on a thread pool and fan their entries in.

    Every probe puts at most one entry into a bounded queue. A waiter thread
    blocks until all probes finished and then enqueues None as end marker, while
    the calling thread keeps draining the queue, so producers never wait on
    a full queue forever regardless of its size. The first failing probe
    cancels the folders not started yet.
    """

    def __init__(
        self,
        probe: Probe,
        *,
        workers: int = DEFAULT_WORKERS,
        channel_size: int = DEFAULT_CHANNEL_SIZE,
    ) -> None:
        if workers < 1:
            raise ValueError(f"workers must be positive, got {workers}")
        self.probe = probe
        self.workers = workers
        self.channel_size = channel_size

    def _run_probe(
        self, item: FolderItem, results: "queue.Queue[Entry | None]"
    ) -> None:
        entry = self.probe(item)
        if entry is not None:
            results.put(entry)

    def scan(self, items: Iterable[FolderItem]) -> list[Entry]:
        """Probe all folders and return their entries, in no particular order."""
        items = list(items)
        results: queue.Queue[Entry | None] = queue.Queue(maxsize=self.channel_size)
        entries: list[Entry] = []
        started = time.monotonic()
        with ThreadPoolExecutor(
            max_workers=self.workers, thread_name_prefix="git-ls-probe"
        ) as pool:
            futures: list[Future[None]] = []
            for item in items:
                logger.debug("starting %s", item.path)
                futures.append(pool.submit(self._run_probe, item, results))
            logger.debug("all %d probes submitted", len(futures))

            def _wait_all() -> None:
                done, pending = wait(futures, return_when=FIRST_EXCEPTION)
                if pending and any(f.exception() is not None for f in done):
                    # a broken git aborts the run, skip the folders not started
                    for future in pending:
                        future.cancel()
                    wait(pending)
                results.put(None)

            waiter = threading.Thread(
                target=_wait_all, name="git-ls-waiter", daemon=True
            )
            waiter.start()
            while True:
                result = results.get()
                if result is None:
                    break
                entries.append(result)
            waiter.join()
        logger.debug(
            "finished waiting for %d probes in %.0f ms",
            len(futures),
            (time.monotonic() - started) * 1000,
        )
        for future in futures:
            # re-raise the first failed probe
            if not future.cancelled():
                future.result()
        return entries


def scan_folder(  # noqa: PLR0913
    basedir: Path,
    *,
    include_hidden: bool = False,
    dirty_only: bool = False,
    by_state: bool = False,
    workers: int = DEFAULT_WORKERS,
    timeout: float | None = None,
) -> list[Entry]:
    """List `basedir` with the git status of each subfolder, sorted."""
    files, folders = list_folder(
        basedir, include_hidden=include_hidden, dirty_only=dirty_only
    )
    coordinator = ScanCoordinator(
        partial(probe_folder, dirty_only=dirty_only, timeout=timeout),
        workers=workers,
        channel_size=max(DEFAULT_CHANNEL_SIZE, len(folders)),
    )
    entries = files + coordinator.scan(folders)
    return sort_entries(entries, by_state=by_state)
