# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Group roster: selection state, background fetches, and the object list.

Each configured group moves through UNSELECTED → LOADING → SELECTED.
Fetches run on a ThreadPoolExecutor and hand their results to the
foreground through a queue; only poll() (on the foreground thread)
applies them. Every fetch task carries a cancellation token, and a
result is applied only if its task is still the entry's current task
and was never cancelled.

Cache and network access go through injected collaborators
(ElementCache, CatalogSource), so the pipeline runs without a network.
"""
import logging
import queue
import threading
import time
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, Sequence

from satwatch.adapters.element_cache import ElementCache
from satwatch.domain.elements import OrbitalElementSet, parse_omm_record
from satwatch.domain.groups import GroupEntry, GroupSpec, GroupState
from satwatch.domain.propagation import TrackedObject, materialize_objects
from satwatch.ports.catalog import CatalogSource
from satwatch.ports.propagation import Propagator


_log = logging.getLogger(__name__)

DEFAULT_FETCH_WORKERS = 4


class FetchCancelled(Exception):
    """Raised inside a worker when its task was cancelled mid-flight."""


class FetchTask:
    """
    Handle for one background fetch.

    cancel() is idempotent. Once cancelled, the task never posts a result
    and any result already queued is discarded by the roster.
    """

    def __init__(self, label: str) -> None:
        self.label = label
        self.future: Future | None = None
        self._cancel_event = threading.Event()

    @property
    def cancelled(self) -> bool:
        return self._cancel_event.is_set()

    def cancel(self) -> None:
        self._cancel_event.set()
        if self.future is not None:
            self.future.cancel()

    def raise_if_cancelled(self) -> None:
        if self._cancel_event.is_set():
            raise FetchCancelled(self.label)

    def __repr__(self) -> str:
        state = "cancelled" if self.cancelled else "active"
        return f"FetchTask({self.label!r}, {state})"


@dataclass(frozen=True)
class FetchOutcome:
    """Result of a fetch as applied by GroupRoster.poll()."""
    label: str
    ok: bool
    object_count: int = 0
    error: str | None = None


@dataclass(frozen=True)
class _FetchResult:
    task: FetchTask
    elements: list[OrbitalElementSet] | None
    error: str | None


def _parse_records(label: str, records: Sequence[dict]) -> list[OrbitalElementSet]:
    elements: list[OrbitalElementSet] = []
    for record in records:
        try:
            elements.append(parse_omm_record(record))
        except (KeyError, ValueError, TypeError) as e:
            _log.warning(
                "Skipping %s record %s: %s",
                label, record.get('OBJECT_NAME', '?'), e,
            )
    return elements


def fetch_elements(
    spec: GroupSpec,
    source: CatalogSource,
    cache: ElementCache,
    task: FetchTask | None = None,
    stale_fallback: bool = False,
) -> list[OrbitalElementSet]:
    """
    Element sets for one group, from the cache when fresh, else the network.

    A successful network fetch is written back to the cache. A cache write
    failure is logged and does not fail the fetch.

    Args:
        spec: Group to fetch.
        source: Remote catalog.
        cache: Element cache.
        task: Optional task whose cancellation aborts the fetch before the
            network call.
        stale_fallback: On network failure, fall back to an expired cache
            record when one can be read.

    Returns:
        List of OrbitalElementSet.

    Raises:
        FetchCancelled: If ``task`` was cancelled before the network call.
        ConnectionError: On network failure.
        ValueError: On an undecodable response, or one whose records all
            fail to parse.
    """
    cached = cache.load_fresh(spec.label)
    if cached is not None:
        return cached

    if task is not None:
        task.raise_if_cancelled()

    kind, value = spec.query
    try:
        if kind == "designator":
            records = source.fetch_by_designator(value)
        else:
            records = source.fetch_collection(value)
        elements = _parse_records(spec.label, records)
        if records and not elements:
            raise ValueError(f"No parseable records for {spec.label}")
    except (ConnectionError, ValueError) as e:
        if stale_fallback:
            stale = cache.load(spec.label)
            if stale is not None:
                _log.warning(
                    "Fetching %s failed (%s); using expired cache record",
                    spec.label, e,
                )
                return stale
        raise

    try:
        cache.store(spec.label, elements)
    except OSError as e:
        _log.warning("Could not write cache record for %s: %s", spec.label, e)

    return elements


class GroupRoster:
    """
    Roster of tracking groups and the objects of the selected ones.

    Args:
        specs: Configured groups, in display order.
        source: Remote catalog port.
        cache: Element cache; its lifetime also sets the refresh period.
        propagator: Propagator port used to materialize objects.
        executor: Executor for fetch tasks. If None, the roster creates
            (and on shutdown() closes) its own ThreadPoolExecutor.
        clock: Monotonic clock in seconds, used for periodic refresh.
        stale_fallback: Use expired cache records when the network fails.
    """

    def __init__(
        self,
        specs: Sequence[GroupSpec],
        source: CatalogSource,
        cache: ElementCache,
        propagator: Propagator,
        executor: Executor | None = None,
        clock: Callable[[], float] = time.monotonic,
        stale_fallback: bool = False,
    ) -> None:
        self._entries = [GroupEntry(spec=spec) for spec in specs]
        self._source = source
        self._cache = cache
        self._propagator = propagator
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(
            max_workers=DEFAULT_FETCH_WORKERS, thread_name_prefix="satwatch-fetch",
        )
        self._clock = clock
        self._stale_fallback = stale_fallback
        self._results: queue.Queue[_FetchResult] = queue.Queue()
        self._objects: list[TrackedObject] = []
        self._selected_index: int | None = None
        self._hovered_index: int | None = None
        self._last_refresh = clock()

    # ── Roster ──

    @property
    def entries(self) -> list[GroupEntry]:
        return self._entries

    @property
    def objects(self) -> list[TrackedObject]:
        return self._objects

    @property
    def is_loading(self) -> bool:
        return any(entry.loading for entry in self._entries)

    def index_of(self, label: str) -> int:
        for index, entry in enumerate(self._entries):
            if entry.label == label:
                return index
        raise KeyError(f"No group labelled {label!r}")

    def _rebuild(self) -> None:
        self._objects = [
            obj
            for entry in self._entries
            if entry.selected
            for obj in entry.objects
        ]
        self._selected_index = None
        self._hovered_index = None

    # ── Weak indices into the roster ──

    def _check_index(self, index: int | None) -> int | None:
        if index is not None and not 0 <= index < len(self._objects):
            raise IndexError(
                f"Object index {index} out of range for {len(self._objects)} objects"
            )
        return index

    @property
    def selected_index(self) -> int | None:
        return self._selected_index

    @selected_index.setter
    def selected_index(self, index: int | None) -> None:
        self._selected_index = self._check_index(index)

    @property
    def hovered_index(self) -> int | None:
        return self._hovered_index

    @hovered_index.setter
    def hovered_index(self, index: int | None) -> None:
        self._hovered_index = self._check_index(index)

    @property
    def selected_object(self) -> TrackedObject | None:
        if self._selected_index is None:
            return None
        return self._objects[self._selected_index]

    @property
    def hovered_object(self) -> TrackedObject | None:
        if self._hovered_index is None:
            return None
        return self._objects[self._hovered_index]

    # ── Selection state machine ──

    def select(self, index: int) -> None:
        """
        Select a group.

        A fresh cache record is materialized immediately; otherwise a fetch
        task is started and the entry becomes LOADING. Selecting a LOADING
        or SELECTED entry does nothing.
        """
        entry = self._entries[index]
        if entry.state is not GroupState.UNSELECTED:
            return

        cached = self._cache.load_fresh(entry.label)
        if cached is not None:
            entry.objects = materialize_objects(cached, self._propagator)
            entry.state = GroupState.SELECTED
            entry.last_error = None
            _log.info("Loaded %s from cache (%d objects)", entry.label, len(entry.objects))
            self._rebuild()
            return

        entry.state = GroupState.LOADING
        self._start_task(entry)

    def deselect(self, index: int) -> None:
        """Deselect a group, cancelling its fetch. No-op if UNSELECTED."""
        entry = self._entries[index]
        if entry.state is GroupState.UNSELECTED:
            return

        self._cancel_task(entry)
        entry.objects = []
        entry.state = GroupState.UNSELECTED
        self._rebuild()

    def toggle(self, index: int) -> None:
        if self._entries[index].state is GroupState.UNSELECTED:
            self.select(index)
        else:
            self.deselect(index)

    # ── Fetch tasks ──

    def _cancel_task(self, entry: GroupEntry) -> None:
        if entry.task is not None:
            entry.task.cancel()
            entry.task = None

    def _start_task(self, entry: GroupEntry) -> FetchTask:
        self._cancel_task(entry)
        task = FetchTask(entry.label)
        entry.task = task
        task.future = self._executor.submit(self._run_task, entry.spec, task)
        return task

    def _run_task(self, spec: GroupSpec, task: FetchTask) -> None:
        """Worker body. Never touches entry state; posts to the queue only."""
        try:
            elements = fetch_elements(
                spec, self._source, self._cache,
                task=task, stale_fallback=self._stale_fallback,
            )
        except FetchCancelled:
            _log.debug("Fetch for %s cancelled", spec.label)
            return
        except Exception as e:
            # Reported to the foreground as a failed fetch
            if not task.cancelled:
                self._results.put(_FetchResult(task, None, str(e) or type(e).__name__))
            return

        if not task.cancelled:
            self._results.put(_FetchResult(task, elements, None))

    def poll(self) -> list[FetchOutcome]:
        """
        Apply finished fetches. Call from the foreground thread.

        Returns:
            One FetchOutcome per applied result; results of cancelled or
            superseded tasks are discarded without an outcome.
        """
        outcomes: list[FetchOutcome] = []
        changed = False

        while True:
            try:
                result = self._results.get_nowait()
            except queue.Empty:
                break

            entry = next(
                (e for e in self._entries if e.task is result.task), None,
            )
            if entry is None or result.task.cancelled:
                _log.debug("Discarding stale result for %s", result.task.label)
                continue

            entry.task = None
            changed = True

            if result.error is None:
                entry.objects = materialize_objects(result.elements, self._propagator)
                entry.state = GroupState.SELECTED
                entry.last_error = None
                outcomes.append(FetchOutcome(
                    label=entry.label, ok=True, object_count=len(entry.objects),
                ))
            else:
                _log.warning("Fetching %s failed: %s", entry.label, result.error)
                entry.objects = []
                entry.state = GroupState.UNSELECTED
                entry.last_error = result.error
                outcomes.append(FetchOutcome(
                    label=entry.label, ok=False, error=result.error,
                ))

        if changed:
            self._rebuild()
        return outcomes

    def refresh(self) -> None:
        """Re-fetch every SELECTED entry; they keep their objects meanwhile."""
        self._last_refresh = self._clock()
        for entry in self._entries:
            if entry.state is GroupState.SELECTED:
                self._start_task(entry)

    def tick(self) -> bool:
        """
        Refresh if a cache lifetime has elapsed since the last refresh.

        Returns:
            True if a refresh was started.
        """
        elapsed = self._clock() - self._last_refresh
        if elapsed < self._cache.lifetime.total_seconds():
            return False
        self.refresh()
        return True

    def wait(self, timeout: float | None = None) -> list[FetchOutcome]:
        """Block until no entry is LOADING (or timeout), then poll()."""
        deadline = None if timeout is None else self._clock() + timeout
        outcomes: list[FetchOutcome] = []
        while True:
            outcomes.extend(self.poll())
            pending = [
                entry.task for entry in self._entries if entry.task is not None
            ]
            if not pending:
                return outcomes
            if deadline is not None and self._clock() >= deadline:
                return outcomes
            try:
                result = self._results.get(timeout=0.05)
            except queue.Empty:
                continue
            self._results.put(result)

    def shutdown(self) -> None:
        """Cancel every task and close an executor the roster created."""
        for entry in self._entries:
            self._cancel_task(entry)
            if entry.state is GroupState.LOADING:
                entry.state = GroupState.UNSELECTED
        if self._owns_executor:
            self._executor.shutdown(wait=False, cancel_futures=True)
