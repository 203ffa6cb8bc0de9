"""Application orchestration entry points."""

from __future__ import annotations

import asyncio
from contextlib import aclosing
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from replygraph.adapters.jetstream import JetstreamSubscriber
from replygraph.domain.graph import GraphStore, pick_color, reconcile

if TYPE_CHECKING:
    from replygraph.domain.graph import ColorPicker, GraphSnapshot

DEFAULT_PROGRESS_EVERY = 100

log = getLogger(__name__)


@dataclass(slots=True)
class StreamResult:
    """Outcome of one streaming session."""

    reconciled: int
    snapshot: GraphSnapshot


def stream_reply_graph(
    *,
    subscriber: JetstreamSubscriber | None = None,
    store: GraphStore | None = None,
    color_picker: ColorPicker = pick_color,
    max_events: int | None = None,
    duration_seconds: float | None = None,
    progress_every: int = DEFAULT_PROGRESS_EVERY,
) -> StreamResult:
    """Consume Jetstream post events into ``store`` until a stop condition is met.

    The store always holds a consistent snapshot, including when the session is
    interrupted, so callers can keep reading it after this returns or raises.
    """

    effective_subscriber = subscriber or JetstreamSubscriber()
    effective_store = store if store is not None else GraphStore()
    log.info(
        "Starting reply graph stream: max_events=%s, duration=%s",
        max_events,
        duration_seconds,
    )

    reconciled = asyncio.run(
        _consume(
            effective_subscriber,
            effective_store,
            color_picker=color_picker,
            max_events=max_events,
            duration_seconds=duration_seconds,
            progress_every=progress_every,
        )
    )

    snapshot = effective_store.get()
    log.info(
        f"Finished reply graph stream: reconciled={reconciled}, nodes={len(snapshot.nodes)}, "
        f"links={len(snapshot.links)}, dropped={effective_subscriber.dropped}"
    )
    return StreamResult(reconciled=reconciled, snapshot=snapshot)


async def _consume(
    subscriber: JetstreamSubscriber,
    store: GraphStore,
    *,
    color_picker: ColorPicker,
    max_events: int | None,
    duration_seconds: float | None,
    progress_every: int,
) -> int:
    reconciled = 0
    if max_events is not None and max_events <= 0:
        return reconciled

    try:
        async with asyncio.timeout(duration_seconds), aclosing(subscriber.events()) as events:
            async for event in events:
                store.replace(reconcile(store.get(), event, pick_color=color_picker))
                reconciled += 1
                if progress_every > 0 and reconciled % progress_every == 0:
                    _log_progress(reconciled, store.get())
                if max_events is not None and reconciled >= max_events:
                    subscriber.stop()
                    break
    except TimeoutError:
        log.info("Stream duration of %ss elapsed", duration_seconds)
        subscriber.stop()
    return reconciled


def _log_progress(reconciled: int, snapshot: GraphSnapshot) -> None:
    log.info(
        "Reconciled %s events: %s nodes, %s links",
        reconciled,
        len(snapshot.nodes),
        len(snapshot.links),
    )
