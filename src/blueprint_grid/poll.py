"""Periodic refresh of the in-memory board from a remote store.

Each cycle fetches a full board snapshot and swaps it in wholesale. There
is no merge: whatever the remote holds wins over local edits the remote
has not seen yet.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Callable

from blueprint_grid.drag import DragRouter
from blueprint_grid.editor import EditorConfig
from blueprint_grid.model.types import Board
from blueprint_grid.store import BoardStore

logger = logging.getLogger(__name__)

Fetch = Callable[[], "Board | None"]


async def run_poll_cycle(store: BoardStore, fetch: Fetch, router: DragRouter | None = None) -> bool:
    """Fetch once and replace the store's board.

    fetch runs in a worker thread and may return None for "nothing new".
    With a router, the swap waits until any drag in progress settles.
    Returns True if a snapshot was applied or queued.
    """
    try:
        board = await asyncio.to_thread(fetch)
    except Exception as exc:
        logger.warning("board fetch failed: %s", exc)
        return False
    if board is None:
        return False
    if router is not None:
        router.defer(lambda: store.replace(board))
    else:
        store.replace(board)
    return True


async def poll_forever(
    store: BoardStore,
    fetch: Fetch,
    config: EditorConfig | None = None,
    router: DragRouter | None = None,
) -> None:
    """Run poll cycles every config.poll_interval seconds until cancelled."""
    interval = (config or EditorConfig()).poll_interval
    while True:
        await run_poll_cycle(store, fetch, router)
        await asyncio.sleep(interval)
