"""
Interactive Collaborator - The contract between the engine and a player UI.

The engine only ever calls two operations:
- render(board): show pieces and highlighted cells
- await_next_selection(board): wait for the player to pick an in-bounds point

Input events arrive through a SelectionChannel:
- Single producer (the input source) calls offer()
- Single consumer (whichever task awaits a selection) calls receive()
- Bounded: when the buffer is full new inputs are DROPPED, the producer
  never blocks (put() is the waiting variant for replayed input)
- close() ends the channel; a pending or later receive() raises
  ChannelClosed once buffered inputs are used up
"""

from __future__ import annotations
from typing import Awaitable, Callable, Protocol, runtime_checkable
import asyncio
import logging

from ..engine_core.errors import ChannelClosed
from ..engine_core.state import Board, Point

logger = logging.getLogger(__name__)

DEFAULT_CAPACITY = 8

_CLOSED = object()


@runtime_checkable
class InteractiveCollaborator(Protocol):
    async def render(self, board: Board) -> None: ...
    async def await_next_selection(self, board: Board) -> Point: ...


class SelectionChannel:
    """Bounded, lossy, single-producer/single-consumer queue of points."""

    def __init__(self, capacity: int = DEFAULT_CAPACITY):
        self._queue: asyncio.Queue = asyncio.Queue(maxsize=capacity)
        self._closed = False
        self.dropped = 0

    @property
    def closed(self) -> bool:
        return self._closed

    def offer(self, point: Point) -> bool:
        """Queue a point. Returns False if it was dropped."""
        if self._closed:
            return False
        try:
            self._queue.put_nowait(point)
        except asyncio.QueueFull:
            self.dropped += 1
            logger.debug("Selection buffer full, dropped %s", point)
            return False
        return True

    async def put(self, point: Point) -> bool:
        """
        Queue a point, waiting for room instead of dropping it.

        For producers that can be paused, such as a file replayed on
        stdin. Returns False if the channel is closed.
        """
        if self._closed:
            return False
        await self._queue.put(point)
        return True

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        try:
            self._queue.put_nowait(_CLOSED)
        except asyncio.QueueFull:
            # Consumer drains the buffer and then sees the closed flag
            pass

    async def receive(self) -> Point:
        if self._closed and self._queue.empty():
            raise ChannelClosed("Selection channel closed")
        item = await self._queue.get()
        if item is _CLOSED:
            raise ChannelClosed("Selection channel closed")
        return item


class QueueCollaborator:
    """
    Collaborator fed from a SelectionChannel.

    The renderer is any async callable taking the board; by default
    nothing is drawn. Out-of-bounds selections are skipped here so the
    engine only ever sees points on the board.
    """

    def __init__(
        self,
        channel: SelectionChannel | None = None,
        renderer: Callable[[Board], Awaitable[None]] | None = None,
    ):
        self.channel = channel or SelectionChannel()
        self._renderer = renderer
        self.renders = 0

    async def render(self, board: Board) -> None:
        self.renders += 1
        if self._renderer is not None:
            await self._renderer(board)

    async def await_next_selection(self, board: Board) -> Point:
        while True:
            point = await self.channel.receive()
            if board.in_bounds(point):
                return point
            logger.debug("Ignoring out-of-bounds selection %s", point)
