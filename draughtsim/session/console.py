"""
Console - Plain-text collaborator for playing in a terminal.

Board legend (two characters per cell):
    .   light square        _   empty dark square
    r   red piece           R   crowned red piece
    b   blue piece          B   crowned blue piece
    *   (second char) highlighted cell

Input is line based: "x y" (or "x,y") selects a point, "q" quits.
End of input closes the selection channel. A regular file on stdin
is replayed one selection at a time.

console_session() owns the terminal for its lifetime: it switches to
the alternate screen (TTY only) and registers the stdin reader, and
undoes both on every exit path.
"""

from __future__ import annotations
from contextlib import asynccontextmanager
from typing import AsyncIterator, TextIO
import asyncio
import codecs
import logging
import os
import sys

from ..engine_core.state import Board, Cell, Point, Side, is_dark
from .interactive import DEFAULT_CAPACITY, QueueCollaborator, SelectionChannel

logger = logging.getLogger(__name__)

ENTER_ALT_SCREEN = "\x1b[?1049h"
LEAVE_ALT_SCREEN = "\x1b[?1049l"
CLEAR_SCREEN = "\x1b[2J\x1b[H"

QUIT_WORDS = {"q", "quit", "exit"}


def cell_symbol(x: int, y: int, cell: Cell) -> str:
    if cell.piece is not None:
        char = "r" if cell.piece.side is Side.RED else "b"
        if cell.piece.crowned:
            char = char.upper()
    else:
        char = "_" if is_dark(x, y) else "."
    return char + ("*" if cell.highlighted else " ")


def render_text(board: Board) -> str:
    """Board as text, x across and y down, with axis labels."""
    lines = ["   " + "".join(f"{x % 10} " for x in range(board.width))]
    for y in range(board.height):
        row = "".join(cell_symbol(x, y, board.cells[x][y]) for x in range(board.width))
        lines.append(f"{y:>2} {row}")
    lines.append(
        f"red: {board.count(Side.RED)}  blue: {board.count(Side.BLUE)}"
        "   enter 'x y' to select, 'q' to quit"
    )
    return "\n".join(lines)


def parse_selection(line: str) -> Point | None:
    parts = line.replace(",", " ").split()
    if len(parts) != 2:
        return None
    try:
        return Point(int(parts[0]), int(parts[1]))
    except ValueError:
        return None


class ConsoleCollaborator(QueueCollaborator):
    """Draws to a text stream and takes selections typed as lines."""

    def __init__(
        self,
        channel: SelectionChannel,
        output: TextIO,
        exit_requested: asyncio.Event,
        clear: bool = False,
    ):
        super().__init__(channel, renderer=self._draw)
        self.output = output
        self.exit_requested = exit_requested
        self.clear = clear

    async def _draw(self, board: Board) -> None:
        if self.clear:
            self.output.write(CLEAR_SCREEN)
        self.output.write(render_text(board) + "\n")
        self.output.flush()

    def feed_line(self, line: str) -> None:
        """Handle one line of player input."""
        point = self._interpret(line)
        if point is not None:
            self.channel.offer(point)

    async def replay_line(self, line: str) -> None:
        """Like feed_line, but waits for room in the channel."""
        point = self._interpret(line)
        if point is not None:
            await self.channel.put(point)

    def _interpret(self, line: str) -> Point | None:
        text = line.strip().lower()
        if not text:
            return None
        if text in QUIT_WORDS:
            self.exit_requested.set()
            self.channel.close()
            return None
        point = parse_selection(text)
        if point is None:
            logger.debug("Ignoring input %r", line)
        return point


class LineReader:
    """
    Producer side of the channel: raw stdin bytes -> lines.

    Terminals and pipes are watched with loop.add_reader and every
    line is fed as soon as it arrives. Regular files cannot be polled,
    so a file on stdin is replayed by a task that waits for room in
    the channel before each selection.
    """

    CHUNK_SIZE = 4096

    def __init__(self, fd: int, collaborator: ConsoleCollaborator, loop: asyncio.AbstractEventLoop):
        self.fd = fd
        self.collaborator = collaborator
        self.loop = loop
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._buffer = ""
        self._active = False
        self._replay_task: asyncio.Task | None = None

    def start(self) -> None:
        try:
            self.loop.add_reader(self.fd, self._on_readable)
        except PermissionError:
            logger.debug("fd %d cannot be polled, replaying it", self.fd)
            self._replay_task = self.loop.create_task(self._replay())
            return
        self._active = True

    def stop(self) -> None:
        if self._active:
            self.loop.remove_reader(self.fd)
            self._active = False
        if self._replay_task is not None:
            self._replay_task.cancel()

    async def wait_stopped(self) -> None:
        """Wait for a cancelled replay task to unwind."""
        task = self._replay_task
        if task is None:
            return
        await asyncio.wait([task])
        if not task.cancelled() and task.exception() is not None:
            logger.error("Replaying input failed", exc_info=task.exception())

    def decode_lines(self, data: bytes) -> list[str]:
        """
        Complete lines in the input so far. Empty data means end of
        input and flushes a trailing partial line.
        """
        final = not data
        self._buffer += self._decoder.decode(data, final)
        *lines, self._buffer = self._buffer.split("\n")
        if final and self._buffer:
            lines.append(self._buffer)
            self._buffer = ""
        return lines

    def _on_readable(self) -> None:
        data = os.read(self.fd, self.CHUNK_SIZE)
        for line in self.decode_lines(data):
            self.collaborator.feed_line(line)
        if not data:
            self.stop()
            self.collaborator.channel.close()

    async def _replay(self) -> None:
        channel = self.collaborator.channel
        while not channel.closed:
            data = os.read(self.fd, self.CHUNK_SIZE)
            for line in self.decode_lines(data):
                await self.collaborator.replay_line(line)
                if channel.closed:
                    return
            if not data:
                channel.close()


@asynccontextmanager
async def console_session(
    input_stream: TextIO | None = None,
    output: TextIO | None = None,
    capacity: int = DEFAULT_CAPACITY,
) -> AsyncIterator[ConsoleCollaborator]:
    """
    Own the terminal for one interactive game.

    Usage:
        async with console_session() as console:
            game = Game(8, 8, console, exit_requested=console.exit_requested)
            await game.play(ActorType.human(), ActorType.random())
    """
    input_stream = input_stream or sys.stdin
    output = output or sys.stdout
    use_screen = output.isatty()

    collaborator = ConsoleCollaborator(
        SelectionChannel(capacity),
        output,
        asyncio.Event(),
        clear=use_screen,
    )
    reader = LineReader(input_stream.fileno(), collaborator, asyncio.get_running_loop())

    if use_screen:
        output.write(ENTER_ALT_SCREEN)
        output.flush()
    try:
        reader.start()
        yield collaborator
    finally:
        reader.stop()
        collaborator.channel.close()
        await reader.wait_stopped()
        if use_screen:
            output.write(LEAVE_ALT_SCREEN)
            output.flush()
