"""
Minesweeper implementation.

Each cell is a record spread over parallel 10x10 arrays:
    mines     - bool, cell holds a mine
    revealed  - bool
    flagged   - bool
    board     - int8 adjacent-mine count (MINE for mine cells)

Mines are laid on the first reveal and never under the first revealed
cell.
"""

from __future__ import annotations

import copy
from collections import deque
from typing import Iterable, Optional, Tuple

import numpy as np

from game_arena.core.types import Position, Status
from game_arena.games.game_base import GameBase
from game_arena.games.game_rules import in_bounds, neighbours
from game_arena.games.game_state import GameState

GRID_SIZE = 10
MINE_COUNT = 15
MINE = -1

REVEAL_POINTS = 10


class Minesweeper(GameBase):
    """Single-player minesweeper, 10x10 with 15 mines."""

    __slots__ = ('state', 'winner', 'mines', 'revealed', 'flagged', 'laid', 'rng')

    def __init__(self, seed: Optional[int] = None):
        self.rng = np.random.default_rng(seed)
        self.reset()

    def reset(self) -> None:
        shape = (GRID_SIZE, GRID_SIZE)
        self.state = GameState(np.zeros(shape, dtype=np.int8), current_player=1)
        self.mines = np.zeros(shape, dtype=bool)
        self.revealed = np.zeros(shape, dtype=bool)
        self.flagged = np.zeros(shape, dtype=bool)
        self.laid = False
        self.winner = 0
        self._refresh()

    def game_id(self) -> str:
        return "minesweeper"

    def num_players(self) -> int:
        return 1

    def deep_clone(self) -> "Minesweeper":
        g = Minesweeper.__new__(Minesweeper)
        g.state = self.state.copy()
        g.mines = self.mines.copy()
        g.revealed = self.revealed.copy()
        g.flagged = self.flagged.copy()
        g.laid = self.laid
        g.winner = self.winner
        g.rng = copy.deepcopy(self.rng)
        return g

    # -- mine layout ----------------------------------------------------------

    def place_mines(self, cells: Iterable[Tuple[int, int]]) -> None:
        """Lay mines on exactly `cells` and recompute adjacency counts."""
        self.mines[:] = False
        for r, c in cells:
            self.mines[r, c] = True

        counts = np.zeros(self.mines.shape, dtype=np.int8)
        padded = np.pad(self.mines, 1).astype(np.int8)
        for dr in (-1, 0, 1):
            for dc in (-1, 0, 1):
                if dr or dc:
                    counts += padded[1 + dr:1 + dr + GRID_SIZE, 1 + dc:1 + dc + GRID_SIZE]
        counts[self.mines] = MINE
        self.state.board = counts
        self.laid = True

    def _lay_random_mines(self, exclude: Tuple[int, int]) -> None:
        candidates = [i for i in range(GRID_SIZE * GRID_SIZE) if i != exclude[0] * GRID_SIZE + exclude[1]]
        chosen = self.rng.choice(candidates, size=MINE_COUNT, replace=False)
        self.place_mines(divmod(int(i), GRID_SIZE) for i in chosen)

    # -- actions --------------------------------------------------------------

    def can_reveal(self, r: int, c: int) -> bool:
        if self.is_over() or not in_bounds(self.revealed, r, c):
            return False
        return not self.revealed[r, c] and not self.flagged[r, c]

    def valid_moves(self) -> np.ndarray:
        """Cells that may be revealed: hidden and unflagged."""
        if self.is_over():
            return np.zeros((0, 2), dtype=np.int64)
        return np.argwhere(~self.revealed & ~self.flagged)

    def reveal(self, r: int, c: int) -> bool:
        if not self.can_reveal(r, c):
            return False
        if not self.laid:
            self._lay_random_mines(exclude=(r, c))

        if self.mines[r, c]:
            self.revealed |= self.mines
            self.state.status = Status.LOSE
        else:
            self.flood_reveal(r, c)
            if self.revealed_count() == self.revealed.size - int(np.count_nonzero(self.mines)):
                self.state.status = Status.WIN
                self.winner = 1
        self._refresh()
        return True

    def flood_reveal(self, r: int, c: int) -> int:
        """
        Reveal (r, c) and, through zero-count cells, everything reachable.

        Uses an explicit queue; a revealed cell is never queued twice and
        flagged cells are never revealed. Returns the number of cells newly
        revealed.
        """
        board = self.state.board
        queue = deque([(r, c)])
        opened = 0
        while queue:
            cr, cc = queue.popleft()
            if self.revealed[cr, cc] or self.flagged[cr, cc]:
                continue
            self.revealed[cr, cc] = True
            opened += 1
            if board[cr, cc] == 0:
                queue.extend(
                    (nr, nc) for nr, nc in neighbours(board, cr, cc)
                    if not self.revealed[nr, nc] and not self.flagged[nr, nc]
                )
        return opened

    def toggle_flag(self, r: int, c: int) -> bool:
        if self.is_over() or not in_bounds(self.revealed, r, c) or self.revealed[r, c]:
            return False
        self.flagged[r, c] = not self.flagged[r, c]
        self._refresh()
        return True

    def handle(self, *action) -> bool:
        """`row, col` reveals; `"flag", row, col` toggles a flag."""
        flag = bool(action) and action[0] == "flag"
        try:
            r, c = (int(v) for v in (action[1:3] if flag else action[:2]))
        except (TypeError, ValueError):
            return False
        return self.toggle_flag(r, c) if flag else self.reveal(r, c)

    def revealed_count(self) -> int:
        return int(np.count_nonzero(self.revealed))

    def _refresh(self) -> None:
        self.state.score = self.revealed_count() * REVEAL_POINTS
        self.state.valid_moves = [Position(int(r), int(c)) for r, c in self.valid_moves()]

    def action_help(self) -> str:
        return "row,col - reveal a cell; flag,row,col - toggle a flag"

    def state_string(self) -> str:
        board = self.state.board
        lines = ["   " + " ".join(str(c) for c in range(GRID_SIZE))]
        for i in range(GRID_SIZE):
            cells = []
            for j in range(GRID_SIZE):
                if self.flagged[i, j] and not self.revealed[i, j]:
                    cells.append("F")
                elif not self.revealed[i, j]:
                    cells.append("#")
                elif self.mines[i, j]:
                    cells.append("*")
                else:
                    cells.append(str(int(board[i, j])) if board[i, j] else ".")
            lines.append(f"{i}  " + " ".join(cells))
        flags = int(np.count_nonzero(self.flagged))
        lines.append(f"\nMines: {MINE_COUNT}  Flags: {flags}  Score: {self.state.score}")
        return "\n".join(lines)
