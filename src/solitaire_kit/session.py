"""One sitting at a single variant.

:class:`PlaySession` turns player commands into engine calls the way a front
end would: every action is wrapped in an undo snapshot, and the session keeps
the two facts statistics are built from: whether the player moved at all and
whether the game was won.
"""

from __future__ import annotations

import logging
import random
from typing import List, Optional

from solitaire_kit.conf import Conf
from solitaire_kit.engine import Direction, Game, Pos
from solitaire_kit.errors import MoveError
from solitaire_kit.stats import GameStat, Stats

logger = logging.getLogger(__name__)


class PlaySession:
    def __init__(self, conf: Conf, stats: Optional[Stats] = None, rng: Optional[random.Random] = None):
        self.conf = conf
        self.stats = stats if stats is not None else Stats.load()
        self._rng = rng
        self.game = Game(conf, rng=rng)
        self.moved = False
        self.won = False
        self.marked = Pos.empty()
        self.hints: List[Pos] = []

    # ----- Marking & hints -----
    def mark(self, pos: Optional[Pos] = None):
        """Mark a card as the source of the next move; marking it again unmarks it."""
        pos = self.game.selected_loc() if pos is None else pos
        self.marked = Pos.empty() if pos == self.marked else pos

    def clear_mark(self):
        self.marked = Pos.empty()

    def hint_all(self) -> List[Pos]:
        self.hints = self.game.avail_list()
        return self.hints

    def hint_selected(self) -> List[Pos]:
        # destination piles as positions of their top cards
        self.hints = [Pos(idx, 0) for idx in self.game.dest_list_card(self.game.selected_loc())]
        return self.hints

    def clear_hints(self):
        self.hints = []

    # ----- Actions -----
    def navigate(self, direction: Direction, col: int = 0) -> bool:
        return self.game.move_selection(direction, col)

    def enter(self, pos: Optional[Pos] = None) -> bool:
        """Play the card at `pos` (the cursor by default).

        A marked card is moved onto the pile at `pos`; otherwise the card at
        `pos` goes to the first pile that takes it. Activating the deck deals.
        Returns True if any card moved.
        """
        game = self.game
        curr = game.selected_loc() if pos is None else pos
        game.take_snapshot()
        self.clear_hints()
        if game.is_deck_clicked(curr):
            self.moved = True
            self.clear_mark()
            changed = game.deal()
        else:
            changed = self._play(curr)

        if game.is_completed():
            game.clear_undo()
            self.won = True
        else:
            game.squash_snapshots()
        return changed

    def _play(self, curr: Pos) -> bool:
        game = self.game
        src, dst = (curr, None) if self.marked.is_empty() or self.marked == curr else (self.marked, curr)
        try:
            game.move_card(src, dst)
        except MoveError as e:
            logger.debug("move from %s rejected: %s", src, e)
            return False
        self.moved = True
        game.select(Pos(game.selected_loc().col, 0))
        self.clear_mark()
        return True

    def deal(self) -> bool:
        self.moved = True
        self.game.take_snapshot()
        self.clear_mark()
        dealt = self.game.deal()
        self.game.squash_snapshots()
        return dealt

    def undo(self):
        self.clear_mark()
        self.clear_hints()
        self.game.undo()

    # ----- Statistics -----
    def current_stat(self) -> GameStat:
        """Statistics of this variant including the game in progress."""
        st = self.stats.game_stat(self.conf.name)
        if self.moved:
            st.played += 1
        if self.won:
            st.won += 1
        return st

    def finish(self) -> bool:
        """Record the game in progress. Games without a single move are not counted."""
        if not self.moved:
            return False
        self.stats.update_stat(self.conf.name, self.won)
        self.stats.save()
        self.moved = False
        self.won = False
        return True

    def restart(self):
        """Record the current game and deal a new one of the same variant."""
        self.finish()
        self.game = Game(self.conf, rng=self._rng)
        self.clear_mark()
        self.clear_hints()
