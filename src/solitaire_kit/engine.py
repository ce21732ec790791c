"""Generic solitaire engine.

Every variant is played by the same :class:`Game`; what differs between
variants is only the :class:`~solitaire_kit.conf.Conf` it is built from.
Each pile gets a :class:`SlotConf` derived from that descriptor, and all move
rules are answered by reading those slot settings.

All piles live in one list with a fixed layout::

    [foundations][columns][free cells][deck][waste]

The ``first_*`` helpers return the offset of each group in that list.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field, replace
from enum import Enum, auto
from typing import List, Optional

from solitaire_kit.cards import Card, Deck, Face, Suit
from solitaire_kit.conf import UNLIMITED, Conf, FaceOrder, Playable, SuitOrder
from solitaire_kit.errors import (
    InsufficientFor,
    InvalidDestination,
    InvalidLocation,
    InvalidMove,
    NoDestination,
    NotSelected,
    Unplayable,
    UnusedCards,
)

logger = logging.getLogger(__name__)

ANY_COL = -1


@dataclass(frozen=True)
class SlotConf:
    """Rules of a single pile."""

    # pile can be selected (false only for the deck pile)
    selectable: bool = True
    # all cards in the pile are face-up.
    # all_up=False with selectable=False means all cards are always face-down
    all_up: bool = False
    # a card can be put into the pile once it gets empty
    refill: bool = True
    # the first card put into an empty pile
    start_face: Face = Face.ANY
    start_suit: Suit = Suit.ANY
    # what can be put onto the top card
    suit_order: SuitOrder = SuitOrder.ANY
    face_order: FaceOrder = FaceOrder.ANY
    playable: Playable = Playable.TOP
    # flip the exposed top card automatically
    flip: bool = False
    # cards can only be taken from the pile
    take_only: bool = False
    # a tall column: a group of cards can be drawn at once
    draw_all: bool = False

    @classmethod
    def for_fnd(cls) -> "SlotConf":
        return cls(all_up=True, start_face=Face.A, suit_order=SuitOrder.SAME_SUIT, face_order=FaceOrder.ASC)

    @classmethod
    def for_col(cls) -> "SlotConf":
        return cls(start_face=Face.K, suit_order=SuitOrder.SAME_SUIT, face_order=FaceOrder.DESC,
                   playable=Playable.ANY, flip=True, draw_all=True)

    @classmethod
    def for_temp(cls) -> "SlotConf":
        # a free cell holds a single card
        return cls(all_up=True, suit_order=SuitOrder.FORBID)

    @classmethod
    def for_pile(cls) -> "SlotConf":
        return cls(refill=False, take_only=True)


@dataclass
class Pile:
    conf: SlotConf
    cards: List[Card] = field(default_factory=list)

    def top(self) -> Optional[Card]:
        return self.cards[-1] if self.cards else None

    def __len__(self):
        return len(self.cards)


@dataclass(frozen=True)
class Pos:
    """Cursor position: a pile index and the depth from its top card (0 = top)."""

    col: int = ANY_COL
    row: int = 0

    @classmethod
    def empty(cls) -> "Pos":
        return cls(ANY_COL, 0)

    def is_empty(self) -> bool:
        return self.col == ANY_COL


class Direction(Enum):
    UP = auto()
    DOWN = auto()
    LEFT = auto()
    RIGHT = auto()
    # jump to a column by its number (see Game.move_selection)
    COL_UP = auto()
    COL_DOWN = auto()
    # cycle through foundations
    WASTE = auto()
    # cycle through deck piles
    PILE = auto()
    # cycle through free cells
    TEMP = auto()


@dataclass
class Snapshot:
    redeals: int
    piles: List[List[Card]]
    selected: Pos


def _fits(card: Card, top: Card, suit_order: SuitOrder, face_order: FaceOrder) -> bool:
    """True if `card` can lie on `top` under the given ordering rules."""
    if suit_order == SuitOrder.SAME_SUIT:
        ok_suit = card.is_same_suit(top)
    elif suit_order == SuitOrder.SAME_COLOR:
        ok_suit = card.is_same_color(top)
    elif suit_order == SuitOrder.ALTERNATE_COLOR:
        ok_suit = not card.is_same_color(top)
    elif suit_order == SuitOrder.ANY:
        ok_suit = True
    else:
        ok_suit = False
    diff = card.diff(top)
    if face_order == FaceOrder.ASC:
        ok_face = diff == -1
    elif face_order == FaceOrder.DESC:
        ok_face = diff == 1
    else:
        ok_face = diff in (1, -1)
    return ok_suit and ok_face


class Game:
    def __init__(self, conf: Conf, rng: Optional[random.Random] = None):
        self.conf = conf
        self.deck = Deck(conf.deck_count, rng=rng)
        self.redeals = conf.redeals()
        self.piles: List[Pile] = []
        self.selected = Pos.empty()
        self._undo: List[Snapshot] = []
        self._init_cols()
        # at start the cursor is on the first card of the first column
        self.selected = Pos(self.first_col(), 0)
        logger.debug("dealt %r: %d foundations, %d columns, %d free cells, %d deck piles",
                     conf.name, self.fnd_count(), self.col_count(), self.temp_count(), self.pile_count())

    # ----- Layout -----
    def fnd_count(self) -> int:
        return self.conf.fnd_count()

    def col_count(self) -> int:
        return self.conf.col_count()

    def temp_count(self) -> int:
        return self.conf.temp_count()

    def pile_count(self) -> int:
        return self.conf.pile_count()

    def column_count(self) -> int:
        """Total number of piles in the play area."""
        return len(self.piles)

    def first_fnd(self) -> int:
        return 0

    def first_col(self) -> int:
        return self.fnd_count()

    def first_temp(self) -> Optional[int]:
        if self.temp_count() == 0:
            return None
        return self.fnd_count() + self.col_count()

    def first_pile(self) -> Optional[int]:
        if self.pile_count() == 0:
            return None
        return self.fnd_count() + self.col_count() + self.temp_count()

    def _valid_col(self, col: int) -> bool:
        return 0 <= col < len(self.piles)

    def is_fnd(self, col: int) -> bool:
        return 0 <= col < self.fnd_count()

    def is_col(self, col: int) -> bool:
        first = self.first_col()
        return first <= col < first + self.col_count()

    def slot_conf(self, idx: int) -> SlotConf:
        if not self._valid_col(idx):
            raise InvalidLocation()
        return self.piles[idx].conf

    def _group(self, first: Optional[int], count: int, pos: int) -> List[Card]:
        if first is None or not 0 <= pos < count:
            raise InvalidLocation()
        return self.piles[first + pos].cards

    def fnd(self, pos: int) -> List[Card]:
        return self._group(self.first_fnd(), self.fnd_count(), pos)

    def col(self, pos: int) -> List[Card]:
        return self._group(self.first_col(), self.col_count(), pos)

    def temp(self, pos: int) -> List[Card]:
        return self._group(self.first_temp(), self.temp_count(), pos)

    def pile(self, pos: int) -> List[Card]:
        """Cards of the deck (0) or the waste (1)."""
        return self._group(self.first_pile(), self.pile_count(), pos)

    def redeal_left(self) -> int:
        return self.redeals

    def cards_total(self) -> int:
        """Cards in play plus cards never dealt from the deck."""
        return sum(len(p.cards) for p in self.piles) + self.deck.remaining()

    # ----- Setup -----
    def _gen_list(self, count: int, up: int) -> List[Card]:
        cards = []
        for i in range(count):
            card = self.deck.deal_card()
            if card is None:
                raise InsufficientFor("play area")
            card.up = count - i <= up
            cards.append(card)
        return cards

    def _init_piles(self):
        conf = self.conf
        for slot in conf.fnd:
            sc = replace(SlotConf.for_fnd(), start_face=slot.first, start_suit=slot.suit,
                         suit_order=slot.sorder, face_order=slot.forder)
            self.piles.append(Pile(sc))
        refill = conf.col_refill not in (Face.EMPTY, Face.UNAVAIL)
        for cfg in conf.cols:
            sc = replace(SlotConf.for_col(), playable=conf.playable, face_order=conf.col_forder,
                         suit_order=conf.col_sorder, refill=refill, start_face=conf.col_refill,
                         take_only=cfg.take_only)
            self.piles.append(Pile(sc))
        for _ in range(self.temp_count()):
            self.piles.append(Pile(SlotConf.for_temp()))
        for idx in range(self.pile_count()):
            # only the waste can be selected, and its cards are face-up
            sc = replace(SlotConf.for_pile(), selectable=idx == 1, all_up=idx == 1)
            self.piles.append(Pile(sc))

    def _init_cols(self):
        self._init_piles()
        first = self.first_col()
        for n, cfg in enumerate(self.conf.cols):
            if cfg.up == 0 and cfg.count != 0:
                up = 1
            else:
                up = min(cfg.up, cfg.count)
            self.piles[first + n].cards = self._gen_list(cfg.count, up)

        pconf = self.conf.pile
        if pconf is None:
            if not self.deck.is_empty():
                raise UnusedCards()
            return
        deck = self.piles[self.first_pile()].cards
        while not self.deck.is_empty():
            card = self.deck.deal_card()
            card.up = False
            deck.append(card)
        if pconf.pile_to_cols:
            return
        waste = self.piles[self.first_pile() + 1].cards
        for _ in range(min(pconf.deal_by, len(deck))):
            card = deck.pop()
            card.up = True
            waste.append(card)

    # ----- Cards -----
    def card_at(self, loc: Pos) -> Card:
        """Card at `loc`, or an empty card if the location holds none."""
        if loc.is_empty() or not self._valid_col(loc.col):
            return Card.empty()
        cards = self.piles[loc.col].cards
        if not 0 <= loc.row < len(cards):
            return Card.empty()
        return cards[len(cards) - 1 - loc.row]

    def ordered_count(self, pile_id: int) -> int:
        """Number of top cards of a column that already follow the column order.

        Piles other than columns hold no runs: their top card is the only one.
        """
        if not self._valid_col(pile_id):
            return 0
        pile = self.piles[pile_id]
        if not self.is_col(pile_id):
            return min(1, len(pile.cards))
        cards = pile.cards
        if len(cards) < 2:
            return len(cards)
        cnt = 1
        idx = len(cards) - 1
        while idx > 0:
            if not _fits(cards[idx], cards[idx - 1], pile.conf.suit_order, pile.conf.face_order):
                break
            cnt += 1
            idx -= 1
        return cnt

    # ----- Selection -----
    def selected_loc(self) -> Pos:
        return self.selected

    def is_selectable(self, pos: Optional[Pos] = None) -> bool:
        """Can the card at `pos` (the cursor by default) be picked up?"""
        pos = self.selected if pos is None else pos
        if not self._valid_col(pos.col) or pos.row < 0:
            return False
        pile = self.piles[pos.col]
        if not pile.conf.selectable:
            return False
        if pile.conf.playable == Playable.TOP and pos.row != 0:
            return False
        if pile.conf.playable == Playable.ORDERED and pos.row >= self.ordered_count(pos.col):
            return False
        if pos.row >= len(pile.cards):
            return False
        return pile.cards[len(pile.cards) - 1 - pos.row].up

    def select(self, pos: Pos) -> bool:
        if not self.is_selectable(pos):
            return False
        self.selected = pos
        return True

    def select_loc(self, loc: Pos) -> bool:
        """Move the cursor to `loc`; False if it is already there or cannot be selected."""
        if loc == self.selected:
            return False
        return self.select(loc)

    def is_deck_clicked(self, pos: Optional[Pos] = None) -> bool:
        pos = self.selected if pos is None else pos
        first = self.first_pile()
        return first is not None and pos.col == first

    def _first_up(self, col_idx: int) -> int:
        # depth of the deepest face-up card; all cards above it are face-up too
        cards = self.piles[col_idx].cards
        for idx, card in enumerate(cards):
            if card.up:
                return len(cards) - idx - 1
        return 0

    def _up_in_col(self, col_idx: int, curr: int) -> int:
        if len(self.piles[col_idx].cards) < 2:
            return curr
        return curr if curr >= self._first_up(col_idx) else curr + 1

    def _next_pile_of_type(self, first: int, count: int):
        col = self.selected.col
        if col < first or col >= first + count - 1:
            self.selected = Pos(first, 0)
        else:
            self.selected = Pos(col + 1, 0)

    def _can_walk(self) -> bool:
        col = self.selected.col
        return self.is_col(col) and not self.piles[col].conf.take_only

    def move_selection(self, direction: Direction, col: int = 0) -> bool:
        """Move the cursor; `col` is the column number for COL_UP and COL_DOWN.

        Returns True if the cursor moved.
        """
        sel = self.selected
        last = len(self.piles) - 1
        if direction == Direction.RIGHT:
            self.selected = Pos(0 if sel.col >= last or sel.col < 0 else sel.col + 1, 0)
        elif direction == Direction.LEFT:
            self.selected = Pos(last if sel.col <= 0 else sel.col - 1, 0)
        elif direction == Direction.DOWN:
            if sel.row == 0 or not self._can_walk():
                return False
            self.selected = Pos(sel.col, sel.row - 1)
        elif direction == Direction.UP:
            if not self._can_walk():
                return False
            new_row = self._up_in_col(sel.col, sel.row)
            if new_row == sel.row or not self.is_selectable(Pos(sel.col, new_row)):
                return False
            self.selected = Pos(sel.col, new_row)
        elif direction in (Direction.COL_UP, Direction.COL_DOWN):
            if not 0 <= col < self.col_count():
                return False
            new_col = self.first_col() + col
            if sel.col != new_col or len(self.piles[new_col].cards) < 2:
                self.selected = Pos(new_col, 0)
            elif self.piles[new_col].conf.take_only:
                return False
            elif direction == Direction.COL_UP:
                new_row = self._up_in_col(new_col, sel.row)
                if new_row > sel.row and not self.is_selectable(Pos(new_col, new_row)):
                    return False
                # wraps to the top card once the deepest playable card is reached
                self.selected = Pos(new_col, new_row if new_row != sel.row else 0)
            elif sel.row == 0:
                deepest = self._first_up(new_col)
                if not self.is_selectable(Pos(new_col, deepest)):
                    return False
                self.selected = Pos(new_col, deepest)
            else:
                self.selected = Pos(new_col, sel.row - 1)
        elif direction == Direction.WASTE:
            self._next_pile_of_type(self.first_fnd(), self.fnd_count())
        elif direction == Direction.TEMP:
            if self.temp_count() == 0:
                return False
            self._next_pile_of_type(self.first_temp(), self.temp_count())
        elif direction == Direction.PILE:
            if self.pile_count() == 0:
                return False
            self._next_pile_of_type(self.first_pile(), self.pile_count())
        return self.selected != sel

    # ----- Moves -----
    def _column_start_face(self) -> Optional[Face]:
        # the base card of the first filled COLUMN foundation decides for all of them
        for pile in self.piles[:self.fnd_count()]:
            if pile.conf.start_face == Face.COLUMN and pile.cards:
                return pile.cards[0].face
        return None

    def can_move(self, pos: Pos, pile_id: int) -> bool:
        """Can the card at `pos`, with every card above it, go onto pile `pile_id`?"""
        card = self.card_at(pos)
        if card.is_empty() or not card.up or not self._valid_col(pile_id):
            return False
        pile = self.piles[pile_id]
        if pile.conf.playable == Playable.TOP and pos.row != 0:
            return False
        if pile.conf.take_only or (not pile.conf.refill and not pile.cards):
            return False

        if not pile.cards:
            ok_suit = pile.conf.start_suit == Suit.ANY or pile.conf.start_suit == card.suit
            start = pile.conf.start_face
            if start == Face.COLUMN:
                start = self._column_start_face()
                if start is None:
                    start = Face.ANY
            ok_face = start == Face.ANY or start == card.face
            return ok_suit and ok_face

        return _fits(card, pile.top(), pile.conf.suit_order, pile.conf.face_order)

    def dest_list_card(self, from_: Pos) -> List[int]:
        """Indices of every pile the card at `from_` can be moved onto.

        Ascending order: foundations, columns, free cells.
        """
        if self.card_at(from_).is_empty():
            return []
        return [idx for idx in range(len(self.piles)) if idx != from_.col and self.can_move(from_, idx)]

    def avail_list(self) -> List[Pos]:
        """Every card outside the foundations that can be moved somewhere."""
        loc = []
        for idx, pile in enumerate(self.piles):
            if self.is_fnd(idx) or not pile.cards:
                continue
            size = len(pile.cards)
            ordered = self.ordered_count(idx)
            for cidx, card in enumerate(pile.cards):
                if (pile.conf.take_only or pile.conf.playable == Playable.TOP) and cidx < size - 1:
                    continue
                if pile.conf.playable == Playable.ORDERED and size - cidx > ordered:
                    continue
                if not card.up:
                    continue
                cpos = Pos(idx, size - cidx - 1)
                if self.dest_list_card(cpos):
                    loc.append(cpos)
        return loc

    def move_card(self, from_: Optional[Pos] = None, to: Optional[Pos] = None):
        """Move the card at `from_` and all cards above it onto the pile `to.col`.

        Without `from_` the card under the cursor is moved. Without `to` the
        first pile that accepts the card is used.
        """
        if from_ is None or from_.is_empty():
            if self.selected.is_empty():
                raise NotSelected()
            from_ = self.selected
        src = self.card_at(from_)
        if src.is_empty():
            raise InvalidMove()
        if self.piles[from_.col].conf.playable == Playable.TOP and from_.row != 0:
            raise Unplayable()

        if to is None or to.is_empty():
            dests = self.dest_list_card(from_)
            if not dests:
                logger.info("nowhere to put %r", src)
                raise NoDestination()
            dst = dests[0]
        else:
            dst = to.col
        if dst == from_.col:
            raise InvalidDestination()
        if not self.can_move(from_, dst):
            raise InvalidMove()

        cfrom = self.piles[from_.col].cards
        cnt = from_.row + 1
        moving = cfrom[len(cfrom) - cnt:]
        del cfrom[len(cfrom) - cnt:]
        if cfrom and not cfrom[-1].up and self.piles[from_.col].conf.flip:
            cfrom[-1].up = True
        self.piles[dst].cards.extend(moving)
        return dst

    # ----- Deck -----
    def can_deal(self) -> bool:
        """True if the deck is non-empty, or the waste can still be turned over."""
        first = self.first_pile()
        if first is None:
            return False
        if self.piles[first].cards:
            return True
        return self.pile_count() == 2 and self.redeals != 0 and bool(self.piles[first + 1].cards)

    def deal(self) -> bool:
        """Deal from the deck into the waste, or one card onto each column.

        Returns False if nothing was dealt.
        """
        idx = self.first_pile()
        if idx is None:
            return False
        deck = self.piles[idx].cards

        if self.conf.pile.pile_to_cols:
            if not deck:
                return False
            first = self.first_col()
            for pile in self.piles[first:first + self.col_count()]:
                if pile.conf.take_only:
                    continue
                if not deck:
                    break
                card = deck.pop()
                card.up = True
                pile.cards.append(card)
            return True

        waste = self.piles[idx + 1].cards
        if not deck and waste:
            if self.redeals == 0:
                return False
            if self.redeals != UNLIMITED:
                self.redeals -= 1
            while waste:
                card = waste.pop()
                card.up = False
                deck.append(card)
        if not deck:
            return False
        for _ in range(min(self.conf.deal_by(), len(deck))):
            card = deck.pop()
            card.up = True
            waste.append(card)
        return True

    # ----- Undo -----
    def take_snapshot(self):
        piles = [[c.copy() for c in pile.cards] for pile in self.piles]
        self._undo.append(Snapshot(self.redeals, piles, self.selected))

    def squash_snapshots(self):
        """Drop the latest snapshot if nothing but the cursor changed since the previous one."""
        if len(self._undo) < 2:
            return
        last, prev = self._undo[-1], self._undo[-2]
        if last.redeals != prev.redeals:
            return
        for cards, prev_cards in zip(last.piles, prev.piles):
            if len(cards) != len(prev_cards):
                return
        self._undo.pop()

    def undo(self):
        """Restore the latest snapshot and discard it. There is no redo."""
        if not self._undo:
            return
        last = self._undo.pop()
        self.redeals = last.redeals
        self.selected = last.selected
        for pile, cards in zip(self.piles, last.piles):
            pile.cards = cards

    def clear_undo(self):
        self._undo.clear()

    def undo_count(self) -> int:
        return len(self._undo)

    def has_undo(self) -> bool:
        return bool(self._undo)

    # ----- State -----
    def is_completed(self) -> bool:
        """True once every pile except the foundations is empty."""
        return all(not pile.cards for idx, pile in enumerate(self.piles) if not self.is_fnd(idx))
