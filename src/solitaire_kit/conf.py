"""Rule descriptor for one solitaire variant.

A :class:`Conf` is built once, either from the built-in table in
:mod:`solitaire_kit.rules` or by :mod:`solitaire_kit.loader`, validated, and
then only read by the engine.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from solitaire_kit.cards import Face, Suit
from solitaire_kit.errors import (
    InvalidColNumber,
    InvalidDealBy,
    InvalidDeckNumber,
    InvalidFaceOrder,
    InvalidPlayable,
    InvalidRedeals,
    InvalidSuitOrder,
    InvalidTempNumber,
    NoCols,
    NoFoundation,
    NoFoundationStart,
)

MAX_COLS = 10
MAX_TEMP = 4
MAX_DEAL_BY = 16
UNLIMITED = -1


class FaceOrder(Enum):
    ASC = "asc"
    DESC = "desc"
    ANY = "any"


class SuitOrder(Enum):
    SAME_SUIT = "same"
    SAME_COLOR = "same color"
    ALTERNATE_COLOR = "alternate"
    ANY = "any"
    FORBID = "forbid"


class Playable(Enum):
    """Which cards of a column can be picked up."""

    TOP = "top"
    ANY = "any"
    ORDERED = "ordered"


_STR_TO_FACE_ORDER = {
    "asc": FaceOrder.ASC, "ascending": FaceOrder.ASC, "inc": FaceOrder.ASC, "increasing": FaceOrder.ASC,
    "desc": FaceOrder.DESC, "descending": FaceOrder.DESC, "dec": FaceOrder.DESC, "decreasing": FaceOrder.DESC,
    "any": FaceOrder.ANY, "alternate": FaceOrder.ANY,
}

_STR_TO_SUIT_ORDER = {
    "same": SuitOrder.SAME_SUIT, "same suit": SuitOrder.SAME_SUIT, "samesuit": SuitOrder.SAME_SUIT,
    "same color": SuitOrder.SAME_COLOR, "samecolor": SuitOrder.SAME_COLOR,
    "alternate": SuitOrder.ALTERNATE_COLOR, "alternate color": SuitOrder.ALTERNATE_COLOR,
    "alternatecolor": SuitOrder.ALTERNATE_COLOR,
    "none": SuitOrder.FORBID, "forbid": SuitOrder.FORBID, "disable": SuitOrder.FORBID,
    "any": SuitOrder.ANY,
}

_STR_TO_PLAYABLE = {
    "top": Playable.TOP,
    "any": Playable.ANY,
    "order": Playable.ORDERED, "ordered": Playable.ORDERED,
}


def parse_face_order(s: str) -> FaceOrder:
    try:
        return _STR_TO_FACE_ORDER[s]
    except KeyError:
        raise InvalidFaceOrder(s) from None


def parse_suit_order(s: str) -> SuitOrder:
    try:
        return _STR_TO_SUIT_ORDER[s]
    except KeyError:
        raise InvalidSuitOrder(s) from None


def parse_playable(s: str) -> Playable:
    try:
        return _STR_TO_PLAYABLE[s]
    except KeyError:
        raise InvalidPlayable(s) from None


@dataclass(frozen=True)
class PileConf:
    """Deck and waste settings."""

    deal_by: int = 1
    redeals: int = 0  # UNLIMITED (-1) for no limit
    pile_to_cols: bool = False  # deal straight into columns instead of a waste

    def validate(self) -> None:
        # dealing into columns always puts one card per column
        if not self.pile_to_cols and not 1 <= self.deal_by <= MAX_DEAL_BY:
            raise InvalidDealBy(self.deal_by)
        if self.redeals < UNLIMITED:
            raise InvalidRedeals(self.redeals)


@dataclass(frozen=True)
class FndSlot:
    """A single foundation pile."""

    first: Face = Face.A
    suit: Suit = Suit.ANY
    forder: FaceOrder = FaceOrder.ASC
    sorder: SuitOrder = SuitOrder.SAME_SUIT


@dataclass(frozen=True)
class TempConf:
    count: int = 0

    def validate(self) -> None:
        if not 0 <= self.count <= MAX_TEMP:
            raise InvalidTempNumber(self.count)


@dataclass(frozen=True)
class ColConf:
    """Initial deal of one column: `count` cards, the top `up` face-up."""

    count: int
    up: int
    take_only: bool = False


@dataclass(frozen=True)
class Conf:
    name: str = ""
    chance: Optional[int] = None  # 1 of N games is winnable, if known

    deck_count: int = 1
    playable: Playable = Playable.TOP

    pile: Optional[PileConf] = None
    fnd: Tuple[FndSlot, ...] = ()
    temp: Optional[TempConf] = None
    cols: Tuple[ColConf, ...] = ()
    col_forder: FaceOrder = FaceOrder.DESC
    col_sorder: SuitOrder = SuitOrder.SAME_SUIT
    col_refill: Face = Face.UNAVAIL  # UNAVAIL or EMPTY: an empty column stays empty

    def validate(self) -> None:
        if self.deck_count not in (1, 2):
            raise InvalidDeckNumber(self.deck_count)
        if self.temp is not None:
            self.temp.validate()
        if self.pile is not None:
            self.pile.validate()
        if not self.fnd:
            raise NoFoundation()
        for slot in self.fnd:
            if slot.first == Face.EMPTY:
                raise NoFoundationStart()
        if not self.cols:
            raise NoCols()
        if len(self.cols) > MAX_COLS:
            raise InvalidColNumber(len(self.cols))

    def deal_by(self) -> int:
        return self.pile.deal_by if self.pile is not None else 0

    def redeals(self) -> int:
        return self.pile.redeals if self.pile is not None else 0

    def fnd_count(self) -> int:
        return len(self.fnd)

    def col_count(self) -> int:
        return len(self.cols)

    def temp_count(self) -> int:
        return self.temp.count if self.temp is not None else 0

    def pile_count(self) -> int:
        """Number of deck piles: deck plus waste, or a lone deck when dealing into columns."""
        if self.pile is None:
            return 0
        return 1 if self.pile.pile_to_cols else 2
