"""Suits, faces, cards and the shuffled deck."""

from __future__ import annotations

import random
from enum import IntEnum
from typing import List, Optional

from solitaire_kit.errors import InvalidDeckNumber, InvalidFace, InvalidSuit


class Suit(IntEnum):
    SPADE = 0
    CLUB = 1
    DIAMOND = 2
    HEART = 3
    # wildcard, only used by rule descriptors
    ANY = 4


class Face(IntEnum):
    A = 0
    N2 = 1
    N3 = 2
    N4 = 3
    N5 = 4
    N6 = 5
    N7 = 6
    N8 = 7
    N9 = 8
    N10 = 9
    J = 10
    Q = 11
    K = 12
    # rule descriptor values, never dealt
    EMPTY = 13
    ANY = 14
    UNAVAIL = 15
    COLUMN = 16


REGULAR_SUITS = (Suit.SPADE, Suit.CLUB, Suit.DIAMOND, Suit.HEART)
REGULAR_FACES = tuple(f for f in Face if f <= Face.K)

SUIT_TO_TEXT = {Suit.SPADE: "♠", Suit.CLUB: "♣", Suit.DIAMOND: "♦", Suit.HEART: "♥", Suit.ANY: "*"}
FACE_TO_TEXT = {Face.A: "A", Face.J: "J", Face.Q: "Q", Face.K: "K", Face.EMPTY: "-", Face.ANY: "*",
                Face.UNAVAIL: "x", Face.COLUMN: "?"}
for _f in range(Face.N2, Face.N10 + 1):
    FACE_TO_TEXT[Face(_f)] = str(_f + 1)

_STR_TO_SUIT = {
    "spade": Suit.SPADE, "spades": Suit.SPADE,
    "club": Suit.CLUB, "clubs": Suit.CLUB,
    "diamond": Suit.DIAMOND, "diamonds": Suit.DIAMOND,
    "heart": Suit.HEART, "hearts": Suit.HEART,
    "any": Suit.ANY,
}

_STR_TO_FACE = {
    "a": Face.A, "j": Face.J, "q": Face.Q, "k": Face.K,
    "any": Face.ANY,
    "empty": Face.EMPTY,
    "first": Face.COLUMN, "column": Face.COLUMN, "random": Face.COLUMN,
    "unavail": Face.UNAVAIL, "unavailable": Face.UNAVAIL, "none": Face.UNAVAIL,
}
for _f in range(Face.N2, Face.N10 + 1):
    _STR_TO_FACE[str(_f + 1)] = Face(_f)


def parse_suit(s: str) -> Suit:
    try:
        return _STR_TO_SUIT[s]
    except KeyError:
        raise InvalidSuit(s) from None


def parse_face(s: str) -> Face:
    try:
        return _STR_TO_FACE[s]
    except KeyError:
        raise InvalidFace(s) from None


def is_red(suit) -> bool:
    return suit in (Suit.DIAMOND, Suit.HEART)


# ---------- Cards ----------
class Card:
    __slots__ = ("suit", "face", "up")

    def __init__(self, suit, face, up=False):
        self.suit = suit
        self.face = face
        self.up = up

    @classmethod
    def empty(cls) -> "Card":
        """Placeholder returned for locations that hold no card."""
        return cls(Suit.ANY, Face.EMPTY)

    def copy(self) -> "Card":
        return Card(self.suit, self.face, self.up)

    def is_empty(self) -> bool:
        return self.face == Face.EMPTY

    def is_regular(self) -> bool:
        return self.suit != Suit.ANY and self.face <= Face.K

    def is_same_suit(self, other: "Card") -> bool:
        return self.suit == other.suit or self.suit == Suit.ANY or other.suit == Suit.ANY

    def is_same_color(self, other: "Card") -> bool:
        if self.suit == Suit.ANY or other.suit == Suit.ANY:
            return True
        return is_red(self.suit) == is_red(other.suit)

    def diff(self, other: "Card") -> int:
        """Rank distance to `other`; positive when other's face is higher.

        An Ace counts as one above a King (and a King one below an Ace).
        """
        if other.face == Face.A and self.face == Face.K:
            return 1
        if self.face == Face.A and other.face == Face.K:
            return -1
        return int(other.face) - int(self.face)

    def __eq__(self, other):
        if not isinstance(other, Card):
            return NotImplemented
        return self.suit == other.suit and self.face == other.face and self.up == other.up

    def __hash__(self):
        return hash((self.suit, self.face, self.up))

    def __repr__(self):
        return f"{FACE_TO_TEXT[self.face]}{SUIT_TO_TEXT[self.suit]}{'↑' if self.up else '↓'}"


class Deck:
    """One or two standard 52-card sets, shuffled once and dealt front to back."""

    def __init__(self, count: int = 1, shuffle: bool = True, rng: Optional[random.Random] = None):
        if count not in (1, 2):
            raise InvalidDeckNumber(count)
        self.cards: List[Card] = [
            Card(suit, face) for _ in range(count) for suit in REGULAR_SUITS for face in REGULAR_FACES
        ]
        self._idx = 0
        if shuffle:
            (rng or random).shuffle(self.cards)

    def is_empty(self) -> bool:
        return self._idx >= len(self.cards)

    def remaining(self) -> int:
        return len(self.cards) - self._idx

    def deal_card(self) -> Optional[Card]:
        if self.is_empty():
            return None
        self._idx += 1
        return self.cards[self._idx - 1]

    def __len__(self):
        return self.remaining()
