"""Built-in solitaire variants and rule-set selection.

:func:`load_rules` returns either every built-in variant or the single
variant described by a user rule file, keyed by display name.
"""

from __future__ import annotations

import os
from typing import Dict, List, Optional, Tuple

from solitaire_kit import loader
from solitaire_kit.cards import Face
from solitaire_kit.conf import (
    UNLIMITED,
    ColConf,
    Conf,
    FaceOrder,
    FndSlot,
    PileConf,
    Playable,
    SuitOrder,
    TempConf,
)
from solitaire_kit.errors import FailedToOpenRules, InvalidFileName


def _fnd(count: int, first: Face = Face.A, sorder: SuitOrder = SuitOrder.SAME_SUIT,
         forder: FaceOrder = FaceOrder.ASC) -> Tuple[FndSlot, ...]:
    return tuple(FndSlot(first=first, forder=forder, sorder=sorder) for _ in range(count))


def _cols(*layout) -> Tuple[ColConf, ...]:
    # (count, up) or (count, up, take_only)
    return tuple(ColConf(*item) for item in layout)


_KLONDIKE_COLS = ((1, 1), (2, 1), (3, 2), (4, 2), (5, 3), (6, 3), (7, 4))


_BUILTIN_RULES: Tuple[Conf, ...] = (
    Conf(
        name="Klondike (hard)",
        playable=Playable.ANY,
        pile=PileConf(deal_by=3, redeals=UNLIMITED),
        fnd=_fnd(4),
        cols=_cols(*_KLONDIKE_COLS),
        col_sorder=SuitOrder.ALTERNATE_COLOR,
        col_refill=Face.K,
    ),
    Conf(
        name="Klondike (easy)",
        playable=Playable.ANY,
        pile=PileConf(deal_by=1, redeals=UNLIMITED),
        fnd=_fnd(4),
        cols=_cols(*_KLONDIKE_COLS),
        col_sorder=SuitOrder.ALTERNATE_COLOR,
        col_refill=Face.K,
    ),
    Conf(
        name="Klondike (double)",
        deck_count=2,
        playable=Playable.ANY,
        pile=PileConf(deal_by=3, redeals=UNLIMITED),
        fnd=_fnd(8),
        cols=_cols(*_KLONDIKE_COLS, (8, 4)),
        col_sorder=SuitOrder.ALTERNATE_COLOR,
        col_refill=Face.K,
    ),
    Conf(
        name="Free cell",
        playable=Playable.TOP,
        fnd=_fnd(4),
        temp=TempConf(4),
        cols=_cols(*[(7, 7)] * 4, *[(6, 6)] * 4),
        col_sorder=SuitOrder.ALTERNATE_COLOR,
        col_refill=Face.K,
    ),
    Conf(
        name="Russian solitaire",
        playable=Playable.ANY,
        fnd=_fnd(4),
        cols=_cols((1, 1), (6, 5), (7, 5), (8, 5), (9, 5), (10, 5), (11, 5)),
        col_sorder=SuitOrder.ALTERNATE_COLOR,
        col_refill=Face.K,
    ),
    Conf(
        name="Pile'em up",
        playable=Playable.TOP,
        pile=PileConf(deal_by=0, redeals=0, pile_to_cols=True),
        fnd=_fnd(1, first=Face.ANY, sorder=SuitOrder.ANY, forder=FaceOrder.ANY),
        temp=TempConf(2),
        cols=_cols(*[(1, 1)] * 6),
        col_forder=FaceOrder.ANY,
        col_sorder=SuitOrder.FORBID,
        col_refill=Face.UNAVAIL,
    ),
    Conf(
        name="American toad",
        deck_count=2,
        playable=Playable.ANY,
        pile=PileConf(deal_by=1, redeals=0),
        fnd=_fnd(8),
        cols=_cols((20, 20, True), *[(1, 1)] * 8),
        col_sorder=SuitOrder.SAME_SUIT,
        col_refill=Face.ANY,
    ),
    Conf(
        name="Auld lang syne",
        playable=Playable.TOP,
        pile=PileConf(deal_by=1, redeals=0, pile_to_cols=True),
        fnd=_fnd(4, sorder=SuitOrder.ANY),
        cols=_cols(*[(1, 1)] * 4),
        col_sorder=SuitOrder.FORBID,
        col_refill=Face.ANY,
    ),
    Conf(
        name="Aunt Mary",
        playable=Playable.ANY,
        pile=PileConf(deal_by=1, redeals=0),
        fnd=_fnd(4),
        cols=_cols((6, 6), (6, 5), (6, 4), (6, 3), (6, 2), (6, 1)),
        col_sorder=SuitOrder.ALTERNATE_COLOR,
        col_refill=Face.K,
    ),
    Conf(
        name="Batsford",
        deck_count=2,
        playable=Playable.ANY,
        pile=PileConf(deal_by=1, redeals=0),
        fnd=_fnd(8, sorder=SuitOrder.ANY),
        cols=_cols(*[(n, 1) for n in range(1, 11)]),
        col_sorder=SuitOrder.ALTERNATE_COLOR,
        col_refill=Face.K,
    ),
    Conf(
        name="Blind alleys",
        playable=Playable.ANY,
        pile=PileConf(deal_by=1, redeals=1),
        fnd=_fnd(4),
        cols=_cols(*[(3, 1)] * 6),
        col_sorder=SuitOrder.ALTERNATE_COLOR,
        col_refill=Face.ANY,
    ),
    Conf(
        name="Brigade",
        playable=Playable.TOP,
        fnd=_fnd(4),
        cols=_cols(*[(6, 6)] * 7, (10, 10, True)),
        col_sorder=SuitOrder.ANY,
        col_refill=Face.ANY,
    ),
    Conf(
        name="Deuces",
        deck_count=2,
        playable=Playable.ANY,
        pile=PileConf(deal_by=1, redeals=0),
        fnd=_fnd(8, first=Face.N2),
        cols=_cols(*[(1, 1)] * 10),
        col_sorder=SuitOrder.SAME_SUIT,
        col_refill=Face.ANY,
    ),
    Conf(
        name="Canfield",
        playable=Playable.ANY,
        pile=PileConf(deal_by=3, redeals=UNLIMITED),
        fnd=_fnd(4, first=Face.COLUMN),
        cols=_cols((14, 14, True), *[(1, 1)] * 4),
        col_sorder=SuitOrder.ALTERNATE_COLOR,
        col_refill=Face.ANY,
    ),
)


BUILTIN_RULES: Dict[str, Conf] = {conf.name: conf for conf in _BUILTIN_RULES}


def builtin_names() -> List[str]:
    return sorted(BUILTIN_RULES)


def builtin_rules() -> Dict[str, Conf]:
    return dict(BUILTIN_RULES)


def custom_rule(filename: str) -> Dict[str, Conf]:
    if not os.path.isfile(filename):
        raise InvalidFileName(filename)
    try:
        conf = loader.load_file(filename)
    except (OSError, UnicodeDecodeError) as e:
        raise FailedToOpenRules(filename) from e
    return {conf.name: conf}


def load_rules(filename: Optional[str] = None) -> Dict[str, Conf]:
    """Built-in variants, or the single variant from `filename` when given."""
    if filename:
        return custom_rule(filename)
    return builtin_rules()
