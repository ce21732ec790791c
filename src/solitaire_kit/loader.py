"""Parser for rule-description files.

A rule file is plain UTF-8 text split into ``[sections]`` of
``option = value`` lines::

    [global]
    name = Klondike
    decks = 1

    [deck]
    redeals = unlimited
    deal_by = 3

    [foundation]
    column = a, any, asc, same
    column = a, any, asc, same
    column = a, any, asc, same
    column = a, any, asc, same

    [column]
    playable_card = any
    refill = k
    order = desc, alternate
    column = 1, 1
    column = 2, 1

Case does not matter; blank lines and ``#`` comments are skipped.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Iterable, List, Tuple

from solitaire_kit.cards import parse_face, parse_suit
from solitaire_kit.conf import (
    ColConf,
    Conf,
    FndSlot,
    PileConf,
    TempConf,
    parse_face_order,
    parse_playable,
    parse_suit_order,
)
from solitaire_kit.errors import (
    InvalidConfLine,
    InvalidConfOption,
    InvalidConfOptionValue,
    InvalidConfSection,
    NoCols,
    NoFoundation,
)

logger = logging.getLogger(__name__)

_TAKE_ONLY = ("take", "takeonly", "take only")


def clean_lines(text: str) -> List[str]:
    """Lower-cased, trimmed lines without blanks and comments."""
    text = text.lstrip("\ufeff")
    lines = []
    for line in text.splitlines():
        line = line.strip().lower()
        if line and not line.startswith("#"):
            lines.append(line)
    return lines


def _split_option(line: str) -> Tuple[str, str]:
    name, sep, value = line.partition("=")
    if not sep:
        raise InvalidConfLine(line)
    return name.strip(), value.strip()


def _parse_int(name: str, value: str) -> int:
    try:
        return int(value)
    except ValueError:
        raise InvalidConfOptionValue(name, value) from None


def _parse_global(conf: Conf, options) -> Conf:
    for name, value in options:
        if name == "name":
            conf = replace(conf, name=value)
        elif name == "chance":
            chance = _parse_int(name, value)
            if chance < 0:
                raise InvalidConfOptionValue(name, value)
            conf = replace(conf, chance=chance)
        elif name == "decks":
            decks = _parse_int(name, value)
            if decks not in (1, 2):
                raise InvalidConfOptionValue(name, value)
            conf = replace(conf, deck_count=decks)
        else:
            raise InvalidConfOption("global", name)
    return conf


def _parse_deck(conf: Conf, options) -> Conf:
    pconf = PileConf(deal_by=0)
    for name, value in options:
        if name == "redeals":
            redeals = -1 if value == "unlimited" else _parse_int(name, value)
            pconf = replace(pconf, redeals=redeals)
        elif name == "deal_by":
            pconf = replace(pconf, deal_by=_parse_int(name, value))
        elif name == "deal_to":
            if value in ("deck", "side", "waste"):
                pconf = replace(pconf, pile_to_cols=False)
            elif value in ("column", "columns"):
                pconf = replace(pconf, pile_to_cols=True)
            else:
                raise InvalidConfOptionValue(name, value)
        else:
            raise InvalidConfOption("deck", name)
    pconf.validate()
    return replace(conf, pile=pconf)


def _parse_fnd_slot(value: str) -> FndSlot:
    parts = [p.strip() for p in value.split(",")]
    if len(parts) != 4:
        raise InvalidConfOptionValue("column", value)
    return FndSlot(
        first=parse_face(parts[0]),
        suit=parse_suit(parts[1]),
        forder=parse_face_order(parts[2]),
        sorder=parse_suit_order(parts[3]),
    )


def _parse_foundation(conf: Conf, options) -> Conf:
    slots = []
    for name, value in options:
        if name != "column":
            raise InvalidConfOption("foundation", name)
        slots.append(_parse_fnd_slot(value))
    if not slots:
        raise NoFoundation()
    return replace(conf, fnd=tuple(slots))


def _parse_temp(conf: Conf, options) -> Conf:
    tconf = TempConf()
    for name, value in options:
        if name != "slots":
            raise InvalidConfOption("temp", name)
        tconf = TempConf(_parse_int(name, value))
    if tconf.count == 0:
        return conf
    tconf.validate()
    return replace(conf, temp=tconf)


def _parse_col(value: str) -> ColConf:
    parts = [p.strip() for p in value.split(",")]
    if len(parts) not in (2, 3):
        raise InvalidConfOptionValue("column", value)
    try:
        count, up = int(parts[0]), int(parts[1])
    except ValueError:
        raise InvalidConfOptionValue("column", value) from None
    if count < 0 or up < 0:
        raise InvalidConfOptionValue("column", value)
    take_only = False
    if len(parts) == 3:
        if parts[2] not in _TAKE_ONLY:
            raise InvalidConfOptionValue("column", value)
        take_only = True
    return ColConf(count, up, take_only)


def _parse_columns(conf: Conf, options) -> Conf:
    cols = list(conf.cols)
    for name, value in options:
        if name == "playable_card":
            conf = replace(conf, playable=parse_playable(value))
        elif name == "refill":
            conf = replace(conf, col_refill=parse_face(value))
        elif name == "order":
            parts = [p.strip() for p in value.split(",")]
            if len(parts) != 2:
                raise InvalidConfOptionValue(name, value)
            conf = replace(conf, col_forder=parse_face_order(parts[0]), col_sorder=parse_suit_order(parts[1]))
        elif name == "column":
            cols.append(_parse_col(value))
        else:
            raise InvalidConfOption("column", name)
    if not cols:
        raise NoCols()
    return replace(conf, cols=tuple(cols))


_SECTIONS = {
    "global": _parse_global,
    "deck": _parse_deck,
    "foundation": _parse_foundation,
    "temp": _parse_temp,
    "column": _parse_columns,
}


def _sections(lines: List[str]):
    section = None
    options: List[Tuple[str, str]] = []
    for line in lines:
        if line.startswith("["):
            if section is not None:
                yield section, options
            section = line.strip("[] ")
            if section not in _SECTIONS:
                raise InvalidConfSection(section)
            options = []
        elif section is None:
            raise InvalidConfLine(line)
        else:
            options.append(_split_option(line))
    if section is not None:
        yield section, options


def parse_conf(lines: Iterable[str]) -> Conf:
    """Build and validate a :class:`Conf` from cleaned lines (see :func:`clean_lines`)."""
    conf = Conf()
    for section, options in _sections(list(lines)):
        conf = _SECTIONS[section](conf, options)
    conf.validate()
    return conf


def loads(text: str) -> Conf:
    return parse_conf(clean_lines(text))


def load_file(path: str) -> Conf:
    logger.debug("loading rules from %s", path)
    with open(path, "r", encoding="utf-8") as f:
        return loads(f.read())
