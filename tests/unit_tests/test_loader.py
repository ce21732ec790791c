import logging

import pytest

from solitaire_kit.cards import Face, Suit
from solitaire_kit.conf import ColConf, FaceOrder, Playable, SuitOrder
from solitaire_kit.errors import (
    FailedToOpenRules,
    InvalidConfLine,
    InvalidConfOption,
    InvalidConfOptionValue,
    InvalidConfSection,
    InvalidDealBy,
    InvalidFace,
    InvalidFileName,
    InvalidSuitOrder,
    InvalidTempNumber,
    NoCols,
    NoFoundation,
)
from solitaire_kit.loader import clean_lines, loads
from solitaire_kit.rules import load_rules

KLONDIKE = """\ufeff# Klondike, three cards at a time
[Global]
name = Klondike
chance = 30
decks = 1

[deck]
redeals = unlimited
deal_by = 3
deal_to = waste

[foundation]
column = a, any, asc, same
column = a, any, asc, same
column = A, Any, Asc, Same
column = a, any, asc, same

[column]
playable_card = any
refill = k
order = desc, alternate
column = 1, 1
column = 2, 1
column = 3, 2
column = 4, 2
column = 5, 3
column = 6, 3
column = 7, 4
"""

_TAIL = """
[foundation]
column = a, any, asc, same
[column]
column = 4, 4
"""


def test_clean_lines() -> None:
    lines = clean_lines("\ufeff  # comment\n\n[GLOBAL]\n  Name = X  \n")
    assert lines == ["[global]", "name = x"]


def test_load_klondike() -> None:
    conf = loads(KLONDIKE)
    assert conf.name == "klondike"
    assert conf.chance == 30
    assert conf.deck_count == 1
    assert conf.pile.redeals == -1
    assert conf.pile.deal_by == 3
    assert not conf.pile.pile_to_cols
    assert conf.fnd_count() == 4
    assert conf.fnd[0].first == Face.A
    assert conf.fnd[2].suit == Suit.ANY
    assert conf.playable == Playable.ANY
    assert conf.col_refill == Face.K
    assert (conf.col_forder, conf.col_sorder) == (FaceOrder.DESC, SuitOrder.ALTERNATE_COLOR)
    assert conf.cols[6] == ColConf(7, 4)
    assert conf.temp is None


def test_deal_to_columns_with_free_cells() -> None:
    conf = loads("[deck]\ndeal_to = columns\n[temp]\nslots = 2\n" + _TAIL + "column = 1, 1, take only\n")
    assert conf.pile_count() == 1
    assert conf.temp_count() == 2
    assert conf.cols[-1].take_only


def test_zero_slots_means_no_free_cells() -> None:
    assert loads("[temp]\nslots = 0\n" + _TAIL).temp is None


@pytest.mark.parametrize(
    "text, error",
    [
        ("name = x\n" + _TAIL, InvalidConfLine),
        ("[tableau]\n" + _TAIL, InvalidConfSection),
        ("[global]\nplayers = 2\n" + _TAIL, InvalidConfOption),
        ("[global]\ndecks = 3\n" + _TAIL, InvalidConfOptionValue),
        ("[global]\nchance = often\n" + _TAIL, InvalidConfOptionValue),
        ("[global]\nname\n" + _TAIL, InvalidConfLine),
        ("[deck]\ndeal_by = 20\n" + _TAIL, InvalidDealBy),
        ("[deck]\ndeal_to = table\n" + _TAIL, InvalidConfOptionValue),
        ("[deck]\nredeals = many\n" + _TAIL, InvalidConfOptionValue),
        ("[temp]\nslots = 5\n" + _TAIL, InvalidTempNumber),
        ("[foundation]\n[column]\ncolumn = 4, 4\n", NoFoundation),
        ("[foundation]\ncolumn = a, any, asc\n[column]\ncolumn = 4, 4\n", InvalidConfOptionValue),
        ("[foundation]\ncolumn = z, any, asc, same\n[column]\ncolumn = 4, 4\n", InvalidFace),
        ("[foundation]\ncolumn = a, any, asc, rainbow\n[column]\ncolumn = 4, 4\n", InvalidSuitOrder),
        ("[foundation]\ncolumn = a, any, asc, same\n[column]\nrefill = k\n", NoCols),
        ("[foundation]\ncolumn = a, any, asc, same\n[column]\ncolumn = 4\n", InvalidConfOptionValue),
        ("[foundation]\ncolumn = a, any, asc, same\n[column]\ncolumn = 4, 4, give\n", InvalidConfOptionValue),
        ("[foundation]\ncolumn = a, any, asc, same\n[column]\norder = desc\ncolumn = 4, 4\n", InvalidConfOptionValue),
        ("[foundation]\ncolumn = a, any, asc, same\n", NoCols),
    ],
)
def test_load_errors(text: str, error) -> None:
    with pytest.raises(error):
        loads(text)


def test_load_rules_from_file(tmp_path, caplog) -> None:
    path = tmp_path / "klondike.txt"
    path.write_text(KLONDIKE, encoding="utf-8")
    with caplog.at_level(logging.DEBUG, logger="solitaire_kit.loader"):
        rules = load_rules(str(path))
    assert list(rules) == ["klondike"]
    assert str(path) in caplog.text


def test_load_rules_missing_file(tmp_path) -> None:
    with pytest.raises(InvalidFileName):
        load_rules(str(tmp_path / "missing.txt"))


def test_load_rules_undecodable_file(tmp_path) -> None:
    path = tmp_path / "broken.txt"
    path.write_bytes(b"[global]\nname = \xff\xfe\n")
    with pytest.raises(FailedToOpenRules):
        load_rules(str(path))
