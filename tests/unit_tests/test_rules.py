import random

import pytest

from solitaire_kit.cards import Face
from solitaire_kit.engine import Game
from solitaire_kit.rules import BUILTIN_RULES, builtin_names, load_rules


def _verify_klondike_hard(game):
    assert game.conf.deal_by() == 3
    assert game.redeal_left() == -1
    assert len(game.pile(1)) == 3


def _verify_free_cell(game):
    assert game.temp_count() == 4
    assert game.pile_count() == 0
    assert [len(game.col(i)) for i in range(8)] == [7, 7, 7, 7, 6, 6, 6, 6]


def _verify_pile_em_up(game):
    assert game.pile_count() == 1
    assert len(game.pile(0)) == 46


def _verify_american_toad(game):
    assert game.slot_conf(game.first_col()).take_only
    assert len(game.col(0)) == 20
    assert game.cards_total() == 104


def _verify_deuces(game):
    assert all(game.slot_conf(i).start_face == Face.N2 for i in range(8))


def _verify_canfield(game):
    assert all(game.slot_conf(i).start_face == Face.COLUMN for i in range(4))
    assert all(c.up for c in game.col(0))


VARIANTS = [
    {"name": "Klondike (hard)", "fnd": 4, "cols": 7, "verify": _verify_klondike_hard},
    {"name": "Free cell", "fnd": 4, "cols": 8, "verify": _verify_free_cell},
    {"name": "Pile'em up", "fnd": 1, "cols": 6, "verify": _verify_pile_em_up},
    {"name": "American toad", "fnd": 8, "cols": 9, "verify": _verify_american_toad},
    {"name": "Deuces", "fnd": 8, "cols": 10, "verify": _verify_deuces},
    {"name": "Canfield", "fnd": 4, "cols": 5, "verify": _verify_canfield},
]


@pytest.mark.parametrize("variant", VARIANTS, ids=[v["name"] for v in VARIANTS])
def test_variant_layout(variant, rng):
    game = Game(BUILTIN_RULES[variant["name"]], rng=rng)
    assert game.fnd_count() == variant["fnd"]
    assert game.col_count() == variant["cols"]
    variant["verify"](game)


@pytest.mark.parametrize("name", builtin_names())
def test_builtin_deals_whole_deck(name: str):
    conf = BUILTIN_RULES[name]
    conf.validate()
    game = Game(conf, rng=random.Random(name))
    assert game.cards_total() == 52 * conf.deck_count
    assert game.deck.is_empty()
    assert not game.is_completed()


def test_builtin_names_sorted():
    names = builtin_names()
    assert names == sorted(names)
    assert len(names) == 14
    assert "Klondike (easy)" in names


def test_load_rules_defaults_to_builtin():
    rules = load_rules()
    assert set(rules) == set(builtin_names())
    rules.clear()
    assert len(load_rules()) == 14
