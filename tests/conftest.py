import random

import pytest

from solitaire_kit.cards import Face
from solitaire_kit.conf import ColConf, Conf, FaceOrder, FndSlot, PileConf, Playable, SuitOrder
from solitaire_kit.engine import Game
from solitaire_kit.rules import BUILTIN_RULES


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture(autouse=True)
def settings_home(tmp_path, monkeypatch):
    # never touch the real settings directory
    home = tmp_path / "home"
    monkeypatch.setenv("SOLITAIRE_KIT_HOME", str(home))
    return home


@pytest.fixture
def klondike_conf():
    return Conf(
        name="Klondike test",
        playable=Playable.ANY,
        pile=PileConf(deal_by=1, redeals=-1),
        fnd=tuple(FndSlot() for _ in range(4)),
        cols=tuple(ColConf(n, up) for n, up in zip(range(1, 8), (1, 1, 2, 2, 3, 3, 4))),
        col_forder=FaceOrder.DESC,
        col_sorder=SuitOrder.ALTERNATE_COLOR,
        col_refill=Face.K,
    )


@pytest.fixture
def klondike(klondike_conf, rng):
    return Game(klondike_conf, rng=rng)


@pytest.fixture
def freecell(rng):
    return Game(BUILTIN_RULES["Free cell"], rng=rng)
