import json
import logging
import os

from solitaire_kit import common
from solitaire_kit.stats import GameStat, Stats, UserConf


def test_settings_dir_override(settings_home):
    assert common._settings_dir() == str(settings_home)
    assert common.settings_path("stats.json") == os.path.join(str(settings_home), "stats.json")


def test_settings_dir_appdata(monkeypatch, tmp_path):
    monkeypatch.delenv("SOLITAIRE_KIT_HOME", raising=False)
    monkeypatch.setenv("APPDATA", str(tmp_path))
    assert common._settings_dir() == os.path.join(str(tmp_path), "SolitaireKit")


def test_settings_dir_home(monkeypatch, tmp_path):
    monkeypatch.delenv("SOLITAIRE_KIT_HOME", raising=False)
    monkeypatch.delenv("APPDATA", raising=False)
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("USERPROFILE", str(tmp_path))
    assert common._settings_dir() == os.path.join(str(tmp_path), ".solitaire_kit")


def test_missing_stats_are_empty():
    stats = Stats.load()
    assert stats.games == {}
    assert stats.game_stat("Canfield") == GameStat(0, 0)


def test_update_and_save(settings_home):
    stats = Stats()
    stats.update_stat("Canfield", False)
    stats.update_stat("Canfield", True)
    assert stats.save()

    with open(settings_home / "stats.json", encoding="utf-8") as f:
        assert json.load(f) == {"games": {"Canfield": {"played": 2, "won": 1}}}
    assert Stats.load().game_stat("Canfield") == GameStat(2, 1)


def test_game_stat_is_a_copy():
    stats = Stats()
    stats.update_stat("Brigade", True)
    st = stats.game_stat("Brigade")
    st.played = 10
    assert stats.game_stat("Brigade").played == 1


def test_corrupt_stats_are_ignored(settings_home, caplog):
    settings_home.mkdir()
    (settings_home / "stats.json").write_text("{not json", encoding="utf-8")
    with caplog.at_level(logging.WARNING, logger="solitaire_kit.common"):
        stats = Stats.load()
    assert stats.games == {}
    assert "failed to load" in caplog.text


def test_bad_entries_are_skipped(settings_home):
    settings_home.mkdir()
    data = {"games": {"Deuces": {"played": "x"}, "Brigade": {"played": 3, "won": 1}, "Batsford": 4}}
    (settings_home / "stats.json").write_text(json.dumps(data), encoding="utf-8")
    assert Stats.load().games == {"Brigade": GameStat(3, 1)}


def test_failed_save_is_logged(tmp_path, caplog):
    blocker = tmp_path / "file"
    blocker.write_text("", encoding="utf-8")
    with caplog.at_level(logging.WARNING, logger="solitaire_kit.common"):
        assert not Stats().save(str(blocker / "stats.json"))
    assert "failed to save" in caplog.text


def test_user_conf_round_trip():
    assert UserConf.load().last_played == ""
    assert UserConf("Free cell").save()
    assert UserConf.load().last_played == "Free cell"
