# stickrun/tests/highscore_tests.py
from __future__ import annotations

from stickrun.game.highscore import HighScoreStore
from stickrun.game.simulation import Simulation


def test_missing_file_means_zero(tmp_path):
    assert HighScoreStore(tmp_path / "nope.json").load() == 0


def test_round_trip(tmp_path):
    store = HighScoreStore(tmp_path / "sub" / "best.json")
    store.save(41)
    assert store.load() == 41


def test_corrupt_file_means_zero(tmp_path):
    path = tmp_path / "best.json"
    path.write_text("{not json", encoding="utf-8")
    assert HighScoreStore(path).load() == 0
    path.write_text("[1, 2]", encoding="utf-8")
    assert HighScoreStore(path).load() == 0


def test_simulation_persists_new_best(tmp_path):
    store = HighScoreStore(tmp_path / "best.json")
    sim = Simulation(seed=8, best_score=store.load(), on_new_best=store.save)
    sim.start()
    sim._state.score = 12
    sim.advance_frame()
    assert store.load() == sim.metrics.score >= 12
