# cave_escape/tests/test_game.py
"""Key handling of the pygame front-end (no window needed)."""
from __future__ import annotations
from pygame import K_SPACE, K_ESCAPE, K_p, K_r, K_n

from cave_escape.game.game import handle_key, parse_args
from cave_escape.game.session import Session, TITLE, PLAYING, PAUSED, GAMEOVER


def test_title_keys():
    s = Session(seed=1.0)
    assert handle_key(s, K_SPACE)
    assert s.state == PLAYING
    assert handle_key(s, K_p)
    assert s.state == PAUSED
    assert handle_key(s, K_ESCAPE)
    assert s.state == TITLE
    assert not handle_key(s, K_ESCAPE), "ESC on the title screen quits"


def test_gameover_keys():
    s = Session(seed=1.0)
    s.start()
    s.state = GAMEOVER
    handle_key(s, K_r)
    assert s.state == PLAYING and s.seed == 1.0
    s.state = GAMEOVER
    handle_key(s, K_n)
    assert s.state == PLAYING


def test_parse_args():
    args = parse_args(["--seed", "4.5", "--stage", "3", "--continuous"])
    assert args.seed == 4.5 and args.stage == 3 and args.continuous
    assert parse_args([]).log_level == "WARNING"
