# dinorun/tests/game_unit.py
from dinorun.game.game import Scheduler, parse_args


def test_scheduler_runs_at_most_one_tick_per_callback():
    s = Scheduler(fps=60, max_tick_hz=120)
    assert s.due(16.7)        # normal 60 Hz frame
    assert s.due(250.0)       # a stall is still just one tick, no catch-up
    assert not s.due(4.0)     # 240 Hz host: too soon
    assert s.due(4.5)         # ...but short frames add up


def test_cli_defaults():
    args = parse_args([])
    assert args.seed is None and args.scores is None
    assert args.fps == 60 and args.log_level == "INFO"

    args = parse_args(["--seed", "7", "--scores", "/tmp/s.json", "--log-level", "DEBUG"])
    assert (args.seed, args.scores, args.log_level) == (7, "/tmp/s.json", "DEBUG")
