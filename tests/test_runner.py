"""Tests for the headless runners and the CLI."""

import json

import pytest

from powersnake.cli import _build_parser, main
from powersnake.config import EngineConfig
from powersnake.runner import RunResult, run_realtime, simulate


class TestRunResult:
    def test_summary_format(self):
        result = RunResult(
            status="gameOver",
            score=7,
            ticks=120,
            snake_length=10,
            game_seconds=31.5,
            wall_time_seconds=0.2,
            state={},
        )
        summary = result.summary()
        assert "gameOver" in summary
        assert "120 ticks" in summary
        assert "score 7" in summary


class TestSimulate:
    def test_autopilot_game(self):
        result = simulate(30, seed=3)
        assert result.ticks > 0
        assert result.status in ("playing", "gameOver")
        assert result.game_seconds <= 30.01
        assert result.snake_length == 3 + result.score

    def test_same_seed_same_outcome(self):
        a = simulate(20, seed=9)
        b = simulate(20, seed=9)
        assert a.state == b.state

    def test_without_autopilot_hits_nothing_on_open_board(self):
        result = simulate(5, seed=1, autopilot=False)
        assert result.status == "playing"
        assert result.ticks == 16

    def test_custom_config(self):
        config = EngineConfig(base_tick_ms=200, min_tick_ms=100)
        result = simulate(2.1, config=config, seed=1, autopilot=False)
        assert result.ticks == 10


class TestRealtime:
    @pytest.mark.asyncio
    async def test_short_run(self):
        result = await run_realtime(0.5, seed=1)
        assert result.ticks >= 1
        assert result.status in ("playing", "gameOver")
        # A game cut off at the deadline is left paused.
        if result.status == "playing":
            assert result.state["status"] == "paused"


class TestCLIParser:
    def test_no_command_returns_1(self):
        assert main([]) == 1

    def test_simulate_defaults(self):
        args = _build_parser().parse_args(["simulate"])
        assert args.command == "simulate"
        assert args.seconds == 120.0
        assert args.seed is None
        assert args.config is None
        assert not args.no_autopilot

    def test_run_defaults(self):
        args = _build_parser().parse_args(["run"])
        assert args.seconds == 10.0


class TestCLIRun:
    def test_simulate_summary(self, capsys):
        assert main(["simulate", "--seconds", "5", "--seed", "2"]) == 0
        assert "Run:" in capsys.readouterr().out

    def test_simulate_json(self, capsys, tmp_path):
        path = tmp_path / "engine.json"
        EngineConfig(boost_duration_ms=2000).save(path)
        code = main([
            "simulate", "--seconds", "3", "--seed", "2",
            "--config", str(path), "--json",
        ])
        assert code == 0
        state = json.loads(capsys.readouterr().out)
        assert state["status"] in ("playing", "gameOver")
        assert "audio" in state

    def test_missing_config_file(self, tmp_path):
        code = main([
            "simulate", "--config", str(tmp_path / "missing.json"),
        ])
        assert code == 2
