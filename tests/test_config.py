"""Configuration and command line tests."""

import pytest

from fishnchips.cli import aparser
from fishnchips.config import EngineConfig


class TestEngineConfig:

    def test_defaults(self):
        config = EngineConfig()
        assert config.instruction_rate_hz == 1000
        assert config.frame_rate_hz == 60
        assert config.beep_frequency_hz == 553.0
        assert config.gradient_coloring is False
        assert config.timer_rate_hz == 60

    @pytest.mark.parametrize("kwargs", [
        {"instruction_rate_hz": 0},
        {"instruction_rate_hz": -5},
        {"instruction_rate_hz": 2.5},
        {"frame_rate_hz": 0},
        {"beep_frequency_hz": 0},
        {"beep_frequency_hz": -440.0},
        {"scale": 0},
    ])
    def test_rejects(self, kwargs):
        with pytest.raises(ValueError):
            EngineConfig(**kwargs)

    def test_frequency_is_float(self):
        assert EngineConfig(beep_frequency_hz=440).beep_frequency_hz == 440.0


class TestCommandLine:

    def test_defaults(self):
        config = EngineConfig.from_args(aparser.parse_args(["game.ch8"]))
        assert config.instruction_rate_hz == 1000
        assert config.frame_rate_hz == 60
        assert config.beep_frequency_hz == 553.0
        assert not config.gradient_coloring
        assert not config.show_registers

    def test_options(self):
        args = aparser.parse_args(["-c", "500", "-f", "30", "-v", "440.5", "-g",
            "--show-registers", "game.ch8"])
        assert args.program == "game.ch8"
        config = EngineConfig.from_args(args)
        assert config.instruction_rate_hz == 500
        assert config.frame_rate_hz == 30
        assert config.beep_frequency_hz == 440.5
        assert config.gradient_coloring
        assert config.show_registers

    def test_program_required(self):
        with pytest.raises(SystemExit):
            aparser.parse_args([])
