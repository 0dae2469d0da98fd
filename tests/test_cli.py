"""Command-line parsing tests; nothing here opens a window."""

import pytest

from chip8vm import cli
from chip8vm.config import CPU_HZ
from chip8vm.errors import ConfigError


def test_rom_only_uses_default_frequency():
    assert cli.parse_args(["pong.ch8"]) == ("pong.ch8", CPU_HZ)


def test_frequency_override():
    assert cli.parse_args(["pong.ch8", "1000"]) == ("pong.ch8", 1000.0)


@pytest.mark.parametrize("text", ["fast", "", "0", "-5", "nan", "inf"])
def test_invalid_frequency(text):
    with pytest.raises(ConfigError):
        cli.parse_args(["pong.ch8", text])


@pytest.mark.parametrize("argv", [[], ["a", "b", "c"]])
def test_wrong_argument_count(argv):
    with pytest.raises(ConfigError):
        cli.parse_args(argv)


def test_main_reports_missing_rom(tmp_path, caplog):
    assert cli.main([str(tmp_path / "missing.ch8")]) == 1
    assert "Could not load ROM" in caplog.text


def test_main_reports_bad_frequency(caplog):
    assert cli.main(["pong.ch8", "fast"]) == 1
    assert "Invalid frequency" in caplog.text
