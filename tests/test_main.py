"""
Tests for the CLI entry point.
"""

import sys

import pytest

import main


@pytest.mark.parametrize("argv", [
    ["--iou-threshold", "-3"],
    ["--score-threshold", "2"],
    ["--output-mode", "prnt"],
])
def test_main_rejects_invalid_cli_values(monkeypatch, argv):
    """Invalid CLI values fail before any model or input is touched."""
    def _unexpected(*args, **kwargs):
        raise AssertionError("reader must not be built from an invalid config")

    monkeypatch.setattr(sys, "argv", ["main.py", *argv])
    monkeypatch.setattr(main, "MeterReader", _unexpected)

    assert main.main() == 1


def test_cli_overrides_skip_unset_arguments(monkeypatch):
    monkeypatch.setattr(sys, "argv", ["main.py", "--iou-threshold", "0.3"])
    overrides = main._cli_overrides(main.parse_args())

    assert overrides["detection"] == {"score_threshold": None, "iou_threshold": 0.3}
    assert overrides["output"] == {"mode": None}
