"""Tests for the immutable game configuration."""

import sys
import os
from dataclasses import replace

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest

from snekyfox.config import GameConfig
from snekyfox.core.enums import SoundCue


class TestGameConfig:
    def test_hashable(self):
        assert hash(GameConfig()) == hash(GameConfig())
        assert {GameConfig(): "default"}[GameConfig()] == "default"

    def test_equal_defaults(self):
        assert GameConfig() == GameConfig()
        assert GameConfig() != GameConfig(start_level="level_2")

    def test_cue_lengths_read_only(self):
        cfg = GameConfig()
        assert cfg.cue_lengths[SoundCue.BARK] == 0.8
        with pytest.raises(TypeError):
            cfg.cue_lengths[SoundCue.BARK] = 5.0

    def test_custom_cue_lengths_copied_and_frozen(self):
        lengths = {SoundCue.MOVE: 0.5}
        cfg = GameConfig(cue_lengths=lengths)
        lengths[SoundCue.MOVE] = 9.0
        assert cfg.cue_lengths[SoundCue.MOVE] == 0.5
        with pytest.raises(TypeError):
            cfg.cue_lengths[SoundCue.MOVE] = 1.0
        hash(cfg)

    def test_replace_keeps_mapping(self):
        cfg = replace(GameConfig(), tick_rate=0.1)
        assert cfg.tick_rate == 0.1
        assert cfg.cue_lengths == GameConfig().cue_lengths
