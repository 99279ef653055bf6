"""Tests for the running-level tick: movement, bones, mail, and victory."""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest

from snekyfox.config import GameConfig
from snekyfox.core.enums import Direction, GameState, SoundCue
from snekyfox.core.models import Dead, Vector2
from snekyfox.engine.simulation import TickInput, WorldSimulation, resolve_move
from snekyfox.systems.audio import RecordingAudio
from tests.helpers.level_arena import LevelArena


def _machine(arena: LevelArena, **config):
    audio = RecordingAudio(GameConfig().cue_lengths)
    cfg = GameConfig(start_level=arena.name, **config)
    return arena.machine(config=cfg, audio=audio), audio


# ---------------------------------------------------------------------------
# Input resolution
# ---------------------------------------------------------------------------

class TestResolveMove:
    @pytest.mark.parametrize("keys,expected", [
        (TickInput(left=True), Vector2(-1, 0)),
        (TickInput(right=True), Vector2(1, 0)),
        (TickInput(up=True), Vector2(0, -1)),
        (TickInput(down=True), Vector2(0, 1)),
    ])
    def test_single_direction(self, keys, expected):
        assert resolve_move(keys) == expected

    @pytest.mark.parametrize("keys", [
        TickInput(),
        TickInput(confirm=True),
        TickInput(left=True, right=True),
        TickInput(up=True, down=True),
        TickInput(up=True, right=True),
    ])
    def test_no_move(self, keys):
        assert resolve_move(keys) is None

    def test_merge(self):
        merged = TickInput(left=True).merge(TickInput(confirm=True))
        assert merged == TickInput(left=True, confirm=True)


# ---------------------------------------------------------------------------
# Fox movement
# ---------------------------------------------------------------------------

class TestFoxMovement:
    def test_walk_across_open_floor(self):
        arena = LevelArena.floor(3, 4).fox(0, 0).mail(2, 3).mailbox(2, 0)
        machine, audio = _machine(arena)
        arena.play(machine, "RDDR")
        fox = machine.world.fox
        assert fox.pos == Vector2(2, 2)
        assert fox.dir is Direction.EAST
        assert audio.count(SoundCue.MOVE) == 4
        assert machine.state is GameState.RUNNING

    def test_cannot_leave_grid(self):
        arena = LevelArena.floor(3, 4).fox(0, 0).mail(2, 3).mailbox(2, 0)
        machine, audio = _machine(arena)
        arena.play(machine, "LU")
        assert machine.world.fox.pos == Vector2(0, 0)
        assert machine.world.fox.dir is Direction.NORTH
        assert audio.count(SoundCue.MOVE) == 0

    def test_cannot_enter_empty_tile(self):
        arena = LevelArena([[1, 0], [1, 1]]).fox(0, 0, "south").mail(1, 1).mailbox(0, 1)
        machine, _ = _machine(arena)
        arena.play(machine, "R")
        assert machine.world.fox.pos == Vector2(0, 0)
        assert machine.world.fox.dir is Direction.SOUTH

    def test_conflicting_keys_do_nothing(self):
        arena = LevelArena.floor(3, 3).fox(1, 1).mail(2, 2).mailbox(0, 0)
        machine, _ = _machine(arena)
        machine.update(0.1, TickInput(left=True, right=True))
        assert machine.world.fox.pos == Vector2(1, 1)

    def test_time_accumulates(self):
        arena = LevelArena.floor(3, 3).fox(1, 1).mail(2, 2).mailbox(0, 0)
        machine, _ = _machine(arena)
        arena.play(machine, "....", dt=0.25)
        assert machine.world.time == 1.0

    def test_non_unit_move_rejected(self):
        world = LevelArena.floor(3, 3).fox(0, 0).mail(2, 2).mailbox(0, 2).world()
        sim = WorldSimulation(GameConfig(), RecordingAudio())
        with pytest.raises(ValueError):
            sim.try_move_fox(world, Vector2(1, 1))


class TestFoxAttacksPug:
    def test_walking_into_pug_kills_it(self):
        arena = LevelArena.floor(4, 3).fox(0, 0).mail(3, 2).mailbox(0, 2).pug(1, 0)
        machine, audio = _machine(arena)
        arena.play(machine, "R", dt=0.25)
        pug = machine.world.pugs[0]
        assert machine.world.fox.pos == Vector2(1, 0)
        assert machine.world.fox.alive
        # Dies on the move, then ages with the rest of the tick.
        assert pug.life == Dead(0.25)
        assert audio.count(SoundCue.LOST_LEVEL) == 1
        assert machine.state is GameState.RUNNING

    def test_dead_pug_removed_after_delay(self):
        arena = LevelArena.floor(4, 3).fox(0, 0).mail(3, 2).mailbox(0, 2).pug(1, 0)
        machine, _ = _machine(arena)
        arena.play(machine, "R..", dt=0.25)
        assert len(machine.world.pugs) == 1
        arena.play(machine, ".", dt=0.25)
        assert machine.world.pugs == []

    def test_lost_cue_not_restarted_while_playing(self):
        arena = (LevelArena.floor(4, 2).fox(0, 0).mail(3, 1).mailbox(0, 1)
                 .pug(1, 0).pug(2, 0).pug(3, 0))
        machine, audio = _machine(arena)
        arena.play(machine, "RR")
        assert audio.count(SoundCue.LOST_LEVEL) == 1
        audio.advance(5.0)
        arena.play(machine, "R")
        assert audio.count(SoundCue.LOST_LEVEL) == 2


# ---------------------------------------------------------------------------
# Bones
# ---------------------------------------------------------------------------

class TestBones:
    def test_stepping_on_bone_selects_it_next_tick(self):
        arena = LevelArena.floor(4, 3).fox(0, 0).bone(1, 0).mail(3, 2).mailbox(0, 2)
        machine, _ = _machine(arena)
        arena.play(machine, "R")
        bone = machine.world.bones[0]
        assert not bone.selected
        arena.play(machine, "R")
        # Pickup consumes the move.
        assert bone.selected
        assert machine.world.fox.pos == Vector2(1, 0)

    def test_throw(self):
        arena = LevelArena.floor(4, 3).fox(1, 0).bone(1, 0).mail(3, 2).mailbox(0, 2)
        machine, _ = _machine(arena)
        arena.play(machine, ".D")
        bone = machine.world.bones[0]
        assert bone.pos == Vector2(1, 1)
        assert bone.used and not bone.selected
        assert bone.timer == 1.5
        assert machine.world.fox.pos == Vector2(1, 0)

    def test_selected_bone_waits_for_direction(self):
        arena = LevelArena.floor(4, 3).fox(1, 0).bone(1, 0).mail(3, 2).mailbox(0, 2)
        machine, _ = _machine(arena)
        arena.play(machine, "...C")
        assert machine.world.bones[0].selected

    @pytest.mark.parametrize("keys", [".U", ".R"])
    def test_throw_to_missing_tile_still_consumes_move(self, keys):
        arena = LevelArena([[1, 1, 0], [1, 1, 1]]).fox(1, 0).bone(1, 0).mail(2, 1).mailbox(0, 1)
        machine, audio = _machine(arena)
        arena.play(machine, keys)
        bone = machine.world.bones[0]
        assert bone.selected and not bone.used
        assert bone.pos == Vector2(1, 0)
        assert machine.world.fox.pos == Vector2(1, 0)
        assert audio.count(SoundCue.MOVE) == 0

    def test_blink_then_vanish(self):
        arena = LevelArena.floor(4, 3).fox(1, 0).bone(1, 0).mail(3, 2).mailbox(0, 2)
        machine, _ = _machine(arena, bone_blink_interval=0.5)
        arena.play(machine, ".D", dt=0.25)
        bone = machine.world.bones[0]

        seen = []
        for _ in range(6):
            arena.play(machine, ".", dt=0.25)
            seen.append(bone.visible)
        assert seen == [True, True, False, False, True, False]
        assert bone.timer == 0.0

        arena.play(machine, "...", dt=0.25)
        assert not bone.visible
        assert bone.used
        assert bone.pos == Vector2(1, 1)

    def test_used_bone_cannot_be_picked_up_again(self):
        arena = LevelArena.floor(4, 3).fox(1, 0).bone(1, 0).mail(3, 2).mailbox(0, 2)
        machine, _ = _machine(arena)
        arena.play(machine, ".DD.")
        bone = machine.world.bones[0]
        assert machine.world.fox.pos == Vector2(1, 1)
        assert not bone.selected


# ---------------------------------------------------------------------------
# Mail and victory
# ---------------------------------------------------------------------------

class TestMailAndVictory:
    def test_pickup_once(self):
        arena = LevelArena.floor(3, 3).fox(0, 0).mail(1, 0).mailbox(2, 2)
        machine, audio = _machine(arena)
        arena.play(machine, "RLR")
        assert machine.world.fox.has_mail
        assert audio.count(SoundCue.GOT_MAIL) == 1

    def test_mailbox_without_mail(self):
        arena = LevelArena.floor(3, 3).fox(0, 0).mail(2, 2).mailbox(1, 0)
        machine, audio = _machine(arena)
        assert arena.play(machine, "R") is GameState.RUNNING
        assert audio.count(SoundCue.WON_LEVEL) == 0

    def test_deliver(self):
        arena = LevelArena.floor(3, 4).fox(0, 0).mail(2, 3).mailbox(2, 0)
        machine, audio = _machine(arena)
        assert arena.play(machine, "RRDDD") is GameState.RUNNING
        assert arena.play(machine, "UUU") is GameState.WON
        assert audio.count(SoundCue.WON_LEVEL) == 1

        # Further ticks without confirm neither move the fox nor replay the cue.
        arena.play(machine, "LLL")
        assert machine.world.fox.pos == Vector2(2, 0)
        assert audio.count(SoundCue.WON_LEVEL) == 1

    def test_mail_and_mailbox_on_same_tile(self):
        arena = LevelArena.floor(3, 3).fox(0, 0).mail(1, 0).mailbox(1, 0)
        machine, audio = _machine(arena)
        assert arena.play(machine, "R") is GameState.WON
        assert audio.played[-2:] == [SoundCue.GOT_MAIL, SoundCue.WON_LEVEL]

    def test_caught_on_mailbox_is_not_a_win(self):
        arena = (LevelArena.floor(3, 3).fox(0, 0).mail(1, 0).mailbox(2, 0)
                 .pug(2, 1, "north"))
        machine, audio = _machine(arena)
        assert arena.play(machine, "RR") is GameState.GAME_OVER
        assert audio.count(SoundCue.WON_LEVEL) == 0
