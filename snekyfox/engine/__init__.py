"""Engine layer: per-tick world simulation and the level lifecycle state machine."""

from snekyfox.engine.simulation import NO_INPUT, TickInput, WorldSimulation, resolve_move
from snekyfox.engine.game_state import GameStateMachine

__all__ = ["GameStateMachine", "NO_INPUT", "TickInput", "WorldSimulation", "resolve_move"]
