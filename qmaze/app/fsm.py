"""Finite State Machine for the simulation's LEARN and PLAY phases."""

from enum import Enum, auto
from typing import Dict, Callable, Optional


class SimulationPhase(Enum):
    """Phases of the simulation."""
    LEARN = auto()
    PLAY = auto()


class PhaseStateMachine:
    """State machine for managing the simulation phase."""

    def __init__(self):
        self.current_state = SimulationPhase.LEARN
        self._enter_callbacks: Dict[SimulationPhase, Callable[[Optional[Dict]], None]] = {}

        # PLAY -> PLAY restarts the replay; learning is never resumed
        self._valid_transitions = {
            SimulationPhase.LEARN: {SimulationPhase.PLAY},
            SimulationPhase.PLAY: {SimulationPhase.PLAY},
        }

    def on_state_enter(self, state: SimulationPhase, callback: Callable[[Optional[Dict]], None]):
        """Register callback for state entry."""
        self._enter_callbacks[state] = callback

    def can_transition(self, to_state: SimulationPhase) -> bool:
        """Check if transition to target state is valid."""
        return to_state in self._valid_transitions.get(self.current_state, set())

    def transition(self, to_state: SimulationPhase, context: Optional[Dict] = None) -> bool:
        """Attempt to transition to target state."""
        if not self.can_transition(to_state):
            return False

        self.current_state = to_state

        if to_state in self._enter_callbacks:
            self._enter_callbacks[to_state](context)

        return True

    def start_play(self, context: Optional[Dict] = None) -> bool:
        """Enter (or restart) the replay phase."""
        return self.transition(SimulationPhase.PLAY, context)

    def is_learning(self) -> bool:
        return self.current_state == SimulationPhase.LEARN

    def is_playing(self) -> bool:
        return self.current_state == SimulationPhase.PLAY

    def get_state_description(self) -> str:
        """Get human-readable state description."""
        descriptions = {
            SimulationPhase.LEARN: "Learning - random walk with Q-value updates",
            SimulationPhase.PLAY: "Replaying learned policy",
        }
        return descriptions.get(self.current_state, "Unknown state")
