"""Simulation controller driving the Q-learning engine tick by tick."""

from typing import Dict, Optional

from ..domain.gridworld import GridWorld
from ..domain.qlearning import QLearningAgent, QTable
from ..domain.types import (
    Cell, QValues, RLConfig, SimulationState, LearningResult, PathfindingResult
)
from ..utils.rng import SeededRNG
from .fsm import PhaseStateMachine, SimulationPhase


class MazeController:
    """
    Controller that owns the simulation state and calls the engine.

    Each tick() corresponds to one rendered frame of the demo: in the LEARN
    phase it runs a burst of random-walk update steps, in the PLAY phase it
    makes one greedy move every play_tick_interval + 1 ticks until the agent
    stands on the goal. start_play() is the user action that ends learning.
    """

    def __init__(self, world: GridWorld, start: Cell, config: Optional[RLConfig] = None,
                 rng: Optional[SeededRNG] = None):
        if not world.in_bounds(start):
            raise ValueError(f"Start position {start} is out of bounds")
        if world.is_wall(start):
            raise ValueError(f"Start position {start} is a wall")

        self._world = world
        self._start = start
        self._config = (config or RLConfig()).validate()
        self._agent = QLearningAgent(world, self._config, rng=rng)
        self._state = SimulationState(position=start)
        self._state_machine = PhaseStateMachine()

        self._setup_state_callbacks()

    def _setup_state_callbacks(self):
        """Setup callbacks for state machine transitions."""
        self._state_machine.on_state_enter(SimulationPhase.PLAY, self._on_play_entered)

    # Properties

    @property
    def world(self) -> GridWorld:
        return self._world

    @property
    def start(self) -> Cell:
        return self._start

    @property
    def config(self) -> RLConfig:
        return self._config

    @property
    def agent(self) -> QLearningAgent:
        return self._agent

    @property
    def q_table(self) -> QTable:
        return self._agent.q_table

    @property
    def state(self) -> SimulationState:
        return self._state

    @property
    def position(self) -> Cell:
        return self._state.position

    @property
    def phase(self) -> SimulationPhase:
        return self._state_machine.current_state

    @property
    def status(self) -> str:
        """Human-readable phase description."""
        return self._state_machine.get_state_description()

    # Driver

    def tick(self) -> bool:
        """
        Advance the simulation by one driver tick.

        Returns:
            True if the tracked position changed
        """
        self._state.ticks += 1
        if self._state_machine.is_learning():
            return self._learn_tick()
        return self._play_tick()

    def _learn_tick(self) -> bool:
        before = self._state.position
        for _ in range(self._config.learn_steps_per_tick):
            self._state.position, _direction = self._agent.learn_step(self._state.position)
            self._state.learning_steps += 1
        return self._state.position != before

    def _play_tick(self) -> bool:
        if self._state.play_frame < self._config.play_tick_interval:
            self._state.play_frame += 1
            return False

        self._state.play_frame = 0

        if self._state.position == self._world.goal:
            return False

        before = self._state.position
        self._state.position = self._agent.replay_step(before)
        self._state.replay_steps += 1
        if self._state.position != before:
            self._state.replay_path.append(self._state.position)
        return self._state.position != before

    def start_play(self) -> bool:
        """Switch to (or restart) replay from the start cell."""
        return self._state_machine.start_play()

    def _on_play_entered(self, context: Optional[Dict]):
        self._state.position = self._start
        self._state.play_frame = 0
        self._state.replay_steps = 0
        self._state.replay_path = [self._start]

    def learn(self, steps: int) -> LearningResult:
        """
        Run a headless burst of learning steps from the current position.

        Raises:
            RuntimeError: If the simulation has already left the LEARN phase
        """
        if not self._state_machine.is_learning():
            raise RuntimeError("Learning is only possible before replay starts")

        result = self._agent.learn(self._state.position, steps)
        self._state.position = result.final_position
        self._state.learning_steps += result.steps
        return result

    def run_replay(self, max_steps: Optional[int] = None) -> PathfindingResult:
        """
        Replay the greedy policy through the tick cadence.

        Enters PLAY if still learning, then ticks until the goal is reached or
        max_steps greedy moves were made.
        """
        if max_steps is None:
            max_steps = self._config.max_replay_steps
        if not self._state_machine.is_playing():
            self.start_play()

        while not self.is_finished() and self._state.replay_steps < max_steps:
            self.tick()

        return PathfindingResult(
            path=list(self._state.replay_path),
            steps_taken=self._state.replay_steps,
            found=self.is_finished(),
            wall_hits=self._state.replay_steps - (len(self._state.replay_path) - 1),
        )

    def is_finished(self) -> bool:
        """True once the replay has reached the goal."""
        return self._state_machine.is_playing() and self._state.position == self._world.goal

    def q_value_snapshot(self) -> Dict[Cell, QValues]:
        """Values for every cell of the maze, read without touching the table."""
        return {cell: self.q_table.values(cell) for cell in self._world.cells()}
