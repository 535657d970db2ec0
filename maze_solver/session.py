"""Session state machine for a maze front-end.

    DRAWING  --start_training-->  TRAINING  --finished-->  PLAYING
       ^                              |                       |
       +----------- reset ------------+-------- reset --------+

A front-end (canvas editor, CLI, notebook) talks to the engine only through
this class:
  - editing goes through `select_tool` / `apply_tool` while DRAWING
  - `start_training` and `play` run the engine synchronously
  - renderers `subscribe` to immutable StepSnapshots
  - `reset` cancels an in-flight run at the next step boundary, drops the
    networks and returns to DRAWING
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, Optional, Set

from .config import MAZE_CONFIG
from .environment.maze import Maze, Position
from .training.agent import DQNAgent
from .training.core import StepSnapshot, TrainingResult, train
from .training.encoder import StateEncoder
from .training.playback import PlaybackResult, play
from .utils import seed_everything


class GameState(Enum):
    DRAWING = "drawing"
    TRAINING = "training"
    PLAYING = "playing"


class Tool(Enum):
    WALL = "wall"
    START = "start"
    GOAL = "goal"
    ERASER = "eraser"


@dataclass(frozen=True)
class SessionView:
    """Renderer-visible state between steps."""

    state: GameState
    tool: Tool
    agent_pos: Optional[Position]
    path: tuple[Position, ...]
    episode: int
    score: float
    training_complete: bool
    direction: str = "None"


Listener = Callable[[StepSnapshot], None]


class MazeSession:
    """Owns the maze being drawn and the agent trained on it."""

    _valid_transitions: Dict[GameState, Set[GameState]] = {
        GameState.DRAWING: {GameState.TRAINING, GameState.PLAYING},
        GameState.TRAINING: {GameState.PLAYING, GameState.DRAWING},
        GameState.PLAYING: {GameState.DRAWING},
    }

    def __init__(self, rows: int = MAZE_CONFIG["rows"], columns: int = MAZE_CONFIG["columns"], maze: Optional[Maze] = None):
        self.maze = maze if maze is not None else Maze(rows, columns)
        self.state = GameState.DRAWING
        self.tool = Tool.WALL
        self.agent: Optional[DQNAgent] = None
        self.training_complete = False
        self.last_result: Optional[TrainingResult] = None

        # Projection of the latest snapshot.
        self.agent_pos: Optional[Position] = None
        self.path: tuple[Position, ...] = ()
        self.episode = 0
        self.score = 0.0
        self.direction = "None"

        self._listeners: List[Listener] = []
        self._run_active = False
        self._cancel_requested = False

    # -------------------- State machine --------------------

    def can_transition(self, to_state: GameState) -> bool:
        return to_state in self._valid_transitions.get(self.state, set())

    def _transition(self, to_state: GameState) -> bool:
        if not self.can_transition(to_state):
            return False
        self.state = to_state
        return True

    @property
    def is_running(self) -> bool:
        return self._run_active

    # -------------------- Observers --------------------

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a snapshot listener; returns a function that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _emit(self, snapshot: StepSnapshot) -> None:
        self.agent_pos = snapshot.agent_pos
        self.path = snapshot.path
        self.score = snapshot.score
        self.direction = snapshot.direction
        if snapshot.phase != "playing":
            self.episode = snapshot.episode
        for listener in list(self._listeners):
            listener(snapshot)

    def view(self) -> SessionView:
        return SessionView(
            state=self.state,
            tool=self.tool,
            agent_pos=self.agent_pos,
            path=self.path,
            episode=self.episode,
            score=self.score,
            training_complete=self.training_complete,
            direction=self.direction,
        )

    # -------------------- Editing --------------------

    def select_tool(self, tool: Tool) -> None:
        self.tool = Tool(tool)

    def apply_tool(self, row: int, col: int) -> bool:
        """Apply the selected tool to one cell. Ignored outside DRAWING."""
        if self.state is not GameState.DRAWING or not self.maze.in_bounds((row, col)):
            return False

        if self.tool is Tool.WALL:
            return self.maze.set_wall(row, col)
        if self.tool is Tool.ERASER:
            return self.maze.clear_cell(row, col)
        if self.tool is Tool.START:
            return self.maze.set_start(row, col)
        if self.tool is Tool.GOAL:
            return self.maze.set_goal(row, col)
        return False

    # -------------------- Runs --------------------

    def _should_stop(self) -> bool:
        return self._cancel_requested

    def _reset_agent_view(self) -> None:
        self.agent_pos = self.maze.start
        self.path = ()
        self.score = 0.0
        self.direction = "None"

    def start_training(self, **train_kwargs) -> Optional[TrainingResult]:
        """Train on the current maze, then switch to PLAYING.

        Raises MissingEndpointsError without a valid start and goal. Returns
        None when training cannot start from the current state.
        """
        self.maze.validate_endpoints()
        if self._run_active or not self._transition(GameState.TRAINING):
            return None

        if self.agent is None:
            if train_kwargs.get("seed") is not None:
                seed_everything(train_kwargs["seed"])
            self.agent = DQNAgent(StateEncoder.for_maze(self.maze))
        self.training_complete = False
        self.episode = 0
        self._reset_agent_view()

        self._run_active = True
        self._cancel_requested = False
        try:
            result = train(
                self.maze,
                agent=self.agent,
                on_step=self._emit,
                should_stop=self._should_stop,
                **train_kwargs,
            )
            cancelled = result.cancelled or self._cancel_requested
        except Exception:
            self.state = GameState.DRAWING
            raise
        finally:
            self._run_active = False
            self._cancel_requested = False

        if cancelled:
            result.cancelled = True
            result.completed = False
            return result

        self.last_result = result
        self.training_complete = True
        self._transition(GameState.PLAYING)
        self._reset_agent_view()
        return result

    def play(self, **play_kwargs) -> Optional[PlaybackResult]:
        """Run / Show solution.

        Greedy over the trained agent once training has completed, the
        heuristic otherwise. Raises MissingEndpointsError without endpoints.
        """
        self.maze.validate_endpoints()
        if self._run_active or self.state is GameState.TRAINING:
            return None

        self._reset_agent_view()
        self._run_active = True
        self._cancel_requested = False
        try:
            result = play(
                self.maze,
                self.agent if self.training_complete else None,
                on_step=self._emit,
                should_stop=self._should_stop,
                **play_kwargs,
            )
        finally:
            self._run_active = False
            self._cancel_requested = False
        return result

    def reset(self, clear_maze: bool = True) -> None:
        """Reset All: cancel any run, drop trained parameters, back to DRAWING."""
        if self._run_active:
            self._cancel_requested = True

        if self.agent is not None:
            self.agent.close()
            self.agent = None

        self.training_complete = False
        self.last_result = None
        self.episode = 0
        self.agent_pos = None
        self.path = ()
        self.score = 0.0
        self.direction = "None"
        if clear_maze:
            self.maze.clear()
        self.state = GameState.DRAWING
