"""Finite state machine driving the core and game life cycle."""

from __future__ import annotations

from enum import Enum
from typing import Callable, Protocol


class State(Enum):
    CONSOLE_LOADED = "ConsoleLoaded"
    GAME_LOADED = "GameLoaded"
    GAME_PAUSED = "GamePaused"
    GAME_RUNNING = "GameRunning"
    QUIT = "Quit"
    START = "Start"


class _Context(Protocol):
    def load_core(self, path: str) -> bool: ...
    def load_game(self, path: str) -> bool: ...
    def pause_game(self) -> bool: ...
    def reset_game(self) -> bool: ...
    def resume_game(self) -> bool: ...
    def start_game(self) -> bool: ...
    def step(self) -> object: ...
    def unload_core(self) -> object: ...
    def unload_game(self) -> bool: ...


_TRANSITIONS: dict[State, frozenset[State]] = {
    State.CONSOLE_LOADED: frozenset({State.GAME_LOADED, State.QUIT, State.START}),
    State.GAME_LOADED: frozenset({State.CONSOLE_LOADED, State.GAME_RUNNING, State.QUIT}),
    State.GAME_PAUSED: frozenset(
        {State.CONSOLE_LOADED, State.GAME_PAUSED, State.GAME_RUNNING, State.QUIT}
    ),
    State.GAME_RUNNING: frozenset(
        {State.CONSOLE_LOADED, State.GAME_PAUSED, State.GAME_RUNNING, State.QUIT}
    ),
    State.QUIT: frozenset(),
    State.START: frozenset({State.CONSOLE_LOADED, State.QUIT}),
}

_GAME_STATES = frozenset({State.GAME_LOADED, State.GAME_PAUSED, State.GAME_RUNNING})


class LifeCycle:
    """Tracks the application state and forwards transitions to a context.

    Every transition method returns True when the machine switched state and
    False when the transition is not allowed from the current state or the
    context refused it.
    """

    def __init__(self, ctx: _Context, printer: Callable[[str], None] | None = None) -> None:
        self._ctx = ctx
        self._printer = printer
        self._state = State.START

    @property
    def state(self) -> State:
        return self._state

    def can_transition_to(self, state: State) -> bool:
        return state in _TRANSITIONS[self._state]

    def _print(self, message: str) -> None:
        if self._printer is not None:
            self._printer(message)

    def _switch(self, name: str, target: State) -> bool:
        self._state = target
        self._print(f"FSM {name}: Switched to {target.value}")
        return True

    def load_core(self, path: str) -> bool:
        if self._state is not State.START:
            return False
        if not self._ctx.load_core(path):
            return False
        return self._switch("load_core", State.CONSOLE_LOADED)

    def load_game(self, path: str) -> bool:
        if self._state is not State.CONSOLE_LOADED:
            return False
        if not self._ctx.load_game(path):
            return False
        return self._switch("load_game", State.GAME_LOADED)

    def pause_game(self) -> bool:
        if self._state is not State.GAME_RUNNING:
            return False
        if not self._ctx.pause_game():
            return False
        return self._switch("pause_game", State.GAME_PAUSED)

    def quit(self) -> bool:
        state = self._state

        if state is State.START:
            return self._switch("quit", State.QUIT)

        if state is State.CONSOLE_LOADED:
            ok = self.unload_core() and self.quit()
        elif state in _GAME_STATES:
            ok = self.unload_game() and self.quit()
        else:
            return False

        if not ok:
            self._print(f"FSM quit: Failed to switch to {State.QUIT.value}")
        return ok

    def reset_game(self) -> bool:
        if self._state is State.GAME_PAUSED:
            if not self._ctx.reset_game():
                return False
            return self._switch("reset_game", State.GAME_PAUSED)

        if self._state is State.GAME_RUNNING:
            self._ctx.reset_game()
            return self._switch("reset_game", State.GAME_RUNNING)

        return False

    def resume_game(self) -> bool:
        if self._state is not State.GAME_PAUSED:
            return False
        if not self._ctx.resume_game():
            return False
        return self._switch("resume_game", State.GAME_RUNNING)

    def start_game(self) -> bool:
        if self._state is not State.GAME_LOADED:
            return False
        if not self._ctx.start_game():
            return False
        return self._switch("start_game", State.GAME_RUNNING)

    def step(self) -> bool:
        if self._state is not State.GAME_PAUSED:
            return False
        self._ctx.step()
        return self._switch("step", State.GAME_PAUSED)

    def unload_core(self) -> bool:
        if self._state is not State.CONSOLE_LOADED:
            return False
        self._ctx.unload_core()
        return self._switch("unload_core", State.START)

    def unload_game(self) -> bool:
        if self._state not in _GAME_STATES:
            return False
        if not self._ctx.unload_game():
            return False
        return self._switch("unload_game", State.CONSOLE_LOADED)