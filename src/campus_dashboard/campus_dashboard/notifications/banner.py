"""Banner and processing-state handling for admin action panels.

BannerState is an immutable value; the module-level functions are its
transitions. BannerController owns the current state plus the single
auto-dismiss timer, and cancels the previous timer before starting a new one.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, Optional, Protocol

from ..core.constants import ERROR_DISMISS_SECONDS, SUCCESS_DISMISS_SECONDS


class BannerKind(str, Enum):
    IDLE = "idle"
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class BannerState:
    success_message: str = ""
    error_message: str = ""
    processing_id: Optional[str] = None

    @property
    def kind(self) -> BannerKind:
        if self.success_message:
            return BannerKind.SUCCESS
        if self.error_message:
            return BannerKind.ERROR
        return BannerKind.IDLE

    @property
    def message(self) -> str:
        return self.success_message or self.error_message


def start_action(state: BannerState, target_id: str) -> BannerState:
    return replace(state, success_message="", error_message="", processing_id=target_id)


def action_succeeded(state: BannerState, message: str) -> BannerState:
    return replace(state, success_message=message, error_message="", processing_id=None)


def action_failed(state: BannerState, message: str) -> BannerState:
    return replace(state, success_message="", error_message=message, processing_id=None)


def dismiss(state: BannerState) -> BannerState:
    return replace(state, success_message="", error_message="")


def can_start(state: BannerState, target_id: str) -> bool:
    """Per-target double-click guard (not a global lock)."""
    return state.processing_id != target_id


class TimerHandle(Protocol):
    def cancel(self) -> None:
        raise NotImplementedError


class Scheduler(Protocol):
    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        raise NotImplementedError


class ThreadingScheduler:
    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        timer = threading.Timer(delay, callback)
        timer.daemon = True
        timer.start()
        return timer


class BannerController:
    def __init__(
        self,
        *,
        scheduler: Optional[Scheduler] = None,
        success_delay: float = SUCCESS_DISMISS_SECONDS,
        error_delay: float = ERROR_DISMISS_SECONDS,
    ):
        self._scheduler = scheduler or ThreadingScheduler()
        self._success_delay = success_delay
        self._error_delay = error_delay
        self._state = BannerState()
        self._timer: Optional[TimerHandle] = None
        self._generation = 0
        self._lock = threading.RLock()

    @property
    def state(self) -> BannerState:
        return self._state

    def can_start(self, target_id: str) -> bool:
        return can_start(self._state, target_id)

    def begin(self, target_id: str) -> bool:
        """Enter processing for target_id; False if it is already in flight."""
        with self._lock:
            if not can_start(self._state, target_id):
                return False
            self._cancel_timer()
            self._state = start_action(self._state, target_id)
            return True

    def succeed(self, message: str) -> None:
        self._show(action_succeeded(self._state, message), self._success_delay)

    def fail(self, message: str) -> None:
        self._show(action_failed(self._state, message), self._error_delay)

    def dismiss(self) -> None:
        with self._lock:
            self._cancel_timer()
            self._state = dismiss(self._state)

    def close(self) -> None:
        """Release the pending timer, e.g. when the view goes away."""
        with self._lock:
            self._cancel_timer()

    def _show(self, new_state: BannerState, delay: float) -> None:
        with self._lock:
            self._cancel_timer()
            self._state = new_state
            generation = self._generation
            self._timer = self._scheduler.call_later(delay, lambda: self._expire(generation))

    def _expire(self, generation: int) -> None:
        with self._lock:
            # A newer message owns the banner now.
            if generation != self._generation:
                return
            self._timer = None
            self._state = dismiss(self._state)

    def _cancel_timer(self) -> None:
        self._generation += 1
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
