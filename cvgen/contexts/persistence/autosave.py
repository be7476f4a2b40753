"""
Debounced Auto-Save

Edits are applied to in-memory state immediately; saving them is debounced and
coalesced. The save lifecycle is an explicit state machine:

    IDLE ──EDIT──> PENDING_SAVE ──TIMER_FIRED──> SAVING ──SAVE_SUCCEEDED──> SAVED
                      ^    │                       │    ──SAVE_FAILED─────> ERROR
                      └EDIT┘ <────────EDIT─────────┘

An EDIT while SAVING schedules another save. When the in-flight save then
completes, its result is recorded as superseded and does not move the machine
to SAVED or ERROR; the later save decides the final state (last save wins).

Nothing here starts threads or timers: the caller drives poll() from its own
loop, and save_fn may be run elsewhere through start_save()/finish_save().
"""

import os
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

from dotenv import load_dotenv

from cvgen.contexts.persistence.api_client import ApiResponse
from cvgen.contexts.persistence.exceptions import InvalidTransitionError
from cvgen.contexts.persistence.logger import _log_debug, _log_warning, log_state_transition

load_dotenv()
AUTOSAVE_DELAY = float(os.getenv("CVGEN_AUTOSAVE_DELAY", "1.0"))


class SaveState(Enum):
    IDLE = "idle"
    PENDING_SAVE = "pending_save"
    SAVING = "saving"
    SAVED = "saved"
    ERROR = "error"


class SaveEvent(Enum):
    EDIT = "edit"
    TIMER_FIRED = "timer_fired"
    SAVE_SUCCEEDED = "save_succeeded"
    SAVE_FAILED = "save_failed"
    RESET = "reset"


# (state, event) -> next state; a missing pair is an invalid transition
TRANSITIONS: Dict[tuple, SaveState] = {
    (SaveState.IDLE, SaveEvent.EDIT): SaveState.PENDING_SAVE,
    (SaveState.IDLE, SaveEvent.RESET): SaveState.IDLE,
    (SaveState.PENDING_SAVE, SaveEvent.EDIT): SaveState.PENDING_SAVE,
    (SaveState.PENDING_SAVE, SaveEvent.TIMER_FIRED): SaveState.SAVING,
    (SaveState.PENDING_SAVE, SaveEvent.RESET): SaveState.IDLE,
    (SaveState.SAVING, SaveEvent.EDIT): SaveState.PENDING_SAVE,
    (SaveState.SAVING, SaveEvent.SAVE_SUCCEEDED): SaveState.SAVED,
    (SaveState.SAVING, SaveEvent.SAVE_FAILED): SaveState.ERROR,
    (SaveState.SAVED, SaveEvent.EDIT): SaveState.PENDING_SAVE,
    (SaveState.SAVED, SaveEvent.RESET): SaveState.IDLE,
    (SaveState.ERROR, SaveEvent.EDIT): SaveState.PENDING_SAVE,
    (SaveState.ERROR, SaveEvent.RESET): SaveState.IDLE,
}


def next_state(state: SaveState, event: SaveEvent) -> SaveState:
    """
    Look up the transition for (state, event).

    Raises:
        InvalidTransitionError: If the table has no entry for the pair
    """
    try:
        return TRANSITIONS[(state, event)]
    except KeyError:
        raise InvalidTransitionError(state, event) from None


@dataclass(frozen=True)
class TransitionRecord:
    """
    One entry of the machine history.

    superseded is True for a save completion that arrived after a newer edit;
    such a record leaves the state unchanged (from_state == to_state).
    """

    from_state: SaveState
    event: SaveEvent
    to_state: SaveState
    superseded: bool = False


@dataclass
class SaveTicket:
    """Handle for one save attempt, returned by start_save()."""

    generation: int
    payload: Dict[str, Any] = field(default_factory=dict)


class AutoSaveMachine:
    """The save state machine on its own, with a transition history."""

    def __init__(self):
        self.state = SaveState.IDLE
        self.history: List[TransitionRecord] = []

    def dispatch(self, event: SaveEvent) -> SaveState:
        """Apply event and return the new state."""
        new_state = next_state(self.state, event)
        self.history.append(TransitionRecord(self.state, event, new_state))
        log_state_transition(self.state, event, new_state)
        self.state = new_state
        return new_state

    def record_superseded(self, event: SaveEvent) -> None:
        """Record a stale save completion without changing state."""
        self.history.append(TransitionRecord(self.state, event, self.state, superseded=True))
        _log_debug(f"autosave {event.name} superseded by a newer edit (state stays {self.state.name})")


class DebouncedSaver:
    """
    Coalesces edits into debounced saves.

    Args:
        save_fn: Called with the merged payload; returns an ApiResponse
        delay: Debounce window in seconds, restarted by every edit
        clock: Monotonic time source (injected in tests)

    Example:
        >>> saver = DebouncedSaver(lambda payload: client.update_cv(cv_id, **payload))
        >>> saver.edit({"name": "Backend CV"})
        >>> saver.edit({"template_id": "modern"})
        >>> saver.flush()   # one request carrying both fields
        True
    """

    def __init__(
        self,
        save_fn: Callable[[Dict[str, Any]], ApiResponse],
        delay: float = AUTOSAVE_DELAY,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.save_fn = save_fn
        self.delay = delay
        self.clock = clock
        self.machine = AutoSaveMachine()
        self.last_error: Optional[str] = None
        self.last_response: Optional[ApiResponse] = None
        self._pending: Dict[str, Any] = {}
        self._deadline: Optional[float] = None
        self._generation = 0
        self._in_flight: Optional[int] = None
        # key -> generation of the latest save that sent it
        self._key_generation: Dict[str, int] = {}

    @property
    def state(self) -> SaveState:
        return self.machine.state

    @property
    def history(self) -> List[TransitionRecord]:
        return self.machine.history

    @property
    def pending(self) -> Dict[str, Any]:
        """Copy of the edits not yet handed to save_fn."""
        return dict(self._pending)

    @property
    def deadline(self) -> Optional[float]:
        """Clock time at which the pending save fires, or None."""
        return self._deadline

    def edit(self, updates: Dict[str, Any]) -> None:
        """
        Merge updates into the pending payload and restart the debounce window.

        Later keys win over earlier ones; the previous deadline is discarded.
        """
        self._pending.update(updates)
        self.machine.dispatch(SaveEvent.EDIT)
        self._deadline = self.clock() + self.delay

    def start_save(self) -> Optional[SaveTicket]:
        """
        Fire the pending save: PENDING_SAVE -> SAVING.

        Returns:
            SaveTicket with the payload to send, or None if nothing is pending
        """
        if self.state is not SaveState.PENDING_SAVE:
            return None
        self.machine.dispatch(SaveEvent.TIMER_FIRED)
        self._generation += 1
        ticket = SaveTicket(generation=self._generation, payload=self._pending)
        for key in ticket.payload:
            self._key_generation[key] = ticket.generation
        self._pending = {}
        self._deadline = None
        self._in_flight = ticket.generation
        return ticket

    def finish_save(self, ticket: SaveTicket, response: ApiResponse) -> SaveState:
        """
        Record the outcome of a save started with start_save().

        A failed payload is merged back under newer edits so the next save
        carries it; fields a newer save already sent are not restored.
        In-memory state is never rolled back.
        """
        event = SaveEvent.SAVE_SUCCEEDED if response.ok else SaveEvent.SAVE_FAILED
        self.last_response = response

        if not response.ok:
            restored = {
                key: value
                for key, value in ticket.payload.items()
                if self._key_generation.get(key) == ticket.generation
            }
            self._pending = {**restored, **self._pending}

        if self._in_flight != ticket.generation or self.state is not SaveState.SAVING:
            self.machine.record_superseded(event)
        else:
            self._in_flight = None
            if response.ok:
                self.last_error = None
            else:
                self.last_error = response.error or "Save failed"
                _log_warning(f"Auto-save failed: {self.last_error}")
            self.machine.dispatch(event)

        if self.state is SaveState.SAVED and self._pending:
            # Fields restored from an older failed save still need a save
            self.edit({})
        return self.state

    def _run_save(self) -> bool:
        ticket = self.start_save()
        if ticket is None:
            return False
        response = self.save_fn(ticket.payload)
        self.finish_save(ticket, response)
        return True

    def poll(self) -> bool:
        """
        Fire the save if the debounce window has elapsed.

        Returns:
            True if save_fn was called
        """
        if self.state is not SaveState.PENDING_SAVE or self._deadline is None:
            return False
        if self.clock() < self._deadline:
            return False
        return self._run_save()

    def flush(self) -> bool:
        """
        Save immediately if an edit is pending, including edits kept after a
        failed save. Returns True if save_fn was called.
        """
        if self.state is SaveState.ERROR:
            return self.retry()
        return self._run_save()

    def retry(self) -> bool:
        """After a failed save, re-send the kept payload immediately."""
        if self.state is not SaveState.ERROR or not self._pending:
            return False
        self.machine.dispatch(SaveEvent.EDIT)
        return self._run_save()

    def reset(self) -> None:
        """Drop pending edits and return to IDLE (e.g., when switching documents)."""
        self.machine.dispatch(SaveEvent.RESET)
        self._pending = {}
        self._deadline = None
        self._in_flight = None
        self._key_generation = {}
        self.last_error = None
