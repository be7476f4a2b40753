"""Custom exceptions for the persistence context."""

from typing import Optional


class PayloadError(ValueError):
    """
    Exception raised when an API payload does not have the expected shape.

    Attributes:
        message: Error description
        resource: Resource being decoded (e.g., "cv", "credits")
    """

    def __init__(self, message: str, resource: Optional[str] = None):
        self.message = message
        self.resource = resource
        if resource:
            message = f"Malformed {resource} payload: {message}"
        super().__init__(message)


class InvalidTransitionError(RuntimeError):
    """
    Exception raised when the auto-save state machine receives an event
    that has no transition from the current state.

    Attributes:
        state: State the machine was in
        event: Event that was rejected
    """

    def __init__(self, state, event):
        self.state = state
        self.event = event
        super().__init__(
            f"No transition from {getattr(state, 'name', state)} on {getattr(event, 'name', event)}"
        )
