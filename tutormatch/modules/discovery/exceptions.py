"""Discovery errors. Each carries the HTTP status the API maps it to."""


class DiscoveryError(Exception):
    status_code = 400

    def __init__(self, message: str = "Discovery request failed"):
        self.message = message
        super().__init__(message)


class SessionNotFoundError(DiscoveryError):
    status_code = 404

    def __init__(self, user_id: str):
        super().__init__(f"No discovery session for user '{user_id}'")


class NoCandidateError(DiscoveryError):
    """The stack is empty, so there is no card to drag or swipe."""
    status_code = 409

    def __init__(self):
        super().__init__("No candidate is showing")


class GestureBusyError(DiscoveryError):
    """Input arrived while an exit or reset animation is still in flight."""
    status_code = 409

    def __init__(self, phase: str):
        self.phase = phase
        super().__init__(f"Gesture input is disabled while {phase}")


class NoActiveGestureError(DiscoveryError):
    status_code = 409

    def __init__(self, phase: str):
        self.phase = phase
        super().__init__(f"No gesture to finish (phase: {phase})")
