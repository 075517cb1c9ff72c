# tandem/core/errors.py
"""
Error taxonomy for a practice turn.

Every error carries a machine-readable ``code`` (sent to the client) and a
``retryable`` flag. Network/validation failures are recovered at the
orchestrator boundary: the session is left untouched and the user is invited
to try again.
"""
from __future__ import annotations


class TandemError(Exception):
    code = "TANDEM_ERROR"
    retryable = False
    message = "Something went wrong."

    def __init__(self, detail: str | None = None):
        self.detail = detail or self.message
        super().__init__(self.detail)


class EmptyInput(TandemError):
    code = "EMPTY_INPUT"
    message = "Say or type a sentence first."


class ServiceUnavailable(TandemError):
    code = "SERVICE_UNAVAILABLE"
    retryable = True
    message = "The service could not be reached. Please try again."


class InvalidResponse(TandemError):
    code = "INVALID_RESPONSE"
    retryable = True
    message = "The service sent a reply we could not read. Please try again."


class IncompleteTurn(TandemError):
    code = "INCOMPLETE_TURN"
    retryable = True
    message = "The feedback was incomplete. Please try again."


class RecognitionUnsupported(TandemError):
    code = "RECOGNITION_UNSUPPORTED"
    message = "Speech recognition is not available here. Type your answer instead."


class TurnInFlight(TandemError):
    code = "TURN_IN_FLIGHT"
    message = "Your previous answer is still being checked."


class InvalidTransition(TandemError):
    code = "INVALID_TRANSITION"
    message = "That action is not available right now."
