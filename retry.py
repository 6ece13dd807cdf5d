# retry.py
"""
Per-endpoint retry state machine.

    Attempting(0) -> Attempting(1) -> ... -> Attempting(max_retries)
          \\               \\                        \\
           +-> Succeeded | Failed  (any attempt may terminate)

The machine only decides; it never sleeps or talks to the network.
The dispatcher feeds it one AttemptOutcome per attempt and sleeps
`policy.backoff(n)` whenever it moves to Attempting(n + 1).
"""
from dataclasses import dataclass
from typing import Optional, Union

MAX_RETRIES = 3
BASE_DELAY_S = 1.6
MAX_DELAY_S = 8.0

NETWORK_ERROR = "network error"

@dataclass(frozen=True)
class AttemptOutcome:
    """One attempt: either a response (status/body) or a transport error."""
    status: int = 0
    body: str = ""
    error: Optional[str] = None

    @classmethod
    def response(cls, status: int, body: str = "") -> "AttemptOutcome":
        return cls(status=status, body=body)

    @classmethod
    def transport_error(cls, message: str) -> "AttemptOutcome":
        return cls(error=message)

    @property
    def reached(self) -> bool:
        return self.error is None

@dataclass(frozen=True)
class Attempting:
    attempt: int = 0
    # Last response/error seen so far; reported if the budget runs out.
    last_status: Optional[int] = None
    last_body: str = ""
    last_error: Optional[str] = None

@dataclass(frozen=True)
class Succeeded:
    status: int
    body: str

@dataclass(frozen=True)
class Failed:
    status: int
    body: str

State = Union[Attempting, Succeeded, Failed]

def is_retryable_status(status: int) -> bool:
    return status == 429 or 500 <= status <= 599

@dataclass(frozen=True)
class RetryPolicy:
    max_retries: int = MAX_RETRIES
    base_delay: float = BASE_DELAY_S
    max_delay: float = MAX_DELAY_S

    def backoff(self, attempt: int) -> float:
        """Seconds to wait after attempt `attempt` before the next one: 1.6, 3.2, 6.4, 8, 8..."""
        return min(self.base_delay * (2 ** attempt), self.max_delay)

    def step(self, state: Attempting, outcome: AttemptOutcome) -> State:
        if outcome.reached:
            if outcome.status < 400:
                return Succeeded(outcome.status, outcome.body)
            if not is_retryable_status(outcome.status):
                return Failed(outcome.status, outcome.body)
            state = Attempting(state.attempt, outcome.status, outcome.body, state.last_error)
        else:
            state = Attempting(state.attempt, state.last_status, state.last_body, outcome.error)

        if state.attempt < self.max_retries:
            return Attempting(state.attempt + 1, state.last_status, state.last_body, state.last_error)
        return self._exhausted(state)

    @staticmethod
    def _exhausted(state: Attempting) -> Failed:
        # A response from any earlier attempt beats a later transport error.
        if state.last_status is not None:
            return Failed(state.last_status, state.last_body)
        return Failed(0, state.last_error or NETWORK_ERROR)
