# dispatcher.py
import asyncio
import logging
from typing import Awaitable, Callable, List, Sequence

import httpx

from retry import AttemptOutcome, Attempting, RetryPolicy, Succeeded
from schemas import EndpointResult, SubmissionPayload

logger = logging.getLogger(__name__)

Sleep = Callable[[float], Awaitable[None]]

HEADERS = {"Content-Type": "application/json; charset=utf-8"}

class Dispatcher:
    """
    Fans one payload out to every endpoint. Each endpoint runs its own
    retry machine as an independent task; dispatch() returns once all
    of them have finished, one EndpointResult per endpoint, in order.
    """

    def __init__(self, client: httpx.AsyncClient, policy: RetryPolicy = RetryPolicy(), sleep: Sleep = asyncio.sleep):
        self.client = client
        self.policy = policy
        self.sleep = sleep

    async def _attempt(self, endpoint: str, body: bytes) -> AttemptOutcome:
        try:
            r = await self.client.post(endpoint, content=body, headers=HEADERS)
        except httpx.HTTPError as e:
            return AttemptOutcome.transport_error(str(e) or type(e).__name__)
        return AttemptOutcome.response(r.status_code, r.text)

    async def submit(self, endpoint: str, payload: SubmissionPayload) -> EndpointResult:
        body = payload.model_dump_json().encode("utf-8")
        state = Attempting(0)
        while True:
            outcome = await self._attempt(endpoint, body)
            nxt = self.policy.step(state, outcome)
            if not isinstance(nxt, Attempting):
                break
            delay = self.policy.backoff(state.attempt)
            logger.warning(
                "IndexNow %s attempt %d failed (%s), retrying in %.1fs",
                endpoint, state.attempt, outcome.error or outcome.status, delay,
            )
            await self.sleep(delay)
            state = nxt

        ok = isinstance(nxt, Succeeded)
        if not ok:
            logger.warning("IndexNow %s gave up: status=%s", endpoint, nxt.status)
        return EndpointResult(endpoint=endpoint, ok=ok, status=nxt.status, body=nxt.body)

    async def dispatch(self, payload: SubmissionPayload, endpoints: Sequence[str]) -> List[EndpointResult]:
        results = await asyncio.gather(
            *(self.submit(ep, payload) for ep in endpoints),
            return_exceptions=True,
        )
        flat: List[EndpointResult] = []
        for ep, r in zip(endpoints, results):
            if isinstance(r, BaseException):
                logger.error("IndexNow task for %s crashed", ep, exc_info=r)
                r = EndpointResult(endpoint=ep, ok=False, status=0, body=str(r) or type(r).__name__)
            flat.append(r)
        return flat
