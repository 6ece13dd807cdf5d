# aggregator.py
from typing import Sequence

from schemas import EndpointResult, SubmissionOutcome

# What IndexNow receivers answer when they take the submission.
ACCEPTED_STATUSES = (200, 202)
MULTI_STATUS = 207

def is_accepted(result: EndpointResult) -> bool:
    # A 1xx/3xx ends the retries as ok but is not an acceptance.
    return result.ok and result.status in ACCEPTED_STATUSES

def aggregate(results: Sequence[EndpointResult], submitted: int) -> SubmissionOutcome:
    return SubmissionOutcome(
        ok=any(is_accepted(r) for r in results),
        submitted=submitted,
        endpoints=list(results),
    )

def response_status(outcome: SubmissionOutcome) -> int:
    return 200 if outcome.ok else MULTI_STATUS
