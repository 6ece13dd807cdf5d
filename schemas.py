# schemas.py
from typing import List

from pydantic import BaseModel, ConfigDict

class SubmissionPayload(BaseModel):
    # Field names are the IndexNow wire format.
    model_config = ConfigDict(frozen=True)

    host: str
    key: str
    keyLocation: str
    urlList: List[str]

class EndpointResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    endpoint: str
    ok: bool
    status: int  # 0 if the endpoint was never reached
    body: str = ""

class SubmissionOutcome(BaseModel):
    model_config = ConfigDict(frozen=True)

    ok: bool
    submitted: int
    endpoints: List[EndpointResult]

class StatusReport(BaseModel):
    ok: bool
    message: str
    host: str
    hasKey: bool
    hasToken: bool
    keyLocation: str
    endpoints: List[str]
