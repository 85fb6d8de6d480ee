"""Health check payload, in the same {success, message} envelope as every other response."""

import datetime as dt
from typing import Literal

from pydantic import Field

from rollcall.schemas.auth import MessageResponse


class HealthResponse(MessageResponse):
    datetime: dt.datetime = Field(description="Server time (UTC) when the check ran")
    environment: str = Field(description="Current app environment (dev or prod)")
    database: Literal["connected", "disconnected"]
