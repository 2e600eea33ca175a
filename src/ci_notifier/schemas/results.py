"""Pydantic schemas for run outcomes.

Defines RunSummary (e2e test results), DeployOutcome and the payload parser.
"""

from __future__ import annotations

import json
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictInt, ValidationError

from ..errors import MalformedPayload


class RunSummary(BaseModel):
    """
    Counts from a test run plus optional failures grouped by suite.
    Counts must be JSON integers; booleans, strings and floats are rejected.
    grouped_failures keeps the payload's key and list order; that order is display order.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    passed: StrictInt = Field(..., alias="numPassedTests", ge=0)
    failed: StrictInt = Field(..., alias="numFailedTests", ge=0)
    skipped: StrictInt = Field(..., alias="numSkippedTests", ge=0)
    grouped_failures: Optional[Dict[str, List[str]]] = Field(None, alias="groupedTestResults")


class DeployOutcome(BaseModel):
    model_config = ConfigDict(frozen=True)

    platform: str = ""
    version: str = ""
    build: str = ""


def parse_run_summary(raw: str) -> RunSummary:
    """
    Decode a stringified e2e results payload.
    Raises MalformedPayload for invalid JSON, non-object payloads or missing/negative counts.
    """
    try:
        data = json.loads(raw)
    except (TypeError, ValueError) as e:
        raise MalformedPayload(f"Test results payload is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise MalformedPayload(f"Test results payload must be an object, got {type(data).__name__}")

    try:
        return RunSummary.model_validate(data)
    except ValidationError as e:
        raise MalformedPayload(f"Invalid test results payload: {e}") from e
