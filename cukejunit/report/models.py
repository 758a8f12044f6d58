from __future__ import annotations

from typing import Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class ReportFailure(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["failure", "skipped"]
    type: Optional[str] = None
    message: Optional[str] = None
    stack: Optional[str] = None


class ReportTestCase(BaseModel):
    model_config = ConfigDict(frozen=True)
    __test__ = False

    classname: str
    name: str
    time: float = 0.0
    failure: Optional[ReportFailure] = None
    output: str = ""


class ReportSuite(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = "Cucumber"
    time: float = 0.0
    tests: int = 0
    skipped: int = 0
    failures: int = 0
    errors: int = 0
    timestamp: Optional[str] = None
    test_cases: Tuple[ReportTestCase, ...] = Field(default_factory=tuple)
