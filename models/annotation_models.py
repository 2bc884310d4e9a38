"""
Data Models for Kernel Annotation
=================================

This module defines the data structures used to represent test-case results
throughout the annotation pipeline. Test cases read from judge output are validated
with pydantic; everything else is a frozen dataclass.
"""

from dataclasses import dataclass
from typing import ClassVar, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, StrictStr


class TestcaseResult(BaseModel):
    """One test case as reported by the judge: ``{"name": ..., "passed": <score>}``."""

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, populate_by_name=True)

    name: StrictStr
    score: float = Field(alias="passed", strict=True, allow_inf_nan=False)


@dataclass(frozen=True)
class CollectedResult:
    """A test-case result as stored by the result collector."""
    pass_name: Optional[str]
    name: str
    score: float


@dataclass(frozen=True)
class ParsedTestcases:
    testcases: Tuple[TestcaseResult, ...] = ()

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class ParseFailure:
    reason: str

    @property
    def ok(self) -> bool:
        return False


ParseOutcome = Union[ParsedTestcases, ParseFailure]
