"""Solution envelope returned by ``getTaskResult``."""

from datetime import datetime
from enum import Enum
from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class SolutionPayload(BaseModel):
    """Base for the per-variant ``solution`` objects.

    Payloads are read-only values parsed from the service's camelCase keys;
    they can also be populated by their Python field names.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class TokenSolution(SolutionPayload):
    """Solution made of a single token, shared by most widget captchas."""

    token: str


T = TypeVar("T", bound=SolutionPayload)


class Solution(BaseModel, Generic[T]):
    """A solved task.

    Attributes:
        task_id: Id of the task that produced this solution, needed to report it.
        solution: The variant-specific payload.
        cost: Price charged for the task, as sent by the service.
        ip: Address the task was submitted from.
        create_time: When the task was created (UTC).
        end_time: When the task was solved (UTC).
        solve_count: Number of workers that solved the task.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    task_id: Optional[int] = None
    solution: T
    cost: str
    ip: str
    create_time: datetime
    end_time: datetime
    solve_count: int


class ReportStatus(str, Enum):
    """Verdict sent back to the service about a solution."""

    CORRECT = "correct"
    INCORRECT = "incorrect"

    @classmethod
    def from_flag(cls, correct: bool) -> "ReportStatus":
        return cls.CORRECT if correct else cls.INCORRECT
