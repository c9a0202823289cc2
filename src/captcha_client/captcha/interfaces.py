"""Interfaces for the captcha task system.

This module defines the capability every captcha task exposes to the solver.
The solver only depends on this interface, so new task kinds can be declared
without touching the orchestration code.
"""

from abc import ABC, abstractmethod
from datetime import timedelta
from typing import TYPE_CHECKING, Any, Dict, Type

if TYPE_CHECKING:
    from .builder import TaskBuilder
    from .solution import SolutionPayload


class ICaptcha(ABC):
    """Interface for captcha tasks.

    All captcha task variants must implement this interface. Implementations
    are immutable values: once built, a task can be submitted any number of
    times and shared between coroutines.
    """

    @property
    @abstractmethod
    def timeout(self) -> timedelta:
        """Time the solver waits after submitting the task before the first poll.

        Returns:
            The expected solving time for this kind of challenge.
        """
        pass

    @property
    @abstractmethod
    def task_type(self) -> str:
        """The ``type`` discriminator this task is submitted under."""
        pass

    @abstractmethod
    def to_wire(self) -> Dict[str, Any]:
        """Render the task as the JSON object sent under ``task`` in ``createTask``.

        Returns:
            A JSON-compatible dict whose first key is ``type``, with optional
            fields omitted when unset and proxy fields flattened in.
        """
        pass

    @classmethod
    @abstractmethod
    def solution_type(cls) -> Type["SolutionPayload"]:
        """The model a successful ``solution`` object is parsed into."""
        pass

    @classmethod
    @abstractmethod
    def builder(cls) -> "TaskBuilder":
        """Return an empty builder for this task, with every required field missing."""
        pass
