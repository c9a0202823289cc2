"""Captcha task module.

This module provides the typed task model submitted to the solving service.

Main components:
- captcha / CaptchaTask: Declarative definition of task variants
- generate_builder: Type-state builders that only expose build() once complete
- serialize_task / dumps_task: The polymorphic wire format keyed by ``type``
- Solution / SolutionPayload: Envelope and payloads of solved tasks
- ICaptcha: Capability interface the solver depends on
- types: The concrete task variants
"""

# Base interface for captcha tasks
from .interfaces import ICaptcha

# Builder generator and task declaration
from .builder import TaskBuilder, generate_builder
from .declaration import (
    CaptchaSpec,
    CaptchaTask,
    Empty,
    ProxyNames,
    captcha,
    get_captcha,
    registered_captchas,
)

# Wire format and solutions
from .serialization import dumps_task, serialize_task
from .solution import ReportStatus, Solution, SolutionPayload, TokenSolution

# Concrete task variants
from .types import *  # noqa: F401,F403
from .types import __all__ as _types_all

# Public API exports
__all__ = [
    "ICaptcha",
    "TaskBuilder",
    "generate_builder",
    "CaptchaSpec",
    "CaptchaTask",
    "Empty",
    "ProxyNames",
    "captcha",
    "get_captcha",
    "registered_captchas",
    "dumps_task",
    "serialize_task",
    "ReportStatus",
    "Solution",
    "SolutionPayload",
    "TokenSolution",
] + list(_types_all)
