"""Solver orchestration: transport, wire messages and the polling solver."""

from .messages import SOFT_ID
from .solver import CaptchaSolver, CaptchaSolverBuilder
from .transport import API_URL, AiohttpTransport, Endpoint, ITransport

__all__ = [
    "API_URL",
    "SOFT_ID",
    "AiohttpTransport",
    "CaptchaSolver",
    "CaptchaSolverBuilder",
    "Endpoint",
    "ITransport",
]
