"""Async client for the 2captcha task API.

Build a task, hand it to ``CaptchaSolver.solve`` and get a typed solution::

    task = (
        RecaptchaV2.builder()
        .website_url("https://www.google.com/recaptcha/api2/demo")
        .website_key("6Le-wvkSAAAAAPBMRTvw0Q4Muexq9bi0DJwx_mJ-")
        .build()
    )
    async with CaptchaSolver.from_env() as solver:
        solution = await solver.solve(task)
        print(solution.solution.g_recaptcha_response)
"""

from . import errors
from .captcha import *  # noqa: F401,F403
from .captcha import __all__ as _captcha_all
from .config import SolverSettings, configure_logging, load_settings
from .cookie import Cookies
from .errors import (
    CaptchaDefinitionError,
    CaptchaError,
    IncompleteBuildError,
    InvalidRequestError,
    ResponseDecodeError,
    ServerError,
    TransportError,
)
from .language_pool import LanguagePool
from .proxy import Proxy, ProxyKind, ProxyLess, ProxyTask, WithProxy
from .solver import SOFT_ID, AiohttpTransport, CaptchaSolver, Endpoint, ITransport

__version__ = "0.1.0"

__all__ = [
    "errors",
    "SolverSettings",
    "configure_logging",
    "load_settings",
    "Cookies",
    "CaptchaDefinitionError",
    "CaptchaError",
    "IncompleteBuildError",
    "InvalidRequestError",
    "ResponseDecodeError",
    "ServerError",
    "TransportError",
    "LanguagePool",
    "Proxy",
    "ProxyKind",
    "ProxyLess",
    "ProxyTask",
    "WithProxy",
    "SOFT_ID",
    "AiohttpTransport",
    "CaptchaSolver",
    "Endpoint",
    "ITransport",
] + list(_captcha_all)
