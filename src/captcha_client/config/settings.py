"""Solver settings and their environment-variable loader."""

import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, HttpUrl, ValidationError

from ..errors import InvalidRequestError
from ..language_pool import LanguagePool

API_KEY_ENV = "TWOCAPTCHA_API_KEY"
LANGUAGE_POOL_ENV = "TWOCAPTCHA_LANGUAGE_POOL"
CALLBACK_URL_ENV = "TWOCAPTCHA_CALLBACK_URL"


class SolverSettings(BaseModel):
    """Account-level settings sent along with every task.

    Attributes:
        api_key: The account's API key.
        language_pool: Worker pool tasks are dispatched to.
        callback_url: When set, the service pushes results to this URL and
            the solver stops after submitting a task.
    """

    model_config = ConfigDict(frozen=True)

    api_key: str = Field(min_length=1, repr=False)
    language_pool: LanguagePool = LanguagePool.EN
    callback_url: Optional[HttpUrl] = None


def load_settings(env_file: Optional[str] = None) -> SolverSettings:
    """Read solver settings from the environment.

    Variables from ``env_file`` (or the nearest ``.env``) are loaded first,
    without overriding variables that are already set.

    Raises:
        InvalidRequestError: If the API key is missing or a value is invalid.
    """
    if env_file:
        load_dotenv(env_file)
    else:
        load_dotenv()

    api_key = os.getenv(API_KEY_ENV)
    if not api_key:
        raise InvalidRequestError(f"{API_KEY_ENV} is not set")

    values = {"api_key": api_key}
    if os.getenv(LANGUAGE_POOL_ENV):
        values["language_pool"] = os.getenv(LANGUAGE_POOL_ENV).lower()
    if os.getenv(CALLBACK_URL_ENV):
        values["callback_url"] = os.getenv(CALLBACK_URL_ENV)

    try:
        return SolverSettings(**values)
    except ValidationError as e:
        raise InvalidRequestError(f"invalid solver settings: {e}") from e
