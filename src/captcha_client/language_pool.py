"""Worker pools 2captcha can dispatch tasks to."""

from enum import Enum


class LanguagePool(str, Enum):
    """Worker pool a task is dispatched to.

    ``EN`` targets English-speaking workers, ``RN`` the Russian-speaking pool.
    """

    EN = "en"
    RN = "rn"
