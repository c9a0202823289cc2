"""Cloudflare Turnstile.

The standalone widget and the Cloudflare challenge page are submitted under
the same discriminators; the challenge page additionally needs the values
captured from ``turnstile.render`` on the intercepted page.
"""

from typing import Optional

from pydantic import Field, HttpUrl

from ..declaration import CaptchaTask, ProxyNames, captcha
from ..solution import SolutionPayload

TURNSTILE_PROXY_NAMES = ProxyNames("TurnstileTask", "TurnstileTaskProxyless")


class TurnstileSolution(SolutionPayload):
    token: str
    user_agent: str


@captcha(timeout=20, solution=TurnstileSolution, proxy=TURNSTILE_PROXY_NAMES)
class TurnstileStandalone(CaptchaTask):
    website_url: HttpUrl = Field(alias="websiteURL")
    website_key: str
    user_agent: Optional[str] = None


@captcha(timeout=20, solution=TurnstileSolution, proxy=TURNSTILE_PROXY_NAMES)
class TurnstileChallengePage(CaptchaTask):
    """Turnstile on a Cloudflare challenge page.

    Attributes:
        user_agent: Must match the browser that loaded the page, Cloudflare
            checks it together with the token.
        action: The ``action`` parameter of ``turnstile.render``.
        data: The ``cData`` parameter of ``turnstile.render``.
        page_data: The ``chlPageData`` parameter of ``turnstile.render``.
    """

    website_url: HttpUrl = Field(alias="websiteURL")
    website_key: str
    user_agent: str
    action: str
    data: str
    page_data: str
