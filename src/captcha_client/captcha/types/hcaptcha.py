from typing import Any, Optional

from pydantic import Field, HttpUrl

from ..declaration import CaptchaTask, ProxyNames, captcha
from ..solution import SolutionPayload


class HCaptchaSolution(SolutionPayload):
    token: str
    resp_key: str
    user_agent: str
    g_recaptcha_response: str


@captcha(
    timeout=20,
    solution=HCaptchaSolution,
    proxy=ProxyNames("HCaptchaTask", "HCaptchaTaskProxyless"),
)
class HCaptcha(CaptchaTask):
    """hCaptcha checkbox or invisible widget.

    ``enterprise_payload`` carries the extra ``hcaptcha.render`` parameters
    used by hCaptcha Enterprise, e.g. ``{"rqdata": "..."}``.
    """

    website_url: HttpUrl = Field(alias="websiteURL")
    website_key: str
    is_invisible: Optional[bool] = None
    enterprise_payload: Optional[Any] = None
