"""Google reCAPTCHA tasks."""

from typing import Any, Optional

from pydantic import Field, HttpUrl

from ...cookie import Cookies
from ..declaration import CaptchaTask, ProxyNames, captcha
from ..solution import SolutionPayload


class RecaptchaSolution(SolutionPayload):
    """Token to submit in the ``g-recaptcha-response`` form field.

    ``token`` carries the same value as ``g_recaptcha_response``.
    """

    g_recaptcha_response: str
    token: str


@captcha(
    timeout=20,
    solution=RecaptchaSolution,
    proxy=ProxyNames("RecaptchaV2Task", "RecaptchaV2TaskProxyless"),
)
class RecaptchaV2(CaptchaTask):
    """reCAPTCHA V2, the "I'm not a robot" checkbox or its invisible flavour.

    Attributes:
        website_url: Full URL of the page the captcha is loaded on. The page is
            never opened, so it may sit behind a login.
        website_key: The ``data-sitekey`` of the widget.
        recaptcha_data_s_value: The ``data-s`` value, only used by Google services.
        is_invisible: The widget is the invisible reCAPTCHA.
        user_agent: User-Agent of the browser that will use the token.
        cookies: Cookies the workers should set on the page.
        api_domain: Domain the captcha is loaded from, ``google.com`` or
            ``recaptcha.net``.
    """

    website_url: HttpUrl = Field(alias="websiteURL")
    website_key: str
    recaptcha_data_s_value: Optional[str] = None
    is_invisible: Optional[bool] = None
    user_agent: Optional[str] = None
    cookies: Optional[Cookies] = None
    api_domain: Optional[str] = None


@captcha(
    timeout=20,
    solution=RecaptchaSolution,
    proxy=ProxyNames("RecaptchaV2EnterpriseTask", "RecaptchaV2EnterpriseTaskProxyless"),
)
class RecaptchaV2Enterprise(CaptchaTask):
    """reCAPTCHA V2 Enterprise.

    ``enterprise_payload`` holds the extra parameters passed to
    ``grecaptcha.enterprise.render``, for instance ``{"s": "..."}``.
    """

    website_url: HttpUrl = Field(alias="websiteURL")
    website_key: str
    enterprise_payload: Optional[Any] = None
    is_invisible: Optional[bool] = None
    user_agent: Optional[str] = None
    cookies: Optional[Cookies] = None
    api_domain: Optional[str] = None


@captcha(timeout=20, solution=RecaptchaSolution, task_type="RecaptchaV3TaskProxyless")
class RecaptchaV3(CaptchaTask):
    """reCAPTCHA V3, scored rather than solved.

    Attributes:
        min_score: Score the token must reach, between 0.1 and 0.9.
        page_action: The ``action`` passed to ``grecaptcha.execute``.
        is_enterprise: The page uses the Enterprise API.
    """

    website_url: HttpUrl = Field(alias="websiteURL")
    website_key: str
    min_score: float = Field(ge=0.1, le=0.9)
    page_action: Optional[str] = None
    is_enterprise: Optional[bool] = None
    api_domain: Optional[str] = None
