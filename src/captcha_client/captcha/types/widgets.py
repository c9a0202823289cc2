"""Token-producing widget captchas from smaller vendors."""

from typing import Optional

from pydantic import ConfigDict, Field, HttpUrl

from ...proxy import Proxy
from ..declaration import CaptchaTask, ProxyNames, captcha
from ..solution import SolutionPayload, TokenSolution


class CapySolution(SolutionPayload):
    model_config = ConfigDict(alias_generator=None)

    captcha_key: str = Field(alias="captchakey")
    challenge_key: str = Field(alias="challengekey")
    answer: str
    resp_key: str


class LeminSolution(SolutionPayload):
    answer: str
    challenge_id: str


class AmazonSolution(SolutionPayload):
    captcha_voucher: str
    existing_token: str


class DataDomeSolution(SolutionPayload):
    cookie: str


class TencentSolution(SolutionPayload):
    app_id: str
    ret: int
    ticket: str
    randstr: str


@captcha(
    timeout=20,
    solution=CapySolution,
    proxy=ProxyNames("CapyTask", "CapyTaskProxyless"),
)
class CapyCaptcha(CaptchaTask):
    """Capy puzzle captcha."""

    website_url: HttpUrl = Field(alias="websiteURL")
    website_key: str
    user_agent: Optional[str] = None


@captcha(
    timeout=20,
    solution=TokenSolution,
    proxy=ProxyNames("KeyCaptchaTask", "KeyCaptchaTaskProxyless"),
)
class KeyCaptcha(CaptchaTask):
    """KeyCaptcha.

    The four ``s_s_c_*`` values are read from the page's JavaScript variables
    of the same name.
    """

    website_url: HttpUrl = Field(alias="websiteURL")
    user_id: int = Field(alias="s_s_c_user_id", ge=0)
    session_id: str = Field(alias="s_s_c_session_id")
    web_server_sign: str = Field(alias="s_s_c_web_server_sign")
    web_server_sign2: str = Field(alias="s_s_c_web_server_sign2")


@captcha(
    timeout=20,
    solution=LeminSolution,
    proxy=ProxyNames("LeminTask", "LeminTaskProxyless"),
)
class LeminCaptcha(CaptchaTask):
    """Lemin cropped captcha.

    Attributes:
        captcha_id: The id found in the widget script URL, ``CROPPED_...``.
        div_id: Id of the ``<div>`` the captcha is rendered into.
        lemin_api_server_subdomain: Domain the widget script is loaded from.
    """

    website_url: HttpUrl = Field(alias="websiteURL")
    captcha_id: str
    div_id: str
    lemin_api_server_subdomain: Optional[str] = None
    user_agent: Optional[str] = None


@captcha(
    timeout=20,
    solution=AmazonSolution,
    proxy=ProxyNames("AmazonTask", "AmazonTaskProxyless"),
)
class AmazonCaptcha(CaptchaTask):
    """Amazon WAF captcha.

    ``website_key``, ``iv`` and ``context`` are the ``key``, ``iv`` and
    ``context`` values of the ``window.gokuProps`` object.
    """

    website_url: HttpUrl = Field(alias="websiteURL")
    website_key: str
    iv: str
    context: str
    challenge_script: Optional[str] = None
    captcha_script: Optional[str] = None


@captcha(
    timeout=20,
    solution=TokenSolution,
    proxy=ProxyNames("AtbCaptchaTask", "AtbCaptchaTaskProxyless"),
)
class AtbCaptcha(CaptchaTask):
    website_url: HttpUrl = Field(alias="websiteURL")
    app_id: str
    api_server: str


@captcha(
    timeout=20,
    solution=TokenSolution,
    proxy=ProxyNames("CutCaptchaTask", "CutCaptchaTaskProxyless"),
)
class CutCaptcha(CaptchaTask):
    """CutCaptcha; ``misery_key`` and ``api_key`` come from the widget's script tags."""

    website_url: HttpUrl = Field(alias="websiteURL")
    misery_key: str
    api_key: str


@captcha(
    timeout=20,
    solution=TokenSolution,
    proxy=ProxyNames("AntiCyberSiAraTask", "AntiCyberSiAraTaskProxyless"),
)
class CyberSiARACaptcha(CaptchaTask):
    website_url: HttpUrl = Field(alias="websiteURL")
    slide_master_url_id: str = Field(alias="SlideMasterUrlId")
    user_agent: str


@captcha(timeout=20, solution=DataDomeSolution, task_type="DataDomeSliderTask")
class DataDomeCaptcha(CaptchaTask):
    """DataDome slider.

    DataDome always has to be solved through a proxy, so ``proxy`` is a
    required field here and is flattened into the task object.

    Attributes:
        captcha_url: The ``src`` of the captcha iframe.
        user_agent: Must match the browser the cookie will be used from.
    """

    website_url: HttpUrl = Field(alias="websiteURL")
    captcha_url: HttpUrl
    user_agent: str
    proxy: Proxy = Field(exclude=True)


@captcha(
    timeout=20,
    solution=TokenSolution,
    proxy=ProxyNames("FriendlyCaptchaTask", "FriendlyCaptchaTaskProxyless"),
)
class FriendlyCaptcha(CaptchaTask):
    website_url: HttpUrl = Field(alias="websiteURL")
    website_key: str


@captcha(
    timeout=20,
    solution=TokenSolution,
    proxy=ProxyNames("MtCaptchaTask", "MtCaptchaTaskProxyless"),
)
class MtCaptcha(CaptchaTask):
    website_url: HttpUrl = Field(alias="websiteURL")
    website_key: str


@captcha(
    timeout=20,
    solution=TencentSolution,
    proxy=ProxyNames("TencentTask", "TencentTaskProxyless"),
)
class TencentCaptcha(CaptchaTask):
    """Tencent captcha; ``app_id`` is the ``data-appid`` of the widget."""

    website_url: HttpUrl = Field(alias="websiteURL")
    app_id: str
