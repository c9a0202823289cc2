"""GeeTest slider and puzzle captchas.

Both generations share the ``GeeTestTask`` discriminators; the service tells
them apart by the ``version`` and ``initParameters`` that only V4 sends.
"""

from collections.abc import Mapping
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, HttpUrl, field_validator

from ..declaration import CaptchaTask, ProxyNames, captcha
from ..serialization import dump_fields, proxy_fields
from ..solution import SolutionPayload

GEETEST_PROXY_NAMES = ProxyNames("GeeTestTask", "GeeTestTaskProxyless")


class GeeTestV3Solution(SolutionPayload):
    challenge: str
    validate_: str = Field(alias="validate")
    seccode: str


class GeeTestV4Solution(SolutionPayload):
    # V4 answers are forwarded verbatim from the widget, hence snake_case keys
    model_config = ConfigDict(alias_generator=None)

    captcha_id: str
    lot_number: str
    pass_token: str
    gen_time: str
    captcha_output: str


@captcha(timeout=20, solution=GeeTestV3Solution, proxy=GEETEST_PROXY_NAMES)
class GeeTestV3(CaptchaTask):
    """GeeTest V3.

    Attributes:
        website_url: Full URL of the page the captcha is loaded on.
        gt: The ``gt`` value passed to ``initGeetest``.
        challenge: The ``challenge`` value passed to ``initGeetest``. It
            changes on every page load, so fetch a fresh one per task.
        geetest_api_server_subdomain: Custom GeeTest API domain, such as
            ``api-na.geetest.com``.
        user_agent: User-Agent of the browser that will use the answer.
    """

    website_url: HttpUrl = Field(alias="websiteURL")
    gt: str
    challenge: str
    geetest_api_server_subdomain: Optional[str] = None
    user_agent: Optional[str] = None


@captcha(timeout=20, solution=GeeTestV4Solution, proxy=GEETEST_PROXY_NAMES)
class GeeTestV4(CaptchaTask):
    """GeeTest V4.

    ``captcha_id`` is sent inside ``initParameters`` together with whatever
    extra ``initGeetest4`` parameters are given in ``init_parameters``.
    """

    website_url: HttpUrl = Field(alias="websiteURL")
    captcha_id: str
    geetest_api_server_subdomain: Optional[str] = None
    user_agent: Optional[str] = None
    init_parameters: Optional[Any] = None

    @field_validator("init_parameters")
    @classmethod
    def _init_parameters_is_an_object(cls, value: Any) -> Any:
        if value is None or isinstance(value, (Mapping, BaseModel)):
            return value
        raise ValueError("init_parameters must be a mapping or a model")

    def to_wire(self) -> Dict[str, Any]:
        fields = dump_fields(self)
        wire: Dict[str, Any] = {
            "type": self.task_type,
            "websiteURL": fields["websiteURL"],
        }
        for key in ("geetestApiServerSubdomain", "userAgent"):
            if key in fields:
                wire[key] = fields[key]
        wire["version"] = 4
        # The required captcha_id stays first and wins over one in init_parameters
        init_parameters = {"captcha_id": self.captcha_id}
        init_parameters.update(fields.get("initParameters", {}))
        init_parameters["captcha_id"] = self.captcha_id
        wire["initParameters"] = init_parameters
        wire.update(proxy_fields(self))
        return wire
