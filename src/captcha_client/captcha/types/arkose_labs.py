from typing import Any, Optional

from pydantic import Field, HttpUrl, field_serializer

from ..declaration import CaptchaTask, ProxyNames, captcha
from ..serialization import stringify_json
from ..solution import TokenSolution


@captcha(
    timeout=20,
    solution=TokenSolution,
    proxy=ProxyNames("FunCaptchaTask", "FunCaptchaTaskProxyless"),
)
class ArkoseLabsCaptcha(CaptchaTask):
    """Arkose Labs (FunCaptcha) challenge.

    Attributes:
        website_url: Full URL of the page the captcha is loaded on.
        website_public_key: The ``pk`` or ``data-pkey`` of the widget.
        funcaptcha_api_js_subdomain: Custom subdomain the widget script is
            loaded from.
        data: Extra ``data[blob]`` style parameters. The service wants them
            as a JSON string, so the value is encoded before sending.
        user_agent: User-Agent of the browser that will use the token.
    """

    website_url: HttpUrl = Field(alias="websiteURL")
    website_public_key: str
    funcaptcha_api_js_subdomain: Optional[str] = Field(default=None, alias="funcaptchaApiJSSubdomain")
    data: Optional[Any] = None
    user_agent: Optional[str] = None

    @field_serializer("data")
    def _data_as_json_string(self, data: Any) -> Optional[str]:
        if data is None:
            return None
        return stringify_json(data)
