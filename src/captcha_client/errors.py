"""Exception hierarchy for the captcha client.

Every runtime failure raised by this package derives from ``CaptchaError``:

- IncompleteBuildError: ``build`` looked up before all required fields were set
- InvalidRequestError: a value was rejected while constructing a request
- TransportError: the HTTP round trip failed
- ResponseDecodeError: the service answered with something we cannot parse
- ServerError: the service reported one of its documented error codes

``CaptchaDefinitionError`` is the odd one out: it signals a malformed task
declaration and is raised while the declaring module is being imported.
"""

from typing import Dict, Iterable, Optional, Tuple, Type


class CaptchaDefinitionError(TypeError):
    """Raised when a captcha task declaration is invalid."""
    pass


class CaptchaError(Exception):
    """Base class for all runtime errors raised by the client."""
    pass


class IncompleteBuildError(CaptchaError, AttributeError):
    """Raised when ``build`` is requested before every required field is provided.

    Subclassing ``AttributeError`` keeps ``hasattr(builder, "build")`` false
    for incomplete builders.
    """

    def __init__(self, target: str, missing: Iterable[str]):
        self.target = target
        self.missing: Tuple[str, ...] = tuple(missing)
        super().__init__(
            f"{target} cannot be built yet, missing required field(s): "
            f"{', '.join(self.missing)}"
        )


class InvalidRequestError(CaptchaError, ValueError):
    """Raised when a task or request cannot be constructed from the given values."""
    pass


class TransportError(CaptchaError):
    """Raised when the HTTP request could not be completed."""
    pass


class ResponseDecodeError(CaptchaError):
    """Raised when a response body is not valid JSON or has an unexpected shape."""
    pass


class ServerError(CaptchaError):
    """An error reported by the solving service.

    Attributes:
        code: The raw ``errorCode`` string sent by the service.
        description: The optional ``errorDescription`` sent alongside it.
    """

    message = "The solving service returned an error"

    def __init__(self, code: str, description: Optional[str] = None):
        self.code = code
        self.description = description
        detail = f": {description}" if description else ""
        super().__init__(f"{self.message} ({code}){detail}")


class InvalidApiKey(ServerError):
    message = "The API key is incorrect"


class NoSlotAvailable(ServerError):
    message = "The bid is too low or the queue of your captchas is too long"


class ImageTooSmall(ServerError):
    message = "Image size is smaller than 100 bytes"


class ImageTooBig(ServerError):
    message = "Image is larger than 100kB or bigger than 600px on any side"


class ZeroBalance(ServerError):
    message = "There are no funds on the account"


class IpNotAllowed(ServerError):
    message = "The request was sent from an IP that is not in the list of trusted IPs"


class UnsolvableCaptcha(ServerError):
    message = "Workers were unable to solve the captcha"


class BadDuplicates(ServerError):
    message = "The maximum number of attempts was reached without enough matching answers"


class NoSuchMethod(ServerError):
    message = "The requested API route does not exist"


class UnsupportedImageType(ServerError):
    message = "The image has an unsupported format or size, or is corrupted"


class CaptchaIdNotFound(ServerError):
    message = "The task id is incorrect"


class IpBlocked(ServerError):
    message = "The IP address is banned due to improper use of the API"


class TaskNotProvided(ServerError):
    message = "The task property is missing from the createTask call"


class TaskNotSupported(ServerError):
    message = "The task type is not supported by the API"


class InvalidSiteKey(ServerError):
    message = "The sitekey value is not valid"


class AccountSuspended(ServerError):
    message = "API access was blocked for improper use of the API"


class BadProxy(ServerError):
    message = "Unable to establish a connection through the proxy"


class ProxyConnectionFailed(ServerError):
    message = "Could not connect to the proxy"


class BadParameters(ServerError):
    message = "Required captcha parameters are missing or incorrect"


class BadImageInstructions(ServerError):
    message = "imgInstructions has an unsupported type, is corrupted or is too large"


class UnknownServerError(ServerError):
    """An error code this version of the client does not know about."""

    message = "The solving service returned an unrecognised error"


ERROR_CODES: Dict[str, Type[ServerError]] = {
    "ERROR_KEY_DOES_NOT_EXIST": InvalidApiKey,
    "ERROR_NO_SLOT_AVAILABLE": NoSlotAvailable,
    "ERROR_ZERO_CAPTCHA_FILESIZE": ImageTooSmall,
    "ERROR_TOO_BIG_CAPTCHA_FILESIZE": ImageTooBig,
    "ERROR_ZERO_BALANCE": ZeroBalance,
    "ERROR_IP_NOT_ALLOWED": IpNotAllowed,
    "ERROR_CAPTCHA_UNSOLVABLE": UnsolvableCaptcha,
    "ERROR_BAD_DUPLICATES": BadDuplicates,
    "ERROR_NO_SUCH_METHOD": NoSuchMethod,
    "ERROR_IMAGE_TYPE_NOT_SUPPORTED": UnsupportedImageType,
    "ERROR_NO_SUCH_CAPCHA_ID": CaptchaIdNotFound,
    "ERROR_IP_BLOCKED": IpBlocked,
    "ERROR_TASK_ABSENT": TaskNotProvided,
    "ERROR_TASK_NOT_SUPPORTED": TaskNotSupported,
    "ERROR_RECAPTCHA_INVALID_SITEKEY": InvalidSiteKey,
    "ERROR_ACCOUNT_SUSPENDED": AccountSuspended,
    "ERROR_BAD_PROXY": BadProxy,
    "ERROR_PROXY_CONNECTION_FAILED": ProxyConnectionFailed,
    "ERR_PROXY_CONNECTION_FAILED": ProxyConnectionFailed,
    "ERROR_BAD_PARAMETERS": BadParameters,
    "ERROR_BAD_IMGINSTRUCTIONS": BadImageInstructions,
}


def error_from_code(code: str, description: Optional[str] = None) -> ServerError:
    """Map a service error code to its exception instance.

    Unrecognised codes become ``UnknownServerError`` so a newly introduced
    code on the service side still surfaces as a typed, catchable error.
    """
    error_class = ERROR_CODES.get(code, UnknownServerError)
    return error_class(code, description)
