"""Request and response bodies of the task API.

Responses are classified by shape rather than by route: any body carrying a
non-zero ``errorId`` or an ``errorCode`` is an error and is turned into the
matching ``ServerError`` subclass, and a body that fits none of the expected
shapes raises ``ResponseDecodeError``.
"""

from typing import Any, Dict, Literal, Mapping, Optional, Type

from pydantic import BaseModel, ConfigDict, HttpUrl, ValidationError
from pydantic.alias_generators import to_camel

from ..captcha.solution import Solution, SolutionPayload
from ..errors import ResponseDecodeError, error_from_code
from ..language_pool import LanguagePool

SOFT_ID = 4143


class WireMessage(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class CreateTaskRequest(WireMessage):
    client_key: str
    task: Dict[str, Any]
    soft_id: int = SOFT_ID
    language_pool: LanguagePool = LanguagePool.EN
    callback_url: Optional[HttpUrl] = None


class TaskRequest(WireMessage):
    """Body of ``getTaskResult``, ``reportCorrect`` and ``reportIncorrect``."""

    client_key: str
    task_id: int


class BalanceRequest(WireMessage):
    client_key: str


class ErrorResponse(WireMessage):
    error_id: int
    error_code: Optional[str] = None
    error_description: Optional[str] = None

    def to_exception(self):
        code = self.error_code or f"ERROR_ID_{self.error_id}"
        return error_from_code(code, self.error_description)


class CreateTaskResponse(WireMessage):
    error_id: int = 0
    task_id: int


class ProcessingResponse(WireMessage):
    error_id: int = 0
    status: Literal["processing"]


class BalanceResponse(WireMessage):
    error_id: int = 0
    balance: float


class ReportResponse(WireMessage):
    error_id: int = 0
    status: Literal["success"]


def _raise_for_error(body: Any, route: str) -> Mapping[str, Any]:
    if not isinstance(body, Mapping):
        raise ResponseDecodeError(f"{route}: expected a JSON object, got {type(body).__name__}")
    if body.get("errorId", 0) != 0 or body.get("errorCode"):
        try:
            error = ErrorResponse.model_validate(dict(body, errorId=body.get("errorId", 1)))
        except ValidationError as e:
            raise ResponseDecodeError(f"{route}: malformed error response") from e
        raise error.to_exception()
    return body


def _decode(model: Type[BaseModel], body: Mapping[str, Any], route: str) -> Any:
    try:
        return model.model_validate(body)
    except ValidationError as e:
        raise ResponseDecodeError(f"{route}: unexpected response {dict(body)!r}") from e


def parse_create_task(body: Any) -> int:
    """Return the id of the created task.

    Raises:
        ServerError: If the service refused the task.
        ResponseDecodeError: If the body has no task id.
    """
    body = _raise_for_error(body, "createTask")
    return _decode(CreateTaskResponse, body, "createTask").task_id


def parse_task_result(body: Any, solution_type: Type[SolutionPayload]) -> Optional[Solution]:
    """Decode a ``getTaskResult`` answer.

    Args:
        body: The decoded response.
        solution_type: Model of the ``solution`` object for this task.

    Returns:
        The solution envelope, or None while the task is still processing.

    Raises:
        ServerError: If the service reported an error for the task.
        ResponseDecodeError: If the body is neither processing nor ready.
    """
    body = _raise_for_error(body, "getTaskResult")
    status = body.get("status")
    if status == "processing":
        _decode(ProcessingResponse, body, "getTaskResult")
        return None
    if status == "ready":
        return _decode(Solution[solution_type], body, "getTaskResult")
    raise ResponseDecodeError(f"getTaskResult: unknown task status {status!r}")


def parse_balance(body: Any) -> float:
    body = _raise_for_error(body, "getBalance")
    return _decode(BalanceResponse, body, "getBalance").balance


def parse_report(body: Any) -> None:
    """Check a ``reportCorrect``/``reportIncorrect`` answer; errors raise."""
    body = _raise_for_error(body, "report")
    _decode(ReportResponse, body, "report")
