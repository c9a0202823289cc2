"""2captcha task API solver.

``CaptchaSolver`` submits tasks, waits for them and returns typed solutions.
A solve is strictly sequential: one ``createTask`` call, a sleep of the
task's timeout, then ``getTaskResult`` polls every ``POLL_INTERVAL`` seconds
until the task is ready or the service reports an error. There is no retry
and no overall deadline; wrap the call in ``asyncio.wait_for`` to bound it.
"""

import asyncio
from typing import Optional, Type, Union

import structlog
from pydantic import HttpUrl, ValidationError

from ..captcha.builder import TaskBuilder, generate_builder
from ..captcha.interfaces import ICaptcha
from ..captcha.solution import ReportStatus, Solution
from ..config.settings import SolverSettings, load_settings
from ..errors import InvalidRequestError
from ..language_pool import LanguagePool
from .messages import (
    BalanceRequest,
    CreateTaskRequest,
    TaskRequest,
    parse_balance,
    parse_create_task,
    parse_report,
    parse_task_result,
)
from .transport import AiohttpTransport, Endpoint, ITransport

logger = structlog.get_logger()


class CaptchaSolver:
    """Client for the 2captcha task API.

    2captcha uses a combination of AI and human workers, so solving takes
    anywhere from a few seconds to a couple of minutes depending on the task.
    One solver can run any number of solves concurrently; they share only the
    transport's connection pool.
    """

    POLL_INTERVAL = 5

    def __init__(
            self,
            api_key: str,
            *,
            language_pool: LanguagePool = LanguagePool.EN,
            callback_url: Optional[Union[HttpUrl, str]] = None,
            transport: Optional[ITransport] = None,
    ):
        """Initialize the solver.

        Args:
            api_key: 2captcha API key for authentication.
            language_pool: Worker pool tasks are dispatched to.
            callback_url: Pingback URL. When set, ``solve`` returns right
                after submitting and the result is pushed to this URL.
            transport: Transport to use. Defaults to an ``AiohttpTransport``
                owned, and closed, by this solver.

        Raises:
            InvalidRequestError: If a setting is invalid.
        """
        try:
            self.settings = SolverSettings(
                api_key=api_key,
                language_pool=language_pool,
                callback_url=callback_url,
            )
        except ValidationError as e:
            raise InvalidRequestError(f"invalid solver settings: {e}") from e
        self._transport = transport if transport is not None else AiohttpTransport()
        self._owns_transport = transport is None
        self.logger = logger.bind(solver="2Captcha")

    @classmethod
    def from_settings(cls, settings: SolverSettings, transport: Optional[ITransport] = None) -> "CaptchaSolver":
        return cls(
            settings.api_key,
            language_pool=settings.language_pool,
            callback_url=settings.callback_url,
            transport=transport,
        )

    @classmethod
    def from_env(cls, env_file: Optional[str] = None, transport: Optional[ITransport] = None) -> "CaptchaSolver":
        """Create a solver from ``TWOCAPTCHA_*`` environment variables.

        Raises:
            InvalidRequestError: If ``TWOCAPTCHA_API_KEY`` is not set.
        """
        return cls.from_settings(load_settings(env_file), transport=transport)

    @classmethod
    def builder(cls) -> TaskBuilder:
        """Return a builder whose ``build`` becomes available once ``api_key`` is set."""
        return CaptchaSolverBuilder()

    async def solve(self, task: ICaptcha) -> Optional[Solution]:
        """Submit a task and wait for its solution.

        Args:
            task: The task to solve.

        Returns:
            The solution envelope, carrying the id of the task. None when a
            callback URL is configured, since the result is then pushed to it.

        Raises:
            ServerError: If the service reports an error for the task.
            TransportError: If a request fails.
            ResponseDecodeError: If a response cannot be understood.
        """
        task_id = await self.create_task(task)
        if self.settings.callback_url is not None:
            self.logger.info("solution_will_be_pushed", task_id=task_id)
            return None

        await asyncio.sleep(task.timeout.total_seconds())

        polls = 0
        while True:
            polls += 1
            solution = await self.get_task_result(task, task_id)
            if solution is not None:
                self.logger.info("task_solved", task_id=task_id, polls=polls, cost=solution.cost)
                return solution
            self.logger.debug("task_processing", task_id=task_id, polls=polls)
            await asyncio.sleep(self.POLL_INTERVAL)

    async def create_task(self, task: ICaptcha) -> int:
        """Submit a task without waiting for it.

        Returns:
            The id the service assigned to the task.
        """
        request = CreateTaskRequest(
            client_key=self.settings.api_key,
            task=task.to_wire(),
            language_pool=self.settings.language_pool,
            callback_url=self.settings.callback_url,
        )
        body = await self._transport.post(Endpoint.CREATE_TASK, request.to_wire())
        task_id = parse_create_task(body)
        self.logger.info("task_created", task_id=task_id, task_type=task.task_type)
        return task_id

    async def get_task_result(
            self,
            task: Union[ICaptcha, Type[ICaptcha]],
            task_id: int,
    ) -> Optional[Solution]:
        """Fetch the current state of a submitted task once.

        Args:
            task: The submitted task, or its class; used to pick the
                solution model.
            task_id: Id returned by ``create_task``.

        Returns:
            The solution envelope if the task is ready, None while it is
            still being processed.
        """
        request = TaskRequest(client_key=self.settings.api_key, task_id=task_id)
        body = await self._transport.post(Endpoint.GET_TASK_RESULT, request.to_wire())
        solution = parse_task_result(body, task.solution_type())
        if solution is None:
            return None
        return solution.model_copy(update={"task_id": task_id})

    async def get_balance(self) -> float:
        """Return the account balance, in USD."""
        request = BalanceRequest(client_key=self.settings.api_key)
        body = await self._transport.post(Endpoint.GET_BALANCE, request.to_wire())
        balance = parse_balance(body)
        self.logger.debug("balance_fetched", balance=balance)
        return balance

    async def report(self, solution: Solution, status: Union[ReportStatus, str, bool]) -> None:
        """Tell the service whether a solution was accepted by the target site.

        Args:
            solution: A solution returned by ``solve`` or ``get_task_result``.
            status: ``ReportStatus``, its value (``"correct"`` or
                ``"incorrect"``) or a bool, True meaning correct.

        Raises:
            InvalidRequestError: If the status is not a verdict or the
                solution carries no task id.
        """
        if isinstance(status, bool):
            status = ReportStatus.from_flag(status)
        else:
            try:
                status = ReportStatus(status)
            except ValueError:
                raise InvalidRequestError(f"not a report status: {status!r}") from None
        if solution.task_id is None:
            raise InvalidRequestError("the solution carries no task id to report")

        endpoint = Endpoint.REPORT_CORRECT if status is ReportStatus.CORRECT else Endpoint.REPORT_INCORRECT
        request = TaskRequest(client_key=self.settings.api_key, task_id=solution.task_id)
        body = await self._transport.post(endpoint, request.to_wire())
        parse_report(body)
        self.logger.info("solution_reported", task_id=solution.task_id, status=status.value)

    async def close(self) -> None:
        if self._owns_transport:
            await self._transport.close()

    async def __aenter__(self) -> "CaptchaSolver":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()


CaptchaSolverBuilder = generate_builder(
    SolverSettings,
    name="CaptchaSolverBuilder",
    construct=lambda **values: CaptchaSolver.from_settings(SolverSettings(**values)),
)
