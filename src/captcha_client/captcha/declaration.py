"""Declarative captcha task definitions.

A task variant is a frozen pydantic model deriving from ``CaptchaTask`` and
decorated with ``@captcha``, which records its discriminator(s), solution
model and timeout, adds the implicit proxy axis when asked to, generates its
builder and registers it::

    @captcha(timeout=20, solution=TokenSolution,
             proxy=ProxyNames("MtCaptchaTask", "MtCaptchaTaskProxyless"))
    class MtCaptcha(CaptchaTask):
        website_url: HttpUrl = Field(alias="websiteURL")
        website_key: str

Design Pattern: Registry (see ``registered_captchas`` / ``get_captcha``).
"""

from dataclasses import dataclass
from datetime import timedelta
from typing import Any, Callable, ClassVar, Dict, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field, create_model
from pydantic.alias_generators import to_camel

from ..errors import CaptchaDefinitionError, InvalidRequestError
from ..proxy import ProxyLess, ProxyTask, WithProxy
from .builder import TaskBuilder, is_nullable, generate_builder
from .interfaces import ICaptcha
from .serialization import serialize_task
from .solution import SolutionPayload

C = TypeVar("C", bound="CaptchaTask")


@dataclass(frozen=True)
class ProxyNames:
    """Discriminators of a variant that can be solved with or without a proxy."""

    with_proxy: str
    without_proxy: str


@dataclass(frozen=True)
class CaptchaSpec:
    """What ``@captcha`` records about a variant."""

    name: str
    timeout: int
    solution: Type[SolutionPayload]
    task_type: Optional[str] = None
    proxy: Optional[ProxyNames] = None

    @property
    def has_proxy_axis(self) -> bool:
        return self.proxy is not None

    def discriminator(self, proxy: Any = None) -> str:
        """Pick the ``type`` value for a task in the given proxy state."""
        if self.proxy is None:
            return self.task_type
        if isinstance(proxy, WithProxy):
            return self.proxy.with_proxy
        return self.proxy.without_proxy


class Empty(BaseModel):
    """Placeholder for caller-extensible payload slots; serialises as ``{}``."""

    model_config = ConfigDict(frozen=True)


class CaptchaTask(BaseModel, ICaptcha):
    """Base class of every task variant.

    Subclasses declare their fields in snake_case; wire names are camelCase
    unless a field declares its own alias.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="forbid",
    )

    __captcha_spec__: ClassVar[Optional[CaptchaSpec]] = None
    __builder__: ClassVar[Optional[Type[TaskBuilder]]] = None

    @classmethod
    def captcha_spec(cls) -> CaptchaSpec:
        spec = cls.__captcha_spec__
        if spec is None or spec.name != cls.__name__:
            raise CaptchaDefinitionError(f"{cls.__name__} is not decorated with @captcha")
        return spec

    @property
    def timeout(self) -> timedelta:
        return timedelta(seconds=self.captcha_spec().timeout)

    @property
    def task_type(self) -> str:
        return self.captcha_spec().discriminator(getattr(self, "proxy", None))

    def to_wire(self) -> Dict[str, Any]:
        return serialize_task(self)

    @classmethod
    def solution_type(cls) -> Type[SolutionPayload]:
        return cls.captcha_spec().solution

    @classmethod
    def builder(cls) -> TaskBuilder:
        cls.captcha_spec()
        return cls.__builder__()


_registry: Dict[str, Type[CaptchaTask]] = {}


def registered_captchas() -> Dict[str, Type[CaptchaTask]]:
    """All declared variants, keyed by class name, in declaration order."""
    return dict(_registry)


def get_captcha(name: str) -> Type[CaptchaTask]:
    """Look up a declared variant by class name.

    Raises:
        InvalidRequestError: If no variant with that name was declared.
    """
    try:
        return _registry[name]
    except KeyError:
        raise InvalidRequestError(f"Unknown captcha type: {name}") from None


def _validate_declaration(
        cls: type,
        timeout: Any,
        solution: Any,
        task_type: Optional[str],
        proxy: Optional[ProxyNames],
) -> None:
    name = getattr(cls, "__name__", repr(cls))
    if not (isinstance(cls, type) and issubclass(cls, CaptchaTask)):
        raise CaptchaDefinitionError(f"@captcha can only decorate CaptchaTask subclasses, got {name}")
    if isinstance(timeout, bool) or not isinstance(timeout, int) or timeout < 1:
        raise CaptchaDefinitionError(f"{name}: timeout must be a whole number of seconds >= 1, got {timeout!r}")
    if not (isinstance(solution, type) and issubclass(solution, SolutionPayload)):
        raise CaptchaDefinitionError(f"{name}: solution must be a SolutionPayload subclass")
    if (task_type is None) == (proxy is None):
        raise CaptchaDefinitionError(f"{name}: give exactly one of task_type= or proxy=")
    if proxy is not None and not isinstance(proxy, ProxyNames):
        raise CaptchaDefinitionError(f"{name}: proxy must be ProxyNames(with_proxy, without_proxy)")

    fields = cls.model_fields
    if "type" in fields:
        raise CaptchaDefinitionError(f"{name}: 'type' is reserved for the discriminator")
    if proxy is not None and "proxy" in fields:
        raise CaptchaDefinitionError(f"{name}: 'proxy' is implicit on variants with a proxy axis")
    for field_name, field in fields.items():
        if field.is_required() and is_nullable(field):
            raise CaptchaDefinitionError(
                f"{name}.{field_name}: optional fields need an explicit default, e.g. = None"
            )
    if name in _registry:
        raise CaptchaDefinitionError(f"a captcha named {name} is already declared")


def _add_proxy_axis(cls: Type[C]) -> Type[C]:
    derived = create_model(
        cls.__name__,
        __base__=cls,
        __module__=cls.__module__,
        proxy=(ProxyTask, Field(default_factory=ProxyLess, exclude=True)),
    )
    derived.__qualname__ = cls.__qualname__
    derived.__doc__ = cls.__doc__
    return derived


def captcha(
        *,
        timeout: int,
        solution: Type[SolutionPayload],
        task_type: Optional[str] = None,
        proxy: Optional[ProxyNames] = None,
) -> Callable[[Type[C]], Type[C]]:
    """Declare a captcha task variant.

    Args:
        timeout: Seconds the solver waits before polling for the result.
        solution: Model the ``solution`` object of a ready task is parsed into.
        task_type: The single ``type`` discriminator of a variant without a
            proxy axis.
        proxy: Discriminators of a variant that can go through a proxy. The
            variant gains an implicit ``proxy`` field, ``ProxyLess()`` by default.

    Raises:
        CaptchaDefinitionError: If the declaration is invalid.
    """

    def decorate(cls: Type[C]) -> Type[C]:
        _validate_declaration(cls, timeout, solution, task_type, proxy)
        if proxy is not None:
            cls = _add_proxy_axis(cls)
        cls.__captcha_spec__ = CaptchaSpec(
            name=cls.__name__,
            timeout=timeout,
            solution=solution,
            task_type=task_type,
            proxy=proxy,
        )
        cls.__builder__ = generate_builder(cls)
        _registry[cls.__name__] = cls
        return cls

    return decorate
