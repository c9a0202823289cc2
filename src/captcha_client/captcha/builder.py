"""Type-state builder generator.

``generate_builder`` turns a pydantic model into a family of builder classes.
The root class ``<Model>Builder`` is the state where every required field is
missing. Each combination of provided required fields is its own subclass of
the root, created on first use and cached, and only the class where all of
them are provided defines ``build``::

    builder = RecaptchaV2.builder()                 # RecaptchaV2Builder
    builder = builder.website_url("https://...")    # [WebsiteUrlProvided, MissingWebsiteKey]
    builder.build()                                 # IncompleteBuildError
    task = builder.website_key("6Le...").build()    # RecaptchaV2

For every required field the generator attaches two classes to the root:
``Missing<Field>``, an empty marker, and ``<Field>Provided``, which wraps the
value. Builder states hold one of the two per required field, so a state's
slots always agree with its class.

Optional fields are plain slots: ``name(value)`` sets one and
``remove_name()`` clears it, and neither changes the builder's class. A
``ProxyTask`` field is the proxy axis: its setter takes a ``Proxy`` and wraps
it in ``WithProxy``, its remover puts back ``ProxyLess``.

Builders never mutate; each setter returns a new builder.
"""

from typing import (
    Any,
    Callable,
    ClassVar,
    Dict,
    FrozenSet,
    Iterable,
    Optional,
    Tuple,
    Type,
    get_args,
)

import structlog
from pydantic import BaseModel, ValidationError
from pydantic.fields import FieldInfo

from ..errors import CaptchaDefinitionError, IncompleteBuildError, InvalidRequestError
from ..proxy import Proxy, ProxyLess, ProxyTask, WithProxy

logger = structlog.get_logger()

RESERVED_NAMES = frozenset({"build", "missing_fields"})


class MissingField:
    """Base of the generated ``Missing<Field>`` markers."""

    __slots__ = ()
    field: ClassVar[str]

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class ProvidedField:
    """Base of the generated ``<Field>Provided`` wrappers."""

    __slots__ = ("value",)
    field: ClassVar[str]

    def __init__(self, value: Any):
        self.value = value

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.value!r})"


class TaskBuilder:
    """Base class of every generated builder state."""

    _target: ClassVar[type]
    _construct: ClassVar[Callable[..., Any]]
    _required: ClassVar[Tuple[str, ...]] = ()
    _optional: ClassVar[Tuple[str, ...]] = ()
    _optional_defaults: ClassVar[Dict[str, Any]] = {}
    _markers: ClassVar[Dict[str, Tuple[Type[MissingField], Type[ProvidedField]]]] = {}
    _provided: ClassVar[FrozenSet[str]] = frozenset()
    _states: ClassVar[Dict[FrozenSet[str], type]]
    _root: ClassVar[type]

    def __init__(self):
        if type(self) is not self._root:
            raise TypeError(
                f"{type(self).__name__} is an intermediate builder state, "
                f"start from {self._root.__name__}()"
            )
        slots = {name: self._markers[name][0]() for name in self._required}
        self._init_state(slots, dict(self._optional_defaults))

    def _init_state(self, slots: Dict[str, Any], optional: Dict[str, Any]) -> None:
        object.__setattr__(self, "_slots", slots)
        object.__setattr__(self, "_values", optional)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable, use its setters")

    def __getattr__(self, name: str) -> Any:
        # Only reached when normal lookup fails, i.e. on incomplete states
        if name == "build":
            raise IncompleteBuildError(self._target.__name__, self.missing_fields)
        raise AttributeError(f"{type(self).__name__!r} object has no attribute {name!r}")

    @property
    def missing_fields(self) -> Tuple[str, ...]:
        """Required fields that still have to be provided before ``build``."""
        return tuple(name for name in self._required if name not in self._provided)

    def _evolve(self, state: type, slots: Dict[str, Any], optional: Dict[str, Any]) -> "TaskBuilder":
        new = object.__new__(state)
        new._init_state(slots, optional)
        return new

    def _provide(self, name: str, value: Any) -> "TaskBuilder":
        state = self._root._state_for(self._provided | {name})
        slots = dict(self._slots)
        slots[name] = self._markers[name][1](value)
        return self._evolve(state, slots, dict(self._values))

    def _set_optional(self, name: str, value: Any) -> "TaskBuilder":
        optional = dict(self._values)
        optional[name] = value
        return self._evolve(type(self), dict(self._slots), optional)

    def _clear_optional(self, name: str) -> "TaskBuilder":
        optional = dict(self._values)
        optional.pop(name, None)
        if name in self._optional_defaults:
            optional[name] = self._optional_defaults[name]
        return self._evolve(type(self), dict(self._slots), optional)

    def _field_values(self) -> Dict[str, Any]:
        values = {name: slot.value for name, slot in self._slots.items()}
        values.update(self._values)
        return values

    @classmethod
    def _state_for(cls, provided: FrozenSet[str]) -> type:
        root = cls._root
        provided = frozenset(provided)
        if not provided:
            return root
        state = root._states.get(provided)
        if state is None:
            state = _make_state(root, provided)
            root._states[provided] = state
        return state

    def __repr__(self) -> str:
        shown = [f"{name}={slot!r}" for name, slot in self._slots.items()]
        shown += [f"{name}={value!r}" for name, value in self._values.items()]
        return f"{type(self).__name__}({', '.join(shown)})"


def _build(self: TaskBuilder) -> Any:
    """Construct the target from the provided fields.

    Raises:
        InvalidRequestError: If validation rejects one of the values.
    """
    try:
        return self._construct(**self._field_values())
    except ValidationError as exc:
        logger.debug("build_rejected", target=self._target.__name__, errors=exc.error_count())
        raise InvalidRequestError(f"invalid {self._target.__name__}: {exc}") from exc


def camel_name(field_name: str) -> str:
    return "".join(part[:1].upper() + part[1:] for part in field_name.split("_"))


def _state_name(root: type, provided: FrozenSet[str]) -> str:
    parts = []
    for name in root._required:
        missing, given = root._markers[name]
        parts.append(given.__name__ if name in provided else missing.__name__)
    return f"{root.__name__}[{', '.join(parts)}]"


def _make_state(root: type, provided: FrozenSet[str]) -> type:
    namespace: Dict[str, Any] = {
        "__module__": root.__module__,
        "__slots__": (),
        "_provided": provided,
    }
    if provided == frozenset(root._required):
        namespace["build"] = _build
    return type(_state_name(root, provided), (root,), namespace)


def _required_setter(name: str) -> Callable[[TaskBuilder, Any], TaskBuilder]:
    def setter(self: TaskBuilder, value: Any) -> TaskBuilder:
        return self._provide(name, value)

    setter.__name__ = name
    setter.__doc__ = f"Provide the required ``{name}`` field."
    return setter


def _optional_setter(name: str) -> Callable[[TaskBuilder, Any], TaskBuilder]:
    def setter(self: TaskBuilder, value: Any) -> TaskBuilder:
        return self._set_optional(name, value)

    setter.__name__ = name
    setter.__doc__ = f"Set the optional ``{name}`` field."
    return setter


def _optional_remover(name: str) -> Callable[[TaskBuilder], TaskBuilder]:
    def remover(self: TaskBuilder) -> TaskBuilder:
        return self._clear_optional(name)

    remover.__name__ = f"remove_{name}"
    remover.__doc__ = f"Clear the optional ``{name}`` field."
    return remover


def _proxy_setter(name: str) -> Callable[[TaskBuilder, Any], TaskBuilder]:
    def setter(self: TaskBuilder, proxy: Any) -> TaskBuilder:
        if isinstance(proxy, (WithProxy, ProxyLess)):
            return self._set_optional(name, proxy)
        if not isinstance(proxy, Proxy):
            raise InvalidRequestError(f"expected a Proxy, got {type(proxy).__name__}")
        return self._set_optional(name, WithProxy(proxy=proxy))

    setter.__name__ = name
    setter.__doc__ = "Solve the task through the given ``Proxy``."
    return setter


def is_nullable(field: FieldInfo) -> bool:
    return type(None) in get_args(field.annotation)


def _check_names(model: type, names: Iterable[str]) -> None:
    names = list(names)
    for name in names:
        if name in RESERVED_NAMES:
            raise CaptchaDefinitionError(
                f"{model.__name__}.{name} clashes with the builder's {name!r}"
            )
        if name.startswith("remove_") and name[len("remove_"):] in names:
            raise CaptchaDefinitionError(
                f"{model.__name__}.{name} clashes with the remover of {name[len('remove_'):]!r}"
            )


def generate_builder(
        model: Type[BaseModel],
        *,
        name: Optional[str] = None,
        construct: Optional[Callable[..., Any]] = None,
) -> Type[TaskBuilder]:
    """Generate the type-state builder family for a pydantic model.

    Args:
        model: Model whose fields the builder collects. Fields that are not
            nullable and have no default are required; all others, including
            ``Optional[...]`` fields without a default, are optional slots.
        name: Name of the root builder class, ``<Model>Builder`` by default.
        construct: Callable receiving the collected fields as keyword
            arguments. Defaults to the model itself.

    Returns:
        The root builder class. Instantiating it with no arguments gives the
        all-missing state.

    Raises:
        CaptchaDefinitionError: If a field name clashes with builder methods.
    """
    fields: Dict[str, FieldInfo] = model.model_fields
    _check_names(model, fields)

    required = []
    optional = []
    optional_defaults: Dict[str, Any] = {}
    proxy_axis = None
    for field_name, field in fields.items():
        if field.annotation == ProxyTask:
            proxy_axis = field_name
            optional.append(field_name)
        elif field.is_required() and not is_nullable(field):
            required.append(field_name)
        else:
            optional.append(field_name)
            if field.is_required():
                optional_defaults[field_name] = None
    if proxy_axis is not None:
        optional_defaults[proxy_axis] = ProxyLess()

    root_name = name or f"{model.__name__}Builder"
    namespace: Dict[str, Any] = {
        "__module__": model.__module__,
        "__qualname__": root_name,
        "__doc__": f"Builder for :class:`{model.__name__}`, starting with every required field missing.",
        "__slots__": ("_slots", "_values"),
        "_target": model,
        "_construct": staticmethod(construct or model),
        "_required": tuple(required),
        "_optional": tuple(optional),
        "_optional_defaults": optional_defaults,
        "_provided": frozenset(),
        "_states": {},
    }

    markers = {}
    for field_name in required:
        camel = camel_name(field_name)
        missing = type(f"Missing{camel}", (MissingField,), {"__slots__": (), "field": field_name})
        given = type(f"{camel}Provided", (ProvidedField,), {"__slots__": (), "field": field_name})
        missing.__qualname__ = f"{root_name}.{missing.__name__}"
        given.__qualname__ = f"{root_name}.{given.__name__}"
        missing.__module__ = given.__module__ = model.__module__
        namespace[missing.__name__] = missing
        namespace[given.__name__] = given
        markers[field_name] = (missing, given)
        namespace[field_name] = _required_setter(field_name)
    namespace["_markers"] = markers

    for field_name in optional:
        if field_name == proxy_axis:
            namespace[field_name] = _proxy_setter(field_name)
        else:
            namespace[field_name] = _optional_setter(field_name)
        namespace[f"remove_{field_name}"] = _optional_remover(field_name)

    if not required:
        namespace["build"] = _build

    root = type(root_name, (TaskBuilder,), namespace)
    root._root = root
    return root
