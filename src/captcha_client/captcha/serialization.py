"""Polymorphic wire serialization of captcha tasks.

Every task becomes one flat JSON object keyed by a ``type`` discriminator:

1. ``type`` first, picked from the variant's declaration and, on variants with
   a proxy axis, from whether the task carries ``WithProxy`` or ``ProxyLess``;
2. the declared fields in declaration order, under their wire names;
3. optional fields that are ``None`` left out entirely;
4. proxy settings flattened into the same object as ``proxyType``,
   ``proxyAddress``, ``proxyPort`` (a string), ``proxyLogin``, ``proxyPassword``.
"""

from typing import TYPE_CHECKING, Any, Dict

from pydantic_core import to_json

from ..proxy import Proxy, WithProxy

if TYPE_CHECKING:
    from .declaration import CaptchaTask


def proxy_fields(task: "CaptchaTask") -> Dict[str, Any]:
    """The flattened proxy fields of a task, empty when it runs proxyless."""
    proxy = getattr(task, "proxy", None)
    if isinstance(proxy, WithProxy):
        return proxy.proxy.to_wire()
    if isinstance(proxy, Proxy):
        return proxy.to_wire()
    return {}


def dump_fields(task: "CaptchaTask", **kwargs: Any) -> Dict[str, Any]:
    """The declared fields of a task under their wire names, ``None`` omitted."""
    return task.model_dump(mode="json", by_alias=True, exclude_none=True, **kwargs)


def serialize_task(task: "CaptchaTask") -> Dict[str, Any]:
    wire: Dict[str, Any] = {"type": task.task_type}
    wire.update(dump_fields(task))
    wire.update(proxy_fields(task))
    return wire


def dumps_task(task: "CaptchaTask") -> str:
    """Render a task's wire object as compact JSON."""
    return to_json(task.to_wire()).decode()


def stringify_json(value: Any) -> str:
    """Encode an arbitrary JSON-serialisable value as a JSON string."""
    return to_json(value).decode()
