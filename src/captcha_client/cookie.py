"""Cookie jar field type.

The service expects cookies as a single ``"name=value;name2=value2"`` string.
Callers may hand over a mapping, an iterable of pairs or an already rendered
string; all three are normalised to an ordered tuple of pairs.
"""

from typing import Annotated, Any, Iterable, Mapping, Tuple

from pydantic import BeforeValidator, PlainSerializer


CookiePairs = Tuple[Tuple[str, str], ...]


def parse_cookies(value: Any) -> CookiePairs:
    if isinstance(value, str):
        pairs = []
        for chunk in value.split(";"):
            chunk = chunk.strip()
            if not chunk:
                continue
            name, sep, cookie_value = chunk.partition("=")
            if not sep:
                raise ValueError(f"cookie {chunk!r} is not in name=value form")
            pairs.append((name.strip(), cookie_value.strip()))
        return tuple(pairs)
    if isinstance(value, Mapping):
        return tuple((str(k), str(v)) for k, v in value.items())
    if isinstance(value, Iterable):
        return tuple((str(k), str(v)) for k, v in value)
    raise ValueError(f"cannot interpret {type(value).__name__} as cookies")


def render_cookies(pairs: Iterable[Tuple[str, str]]) -> str:
    return ";".join(f"{name}={value}" for name, value in pairs)


Cookies = Annotated[
    CookiePairs,
    BeforeValidator(parse_cookies),
    PlainSerializer(render_cookies, return_type=str),
]
