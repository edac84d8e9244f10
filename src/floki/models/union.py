"""Decoding of untagged unions by the shape of the input."""

from dataclasses import dataclass
from typing import Any, Callable, Generic, List, Sequence, TypeVar

from pydantic import ValidationError

from floki.errors import VariantDecodeError


T = TypeVar("T")

SNIPPET_LENGTH = 80


@dataclass(frozen=True)
class Variant(Generic[T]):
    """One possible shape of an untagged value."""
    name: str
    shape: str
    parse: Callable[[Any], T]

    def try_parse(self, value: Any):
        """Return (True, result) if the value fits this shape, else (False, None)."""
        try:
            return True, self.parse(value)
        except (ValidationError, TypeError, ValueError):
            return False, None


def snippet(value: Any) -> str:
    """Short printable form of an input value for error messages."""
    text = repr(value)
    if len(text) > SNIPPET_LENGTH:
        text = text[:SNIPPET_LENGTH - 3] + "..."
    return text


def decode_union(value: Any, variants: Sequence[Variant[T]], what: str = "value") -> T:
    """Decode value into exactly one of the given variants.

    Every variant is tried in declared order. Inputs that fit no variant, or
    that fit more than one, are rejected with VariantDecodeError.
    """
    matches: List[tuple] = []
    for variant in variants:
        ok, result = variant.try_parse(value)
        if ok:
            matches.append((variant, result))

    shapes = [f"{v.name} {v.shape}" for v in variants]
    if not matches:
        raise VariantDecodeError(what, snippet(value), shapes)
    if len(matches) > 1:
        raise VariantDecodeError(
            what, snippet(value), shapes, matched=[v.name for v, _ in matches]
        )

    return matches[0][1]
