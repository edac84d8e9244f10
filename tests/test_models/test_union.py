"""Tests for untagged union decoding."""

import pytest
from pydantic import BaseModel, ConfigDict, StrictStr

from floki.errors import VariantDecodeError
from floki.models.union import SNIPPET_LENGTH, Variant, decode_union, snippet


class Apple(BaseModel):
    model_config = ConfigDict(extra="forbid")
    apple: StrictStr


class Pear(BaseModel):
    model_config = ConfigDict(extra="forbid")
    pear: StrictStr


class Fruit(BaseModel):
    apple: StrictStr


def _int(value):
    if not isinstance(value, int):
        raise TypeError("not an int")
    return value


VARIANTS = [
    Variant("number", "<int>", _int),
    Variant("apple", "{apple}", Apple.model_validate),
    Variant("pear", "{pear}", Pear.model_validate),
]


class TestDecodeUnion:
    """Test decode_union."""

    def test_picks_matching_shape(self):
        """Each input decodes to the only variant it fits."""
        assert decode_union(3, VARIANTS) == 3
        assert decode_union({"apple": "green"}, VARIANTS) == Apple(apple="green")
        assert decode_union({"pear": "ripe"}, VARIANTS) == Pear(pear="ripe")

    def test_no_match_lists_shapes(self):
        """Inputs fitting nothing report the input and every shape tried."""
        with pytest.raises(VariantDecodeError) as exc_info:
            decode_union({"plum": "red"}, VARIANTS, what="fruit")

        error = exc_info.value
        assert error.what == "fruit"
        assert "plum" in error.snippet
        assert error.shapes == ["number <int>", "apple {apple}", "pear {pear}"]
        assert error.matched == []
        assert "does not match any expected shape" in str(error)

    def test_no_coercion_between_shapes(self):
        """A boolean never satisfies a string field."""
        with pytest.raises(VariantDecodeError):
            decode_union({"apple": True}, VARIANTS)

    def test_conflicting_keys_rejected(self):
        """A mapping carrying keys of two shapes fits neither."""
        with pytest.raises(VariantDecodeError):
            decode_union({"apple": "green", "pear": "ripe"}, VARIANTS)

    def test_ambiguous_match_rejected(self):
        """Inputs fitting several variants are rejected rather than guessed."""
        variants = [
            Variant("apple", "{apple}", Apple.model_validate),
            Variant("fruit", "{apple, ...}", Fruit.model_validate),
        ]

        with pytest.raises(VariantDecodeError) as exc_info:
            decode_union({"apple": "green"}, variants)

        assert exc_info.value.matched == ["apple", "fruit"]
        assert "ambiguous" in str(exc_info.value)

    def test_is_value_error(self):
        """Decode errors surface as ValueError inside pydantic validators."""
        with pytest.raises(ValueError):
            decode_union("nothing", VARIANTS)


def test_snippet_truncates_long_values():
    """Long inputs are shortened in error messages."""
    text = snippet("x" * 500)
    assert len(text) == SNIPPET_LENGTH
    assert text.endswith("...")
    assert snippet("short") == "'short'"
