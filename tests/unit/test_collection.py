"""Tests for NameValues: normalization and the typed accessors."""

from decimal import Decimal

import pytest

from name_values import (
    CoercionError,
    Coercer,
    NameNotFoundError,
    NameValue,
    NameValues,
    ScalarType,
)


class TestNormalization:
    """Keys are lowercased once, at construction."""

    def test_keys_are_lowercase(self, form):
        assert list(form) == ["name", "age", "tags", "subscribed", "balance", "notes"]

    @pytest.mark.parametrize("query", ["name", "NAME", "Name", "nAmE"])
    def test_exists_ignores_case(self, form, query):
        assert form.exists(query) is True

    def test_exists_absent(self, form):
        assert form.exists("email") is False

    def test_collision_keeps_one_value(self):
        nv = NameValues({"Key": 1, "KEY": 2, "key": 3})

        assert len(nv) == 1
        assert nv["key"] in (1, 2, 3)

    def test_input_is_copied(self, form_fields):
        nv = NameValues(form_fields)
        form_fields["Extra"] = "1"
        del form_fields["Name"]

        assert nv.exists("extra") is False
        assert nv.exists("name") is True

    def test_accepts_pairs_and_records(self):
        nv = NameValues([("A", 1), NameValue("B", "2")])

        assert nv.int("a") == (1, True)
        assert nv.int("b") == (2, True)

    def test_empty(self):
        nv = NameValues()

        assert len(nv) == 0
        assert nv.int("x") == (0, False)

    def test_non_string_name_rejected(self):
        with pytest.raises(TypeError, match="name must be a string"):
            NameValues({1: "x"})

    def test_mapping_protocol_ignores_case(self, form):
        assert "NAME" in form
        assert 5 not in form
        assert form["AGE"] == "48"
        with pytest.raises(KeyError):
            form["email"]

    def test_accessor_order_does_not_matter(self, form):
        forward = (form.bool("subscribed"), form.int("AGE"), form.decimal("Balance"))
        backward = (form.decimal("balance"), form.int("age"), form.bool("SUBSCRIBED"))

        assert forward == backward[::-1]
        assert form.bool("subscribed") == forward[0]
        assert list(form) == ["name", "age", "tags", "subscribed", "balance", "notes"]

    def test_collision_is_logged(self, caplog):
        caplog.set_level("DEBUG", logger="name_values")

        NameValues({"Key": 1, "KEY": 2})

        assert "collides with an existing entry" in caplog.text

    def test_no_collision_no_record(self, caplog):
        caplog.set_level("DEBUG", logger="name_values")

        NameValues({"a": 1, "b": 2})

        assert "collides" not in caplog.text

    @pytest.mark.parametrize("pairs", [["abc"], [5], [("a", 1, 2)]])
    def test_malformed_pairs_rejected(self, pairs):
        with pytest.raises(TypeError, match=r"pair must be a \(name, value\) tuple"):
            NameValues(pairs)

    def test_non_string_lookup_is_missing(self, form):
        assert form.get(5) is None
        assert form.get(5, "default") == "default"
        with pytest.raises(KeyError):
            form[5]


class TestScalarAccessors:
    """Value accessors return (value, existed)."""

    def test_string(self, form, row):
        assert form.string("NAME") == ("Zaldy", True)
        assert form.string("email") == ("", False)
        assert row.string("id") == ("", True)

    def test_int(self, form):
        assert form.int("age") == (48, True)
        assert form.int("notes") == (0, True)
        assert form.int("email") == (0, False)

    def test_int_from_text(self):
        assert NameValues({"n": "1028"}).int("N") == (1028, True)

    def test_int64_direct_match(self, row):
        assert row.int64("ID") == (1028, True)

    def test_int64_out_of_range_is_zero(self):
        assert NameValues({"n": 2 ** 64}).int64("n") == (0, True)

    def test_float64(self, form, row):
        assert row.float64("ratio") == (0.25, True)
        assert row.float64("id") == (0.0, True)
        assert form.float64("age") == (48.0, True)
        assert form.float64("email") == (0.0, False)

    def test_bool(self, form, row):
        assert form.bool("subscribed") == (True, True)
        assert NameValues({"flag": "0"}).bool("flag") == (False, True)
        assert form.bool("email") == (False, False)
        assert row.bool("active") == (True, True)

    def test_decimal(self, form, row):
        assert form.decimal("balance") == (Decimal("10281028.4321"), True)
        assert form.decimal("notes") == (Decimal("0"), True)
        assert form.decimal("email") == (Decimal("0"), False)
        assert row.decimal("amount") == (Decimal("12.50"), True)
        assert row.decimal("id") == (Decimal("1028"), True)
        assert row.decimal("ratio") == (Decimal("0.25"), True)

    def test_none_value_is_present(self, row):
        assert row.int("missing") == (0, True)
        assert row.string("missing") == ("", True)

    def test_plain(self, row):
        assert row.plain("Created") == (row["created"], True)
        assert row.plain("missing") == (None, True)
        assert row.plain("email") == (None, False)


class TestArrayAccessors:
    """Array accessors wrap the scalar ones."""

    def test_strings_split_on_commas(self, form):
        assert form.strings("tags") == ["a", "b", "c"]

    def test_strings_without_comma(self, form):
        assert form.strings("name") == ["Zaldy"]

    def test_strings_absent(self, form):
        assert form.strings("email") == []

    def test_strings_keeps_empty_items(self):
        assert NameValues({"s": "a,,b,"}).strings("s") == ["a", "", "b", ""]

    def test_strings_non_text_is_single_empty(self, row):
        assert row.strings("id") == [""]

    def test_singletons(self, form, row):
        assert form.ints("age") == [48]
        assert row.int64s("id") == [1028]
        assert row.float64s("ratio") == [0.25]
        assert form.bools("subscribed") == [True]
        assert form.decimals("balance") == [Decimal("10281028.4321")]

    def test_malformed_is_zero_singleton(self, form):
        assert form.ints("notes") == [0]

    def test_absent_is_empty(self, form):
        assert form.ints("email") == []
        assert form.int64s("email") == []
        assert form.float64s("email") == []
        assert form.bools("email") == []
        assert form.decimals("email") == []

    def test_to_list(self):
        assert NameValues({"A": 1, "b": "2"}).to_list() == [1, "2"]


class TestReferenceAccessors:
    """ref_* accessors yield None exactly when the name is absent."""

    def test_present(self, form):
        assert form.ref_string("name") == ("Zaldy", True)
        assert form.ref_int("age") == (48, True)
        assert form.ref_int64("age") == (48, True)
        assert form.ref_float64("age") == (48.0, True)
        assert form.ref_bool("subscribed") == (True, True)
        assert form.ref_decimal("balance") == (Decimal("10281028.4321"), True)
        assert form.ref_plain("age") == ("48", True)

    def test_malformed_still_has_value(self, form):
        assert form.ref_int("notes") == (0, True)
        assert form.ref_bool("notes") == (False, True)

    def test_absent(self, form):
        for accessor in (form.ref_string, form.ref_int, form.ref_int64,
                         form.ref_float64, form.ref_bool, form.ref_decimal, form.ref_plain):
            assert accessor("email") == (None, False)


class TestTypedAccessor:
    """Generic lookup by Python type."""

    @pytest.mark.parametrize("target,expected", [
        (str, ("48", True)),
        (int, (48, True)),
        (float, (48.0, True)),
        (bool, (False, True)),
        (Decimal, (Decimal("48"), True)),
    ])
    def test_targets(self, form, target, expected):
        assert form.typed("age", target) == expected

    def test_bool_uses_literal_set(self, form):
        assert form.typed("subscribed", bool) == (True, True)

    def test_absent(self, form):
        assert form.typed("email", int) == (0, False)
        assert form.typed_ref("email", int) == (None, False)
        assert form.typed_ref("age", int) == (48, True)

    def test_unsupported_target(self, form):
        with pytest.raises(TypeError, match="unsupported target type"):
            form.typed("age", list)


class TestStrict:
    """strict() separates absent from malformed."""

    def test_converts(self, form):
        assert form.strict("AGE", int) == 48
        assert form.strict("subscribed", ScalarType.BOOL) is True

    def test_absent(self, form):
        with pytest.raises(NameNotFoundError) as excinfo:
            form.strict("email", int)

        assert isinstance(excinfo.value, KeyError)
        assert str(excinfo.value) == "name not found: 'email'"

    def test_malformed(self, form):
        with pytest.raises(CoercionError) as excinfo:
            form.strict("Notes", Decimal)

        assert excinfo.value.name == "Notes"
        assert excinfo.value.target is ScalarType.DECIMAL


class TestCustomCoercer:
    """A collection uses the coercer it was built with."""

    def test_bool_literals(self):
        nv = NameValues({"f": "Y"}, coercer=Coercer(bool_literals={"Y"}))

        assert nv.bool("F") == (True, True)

    def test_derive_keeps_coercer(self):
        nv = NameValues({"f": "Y"}, coercer=Coercer(bool_literals={"Y"}))

        assert nv.derive({"G": "Y"}).bool("g") == (True, True)
