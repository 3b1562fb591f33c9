"""Tests for declarative contracts and the generic validator."""

from __future__ import annotations

import pytest

from linear_mcp.contracts import EMPTY_CONTRACT, Contract, Field, FieldType, validate

LIMITED = Contract.of(
    Field("teamId", FieldType.STRING, "Team"),
    Field("states", FieldType.STRING_ARRAY, "States", required=False),
    Field("limit", FieldType.INTEGER, "Limit", required=False, default=10, minimum=1),
    Field("ratio", FieldType.NUMBER, required=False),
    Field("archived", FieldType.BOOLEAN, required=False),
)


class TestValidate:
    def test_minimal_payload_gets_defaults(self) -> None:
        result = validate(LIMITED, {"teamId": "t1"})
        assert result.ok
        assert result.value == {"teamId": "t1", "limit": 10}

    def test_missing_required_names_field(self) -> None:
        result = validate(LIMITED, {"limit": 3})
        assert not result.ok
        assert result.field_name == "teamId"
        assert "missing required field 'teamId'" in result.reason

    def test_null_required_is_missing(self) -> None:
        result = validate(LIMITED, {"teamId": None})
        assert not result.ok
        assert result.field_name == "teamId"

    def test_none_payload_treated_as_empty(self) -> None:
        assert validate(EMPTY_CONTRACT, None).ok
        assert not validate(LIMITED, None).ok

    def test_unknown_fields_ignored_and_dropped(self) -> None:
        result = validate(LIMITED, {"teamId": "t1", "bogus": 1})
        assert result.ok
        assert "bogus" not in result.value

    def test_wrong_type_rejected(self) -> None:
        result = validate(LIMITED, {"teamId": 42})
        assert not result.ok
        assert result.field_name == "teamId"
        assert "must be a string" in result.reason

    def test_optional_present_must_match_type(self) -> None:
        result = validate(LIMITED, {"teamId": "t1", "states": "done"})
        assert not result.ok
        assert result.field_name == "states"
        assert "array of strings" in result.reason

    def test_string_array_items_checked(self) -> None:
        result = validate(LIMITED, {"teamId": "t1", "states": ["done", 3]})
        assert not result.ok
        assert result.field_name == "states"

    def test_string_array_accepts_strings(self) -> None:
        result = validate(LIMITED, {"teamId": "t1", "states": ["done", "todo"]})
        assert result.ok
        assert result.value["states"] == ["done", "todo"]

    def test_bool_is_not_an_integer(self) -> None:
        result = validate(LIMITED, {"teamId": "t1", "limit": True})
        assert not result.ok
        assert result.field_name == "limit"

    def test_float_is_not_an_integer(self) -> None:
        assert not validate(LIMITED, {"teamId": "t1", "limit": 2.5}).ok

    def test_integral_float_coerced_to_int(self) -> None:
        result = validate(LIMITED, {"teamId": "t1", "limit": 5.0})
        assert result.ok
        assert result.value["limit"] == 5
        assert type(result.value["limit"]) is int

    def test_integral_float_still_bounded(self) -> None:
        result = validate(LIMITED, {"teamId": "t1", "limit": 0.0})
        assert not result.ok
        assert "must be >= 1" in result.reason

    def test_number_accepts_int_and_float(self) -> None:
        assert validate(LIMITED, {"teamId": "t1", "ratio": 1}).ok
        assert validate(LIMITED, {"teamId": "t1", "ratio": 0.5}).ok
        assert not validate(LIMITED, {"teamId": "t1", "ratio": False}).ok

    def test_boolean(self) -> None:
        assert validate(LIMITED, {"teamId": "t1", "archived": False}).value["archived"] is False
        assert not validate(LIMITED, {"teamId": "t1", "archived": "yes"}).ok

    def test_minimum_enforced(self) -> None:
        result = validate(LIMITED, {"teamId": "t1", "limit": 0})
        assert not result.ok
        assert "must be >= 1" in result.reason

    def test_maximum_enforced(self) -> None:
        contract = Contract.of(Field("priority", FieldType.INTEGER, required=False, minimum=0, maximum=4))
        assert validate(contract, {"priority": 4}).ok
        result = validate(contract, {"priority": 5})
        assert not result.ok
        assert "must be <= 4" in result.reason

    def test_explicit_value_overrides_default(self) -> None:
        assert validate(LIMITED, {"teamId": "t1", "limit": 3}).value["limit"] == 3

    def test_non_mapping_payload_rejected(self) -> None:
        result = validate(LIMITED, ["teamId"])  # type: ignore[arg-type]
        assert not result.ok


class TestFieldDeclaration:
    def test_default_on_required_field_rejected(self) -> None:
        with pytest.raises(ValueError, match="only allowed on optional"):
            Field("limit", FieldType.INTEGER, default=10)

    def test_default_must_match_type(self) -> None:
        with pytest.raises(ValueError, match="is not an integer"):
            Field("limit", FieldType.INTEGER, required=False, default="10")

    def test_bounds_only_on_numeric(self) -> None:
        with pytest.raises(ValueError, match="numeric"):
            Field("name", FieldType.STRING, minimum=1)

    def test_duplicate_fields_rejected(self) -> None:
        with pytest.raises(ValueError, match="Duplicate"):
            Contract.of(Field("a", FieldType.STRING), Field("a", FieldType.STRING))


class TestRendering:
    def test_json_schema(self) -> None:
        schema = LIMITED.to_json_schema()
        assert schema["type"] == "object"
        assert schema["required"] == ["teamId"]
        props = schema["properties"]
        assert props["teamId"] == {"type": "string", "description": "Team"}
        assert props["states"] == {"type": "array", "items": {"type": "string"}, "description": "States"}
        assert props["limit"] == {"type": "integer", "minimum": 1, "default": 10, "description": "Limit"}
        assert props["ratio"] == {"type": "number"}

    def test_empty_contract_schema_has_no_required(self) -> None:
        assert EMPTY_CONTRACT.to_json_schema() == {"type": "object", "properties": {}}

    def test_prompt_arguments(self) -> None:
        args = LIMITED.prompt_arguments()
        assert [a.name for a in args] == ["teamId", "states", "limit", "ratio", "archived"]
        assert args[0].required is True
        assert args[1].required is False
        assert args[3].description is None
