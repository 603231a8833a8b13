"""Tests for declarative record configuration loading."""

import json

import pytest

from fieldcheck.core.models import (
    Alignment,
    DataType,
    MapFunction,
    Severity,
    ValidationType,
)
from fieldcheck.validation.declarative import load_record_config, parse_record_config
from fieldcheck.validation.exceptions import ConfigurationSchemaError


@pytest.fixture
def config_dict() -> dict:
    return {
        "name": "detail",
        "fields": [
            {
                "fieldname": "amount",
                "datatype": "N",
                "alignment": "R",
                "validations": [
                    {"type": "regex", "params": "[0-9.]+"},
                    {
                        "type": "EQUALS",
                        "params": "0",
                        "severity": "warning",
                        "error_message": "amount should be zero",
                    },
                ],
            },
            {"fieldname": "sign", "datatype": "*"},
            {"fieldname": "currency", "datatype": "A/N"},
        ],
        "map_functions": [
            {
                "field_name": "amount",
                "function": "aggregate",
                "map_to": "totalAmount",
                "sign_field": "sign",
                "condition": "${currency} = USD",
            },
            {"field_name": "amount", "function": "COUNT", "map_to": "rows"},
        ],
    }


class TestParseRecordConfig:
    def test_full_config(self, config_dict) -> None:
        config = parse_record_config(config_dict)

        assert config.name == "detail"
        assert [f.fieldname for f in config.fields] == ["amount", "sign", "currency"]

        amount = config.field_config("amount")
        assert amount.datatype is DataType.NUMERIC
        assert amount.alignment is Alignment.RIGHT
        assert [r.type for r in amount.validations] == [
            ValidationType.REGEX,
            ValidationType.EQUALS,
        ]
        assert amount.validations[1].severity is Severity.WARNING
        assert amount.validations[1].error_message == "amount should be zero"
        assert config.field_config("sign").datatype is DataType.ANY
        assert config.field_config("currency").alignment is None

        total, rows = config.map_functions
        assert total.function is MapFunction.AGGREGATE
        assert total.sign_field == "sign"
        assert total.condition == "${currency} = USD"
        assert rows.function is MapFunction.COUNT
        assert rows.condition is None

    def test_defaults(self) -> None:
        config = parse_record_config({"fields": [{"fieldname": "a"}]})
        assert config.name == "record"
        assert config.map_functions == ()
        assert config.fields[0].validations == ()

    def test_same_function_may_share_map_to(self, config_dict) -> None:
        config_dict["map_functions"].append(
            {"field_name": "sign", "function": "COUNT", "map_to": "rows"}
        )
        assert len(parse_record_config(config_dict).map_functions) == 3


class TestSchemaErrors:
    def test_missing_fields(self) -> None:
        with pytest.raises(ConfigurationSchemaError, match="must contain 'fields'"):
            parse_record_config({"name": "x"})

    def test_fields_not_a_list(self) -> None:
        with pytest.raises(ConfigurationSchemaError, match="must be a list"):
            parse_record_config({"fields": {"fieldname": "a"}})

    def test_duplicate_field(self) -> None:
        with pytest.raises(ConfigurationSchemaError) as excinfo:
            parse_record_config({"fields": [{"fieldname": "a"}, {"fieldname": "a"}]})
        assert excinfo.value.context["index"] == 1
        assert excinfo.value.context["value"] == "a"

    @pytest.mark.parametrize(
        "bad_rule",
        [{"type": "XPATH"}, {"type": "REGEX", "severity": "FATAL"}, {"params": "x"}, "REGEX"],
    )
    def test_rule_errors_report_rule_index(self, bad_rule) -> None:
        rules = [{"type": "REGEX", "params": "a"}, {"type": "EQUALS", "params": "a"}, bad_rule]
        with pytest.raises(ConfigurationSchemaError) as excinfo:
            parse_record_config({"fields": [{"fieldname": "a", "validations": rules}]})
        assert excinfo.value.context["section"] == "fields.a.validations"
        assert excinfo.value.context["index"] == 2

    def test_missing_fieldname(self) -> None:
        with pytest.raises(ConfigurationSchemaError, match="non-empty 'fieldname'"):
            parse_record_config({"fields": [{"datatype": "N"}]})

    @pytest.mark.parametrize(
        "field_spec, message",
        [
            ({"fieldname": "a", "datatype": "date"}, "Unknown data type"),
            ({"fieldname": "a", "alignment": "center"}, "Unknown alignment"),
            ({"fieldname": "a", "validations": [{"type": "XPATH"}]}, "Unknown type"),
            (
                {"fieldname": "a", "validations": [{"type": "REGEX", "severity": "FATAL"}]},
                "Unknown severity",
            ),
            ({"fieldname": "a", "validations": [{"params": "x"}]}, "missing required 'type'"),
        ],
    )
    def test_bad_field_spec(self, field_spec, message) -> None:
        with pytest.raises(ConfigurationSchemaError, match=message):
            parse_record_config({"fields": [field_spec]})

    @pytest.mark.parametrize(
        "map_spec, message",
        [
            ({"field_name": "b", "function": "MIN", "map_to": "m"}, "unknown field 'b'"),
            (
                {"field_name": "a", "function": "MIN", "map_to": "m", "sign_field": "s"},
                "unknown sign field 's'",
            ),
            ({"field_name": "a", "function": "MEDIAN", "map_to": "m"}, "Unknown function"),
            ({"field_name": "a", "function": "MIN"}, "non-empty 'map_to'"),
            (
                {"field_name": "a", "function": "MIN", "map_to": "m", "condition": "${a}"},
                "Invalid condition",
            ),
        ],
    )
    def test_bad_map_function(self, map_spec, message) -> None:
        with pytest.raises(ConfigurationSchemaError, match=message):
            parse_record_config({"fields": [{"fieldname": "a"}], "map_functions": [map_spec]})

    def test_conflicting_map_to(self) -> None:
        with pytest.raises(ConfigurationSchemaError, match="both MIN and MAX") as excinfo:
            parse_record_config(
                {
                    "fields": [{"fieldname": "a"}],
                    "map_functions": [
                        {"field_name": "a", "function": "MIN", "map_to": "edge"},
                        {"field_name": "a", "function": "MAX", "map_to": "edge"},
                    ],
                }
            )
        assert excinfo.value.context["reason"] == "Conflicting map functions"


class TestLoadRecordConfig:
    def test_from_dict(self, config_dict) -> None:
        assert load_record_config(config_dict) == parse_record_config(config_dict)

    def test_from_json(self, tmp_path, config_dict) -> None:
        path = tmp_path / "detail.json"
        path.write_text(json.dumps(config_dict))
        assert load_record_config(path) == parse_record_config(config_dict)

    def test_from_yaml(self, tmp_path) -> None:
        path = tmp_path / "detail.yaml"
        path.write_text(
            "name: detail\n"
            "fields:\n"
            "  - fieldname: amount\n"
            "    datatype: N\n"
            "    validations:\n"
            "      - type: IN\n"
            "        params: [1, 2, 3]\n"
            "map_functions:\n"
            "  - field_name: amount\n"
            "    function: AVERAGE\n"
            "    map_to: avgAmount\n"
        )
        config = load_record_config(str(path))
        assert config.fields[0].validations[0].params == [1, 2, 3]
        assert config.map_functions[0].function is MapFunction.AVERAGE

    def test_missing_file(self, tmp_path) -> None:
        with pytest.raises(FileNotFoundError):
            load_record_config(tmp_path / "absent.yaml")

    def test_invalid_json(self, tmp_path) -> None:
        path = tmp_path / "broken.json"
        path.write_text("{not json")
        with pytest.raises(ConfigurationSchemaError, match="Invalid JSON"):
            load_record_config(path)

    def test_yaml_must_be_mapping(self, tmp_path) -> None:
        path = tmp_path / "list.yml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigurationSchemaError, match="must contain a dictionary"):
            load_record_config(path)
