"""Declarative record configuration support.

This module loads record configurations from Python dictionaries, JSON files
or YAML files and turns them into immutable RecordConfig instances. Every
structural fault is reported as a ConfigurationSchemaError before any record
is validated.

Example configuration:
    {
        "name": "detail",
        "fields": [
            {
                "fieldname": "amount",
                "datatype": "N",
                "alignment": "R",
                "validations": [
                    {"type": "REGEX", "params": "^[0-9.]+$", "severity": "ERROR"}
                ]
            },
            {"fieldname": "sign", "datatype": "*"},
            {"fieldname": "currency", "datatype": "A/N"}
        ],
        "map_functions": [
            {
                "field_name": "amount",
                "function": "AGGREGATE",
                "map_to": "totalAmount",
                "sign_field": "sign",
                "condition": "${currency} = USD"
            }
        ]
    }
"""

import json
from pathlib import Path
from typing import Any

from fieldcheck.core.exceptions import FilterError
from fieldcheck.core.filters import FilterList
from fieldcheck.core.models import (
    Alignment,
    DataType,
    FieldConfig,
    MapFunction,
    MapFunctionConfig,
    RecordConfig,
    Severity,
    ValidationConfig,
    ValidationType,
)
from fieldcheck.validation.exceptions import ConfigurationSchemaError


def load_record_config(config_source: dict[str, Any] | str | Path) -> RecordConfig:
    """Load a record configuration from a dict or a JSON/YAML file.

    Args:
        config_source: Either a dict containing the configuration, or a
                      string/Path pointing to a ``.json``, ``.yaml`` or ``.yml`` file

    Returns:
        Parsed RecordConfig

    Raises:
        ConfigurationSchemaError: If the configuration is invalid
        FileNotFoundError: If the file path doesn't exist
        ImportError: If PyYAML is not installed when loading from YAML

    Example:
        >>> config = load_record_config("detail_record.yaml")
        >>> [f.fieldname for f in config.fields]
        ['amount', 'sign', 'currency']
    """
    if isinstance(config_source, dict):
        return parse_record_config(config_source)

    config_path = Path(config_source) if isinstance(config_source, str) else config_source

    if not config_path.exists():
        msg = f"Configuration file not found: {config_path}"
        raise FileNotFoundError(msg)

    content = config_path.read_text()
    if config_path.suffix == ".json":
        try:
            config = json.loads(content)
        except json.JSONDecodeError as e:
            raise ConfigurationSchemaError(
                f"Invalid JSON in {config_path}: {e}", reason="Invalid JSON"
            ) from e
    else:
        try:
            import yaml
        except ImportError as e:
            msg = (
                "PyYAML is required to load record configuration from YAML files. "
                "Install it with: uv add pyyaml"
            )
            raise ImportError(msg) from e
        try:
            config = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ConfigurationSchemaError(
                f"Invalid YAML in {config_path}: {e}", reason="Invalid YAML"
            ) from e

    if not isinstance(config, dict):
        msg = f"Configuration file must contain a dictionary, got: {type(config).__name__}"
        raise ConfigurationSchemaError(msg, reason="Invalid document structure")

    return parse_record_config(config)


def parse_record_config(config: dict[str, Any]) -> RecordConfig:
    """Parse a configuration dictionary into a RecordConfig.

    Args:
        config: Dictionary with keys:
               - name: Record type name (default: "record")
               - fields: List of field specifications (required)
               - map_functions: List of map-function specifications (optional)

    Returns:
        RecordConfig with fields and map functions in configured order

    Raises:
        ConfigurationSchemaError: If any part of the configuration is invalid
    """
    if not isinstance(config, dict):
        msg = f"Configuration must be a dictionary, got: {type(config).__name__}"
        raise ConfigurationSchemaError(msg, reason="Invalid configuration type")

    field_specs = config.get("fields")
    if field_specs is None:
        raise ConfigurationSchemaError(
            "Configuration must contain 'fields' key",
            field="fields",
            reason="Required field missing",
        )
    if not isinstance(field_specs, list):
        raise ConfigurationSchemaError(
            f"'fields' must be a list, got: {type(field_specs).__name__}",
            field="fields",
            value=field_specs,
            reason="Invalid field type",
        )

    fields: list[FieldConfig] = []
    seen: set[str] = set()
    for idx, spec in enumerate(field_specs):
        field_config = _parse_field(spec, idx)
        if field_config.fieldname in seen:
            raise ConfigurationSchemaError(
                f"Duplicate field name '{field_config.fieldname}'",
                section="fields",
                index=idx,
                field="fieldname",
                value=field_config.fieldname,
                reason="Field names must be unique within a record",
            )
        seen.add(field_config.fieldname)
        fields.append(field_config)

    map_specs = config.get("map_functions") or []
    if not isinstance(map_specs, list):
        raise ConfigurationSchemaError(
            f"'map_functions' must be a list, got: {type(map_specs).__name__}",
            field="map_functions",
            value=map_specs,
            reason="Invalid field type",
        )

    map_functions = [_parse_map_function(spec, idx, seen) for idx, spec in enumerate(map_specs)]
    _check_map_to_kinds(map_functions)

    return RecordConfig(
        name=str(config.get("name", "record")),
        fields=tuple(fields),
        map_functions=tuple(map_functions),
    )


def _require_dict(spec: Any, section: str, index: int) -> dict[str, Any]:
    if not isinstance(spec, dict):
        raise ConfigurationSchemaError(
            f"Entry at index {index} of '{section}' must be a dictionary, "
            f"got: {type(spec).__name__}",
            section=section,
            index=index,
            reason="Invalid specification type",
        )
    return spec


def _require_str(spec: dict[str, Any], key: str, section: str, index: int) -> str:
    value = spec.get(key)
    if not isinstance(value, str) or not value.strip():
        raise ConfigurationSchemaError(
            f"Entry at index {index} of '{section}' requires a non-empty '{key}'",
            section=section,
            index=index,
            field=key,
            value=value,
            reason="Required field missing",
        )
    return value


def _lookup(enum_type: type, text: Any, section: str, index: int, key: str):
    try:
        return enum_type[str(text).strip().upper()]
    except KeyError as e:
        available = ", ".join(member.name for member in enum_type)
        raise ConfigurationSchemaError(
            f"Unknown {key} '{text}' at index {index} of '{section}'. Available: {available}",
            section=section,
            index=index,
            field=key,
            value=text,
            reason=f"{key} not recognized",
        ) from e


def _parse_field(spec: Any, index: int) -> FieldConfig:
    spec = _require_dict(spec, "fields", index)
    fieldname = _require_str(spec, "fieldname", "fields", index)

    datatype = DataType.ANY
    if spec.get("datatype") is not None:
        try:
            datatype = DataType.from_alias(str(spec["datatype"]))
        except KeyError as e:
            raise ConfigurationSchemaError(
                f"Unknown data type '{spec['datatype']}' for field '{fieldname}'",
                section="fields",
                index=index,
                field="datatype",
                value=spec["datatype"],
                reason="Data type not recognized",
            ) from e

    alignment = None
    if spec.get("alignment") is not None:
        try:
            alignment = Alignment.from_alias(str(spec["alignment"]))
        except KeyError as e:
            raise ConfigurationSchemaError(
                f"Unknown alignment '{spec['alignment']}' for field '{fieldname}'",
                section="fields",
                index=index,
                field="alignment",
                value=spec["alignment"],
                reason="Alignment not recognized",
            ) from e

    rule_specs = spec.get("validations") or []
    if not isinstance(rule_specs, list):
        raise ConfigurationSchemaError(
            f"'validations' of field '{fieldname}' must be a list",
            section="fields",
            index=index,
            field="validations",
            value=rule_specs,
            reason="Invalid field type",
        )

    validations = tuple(
        _parse_validation(rule, fieldname, idx) for idx, rule in enumerate(rule_specs)
    )
    return FieldConfig(
        fieldname=fieldname,
        validations=validations,
        datatype=datatype,
        alignment=alignment,
    )


def _parse_validation(spec: Any, fieldname: str, index: int) -> ValidationConfig:
    section = f"fields.{fieldname}.validations"
    spec = _require_dict(spec, section, index)
    if "type" not in spec:
        raise ConfigurationSchemaError(
            f"Validation at index {index} on field '{fieldname}' missing required 'type'",
            section=section,
            index=index,
            field="type",
            reason="Required field missing",
        )
    rule_type = _lookup(ValidationType, spec["type"], section, index, "type")
    severity = _lookup(Severity, spec.get("severity", "ERROR"), section, index, "severity")
    return ValidationConfig(
        type=rule_type,
        severity=severity,
        params=spec.get("params"),
        error_message=spec.get("error_message"),
    )


def _parse_map_function(spec: Any, index: int, fieldnames: set[str]) -> MapFunctionConfig:
    section = "map_functions"
    spec = _require_dict(spec, section, index)
    field_name = _require_str(spec, "field_name", section, index)
    map_to = _require_str(spec, "map_to", section, index)
    function = _lookup(MapFunction, spec.get("function"), section, index, "function")

    if field_name not in fieldnames:
        raise ConfigurationSchemaError(
            f"Map function at index {index} references unknown field '{field_name}'",
            section=section,
            index=index,
            field="field_name",
            value=field_name,
            reason="Field not configured",
        )

    sign_field = spec.get("sign_field")
    if sign_field is not None and sign_field not in fieldnames:
        raise ConfigurationSchemaError(
            f"Map function at index {index} references unknown sign field '{sign_field}'",
            section=section,
            index=index,
            field="sign_field",
            value=sign_field,
            reason="Field not configured",
        )

    condition = spec.get("condition")
    if condition is not None:
        try:
            FilterList(condition)
        except FilterError as e:
            raise ConfigurationSchemaError(
                f"Invalid condition for map function at index {index}: {e.message}",
                section=section,
                index=index,
                field="condition",
                value=condition,
                reason=e.context.get("reason", "Malformed condition"),
            ) from e

    return MapFunctionConfig(
        field_name=field_name,
        function=function,
        map_to=map_to,
        sign_field=sign_field,
        condition=condition,
    )


def _check_map_to_kinds(map_functions: list[MapFunctionConfig]) -> None:
    kinds: dict[str, MapFunction] = {}
    for index, map_function in enumerate(map_functions):
        existing = kinds.setdefault(map_function.map_to, map_function.function)
        if existing is not map_function.function:
            raise ConfigurationSchemaError(
                f"Aggregate '{map_function.map_to}' is computed by both "
                f"{existing.value} and {map_function.function.value}",
                section="map_functions",
                index=index,
                field="map_to",
                value=map_function.map_to,
                reason="Conflicting map functions",
            )
