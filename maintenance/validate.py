"""Validate vehicle files and task records against the JSON schema."""

from pathlib import Path
from typing import Any, List, Optional, Union

import yaml
from jsonschema import validate, ValidationError

SCHEMA_PATH = Path(__file__).parent / "schema.yaml"


def load_schema() -> dict:
    """Load the JSON schema from schema.yaml."""
    with open(SCHEMA_PATH) as f:
        return yaml.safe_load(f)


def _errors_for(instance: Any, schema: dict) -> List[str]:
    errors = []
    try:
        validate(instance=instance, schema=schema)
    except ValidationError as e:
        errors.append(f"Schema validation error: {e.message}")
        if e.path:
            errors.append(f"  at path: {'.'.join(str(p) for p in e.path)}")
    return errors


def validate_vehicle_file(
    filepath: Union[str, Path], schema: Optional[dict] = None
) -> List[str]:
    """Validate a single vehicle YAML file. Returns list of errors."""
    schema = schema or load_schema()
    try:
        with open(filepath) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        return [f"YAML parse error: {e}"]
    except OSError as e:
        return [f"Error: {e}"]
    return _errors_for(data, schema)


def validate_tasks(records: List[Any], schema: Optional[dict] = None) -> List[str]:
    """Validate a list of task records (camelCase dicts). Returns list of errors."""
    schema = schema or load_schema()
    task_list_schema = {
        "$schema": schema.get("$schema"),
        "$defs": schema["$defs"],
        "type": "array",
        "items": {"$ref": "#/$defs/task"},
    }
    return _errors_for(records, task_list_schema)
