"""Utility functions for payload I/O and validation."""

import json
import logging
from pathlib import Path
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from .exceptions import MatchPayloadError

T = TypeVar('T', bound=BaseModel)
logger = logging.getLogger('mpg.utils')


def validate_payload(data: Any, schema: type[T], label: str = 'payload') -> T:
    """
    Validate already-decoded data against a Pydantic schema.

    Args:
        data: Decoded JSON (normally a dict)
        schema: Pydantic model to validate against
        label: Name of the block being validated, used in the error message

    Returns:
        Validated schema instance

    Raises:
        MatchPayloadError: If data is not a mapping or fails validation

    Example:
        from mpg.schemas import MatchPayload
        payload = validate_payload(raw, MatchPayload, label='match mpg_match_1_3_2')
    """
    if not isinstance(data, dict):
        logger.error(f'Invalid {label}: expected an object, got {type(data).__name__}')
        raise MatchPayloadError(f'Invalid {label}: expected an object, got {type(data).__name__}')

    try:
        return schema.model_validate(data)
    except ValidationError as e:
        logger.error(f'Schema validation failed for {label}: {e}')
        raise MatchPayloadError(f'Schema validation failed for {label}:\n{e}') from e


def load_json(
    path: Path | str,
    schema: type[T] | None = None,
) -> Any | T:
    """
    Load JSON file with optional schema validation.

    Args:
        path: Path to JSON file (str or Path object)
        schema: Optional Pydantic model to validate against

    Returns:
        Parsed JSON (validated if schema provided)

    Raises:
        FileNotFoundError: If file doesn't exist
        json.JSONDecodeError: If JSON is malformed
        MatchPayloadError: If schema validation fails

    Example:
        from mpg.schemas import MatchPayload
        payload = load_json('data/matches/day_3.json', schema=MatchPayload)
    """
    path = Path(path)

    logger.debug(f'Loading JSON from: {path}')

    if not path.exists():
        logger.error(f'File not found: {path}')
        raise FileNotFoundError(f'File not found: {path}')

    try:
        with open(path, encoding='utf-8') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        logger.error(f'Invalid JSON in {path}: {e.msg} at position {e.pos}')
        raise json.JSONDecodeError(f'Invalid JSON in {path}: {e.msg}', e.doc, e.pos) from e

    if schema:
        return validate_payload(data, schema, label=str(path))

    return data


def save_json(
    path: Path | str,
    data: Any,
    indent: int = 2,
    create_dirs: bool = True,
) -> None:
    """
    Save data as JSON file.

    Args:
        path: Path to write to (str or Path object)
        data: Data to serialize (must be JSON-serializable or Pydantic model)
        indent: Indentation level (default: 2 spaces)
        create_dirs: Create parent directories if they don't exist (default: True)

    Raises:
        TypeError: If data is not JSON-serializable
        OSError: If file cannot be written
    """
    path = Path(path)

    logger.debug(f'Saving JSON to: {path}')

    if create_dirs:
        path.parent.mkdir(parents=True, exist_ok=True)

    json_data = data.model_dump() if isinstance(data, BaseModel) else data

    try:
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(json_data, f, indent=indent, ensure_ascii=False)
    except TypeError as e:
        logger.error(f'Data is not JSON-serializable: {e}')
        raise TypeError(f'Data is not JSON-serializable: {e}') from e


def load_json_safe(
    path: Path | str,
    default: Any = None,
    schema: type[T] | None = None,
) -> Any | T:
    """
    Load JSON file with safe fallback to default value.

    Like load_json, but returns default value instead of raising
    for missing or invalid files.

    Example:
        # Engine defaults when no config file is deployed
        config = load_json_safe('data/engine_config.json', default=EngineConfig(), schema=EngineConfig)
    """
    try:
        return load_json(path, schema=schema)
    except (FileNotFoundError, json.JSONDecodeError, MatchPayloadError) as e:
        logger.warning(f'Falling back to default for {path}: {e}')
        return default
