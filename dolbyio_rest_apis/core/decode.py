"""Response decoding: validate untyped JSON against a schema before use.

WHY: The endpoints return plain JSON. Casting it straight into dataclasses
would turn a server-side shape change into an obscure KeyError or
AttributeError far from the call that caused it. Validating at the
boundary fails loudly, with the endpoint name in the message.

HOW: Each model declares a small JSON schema (required keys and their
types only; extra keys are allowed). decode() runs jsonschema against the
payload and raises ResponseDecodeError on mismatch.

RULES:
- Schemas list what the dataclass reads, nothing more
- Unknown extra fields are always accepted; optional fields may be null
- ResponseDecodeError subclasses ValueError
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import jsonschema


class ResponseDecodeError(ValueError):
    """Raised when a response payload does not have the expected shape."""


def decode(data: Any, schema: Dict[str, Any], what: str) -> Any:
    """Validate ``data`` against ``schema`` and return it unchanged.

    Args:
        data: Parsed JSON from the transport.
        schema: JSON schema describing the fields the caller relies on.
        what: Human-readable name of the payload, used in the error.

    Raises:
        ResponseDecodeError: If ``data`` does not conform to ``schema``.
    """
    try:
        jsonschema.validate(instance=data, schema=schema)
    except jsonschema.ValidationError as exc:
        location = "/".join(str(p) for p in exc.absolute_path) or "<root>"
        raise ResponseDecodeError(
            "Unexpected {} payload at {}: {}".format(what, location, exc.message)
        ) from exc
    return data


def obj(required: Dict[str, Any], optional: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Build an object schema from required and optional property schemas.

    Optional properties also accept null, which the APIs use for
    "not applicable".
    """
    properties = dict(required)
    for name, schema in (optional or {}).items():
        properties[name] = {"anyOf": [schema, {"type": "null"}]}
    return {
        "type": "object",
        "required": sorted(required),
        "properties": properties,
    }


STRING = {"type": "string"}
NUMBER = {"type": "number"}
INTEGER = {"type": "integer"}
BOOLEAN = {"type": "boolean"}
OBJECT = {"type": "object"}
ARRAY = {"type": "array"}
