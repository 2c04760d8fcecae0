"""Lightweight mapping validation for generation parameters.

Minimal schema-like checking with consistent error payloads; not a general JSON
Schema implementation. Returns ``(ok, value_or_error)`` tuples and leaves the
decision to raise to the caller.

Schema mini-language (Python dict):
{
  'field_name': ('type', required: bool, extras: dict)
}
Supported types: 'str', 'int', 'float', 'bool'
Extras:
  min / max (int, float)
  choices (str)
  coerce: accept strings ("42", "0.5", "yes") and convert them, as read from
  environment variables

Example:
 schema = {'width': ('int', True, {'min': 8})}
 ok, data_or_err = validate({'width': 40}, schema)

If invalid: (False, {'field': 'width', 'error': 'below minimum 8', 'code': 'min'})
If valid: (True, normalized_data)
"""
from __future__ import annotations
from typing import Any, Dict, Tuple

PRIMITIVES = {
    'str': str,
    'int': int,
    'float': float,
    'bool': bool,
}

_TRUE = {'1', 'true', 'yes', 'on'}
_FALSE = {'0', 'false', 'no', 'off'}


def _fail(field: str, message: str, code: str) -> Tuple[bool, Dict[str, Any]]:
    return False, {'field': field, 'error': message, 'code': code}


def _coerce(type_name: str, value: Any) -> Tuple[bool, Any]:
    if not isinstance(value, str):
        return True, value
    raw = value.strip()
    try:
        if type_name == 'int':
            return True, int(raw)
        if type_name == 'float':
            return True, float(raw)
    except ValueError:
        return False, value
    if type_name == 'bool':
        if raw.lower() in _TRUE:
            return True, True
        if raw.lower() in _FALSE:
            return True, False
        return False, value
    return True, raw


def _check_type(type_name: str, value: Any) -> bool:
    # bool is an int subclass; keep them apart
    if type_name in ('int', 'float') and isinstance(value, bool):
        return False
    if type_name == 'float':
        return isinstance(value, (int, float))
    return isinstance(value, PRIMITIVES[type_name])


def validate(payload: Any, schema: Dict[str, tuple]) -> Tuple[bool, Dict[str, Any]]:
    if not isinstance(payload, dict):
        return _fail('__root__', 'payload must be a mapping', 'type')
    out = {}
    for name, spec in schema.items():
        if not isinstance(spec, tuple) or len(spec) < 2:
            return _fail('__schema__', f'invalid spec for {name}', 'schema')
        type_name, required = spec[0], spec[1]
        extras = spec[2] if len(spec) > 2 else {}
        if type_name not in PRIMITIVES:
            return _fail('__schema__', f'unsupported type {type_name}', 'schema')
        if name not in payload:
            if required:
                return _fail(name, 'missing required field', 'required')
            continue
        value = payload[name]
        if extras.get('coerce'):
            ok, value = _coerce(type_name, value)
            if not ok:
                return _fail(name, f'cannot read {value!r} as {type_name}', 'type')
        if not _check_type(type_name, value):
            return _fail(name, f'expected {type_name}', 'type')
        if type_name == 'float':
            value = float(value)
        if type_name in ('int', 'float'):
            if 'min' in extras and value < extras['min']:
                return _fail(name, f"below minimum {extras['min']}", 'min')
            if 'max' in extras and value > extras['max']:
                return _fail(name, f"above maximum {extras['max']}", 'max')
        elif type_name == 'str':
            value = value.strip()
            if 'choices' in extras and value not in extras['choices']:
                return _fail(name, f"expected one of {', '.join(extras['choices'])}", 'choice')
        out[name] = value
    return True, out


def with_coercion(schema: Dict[str, tuple]) -> Dict[str, tuple]:
    """Copy of ``schema`` with string coercion switched on for every field."""
    out = {}
    for name, spec in schema.items():
        extras = dict(spec[2]) if len(spec) > 2 else {}
        extras['coerce'] = True
        out[name] = (spec[0], spec[1], extras)
    return out
