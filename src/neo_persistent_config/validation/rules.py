"""Rule checks and default messages for the rule validator."""

import re
from collections.abc import Mapping
from typing import Any, Callable, Dict, List, Optional, Sequence

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
URL_PATTERN = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*://[^\s/?#]+[^\s]*$")

# Rules evaluated even when the attribute is absent or empty
IMPLICIT_RULES = {"required", "accepted"}

# Rules that change how other rules are applied rather than checking a value
MODIFIER_RULES = {"sometimes", "nullable", "bail"}

NUMERIC_RULES = {"numeric", "integer"}

MESSAGES: Dict[str, Any] = {
    "required": "The {attribute} field is required.",
    "accepted": "The {attribute} must be accepted.",
    "string": "The {attribute} must be a string.",
    "integer": "The {attribute} must be an integer.",
    "numeric": "The {attribute} must be a number.",
    "boolean": "The {attribute} field must be true or false.",
    "array": "The {attribute} must be an array.",
    "email": "The {attribute} must be a valid email address.",
    "url": "The {attribute} format is invalid.",
    "regex": "The {attribute} format is invalid.",
    "in": "The selected {attribute} is invalid.",
    "not_in": "The selected {attribute} is invalid.",
    "min": {
        "numeric": "The {attribute} must be at least {min}.",
        "string": "The {attribute} must be at least {min} characters.",
        "array": "The {attribute} must have at least {min} items.",
    },
    "max": {
        "numeric": "The {attribute} may not be greater than {max}.",
        "string": "The {attribute} may not be greater than {max} characters.",
        "array": "The {attribute} may not have more than {max} items.",
    },
    "between": {
        "numeric": "The {attribute} must be between {min} and {max}.",
        "string": "The {attribute} must be between {min} and {max} characters.",
        "array": "The {attribute} must have between {min} and {max} items.",
    },
}


def parse_rule(rule: str):
    """Split ``"max:255"`` into ``("max", ["255"])``; regex parameters are kept whole."""
    name, _, parameters = rule.partition(":")
    name = name.strip().lower()
    if not parameters:
        return name, []
    if name in ("regex", "not_regex"):
        return name, [parameters]
    return name, [parameter.strip() for parameter in parameters.split(",")]


def is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str) and value.strip() == "":
        return True
    if isinstance(value, (list, tuple, dict)) and len(value) == 0:
        return True
    return False


def is_numeric(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, (int, float)):
        return True
    if isinstance(value, str):
        try:
            float(value.strip())
            return value.strip() != ""
        except ValueError:
            return False
    return False


def is_integer(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    if isinstance(value, str):
        return re.fullmatch(r"[+-]?\d+", value.strip()) is not None
    return False


def size_kind(value: Any, rules: Sequence[Any]) -> str:
    """Which size semantics apply to a value: numeric, string or array."""
    names = {parse_rule(rule)[0] for rule in rules if isinstance(rule, str)}
    if names & NUMERIC_RULES and is_numeric(value):
        return "numeric"
    if isinstance(value, (list, tuple, Mapping)):
        return "array"
    return "string"


def get_size(value: Any, kind: str) -> float:
    if kind == "numeric":
        return float(value)
    if kind == "array":
        return len(value)
    return len(str(value))


def check(name: str, parameters: List[str], value: Any, rules: Sequence[Any]) -> Optional[Dict[str, Any]]:
    """Run one rule; return message placeholders on failure, ``None`` on success.

    Raises:
        ValueError: if the rule is unknown or misses parameters.
    """
    if name == "required":
        return {} if is_empty(value) else None

    if name == "accepted":
        return None if value in ("yes", "on", "1", 1, True, "true") else {}

    if name == "string":
        return None if isinstance(value, str) else {}

    if name == "integer":
        return None if is_integer(value) else {}

    if name == "numeric":
        return None if is_numeric(value) else {}

    if name == "boolean":
        return None if value in (True, False, 0, 1, "0", "1", "true", "false") else {}

    if name == "array":
        return None if isinstance(value, (list, tuple, Mapping)) else {}

    if name == "email":
        return None if isinstance(value, str) and EMAIL_PATTERN.match(value) else {}

    if name == "url":
        return None if isinstance(value, str) and URL_PATTERN.match(value) else {}

    if name == "regex":
        _require_parameters(name, parameters, 1)
        pattern = _strip_delimiters(parameters[0])
        return None if isinstance(value, str) and re.search(pattern, value) else {}

    if name == "in":
        return None if str(value) in parameters else {}

    if name == "not_in":
        return None if str(value) not in parameters else {}

    if name in ("min", "max", "between"):
        _require_parameters(name, parameters, 2 if name == "between" else 1)
        kind = size_kind(value, rules)
        try:
            size = get_size(value, kind)
        except (TypeError, ValueError):
            return {"kind": kind, "min": parameters[0], "max": parameters[-1]}

        lower = float(parameters[0])
        upper = float(parameters[-1])
        if name == "min":
            failed = size < lower
        elif name == "max":
            failed = size > upper
        else:
            failed = size < lower or size > upper
        return {"kind": kind, "min": parameters[0], "max": parameters[-1]} if failed else None

    raise ValueError(f"Validation rule '{name}' is not supported")


def format_message(name: str, attribute: str, placeholders: Dict[str, Any], custom: Optional[Mapping[str, str]] = None) -> str:
    template = (custom or {}).get(name) or MESSAGES.get(name, "The {attribute} is invalid.")
    if isinstance(template, Mapping):
        template = template[placeholders.get("kind", "string")]
    return template.format(attribute=attribute, **{k: v for k, v in placeholders.items() if k != "kind"})


def _require_parameters(name: str, parameters: List[str], count: int) -> None:
    if len(parameters) < count:
        raise ValueError(f"Validation rule '{name}' requires at least {count} parameter(s)")


def _strip_delimiters(pattern: str) -> str:
    """Accept both ``^\\d+$`` and delimited ``/^\\d+$/`` patterns."""
    if len(pattern) >= 2 and pattern[0] == "/" and pattern.rfind("/") > 0:
        return pattern[1:pattern.rfind("/")]
    return pattern


RuleCallable = Callable[[str, Any], Optional[str]]
