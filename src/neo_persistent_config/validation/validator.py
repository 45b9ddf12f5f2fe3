"""Rule based validator for config item input.

Rules are given per field as lists of rule strings (``"required"``,
``"max:255"``, ``"in:smtp,sendmail"``), a single ``|`` separated string or
callables ``(attribute, value) -> message | None``.

Field names in rules use ``.`` for nested input. Dots inside input keys are
escaped to ``->`` before validation, so a flat key ``"mail.driver"`` in the
data is addressed by the rule field ``"mail->driver"``.
"""

from collections.abc import Mapping
from typing import Any, Dict, List, Optional, Sequence, Union

from ..entities.protocols import ValidatorProtocol
from .rules import IMPLICIT_RULES, MODIFIER_RULES, check, format_message, is_empty, parse_rule

ESCAPED_SEPARATOR = "->"

_MISSING = object()


def escape_keys(data: Any) -> Any:
    """Recursively replace ``.`` with ``->`` in mapping keys."""
    if isinstance(data, Mapping):
        return {str(key).replace(".", ESCAPED_SEPARATOR): escape_keys(value) for key, value in data.items()}
    return data


def normalize_rules(rules: Union[str, Sequence[Any], None]) -> List[Any]:
    if rules is None:
        return []
    if isinstance(rules, str):
        return [rule for rule in rules.split("|") if rule]
    return list(rules)


class RuleValidator:
    """Validator instance bound to data and rules."""

    def __init__(
        self,
        data: Mapping[str, Any],
        rules: Mapping[str, Union[str, Sequence[Any]]],
        messages: Optional[Mapping[str, str]] = None,
        attributes: Optional[Mapping[str, str]] = None
    ):
        self.data = escape_keys(dict(data))
        self.rules = {field: normalize_rules(field_rules) for field, field_rules in rules.items()}
        self.custom_messages = dict(messages or {})
        self.custom_attributes = dict(attributes or {})
        self._errors: Optional[Dict[str, List[str]]] = None

    def _lookup(self, field: str) -> Any:
        current: Any = self.data
        for segment in field.split("."):
            if isinstance(current, Mapping) and segment in current:
                current = current[segment]
            else:
                return _MISSING
        return current

    def _run(self) -> Dict[str, List[str]]:
        errors: Dict[str, List[str]] = {}

        for field, rules in self.rules.items():
            value = self._lookup(field)
            present = value is not _MISSING
            names = {parse_rule(rule)[0] for rule in rules if isinstance(rule, str)}

            if "sometimes" in names and not present:
                continue
            if "nullable" in names and present and value is None:
                continue

            attribute = self.custom_attributes.get(field, field)
            messages: List[str] = []

            for rule in rules:
                if callable(rule):
                    if not present:
                        continue
                    message = rule(attribute, value)
                    if message:
                        messages.append(message)
                    continue

                name, parameters = parse_rule(rule)
                if name in MODIFIER_RULES:
                    continue

                # Non implicit rules only apply to present, non empty values
                if name not in IMPLICIT_RULES and (not present or is_empty(value)):
                    continue

                placeholders = check(name, parameters, None if not present else value, rules)
                if placeholders is None:
                    continue

                messages.append(format_message(name, attribute, placeholders, self.custom_messages))
                if name in IMPLICIT_RULES or "bail" in names:
                    break

            if messages:
                errors[field] = messages

        return errors

    def fails(self) -> bool:
        return bool(self.errors())

    def passes(self) -> bool:
        return not self.fails()

    def errors(self) -> Dict[str, List[str]]:
        if self._errors is None:
            self._errors = self._run()
        return self._errors

    def validated(self) -> Dict[str, Any]:
        """Values of present fields that have rules, keyed by rule field name."""
        result = {}
        for field in self.rules:
            value = self._lookup(field)
            if value is not _MISSING:
                result[field] = value
        return result


class ValidatorFactory:
    """Creates rule validators, optionally with shared custom messages."""

    def __init__(self, messages: Optional[Mapping[str, str]] = None):
        self.messages = dict(messages or {})

    def make(
        self,
        data: Mapping[str, Any],
        rules: Mapping[str, Union[str, Sequence[Any]]],
        messages: Optional[Mapping[str, str]] = None,
        attributes: Optional[Mapping[str, str]] = None
    ) -> ValidatorProtocol:
        return RuleValidator(data, rules, {**self.messages, **(messages or {})}, attributes)
