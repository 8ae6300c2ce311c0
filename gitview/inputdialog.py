"""Command templates with input tokens.

A command may contain tokens of the form
``%<type>[options]:<name>=<default>%``. Each token becomes an input
field; defaults may reference variables as ``$NAME``. Supported types
are ``lineedit`` (the default), ``combobox``, ``listbox`` and
``textedit``. Options: ``ref`` enables ref name validation, ``empty``
lets a ref name be empty, ``editable`` marks a combobox as editable.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping, Optional, Union

log = logging.getLogger(__name__)

VariableValue = Union[str, list]

_TOKEN_RE = re.compile(r"%(([a-z_]+)(\[([a-z ,]+)\])?:)?([^%=]+)(=[^%]+)?%")
_INVALID_REF_CHARS = re.compile(r"[ ~^:?*\[]")
_KNOWN_KINDS = ("combobox", "listbox", "lineedit", "textedit")


def _as_string(value: object) -> str:
    if isinstance(value, (list, tuple)):
        return str(value[0]) if len(value) == 1 else ""
    return "" if value is None else str(value)


def _as_list(value: object) -> list[str]:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return [str(v) for v in value]
    return [str(value)]


def parse_string(value: str, variables: Mapping[str, VariableValue]) -> str:
    """Resolve a ``$NAME`` reference, or return ``value`` unchanged."""
    if value.startswith("$"):
        return _as_string(variables.get(value[1:]))
    return value


def parse_string_list(value: str, variables: Mapping[str, VariableValue]) -> list[str]:
    """Split a comma separated default, expanding ``$NAME`` items."""
    result: list[str] = []
    for item in value.split(","):
        if item.startswith("$"):
            result.extend(_as_list(variables.get(value[1:])))
        else:
            result.append(item)
    return result


class ValidationState(Enum):
    INVALID = 0
    INTERMEDIATE = 1
    ACCEPTABLE = 2


class RefNameValidator:
    """Validates and repairs git reference names."""

    def __init__(self, allow_empty: bool = False) -> None:
        self.allow_empty = allow_empty

    def fixup(self, text: str) -> str:
        """Return ``text`` with characters illegal in ref names removed."""
        text = _INVALID_REF_CHARS.sub("", text)
        text = text.replace("/.", "/")
        text = text.replace("..", ".")
        text = text.replace("//", "/")
        return text.replace("@{", "@")

    def validate(self, text: str, pos: int) -> tuple[ValidationState, str, int]:
        """Repair ``text`` around cursor ``pos``; return state, text and cursor."""
        front = self.fixup(text[:pos])
        rear = self.fixup(text[pos:])
        text = front + rear
        pos = len(front)
        if self.fixup(text) != text:
            return ValidationState.INVALID, text, pos
        if (not text and not self.allow_empty) or text == "@":
            return ValidationState.INTERMEDIATE, text, pos
        return ValidationState.ACCEPTABLE, text, pos


@dataclass
class InputField:
    """An input requested by a command token."""

    name: str
    kind: str
    start: int
    end: int
    value: str = ""
    options: list[str] = field(default_factory=list)
    items: list[str] = field(default_factory=list)
    validator: Optional[RefNameValidator] = None

    @property
    def hidden_label(self) -> bool:
        return self.name.startswith("_")


class InputTemplate:
    """A command whose input tokens can be filled in and substituted."""

    def __init__(self, cmd: str, variables: Optional[Mapping[str, VariableValue]] = None) -> None:
        self.cmd = cmd
        self.fields: dict[str, InputField] = {}
        variables = variables or {}

        start = 0
        while (match := _TOKEN_RE.search(cmd, start)) is not None:
            kind = match.group(2) or ""
            options = [o for o in (match.group(4) or "").split(",") if o]
            name = match.group(5)
            value = (match.group(6) or "")[1:]
            end = match.end()
            start = end

            if name in self.fields:
                if kind:
                    log.warning("token must not be redefined: %s", name)
                continue
            if kind not in _KNOWN_KINDS and kind != "":
                log.warning("unknown widget type: %s", kind)
                continue

            item = InputField(name=name, kind=kind or "lineedit", start=match.start(),
                              end=end, options=options)
            if item.kind == "combobox":
                item.items = parse_string_list(value, variables)
                item.value = item.items[0] if item.items else ""
            elif item.kind == "listbox":
                item.items = parse_string_list(value, variables)
            elif item.kind == "lineedit":
                item.value = parse_string(value, variables)
                item.items = parse_string_list(value, variables)
            else:
                item.value = parse_string(value, variables)

            if item.kind in ("combobox", "lineedit") and "ref" in options:
                item.validator = RefNameValidator("empty" in options)
            self.fields[name] = item

    def empty(self) -> bool:
        """True when the command holds no input tokens."""
        return not self.fields

    def value(self, token: str) -> str:
        """Current value of the field named ``token``."""
        try:
            return self.fields[token].value
        except KeyError:
            raise KeyError(f"unknown token: {token}") from None

    def set_value(self, token: str, value: str) -> None:
        try:
            self.fields[token].value = value
        except KeyError:
            raise KeyError(f"unknown token: {token}") from None

    def validate(self) -> bool:
        """True when every validated field holds an acceptable value."""
        for name in sorted(self.fields):
            item = self.fields[name]
            if item.validator is None:
                continue
            state, _, _ = item.validator.validate(item.value, 0)
            if state is not ValidationState.ACCEPTABLE:
                return False
        return True

    def replace(self, variables: Optional[Mapping[str, VariableValue]] = None) -> str:
        """Return the command with all tokens and variables substituted."""
        result = self.cmd
        shift = 0
        for name in sorted(self.fields):
            item = self.fields[name]
            start = item.start - shift
            length = item.end - item.start
            value = item.value
            result = result[:start] + value + result[start + length:]
            shift += length - len(value)
            result = result.replace(f"%{name}%", value)
        for key in sorted(variables or {}):
            raw = variables[key]
            val = " ".join(str(v) for v in raw) if isinstance(raw, (list, tuple)) else str(raw)
            result = result.replace("$" + key, val)
        return result