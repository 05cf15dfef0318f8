"""Reader and writer for the brace-delimited configuration format.

A configuration file is a list of ``name = value`` entries. Values are
numbers, quoted strings, bare identifiers, nested ``{ ... }`` lists or
``file "other.cfg"`` references that pull in another file.
"""

from __future__ import annotations

import io
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import IO, Optional, Protocol

__all__ = [
    "ConfigError",
    "InputBuffer",
    "CfgWriter",
    "CfgValue",
    "CfgNumeric",
    "CfgLiteral",
    "CfgListElem",
    "CfgList",
    "add_value_class",
    "parse_value",
    "loads",
    "load_file",
    "dumps",
    "save_file",
]

_ENCODING = "latin-1"
_INT_RE = re.compile(r"[+-]?\d+")
_FLOAT_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)")


class ConfigError(ValueError):
    """Raised when configuration text cannot be parsed."""


def _is_ascii_letter(c: str) -> bool:
    return c.isascii() and c.isalpha()


def _is_ascii_digit(c: str) -> bool:
    return c.isascii() and c.isdigit()


def _is_ident_char(c: str) -> bool:
    return c.isascii() and (c.isalnum() or c == "_")


class InputBuffer:
    """A read position over configuration text."""

    def __init__(self, data: str, filename: str = "") -> None:
        self.data = data
        self.filename = filename
        self.pos = 0

    @property
    def current(self) -> str:
        """The character at the read position, or '' at the end."""
        return self.data[self.pos] if self.pos < len(self.data) else ""

    def peek(self, offset: int = 1) -> str:
        index = self.pos + offset
        return self.data[index] if index < len(self.data) else ""

    def advance(self, count: int = 1) -> None:
        self.pos = min(self.pos + count, len(self.data))

    def at_end(self) -> bool:
        return self.pos >= len(self.data)

    def skip_whitespace(self) -> bool:
        """Skip whitespace; return True if the end of the text was reached."""
        while not self.at_end() and self.current.isspace():
            self.pos += 1
        return self.at_end()

    def parse_ident(self) -> str:
        start = self.pos
        while not self.at_end() and _is_ident_char(self.current):
            self.pos += 1
        return self.data[start:self.pos]

    def compare_ident(self, ident: str) -> bool:
        """True if the text at the read position is exactly the identifier ``ident``."""
        if not self.data.startswith(ident, self.pos):
            return False
        end = self.pos + len(ident)
        return end >= len(self.data) or not _is_ident_char(self.data[end])

    def skip_keyword(self, keyword: str) -> None:
        if not self.compare_ident(keyword):
            self.expecting(keyword)
        self.advance(len(keyword))

    @property
    def line(self) -> int:
        return self.data.count("\n", 0, self.pos) + 1

    def expecting(self, what: str) -> None:
        where = f"{self.filename}:{self.line}" if self.filename else f"line {self.line}"
        raise ConfigError(f"{where}: expecting {what}")


class CfgWriter:
    """Writes configuration text, indenting after every line break."""

    def __init__(self, stream: IO[str]) -> None:
        self.stream = stream
        self.indent_level = 0

    def write(self, text: str) -> "CfgWriter":
        self.stream.write(text)
        if text and text[-1] in "\r\n":
            self.stream.write("  " * self.indent_level)
        return self

    def inc_indent(self) -> None:
        self.indent_level += 1

    def dec_indent(self) -> None:
        self.indent_level -= 1


class CfgValue(ABC):
    """A node of a parsed configuration."""

    @abstractmethod
    def write(self, writer: CfgWriter) -> None:
        """Write this value to ``writer``."""


class CfgValueClass(Protocol):
    """A custom value type recognised by :func:`parse_value`."""

    def identify(self, buf: InputBuffer) -> bool: ...

    def parse(self, buf: InputBuffer) -> CfgValue: ...


_value_classes: list = []


def add_value_class(value_class: CfgValueClass) -> None:
    """Register a custom value type; registering it twice has no effect."""
    if value_class not in _value_classes:
        _value_classes.append(value_class)


@dataclass
class CfgNumeric(CfgValue):
    value: float = 0.0

    @classmethod
    def parse(cls, buf: InputBuffer) -> "CfgNumeric":
        text = buf.current
        dot = text == "."
        buf.advance()
        while not buf.at_end():
            c = buf.current
            if c == ".":
                if dot:
                    break
                dot = True
            elif not _is_ascii_digit(c):
                break
            text += c
            buf.advance()
        if dot:
            match = _FLOAT_RE.match(text)
            value = float(match.group()) if match else 0.0
        else:
            match = _INT_RE.match(text)
            value = float(int(match.group())) if match else 0.0
        return cls(value)

    def write(self, writer: CfgWriter) -> None:
        writer.write("%g" % self.value)


@dataclass
class CfgLiteral(CfgValue):
    value: str = ""
    ident: bool = False

    @classmethod
    def parse(cls, buf: InputBuffer, ident: bool = False) -> "CfgLiteral":
        if ident:
            return cls(buf.parse_ident(), True)
        chars = []
        buf.advance()  # opening quote
        while not buf.at_end() and buf.current != "\n":
            c = buf.current
            if c == "\\" and buf.peek() == '"':
                chars.append('"')
                buf.advance(2)
                continue
            if c == '"':
                break
            chars.append(c)
            buf.advance()
        buf.advance()  # closing quote
        return cls("".join(chars), False)

    def write(self, writer: CfgWriter) -> None:
        if self.ident:
            writer.write(self.value)
        else:
            writer.write('"').write(self.value).write('"')


@dataclass
class CfgListElem(CfgValue):
    name: str = ""
    value: Optional[CfgValue] = None

    @classmethod
    def parse(cls, buf: InputBuffer) -> "CfgListElem":
        if buf.skip_whitespace():
            buf.expecting("list element")
        name = buf.parse_ident()
        if not name:
            buf.expecting("identifier")
        buf.skip_whitespace()
        if buf.current == "=":
            buf.advance()
            return cls(name, parse_value(buf))
        return cls(name)

    def write(self, writer: CfgWriter) -> None:
        writer.write(self.name)
        if self.value is not None:
            writer.write(" = ")
            self.value.write(writer)
        writer.write("\n")


@dataclass
class CfgList(CfgValue):
    children: list = field(default_factory=list)

    @classmethod
    def parse(cls, buf: InputBuffer, root: bool = False) -> "CfgList":
        result = cls()
        if not root:
            buf.skip_whitespace()
            if buf.current != "{":
                buf.expecting("{")
            buf.advance()
        while not buf.skip_whitespace():
            if buf.current == "}":
                buf.advance()
                return result
            result.children.append(CfgListElem.parse(buf))
        if not root:
            buf.expecting("}")
        return result

    def write(self, writer: CfgWriter, root: bool = False) -> None:
        if not root:
            writer.write("{")
            writer.inc_indent()
            writer.write("\n")
        for child in self.children:
            child.write(writer)
        if not root:
            writer.write("}")
            writer.dec_indent()
            writer.write("\n")

    def get_value(self, name: str) -> Optional[CfgValue]:
        """Value of the first element named ``name``, ignoring case."""
        wanted = name.lower()
        for child in self.children:
            if child.name.lower() == wanted:
                return child.value
        return None

    def get_numeric(self, name: str, default: float = 0.0) -> float:
        value = self.get_value(name)
        return value.value if isinstance(value, CfgNumeric) else default

    def get_literal(self, name: str, default: Optional[str] = None) -> Optional[str]:
        value = self.get_value(name)
        return value.value if isinstance(value, CfgLiteral) else default

    def get_int(self, name: str, default: int = 0) -> int:
        return int(self.get_numeric(name, default))

    def get_bool(self, name: str, default: bool = False) -> bool:
        value = self.get_value(name)
        return value.value != 0.0 if isinstance(value, CfgNumeric) else default

    def add_literal(self, name: str, value: str) -> None:
        self.children.append(CfgListElem(name, CfgLiteral(value)))

    def add_numeric(self, name: str, value: float) -> None:
        self.children.append(CfgListElem(name, CfgNumeric(float(value))))

    def add_value(self, name: str, value: Optional[CfgValue]) -> None:
        self.children.append(CfgListElem(name, value))


def _load_nested_file(buf: InputBuffer) -> CfgList:
    buf.skip_keyword("file")
    buf.skip_whitespace()
    relative = CfgLiteral.parse(buf).value
    sep = max(buf.filename.rfind("/"), buf.filename.rfind("\\"))
    prefix = buf.filename[: sep + 1] if sep >= 0 else ""
    return load_file(prefix + relative)


def parse_value(buf: InputBuffer) -> CfgValue:
    """Parse one value at the read position."""
    if buf.skip_whitespace():
        buf.expecting("Value")
    for value_class in _value_classes:
        if value_class.identify(buf):
            return value_class.parse(buf)

    c = buf.current
    if buf.compare_ident("file"):
        return _load_nested_file(buf)
    if _is_ascii_letter(c):
        return CfgLiteral.parse(buf, ident=True)
    if _is_ascii_digit(c) or c in ".-":
        return CfgNumeric.parse(buf)
    if c == '"':
        return CfgLiteral.parse(buf)
    if c == "{":
        return CfgList.parse(buf)
    buf.expecting("Value")
    raise AssertionError("unreachable")


def loads(text: str, filename: str = "") -> CfgList:
    """Parse configuration text into its root list."""
    return CfgList.parse(InputBuffer(text, filename), root=True)


def load_file(path) -> CfgList:
    """Load a configuration file; raises OSError or ConfigError."""
    name = str(path)
    data = Path(name).read_bytes()
    if not data:
        raise ConfigError(f"{name}: file is empty")
    return loads(data.decode(_ENCODING), name)


def dumps(cfg: CfgList) -> str:
    """Render a root list as configuration text."""
    out = io.StringIO()
    cfg.write(CfgWriter(out), root=True)
    return out.getvalue()


def save_file(cfg: CfgList, path) -> None:
    with open(path, "w", encoding=_ENCODING, newline="") as f:
        f.write(dumps(cfg))