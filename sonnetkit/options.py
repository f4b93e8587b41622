"""Command-line option groups: inputs, external variables, output formats."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional


@dataclass(frozen=True)
class ExtStr:
    """A ``name=value`` pair; without ``=value`` the value comes from the environment."""

    name: str
    value: str

    @classmethod
    def parse(cls, text: str) -> "ExtStr":
        """Split at the first ``=``, or read the variable named ``text``."""
        name, sep, value = text.partition("=")
        if sep:
            return cls(name, value)
        try:
            return cls(text, os.environ[text])
        except KeyError:
            raise ValueError("missing env var") from None


@dataclass(frozen=True)
class ExtFile:
    """A ``name=path`` pair whose value is the content of the file at ``path``."""

    name: str
    value: str

    @classmethod
    def parse(cls, text: str) -> "ExtFile":
        """Read the file named after ``=``; exactly one ``=`` is allowed."""
        parts = text.split("=")
        if len(parts) != 2:
            raise ValueError("bad ext-file syntax")
        name, path = parts
        try:
            content = Path(path).read_text(encoding="utf-8")
        except OSError as err:
            raise ValueError(str(err)) from err
        return cls(name, content)


@dataclass(frozen=True)
class TlaArg:
    """A top-level argument: a plain string, or code with its source name."""

    value: str
    is_code: bool = False
    source_name: Optional[str] = None


@dataclass
class TlaOpts:
    """Top-level arguments passed to the evaluated function."""

    tla_str: list[ExtStr] = field(default_factory=list)
    tla_str_file: list[ExtFile] = field(default_factory=list)
    tla_code: list[ExtStr] = field(default_factory=list)
    tla_code_file: list[ExtFile] = field(default_factory=list)

    def tla_args(self) -> dict[str, TlaArg]:
        """All arguments by name; code arguments win over strings of the same name."""
        out: dict[str, TlaArg] = {}
        for ext in [*self.tla_str, *self.tla_str_file]:
            out[ext.name] = TlaArg(ext.value)
        for ext in [*self.tla_code, *self.tla_code_file]:
            out[ext.name] = TlaArg(
                ext.value, is_code=True, source_name=f"<top-level-arg:{ext.name}>"
            )
        return out


@dataclass
class StdOpts:
    """Standard library switch and external variables."""

    no_stdlib: bool = False
    ext_str: list[ExtStr] = field(default_factory=list)
    ext_str_file: list[ExtFile] = field(default_factory=list)
    ext_code: list[ExtStr] = field(default_factory=list)
    ext_code_file: list[ExtFile] = field(default_factory=list)

    def ext_vars(self) -> dict[str, str]:
        """String external variables; none when the standard library is off."""
        if self.no_stdlib:
            return {}
        return {ext.name: ext.value for ext in [*self.ext_str, *self.ext_str_file]}

    def ext_codes(self) -> dict[str, str]:
        """Code external variables; none when the standard library is off."""
        if self.no_stdlib:
            return {}
        return {ext.name: ext.value for ext in [*self.ext_code, *self.ext_code_file]}


@dataclass
class MiscOpts:
    """Stack limit and library search directories."""

    max_stack: int = 200
    jpath: list[Path] = field(default_factory=list)

    def library_paths(self) -> list[Path]:
        """Search directories: ``jpath`` right-most first, then ``JSONNET_PATH``."""
        paths = [Path(p) for p in reversed(self.jpath)]
        env = os.environ.get("JSONNET_PATH")
        if env:
            paths.extend(Path(p) for p in env.split(os.pathsep) if p)
        return paths


class ManifestFormatName(Enum):
    """Output format names accepted by ``--format``."""

    STRING = "string"
    JSON = "json"
    YAML = "yaml"
    TOML = "toml"


@dataclass(frozen=True)
class ManifestFormat:
    """How the resulting value is written out.

    ``kind`` is one of ``string`` (plain string output), ``to_string``,
    ``json``, ``yaml`` or ``toml``.
    """

    kind: str
    padding: Optional[int] = None
    yaml_stream: bool = False


_DEFAULT_PADDING = {
    ManifestFormatName.JSON: 3,
    ManifestFormatName.YAML: 2,
    ManifestFormatName.TOML: 2,
}


@dataclass
class ManifestOpts:
    """Choice of output format."""

    format: ManifestFormatName = ManifestFormatName.JSON
    string: bool = False
    yaml_stream: bool = False
    line_padding: Optional[int] = None

    def __post_init__(self) -> None:
        if self.string and self.format is not ManifestFormatName.JSON:
            raise ValueError("--string is mutually exclusive with --format")
        if self.string and self.yaml_stream:
            raise ValueError("--yaml-stream is mutually exclusive with --string")
        if self.line_padding is not None and self.line_padding < 0:
            raise ValueError("line padding must not be negative")

    def manifest_format(self) -> ManifestFormat:
        if self.string:
            return ManifestFormat("string")
        if self.format is ManifestFormatName.STRING:
            kind, padding = "to_string", None
        else:
            kind = self.format.value
            padding = (
                self.line_padding
                if self.line_padding is not None
                else _DEFAULT_PADDING[self.format]
            )
        return ManifestFormat(kind, padding, self.yaml_stream)


@dataclass
class OutputOpts:
    """Where output goes."""

    output_file: Optional[Path] = None
    create_output_dirs: bool = False
    multi: Optional[Path] = None


class TraceFormatName(Enum):
    """Stack trace display styles."""

    COMPACT = "compact"
    EXPLAINING = "explaining"


@dataclass(frozen=True)
class TraceFormat:
    """How stack traces are shown; ``max_trace`` 0 shows all frames."""

    kind: TraceFormatName
    max_trace: int
    padding: Optional[int] = None


class TraceOpts:
    """Stack trace display options."""

    def __init__(
        self,
        trace_format: Optional[TraceFormatName] = None,
        max_trace: int = 20,
    ) -> None:
        self.format_name = trace_format
        self.max_trace = max_trace

    def __repr__(self) -> str:
        return (
            f"TraceOpts(trace_format={self.format_name!r}, "
            f"max_trace={self.max_trace!r})"
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TraceOpts):
            return NotImplemented
        return (self.format_name, self.max_trace) == (other.format_name, other.max_trace)

    def trace_format(self) -> TraceFormat:
        """The trace format, compact unless chosen otherwise."""
        kind = self.format_name or TraceFormatName.COMPACT
        if kind is TraceFormatName.COMPACT:
            return TraceFormat(kind, self.max_trace, padding=4)
        return TraceFormat(kind, self.max_trace)

    def trace_format_spec(self) -> TraceFormat:
        return self.trace_format()