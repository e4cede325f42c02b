"""Shader source preprocessing with #include expansion."""

from __future__ import annotations

from dataclasses import dataclass, field

_DIRECTIVE = "#include"


class ShaderIncludeError(ValueError):
    """Raised when an #include directive is malformed or names an unknown file."""


@dataclass
class PreprocessorConfig:
    """Files available to #include, as (filename, content) pairs."""

    includes: list[tuple[str, str]] = field(default_factory=list)

    def lookup(self, filename: str) -> str:
        for name, content in self.includes:
            if name == filename:
                return content
        raise ShaderIncludeError(f'Include file {filename} is not on "includes" list')


def preprocess_shader(source: str, config: PreprocessorConfig) -> str:
    """Replace each ``#include "name"`` directive with the named content."""
    result = source
    position = 0
    while (start := result.find(_DIRECTIVE, position)) != -1:
        cursor = start + len(_DIRECTIVE)
        while cursor < len(result) and result[cursor] == " ":
            cursor += 1
        if cursor >= len(result) or result[cursor] != '"':
            raise ShaderIncludeError(f"expected '\"' after {_DIRECTIVE} at offset {start}")
        name_start = cursor + 1
        name_end = result.find('"', name_start)
        if name_end == -1:
            raise ShaderIncludeError(f"unterminated include filename at offset {start}")
        content = config.lookup(result[name_start:name_end])
        result = result[:start] + content + result[name_end + 1:]
        position = start + len(content)
    return result