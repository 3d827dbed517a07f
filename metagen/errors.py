"""Exception taxonomy for the generator.

Fatal errors abort the whole run. FormatError and WriteError are raised per
output file; the driver reports them and keeps going.
"""

from __future__ import annotations


class GeneratorError(Exception):
    """Base class for every error the generator reports."""


class ConfigError(GeneratorError):
    """Invalid configuration value (CLI flag or environment variable)."""


class FetchError(GeneratorError):
    """The metadata document could not be retrieved."""


class UnexpectedStatusError(FetchError):
    """The metadata endpoint answered with a non-success status."""

    def __init__(self, url: str, status_code: int):
        super().__init__(
            f"Unexpected HTTP status code received while retrieving metadata from {url}: {status_code}"
        )
        self.url = url
        self.status_code = status_code


class SchemaDecodeError(GeneratorError):
    """The metadata document does not have the expected shape."""


class UnknownBaseError(SchemaDecodeError):
    """An entity names a base type that is not in the schema."""

    def __init__(self, name: str, base_name: str):
        super().__init__(f"{name} extends unknown type {base_name}")
        self.name = name
        self.base_name = base_name


class CyclicInheritanceError(GeneratorError):
    """A base-type chain loops back on itself."""

    def __init__(self, chain: list[str]):
        super().__init__("Cyclic inheritance: " + " -> ".join(chain))
        self.chain = chain


class RenderError(GeneratorError):
    """Template execution failed."""


class FormatError(GeneratorError):
    """The formatting/import-resolution pass rejected the rendered source."""


class WriteError(GeneratorError):
    """The output file could not be created or written."""
