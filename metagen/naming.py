"""Translate metadata type names and identifiers into Go.

Every function here is total: input the tables do not know about is returned
unchanged. Unknown type names are assumed to be references to other
SoftLayer entities, which ``qualify_foreign_type`` then points at the
datatypes package.

Examples:
  translate_primitive("unsignedLong")          -> "uint"
  translate_primitive("SoftLayer_Account")     -> "SoftLayer_Account"
  strip_namespace("SoftLayer_Virtual_Guest")   -> "Virtual_Guest"
  qualify_foreign_type("datatypes", "Time")    -> "datatypes.Time"
  qualify_foreign_type("datatypes", "string")  -> "string"
  sanitize_identifier("type")                  -> "typ"
  strip_delimiters("Virtual_Guest")            -> "VirtualGuest"
"""

from __future__ import annotations

import re

NAMESPACE_PREFIX = "SoftLayer_"
DELIMITER = "_"

# The Go type dateTime translates to. It lives in the datatypes package, so
# it is qualified like an entity reference.
TIME_TYPE = "Time"

# Metadata primitive -> Go type
_PRIMITIVES: dict[str, str] = {
    "unsignedLong": "uint",
    "unsignedInt": "uint",
    "boolean": "bool",
    "dateTime": TIME_TYPE,
    "decimal": "float64",
    "float": "float64",
    "base64Binary": "[]byte",
    "json": "string",
    "enum": "string",
}

# Go keywords that show up as parameter names in the metadata
_RESERVED: dict[str, str] = {
    "type": "typ",
    "func": "fn",
    "package": "pkg",
    "range": "rng",
    "interface": "iface",
    "default": "dflt",
}

_WORD_START = re.compile(r"(?<![A-Za-z0-9_])[a-z]")


def strip_namespace(name: str) -> str:
    """Remove the 'SoftLayer_' prefix, if present."""
    if name.startswith(NAMESPACE_PREFIX):
        return name[len(NAMESPACE_PREFIX):]
    return name


def qualify_foreign_type(package_alias: str, name: str) -> str:
    """Prefix entity references (and Time) with the package that defines them."""
    if not name.startswith(NAMESPACE_PREFIX) and name != TIME_TYPE:
        return name
    return f"{package_alias}.{strip_namespace(name)}"


def translate_primitive(schema_type: str) -> str:
    """Map a metadata primitive type to its Go equivalent."""
    if schema_type in _PRIMITIVES:
        return _PRIMITIVES[schema_type]
    # Not a primitive: treated as an entity reference (or a type that is
    # already valid Go, such as "int" or "string").
    return schema_type


def sanitize_identifier(name: str) -> str:
    """Replace Go keywords with a usable identifier."""
    return _RESERVED.get(name, name)


def strip_delimiters(name: str) -> str:
    """Remove '_' from Snake_Case names."""
    return name.replace(DELIMITER, "")


def title_case(name: str) -> str:
    """Uppercase the first letter of each word, leaving other letters alone.

    Unlike str.title(), 'getObject' becomes 'GetObject', not 'Getobject'.
    """
    return _WORD_START.sub(lambda m: m.group(0).upper(), name)


def go_doc(text: str) -> str:
    """Format a doc string as a Go line comment."""
    return "// " + text.replace("\n", "\n// ")
