"""LSP feature implementations for LESS."""

from lessgoto.features.classify import (
    DefinitionPattern,
    SymbolKind,
    SymbolRef,
    classify,
)
from lessgoto.features.definition import get_definition_location
from lessgoto.features.imports import ImportResolver, ImportStatement, parse_import
from lessgoto.features.scanner import find_definition_in_text
from lessgoto.features.search import DefinitionResult, find_definition

__all__ = [
    "DefinitionPattern",
    "DefinitionResult",
    "ImportResolver",
    "ImportStatement",
    "SymbolKind",
    "SymbolRef",
    "classify",
    "find_definition",
    "find_definition_in_text",
    "get_definition_location",
    "parse_import",
]
