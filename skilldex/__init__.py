"""skilldex - lookup index over a tree of Markdown skill documents."""

__version__ = "0.1.0"

from skilldex.errors import (
    MissingHeaderError,
    NotFound,
    ParseError,
    RegistryInitError,
    RegistryNotReady,
    SkilldexError,
)
from skilldex.matcher import RelevanceMatcher, tokenize
from skilldex.models import ReferenceKind, SkillDocument, SkillMatch, SkillReference
from skilldex.parser import ParsedHeader, parse_document, parse_file, parse_header
from skilldex.registry import RegistryState, SkillRegistry
from skilldex.store import DocumentStore

__all__ = [
    "__version__",
    # Models
    "ReferenceKind",
    "SkillDocument",
    "SkillMatch",
    "SkillReference",
    # Parser
    "ParsedHeader",
    "parse_header",
    "parse_document",
    "parse_file",
    # Components
    "DocumentStore",
    "RelevanceMatcher",
    "tokenize",
    "SkillRegistry",
    "RegistryState",
    # Errors
    "SkilldexError",
    "ParseError",
    "MissingHeaderError",
    "RegistryInitError",
    "RegistryNotReady",
    "NotFound",
]
