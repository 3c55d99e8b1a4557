"""Checking layer: attachment rules and the entity scanner."""

from .models import Counters, EntityContext, EntityKind, EntityTally, Finding, ScanState
from .rules import ATTACHMENT_PATTERNS, AttachmentRules, find_doc_comment, find_file_comment
from .scanner import EntityScanner

__all__ = [
    "ATTACHMENT_PATTERNS",
    "AttachmentRules",
    "Counters",
    "EntityContext",
    "EntityKind",
    "EntityScanner",
    "EntityTally",
    "Finding",
    "ScanState",
    "find_doc_comment",
    "find_file_comment",
]
