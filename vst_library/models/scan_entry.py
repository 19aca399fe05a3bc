"""Validated scanner entry, the importer's input type."""
from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class ScanEntry:
    """One plugin as reported by a scan payload, after validation and derivation."""

    id: str
    name: str
    paths: List[str] = field(default_factory=list)
    vendor: Optional[str] = None
    version: Optional[str] = None
    category: Optional[str] = None
    sub_categories: List[str] = field(default_factory=list)
    sdk_version: Optional[str] = None
    cid: Optional[str] = None
    cardinality: Optional[int] = None
    flags: Optional[int] = None
    is_valid: bool = True
    error: Optional[str] = None
    key: Optional[str] = None
