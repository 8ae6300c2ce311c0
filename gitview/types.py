"""Core value types shared across the package: reference kinds, tree entries and references."""

from __future__ import annotations

import locale
from dataclasses import dataclass, field
from enum import IntFlag


class RefType(IntFlag):
    """Kinds of references that can point at a revision."""

    TAG = 1
    BRANCH = 2
    RMT_BRANCH = 4
    CUR_BRANCH = 8
    REF = 16
    APPLIED = 32
    UN_APPLIED = 64
    ANY_REF = 127


@dataclass
class TreeEntry:
    """One entry of a tree listing as produced by ``git ls-tree``."""

    name: str
    sha: str
    type: str

    def __lt__(self, other: TreeEntry) -> bool:
        if not isinstance(other, TreeEntry):
            return NotImplemented
        if self.type == other.type:
            return locale.strcoll(self.name, other.name) < 0
        # directories sort before files
        if self.type == "tree":
            return True
        if other.type == "tree":
            return False
        return locale.strcoll(self.name, other.name) < 0


@dataclass
class Reference:
    """Reference information attached to a single revision."""

    type: RefType = RefType(0)
    branches: list[str] = field(default_factory=list)
    remote_branches: list[str] = field(default_factory=list)
    tags: list[str] = field(default_factory=list)
    refs: list[str] = field(default_factory=list)
    tag_obj: str = ""
    tag_msg: str = ""
    stgit_patch: str = ""

    def names(self, mask: int = RefType.ANY_REF) -> list[str]:
        """Return the reference names selected by ``mask``."""
        if not self.type & mask:
            return []
        result: list[str] = []
        if mask & RefType.TAG:
            result.extend(self.tags)
        if mask & RefType.BRANCH:
            result.extend(self.branches)
        if mask & RefType.RMT_BRANCH:
            result.extend(self.remote_branches)
        if mask & RefType.REF:
            result.extend(self.refs)
        if mask in (RefType.APPLIED, RefType.UN_APPLIED):
            result.append(self.stgit_patch)
        return result


@dataclass
class WorkingDirInfo:
    """Raw data describing the state of the working directory."""

    diff_index: str = ""
    diff_index_cached: str = ""
    other_files: list[str] = field(default_factory=list)

    def clear(self) -> None:
        self.diff_index = ""
        self.diff_index_cached = ""
        self.other_files.clear()