"""Repository references: parsing ``git show-ref`` output and querying it."""

from __future__ import annotations

import logging
from typing import Callable, Iterator, Optional, Sequence, Union

from gitview.types import Reference, RefType

log = logging.getLogger(__name__)

_TAGS_PREFIX = "refs/tags/"
_HEADS_PREFIX = "refs/heads/"
_REMOTES_PREFIX = "refs/remotes/"
_PATCHES_PREFIX = "refs/patches/"
_BASES_PREFIX = "refs/bases/"
_DEREF_SUFFIX = "^{}"

TagMessage = Union[str, Callable[[str], str], None]


def parse_current_branch(branch_output: str) -> str:
    """Extract the current branch name from ``git branch`` output.

    Returns an empty string when HEAD is detached or no branch is marked.
    """
    parts = ("\n" + branch_output).split("\n*", 1)
    if len(parts) < 2:
        return ""
    name = parts[1].split("\n", 1)[0].strip()
    if " detached " in name:
        return ""
    return name


class RefMap:
    """Maps revision shas to the references that point at them."""

    def __init__(self) -> None:
        self._refs: dict[str, Reference] = {}

    def __len__(self) -> int:
        return len(self._refs)

    def __contains__(self, sha: object) -> bool:
        return sha in self._refs

    def __iter__(self) -> Iterator[str]:
        return iter(self._refs)

    def __getitem__(self, sha: str) -> Reference:
        return self._refs[sha]

    def __delitem__(self, sha: str) -> None:
        del self._refs[sha]

    def items(self):
        return self._refs.items()

    def clear(self) -> None:
        self._refs.clear()

    def lookup(self, sha: str) -> Optional[Reference]:
        """Return the reference for ``sha``, or ``None``."""
        return self._refs.get(sha)

    def lookup_or_add(self, sha: str) -> Reference:
        """Return the reference for ``sha``, creating an empty one if needed."""
        ref = self._refs.get(sha)
        if ref is None:
            ref = self._refs[sha] = Reference()
        return ref

    def load(
        self, show_ref_output: str, head_sha: str = "", stgit_branch: str = ""
    ) -> tuple[list[str], list[str]]:
        """Rebuild the map from ``git show-ref -d`` output.

        Returns the names and shas of the StGit patches of ``stgit_branch``,
        which are not stored as references here.
        """
        self._refs.clear()
        head_sha = head_sha.strip()
        patches_dir = f"{_PATCHES_PREFIX}{stgit_branch}/"
        patch_names: list[str] = []
        patch_shas: list[str] = []
        prev_sha = ""

        for line in filter(None, show_ref_output.split("\n")):
            rev_sha = line[:40]
            ref_name = line[41:]

            if ref_name.startswith(_PATCHES_PREFIX):
                if ref_name.startswith(patches_dir):
                    patch_names.append(ref_name[len(patches_dir):])
                    patch_shas.append(rev_sha)
                continue

            cur = self.lookup_or_add(rev_sha)

            if ref_name.startswith(_TAGS_PREFIX):
                if ref_name.endswith(_DEREF_SUFFIX):
                    # a dereference strictly follows its tag object
                    cur.tags.append(ref_name[len(_TAGS_PREFIX):-len(_DEREF_SUFFIX)])
                    cur.tag_obj = prev_sha
                    if prev_sha and prev_sha != rev_sha:
                        self._refs.pop(prev_sha, None)
                else:
                    cur.tags.append(ref_name[len(_TAGS_PREFIX):])
                cur.type |= RefType.TAG

            elif ref_name.startswith(_HEADS_PREFIX):
                cur.branches.append(ref_name[len(_HEADS_PREFIX):])
                cur.type |= RefType.BRANCH
                if head_sha == rev_sha:
                    cur.type |= RefType.CUR_BRANCH

            elif ref_name.startswith(_REMOTES_PREFIX) and not ref_name.endswith("HEAD"):
                cur.remote_branches.append(ref_name[len(_REMOTES_PREFIX):])
                cur.type |= RefType.RMT_BRANCH

            elif not ref_name.startswith(_BASES_PREFIX) and not ref_name.endswith("HEAD"):
                cur.refs.append(ref_name)
                cur.type |= RefType.REF

            prev_sha = rev_sha

        if head_sha:
            self.lookup_or_add(head_sha).type |= RefType.CUR_BRANCH
        return patch_names, patch_shas

    def apply_stgit_series(
        self, series_output: str, patch_names: Sequence[str], patch_shas: Sequence[str]
    ) -> int:
        """Mark StGit patches from ``stg series`` output.

        Returns the number of applied patches found.
        """
        applied_count = 0
        for line in filter(None, series_output.split("\n")):
            status = line[:1]
            name = line[2:]
            applied = status in ("+", ">")
            try:
                pos = list(patch_names).index(name)
            except ValueError:
                log.warning("patch %s not found in references list", name)
                continue
            ref = self.lookup_or_add(patch_shas[pos])
            ref.stgit_patch = name
            ref.type |= RefType.APPLIED if applied else RefType.UN_APPLIED
            if applied:
                applied_count += 1
        return applied_count

    def check(self, sha: str, mask: int = RefType.ANY_REF) -> RefType:
        """Return the reference kinds of ``sha`` restricted to ``mask``."""
        ref = self._refs.get(sha)
        return RefType(ref.type & mask) if ref is not None else RefType(0)

    def names(self, sha: str, mask: int = RefType.ANY_REF) -> list[str]:
        """Reference names of ``sha`` selected by ``mask``."""
        ref = self._refs.get(sha)
        return ref.names(mask) if ref is not None else []

    def find_sha(self, ref_name: str, ref_type: int = RefType.ANY_REF) -> str:
        """Sha pointed to by ``ref_name``, or an empty string."""
        any_ref = ref_type == RefType.ANY_REF
        for sha, ref in self._refs.items():
            if (any_ref or ref_type == RefType.TAG) and ref_name in ref.tags:
                return sha
            if (any_ref or ref_type == RefType.BRANCH) and ref_name in ref.branches:
                return sha
            if (any_ref or ref_type == RefType.RMT_BRANCH) and ref_name in ref.remote_branches:
                return sha
            if (any_ref or ref_type == RefType.REF) and ref_name in ref.refs:
                return sha
            if (
                (any_ref or ref_type in (RefType.APPLIED, RefType.UN_APPLIED))
                and ref.stgit_patch
                and ref.stgit_patch == ref_name
            ):
                return sha
        return ""

    def all_shas(self, mask: int) -> list[str]:
        """Shas having at least one reference kind in ``mask``."""
        return [sha for sha, ref in self._refs.items() if ref.type & mask]

    def all_names(self, mask: int) -> list[str]:
        """All reference names of the kinds selected by ``mask``."""
        names: list[str] = []
        for ref in self._refs.values():
            if mask & RefType.TAG:
                names.extend(ref.tags)
            if mask & RefType.BRANCH:
                names.extend(ref.branches)
            if mask & RefType.RMT_BRANCH:
                names.extend(ref.remote_branches)
            if mask & RefType.REF:
                names.extend(ref.refs)
            if mask & (RefType.APPLIED | RefType.UN_APPLIED) and ref.stgit_patch:
                names.append(ref.stgit_patch)
        return names

    def is_patch_name(self, name: str) -> bool:
        """True when ``name`` is the name of an StGit patch."""
        if self.find_sha(name, RefType.UN_APPLIED):
            return True
        return bool(self.find_sha(name, RefType.APPLIED))

    def rev_info(self, sha: str, tag_message: TagMessage = None) -> str:
        """One-line summary of the references pointing at ``sha``.

        ``tag_message`` is either the tag message itself or a callable
        that returns it for a sha; it is used only when ``sha`` is tagged.
        """
        if not sha:
            return ""
        kind = self.check(sha)
        if not kind:
            return ""

        info = ""
        if kind & RefType.BRANCH:
            caption = "HEAD: " if kind & RefType.CUR_BRANCH else "Branch: "
            info = caption + " ".join(self.names(sha, RefType.BRANCH))
        if kind & RefType.RMT_BRANCH:
            info += "   Remote branch: " + " ".join(self.names(sha, RefType.RMT_BRANCH))
        if kind & RefType.TAG:
            info += "   Tag: " + " ".join(self.names(sha, RefType.TAG))
        if kind & RefType.REF:
            info += "   Ref: " + " ".join(self.names(sha, RefType.REF))
        if kind & RefType.APPLIED:
            info += "   Patch: " + " ".join(self.names(sha, RefType.APPLIED))
        if kind & RefType.UN_APPLIED:
            info += "   Patch: " + " ".join(self.names(sha, RefType.UN_APPLIED))
        if kind & RefType.TAG and tag_message is not None:
            msg = tag_message(sha) if callable(tag_message) else tag_message
            if msg:
                info += "  [" + msg + "]"
        return info.strip()