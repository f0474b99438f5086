"""A fixed table of short string tags identified by slot index."""

from __future__ import annotations

import hashlib

from .memory import EngineMemory

HASH_RECORD_SIZE = 8


def hash_tag(text: str, length: int) -> int:
    """Hash the first ``length`` characters of ``text``; never returns zero."""
    if length <= 0:
        raise ValueError(f"length must be positive, got {length}")
    digest = hashlib.blake2b(text[:length].encode("utf-8"), digest_size=8).digest()
    return int.from_bytes(digest, "little") or 1


class TagManager:
    """Holds up to ``tag_count_max`` tags; a slot with hash zero is free."""

    def __init__(self, memory: EngineMemory, tag_c_str_length: int, tag_count_max: int) -> None:
        if tag_c_str_length <= 0 or tag_count_max <= 0:
            raise ValueError("tag length and tag count must be positive")
        commit_size = tag_count_max * tag_c_str_length + tag_count_max * HASH_RECORD_SIZE
        self.commit_id = memory.commit(commit_size)
        self.tag_c_str_length = tag_c_str_length
        self.tag_count_max = tag_count_max
        self._tags = [""] * tag_count_max
        self._hashes = [0] * tag_count_max

    def _check(self, tag_id: int) -> None:
        if not 0 <= tag_id < self.tag_count_max:
            raise IndexError(f"unknown tag id {tag_id}")

    def reserve(self, tag: str) -> int:
        """Store ``tag`` (truncated to the tag length) in the first free slot."""
        try:
            tag_id = self._hashes.index(0)
        except ValueError:
            raise RuntimeError(f"tag table is full ({self.tag_count_max} tags)") from None
        self._hashes[tag_id] = hash_tag(tag, self.tag_c_str_length)
        self._tags[tag_id] = tag[: self.tag_c_str_length]
        return tag_id

    def release(self, tag_id: int) -> None:
        """Free the slot so it can be reserved again."""
        self._check(tag_id)
        self._hashes[tag_id] = 0

    def tag(self, tag_id: int) -> str:
        self._check(tag_id)
        return self._tags[tag_id]

    def hash(self, tag_id: int) -> int:
        self._check(tag_id)
        return self._hashes[tag_id]