"""Semantic version comparison for ``v``-prefixed version strings."""

from __future__ import annotations

import re
from typing import NamedTuple

__all__ = ["is_valid", "compare"]

_NUM = r"(0|[1-9][0-9]*)"
_IDENTS = r"[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*"
_PATTERN = re.compile(
    rf"v{_NUM}(?:\.{_NUM}(?:\.{_NUM}(?:-({_IDENTS}))?(?:\+({_IDENTS}))?)?)?"
)


class _Version(NamedTuple):
    major: int
    minor: int
    patch: int
    prerelease: tuple[str, ...]


def _parse(version: str) -> _Version | None:
    match = _PATTERN.fullmatch(version)
    if match is None:
        return None
    major, minor, patch, prerelease, _build = match.groups()
    identifiers = tuple(prerelease.split(".")) if prerelease else ()
    if any(ident.isdigit() and len(ident) > 1 and ident[0] == "0" for ident in identifiers):
        return None
    return _Version(int(major), int(minor or 0), int(patch or 0), identifiers)


def _sign(number: int) -> int:
    return (number > 0) - (number < 0)


def _compare_prerelease(x: tuple[str, ...], y: tuple[str, ...]) -> int:
    if x == y:
        return 0
    if not x:
        return 1
    if not y:
        return -1
    for a, b in zip(x, y):
        if a == b:
            continue
        a_num, b_num = a.isdigit(), b.isdigit()
        if a_num and b_num:
            return _sign(int(a) - int(b))
        if a_num:
            return -1
        if b_num:
            return 1
        return -1 if a < b else 1
    return -1 if len(x) < len(y) else 1


def is_valid(version: str) -> bool:
    """Report whether version is a valid semantic version with a ``v`` prefix."""
    return _parse(version) is not None


def compare(v: str, w: str) -> int:
    """Compare two versions, returning -1, 0 or 1.

    An invalid version is less than any valid one; two invalid versions are equal.
    Build metadata is ignored.
    """
    if v == w:
        return 0
    pv, pw = _parse(v), _parse(w)
    if pv is None and pw is None:
        return 0
    if pv is None:
        return -1
    if pw is None:
        return 1
    core_v = (pv.major, pv.minor, pv.patch)
    core_w = (pw.major, pw.minor, pw.patch)
    if core_v != core_w:
        return -1 if core_v < core_w else 1
    return _compare_prerelease(pv.prerelease, pw.prerelease)