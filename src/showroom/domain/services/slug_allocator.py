"""URL slug derivation and uniqueness allocation for imported products."""

from __future__ import annotations

import random
import re
import string
import time
from collections.abc import Callable, Collection
from dataclasses import dataclass, field

from ..value_objects import SLUG_MAX_LENGTH

__all__ = [
    "DEFAULT_MAX_ATTEMPTS",
    "LEGACY_MAX_ATTEMPTS",
    "SlugAllocator",
    "create_slug_from_title",
    "fallback_slug",
    "generate_random_suffix",
    "generate_unique_slug",
    "strip_random_suffix",
]

DEFAULT_MAX_ATTEMPTS = 20
LEGACY_MAX_ATTEMPTS = 10
TITLE_SLUG_MAX_LENGTH = 80
SUFFIX_LENGTH = 4
SUFFIX_ALPHABET = string.ascii_lowercase + string.digits

_WHITESPACE_RE = re.compile(r"\s+")
_DISALLOWED_RE = re.compile(r"[^0-9a-z가-힣-]")
_HYPHENS_RE = re.compile(r"-+")
_RANDOM_SUFFIX_RE = re.compile(r"-[a-z0-9]{4}$", re.IGNORECASE)


def _now_ms() -> int:
    return int(time.time() * 1000)


def generate_random_suffix(rng: random.Random | None = None) -> str:
    """Random 4-character lowercase alphanumeric suffix."""
    chooser = rng or random
    return "".join(chooser.choice(SUFFIX_ALPHABET) for _ in range(SUFFIX_LENGTH))


def create_slug_from_title(title: str) -> str:
    """Derive a URL-safe slug from a Korean or English title.

    Examples:
        >>> create_slug_from_title("Office Desk 1200")
        'office-desk-1200'
        >>> create_slug_from_title("  학생 책상 (대) ")
        '학생-책상-대'
    """
    slug = _WHITESPACE_RE.sub("-", title.lower())
    slug = _DISALLOWED_RE.sub("", slug)
    slug = _HYPHENS_RE.sub("-", slug)
    return slug.strip("-")[:TITLE_SLUG_MAX_LENGTH]


def fallback_slug(row_index: int, now_ms: int | None = None) -> str:
    """Slug for rows whose title yields no usable characters."""
    return f"product-{now_ms if now_ms is not None else _now_ms()}-{row_index}"


def _with_suffix(base: str, suffix: str) -> str:
    """Join base and suffix, trimming the base so the suffix always survives."""
    return f"{base[: SLUG_MAX_LENGTH - len(suffix) - 1].rstrip('-')}-{suffix}"


def strip_random_suffix(slug: str) -> str:
    """Remove a trailing "-xxxx" random suffix, if present."""
    return _RANDOM_SUFFIX_RE.sub("", slug)


@dataclass
class SlugAllocator:
    """Allocates slugs that collide with neither stored nor in-flight slugs.

    Retries with a random suffix a bounded number of times, then falls back
    to a millisecond timestamp suffix so allocation always terminates.

    Attributes:
        max_attempts: Random-suffix attempts before the timestamp fallback.
        rng: Random source for suffixes.
        clock: Millisecond clock for the fallback suffix.
    """

    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    rng: random.Random = field(default_factory=random.Random)
    clock: Callable[[], int] = _now_ms

    def allocate(
        self,
        base: str,
        existing: Collection[str],
        in_flight: Collection[str] = (),
    ) -> str:
        def taken(candidate: str) -> bool:
            return candidate in existing or candidate in in_flight

        if not taken(base):
            return base

        for _ in range(self.max_attempts):
            candidate = _with_suffix(base, generate_random_suffix(self.rng))
            if not taken(candidate):
                return candidate

        return _with_suffix(base, str(self.clock()))


def generate_unique_slug(
    base: str,
    existing: Collection[str],
    in_flight: Collection[str] = (),
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
) -> str:
    """Functional shortcut for ``SlugAllocator(max_attempts).allocate(...)``."""
    return SlugAllocator(max_attempts=max_attempts).allocate(base, existing, in_flight)
