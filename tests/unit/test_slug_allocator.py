"""Tests for slug derivation and allocation."""

from __future__ import annotations

import random
import re

import pytest

from showroom.domain.services import (
    SlugAllocator,
    create_slug_from_title,
    generate_random_suffix,
    generate_unique_slug,
    strip_random_suffix,
)
from showroom.domain.services.slug_allocator import fallback_slug


class TestCreateSlug:
    """Tests for title -> slug derivation."""

    @pytest.mark.parametrize(
        ("title", "expected"),
        [
            ("책상", "책상"),
            ("Office Desk 1200", "office-desk-1200"),
            ("  학생 책상 (대) ", "학생-책상-대"),
            ("A / B -- C", "a-b-c"),
            ("!!!", ""),
        ],
    )
    def test_derivation(self, title: str, expected: str) -> None:
        assert create_slug_from_title(title) == expected

    def test_long_titles_are_cut_to_80(self) -> None:
        assert len(create_slug_from_title("가" * 120)) == 80

    def test_fallback_slug_uses_timestamp_and_row(self) -> None:
        assert fallback_slug(7, now_ms=1700000000000) == "product-1700000000000-7"


class TestSuffix:
    def test_random_suffix_shape(self) -> None:
        suffix = generate_random_suffix(random.Random(1))
        assert len(suffix) == 4
        assert suffix.isalnum() and suffix == suffix.lower()

    @pytest.mark.parametrize(
        ("slug", "expected"),
        [("책상-ab12", "책상"), ("office-desk", "office"), ("desk", "desk"), ("desk-12345", "desk-12345")],
    )
    def test_strip_random_suffix(self, slug: str, expected: str) -> None:
        assert strip_random_suffix(slug) == expected


class TestSlugAllocator:
    """Tests for uniqueness allocation."""

    def test_free_base_is_kept(self) -> None:
        assert SlugAllocator().allocate("책상", set(), set()) == "책상"

    def test_taken_base_gets_suffix(self) -> None:
        slug = SlugAllocator(rng=random.Random(3)).allocate("책상", {"책상"})
        assert slug.startswith("책상-")
        assert len(slug) == len("책상-") + 4

    def test_in_flight_slugs_count_as_taken(self) -> None:
        slug = SlugAllocator().allocate("책상", set(), {"책상"})
        assert slug != "책상"

    def test_exhausted_attempts_fall_back_to_timestamp(self) -> None:
        class Stuck(random.Random):
            def choice(self, seq):  # type: ignore[override]
                return seq[0]

        allocator = SlugAllocator(max_attempts=3, rng=Stuck(), clock=lambda: 42)
        assert allocator.allocate("desk", {"desk", "desk-aaaa"}) == "desk-42"

    @pytest.mark.parametrize("length", [96, 99, 100])
    def test_long_base_keeps_its_suffix(self, length: int) -> None:
        """Test that a base near the length limit still gets a free slug."""
        base = "x" * length
        slug = SlugAllocator(rng=random.Random(0)).allocate(base, {base})
        assert len(slug) <= 100
        assert slug != base
        assert re.fullmatch(r"x+-[a-z0-9]{4}", slug)

    def test_long_base_timestamp_fallback_is_not_cut(self) -> None:
        class Stuck(random.Random):
            def choice(self, seq):  # type: ignore[override]
                return seq[0]

        base = "x" * 100
        allocator = SlugAllocator(max_attempts=2, rng=Stuck(), clock=lambda: 1700000000000)
        slug = allocator.allocate(base, {base, "x" * 95 + "-aaaa"})
        assert slug == "x" * 86 + "-1700000000000"
        assert len(slug) == 100

    def test_colliding_batch_yields_distinct_slugs(self) -> None:
        allocator = SlugAllocator(rng=random.Random(5))
        batch: set[str] = set()
        slugs = []
        for _ in range(25):
            slug = allocator.allocate("의자", set(), batch)
            batch.add(slug)
            slugs.append(slug)
        assert len(set(slugs)) == 25

    def test_rerun_against_first_run_is_disjoint(self) -> None:
        allocator = SlugAllocator(rng=random.Random(11))

        def run(existing: set[str]) -> list[str]:
            batch: set[str] = set()
            for _ in range(10):
                batch.add(allocator.allocate("책상", existing, batch))
            return sorted(batch)

        first = run(set())
        second = run(set(first))

        assert len(first) == len(second) == 10
        assert set(first).isdisjoint(second)

    def test_generate_unique_slug_shortcut(self) -> None:
        assert generate_unique_slug("desk", {"other"}) == "desk"
        assert generate_unique_slug("desk", {"desk"}, max_attempts=10) != "desk"
