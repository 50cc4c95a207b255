"""Tests for quote and consultation text."""

from __future__ import annotations

from datetime import date

from showroom.domain.services import ConsultationRequest, PlacementStore, QuoteComposer, format_price
from showroom.domain.services.quote_composer import CONSULTATION_TITLE, format_mm
from showroom.domain.value_objects import FurnitureItem


class TestFormatting:
    def test_price_has_thousands_separators(self) -> None:
        assert format_price(1234567) == "₩1,234,567"
        assert format_price(0) == "₩0"

    def test_mm_drops_trailing_zero(self) -> None:
        assert format_mm(1200.0) == "1200"
        assert format_mm(450.5) == "450.5"


class TestFurnitureList:
    """Tests for the furniture list and quote sheet."""

    def test_one_line_per_item_in_placement_order(
        self, store: PlacementStore, desk: FurnitureItem, chair: FurnitureItem
    ) -> None:
        store.add_furniture(desk, 0, 0)
        store.add_furniture(chair, 200, 0)

        text = QuoteComposer().generate_furniture_list(store.placed)

        assert text.splitlines() == [
            "책상 (1200×600mm) - ₩300,000",
            "의자 (450×450mm) - ₩80,000",
        ]

    def test_empty_layout_gives_empty_list(self) -> None:
        assert QuoteComposer().generate_furniture_list([]) == ""

    def test_quote_text_has_date_and_total(
        self, store: PlacementStore, desk: FurnitureItem, chair: FurnitureItem
    ) -> None:
        store.add_furniture(desk, 0, 0)
        store.add_furniture(chair, 200, 0)

        text = QuoteComposer().quote_text(store.placed, on=date(2024, 5, 1))

        assert "작성일: 2024-05-01" in text
        assert "책상 - ₩300,000" in text
        assert "총 견적 금액: ₩380,000" in text

    def test_quote_filename(self) -> None:
        assert QuoteComposer.quote_filename(date(2024, 5, 1)) == "GGI_견적서_2024-05-01.txt"


class TestConsultation:
    """Tests for the consultation request."""

    def test_body_lists_items_total_and_message(
        self, store: PlacementStore, desk: FurnitureItem
    ) -> None:
        store.add_furniture(desk, 0, 0)

        request = QuoteComposer().compose_consultation(
            store.placed, "홍길동", "010-1234-5678", "hong@example.com", "창가 배치 희망"
        )

        assert request.title == CONSULTATION_TITLE
        assert "- 책상 (1200×600mm) - ₩300,000" in request.content
        assert "총 견적 금액: ₩300,000" in request.content
        assert request.content.endswith("창가 배치 희망")

    def test_empty_message_is_marked(self, store: PlacementStore, desk: FurnitureItem) -> None:
        store.add_furniture(desk, 0, 0)
        request = QuoteComposer().compose_consultation(store.placed, "a", "b", "c")
        assert request.content.endswith("추가 메시지:\n없음")

    def test_missing_contact_fields(self) -> None:
        request = ConsultationRequest(name=" ", phone="", email="a@b.kr", title="t", content="c")
        assert request.missing_fields() == ["name", "phone"]
        assert request.problems() == ["name is required", "phone is required"]

    def test_malformed_phone_and_email(self) -> None:
        request = ConsultationRequest(
            name="홍길동", phone="call me", email="not-an-email", title="t", content="c"
        )
        assert request.problems() == ["phone is invalid", "email is invalid"]

    def test_valid_request_has_no_problems(self) -> None:
        request = ConsultationRequest(
            name="홍길동", phone="010-1234-5678", email="hong@example.com", title="t", content="c"
        )
        assert request.problems() == []

    def test_truncated_respects_column_limits(self) -> None:
        request = ConsultationRequest(
            name="n" * 150, phone="1" * 30, email="e" * 300, title="t" * 250, content="c" * 6000
        ).truncated()
        assert len(request.name) == 100
        assert len(request.phone) == 20
        assert len(request.email) == 255
        assert len(request.title) == 200
        assert len(request.content) == 5000
