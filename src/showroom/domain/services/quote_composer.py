"""Quote and consultation text built from a planner layout."""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date

from ..value_objects import PlacedFurniture

__all__ = [
    "ConsultationRequest",
    "QuoteComposer",
    "format_mm",
    "format_price",
]

CONSULTATION_TITLE = "[시뮬레이터] 공간 스타일링 상담 요청"

_PHONE_RE = re.compile(r"^[0-9\-+\s]{9,20}$")
_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def format_price(amount: int, currency: str = "₩") -> str:
    """Format an integer amount with thousands separators."""
    return f"{currency}{amount:,}"


def format_mm(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else f"{value:g}"


@dataclass(frozen=True)
class ConsultationRequest:
    """Pre-filled inquiry handed to the inquiry submission collaborator."""

    name: str
    phone: str
    email: str
    title: str
    content: str

    def missing_fields(self) -> list[str]:
        return [
            label
            for label, value in (("name", self.name), ("phone", self.phone), ("email", self.email))
            if not value.strip()
        ]

    def problems(self) -> list[str]:
        """Validation messages; empty when the request can be submitted."""
        problems = [f"{label} is required" for label in self.missing_fields()]
        if self.phone.strip() and not _PHONE_RE.match(self.phone.strip()):
            problems.append("phone is invalid")
        if self.email.strip() and not _EMAIL_RE.match(self.email.strip()):
            problems.append("email is invalid")
        return problems

    def truncated(self) -> ConsultationRequest:
        """Copy with every field cut to the inquiry table's column limits."""
        return ConsultationRequest(
            name=self.name.strip()[:100],
            phone=self.phone.strip()[:20],
            email=self.email.strip()[:255],
            title=self.title.strip()[:200],
            content=self.content.strip()[:5000],
        )


class QuoteComposer:
    """Formats a bill of materials and an inquiry body for placed items."""

    def __init__(self, currency: str = "₩") -> None:
        self.currency = currency

    def total_price(self, placed: Sequence[PlacedFurniture]) -> int:
        return sum(item.furniture.price for item in placed)

    def furniture_lines(self, placed: Sequence[PlacedFurniture]) -> list[str]:
        lines = []
        for item in placed:
            furniture = item.furniture
            lines.append(
                f"{furniture.name} "
                f"({format_mm(furniture.width)}×{format_mm(furniture.depth)}mm) "
                f"- {format_price(furniture.price, self.currency)}"
            )
        return lines

    def generate_furniture_list(self, placed: Sequence[PlacedFurniture]) -> str:
        """One line per placed item, in placement order."""
        return "\n".join(self.furniture_lines(placed))

    def inquiry_body(self, placed: Sequence[PlacedFurniture], message: str = "") -> str:
        listing = "\n".join(f"- {line}" for line in self.furniture_lines(placed))
        total = format_price(self.total_price(placed), self.currency)
        return (
            "[공간 스타일링 시뮬레이터 상담 요청]\n"
            "\n"
            "배치된 가구 목록:\n"
            f"{listing}\n"
            "\n"
            f"총 견적 금액: {total}\n"
            "\n"
            "추가 메시지:\n"
            f"{message.strip() or '없음'}"
        )

    def compose_consultation(
        self,
        placed: Sequence[PlacedFurniture],
        name: str,
        phone: str,
        email: str,
        message: str = "",
    ) -> ConsultationRequest:
        return ConsultationRequest(
            name=name,
            phone=phone,
            email=email,
            title=CONSULTATION_TITLE,
            content=self.inquiry_body(placed, message),
        )

    def quote_text(self, placed: Sequence[PlacedFurniture], on: date | None = None) -> str:
        """Plain-text quote sheet for download."""
        on = on or date.today()
        listing = "\n".join(
            f"{item.furniture.name} - {format_price(item.furniture.price, self.currency)}"
            for item in placed
        )
        total = format_price(self.total_price(placed), self.currency)
        return (
            "GGI 공간 스타일링 견적서\n"
            "========================\n"
            f"작성일: {on.isoformat()}\n"
            "배치된 가구 목록:\n"
            f"{listing}\n"
            "\n"
            "------------------------\n"
            f"총 견적 금액: {total}\n"
            "========================"
        )

    @staticmethod
    def quote_filename(on: date | None = None) -> str:
        on = on or date.today()
        return f"GGI_견적서_{on.isoformat()}.txt"
