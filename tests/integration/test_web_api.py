"""Integration tests for the REST API.

Tests cover:
- Upload, preparse, template and export endpoints
- Quote, render, consultation and catalog endpoints
- Error bodies produced by the exception handlers
"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from showroom.application.config import ShowroomSettings
from showroom.web.app import create_app

XLSX = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

LAYOUT = {
    "room": {"width": 5000, "height": 4000},
    "items": [
        {"id": "a", "name": "책상", "width": 1200, "depth": 600, "price": 300000},
        {"id": "b", "name": "의자", "width": 450, "depth": 450, "price": 80000,
         "x": 200, "y": 100, "rotation": 90},
    ],
}


@pytest.fixture
def client() -> TestClient:
    return TestClient(create_app(ShowroomSettings()))


class TestHealth:
    def test_health(self, client: TestClient) -> None:
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}


class TestProductEndpoints:
    """Test suite for /api/v1/products."""

    def test_import_workbook(self, client: TestClient, make_workbook, png_bytes) -> None:
        """Test that a workbook upload imports products with images."""
        content = make_workbook(
            [["품명", "가격"], ["책상", "500,000"], ["의자", "80,000"]],
            images=[("C2", png_bytes())],
        )

        response = client.post(
            "/api/v1/products/import",
            files={"file": ("products.xlsx", content, XLSX)},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["outcome"] == "success"
        assert body["inserted"] == 2
        assert body["errors"] == []

    def test_preparse_then_skip_duplicates(self, client: TestClient) -> None:
        """Test the duplicate check followed by an import that skips them."""
        first = "품명\n책상\n".encode()
        client.post("/api/v1/products/import", files={"file": ("a.csv", first, "text/csv")})

        second = "품명\n책상\n의자\n".encode()
        preparse = client.post(
            "/api/v1/products/preparse", files={"file": ("b.csv", second, "text/csv")}
        )
        assert preparse.status_code == 200
        info = preparse.json()
        assert info["kind"] == "csv"
        assert info["row_count"] == 2
        assert info["duplicate_titles"] == ["책상"]

        response = client.post(
            "/api/v1/products/import",
            files={"file": ("b.csv", second, "text/csv")},
            data={"skip_titles": info["duplicate_titles"]},
        )
        body = response.json()
        assert body["inserted"] == 1
        assert body["skipped_duplicates"] == 1
        assert body["outcome"] == "partial"

    def test_unsupported_file(self, client: TestClient) -> None:
        response = client.post(
            "/api/v1/products/import", files={"file": ("photo.png", b"\x89PNG", "image/png")}
        )
        assert response.status_code == 400
        body = response.json()
        assert body["error_type"] == "unsupported_file"
        assert body["details"] == {"filename": "photo.png"}

    def test_unparseable_workbook(self, client: TestClient) -> None:
        response = client.post(
            "/api/v1/products/import", files={"file": ("p.xlsx", b"garbage", XLSX)}
        )
        assert response.status_code == 422
        assert response.json()["error_type"] == "parse_error"

    def test_no_valid_rows(self, client: TestClient) -> None:
        response = client.post(
            "/api/v1/products/import",
            files={"file": ("p.csv", "품명,가격\n,1\n".encode(), "text/csv")},
        )
        assert response.status_code == 409
        body = response.json()
        assert body["error_type"] == "import_aborted"
        assert body["details"] == [{"message": "행 2: 품명이 필요합니다."}]

    @pytest.mark.parametrize(("fmt", "media_type"), [("xlsx", XLSX), ("csv", "text/csv")])
    def test_template(self, client: TestClient, fmt: str, media_type: str) -> None:
        response = client.get("/api/v1/products/template", params={"format": fmt})
        assert response.status_code == 200
        assert response.headers["content-type"].startswith(media_type)
        assert response.headers["content-disposition"].startswith("attachment; filename*=UTF-8''")

    def test_template_unknown_format(self, client: TestClient) -> None:
        response = client.get("/api/v1/products/template", params={"format": "pdf"})
        assert response.status_code == 400

    def test_export(self, client: TestClient) -> None:
        client.post(
            "/api/v1/products/import",
            files={"file": ("a.csv", "품명,가격\n책상,1000\n".encode(), "text/csv")},
        )
        response = client.get("/api/v1/products/export")
        assert response.status_code == 200
        text = response.content.decode("utf-8-sig")
        assert text.splitlines()[1].startswith("책상,책상,")


class TestPlannerEndpoints:
    """Test suite for /api/v1/planner."""

    def test_quote(self, client: TestClient) -> None:
        response = client.post("/api/v1/planner/quote", json={"layout": LAYOUT})

        assert response.status_code == 200
        body = response.json()
        assert body["total"] == 380000
        assert body["total_formatted"] == "₩380,000"
        assert body["lines"][0] == "책상 (1200×600mm) - ₩300,000"
        chair = body["items"][1]
        assert (chair["width"], chair["depth"], chair["rotation"]) == (450, 450, 90)
        assert "총 견적 금액: ₩380,000" in body["text"]

    def test_quote_invalid_layout(self, client: TestClient) -> None:
        response = client.post(
            "/api/v1/planner/quote",
            json={"layout": {"items": [{"name": "x", "width": 0, "depth": 1}]}},
        )
        assert response.status_code == 422
        body = response.json()
        assert body["error_type"] == "validation"
        assert body["details"][0]["path"] == "items[0].width"

    @pytest.mark.parametrize("view", ["top", "iso"])
    def test_render(self, client: TestClient, view: str) -> None:
        response = client.post(
            "/api/v1/planner/render", params={"view": view}, json={"layout": LAYOUT}
        )
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("image/svg+xml")
        assert response.text.startswith("<svg")

    def test_render_unknown_view(self, client: TestClient) -> None:
        response = client.post(
            "/api/v1/planner/render", params={"view": "side"}, json={"layout": LAYOUT}
        )
        assert response.status_code == 400

    def test_consultation(self, client: TestClient) -> None:
        response = client.post(
            "/api/v1/planner/consultation",
            json={
                "layout": LAYOUT,
                "name": "홍길동",
                "phone": "010-1234-5678",
                "email": "kim@example.com",
            },
        )

        assert response.status_code == 200
        body = response.json()
        assert body["title"] == "[시뮬레이터] 공간 스타일링 상담 요청"
        assert body["content"].endswith("추가 메시지:\n없음")

    def test_consultation_missing_contact(self, client: TestClient) -> None:
        response = client.post(
            "/api/v1/planner/consultation", json={"layout": LAYOUT, "name": "홍길동"}
        )
        assert response.status_code == 422
        body = response.json()
        assert body["error_type"] == "invalid_inquiry"
        assert {"message": "phone is required"} in body["details"]

    def test_catalog(self, client: TestClient, make_workbook) -> None:
        """Test that imported products show up as planner templates."""
        content = make_workbook(
            [["품명", "대분류", "규격", "가격", "순서"],
             ["책상", "office", "1200×600×740", "150,000", 2],
             ["의자", "office", "450x450x800", "80,000", 1],
             ["칠판", "educational", "", "", 1]]
        )
        client.post("/api/v1/products/import", files={"file": ("p.xlsx", content, XLSX)})

        response = client.get("/api/v1/planner/catalog/office")

        assert response.status_code == 200
        items = response.json()
        assert [item["name"] for item in items] == ["의자", "책상"]
        assert items[1]["width"] == 1200
        assert items[1]["price"] == 150000
