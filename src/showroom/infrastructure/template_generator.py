"""Excel upload template with an image insertion guide."""

from __future__ import annotations

from io import BytesIO

from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side

TEMPLATE_FILENAME = "제품_업로드_템플릿_이미지가이드.xlsx"
DATA_SHEET_TITLE = "제품 데이터"
GUIDE_SHEET_TITLE = "이미지 삽입 가이드"

# (header, width); "*" marks the required column
TEMPLATE_COLUMNS: tuple[tuple[str, int], ...] = (
    ("품명 *", 30),
    ("슬러그", 25),
    ("규격", 30),
    ("조달번호", 15),
    ("가격", 12),
    ("제품설명", 40),
    ("이미지 (여기에 삽입)", 20),
    ("뱃지", 20),
    ("특징", 30),
    ("대분류", 15),
    ("소분류", 15),
    ("순서", 8),
)
IMAGE_COLUMN = 7

IMAGE_HINT = "← 이미지를 이 셀에 삽입하세요"

SAMPLE_ROWS: tuple[tuple[str | int, ...], ...] = (
    (
        "예시 제품 1",
        "example-product-1",
        "W1200 x D600 x H750",
        "12345678",
        "500,000",
        "제품 설명을 입력하세요",
        IMAGE_HINT,
        "MAS 등록, KS 인증",
        "특징1 | 특징2 | 특징3",
        "educational",
        "blackboard-cabinet",
        1,
    ),
    (
        "예시 제품 2",
        "example-product-2",
        "W800 x D500 x H1800",
        "87654321",
        "350,000",
        "두 번째 제품 설명",
        IMAGE_HINT,
        "친환경",
        "내구성 우수 | 조립 간편",
        "office",
        "cabinet",
        2,
    ),
)

GUIDE_LINES: tuple[str, ...] = (
    "엑셀 이미지 삽입 가이드",
    "",
    "이 템플릿을 사용하면 엑셀에 삽입된 이미지가 자동으로 업로드됩니다.",
    "",
    "=== 이미지 삽입 방법 ===",
    "",
    '1. "제품 데이터" 시트로 이동합니다.',
    '2. 이미지를 삽입할 행의 "이미지" 열(G열)을 선택합니다.',
    "3. 리본 메뉴 > 삽입 > 그림 > 이 장치를 클릭합니다.",
    "4. 원하는 이미지 파일을 선택합니다.",
    "5. 이미지가 해당 셀 위에 배치되도록 크기를 조절합니다.",
    "",
    "=== 중요 사항 ===",
    "",
    "• 지원 형식: PNG, JPG, JPEG, GIF, WEBP",
    "• 최대 용량: 이미지당 5MB",
    "• 행당 최대 이미지: 3개",
    "• 이미지는 행 번호 기준으로 제품과 매핑됩니다.",
    "• 같은 행에 여러 이미지를 넣으면 순서대로 등록됩니다.",
    "",
    "=== 이미지 위치 팁 ===",
    "",
    "• 이미지를 셀 안에 완전히 넣지 않아도 됩니다.",
    "• 이미지의 왼쪽 상단 모서리가 있는 행이 기준입니다.",
    "• 예: 이미지가 2행에서 시작하면 첫 번째 제품에 매핑",
    "",
    "=== 기존 URL 방식도 지원 ===",
    "",
    "이미지 URL을 직접 입력하는 것도 가능합니다.",
    "CSV 템플릿의 이미지URL/추가이미지1/추가이미지2 열을 사용하세요.",
)


class ExcelTemplateGenerator:
    """Builds the bulk upload workbook handed to catalog editors."""

    header_fill = PatternFill("solid", fgColor="4F81BD")
    image_fill = PatternFill("solid", fgColor="FFF2CC")

    def generate(self) -> bytes:
        """Return the template workbook as .xlsx bytes."""
        workbook = Workbook()
        sheet = workbook.active
        sheet.title = DATA_SHEET_TITLE
        sheet.sheet_properties.tabColor = "4F81BD"
        self._write_data_sheet(sheet)

        guide = workbook.create_sheet(GUIDE_SHEET_TITLE)
        guide.sheet_properties.tabColor = "70AD47"
        self._write_guide_sheet(guide)

        buffer = BytesIO()
        workbook.save(buffer)
        return buffer.getvalue()

    def _write_data_sheet(self, sheet) -> None:
        thin = Side(style="thin")
        light = Side(style="thin", color="CCCCCC")

        for col, (header, width) in enumerate(TEMPLATE_COLUMNS, start=1):
            cell = sheet.cell(row=1, column=col, value=header)
            cell.fill = self.header_fill
            cell.font = Font(color="FFFFFF", bold=True, size=11)
            cell.alignment = Alignment(vertical="center", horizontal="center", wrap_text=True)
            cell.border = Border(top=thin, left=thin, bottom=thin, right=thin)
            sheet.column_dimensions[cell.column_letter].width = width
        sheet.row_dimensions[1].height = 30

        for row_index, values in enumerate(SAMPLE_ROWS, start=2):
            for col, value in enumerate(values, start=1):
                cell = sheet.cell(row=row_index, column=col, value=value)
                cell.alignment = Alignment(vertical="center", wrap_text=True)
                cell.border = Border(top=light, left=light, bottom=light, right=light)
                if col == IMAGE_COLUMN:
                    cell.fill = self.image_fill
                    cell.font = Font(color="BF8F00", italic=True, size=10)
            # Tall rows leave room for pictures
            sheet.row_dimensions[row_index].height = 80

    def _write_guide_sheet(self, sheet) -> None:
        sheet.column_dimensions["A"].width = 60
        for row_index, line in enumerate(GUIDE_LINES, start=1):
            cell = sheet.cell(row=row_index, column=1, value=line or None)
            if row_index == 1:
                cell.font = Font(bold=True, size=16, color="2E7D32")
                sheet.row_dimensions[row_index].height = 30
            elif line.startswith("==="):
                cell.font = Font(bold=True, size=12, color="1565C0")
