"""CSV and PDF report generation."""

import csv
import io
import logging
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date
from pathlib import Path

from expense_tracker.aggregation import day_key
from expense_tracker.formatting import format_amount, format_day, format_short_date
from expense_tracker.models import ZERO, Expense

logger = logging.getLogger(__name__)

CSV_HEADER = ["Name", "Amount", "Date", "Category"]

# US Letter, in points
PAGE_WIDTH = 8.5 * 72
PAGE_HEIGHT = 11 * 72
MARGIN = 20

TITLE_FONT_SIZE = 20
LINE_FONT_SIZE = 14
TOTAL_FONT_SIZE = 16
FIRST_LINE_Y = 60
LINE_SPACING = 20

PDF_CREATOR = "Expense Tracker"


def format_csv(expenses: Sequence[Expense]) -> str:
    """
    Render expenses as CSV text.

    One row per expense in the given order, after a
    ``Name,Amount,Date,Category`` header.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for e in expenses:
        writer.writerow([
            e.name,
            str(e.amount),
            format_short_date(day_key(e.date)),
            e.category,
        ])
    return buffer.getvalue()


def write_csv(expenses: Sequence[Expense], output_path: Path) -> None:
    """
    Write expenses to a CSV file.

    Args:
        expenses: Expenses to export, normally the whole store
        output_path: Output file path
    """
    with open(output_path, "w", newline="", encoding="utf-8") as f:
        f.write(format_csv(expenses))
    logger.info("Exported %d expenses to %s", len(expenses), output_path)


@dataclass(frozen=True)
class RenderInstruction:
    """One line of text to draw on a report page.

    Coordinates are in points from the top-left corner of the page.
    """

    page: int
    x: float
    y: float
    text: str
    font_size: int
    bold: bool = False


def day_report_title(day: date, today: date | None = None) -> str:
    """Title for a one-day expense report."""
    return f"Expense Report - {format_day(day, today)}"


def build_day_report(
    expenses: Sequence[Expense],
    day: date,
    currency_code: str,
    today: date | None = None,
) -> list[RenderInstruction]:
    """
    Lay out a one-day expense report.

    The layout is a bold title, one ``name - amount - category`` line per
    expense in input order, and a bold total. Lines that would run past the
    bottom margin continue at the top of the next page.

    Args:
        expenses: The day's expenses
        day: The day being reported
        currency_code: Currency used to format amounts
        today: Reference date for Today/Yesterday labels

    Returns:
        Render instructions in drawing order
    """
    page = 0
    instructions = [
        RenderInstruction(
            page=page,
            x=MARGIN,
            y=MARGIN,
            text=day_report_title(day, today),
            font_size=TITLE_FONT_SIZE,
            bold=True,
        )
    ]

    def next_position(y: float, font_size: int) -> tuple[int, float]:
        nonlocal page
        if y + font_size > PAGE_HEIGHT - MARGIN:
            page += 1
            y = MARGIN
        return page, y

    y: float = FIRST_LINE_Y
    for e in expenses:
        line_page, y = next_position(y, LINE_FONT_SIZE)
        instructions.append(
            RenderInstruction(
                page=line_page,
                x=MARGIN,
                y=y,
                text=f"{e.name} - {format_amount(e.amount, currency_code)} - {e.category}",
                font_size=LINE_FONT_SIZE,
            )
        )
        y += LINE_SPACING

    total = sum((e.amount for e in expenses), ZERO)
    total_page, total_y = next_position(y + LINE_SPACING, TOTAL_FONT_SIZE)
    instructions.append(
        RenderInstruction(
            page=total_page,
            x=MARGIN,
            y=total_y,
            text=f"Total: {format_amount(total, currency_code)}",
            font_size=TOTAL_FONT_SIZE,
            bold=True,
        )
    )
    return instructions


def _pdf_string(text: str) -> bytes:
    # WinAnsiEncoding is close enough to cp1252; unmappable glyphs become "?"
    raw = text.encode("cp1252", errors="replace")
    return b"(" + raw.replace(b"\\", b"\\\\").replace(b"(", b"\\(").replace(b")", b"\\)") + b")"


def _page_stream(instructions: Sequence[RenderInstruction]) -> bytes:
    ops = []
    for ins in instructions:
        font = b"/F2" if ins.bold else b"/F1"
        # PDF origin is bottom-left; instructions use the top-left
        baseline = PAGE_HEIGHT - ins.y - ins.font_size
        ops.append(
            b"BT %s %d Tf %.2f %.2f Td %s Tj ET"
            % (font, ins.font_size, ins.x, baseline, _pdf_string(ins.text))
        )
    return b"\n".join(ops)


def render_pdf(instructions: Sequence[RenderInstruction], title: str = "") -> bytes:
    """
    Render layout instructions to a PDF document.

    Args:
        instructions: Output of ``build_day_report``
        title: Document title metadata

    Returns:
        PDF file contents
    """
    page_count = max((ins.page for ins in instructions), default=0) + 1
    pages: list[list[RenderInstruction]] = [[] for _ in range(page_count)]
    for ins in instructions:
        pages[ins.page].append(ins)

    # Fixed objects: 1 catalog, 2 page tree, 3-4 fonts, 5 info
    first_page_obj = 6
    page_refs = b" ".join(b"%d 0 R" % (first_page_obj + 2 * i) for i in range(page_count))

    objects: list[bytes] = [
        b"<< /Type /Catalog /Pages 2 0 R >>",
        b"<< /Type /Pages /Kids [%s] /Count %d >>" % (page_refs, page_count),
        b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica /Encoding /WinAnsiEncoding >>",
        b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica-Bold /Encoding /WinAnsiEncoding >>",
        b"<< /Creator %s /Title %s >>" % (_pdf_string(PDF_CREATOR), _pdf_string(title)),
    ]
    for i, page_instructions in enumerate(pages):
        content_obj = first_page_obj + 2 * i + 1
        objects.append(
            b"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 %d %d] "
            b"/Resources << /Font << /F1 3 0 R /F2 4 0 R >> >> /Contents %d 0 R >>"
            % (PAGE_WIDTH, PAGE_HEIGHT, content_obj)
        )
        stream = _page_stream(page_instructions)
        objects.append(
            b"<< /Length %d >>\nstream\n%s\nendstream" % (len(stream), stream)
        )

    out = io.BytesIO()
    out.write(b"%PDF-1.4\n")
    offsets = []
    for number, body in enumerate(objects, start=1):
        offsets.append(out.tell())
        out.write(b"%d 0 obj\n%s\nendobj\n" % (number, body))

    xref_offset = out.tell()
    out.write(b"xref\n0 %d\n" % (len(objects) + 1))
    out.write(b"0000000000 65535 f \n")
    for offset in offsets:
        out.write(b"%010d 00000 n \n" % offset)
    out.write(
        b"trailer\n<< /Size %d /Root 1 0 R /Info 5 0 R >>\nstartxref\n%d\n%%%%EOF\n"
        % (len(objects) + 1, xref_offset)
    )
    return out.getvalue()


def write_day_pdf(
    expenses: Sequence[Expense],
    day: date,
    output_path: Path,
    currency_code: str,
    today: date | None = None,
) -> None:
    """Write a one-day expense report as a PDF file."""
    instructions = build_day_report(expenses, day, currency_code, today)
    output_path.write_bytes(render_pdf(instructions, title=f"Expenses for {format_day(day, today)}"))
    logger.info("Wrote %d-expense report for %s to %s", len(expenses), day.isoformat(), output_path)
