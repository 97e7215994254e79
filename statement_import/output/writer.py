"""
Import Preview Writer Module
Serializes recognized transactions to the JSON import payload and renders a
PDF preview report with direction and category totals.
"""

import json
import logging
from collections import defaultdict
from datetime import datetime
from decimal import Decimal
from pathlib import Path
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER
from reportlab.lib.pagesizes import letter
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.units import inch
from reportlab.platypus import SimpleDocTemplate, Table, TableStyle, Paragraph, Spacer

from statement_import.extractors.financial_rules import Direction
from statement_import.extractors.regex_extractor import TransactionRecord

logger = logging.getLogger(__name__)

HEADER_COLOR = colors.HexColor('#ef8145')
GRID_COLOR = colors.HexColor('#808183')
STRIPE_COLOR = colors.HexColor('#e8e0dc')

SECTION_TITLES = {
    Direction.INCOME: "Income",
    Direction.EXPENSE: "Expenses",
}


def build_import_payload(records: list[TransactionRecord]) -> dict:
    """
    Build the import response payload.

    Returns:
        {"success": bool, "message": str, "data": [record dicts]}
    """
    if not records:
        return {
            "success": False,
            "message": "No transactions found. Please ensure it's a valid bank statement.",
            "data": []
        }
    return {
        "success": True,
        "message": f"Found {len(records)} transactions",
        "data": [record.to_dict() for record in records]
    }


def write_json(records: list[TransactionRecord], output_path: str) -> Path:
    """
    Write the import payload as JSON.

    Returns:
        Path of the written file
    """
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(build_import_payload(records), f, indent=2, ensure_ascii=False)
    logger.info(f"Wrote {len(records)} transactions to {path}")
    return path


def summarize(records: list[TransactionRecord]) -> dict:
    """
    Total the records by direction and by (direction, category).

    Returns:
        {"income": Decimal, "expense": Decimal, "net": Decimal,
         "categories": {(direction, category): Decimal}}
    """
    totals = {Direction.INCOME: Decimal("0"), Direction.EXPENSE: Decimal("0")}
    categories = defaultdict(lambda: Decimal("0"))

    for record in records:
        totals[record.direction] += record.amount
        categories[(record.direction, record.category)] += record.amount

    return {
        "income": totals[Direction.INCOME],
        "expense": totals[Direction.EXPENSE],
        "net": totals[Direction.INCOME] - totals[Direction.EXPENSE],
        "categories": dict(categories),
    }


class PDFReportWriter:
    """Generates the import preview PDF."""

    def __init__(self, output_path: str, page_size=letter):
        """
        Initialize PDF writer.

        Args:
            output_path: Path where PDF will be saved
            page_size: Page size (default: letter)
        """
        self.output_path = output_path
        self.page_size = page_size
        self.styles = getSampleStyleSheet()
        self._setup_custom_styles()

    def _setup_custom_styles(self):
        """Setup custom paragraph styles."""
        self.styles.add(ParagraphStyle(
            name='CustomTitle',
            parent=self.styles['Heading1'],
            fontSize=24,
            textColor=colors.HexColor('#1a1a1a'),
            spaceAfter=30,
            alignment=TA_CENTER,
            fontName='Helvetica-Bold'
        ))

        self.styles.add(ParagraphStyle(
            name='SectionHeading',
            parent=self.styles['Heading2'],
            fontSize=16,
            textColor=colors.HexColor('#2c5aa0'),
            spaceAfter=12,
            spaceBefore=20,
            fontName='Helvetica-Bold'
        ))

        self.styles.add(ParagraphStyle(
            name='InfoText',
            parent=self.styles['Normal'],
            fontSize=11,
            textColor=colors.HexColor('#444444'),
            spaceAfter=6
        ))

    def generate_report(self, records: list[TransactionRecord], source_name: str):
        """
        Generate the preview PDF.

        Args:
            records: Recognized transactions, in statement order
            source_name: Name of the imported statement file

        Raises:
            OSError: If the file cannot be written
        """
        if records is None:
            raise ValueError("records cannot be None")

        logger.info(f"Generating PDF report: {self.output_path} ({len(records)} transactions)")

        output_path = Path(self.output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        doc = SimpleDocTemplate(
            str(output_path),
            pagesize=self.page_size,
            rightMargin=0.75*inch,
            leftMargin=0.75*inch,
            topMargin=0.75*inch,
            bottomMargin=0.75*inch
        )

        story = self._create_header(source_name, len(records))

        if not records:
            logger.warning("No transactions to include in report")
            story.append(Paragraph("No transactions found in this statement.", self.styles['InfoText']))
        else:
            summary = summarize(records)
            story.append(self._create_totals_table(summary))
            story.append(Spacer(1, 0.3 * inch))
            story.append(Paragraph("Categories", self.styles['SectionHeading']))
            story.append(self._create_category_table(summary["categories"]))

            for direction in (Direction.INCOME, Direction.EXPENSE):
                section = [r for r in records if r.direction == direction]
                if section:
                    story.append(Paragraph(SECTION_TITLES[direction], self.styles['SectionHeading']))
                    story.append(self._create_transaction_table(section))

        try:
            doc.build(story)
        except PermissionError as e:
            logger.error(f"Permission denied writing to {self.output_path}: {e}")
            raise
        logger.info(f"PDF report generated successfully: {self.output_path}")

    def _create_header(self, source_name: str, total_transactions: int) -> list:
        """Create report header section."""
        elements = [
            Paragraph("Statement Import Preview", self.styles['CustomTitle']),
            Spacer(1, 0.2 * inch),
        ]

        info_lines = [
            f"<b>Statement:</b> {escape(source_name)}",
            f"<b>Generated:</b> {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}",
            f"<b>Transactions Found:</b> {total_transactions}"
        ]
        for line in info_lines:
            elements.append(Paragraph(line, self.styles['InfoText']))

        elements.append(Spacer(1, 0.3 * inch))
        return elements

    def _create_totals_table(self, summary: dict) -> Table:
        """Income / expense / net summary row."""
        net = summary["net"]
        data = [
            ['Total Income', 'Total Expenses', 'Net Amount'],
            [
                f"+{summary['income']:.2f}",
                f"-{summary['expense']:.2f}",
                f"+{net:.2f}" if net >= 0 else f"{net:.2f}"
            ]
        ]

        table = Table(data, colWidths=[2.3 * inch, 2.3 * inch, 2.3 * inch])
        table.setStyle(TableStyle([
            ('BACKGROUND', (0, 0), (-1, 0), HEADER_COLOR),
            ('TEXTCOLOR', (0, 0), (-1, 0), colors.white),
            ('FONTNAME', (0, 0), (-1, -1), 'Helvetica-Bold'),
            ('ALIGN', (0, 0), (-1, -1), 'CENTER'),
            ('FONTSIZE', (0, 0), (-1, -1), 11),
            ('TOPPADDING', (0, 0), (-1, -1), 8),
            ('BOTTOMPADDING', (0, 0), (-1, -1), 8),
            ('GRID', (0, 0), (-1, -1), 1, GRID_COLOR)
        ]))
        return table

    def _create_category_table(self, categories: dict) -> Table:
        """One row per (direction, category), income first."""
        data = [['Type', 'Category', 'Total']]
        for (direction, category), total in sorted(
            categories.items(),
            key=lambda item: (item[0][0] != Direction.INCOME, item[0][1])
        ):
            data.append([SECTION_TITLES[direction], category, f"{total:.2f}"])

        table = Table(data, colWidths=[1.5 * inch, 3.5 * inch, 1.9 * inch])
        table.setStyle(self._table_style(len(data)))
        return table

    def _create_transaction_table(self, records: list[TransactionRecord]) -> Table:
        """Date / description / category / amount rows with a total row."""
        data = [['Date', 'Description', 'Category', 'Amount']]
        for record in records:
            data.append([
                record.date.strftime('%Y-%m-%d'),
                self._truncate_description(record.description, max_length=45),
                record.category,
                record.amount_display
            ])

        total = sum((r.amount for r in records), Decimal("0"))
        data.append(['', 'TOTAL', '', f"{total:.2f}"])

        table = Table(data, colWidths=[1.0 * inch, 3.4 * inch, 1.3 * inch, 1.2 * inch])
        style = self._table_style(len(data) - 1)
        style.add('FONTNAME', (0, -1), (-1, -1), 'Helvetica-Bold')
        style.add('LINEABOVE', (0, -1), (-1, -1), 2, colors.black)
        table.setStyle(style)
        return table

    @staticmethod
    def _table_style(striped_rows: int) -> TableStyle:
        """Header row styling, grid, and alternating row stripes."""
        return TableStyle([
            ('BACKGROUND', (0, 0), (-1, 0), HEADER_COLOR),
            ('TEXTCOLOR', (0, 0), (-1, 0), colors.white),
            ('FONTNAME', (0, 0), (-1, 0), 'Helvetica-Bold'),
            ('FONTNAME', (0, 1), (-1, -1), 'Helvetica'),
            ('FONTSIZE', (0, 0), (-1, -1), 10),
            ('ALIGN', (-1, 0), (-1, -1), 'RIGHT'),
            ('TOPPADDING', (0, 0), (-1, -1), 6),
            ('BOTTOMPADDING', (0, 0), (-1, -1), 6),
            ('GRID', (0, 0), (-1, -1), 1, GRID_COLOR),
            *[('BACKGROUND', (0, i), (-1, i), STRIPE_COLOR)
              for i in range(2, striped_rows, 2)]
        ])

    @staticmethod
    def _truncate_description(description: str, max_length: int = 60) -> str:
        """Truncate description with ellipsis if too long."""
        if len(description) <= max_length:
            return description
        return description[:max_length - 3] + "..."


def generate_pdf_report(output_path: str, records: list[TransactionRecord], source_name: str):
    """
    Convenience function to generate the import preview PDF.

    Args:
        output_path: Path where PDF will be saved
        records: Recognized transactions
        source_name: Name of the imported statement file
    """
    writer = PDFReportWriter(output_path)
    writer.generate_report(records, source_name)
