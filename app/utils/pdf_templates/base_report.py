"""
Base class for all PDF reports.
Provides the Sur Innova styles and table layout.
"""
import html
from typing import List, Tuple
from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.units import inch
from reportlab.platypus import Paragraph, Spacer, Table, TableStyle

BRAND_COLOR = '#c62828'


class BaseReport:
    """
    Base class for PDF reports.
    Provides common styles and utilities that all reports can use.
    """

    def __init__(self):
        self.styles = getSampleStyleSheet()
        self._setup_custom_styles()

    def _setup_custom_styles(self):
        self.styles.add(ParagraphStyle(
            name='ReportTitle',
            parent=self.styles['Heading1'],
            fontSize=18,
            textColor=colors.HexColor(BRAND_COLOR),
            spaceAfter=6,
            alignment=TA_CENTER,
            fontName='Helvetica-Bold'
        ))

        self.styles.add(ParagraphStyle(
            name='ReportSubtitle',
            parent=self.styles['Normal'],
            fontSize=10,
            textColor=colors.HexColor('#555555'),
            alignment=TA_CENTER,
            spaceAfter=18
        ))

        self.styles.add(ParagraphStyle(
            name='SectionHeader',
            parent=self.styles['Heading3'],
            fontSize=12,
            textColor=colors.HexColor('#333333'),
            spaceAfter=8,
            fontName='Helvetica-Bold'
        ))

        self.styles.add(ParagraphStyle(
            name='InfoText',
            parent=self.styles['Normal'],
            fontSize=10,
            leading=14,
            textColor=colors.HexColor('#333333'),
        ))

    def build_field_table(self, fields: List[Tuple[str, str]]) -> Table:
        """
        Two-column label/value block without grid.

        Args:
            fields: (label, value) pairs

        Returns:
            Table with bold labels
        """
        data = [
            [Paragraph(f"<b>{label}</b>", self.styles['InfoText']), Paragraph(html.escape(value or ""), self.styles['InfoText'])]
            for label, value in fields
        ]
        table = Table(data, colWidths=[1.9 * inch, 5 * inch])
        table.setStyle(TableStyle([
            ('VALIGN', (0, 0), (-1, -1), 'TOP'),
            ('BOTTOMPADDING', (0, 0), (-1, -1), 4),
        ]))
        return table

    def create_table(self, data: List[List], col_widths: List) -> Table:
        """
        Create a table with a brand-colored header row and striped body.

        Args:
            data: Table data (rows of columns), first row is the header
            col_widths: Column widths

        Returns:
            Styled Table object
        """
        table = Table(data, colWidths=col_widths, repeatRows=1)
        table.setStyle(TableStyle([
            ('BACKGROUND', (0, 0), (-1, 0), colors.HexColor(BRAND_COLOR)),
            ('TEXTCOLOR', (0, 0), (-1, 0), colors.whitesmoke),
            ('FONTNAME', (0, 0), (-1, 0), 'Helvetica-Bold'),
            ('FONTSIZE', (0, 0), (-1, 0), 10),
            ('FONTNAME', (0, 1), (-1, -1), 'Helvetica'),
            ('FONTSIZE', (0, 1), (-1, -1), 9),
            ('ROWBACKGROUNDS', (0, 1), (-1, -1), [colors.white, colors.HexColor('#f5f5f5')]),
            ('GRID', (0, 0), (-1, -1), 0.5, colors.grey),
            ('VALIGN', (0, 0), (-1, -1), 'MIDDLE'),
            ('TOPPADDING', (0, 0), (-1, -1), 6),
            ('BOTTOMPADDING', (0, 0), (-1, -1), 6),
        ]))
        return table

    def signature_block(self, labels: List[str]) -> List:
        """Signature lines for the people who hand over and receive goods."""
        line = "_" * 28
        data = [[line for _ in labels], labels]
        table = Table(data, colWidths=[7 / len(labels) * inch] * len(labels))
        table.setStyle(TableStyle([
            ('ALIGN', (0, 0), (-1, -1), 'CENTER'),
            ('FONTSIZE', (0, 0), (-1, -1), 9),
        ]))
        return [Spacer(1, 0.8 * inch), table]
