"""
Generic PDF generation service.
Provides common functionality for all PDF reports.
"""
from io import BytesIO
from reportlab.lib.pagesizes import letter
from reportlab.platypus import SimpleDocTemplate
from reportlab.lib.units import inch


class PDFService:
    """
    Base PDF service with common utilities.
    Used by specific report templates.
    """

    @staticmethod
    def create_document(buffer: BytesIO, title: str = "", **kwargs) -> SimpleDocTemplate:
        """
        Create a PDF document with standard settings.

        Args:
            buffer: BytesIO buffer for PDF output
            title: Document title stored in the PDF metadata
            **kwargs: Optional document settings (pagesize, margins)

        Returns:
            SimpleDocTemplate: Configured document
        """
        margin = kwargs.get('margin', 0.75 * inch)

        return SimpleDocTemplate(
            buffer,
            pagesize=kwargs.get('pagesize', letter),
            rightMargin=margin,
            leftMargin=margin,
            topMargin=margin,
            bottomMargin=margin,
            title=title,
            author="Sur Innova"
        )

    @staticmethod
    def format_quantity(quantity: float) -> str:
        """Format quantity without decimals."""
        return f"{quantity:.0f}"

    @staticmethod
    def or_placeholder(value: str, placeholder: str = "-") -> str:
        """Show a placeholder for empty values."""
        return value if value else placeholder
