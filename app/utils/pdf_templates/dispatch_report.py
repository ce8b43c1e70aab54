"""
Dispatch guide PDF for an order.
"""
from io import BytesIO
from typing import Dict, List
from reportlab.lib.units import inch
from reportlab.platypus import Paragraph, Spacer

from .base_report import BaseReport
from app.schemas.order import Order
from app.schemas.product import Product
from app.services.pdf_service import PDFService
from app.utils.formatters import format_order_status, truncate_text
from app.utils.timezone import format_date_local, get_local_today_label


class OrderDispatchReport(BaseReport):
    """Generate the dispatch guide ("guía de despacho") for an order."""

    def generate(self, order: Order, products: Dict[str, Product]) -> BytesIO:
        """
        Generate the dispatch guide PDF.

        Args:
            order: Order to print
            products: Known products by id, used to show code and name

        Returns:
            BytesIO: PDF file buffer
        """
        buffer = BytesIO()
        doc = PDFService.create_document(buffer, title=f"Guía de despacho {order.number}")

        story = []
        story.append(Paragraph("GUÍA DE DESPACHO", self.styles['ReportTitle']))
        story.append(Paragraph(
            f"Orden #{order.number} · Emitida el {get_local_today_label()}",
            self.styles['ReportSubtitle']
        ))

        story.append(Paragraph("DATOS DEL DESPACHO", self.styles['SectionHeader']))
        story.append(self.build_field_table(self._order_fields(order)))
        story.append(Spacer(1, 0.3 * inch))

        story.append(Paragraph("PRODUCTOS", self.styles['SectionHeader']))
        story.append(self._build_products_table(order, products))

        story.extend(self.signature_block(["Entrega (bodega)", "Transportista", "Recibe (sucursal)"]))

        doc.build(story)
        buffer.seek(0)
        return buffer

    def _order_fields(self, order: Order) -> List:
        or_dash = PDFService.or_placeholder
        return [
            ("Fecha:", format_date_local(order.date)),
            ("Fecha de entrega:", or_dash(format_date_local(order.delivery_date))),
            ("Estado:", format_order_status(order.status)),
            ("Sucursal:", order.branch),
            ("Dirección:", or_dash(order.address)),
            ("Transportista:", or_dash(order.carrier)),
            ("Teléfono transportista:", or_dash(order.carrier_phone)),
            ("Política de entrega:", or_dash(order.delivery_policy)),
            ("Autorizado por:", or_dash(order.authorized_by)),
            ("Información adicional:", or_dash(order.additional_info)),
        ]

    def _build_products_table(self, order: Order, products: Dict[str, Product]):
        data = [['Código', 'Producto', 'Cantidad']]
        total = 0

        for line in order.products:
            product = products.get(line.product_id)
            data.append([
                product.code if product else line.product_id,
                truncate_text(product.name, 45) if product else "Producto no disponible",
                PDFService.format_quantity(line.quantity)
            ])
            total += line.quantity

        data.append(['', 'Total unidades', PDFService.format_quantity(total)])

        table = self.create_table(data, col_widths=[1.4 * inch, 4.3 * inch, 1.2 * inch])
        table.setStyle([
            ('ALIGN', (2, 1), (2, -1), 'RIGHT'),
            ('FONTNAME', (0, -1), (-1, -1), 'Helvetica-Bold'),
        ])
        return table
