"""
QR code and printable product labels.

The QR payload is a small JSON object so the sales-page scanner can read
the product code straight from the label.
"""
import io
import json
from decimal import Decimal
from typing import Optional

import qrcode
from pydantic import BaseModel, field_validator
from reportlab.lib.pagesizes import A4
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from core.errors import ERROR_QR_CODE_REQUIRED, ValidationError
from core.services.money import to_decimal, to_float

QR_BOX_SIZE = 10
QR_BORDER = 2


class LabelData(BaseModel):
    code: str = ""
    name: str = ""
    price: Decimal = Decimal("0")
    description: Optional[str] = None

    @field_validator("price", mode="before")
    @classmethod
    def convert_price(cls, v):
        return to_decimal(v)

    def payload(self) -> str:
        """
        JSON encoded in the QR code.

        Raises:
            ValidationError: product code missing
        """
        if not self.code.strip():
            raise ValidationError(ERROR_QR_CODE_REQUIRED)
        return json.dumps(
            {
                "code": self.code,
                "name": self.name,
                "price": to_float(self.price),
                "description": self.description or "",
            },
            ensure_ascii=False,
        )


def generate_qr_png(label: LabelData) -> bytes:
    """
    Generate QR code image.

    Returns:
        PNG image as bytes
    """
    qr = qrcode.QRCode(
        version=None,
        error_correction=qrcode.constants.ERROR_CORRECT_M,
        box_size=QR_BOX_SIZE,
        border=QR_BORDER,
    )
    qr.add_data(label.payload())
    qr.make(fit=True)
    img = qr.make_image(fill_color="black", back_color="white")

    buffer = io.BytesIO()
    img.save(buffer, format="PNG")
    return buffer.getvalue()


def generate_label_pdf(label: LabelData, currency_symbol: str = "$") -> bytes:
    """One A4 page: title, product fields and the QR code underneath."""
    png = generate_qr_png(label)

    buffer = io.BytesIO()
    pdf = canvas.Canvas(buffer, pagesize=A4)
    _, height = A4

    pdf.setFont("Helvetica-Bold", 20)
    pdf.drawString(56, height - 85, "Etiqueta de Producto")

    pdf.setFont("Helvetica", 12)
    y = height - 140
    lines = [
        f"Código: {label.code}",
        f"Nombre: {label.name}",
        f"Precio: {currency_symbol}{label.price:.2f}",
    ]
    if label.description:
        lines.append(f"Descripción: {label.description}")
    for line in lines:
        pdf.drawString(56, y, line)
        y -= 42

    pdf.drawImage(ImageReader(io.BytesIO(png)), 56, y - 140, width=142, height=142)
    pdf.showPage()
    pdf.save()
    return buffer.getvalue()
