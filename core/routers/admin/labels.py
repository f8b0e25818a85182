"""
Admin Labels Router

QR codes and printable labels, for stored products or ad-hoc data.
"""
from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response

from core.errors import ERROR_PRODUCT_NOT_FOUND
from core.routers.deps import get_context, parse_id
from core.services.labels import LabelData, generate_label_pdf, generate_qr_png

router = APIRouter(tags=["admin-labels"])


async def _product_label(ctx, product_id: str) -> LabelData:
    product = await ctx.db.products.get(parse_id(product_id))
    if product is None:
        raise HTTPException(status_code=404, detail=ERROR_PRODUCT_NOT_FOUND)
    return LabelData(
        code=product.code,
        name=product.name,
        price=product.price,
        description=product.description,
    )


def _pdf_response(label: LabelData, symbol: str) -> Response:
    return Response(
        content=generate_label_pdf(label, symbol),
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="etiqueta-{label.code}.pdf"'},
    )


@router.get("/labels/{product_id}/qr")
async def admin_product_qr(product_id: str, ctx=Depends(get_context)):
    label = await _product_label(ctx, product_id)
    return Response(content=generate_qr_png(label), media_type="image/png")


@router.get("/labels/{product_id}/pdf")
async def admin_product_label_pdf(product_id: str, ctx=Depends(get_context)):
    label = await _product_label(ctx, product_id)
    return _pdf_response(label, ctx.db.settings.settings.currency_symbol)


@router.post("/labels/qr")
async def admin_custom_qr(label: LabelData):
    """QR for data typed into the generator form."""
    return Response(content=generate_qr_png(label), media_type="image/png")


@router.post("/labels/pdf")
async def admin_custom_label_pdf(label: LabelData, ctx=Depends(get_context)):
    return _pdf_response(label, ctx.db.settings.settings.currency_symbol)
