"""Tests for QR labels, product images and order e-mails"""
import json
import pytest
from unittest.mock import AsyncMock

from core.errors import ValidationError
from core.services.app_settings import AppSettings
from core.services.images import MAX_IMAGE_BYTES, ProductImages, image_object_name, validate_image
from core.services.labels import LabelData, generate_label_pdf, generate_qr_png
from core.services.models import OnlineOrder, Product
from core.services.order_emails import OrderMailer
from tests.conftest import execute_result


# ==================== LABELS ====================

def test_qr_payload():
    label = LabelData(code="P001", name="Widget", price="10.5")

    assert json.loads(label.payload()) == {
        "code": "P001",
        "name": "Widget",
        "price": 10.5,
        "description": "",
    }


def test_qr_requires_code():
    with pytest.raises(ValidationError):
        LabelData(code="  ", name="Widget").payload()


def test_generate_qr_png():
    png = generate_qr_png(LabelData(code="P001", name="Widget", price=10))

    assert png.startswith(b"\x89PNG")


def test_generate_label_pdf():
    pdf = generate_label_pdf(LabelData(code="P001", name="Widget", price=10, description="Azul"), "$")

    assert pdf.startswith(b"%PDF")


# ==================== IMAGES ====================

def test_validate_image():
    validate_image("image/png", 1024)

    with pytest.raises(ValidationError):
        validate_image("application/pdf", 10)
    with pytest.raises(ValidationError):
        validate_image("image/jpeg", MAX_IMAGE_BYTES + 1)


def test_image_object_name_keeps_extension():
    name = image_object_name(1, "Foto.PNG")

    assert name.startswith("product-1-")
    assert name.endswith(".png")


@pytest.mark.asyncio
async def test_upload_replaces_previous_image(database, table, mock_supabase_client, sample_product):
    product = Product(**{**sample_product, "image_name": "product-1-old.jpg"})
    table.execute.return_value = execute_result([{**sample_product, "image_url": "https://cdn/new.jpg"}])
    images = ProductImages(mock_supabase_client, database.products)

    result = await images.upload(product, "foto.jpg", b"bytes", "image/jpeg")

    assert result.success
    bucket = mock_supabase_client.storage.from_.return_value
    bucket.upload.assert_awaited_once()
    bucket.remove.assert_awaited_once_with(["product-1-old.jpg"])
    update = table.update.call_args.args[0]
    assert update["image_url"] == "https://test.supabase.co/storage/product-1.jpg"


@pytest.mark.asyncio
async def test_upload_failure_leaves_product(database, table, mock_supabase_client, sample_product):
    bucket = mock_supabase_client.storage.from_.return_value
    bucket.upload = AsyncMock(side_effect=RuntimeError("bucket missing"))
    images = ProductImages(mock_supabase_client, database.products)

    result = await images.upload(Product(**sample_product), "foto.jpg", b"bytes", "image/jpeg")

    assert not result.success
    table.update.assert_not_called()


# ==================== ORDER E-MAILS ====================

@pytest.fixture
def order(sample_order):
    return OnlineOrder(**sample_order)


@pytest.mark.asyncio
async def test_admin_mail(mock_supabase_client, order):
    mailer = OrderMailer(mock_supabase_client, AppSettings(admin_email="admin@tienda.com"))

    result = await mailer.notify_admin_new_order(order, [])

    assert result.success
    call = mock_supabase_client.functions.invoke.call_args
    assert call.args[0] == "send-email"
    body = call.kwargs["invoke_options"]["body"]
    assert body["to"] == "admin@tienda.com"
    assert "Nuevo Pedido #42" in body["subject"]


@pytest.mark.asyncio
async def test_mail_disabled(mock_supabase_client, order):
    mailer = OrderMailer(mock_supabase_client, AppSettings(email_notifications=False))

    result = await mailer.notify_customer_confirmed(order)

    assert result.success
    mock_supabase_client.functions.invoke.assert_not_called()


@pytest.mark.asyncio
async def test_admin_mail_without_address(mock_supabase_client, order):
    result = await OrderMailer(mock_supabase_client, AppSettings()).notify_admin_new_order(order, [])

    assert not result.success


@pytest.mark.asyncio
async def test_mail_failure_is_reported(mock_supabase_client, order):
    mock_supabase_client.functions.invoke = AsyncMock(side_effect=RuntimeError("edge down"))

    result = await OrderMailer(mock_supabase_client, AppSettings()).notify_customer_cancelled(order, "Sin stock")

    assert not result.success
