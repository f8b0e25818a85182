"""Product images in Supabase Storage."""
import time
from pathlib import PurePosixPath

from core.db import PRODUCT_IMAGES_BUCKET
from core.errors import ERROR_IMAGE_TOO_LARGE, ERROR_IMAGE_TYPE, ValidationError
from core.logging import get_logger
from core.services.domains import ProductsDomain
from core.services.models import Product, ProductId
from core.services.result import Result

logger = get_logger(__name__)

MAX_IMAGE_BYTES = 5 * 1024 * 1024


def validate_image(content_type: str, size: int) -> None:
    """
    Raises:
        ValidationError: not an image, or larger than 5MB
    """
    if not (content_type or "").startswith("image/"):
        raise ValidationError(ERROR_IMAGE_TYPE)
    if size > MAX_IMAGE_BYTES:
        raise ValidationError(ERROR_IMAGE_TOO_LARGE)


def image_object_name(product_id: ProductId, filename: str) -> str:
    """Unique object name; keeps the original extension."""
    ext = PurePosixPath(filename or "").suffix.lower() or ".jpg"
    return f"product-{product_id}-{int(time.time() * 1000)}{ext}"


class ProductImages:
    def __init__(self, client, products: ProductsDomain):
        self.client = client
        self.products = products

    def _bucket(self):
        return self.client.storage.from_(PRODUCT_IMAGES_BUCKET)

    async def upload(
        self, product: Product, filename: str, content: bytes, content_type: str
    ) -> Result[Product]:
        validate_image(content_type, len(content))

        name = image_object_name(product.id, filename)
        try:
            await self._bucket().upload(name, content, file_options={"content-type": content_type})
            public_url = await self._bucket().get_public_url(name)
        except Exception as e:
            logger.error(f"Failed to upload image for product {product.id}: {e}", exc_info=True)
            return Result.fail(str(e))

        result = await self.products.update(product.id, {"image_url": public_url, "image_name": name})
        if result.success and product.image_name:
            await self.delete_object(product.image_name)
        return result

    async def remove(self, product: Product) -> Result[Product]:
        if product.image_name:
            await self.delete_object(product.image_name)
        return await self.products.update(product.id, {"image_url": None, "image_name": None})

    async def delete_object(self, name: str) -> None:
        try:
            await self._bucket().remove([name])
        except Exception as e:
            logger.warning(f"Failed to delete stored image {name}: {e}")
