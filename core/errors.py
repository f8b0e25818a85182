"""
Common Error Constants and Exceptions

Centralized error messages so routers, services and toasts agree on wording.
User-facing texts stay in Spanish, like the rest of the storefront copy.
"""

# Product errors
ERROR_PRODUCT_NOT_FOUND = "Producto no encontrado"
ERROR_PRODUCT_OUT_OF_STOCK = "Producto sin stock disponible"
ERROR_PRODUCT_CODE_REQUIRED = "Código y nombre son requeridos"
ERROR_INVALID_PRICE = "El precio del producto no es válido"

# Cart errors
ERROR_CART_EMPTY = "El carrito está vacío"

# Checkout errors
ERROR_REQUIRED_FIELDS = "Por favor completa todos los campos obligatorios"
ERROR_INVALID_EMAIL = "Por favor ingresa un email válido"
ERROR_INVALID_PHONE = "Por favor ingresa un teléfono válido"
ERROR_ORDER_FAILED = "Error al procesar el pedido. Inténtalo de nuevo."
ERROR_ONLINE_ORDERS_DISABLED = "Los pedidos en línea están deshabilitados"

# Order errors
ERROR_ORDER_NOT_FOUND = "Pedido no encontrado"
ERROR_INVALID_ORDER_STATUS = "Estado de pedido inválido"

# Reports / labels
ERROR_NO_REPORT_DATA = "No hay datos para exportar"
ERROR_QR_CODE_REQUIRED = "El código del producto es requerido"

# Images
ERROR_IMAGE_TYPE = "Solo se permiten archivos de imagen"
ERROR_IMAGE_TOO_LARGE = "La imagen no puede superar 5MB"

# Generic errors
ERROR_UNAUTHORIZED = "Unauthorized"
ERROR_INTERNAL = "Internal server error"


class ValidationError(ValueError):
    """Input rejected before any state change."""


class OutOfStockError(ValidationError):
    """Product cannot be added: stock exhausted or requested quantity above stock."""

    def __init__(self, product_name: str, stock: int):
        self.product_name = product_name
        self.stock = stock
        if stock <= 0:
            message = ERROR_PRODUCT_OUT_OF_STOCK
        else:
            message = f"Solo hay {stock} unidades disponibles"
        super().__init__(message)


class EmptyCartError(ValidationError):
    def __init__(self):
        super().__init__(ERROR_CART_EMPTY)
