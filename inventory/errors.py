"""
Error kinds raised by the inventory application.

Each error carries the HTTP status the router answers with when it
reaches a request handler.
"""


class InventoryError(Exception):
    """Base class for all inventory errors"""
    status_code = 500

    def __init__(self, message):
        super().__init__(message)
        self.message = message


class ConnectionFailedError(InventoryError):
    """The database could not be reached with the submitted settings"""
    status_code = 502


class NotConnectedError(InventoryError):
    """A product operation was attempted before any successful connect"""
    status_code = 503

    def __init__(self, message="No database connection. Configure one first."):
        super().__init__(message)


class ProductNotFoundError(InventoryError):
    status_code = 404

    def __init__(self, product_id):
        super().__init__(f"Product {product_id} not found")
        self.product_id = product_id


class ConstraintViolationError(InventoryError):
    """Duplicate product code, missing required field or a value of the wrong type"""
    status_code = 409
