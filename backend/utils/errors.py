# backend/utils/errors.py

# Base class for failures raised by the inventory core
class InventoryError(Exception):
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFound(InventoryError):
    status_code = 404


class InvalidArgument(InventoryError):
    status_code = 400


class InsufficientStock(InventoryError):
    """Raised when a decrement asks for more units than the product holds."""
    status_code = 409

    def __init__(self, product_name: str, requested: int, available: int):
        super().__init__(
            f"Insufficient stock for {product_name}: requested {requested}, available {available}"
        )
        self.product_name = product_name
        self.requested = requested
        self.available = available


# Retries of a conflicting transaction were exhausted
class TransactionAborted(InventoryError):
    status_code = 503
