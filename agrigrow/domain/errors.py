# agrigrow/domain/errors.py


class ShopError(Exception):
    """Base of every error a service raises on purpose; carries the HTTP status it maps to."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def payload(self) -> dict:
        return {"message": self.message}


class MissingFields(ShopError):
    status_code = 400


class InvalidInput(ShopError):
    status_code = 400


class NotFound(ShopError):
    status_code = 404


class OutOfStock(ShopError):
    status_code = 400

    def __init__(self, max_quantity: int, message: str | None = None):
        super().__init__(message or f"Only {max_quantity} item(s) available in stock.")
        self.max_quantity = max_quantity

    def payload(self) -> dict:
        return {"message": self.message, "maxQuantity": self.max_quantity}


class InvalidTransition(ShopError):
    status_code = 400


class ConcurrentModification(ShopError):
    status_code = 409


class StoreFailure(ShopError):
    status_code = 500
