"""Custom exceptions for the fuel storefront."""

class StoreError(Exception):
    """Base exception for all application errors."""
    def __init__(self, message="An internal error occurred", status_code=500, payload=None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.payload = payload

    def to_dict(self):
        rv = dict(self.payload or ())
        rv['message'] = self.message
        rv['status'] = 'error'
        return rv

class BusinessLogicError(StoreError):
    """Exception raised for business logic violations."""
    def __init__(self, message, status_code=400, payload=None):
        super().__init__(message, status_code, payload)

class NotFoundError(StoreError):
    """Exception raised when a resource is not found."""
    def __init__(self, message="Resource not found", payload=None):
        super().__init__(message, 404, payload)

class InsufficientStockError(BusinessLogicError):
    """Raised when a cart addition exceeds the product's stock."""
    def __init__(self, product_name, required, available):
        req_fmt = f"{int(required)}" if required % 1 == 0 else f"{required:.2f}".rstrip('0').rstrip('.')
        avail_fmt = f"{int(available)}" if available % 1 == 0 else f"{available:.2f}".rstrip('0').rstrip('.')
        message = f"Not enough stock for {product_name}: requested {req_fmt}, available {avail_fmt}"
        super().__init__(message, status_code=409)

class UnauthorizedError(StoreError):
    """Raised when credentials are wrong or the user is not logged in."""
    def __init__(self, message="Unauthorized access", status_code=401):
        super().__init__(message, status_code)

class InvalidInputError(BusinessLogicError):
    """Raised by the API layer when the pricing calculator rejects an input."""
    def __init__(self, message="Please enter a valid amount."):
        super().__init__(message, status_code=400)

class EmptyCartError(BusinessLogicError):
    """Checkout attempted with nothing in the cart."""
    def __init__(self, message="Your cart is empty."):
        super().__init__(message, status_code=400)

class MissingAddressError(BusinessLogicError):
    """Checkout attempted without a delivery address."""
    def __init__(self, message="Please enter your delivery address."):
        super().__init__(message, status_code=400)

class CheckoutInProgressError(BusinessLogicError):
    """A second order submission was attempted while one is still pending."""
    def __init__(self, message="Your order is already being placed."):
        super().__init__(message, status_code=409)

class OrderSubmissionError(StoreError):
    """Persisting the order failed; the cart is left untouched for a retry."""
    def __init__(self, message="Order failed. Please try again."):
        super().__init__(message, 502)
