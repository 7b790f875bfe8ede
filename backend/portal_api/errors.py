"""
Error taxonomy shared by the service layer and the HTTP exception handlers.

Services raise ServiceError subclasses for business-rule failures; the app
maps each kind to a status code. Absence of the primary record is not an
exception: services return None (or 0 for deletes) and the route answers 404.
"""

from enum import Enum


class ErrorKind(str, Enum):
    validation_error = "validation-error"
    customer_not_found = "customer-not-found"
    session_not_found = "session-not-found"
    payment_not_found = "payment-not-found"
    product_not_found = "product-not-found"
    email_in_use = "email-in-use"
    has_active_payments = "has-active-payments"
    record_not_found = "record-not-found"
    unexpected_error = "unexpected-error"


STATUS_BY_KIND = {
    ErrorKind.validation_error: 400,
    ErrorKind.customer_not_found: 400,
    ErrorKind.session_not_found: 400,
    ErrorKind.payment_not_found: 400,
    ErrorKind.product_not_found: 400,
    ErrorKind.email_in_use: 409,
    ErrorKind.has_active_payments: 409,
    ErrorKind.record_not_found: 404,
    ErrorKind.unexpected_error: 500,
}


class ServiceError(Exception):
    """Base class for business-rule failures raised by services"""

    kind = ErrorKind.unexpected_error

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    @property
    def status_code(self) -> int:
        return STATUS_BY_KIND[self.kind]


class ReferenceNotFoundError(ServiceError):
    """Raised when a foreign key points at a row that does not exist"""

    entity = "record"

    def __init__(self, ref_id: str):
        super().__init__(f"{self.entity}_id {ref_id} does not exist")
        self.ref_id = ref_id


class CustomerNotFoundError(ReferenceNotFoundError):
    kind = ErrorKind.customer_not_found
    entity = "customer"


class SessionNotFoundError(ReferenceNotFoundError):
    kind = ErrorKind.session_not_found
    entity = "session"


class PaymentNotFoundError(ReferenceNotFoundError):
    kind = ErrorKind.payment_not_found
    entity = "payment"


class ProductNotFoundError(ReferenceNotFoundError):
    kind = ErrorKind.product_not_found
    entity = "product"


class EmailInUseError(ServiceError):
    """Raised when another customer already holds the email"""

    kind = ErrorKind.email_in_use

    def __init__(self, email: str):
        super().__init__(f"Email {email} is already in use")
        self.email = email


class HasActivePaymentsError(ServiceError):
    """Raised when deleting a record that still has pending payments"""

    kind = ErrorKind.has_active_payments
    entity = "Record"

    def __init__(self, record_id: str, pending_count: int):
        super().__init__(f"{self.entity} {record_id} has {pending_count} pending payment(s) and cannot be deleted")
        self.record_id = record_id
        self.pending_count = pending_count


class CustomerHasActivePaymentsError(HasActivePaymentsError):
    entity = "Customer"


class ProductHasActivePaymentsError(HasActivePaymentsError):
    entity = "Product"


class InvalidRecordError(ServiceError):
    """Raised when a partial update would leave the stored record inconsistent"""

    kind = ErrorKind.validation_error
