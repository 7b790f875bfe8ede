from portal_api.models.customer import Customer
from portal_api.models.payment import Payment, PaymentStatus
from portal_api.models.product import Product
from portal_api.models.session import CustomerSession, SessionStatus
from portal_api.models.verification import Verification, VerificationStatus

__all__ = [
    "Customer",
    "Product",
    "CustomerSession",
    "SessionStatus",
    "Payment",
    "PaymentStatus",
    "Verification",
    "VerificationStatus",
]
