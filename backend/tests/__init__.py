# Register every SQLModel table before any test database is created
from portal_api.models.customer import Customer  # noqa: F401
from portal_api.models.payment import Payment  # noqa: F401
from portal_api.models.product import Product  # noqa: F401
from portal_api.models.session import CustomerSession  # noqa: F401
from portal_api.models.verification import Verification  # noqa: F401
