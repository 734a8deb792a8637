"""Identity bounded context — customer accounts and contact details.

Holds the contact-field rules (email, phone) shared with checkout and the
demo account registry. There is no real authentication: accounts live in the
same KV store as the rest of the storefront.
"""

import structlog

logger = structlog.get_logger(__name__)
