"""Pet shop domain: catalogue, cart, checkout, reviews and identity.

A single bounded context: checkout decrements Product stock, empties the
ShoppingCart and records the Order inside one unit of work, which requires
all three aggregates to live in the same domain (and the same provider).
"""

import structlog
from protean.domain import Domain

petshop = Domain(name="petshop")

logger = structlog.get_logger(__name__)
