"""Application settings read from the environment.

Persistence, brokers and event processing are configured in ``domain.toml``
and handled by Protean; the values here cover what Protean does not know
about: token issuance, the order-status policy and admin seeding.
"""

import os

JWT_SECRET_KEY = os.getenv("PETSHOP_JWT_SECRET", "change-me-in-production")
JWT_ALGORITHM = os.getenv("PETSHOP_JWT_ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("PETSHOP_ACCESS_TOKEN_MINUTES", "60"))
REFRESH_TOKEN_EXPIRE_DAYS = int(os.getenv("PETSHOP_REFRESH_TOKEN_DAYS", "7"))

# "strict" enforces the order status transition table, "permissive" allows
# any status to be set from any other status.
ORDER_TRANSITION_POLICY = os.getenv("PETSHOP_ORDER_TRANSITIONS", "strict").lower()

ADMIN_EMAIL = os.getenv("PETSHOP_ADMIN_EMAIL", "admin@petpet.local")
ADMIN_PASSWORD = os.getenv("PETSHOP_ADMIN_PASSWORD")

CORS_ORIGINS = [origin.strip() for origin in os.getenv("PETSHOP_CORS_ORIGINS", "*").split(",") if origin.strip()]

ACCESS_TOKEN_COOKIE = "access_token"
