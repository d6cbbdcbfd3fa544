# API routes
from futdash.api.routes import health
from futdash.api.routes import entitlements
from futdash.api.routes import premium
from futdash.api.routes import squad

__all__ = ["health", "entitlements", "premium", "squad"]
