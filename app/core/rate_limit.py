"""Rate limiting for endpoints that call out or write to disk, using slowapi."""

from slowapi import Limiter
from slowapi.util import get_remote_address

from app.core.config import settings

UPSTREAM_LIMIT = "30/minute"
EXPORT_LIMIT = "10/minute"

limiter = Limiter(key_func=get_remote_address, enabled=settings.rate_limit_enabled)
