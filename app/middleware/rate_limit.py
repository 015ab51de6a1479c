"""
Rate limiting shared by the application and its routers.
"""
from slowapi import Limiter
from slowapi.util import get_remote_address

from app.config import settings

# Rate limiter
limiter = Limiter(key_func=get_remote_address)

# Limit string for the expensive recommendation endpoints
RECOMMENDATION_RATE_LIMIT = f"{settings.rate_limit_requests}/minute"
