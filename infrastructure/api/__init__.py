"""Infrastructure API module."""
from .riot_client import RiotAPIClient
from .rate_limiter import RateLimiter, EndpointRateLimiter
from .retry_policy import RateLimitRetryPolicy

__all__ = [
    'RiotAPIClient',
    'RateLimiter',
    'EndpointRateLimiter',
    'RateLimitRetryPolicy',
]
