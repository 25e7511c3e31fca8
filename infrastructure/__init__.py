"""Infrastructure layer - API clients and repositories."""
from .api import RiotAPIClient, RateLimiter, EndpointRateLimiter, RateLimitRetryPolicy
from .repositories import JsonStateRepository

__all__ = [
    'RiotAPIClient',
    'RateLimiter',
    'EndpointRateLimiter',
    'RateLimitRetryPolicy',
    'JsonStateRepository',
]
