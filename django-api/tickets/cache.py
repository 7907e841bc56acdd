"""Dashboard cache keys and invalidation."""

from django.core.cache import cache


def dashboard_key(user_id: str) -> str:
    return f"dashboard:{user_id}"


def invalidate_dashboard(user_id: str) -> None:
    cache.delete(dashboard_key(user_id))
