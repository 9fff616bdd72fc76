"""Rate limiting configuration for security-sensitive endpoints."""

from ipaddress import ip_address, ip_network
from typing import Sequence

from fastapi import Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from directory_api.config import get_settings


def _get_trusted_proxies() -> Sequence[str]:
    """Get list of trusted proxy IP ranges from configuration.

    Returns:
        List of IP addresses or CIDR ranges that are trusted proxies.
    """
    settings = get_settings()

    if settings.trusted_proxies_list:
        return settings.trusted_proxies_list

    # Default: trust localhost and common private ranges for development
    if settings.environment == "development":
        return ["127.0.0.1", "::1", "10.0.0.0/8", "172.16.0.0/12", "192.168.0.0/16"]

    return []


def _is_trusted_proxy(client_ip: str, trusted_proxies: Sequence[str]) -> bool:
    """Check if client IP is from a trusted proxy.

    Args:
        client_ip: The IP address to check.
        trusted_proxies: List of trusted IP addresses or CIDR ranges.

    Returns:
        True if the IP is trusted.
    """
    if not trusted_proxies:
        return False

    try:
        addr = ip_address(client_ip)
        for proxy in trusted_proxies:
            if "/" in proxy:
                if addr in ip_network(proxy, strict=False):
                    return True
            elif addr == ip_address(proxy):
                return True
    except ValueError:
        return False

    return False


def get_real_client_ip(request: Request) -> str:
    """Extract real client IP, trusting X-Forwarded-For only from trusted proxies.

    Args:
        request: The incoming request object.

    Returns:
        The client IP address.
    """
    direct_ip = get_remote_address(request)

    if _is_trusted_proxy(direct_ip, _get_trusted_proxies()):
        forwarded_for = request.headers.get("X-Forwarded-For")
        if forwarded_for:
            client_ip = forwarded_for.split(",")[0].strip()
            try:
                ip_address(client_ip)
                return client_ip
            except ValueError:
                pass

    return direct_ip


def _get_storage_uri() -> str | None:
    """Get rate limiter storage URI.

    Returns:
        Redis URI or None for in-memory storage.
    """
    settings = get_settings()

    if settings.redis_url:
        return settings.redis_url

    if settings.environment == "production":
        raise ValueError(
            "REDIS_URL must be configured in production for distributed rate limiting."
        )

    return None


_settings = get_settings()

limiter = Limiter(
    key_func=get_real_client_ip,
    default_limits=[f"{_settings.rate_limit_default}/minute"],
    storage_uri=_get_storage_uri() or "memory://",
    enabled=_settings.rate_limit_enabled,
)

AUTH_LOGIN_LIMIT = f"{_settings.rate_limit_auth_login}/minute"
AUTH_REGISTER_LIMIT = f"{_settings.rate_limit_auth_register}/minute"
AUTH_REFRESH_LIMIT = f"{_settings.rate_limit_auth_refresh}/minute"
MUTATION_LIMIT = f"{_settings.rate_limit_mutation}/minute"
