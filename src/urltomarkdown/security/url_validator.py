"""URL validation for conversion requests."""

from __future__ import annotations

import ipaddress
import logging
from dataclasses import dataclass
from typing import Optional, Union
from urllib.parse import urlparse

IPAddress = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]


@dataclass
class UrlValidationResult:
    """Result of URL validation."""

    is_valid: bool
    rejection_reason: Optional[str] = None

    @staticmethod
    def valid() -> UrlValidationResult:
        """Create a valid result."""
        return UrlValidationResult(is_valid=True)

    @staticmethod
    def invalid(reason: str) -> UrlValidationResult:
        """Create an invalid result with reason."""
        return UrlValidationResult(is_valid=False, rejection_reason=reason)


class UrlValidator:
    """
    Validates that a URL is absolute and fetchable.

    Syntactic checks always apply: an allowed scheme, a host, and a
    dotted domain name or IP literal. With block_private_ips the
    validator also rejects localhost, internal suffixes and private
    addresses, which protects a public deployment from SSRF.

    Example:
        validator = UrlValidator()
        result = validator.validate("https://example.com/page")
        if not result.is_valid:
            print(f"Rejected: {result.rejection_reason}")
    """

    DEFAULT_ALLOWED_SCHEMES = frozenset({"http", "https"})
    INTERNAL_SUFFIXES = (".internal", ".local", ".localhost", ".localdomain")
    LOCALHOST_NAMES = frozenset({"localhost", "localhost.localdomain"})

    def __init__(
        self,
        allowed_schemes: Optional[set[str]] = None,
        block_private_ips: bool = False,
        logger: Optional[logging.Logger] = None,
    ):
        """
        Initialize the URL validator.

        Args:
            allowed_schemes: Set of allowed URL schemes (default: http, https)
            block_private_ips: Whether to block private/internal hosts
            logger: Optional logger for validation messages
        """
        self.allowed_schemes = allowed_schemes or self.DEFAULT_ALLOWED_SCHEMES
        self.block_private_ips = block_private_ips
        self.logger = logger or logging.getLogger(__name__)

    def validate(self, url: str) -> UrlValidationResult:
        """
        Validate a URL.

        Args:
            url: The URL to validate

        Returns:
            UrlValidationResult with is_valid and optional rejection_reason
        """
        if not isinstance(url, str) or not url or any(ch.isspace() for ch in url):
            return UrlValidationResult.invalid("Invalid URL format")

        try:
            parsed = urlparse(url)
            hostname = parsed.hostname
        except ValueError:
            return UrlValidationResult.invalid("Invalid URL format")

        if parsed.scheme not in self.allowed_schemes:
            return UrlValidationResult.invalid(
                f"Scheme '{parsed.scheme}' not allowed (allowed: {sorted(self.allowed_schemes)})"
            )

        if not hostname:
            return UrlValidationResult.invalid("URL has no domain")

        ip = self._parse_ip(hostname)
        if ip is None and hostname not in self.LOCALHOST_NAMES and "." not in hostname.strip("."):
            return UrlValidationResult.invalid(f"Host '{hostname}' is not a domain name")

        if self.block_private_ips:
            blocked = self._check_internal(hostname, ip)
            if blocked is not None:
                self.logger.debug(f"Blocked {url}: {blocked.rejection_reason}")
                return blocked

        return UrlValidationResult.valid()

    def _parse_ip(self, hostname: str) -> Optional[IPAddress]:
        try:
            return ipaddress.ip_address(hostname)
        except ValueError:
            return None

    def _check_internal(
        self,
        hostname: str,
        ip: Optional[IPAddress],
    ) -> Optional[UrlValidationResult]:
        """Return an invalid result for localhost, internal names and private IPs."""
        if hostname in self.LOCALHOST_NAMES:
            return UrlValidationResult.invalid("Localhost URLs not allowed")

        for suffix in self.INTERNAL_SUFFIXES:
            if hostname.endswith(suffix):
                return UrlValidationResult.invalid(f"Internal domain suffix '{suffix}' not allowed")

        if ip is not None:
            if ip.is_loopback:
                return UrlValidationResult.invalid(f"Loopback IP address '{hostname}' not allowed")
            if ip.is_private:
                return UrlValidationResult.invalid(f"Private IP address '{hostname}' not allowed")
            if ip.is_link_local:
                return UrlValidationResult.invalid(f"Link-local IP address '{hostname}' not allowed")
            if ip.is_reserved:
                return UrlValidationResult.invalid(f"Reserved IP address '{hostname}' not allowed")

        return None

    def is_valid(self, url: str) -> bool:
        """Quick check if URL is valid."""
        return self.validate(url).is_valid
