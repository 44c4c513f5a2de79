"""Domain registration lookup adapter."""

from .whois_lookup import WhoisRegistrationLookup, parse_expiry_from_text

__all__ = ["WhoisRegistrationLookup", "parse_expiry_from_text"]
