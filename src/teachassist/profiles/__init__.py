"""
Profiles

Teacher profile, onboarding, notification preferences and account management.
"""

from .identity import IdentityClient, get_identity_client

__all__ = ["IdentityClient", "get_identity_client"]
