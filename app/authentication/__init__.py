"""
Authentication application.

This app owns accounts: email-based login, the public Profile that carries
the current handle, and registration.

Key components:
    - User model: Custom email-based user authentication (UUID account id)
    - Profile model: Display name, handle and handle cooldown anchor
    - AuthService: Registration, profile and password operations

Usage:
    from authentication.models import User, Profile
    from authentication.services import AuthService
"""
