# shop_backend/settings/__init__.py
"""
Django settings package for the storefront backend.

This package provides environment-specific settings:
- development: Local development with debug enabled
- production: Production environment with security hardening

The ENVIRONMENT variable picks the module and defaults to development.
"""

import os
import sys

ENVIRONMENT = os.getenv("ENVIRONMENT", "development").lower()

VALID_ENVIRONMENTS = ["development", "production"]
if ENVIRONMENT not in VALID_ENVIRONMENTS:
    raise ValueError(
        f"Invalid ENVIRONMENT '{ENVIRONMENT}'. "
        f"Must be one of: {', '.join(VALID_ENVIRONMENTS)}"
    )

if ENVIRONMENT == "production":
    from .production import *
else:
    from .development import *


def validate_settings():
    """Validate critical settings are properly configured."""
    errors = []

    if not SECRET_KEY:
        errors.append("SECRET_KEY must be set to a secure random value")

    if not DATABASES.get("default"):
        errors.append("Database configuration is missing")

    if ENVIRONMENT == "production" and DEBUG:
        errors.append("DEBUG should be False in production")

    if errors:
        error_msg = "\n".join([f"  - {error}" for error in errors])
        raise ValueError(f"Settings validation failed:\n{error_msg}")


if "migrate" not in sys.argv and "collectstatic" not in sys.argv:
    validate_settings()
