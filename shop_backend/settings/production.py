# shop_backend/settings/production.py
from .base import *

# -----------------------------------------------------------------------------
# Production Settings
# -----------------------------------------------------------------------------
DEBUG = False

if not SECRET_KEY:
    raise ValueError("DJANGO_SECRET_KEY environment variable is required")

ALLOWED_HOSTS = env_list("DJANGO_ALLOWED_HOSTS")
if not ALLOWED_HOSTS:
    raise ValueError("DJANGO_ALLOWED_HOSTS must be set in production")

# -----------------------------------------------------------------------------
# Security Settings (Enhanced for Production)
# -----------------------------------------------------------------------------
SECURE_SSL_REDIRECT = True
SESSION_COOKIE_SECURE = True
CSRF_COOKIE_SECURE = True

SECURE_HSTS_SECONDS = 31536000  # 1 year
SECURE_HSTS_INCLUDE_SUBDOMAINS = True
SECURE_HSTS_PRELOAD = True

SECURE_CONTENT_TYPE_NOSNIFF = True
X_FRAME_OPTIONS = "DENY"
SECURE_REFERRER_POLICY = "strict-origin-when-cross-origin"
SECURE_PROXY_SSL_HEADER = ("HTTP_X_FORWARDED_PROTO", "https")

# -----------------------------------------------------------------------------
# Database Configuration (Production)
# -----------------------------------------------------------------------------
if not os.getenv("DATABASE_URL"):
    raise ValueError("Database configuration is required in production")

DATABASES["default"]["CONN_MAX_AGE"] = 600  # 10 minutes

# -----------------------------------------------------------------------------
# Payments
# -----------------------------------------------------------------------------
if not STRIPE_SECRET_KEY:
    raise ValueError("STRIPE_SECRET_KEY must be set in production")

# -----------------------------------------------------------------------------
# Logging Configuration (Production)
# -----------------------------------------------------------------------------
LOG_DIR.mkdir(parents=True, exist_ok=True)

LOGGING["handlers"]["console"]["formatter"] = "json"
LOGGING["handlers"]["file"] = {
    "level": "INFO",
    "class": "logging.handlers.RotatingFileHandler",
    "filename": LOG_DIR / "storefront.log",
    "maxBytes": 1024 * 1024 * 15,  # 15MB
    "backupCount": 10,
    "formatter": "json",
    "filters": ["request_id"],
}
LOGGING["handlers"]["error_file"] = {
    "level": "ERROR",
    "class": "logging.handlers.RotatingFileHandler",
    "filename": LOG_DIR / "storefront_errors.log",
    "maxBytes": 1024 * 1024 * 15,  # 15MB
    "backupCount": 10,
    "formatter": "verbose",
    "filters": ["request_id"],
}
LOGGING["root"]["handlers"] = ["console", "file", "error_file"]
LOGGING["loggers"]["django"]["handlers"] = ["console", "file"]
LOGGING["loggers"]["django.request"]["handlers"] = ["console", "error_file"]
