"""Django settings for the changedesk API.

Every tunable comes from :class:`core.config.AppSettings` (``CHANGEDESK_*``
environment variables or ``.env``).
"""

from pathlib import Path

from core.config import AppSettings
from core.logging import build_logging_config, configure_structlog

BASE_DIR = Path(__file__).resolve().parent.parent

APP_SETTINGS = AppSettings()

SECRET_KEY = APP_SETTINGS.secret_key
DEBUG = APP_SETTINGS.debug
ALLOWED_HOSTS = APP_SETTINGS.allowed_hosts
IS_PRODUCTION = APP_SETTINGS.is_production

INSTALLED_APPS = [
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",
    "rest_framework",
    "tickets.apps.TicketsConfig",
    "devices.apps.DevicesConfig",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "core.handlers.identity.GuestCookieMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]

ROOT_URLCONF = "config.urls"
WSGI_APPLICATION = "config.wsgi.application"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.request",
                "django.contrib.auth.context_processors.auth",
                "django.contrib.messages.context_processors.messages",
            ],
        },
    },
]

_db_name = APP_SETTINGS.db_name
if APP_SETTINGS.db_engine.endswith("sqlite3") and not Path(_db_name).is_absolute():
    _db_name = str(BASE_DIR / _db_name)

DATABASES = {
    "default": {
        "ENGINE": APP_SETTINGS.db_engine,
        "NAME": _db_name,
        "USER": APP_SETTINGS.db_user,
        "PASSWORD": APP_SETTINGS.db_password,
        "HOST": APP_SETTINGS.db_host,
        "PORT": APP_SETTINGS.db_port,
        "CONN_MAX_AGE": APP_SETTINGS.db_conn_max_age,
    }
}

CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
        "LOCATION": "changedesk",
    }
}

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True

STATIC_URL = "static/"

SESSION_COOKIE_SECURE = IS_PRODUCTION
CSRF_COOKIE_SECURE = IS_PRODUCTION

REST_FRAMEWORK = {
    "DEFAULT_AUTHENTICATION_CLASSES": [
        "rest_framework.authentication.SessionAuthentication",
    ],
    "DEFAULT_PERMISSION_CLASSES": [
        "rest_framework.permissions.IsAuthenticated",
    ],
    "DEFAULT_RENDERER_CLASSES": [
        "rest_framework.renderers.JSONRenderer",
    ],
    "EXCEPTION_HANDLER": "core.handlers.exceptions.exception_handler",
    "UNAUTHENTICATED_USER": "django.contrib.auth.models.AnonymousUser",
}

# Domain wiring
BASE_URL = APP_SETTINGS.base_url
PAYMENT_CURRENCY = APP_SETTINGS.currency
STRIPE_SECRET_KEY = APP_SETTINGS.stripe_secret_key
STRIPE_WEBHOOK_SECRET = APP_SETTINGS.stripe_webhook_secret
# Completed checkouts without a ticket id fail loudly outside production.
PAYMENT_STRICT_CORRELATION = not IS_PRODUCTION
PAIRING_TTL_SECONDS = APP_SETTINGS.pairing_ttl_seconds
DASHBOARD_CACHE_TTL = APP_SETTINGS.dashboard_cache_ttl

configure_structlog()
LOGGING = build_logging_config(
    log_json=APP_SETTINGS.log_json or IS_PRODUCTION,
    level=APP_SETTINGS.log_level,
)
