import os

# Mock SECRET_KEY for tests BEFORE importing settings to bypass validation
os.environ.setdefault("SECRET_KEY", "django-insecure-test-key-for-unit-tests-only")

from .settings import *  # noqa: F403

TESTING = True

# Override Database to use SQLite for tests
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": BASE_DIR / "db.sqlite3",  # noqa: F405
    }
}

# Disable external services
MEDIA_HOST_BACKEND = "local"
EMAIL_SERVICE_BACKEND = "mock"

STRIPE_SECRET_KEY = "sk_test_mock_key"
MAILGUN_API_KEY = "key-test"
MAILGUN_DOMAIN = "sandbox.example.org"

PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]

# Enable SessionAuthentication for tests to support client.force_login()
REST_FRAMEWORK["DEFAULT_AUTHENTICATION_CLASSES"].append(  # noqa: F405
    "rest_framework.authentication.SessionAuthentication"
)
