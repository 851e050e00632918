# config/settings/test.py
from .base import *  # noqa

DEBUG = False

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]

SIMPLE_JWT["SIGNING_KEY"] = "test-signing-key-with-enough-length-for-hs256"

LOGGING["root"]["level"] = "WARNING"
LOGGING["loggers"]["vt_core"]["level"] = "WARNING"
