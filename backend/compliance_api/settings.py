"""
Django settings for the compliance_api project.

Environment-specific values are read with python-decouple, from the
environment or a .env file.
"""

from pathlib import Path

from decouple import Csv, config

BASE_DIR = Path(__file__).resolve().parent.parent

SECRET_KEY = config("DJANGO_SECRET_KEY", default="django-insecure-hos-compliance-dev-key")

DEBUG = config("DJANGO_DEBUG", default=False, cast=bool)

ALLOWED_HOSTS = config("DJANGO_ALLOWED_HOSTS", default="localhost,127.0.0.1", cast=Csv())


# Application definition

INSTALLED_APPS = [
    "django.contrib.contenttypes",
    "django.contrib.auth",
    "rest_framework",
    "hos_compliance",
    "eld_logs",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.common.CommonMiddleware",
]

ROOT_URLCONF = "compliance_api.urls"

WSGI_APPLICATION = "compliance_api.wsgi.application"

# The engine owns no storage; the database only backs Django internals.
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": BASE_DIR / "db.sqlite3",
    }
}

LANGUAGE_CODE = "en-us"

TIME_ZONE = "UTC"

USE_I18N = True

USE_TZ = True

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"


# Django REST Framework

REST_FRAMEWORK = {
    "DEFAULT_RENDERER_CLASSES": [
        "rest_framework.renderers.JSONRenderer",
    ],
    "DEFAULT_PARSER_CLASSES": [
        "rest_framework.parsers.JSONParser",
    ],
    "DEFAULT_AUTHENTICATION_CLASSES": [],
    "DEFAULT_PERMISSION_CLASSES": [
        "rest_framework.permissions.AllowAny",
    ],
    "UNAUTHENTICATED_USER": None,
}


# HOS engine

HOS_ENGINE = {
    "WARNING_THRESHOLD_MIN": config("HOS_WARNING_THRESHOLD_MIN", default=60, cast=int),
    "RULESET": config("HOS_RULESET", default="FMCSA"),
    "CYCLE_LIMIT_MIN": config("HOS_CYCLE_LIMIT_MIN", default=70 * 60, cast=int),
    "CYCLE_DAYS": config("HOS_CYCLE_DAYS", default=8, cast=int),
    "TIMEZONE": config("HOS_TIMEZONE", default="UTC"),
    "ELD_MODE": config("HOS_ELD_MODE", default="mock"),
}


# Logging

HOS_LOG_LEVEL = config("HOS_LOG_LEVEL", default="INFO")

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "verbose": {
            "format": "{asctime} {levelname} {name} {message}",
            "style": "{",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "verbose",
        },
    },
    "loggers": {
        "hos_compliance": {
            "handlers": ["console"],
            "level": HOS_LOG_LEVEL,
            "propagate": False,
        },
        "eld_logs": {
            "handlers": ["console"],
            "level": HOS_LOG_LEVEL,
            "propagate": False,
        },
    },
}
