"""
Django settings for the fizzbuzz server.

Everything deployment-specific comes from the environment (or a .env file at
the project root). The database defaults to MySQL, in which case all of
DATABASE_USER, DATABASE_PASS, DATABASE_NAME, DATABASE_HOST and DATABASE_PORT
must be set.
"""
from pathlib import Path

from .env import env_bool, env_int, env_str, load_env, require_env

BASE_DIR = Path(__file__).resolve().parent.parent

load_env(BASE_DIR / ".env")

SECRET_KEY = env_str("DJANGO_SECRET_KEY", "django-insecure-fizzbuzz-server-dev-key")
DEBUG = env_bool("DJANGO_DEBUG", False)
ALLOWED_HOSTS = [h.strip() for h in env_str("DJANGO_ALLOWED_HOSTS", "*").split(",") if h.strip()]

INSTALLED_APPS = [
    "django.contrib.contenttypes",
    "django.contrib.auth",
    "rest_framework",
    "fizzbuzz",
]

MIDDLEWARE = [
    "fizzbuzz.middleware.RequestLogMiddleware",
    "django.middleware.common.CommonMiddleware",
]

ROOT_URLCONF = "fizzbuzz_server.urls"
WSGI_APPLICATION = "fizzbuzz_server.wsgi.application"
APPEND_SLASH = False

# Listening port used by `manage.py runserver` when none is given
SERVER_PORT = env_int("SERVER_PORT", 8080)


def _database_config() -> dict:
    engine = env_str("DATABASE_ENGINE", "django.db.backends.mysql")
    if engine == "django.db.backends.sqlite3":
        return {
            "ENGINE": engine,
            "NAME": env_str("DATABASE_NAME", str(BASE_DIR / "db.sqlite3")),
        }
    return {
        "ENGINE": engine,
        "NAME": require_env("DATABASE_NAME"),
        "USER": require_env("DATABASE_USER"),
        "PASSWORD": require_env("DATABASE_PASS"),
        "HOST": require_env("DATABASE_HOST"),
        "PORT": require_env("DATABASE_PORT"),
        "OPTIONS": {"charset": "utf8mb4"},
    }


DATABASES = {"default": _database_config()}
DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

LANGUAGE_CODE = "en-us"
TIME_ZONE = env_str("TIME_ZONE", "UTC")
USE_I18N = False
USE_TZ = True

# Time zone the statistics endpoint renders created_at / updated_at in
FIZZBUZZ_DISPLAY_TZ = env_str("FIZZBUZZ_DISPLAY_TZ", TIME_ZONE)

REST_FRAMEWORK = {
    "DEFAULT_RENDERER_CLASSES": ["fizzbuzz.renderers.PlainTextRenderer"],
    "DEFAULT_PARSER_CLASSES": [],
    "DEFAULT_CONTENT_NEGOTIATION_CLASS": "fizzbuzz.renderers.IgnoreClientContentNegotiation",
    "DEFAULT_AUTHENTICATION_CLASSES": [],
    "DEFAULT_PERMISSION_CLASSES": ["rest_framework.permissions.AllowAny"],
    "UNAUTHENTICATED_USER": None,
    "EXCEPTION_HANDLER": "fizzbuzz.exceptions.plain_text_exception_handler",
}

LOG_LEVEL = env_str("LOG_LEVEL", "INFO").upper()

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "standard": {"format": "%(asctime)s %(levelname)s %(name)s %(message)s"},
    },
    "handlers": {
        "console": {"class": "logging.StreamHandler", "formatter": "standard"},
    },
    "root": {"handlers": ["console"], "level": "WARNING"},
    "loggers": {
        "fizzbuzz": {"handlers": ["console"], "level": LOG_LEVEL, "propagate": False},
        "django.request": {"handlers": ["console"], "level": "ERROR", "propagate": False},
    },
}
