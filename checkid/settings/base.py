"""
Base settings for CheckID : moteur de fusion multi-frames pour pièces d'identité
- Django 4.x / DRF 3.x
- Pas de persistance : les résultats sont renvoyés (ou rappelés) en mémoire
- Celery + Redis pour les scans asynchrones avec callback signé
- drf-spectacular (Swagger & ReDoc)
- Logging structuré
"""


from pathlib import Path
import os

BASE_DIR = Path(__file__).resolve().parent.parent.parent

# ------------------------------------------------------------------------------
# ENV
# ------------------------------------------------------------------------------
def env(key: str, default=None, cast=None):
    val = os.getenv(key, default)
    if cast and val is not None:
        try:
            return cast(val)
        except Exception:
            return default
    return val

SECRET_KEY = env("SECRET_KEY", "change-me")
DEBUG = False  # override in dev.py

ALLOWED_HOSTS = [h.strip() for h in env("ALLOWED_HOSTS", "127.0.0.1,localhost").split(",") if h.strip()]

# ------------------------------------------------------------------------------
# APPS
# ------------------------------------------------------------------------------
DJANGO_APPS = [
    "django.contrib.contenttypes",
    "django.contrib.auth",
    "django.contrib.staticfiles",
]

THIRD_PARTY_APPS = [
    "rest_framework",
    "drf_spectacular",
    "drf_spectacular_sidecar",
]

LOCAL_APPS = [
    "kyc",
]

INSTALLED_APPS = DJANGO_APPS + THIRD_PARTY_APPS + LOCAL_APPS

# ------------------------------------------------------------------------------
# MIDDLEWARE
# ------------------------------------------------------------------------------
MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "whitenoise.middleware.WhiteNoiseMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]

ROOT_URLCONF = "checkid.urls"
WSGI_APPLICATION = "checkid.wsgi.application"
ASGI_APPLICATION = "checkid.asgi.application"

# ------------------------------------------------------------------------------
# DATABASE
# ------------------------------------------------------------------------------
# Aucun modèle : sqlite suffit pour contenttypes/auth.
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": env("DB_PATH", str(BASE_DIR / "db.sqlite3")),
    }
}

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# ------------------------------------------------------------------------------
# I18N / TZ
# ------------------------------------------------------------------------------
LANGUAGE_CODE = "fr-fr"
TIME_ZONE = env("TIME_ZONE", "UTC")
USE_I18N = True
USE_TZ = True

# ------------------------------------------------------------------------------
# STATIC
# ------------------------------------------------------------------------------
STATIC_URL = "/static/"
STATIC_ROOT = BASE_DIR / "staticfiles"
STORAGES = {
    "staticfiles": {"BACKEND": "whitenoise.storage.CompressedManifestStaticFilesStorage"},
}

# ------------------------------------------------------------------------------
# REST FRAMEWORK (DRF)
# ------------------------------------------------------------------------------
REST_FRAMEWORK = {
    "DEFAULT_AUTHENTICATION_CLASSES": (),
    "DEFAULT_PERMISSION_CLASSES": (
        "rest_framework.permissions.AllowAny",
    ),
    "DEFAULT_RENDERER_CLASSES": (
        "rest_framework.renderers.JSONRenderer",
    ),
    "DEFAULT_PARSER_CLASSES": (
        "rest_framework.parsers.JSONParser",
    ),
    "DEFAULT_SCHEMA_CLASS": "drf_spectacular.openapi.AutoSchema",
    "UNAUTHENTICATED_USER": None,
    "EXCEPTION_HANDLER": "rest_framework.views.exception_handler",
}

# Spectacular (OpenAPI)
SPECTACULAR_SETTINGS = {
    "TITLE": env("OPENAPI_TITLE", "CheckID API"),
    "DESCRIPTION": "Fusion multi-frames de pièces d'identité (qualité, code-barres, OCR, complétude, liveness).",
    "VERSION": env("OPENAPI_VERSION", "1.0.0"),
    "SERVE_INCLUDE_SCHEMA": False,
    "SCHEMA_PATH_PREFIX": r"/api/v1",
    "COMPONENT_SPLIT_REQUEST": True,
    "SWAGGER_UI_DIST": "SIDECAR",
    "SWAGGER_UI_FAVICON_HREF": "SIDECAR",
    "REDOC_DIST": "SIDECAR",
    "SERVE_PERMISSIONS": ["rest_framework.permissions.AllowAny"],
    "SERVE_AUTHENTICATION": [],
}

# ------------------------------------------------------------------------------
# CELERY
# ------------------------------------------------------------------------------
CELERY_BROKER_URL = env("REDIS_URL", "redis://127.0.0.1:6379/0")
CELERY_RESULT_BACKEND = CELERY_BROKER_URL
CELERY_TASK_ACKS_LATE = True
CELERY_TASK_TIME_LIMIT = 60 * 5
CELERY_TASK_SOFT_TIME_LIMIT = 60 * 2
CELERY_TASK_ROUTES = {
    "kyc.session.tasks.run_scan_task": {"queue": "scans"},
    "kyc.session.tasks.deliver_scan_result_task": {"queue": "callbacks"},
}

# ------------------------------------------------------------------------------
# UPLOAD POLICIES
# ------------------------------------------------------------------------------
DATA_UPLOAD_MAX_MEMORY_SIZE = 25 * 1024 * 1024  # 25MB (lots de frames)

# ------------------------------------------------------------------------------
# SCAN ENGINE
# ------------------------------------------------------------------------------
CHECKID_SCAN = {
    "DURATION_S": env("SCAN_DURATION_S", 5.0, float),
    "TICK_S": env("SCAN_TICK_S", 0.1, float),
    "RING_SIZE": env("SCAN_RING_SIZE", 10, int),
    "FEEDBACK_EVERY": 5,
    "COMPLETE_THRESHOLD": 85.0,
    "MAX_FRAMES_PER_REQUEST": env("SCAN_MAX_FRAMES", 300, int),
    "MAX_IMAGE_BYTES": 10 * 1024 * 1024,  # 10MB
}

CHECKID_LIVENESS = {
    "DURATION_S": env("LIVENESS_DURATION_S", 5.0, float),
    "EXPECTED_DETECTIONS": 50,
}

# Callbacks sortants (scan asynchrone)
CHECKID_CALLBACKS = {
    "SECRET": env("CALLBACK_SECRET", "change-me-callback"),
    "TIMEOUT_S": env("CALLBACK_TIMEOUT_S", 10, int),
    "MAX_RETRIES": env("CALLBACK_MAX_RETRIES", 5, int),
    "BACKOFF_S": env("CALLBACK_BACKOFF_S", 5, int),
}

# ------------------------------------------------------------------------------
# SECURITY
# ------------------------------------------------------------------------------
SECURE_PROXY_SSL_HEADER = ("HTTP_X_FORWARDED_PROTO", "https")
SECURE_CONTENT_TYPE_NOSNIFF = True
X_FRAME_OPTIONS = "DENY"
REFERRER_POLICY = "same-origin"

# ------------------------------------------------------------------------------
# LOGGING (JSON friendly)
# ------------------------------------------------------------------------------
LOG_LEVEL = env("LOG_LEVEL", "INFO")

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "json": {
            "()": "logging.Formatter",
            "format": '{"ts":"%(asctime)s","lvl":"%(levelname)s","name":"%(name)s","msg":"%(message)s","module":"%(module)s","line":%(lineno)d}',
        },
        "simple": {"format": "[%(asctime)s] %(levelname)s %(name)s: %(message)s"},
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "json" if env("LOG_JSON", "1") == "1" else "simple",
        },
    },
    "loggers": {
        "django": {"handlers": ["console"], "level": LOG_LEVEL, "propagate": False},
        "checkid": {"handlers": ["console"], "level": LOG_LEVEL, "propagate": False},
        "celery": {"handlers": ["console"], "level": LOG_LEVEL, "propagate": False},
    },
}

# ------------------------------------------------------------------------------
# API VERSIONING
# ------------------------------------------------------------------------------
API_PREFIX = "api"
API_VERSION = "v1"

# ------------------------------------------------------------------------------
# HEALTHCHECK
# ------------------------------------------------------------------------------
def HEALTH_INFO():
    return {
        "name": "CheckID",
        "version": SPECTACULAR_SETTINGS["VERSION"],
        "env": "prod" if not DEBUG else "dev",
    }

# ------------------------------------------------------------------------------
# TEMPLATES
# ------------------------------------------------------------------------------
TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.debug",
                "django.template.context_processors.request",
            ],
        },
    },
]
