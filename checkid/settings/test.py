from .base import *

DEBUG = False

DATABASES = {
    "default": {"ENGINE": "django.db.backends.sqlite3", "NAME": ":memory:"}
}

STORAGES = {
    "staticfiles": {"BACKEND": "django.contrib.staticfiles.storage.StaticFilesStorage"},
}

# Celery synchrone en test
CELERY_TASK_ALWAYS_EAGER = True
CELERY_TASK_EAGER_PROPAGATES = True
CELERY_BROKER_URL = "memory://"
CELERY_RESULT_BACKEND = "cache+memory://"

# Fenêtre de scan courte pour les tests du runner
CHECKID_SCAN = {**CHECKID_SCAN, "DURATION_S": 0.5, "TICK_S": 0.02}

CHECKID_CALLBACKS = {**CHECKID_CALLBACKS, "SECRET": "test-secret", "MAX_RETRIES": 2, "BACKOFF_S": 0}

LOGGING["loggers"]["checkid"]["level"] = "WARNING"
