import os

from celery import Celery

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "checkid.settings.dev")

app = Celery("checkid")
app.config_from_object("django.conf:settings", namespace="CELERY")
app.autodiscover_tasks(["kyc.session"])
