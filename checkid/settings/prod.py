from .base import *

DEBUG = False

# À configurer explicitement en prod
ALLOWED_HOSTS = [h for h in ALLOWED_HOSTS if h]

SECURE_SSL_REDIRECT = True

# HSTS (ajuster selon politique)
SECURE_HSTS_SECONDS = 31536000
SECURE_HSTS_INCLUDE_SUBDOMAINS = True
SECURE_HSTS_PRELOAD = True

SECURE_REFERRER_POLICY = "same-origin"
SECURE_CONTENT_TYPE_NOSNIFF = True

if SECRET_KEY == "change-me" or CHECKID_CALLBACKS["SECRET"] == "change-me-callback":
    raise RuntimeError("SECRET_KEY et CALLBACK_SECRET doivent être définis en prod")

# Logging JSON forcé
LOGGING["handlers"]["console"]["formatter"] = "json"
