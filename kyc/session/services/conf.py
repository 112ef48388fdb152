from django.conf import settings

SCAN_DEFAULTS = {
    "DURATION_S": 5.0,
    "TICK_S": 0.1,
    "RING_SIZE": 10,
    "FEEDBACK_EVERY": 5,
    "COMPLETE_THRESHOLD": 85.0,
    "MAX_FRAMES_PER_REQUEST": 300,
}

CALLBACK_DEFAULTS = {
    "SECRET": "",
    "TIMEOUT_S": 10,
    "MAX_RETRIES": 5,
    "BACKOFF_S": 5,
}


def scan_conf() -> dict:
    return {**SCAN_DEFAULTS, **getattr(settings, "CHECKID_SCAN", {})}


def callback_conf() -> dict:
    return {**CALLBACK_DEFAULTS, **getattr(settings, "CHECKID_CALLBACKS", {})}
