"""
Livraison du résultat d'un scan asynchrone : POST JSON signé HMAC-SHA256.
"""
import hashlib
import hmac
import json
import logging
import time
from dataclasses import dataclass
from typing import Optional, Tuple

import httpx
from django.conf import settings
from django.utils import timezone

from .conf import callback_conf

log = logging.getLogger("checkid.callbacks")

# Entêtes sortants normalisés
HDR_SIG = "X-CheckID-Signature"
HDR_TS = "X-CheckID-Timestamp"
HDR_EVT = "X-CheckID-Event"

EVENT_COMPLETED = "scan.completed"
EVENT_FAILED = "scan.failed"


def sign_payload(secret: bytes, event: str, body_bytes: bytes, ts_ms: Optional[int] = None) -> Tuple[str, str]:
    """
    Signature = hex(HMAC_SHA256(secret, f"{ts}\\n{event}\\n{body_sha256}"))
    Retourne (timestamp_ms_str, hex_signature)
    """
    if ts_ms is None:
        ts_ms = int(time.time() * 1000)
    body_sha = hashlib.sha256(body_bytes).hexdigest()
    to_sign = f"{ts_ms}\n{event}\n{body_sha}".encode("utf-8")
    sig = hmac.new(secret, to_sign, hashlib.sha256).hexdigest()
    return str(ts_ms), sig


def build_payload(event: str, scan_id: str, data: dict) -> dict:
    return {
        "id": f"cb_{int(time.time() * 1000)}",
        "event": event,
        "scan_id": scan_id,
        "data": data,
        "version": settings.SPECTACULAR_SETTINGS.get("VERSION", "1.0.0"),
        "sent_at": timezone.now().isoformat(),
    }


@dataclass(frozen=True)
class CallbackDelivery:
    url: str
    event: str
    attempt: int
    ok: bool
    status_code: Optional[int]
    error: str
    duration_ms: int


def send_callback(url: str, event: str, data: dict, *, scan_id: str, attempt: int = 1) -> CallbackDelivery:
    """Envoi synchrone (utilisé par la tâche Celery). N'échoue jamais : le statut est dans le retour."""
    conf = callback_conf()
    payload = build_payload(event, scan_id, data)
    body = json.dumps(payload, separators=(",", ":"), ensure_ascii=False).encode("utf-8")
    ts_ms, sig = sign_payload(str(conf["SECRET"]).encode("utf-8"), event, body)

    headers = {
        "Content-Type": "application/json",
        HDR_EVT: event,
        HDR_TS: ts_ms,
        HDR_SIG: sig,
        "User-Agent": "CheckID-Callback/1.0",
    }

    t0 = time.perf_counter()
    status_code = None
    ok = False
    err = ""
    try:
        with httpx.Client(timeout=conf["TIMEOUT_S"], verify=True) as client:
            resp = client.post(url, headers=headers, content=body)
            status_code = resp.status_code
            ok = 200 <= resp.status_code < 300
            if not ok:
                err = f"HTTP {resp.status_code}: {resp.text[:500]}"
    except httpx.HTTPError as e:
        err = str(e)
    duration_ms = int((time.perf_counter() - t0) * 1000)

    if ok:
        log.info("callback delivered scan=%s event=%s attempt=%d", scan_id, event, attempt)
    else:
        log.warning("callback failed scan=%s event=%s attempt=%d: %s", scan_id, event, attempt, err)
    return CallbackDelivery(
        url=url, event=event, attempt=attempt, ok=ok,
        status_code=status_code, error=err, duration_ms=duration_ms,
    )
