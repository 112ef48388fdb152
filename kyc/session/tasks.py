import logging
import math

from celery import shared_task

from .services.callback import send_callback, EVENT_COMPLETED, EVENT_FAILED
from .services.conf import callback_conf
from .services.payload import frames_from_payload
from .services.runner import run_batch

log = logging.getLogger("checkid.scan")


@shared_task(bind=True, max_retries=0)
def run_scan_task(self, scan_id: str, side: str, frames: list, callback_url: str, stop_when_complete: bool = True):
    """
    Rejoue la session puis programme la livraison du résultat.
    Une entrée invalide (ValueError) est livrée comme scan.failed.
    """
    try:
        result = run_batch(frames_from_payload(frames), side, stop_when_complete=stop_when_complete)
    except ValueError as e:
        log.warning("scan %s failed: %s", scan_id, e)
        deliver_scan_result_task.delay(
            url=callback_url, event=EVENT_FAILED, data={"error": {"code": str(e)}}, scan_id=scan_id, attempt=1,
        )
        return None
    data = result.as_dict()
    deliver_scan_result_task.delay(url=callback_url, event=EVENT_COMPLETED, data=data, scan_id=scan_id, attempt=1)
    return data


@shared_task(bind=True, max_retries=10, default_retry_delay=5)
def deliver_scan_result_task(self, url: str, event: str, data: dict, scan_id: str, attempt: int = 1):
    """
    Tâche Celery avec retry exponentiel.
    """
    delivery = send_callback(url, event, data, scan_id=scan_id, attempt=attempt)
    if delivery.ok:
        return True

    conf = callback_conf()
    max_r = conf["MAX_RETRIES"] or 0
    if attempt >= max_r:
        log.warning("callback abandoned scan=%s after %d attempts", scan_id, attempt)
        return False

    backoff = conf["BACKOFF_S"] or 0
    next_delay = int(backoff * math.pow(2, attempt - 1))  # 5,10,20,40...
    raise self.retry(
        args=(),
        countdown=next_delay,
        kwargs={"url": url, "event": event, "data": data, "scan_id": scan_id, "attempt": attempt + 1},
    )
