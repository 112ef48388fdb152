import base64
import hashlib
import hmac
import json
from unittest import mock

import httpx
from django.test import SimpleTestCase, Client

from kyc.session.services.callback import (
    CallbackDelivery, HDR_SIG, HDR_TS, HDR_EVT, send_callback, sign_payload,
)
from kyc.session.tasks import run_scan_task, deliver_scan_result_task

from .test_session import ANSI_FULL, FRONT_TEXT

BACK_BODY = {
    "side": "back",
    "frames": [
        {"barcode_candidates": [{"payload": "noise", "symbology": "QR", "confidence": 0.3}]},
        {"barcode_candidates": [{"payload": ANSI_FULL, "symbology": "PDF417", "confidence": 0.9}]},
        {"barcode_candidates": [{"payload": "^DCSROE", "symbology": "PDF417", "confidence": 1.0}]},
    ],
}


def delivery(ok=True):
    return CallbackDelivery(url="https://cb.example.com", event="scan.completed", attempt=1,
                            ok=ok, status_code=200 if ok else 500, error="", duration_ms=1)


class ScanApiTest(SimpleTestCase):
    def setUp(self):
        self.client = Client()

    def test_back_scan(self):
        resp = self.client.post("/api/v1/document/scan", data=BACK_BODY, content_type="application/json")
        self.assertEqual(resp.status_code, 200, resp.content)
        data = resp.json()
        self.assertTrue(data["is_complete"])
        self.assertEqual(data["frame_count"], 2)
        self.assertEqual(data["fields"]["Name"], "Jane Smith")
        self.assertEqual(data["fields"]["Last Name"], "Smith")
        self.assertEqual(data["tier"], "Excellent")
        self.assertEqual([f["barcode_detected"] for f in data["frames"]], [False, True])

    def test_front_scan(self):
        body = {"side": "front", "frames": [{"text_candidates": [{"text": FRONT_TEXT, "confidence": 0.8}]}]}
        resp = self.client.post("/api/v1/document/scan", data=body, content_type="application/json")
        self.assertEqual(resp.status_code, 200, resp.content)
        data = resp.json()
        self.assertEqual(data["fields"]["Driver License Number"], "A1234567")
        self.assertEqual(data["missing"], [])

    def test_empty_scan(self):
        resp = self.client.post("/api/v1/document/scan", data={"side": "front", "frames": []},
                                content_type="application/json")
        self.assertEqual(resp.status_code, 200, resp.content)
        self.assertEqual(resp.json()["tier"], "Incomplete")
        self.assertEqual(resp.json()["percentage"], 0.0)

    def test_invalid_side(self):
        resp = self.client.post("/api/v1/document/scan", data={"side": "top", "frames": []},
                                content_type="application/json")
        self.assertEqual(resp.status_code, 400)

    def test_invalid_pixels(self):
        body = {"side": "back", "frames": [{"pixels": {"pixels_base64": "@@@", "width": 4, "height": 4}}]}
        resp = self.client.post("/api/v1/document/scan", data=body, content_type="application/json")
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["error"]["code"], "INVALID_IMAGE_BASE64")

    def test_pixels_feed_quality(self):
        px = bytes((100, 150, 50, 255)) * 400
        body = {"side": "back", "frames": [{"pixels": {
            "pixels_base64": base64.b64encode(px).decode(), "width": 20, "height": 20,
        }}]}
        resp = self.client.post("/api/v1/document/scan", data=body, content_type="application/json")
        self.assertEqual(resp.status_code, 200, resp.content)
        self.assertEqual(resp.json()["frames"][0]["quality"], "Good")
        self.assertAlmostEqual(resp.json()["overall_quality"], 0.8)

    def test_async_queues_task(self):
        body = {**BACK_BODY, "callback_url": "https://client.example.com/hooks/scan"}
        with mock.patch("kyc.session.views.scan.run_scan_task.delay") as delay:
            resp = self.client.post("/api/v1/document/scan/async", data=body, content_type="application/json")
        self.assertEqual(resp.status_code, 202, resp.content)
        scan_id = resp.json()["scan_id"]
        self.assertTrue(scan_id.startswith("scn_"))
        kwargs = delay.call_args.kwargs
        self.assertEqual(kwargs["scan_id"], scan_id)
        self.assertEqual(kwargs["side"], "back")
        self.assertEqual(len(kwargs["frames"]), 3)

    def test_async_requires_callback(self):
        resp = self.client.post("/api/v1/document/scan/async", data=BACK_BODY, content_type="application/json")
        self.assertEqual(resp.status_code, 400)


class ScanTaskTest(SimpleTestCase):
    def test_result_delivered(self):
        with mock.patch("kyc.session.tasks.send_callback", return_value=delivery()) as send:
            data = run_scan_task.apply(kwargs={
                "scan_id": "scn_1", "side": "back", "frames": BACK_BODY["frames"],
                "callback_url": "https://cb.example.com",
            }).get()
        self.assertTrue(data["is_complete"])
        args, kwargs = send.call_args
        self.assertEqual(args[0], "https://cb.example.com")
        self.assertEqual(args[1], "scan.completed")
        self.assertEqual(kwargs["scan_id"], "scn_1")

    def test_invalid_input_delivered_as_failure(self):
        frames = [{"pixels": {"pixels_base64": "@@@", "width": 4, "height": 4}}]
        with mock.patch("kyc.session.tasks.send_callback", return_value=delivery()) as send:
            run_scan_task.apply(kwargs={
                "scan_id": "scn_2", "side": "back", "frames": frames,
                "callback_url": "https://cb.example.com",
            }).get()
        args, _ = send.call_args
        self.assertEqual(args[1], "scan.failed")
        self.assertEqual(args[2], {"error": {"code": "INVALID_IMAGE_BASE64"}})

    def test_delivery_gives_up_after_max_retries(self):
        with mock.patch("kyc.session.tasks.send_callback", return_value=delivery(ok=False)):
            ok = deliver_scan_result_task.apply(kwargs={
                "url": "https://cb.example.com", "event": "scan.completed",
                "data": {}, "scan_id": "scn_3", "attempt": 2,
            }).get()
        self.assertFalse(ok)


class CallbackTest(SimpleTestCase):
    def test_signature(self):
        ts, sig = sign_payload(b"k", "scan.completed", b"{}", ts_ms=1000)
        expected = hmac.new(
            b"k", f"1000\nscan.completed\n{hashlib.sha256(b'{}').hexdigest()}".encode(), hashlib.sha256,
        ).hexdigest()
        self.assertEqual(ts, "1000")
        self.assertEqual(sig, expected)

    def test_signed_post(self):
        with mock.patch.object(httpx.Client, "post", return_value=httpx.Response(204)) as post:
            d = send_callback("https://cb.example.com", "scan.completed", {"x": 1}, scan_id="scn_4")
        self.assertTrue(d.ok)
        self.assertEqual(d.status_code, 204)
        _, kwargs = post.call_args
        headers, body = kwargs["headers"], kwargs["content"]
        self.assertEqual(headers[HDR_EVT], "scan.completed")
        _, sig = sign_payload(b"test-secret", "scan.completed", body, ts_ms=int(headers[HDR_TS]))
        self.assertEqual(headers[HDR_SIG], sig)
        self.assertEqual(json.loads(body)["scan_id"], "scn_4")

    def test_transport_error(self):
        with mock.patch.object(httpx.Client, "post", side_effect=httpx.ConnectError("down")):
            with self.assertLogs("checkid.callbacks", level="WARNING"):
                d = send_callback("https://cb.example.com", "scan.completed", {}, scan_id="scn_5")
        self.assertFalse(d.ok)
        self.assertEqual(d.error, "down")
        self.assertIsNone(d.status_code)
