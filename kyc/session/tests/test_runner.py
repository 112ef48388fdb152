import queue

from django.test import SimpleTestCase, override_settings

from kyc.core.frames import Frame
from kyc.session.services.models import AggregateResult
from kyc.session.services.provider import ScanNotStarted
from kyc.session.services.provider_mock import ReplayCaptureSource, UnavailableCaptureSource
from kyc.session.services.runner import FrameRing, ScanRunner, progress_fraction, run_batch
from kyc.session.services.session import ScanSession
from kyc.validation.services.validator import ProgressSnapshot

from .test_session import back_frame


class FrameRingTest(SimpleTestCase):
    def test_latest_wins_and_rest_dropped(self):
        ring = FrameRing(size=10)
        for i in range(3):
            ring.push(Frame(index=i))
        self.assertEqual(ring.take_latest().index, 2)
        self.assertEqual(ring.dropped, 2)
        self.assertIsNone(ring.take_latest())

    def test_bounded(self):
        ring = FrameRing(size=4)
        for i in range(20):
            ring.push(Frame(index=i))
        self.assertEqual(len(ring), 4)


class ProgressFractionTest(SimpleTestCase):
    def test_fraction(self):
        self.assertEqual(progress_fraction(0.0, 5.0), 0.0)
        self.assertAlmostEqual(progress_fraction(2.5, 5.0), 0.5)
        self.assertEqual(progress_fraction(9.0, 5.0), 1.0)
        self.assertEqual(progress_fraction(1.0, 0.0), 1.0)


class ScanRunnerTest(SimpleTestCase):
    def test_deadline(self):
        source = ReplayCaptureSource([Frame(index=0)], interval_s=0.005, loop=True)
        runner = ScanRunner(ScanSession("front"), source, duration_s=0.2, tick_s=0.02)
        runner.start()
        res = runner.wait(timeout=5)
        self.assertIsNotNone(res)
        self.assertFalse(res.is_complete)
        self.assertEqual(res.percentage, 0.0)
        self.assertLessEqual(res.elapsed_s, 0.2)
        self.assertLessEqual(res.frame_count, source.produced)
        self.assertEqual(runner.progress(), 1.0)

    def test_stops_when_complete(self):
        updates = queue.Queue()
        source = ReplayCaptureSource([back_frame(0)], interval_s=0.005, loop=True)
        runner = ScanRunner(ScanSession("back"), source, duration_s=5.0, tick_s=0.02, updates=updates)
        runner.start()
        res = runner.wait(timeout=5)
        self.assertTrue(res.is_complete)
        self.assertEqual(res.frame_count, 1)
        self.assertLess(res.elapsed_s, 5.0)

        items = []
        while not updates.empty():
            items.append(updates.get_nowait())
        self.assertIsInstance(items[0], ProgressSnapshot)
        self.assertIsInstance(items[-1], AggregateResult)

    def test_explicit_stop_finalizes_once(self):
        source = ReplayCaptureSource([Frame(index=0)], interval_s=0.005, loop=True)
        session = ScanSession("front")
        runner = ScanRunner(session, source, duration_s=30.0, tick_s=0.02)
        runner.start()
        first = runner.stop()
        self.assertIs(runner.stop(), first)
        self.assertIs(session.finalize(), first)
        self.assertTrue(session.finalized)

    def test_non_positive_duration_stops_immediately(self):
        source = ReplayCaptureSource([back_frame(0)])
        runner = ScanRunner(ScanSession("back"), source, duration_s=0, tick_s=0.02)
        runner.start()
        res = runner.result
        self.assertIsNotNone(res)
        self.assertEqual(res.frame_count, 0)
        self.assertEqual(res.tier, "Incomplete")
        self.assertEqual(res.fields, {})
        self.assertEqual(runner.progress(), 1.0)

    def test_capture_unavailable(self):
        session = ScanSession("back")
        runner = ScanRunner(session, UnavailableCaptureSource(), duration_s=1.0)
        with self.assertLogs("checkid.scan", level="WARNING"):
            with self.assertRaises(ScanNotStarted):
                runner.start()
        self.assertIsNone(runner.result)
        self.assertEqual(session.frame_count, 0)
        self.assertFalse(session.finalized)


class RunBatchTest(SimpleTestCase):
    def test_window_limits_frames(self):
        frames = [Frame(index=i) for i in range(10)]
        res = run_batch(frames, "front", duration_s=0.1, tick_s=0.03)
        self.assertEqual(res.frame_count, 4)
        self.assertAlmostEqual(res.elapsed_s, 0.09)

    def test_stops_when_complete(self):
        res = run_batch([back_frame(i) for i in range(5)], "back", duration_s=5.0, tick_s=0.1)
        self.assertEqual(res.frame_count, 1)
        self.assertTrue(res.is_complete)

    def test_keeps_going_when_asked(self):
        res = run_batch([back_frame(i) for i in range(5)], "back",
                        duration_s=5.0, tick_s=0.1, stop_when_complete=False)
        self.assertEqual(res.frame_count, 5)

    def test_zero_duration(self):
        res = run_batch([back_frame(0)], "back", duration_s=0, tick_s=0.1)
        self.assertEqual(res.frame_count, 0)
        self.assertEqual(res.percentage, 0.0)

    @override_settings(CHECKID_SCAN={"MAX_FRAMES_PER_REQUEST": 2})
    def test_too_many_frames(self):
        with self.assertRaisesMessage(ValueError, "TOO_MANY_FRAMES"):
            run_batch([Frame(index=i) for i in range(3)], "front")
