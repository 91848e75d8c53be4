import json
import logging
import sys
import threading
import unittest
from pathlib import Path
from unittest.mock import patch

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "renderer"))
sys.path.insert(0, str(ROOT / "packages" / "core"))

from frostglass_core import logging_setup
from frostglass_core.session import RenderSession
from frostglass_renderer.models import RenderParams


class _ListHandler(logging.Handler):
    def __init__(self):
        super().__init__()
        self.records = []

    def emit(self, record):
        self.records.append(record)


class CrashContextTests(unittest.TestCase):
    def setUp(self):
        self._hooks = (sys.excepthook, threading.excepthook)
        self.handler = _ListHandler()
        logging_setup.get_logger().addHandler(self.handler)

    def tearDown(self):
        sys.excepthook, threading.excepthook = self._hooks
        logging_setup.get_logger().removeHandler(self.handler)
        logging_setup.set_render_context()

    def test_session_render_records_context(self):
        session = RenderSession(RenderParams(strip_count=2, noise_scale=0.0))
        session.tick((20, 10))

        context = logging_setup.render_context()
        self.assertEqual(context["params"]["strip_count"], 2)
        self.assertEqual(context["viewport"], [20, 10])

    def test_uncaught_exception_carries_render_context(self):
        logging_setup.set_render_context(params={"strip_count": 7}, viewport=[64, 48])
        with patch.object(logging_setup, "_install_fault_handler"):
            logging_setup.install_crash_hooks()

        try:
            raise RuntimeError("boom")
        except RuntimeError:
            sys.excepthook(*sys.exc_info())

        record = self.handler.records[-1]
        self.assertEqual(record.event, "uncaught_exception")
        self.assertEqual(record.render_context["params"]["strip_count"], 7)

        payload = json.loads(logging_setup.JsonFormatter().format(record))
        self.assertEqual(payload["render_context"]["viewport"], [64, 48])
        self.assertEqual(payload["crash_id"], record.crash_id)


if __name__ == "__main__":
    unittest.main()
