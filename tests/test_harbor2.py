"""Unit tests for pushrm.providers.harbor2."""

from __future__ import annotations

import base64
import json
import unittest

import httpx
from conftest import Recorder

from pushrm.credentials import Credentials
from pushrm.errors import RemoteRejectionError
from pushrm.providers.harbor2 import Harbor2
from pushrm.reference import parse

README = "# harbor readme\n"
REF = parse("harbor.example.com/project/app:1.0")


class TestPushrm(unittest.TestCase):
    """Tests for Harbor2.pushrm()."""

    def test_success(self):
        rec = Recorder(httpx.Response(200))
        Harbor2(client=rec.client()).pushrm(REF, Credentials("bob", "pw"), README)
        req = rec.requests[0]
        self.assertEqual(req.method, "PUT")
        self.assertEqual(
            str(req.url),
            "https://harbor.example.com/api/v2.0/projects/project/repositories/app",
        )
        expected = base64.b64encode(b"bob:pw").decode()
        self.assertEqual(req.headers["Authorization"], f"Basic {expected}")
        self.assertEqual(json.loads(req.content), {"description": README})

    def test_short_description_not_sent(self):
        rec = Recorder(httpx.Response(200))
        Harbor2(client=rec.client()).pushrm(REF, Credentials("bob", "pw"), README, "short")
        self.assertEqual(json.loads(rec.requests[0].content), {"description": README})

    def test_first_error_extracted(self):
        body = {"errors": [
            {"code": "UNAUTHORIZED", "message": "unauthorized"},
            {"code": "OTHER", "message": "ignored"},
        ]}
        rec = Recorder(httpx.Response(401, json=body))
        with self.assertRaises(RemoteRejectionError) as ctx:
            Harbor2(client=rec.client()).pushrm(REF, Credentials("bob", "bad"), README)
        self.assertEqual(ctx.exception.detail, "UNAUTHORIZED - unauthorized")
        self.assertNotIn("ignored", str(ctx.exception))

    def test_forbidden_hint(self):
        rec = Recorder(httpx.Response(403, json={"errors": [{"code": "FORBIDDEN", "message": "forbidden"}]}))
        with self.assertRaises(RemoteRejectionError) as ctx:
            Harbor2(client=rec.client()).pushrm(REF, Credentials("bob", "pw"), README)
        self.assertIn("docker login", str(ctx.exception))

    def test_unexpected_error_body(self):
        rec = Recorder(httpx.Response(500, json={"errors": "boom"}))
        with self.assertRaises(RemoteRejectionError) as ctx:
            Harbor2(client=rec.client()).pushrm(REF, Credentials("bob", "pw"), README)
        self.assertIsNone(ctx.exception.detail)
        self.assertIn("500", str(ctx.exception))


if __name__ == "__main__":
    unittest.main()
