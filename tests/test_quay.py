"""Unit tests for pushrm.providers.quay."""

from __future__ import annotations

import io
import json
import os
import unittest
from unittest.mock import patch

import httpx
from conftest import Recorder, make_config

from pushrm import log
from pushrm.credentials import Credentials
from pushrm.errors import NoApikeyFound, RemoteRejectionError
from pushrm.providers.quay import Quay
from pushrm.reference import parse

README = "# quay readme\n"
REF = parse("quay.io/org/repo:latest")


class TestPushrm(unittest.TestCase):
    """Tests for Quay.pushrm()."""

    def test_success_with_scoped_env_key(self):
        rec = Recorder(httpx.Response(200, json={"success": True}))
        with patch.dict(os.environ, {"APIKEY__QUAY_IO": "abc123"}, clear=True):
            Quay(config=make_config(), client=rec.client()).pushrm(REF, Credentials(), README)
        req = rec.requests[0]
        self.assertEqual(req.method, "PUT")
        self.assertEqual(str(req.url), "https://quay.io/api/v1/repository/org/repo")
        self.assertEqual(req.headers["Authorization"], "Bearer abc123")
        self.assertEqual(json.loads(req.content), {"description": README})

    def test_key_from_config(self):
        rec = Recorder(httpx.Response(200, json={}))
        ref = parse("quay.example.com/org/repo")
        cfg = make_config(apikeys={"quay.example.com": "cfgkey"})
        with patch.dict(os.environ, {}, clear=True):
            Quay(config=cfg, client=rec.client()).pushrm(ref, Credentials(), README)
        self.assertEqual(rec.requests[0].headers["Authorization"], "Bearer cfgkey")

    def test_key_always_resolved_by_provider(self):
        rec = Recorder(httpx.Response(200, json={}))
        creds = Credentials("alice", "pw", "passed-in")
        with patch.dict(os.environ, {"DOCKER_APIKEY": "envkey"}, clear=True):
            Quay(config=make_config(), client=rec.client()).pushrm(REF, creds, README)
        self.assertEqual(rec.requests[0].headers["Authorization"], "Bearer envkey")

    def test_no_key(self):
        rec = Recorder()
        with patch.dict(os.environ, {}, clear=True):
            with self.assertRaises(NoApikeyFound):
                Quay(config=make_config(), client=rec.client()).pushrm(REF, Credentials(), README)
        self.assertEqual(rec.requests, [])

    def test_short_description_is_a_warning(self):
        rec = Recorder(httpx.Response(200, json={}))
        buf = io.StringIO()
        with patch.dict(os.environ, {"DOCKER_APIKEY": "k"}, clear=True), patch("sys.stderr", buf):
            Quay(client=rec.client()).pushrm(REF, Credentials(), README, "short text")
        self.assertIn("Short description not supported", buf.getvalue())
        self.assertEqual(json.loads(rec.requests[0].content), {"description": README})

    def test_error_message_extracted(self):
        rec = Recorder(httpx.Response(400, json={"error_message": "Invalid description"}))
        with patch.dict(os.environ, {"DOCKER_APIKEY": "k"}, clear=True):
            with self.assertRaises(RemoteRejectionError) as ctx:
                Quay(client=rec.client()).pushrm(REF, Credentials(), README)
        self.assertIn('Server responded: "Invalid description"', str(ctx.exception))
        self.assertEqual(ctx.exception.status, 400)

    def test_forbidden_hint(self):
        rec = Recorder(httpx.Response(403, json={"error_message": "Unauthorized"}))
        with patch.dict(os.environ, {"DOCKER_APIKEY": "k"}, clear=True):
            with self.assertRaises(RemoteRejectionError) as ctx:
                Quay(client=rec.client()).pushrm(REF, Credentials(), README)
        self.assertIn("docker login", str(ctx.exception))


class TestLogMasking(unittest.TestCase):

    def setUp(self):
        log.set_debug(True)

    def tearDown(self):
        log.set_debug(False)

    def test_apikey_not_logged(self):
        rec = Recorder(httpx.Response(200, json={}))
        buf = io.StringIO()
        with patch.dict(os.environ, {"DOCKER_APIKEY": "topsecretkey"}, clear=True), patch("sys.stderr", buf):
            Quay(client=rec.client()).pushrm(REF, Credentials(), README)
        self.assertIn("apikey: ********", buf.getvalue())
        self.assertNotIn("topsecretkey", buf.getvalue())


if __name__ == "__main__":
    unittest.main()
