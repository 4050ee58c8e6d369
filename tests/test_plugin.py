"""Unit tests for pushrm.plugin."""

from __future__ import annotations

import json
import unittest

from pushrm import plugin


class TestNormalizeArgv(unittest.TestCase):

    def test_standalone(self):
        self.assertEqual(plugin.normalize_argv(["a/b", "-s", "x"], {}), ["pushrm", "a/b", "-s", "x"])

    def test_standalone_no_args(self):
        self.assertEqual(plugin.normalize_argv([], {}), ["pushrm"])

    def test_docker_cli(self):
        env = {"DOCKER_CLI_PLUGIN_ORIGINAL_CLI_COMMAND": "/usr/bin/docker"}
        self.assertEqual(plugin.normalize_argv(["pushrm", "a/b"], env), ["pushrm", "a/b"])

    def test_metadata(self):
        self.assertEqual(
            plugin.normalize_argv(["docker-cli-plugin-metadata"], {}),
            ["docker-cli-plugin-metadata"],
        )


class TestMetadata(unittest.TestCase):

    def test_fields(self):
        data = plugin.metadata()
        self.assertEqual(
            set(data),
            {"SchemaVersion", "Vendor", "Version", "ShortDescription"},
        )
        self.assertEqual(data["SchemaVersion"], "0.1.0")

    def test_json_indented(self):
        text = plugin.metadata_json()
        self.assertEqual(json.loads(text), plugin.metadata())
        self.assertIn('\n    "SchemaVersion"', text)


if __name__ == "__main__":
    unittest.main()
