#!/usr/bin/env python3
import json
import os
import tempfile
import unittest

from alertbot.alert import Alert
from alertbot.subscriptions import (
    EMPTY_SUBSCRIPTIONS,
    Subscription,
    SubscriptionConfigError,
    load_subscriptions,
    parse_subscriptions,
    resolve_subscribers,
)


class TestResolveSubscribers(unittest.TestCase):
    def setUp(self):
        self.table = parse_subscriptions({"nginx": {"All": ["alice", "bob"], "Critical": ["carol"]}})

    def test_critical_adds_critical_list_first(self):
        a = Alert(raw_program="nginx", raw_severity="critical")
        self.assertEqual(resolve_subscribers(a, self.table), ["carol", "alice", "bob"])

    def test_warning_only_all_list(self):
        a = Alert(raw_program="nginx", raw_severity="warning")
        self.assertEqual(resolve_subscribers(a, self.table), ["alice", "bob"])

    def test_critical_is_case_insensitive(self):
        for severity in ("CRITICAL", "Critical", "critical", "cRiTiCaL"):
            with self.subTest(severity=severity):
                a = Alert(raw_program="nginx", raw_severity=severity)
                self.assertEqual(resolve_subscribers(a, self.table), ["carol", "alice", "bob"])

    def test_empty_severity_is_not_critical(self):
        a = Alert(raw_program="nginx")
        self.assertEqual(resolve_subscribers(a, self.table), ["alice", "bob"])

    def test_unknown_program_yields_nothing(self):
        a = Alert(raw_program="postgres", raw_severity="critical")
        self.assertEqual(resolve_subscribers(a, self.table), [])

    def test_none_table_yields_nothing(self):
        a = Alert(raw_program="nginx", raw_severity="critical")
        self.assertEqual(resolve_subscribers(a, None), [])
        self.assertEqual(resolve_subscribers(a, EMPTY_SUBSCRIPTIONS), [])

    def test_legacy_program_used_for_lookup(self):
        a = Alert(syslog_program="nginx", syslog_severity="Critical")
        self.assertEqual(resolve_subscribers(a, self.table), ["carol", "alice", "bob"])

    def test_duplicates_are_kept(self):
        table = parse_subscriptions({"df": {"All": ["x", "y", "x"], "Critical": ["x"]}})
        a = Alert(raw_program="df", raw_severity="critical")
        self.assertEqual(resolve_subscribers(a, table), ["x", "x", "y", "x"])


class TestParseSubscriptions(unittest.TestCase):
    def test_missing_or_null_lists_are_empty(self):
        table = parse_subscriptions({"a": {}, "b": {"All": None, "Critical": ["z"]}})
        self.assertEqual(table["a"], Subscription())
        self.assertEqual(table["b"], Subscription(all=(), critical=("z",)))

    def test_list_keys_are_case_insensitive(self):
        table = parse_subscriptions({"df": {"all": ["x"], "CRITICAL": ["y"]}})
        self.assertEqual(table["df"], Subscription(all=("x",), critical=("y",)))
        a = Alert(raw_program="df", raw_severity="critical")
        self.assertEqual(resolve_subscribers(a, table), ["y", "x"])

    def test_last_list_key_wins(self):
        table = parse_subscriptions({"df": {"All": ["x"], "all": ["z"]}})
        self.assertEqual(table["df"].all, ("z",))

    def test_table_is_read_only(self):
        table = parse_subscriptions({"a": {"All": ["x"]}})
        with self.assertRaises(TypeError):
            table["b"] = Subscription()

    def test_invalid_structures(self):
        for data in (
            ["df"],
            {"df": ["x"]},
            {"df": {"All": "x"}},
            {"df": {"Critical": [1, 2]}},
        ):
            with self.subTest(data=data):
                with self.assertRaises(SubscriptionConfigError):
                    parse_subscriptions(data)


class TestLoadSubscriptions(unittest.TestCase):
    def _write(self, content):
        with tempfile.NamedTemporaryFile(mode='w', suffix='.json', delete=False, encoding='utf-8') as f:
            f.write(content)
        self.addCleanup(os.remove, f.name)
        return f.name

    def test_no_path_returns_empty_table(self):
        self.assertEqual(len(load_subscriptions("")), 0)
        self.assertEqual(len(load_subscriptions(None)), 0)

    def test_loads_file(self):
        path = self._write(json.dumps({"df": {"All": ["x"], "Critical": ["y"]}}))
        table = load_subscriptions(path)
        self.assertEqual(table["df"], Subscription(all=("x",), critical=("y",)))

    def test_missing_file_is_fatal(self):
        with self.assertRaises(SubscriptionConfigError):
            load_subscriptions("/nonexistent/alertbot-subscriptions.json")

    def test_invalid_json_is_fatal(self):
        path = self._write("{not json")
        with self.assertRaises(SubscriptionConfigError):
            load_subscriptions(path)


if __name__ == '__main__':
    unittest.main()
