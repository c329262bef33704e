"""Tests for substring-based role detection."""

import pytest

from container_split.classifier import Classifier
from container_split.config import DEFAULT_RULES, ClassificationRule


class TestDefaultTable:
    @pytest.mark.parametrize("text,expected", [
        ("I0101 Starting controllers on 0.0.0.0:8444", "controllers"),
        ('time="x" level=info msg="start registry" distribution_version=v2.6.2', "docker-registry"),
        ("I0101 plugins.go:84] Registered admission plugin \"NamespaceLifecycle\"", "api-server"),
        ("I0101 router.go:12] Starting template router (v3.11)", "router"),
        ("etcdserver: setting up the initial cluster version to 3.2", "etcd"),
    ])
    def test_known_patterns(self, text, expected):
        assert Classifier().classify(text) == expected

    def test_no_match(self):
        assert Classifier().classify("nothing interesting here\n") is None

    def test_empty_text(self):
        assert Classifier().classify("") is None

    def test_case_sensitive(self):
        assert Classifier().classify("starting template router") is None

    def test_table_order(self):
        labels = [rule.label for rule in DEFAULT_RULES]
        assert labels == ["controllers", "docker-registry", "api-server", "router", "etcd"]


class TestPrecedence:
    def test_first_rule_wins_within_a_line(self):
        text = "Starting template router; Registered admission plugin"
        assert Classifier().classify(text) == "api-server"

    def test_custom_order(self):
        rules = [
            ClassificationRule("router", "b"),
            ClassificationRule("Starting template router", "a"),
        ]
        assert Classifier(rules).classify("Starting template router") == "b"

    def test_empty_table(self):
        assert Classifier([]).classify("Starting template router") is None

    def test_rules_from_generator_reusable(self):
        classifier = Classifier(r for r in [ClassificationRule("x", "y")])
        assert classifier.classify("x") == "y"
        assert classifier.classify("xx") == "y"
