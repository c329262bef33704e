"""Builders for input lines shared by the tests."""

import json


def marker(name: str) -> str:
    """A boundary line as written by the log aggregator for container *name*."""
    return f"==> /var/lib/docker/containers/{name}/{name}-json.log <=="


def payload(text: str) -> str:
    return json.dumps({"log": text})
