from __future__ import annotations

import pytest

from axiom.config import load_config
from axiom.store import Store, record_actions


def test_load_config(tmp_path):
    path = tmp_path / "actions.yaml"
    path.write_text(
        "\n".join(
            [
                "version: 2",
                "transport:",
                "  timeout_s: 1.5",
                "  headers:",
                "    User-Agent: axiom",
                "metrics_port: 9200",
                "actions:",
                "  - kind: FETCH",
                "    directive:",
                "      log: true",
                "      request: {url: 'http://svc/a'}",
                "    metadata: {origin: test}",
            ]
        )
    )
    config = load_config(path)
    assert config.version == 2
    assert config.pipeline.timeout_s == 1.5
    assert config.pipeline.headers == {"User-Agent": "axiom"}
    assert config.metrics_port == 9200
    (action,) = config.actions
    assert action.kind == "FETCH"
    assert action.directive == {"log": True, "request": {"url": "http://svc/a"}}
    assert action.metadata == {"origin": "test"}


def test_empty_config_uses_defaults(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("")
    config = load_config(path)
    assert config.version == 1
    assert config.pipeline.timeout_s == 10.0
    assert config.actions == []
    assert config.metrics_port is None


@pytest.mark.parametrize(
    "body",
    [
        "actions:\n  - payload: 1\n",
        "actions:\n  - kind: A\n    directive: [1]\n",
        "transport: 5\n",
        "transport:\n  headers: [a]\n",
    ],
)
def test_invalid_config_rejected(tmp_path, body):
    path = tmp_path / "bad.yaml"
    path.write_text(body)
    with pytest.raises(ValueError):
        load_config(path)


def test_store_runs_middleware_in_order():
    seen = []

    def tagging(name):
        def middleware(store):
            def bind(forward):
                def handle(action):
                    seen.append(name)
                    return forward(action)

                return handle

            return bind

        return middleware

    store = Store(record_actions, state=[], middleware=[tagging("outer"), tagging("inner")])
    notified = []
    unsubscribe = store.subscribe(lambda: notified.append(len(store.get_state())))
    assert store.dispatch("a") == "a"
    unsubscribe()
    store.dispatch("b")
    assert seen == ["outer", "inner", "outer", "inner"]
    assert store.get_state() == ["a", "b"]
    assert notified == [1]
