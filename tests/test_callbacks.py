from __future__ import annotations

from axiom.directive import RequestSpec
from axiom.messages import Action
from axiom.plugins.callbacks import dispatch_failure, dispatch_unexpected_status, forward_response, stamp_request_id
from axiom.transport import Response


def test_dispatch_failure_uses_error_type_when_message_empty(recorder):
    dispatch_failure(TimeoutError(), Action(kind="SYNC"), recorder.forward, recorder.dispatch)
    (action,) = recorder.dispatched
    assert action.kind == "SYNC_FAILED"
    assert action.payload == {"error": "TimeoutError", "type": "TimeoutError"}


def test_dispatch_unexpected_status(recorder):
    response = Response(status=503, data="busy")
    dispatch_unexpected_status(response, Action(kind="SYNC"), recorder.forward, recorder.dispatch)
    (action,) = recorder.dispatched
    assert action.kind == "SYNC_UNEXPECTED_STATUS"
    assert action.payload == {"status": 503, "body": "busy"}


def test_forward_response(recorder):
    action = Action(kind="SYNC")
    assert forward_response(action, recorder.forward, recorder.dispatch) is action
    assert recorder.forwarded == [action]


def test_stamp_request_id_keeps_existing_header():
    original = RequestSpec(url="http://svc", headers={"X-Request-ID": "fixed"})
    assert stamp_request_id(original).headers == {"X-Request-ID": "fixed"}
    stamped = stamp_request_id(RequestSpec(url="http://svc"))
    assert len(stamped.headers["X-Request-ID"]) == 32
