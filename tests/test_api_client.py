import json
from uuid import UUID

import pytest
import responses

from knotter.api_client import ApiClient, build_url
from knotter.dtos import BallDto, PositionDto

BASE_URL = "http://127.0.0.1:8080"
GLOBE = "dapa22ravo"
BALL_UUID = UUID("4d3cbd35-41e8-40be-96d2-ac0c4b9f4f26")


def _ball() -> BallDto:
    return BallDto(
        is_fixed=True,
        is_insert=True,
        uuid=BALL_UUID,
        color="#ff0000ff",
        position=PositionDto(-1.05, 0.0, 0.0),
    )


def _transaction(transaction_id: str) -> dict:
    return {"transaction_id": transaction_id, "ball_dto": _ball().to_dict()}


def test_build_url_without_base_path():
    assert build_url(BASE_URL, GLOBE) == f"{BASE_URL}/{GLOBE}"


def test_build_url_with_trailing_slash():
    assert build_url(BASE_URL + "/", GLOBE) == f"{BASE_URL}/{GLOBE}"


def test_build_url_keeps_base_path():
    assert build_url(BASE_URL + "/api", "new_globe_id") == f"{BASE_URL}/api/new_globe_id"


@pytest.mark.parametrize("bad", ["not a url", "http://", "/relative/path"])
def test_build_url_rejects_bad_base(bad):
    with pytest.raises(ValueError):
        build_url(bad, GLOBE)


def test_insert_ball_posts_json():
    client = ApiClient(BASE_URL, GLOBE)
    with responses.RequestsMock() as rsps:
        rsps.add(responses.POST, f"{BASE_URL}/{GLOBE}", body="ok", status=200)
        reply = client.insert_ball(_ball())
        request = rsps.calls[0].request
    assert reply == "ok"
    assert request.headers["Content-Type"] == "application/json"
    assert json.loads(request.body) == _ball().to_dict()


def test_insert_ball_without_globe_sends_nothing():
    client = ApiClient(BASE_URL)
    with responses.RequestsMock() as rsps:
        assert client.insert_ball(_ball()) is None
        assert len(rsps.calls) == 0


def test_delete_ball_uses_uuid_in_path():
    client = ApiClient(BASE_URL, GLOBE)
    with responses.RequestsMock() as rsps:
        rsps.add(responses.DELETE, f"{BASE_URL}/{GLOBE}/{BALL_UUID}", body="deleted")
        assert client.delete_ball(BALL_UUID) == "deleted"
        assert len(rsps.calls) == 1


def test_delete_ball_without_globe_returns_none():
    client = ApiClient(BASE_URL)
    with responses.RequestsMock() as rsps:
        assert client.delete_ball(BALL_UUID) is None
        assert len(rsps.calls) == 0


def test_fetch_transactions_advances_last_transaction():
    client = ApiClient(BASE_URL, GLOBE)
    with responses.RequestsMock() as rsps:
        rsps.add(
            responses.GET,
            f"{BASE_URL}/{GLOBE}/0",
            json={"ball_transactions": [_transaction("100"), _transaction("200")]},
        )
        rsps.add(responses.GET, f"{BASE_URL}/{GLOBE}/200", json={"ball_transactions": []})
        first = client.fetch_transactions()
        assert [t.transaction_id for t in first] == ["100", "200"]
        assert first[0].ball_dto == _ball()
        assert client.last_received_transaction == "200"
        second = client.fetch_transactions()
    assert second == []
    assert client.last_received_transaction == "200"


def test_fetch_transactions_without_globe_creates_one():
    client = ApiClient(BASE_URL)
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, f"{BASE_URL}/new_globe_id", json={"new_globe_id": "capa12vomu"})
        assert client.fetch_transactions() == []
    assert client.globe_name == "capa12vomu"
    assert client.last_received_transaction == "0"


def test_fetch_transactions_rejects_malformed_reply():
    client = ApiClient(BASE_URL, GLOBE)
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, f"{BASE_URL}/{GLOBE}/0", json={"unexpected": 1})
        with pytest.raises(ValueError):
            client.fetch_transactions()


def test_request_new_globe_id():
    client = ApiClient(BASE_URL, GLOBE)
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, f"{BASE_URL}/new_globe_id", json={"new_globe_id": "capa12vomu"})
        assert client.request_new_globe_id() == "capa12vomu"
    assert client.globe_name == GLOBE


def test_switch_globe_resets_last_transaction():
    client = ApiClient(BASE_URL, GLOBE)
    client.last_received_transaction = "200"
    client.switch_globe("capa12vomu")
    assert client.globe_name == "capa12vomu"
    assert client.last_received_transaction == "0"


def test_switch_globe_rejects_empty_id():
    client = ApiClient(BASE_URL, GLOBE)
    with pytest.raises(ValueError):
        client.switch_globe("")
    assert client.globe_name == GLOBE