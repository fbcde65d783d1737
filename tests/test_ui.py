"""
Tests for the Streamlit demo chat (backend/ui.py), run headless with streamlit's AppTest.
The backend is never contacted: requests.get/post are mocked.
"""

from pathlib import Path
from unittest.mock import MagicMock, patch

import requests
from streamlit.testing.v1 import AppTest

_UI_SCRIPT = str(Path(__file__).resolve().parent.parent / "backend" / "ui.py")

_USER_TURN = {"role": "user", "content": "Hola"}


def _response(ok: bool, status_code: int, body: dict) -> MagicMock:
    response = MagicMock(ok=ok, status_code=status_code, headers={"content-type": "application/json"})
    response.json.return_value = body
    return response


def _app_waiting_for_reply(messages: list[dict]) -> AppTest:
    at = AppTest.from_file(_UI_SCRIPT, default_timeout=10)
    at.session_state["active_personality"] = "alegra"
    at.session_state["messages"] = messages
    at.session_state["pending_reply"] = True
    return at


def test_reply_is_added_to_history() -> None:
    at = _app_waiting_for_reply([_USER_TURN])
    with patch("requests.get", side_effect=requests.ConnectionError("down")), patch(
        "requests.post", return_value=_response(True, 200, {"message": "¡Buenas!"})
    ) as mock_post:
        at.run()
    assert mock_post.call_args.kwargs["json"]["messages"][0] == _USER_TURN
    assert at.session_state["messages"] == [_USER_TURN, {"role": "assistant", "content": "¡Buenas!"}]


def test_failed_reply_is_shown_but_not_kept_in_history() -> None:
    at = _app_waiting_for_reply([_USER_TURN])
    failure = _response(False, 500, {"detail": "Failed to generate response. Please try again."})
    with patch("requests.get", side_effect=requests.ConnectionError("down")), patch("requests.post", return_value=failure):
        at.run()
    assert at.session_state["messages"] == [_USER_TURN]
    assert at.session_state["chat_error"] == "Error: 500: Failed to generate response. Please try again."


def test_connection_error_is_not_sent_on_next_turn() -> None:
    at = _app_waiting_for_reply([_USER_TURN])
    with patch("requests.get", side_effect=requests.ConnectionError("down")), patch(
        "requests.post", side_effect=requests.ConnectionError("refused")
    ):
        at.run()
    assert at.session_state["chat_error"].startswith("Connection failed:")

    second_turn = {"role": "user", "content": "¿Sigues ahí?"}
    at.session_state["messages"] = [*at.session_state["messages"], second_turn]
    at.session_state["pending_reply"] = True
    with patch("requests.get", side_effect=requests.ConnectionError("down")), patch(
        "requests.post", return_value=_response(True, 200, {"message": "Sí"})
    ) as mock_post:
        at.run()
    sent = mock_post.call_args.kwargs["json"]["messages"]
    assert sent[:2] == [_USER_TURN, second_turn]
    assert not any(m["content"].startswith("Connection failed") for m in sent)
