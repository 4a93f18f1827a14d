from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor

from button_games.protocol.errors import OK, STALE_SNAPSHOT
from button_games.registry import load_plugins
from button_games.runtime.dispatcher import Router


WINNING_GAME = (("A", "0 0"), ("B", "1 0"), ("A", "0 1"), ("B", "1 1"), ("A", "0 2"))


def play_full_game(router, session_id):
    codes = []
    for identity, payload in WINNING_GAME:
        response = router.dispatch({"session_id": session_id, "identity": identity, "payload": payload})
        codes.append(response["code"])
    return codes


def test_independent_sessions_from_many_threads():
    router = Router(load_plugins())
    session_ids = [router.create_session("tictactoe", ["A", "B"]).session_id for _ in range(32)]

    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(lambda session_id: play_full_game(router, session_id), session_ids))

    assert all(codes == [OK] * len(WINNING_GAME) for codes in results)
    for session_id in session_ids:
        view = router.view(session_id)
        assert view.finished is True
        assert view.winner == "A"
        assert view.snapshot == len(WINNING_GAME)


def test_racing_clicks_on_one_board_commit_once():
    router = Router(load_plugins())
    session = router.create_session("tictactoe", ["A", "B"])
    barrier = threading.Barrier(4)
    responses = []
    lock = threading.Lock()

    def clicker(identity, payload):
        barrier.wait()
        response = router.dispatch(
            {"session_id": session.session_id, "identity": identity, "payload": payload, "snapshot": 0}
        )
        with lock:
            responses.append(response)

    threads = [
        threading.Thread(target=clicker, args=("A", payload))
        for payload in ("0 0", "1 1", "2 2", "0 2")
    ]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    codes = sorted(response["code"] for response in responses)
    assert codes == [OK, STALE_SNAPSHOT, STALE_SNAPSHOT, STALE_SNAPSHOT]
    assert session.version == 1
    assert len(session.history) == 1


def test_creating_and_discarding_sessions_concurrently():
    router = Router(load_plugins())

    def churn(_):
        session = router.create_session("othello", ["A", "B"])
        assert router.dispatch({"session_id": session.session_id, "identity": "A", "payload": "2 3"})["code"] == OK
        return router.discard_session(session.session_id)

    with ThreadPoolExecutor(max_workers=8) as pool:
        assert all(pool.map(churn, range(40)))

    assert len(router.session_store) == 0
