from fastapi.testclient import TestClient

from dotest.services.session_service import SessionStore


def _start(client: TestClient, **extra) -> dict:
    payload = {"bookId": "E01", "chapterId": "E01-C00", **extra}
    response = client.post("/api/sessions", json=payload)
    assert response.status_code == 200, response.text
    return response.json()


def test_full_session_flow(client: TestClient, answers: dict[str, str]) -> None:
    session = _start(client, clientId="client-1")
    session_id = session["sessionId"]
    assert session["state"] == "in_progress"
    assert session["total"] in (4, 10)

    question = session["question"]
    assert "correctAnswer" not in question
    seen = []
    while True:
        seen.append(question["questionId"])
        assert len(question["choices"]) == 4
        response = client.post(
            f"/api/sessions/{session_id}/answers",
            json={"questionId": question["questionId"], "selected": answers[question["questionId"]]},
        )
        assert response.status_code == 200
        assert response.json()["isCorrect"] is True
        assert response.json()["pageReferences"] == ["P12", "P16-P18"]

        step = client.post(f"/api/sessions/{session_id}/advance").json()
        if step["completed"]:
            report = step["report"]
            break
        question = step["question"]

    assert len(set(seen)) == session["total"]
    assert report["correct"] == report["total"] == session["total"]
    assert report["percentage"] == 100
    assert report["passed"] is True

    results = client.get("/api/test-results", params={"clientId": "client-1"}).json()
    assert len(results) == 1
    assert results[0]["sessionId"] == session_id
    assert results[0]["score"] == session["total"]

    assert client.get(f"/api/sessions/{session_id}/report").json() == report


def test_repeated_answer_is_not_recorded(client: TestClient, answers: dict[str, str]) -> None:
    session = _start(client, setId="02")
    question = session["question"]
    choices = [c["text"] for c in question["choices"]]
    wrong = next(text for text in choices if text != answers[question["questionId"]])
    url = f"/api/sessions/{session['sessionId']}/answers"

    first = client.post(url, json={"questionId": question["questionId"], "selected": wrong}).json()
    second = client.post(
        url,
        json={"questionId": question["questionId"], "selected": answers[question["questionId"]]},
    ).json()

    assert first["recorded"] is True
    assert second["recorded"] is False
    assert second["isCorrect"] is False
    assert second["selected"] == wrong


def test_finalize_with_unanswered_questions(
    client: TestClient, answers: dict[str, str], store: SessionStore
) -> None:
    session = _start(client, setId="02", clientId="client-2")
    session_id = session["sessionId"]
    question = session["question"]
    client.post(
        f"/api/sessions/{session_id}/answers",
        json={"questionId": question["questionId"], "selected": answers[question["questionId"]]},
    )

    report = client.post(f"/api/sessions/{session_id}/finalize").json()

    assert (report["correct"], report["total"], report["percentage"]) == (1, 4, 25)
    assert report["unanswered"] == 3
    assert [r["outcome"] for r in report["results"]].count("unanswered") == 3

    again = client.post(f"/api/sessions/{session_id}/finalize")
    assert again.status_code == 200
    assert len(client.get("/api/test-results", params={"clientId": "client-2"}).json()) == 1

    late = client.post(
        f"/api/sessions/{session_id}/answers",
        json={"questionId": question["questionId"], "selected": "x"},
    )
    assert late.status_code == 409


def test_report_before_completion_conflicts(client: TestClient, answers: dict[str, str]) -> None:
    session = _start(client)
    response = client.get(f"/api/sessions/{session['sessionId']}/report")
    assert response.status_code == 409


def test_flags(client: TestClient, answers: dict[str, str]) -> None:
    session = _start(client)
    question_id = session["question"]["questionId"]
    url = f"/api/sessions/{session['sessionId']}/flags/{question_id}"

    assert client.post(url).json() == {"questionId": question_id, "flagged": True}
    assert client.get(f"/api/sessions/{session['sessionId']}").json()["flagged"] == [question_id]
    assert client.post(url).json()["flagged"] is False


def test_empty_chapter_is_not_found(client: TestClient, answers: dict[str, str]) -> None:
    response = client.post("/api/sessions", json={"bookId": "E01", "chapterId": "E01-C01"})
    assert response.status_code == 404
    assert "E01-C01" in response.json()["detail"]


def test_unknown_set_is_not_found(client: TestClient, answers: dict[str, str]) -> None:
    response = client.post(
        "/api/sessions", json={"bookId": "E01", "chapterId": "E01-C00", "setId": "09"}
    )
    assert response.status_code == 404


def test_unknown_session(client: TestClient) -> None:
    assert client.get("/api/sessions/missing").status_code == 404
    assert client.delete("/api/sessions/missing").status_code == 404


def test_abandon(client: TestClient, answers: dict[str, str], store: SessionStore) -> None:
    session = _start(client)
    response = client.delete(f"/api/sessions/{session['sessionId']}")
    assert response.json() == {"status": "abandoned"}
    assert session["sessionId"] not in store


def test_invalid_start_payload(client: TestClient) -> None:
    assert client.post("/api/sessions", json={"bookId": "E01"}).status_code == 422
    response = client.post("/api/sessions", json={"bookId": "E/01", "chapterId": "E01-C00"})
    assert response.status_code == 400


def test_test_questions_carry_shuffled_answer_key(
    client: TestClient, answers: dict[str, str]
) -> None:
    response = client.get(
        "/api/test-questions",
        params={"bookId": "E01", "chapterId": "E01-C00", "setId": "02"},
    )
    assert response.status_code == 200
    questions = response.json()
    assert len(questions) == 4
    for question in questions:
        index = "ABCD".index(question["correctAnswer"])
        assert question["shuffledChoices"][index] == question["originalCorrectText"]
        assert question["originalCorrectText"] == answers[question["questionId"]]


def test_test_questions_require_ids(client: TestClient) -> None:
    response = client.get("/api/test-questions", params={"chapterId": "E01-C00"})
    assert response.status_code == 400
