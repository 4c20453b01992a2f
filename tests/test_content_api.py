from fastapi.testclient import TestClient


def test_subjects(client: TestClient, answers: dict[str, str]) -> None:
    assert client.get("/api/subjects").json()[0]["id"] == "英語"
    dashboard = client.get("/api/subjects/英語").json()
    assert dashboard["stats"]["questionCount"] == len(answers)
    assert client.get("/api/subjects/数学").status_code == 404


def test_textbooks(client: TestClient, answers: dict[str, str]) -> None:
    assert [t["bookId"] for t in client.get("/api/textbooks").json()] == ["E01"]
    assert client.get("/api/textbooks", params={"subject": "数学"}).json() == []
    assert client.get("/api/textbooks/E01").json()["title"] == "English Grammar"
    assert client.get("/api/textbooks/X99").status_code == 404

    payload = {"bookId": "M01", "title": "Algebra", "subject": "数学", "publisher": "Sample Press"}
    created = client.post("/api/textbooks", json=payload)
    assert created.status_code == 201
    assert client.post("/api/textbooks", json=payload).status_code == 400
    assert [t["bookId"] for t in client.get("/api/textbooks").json()] == ["E01", "M01"]


def test_chapters(client: TestClient, answers: dict[str, str]) -> None:
    chapters = client.get("/api/chapters", params={"textbookIds": "E01"}).json()
    assert [c["chapterId"] for c in chapters] == ["E01-C00", "E01-C01"]

    payload = {"chapterId": "E01-C02", "bookId": "E01", "title": "Clauses", "order": 2}
    assert client.post("/api/chapters", json=payload).status_code == 201
    chapters = client.get("/api/chapters", params={"textbookIds": "E01"}).json()
    assert chapters[-1]["chapterId"] == "E01-C02"

    orphan = {"chapterId": "Z01-C00", "bookId": "Z01", "title": "Nothing"}
    assert client.post("/api/chapters", json=orphan).status_code == 404


def test_questions(client: TestClient, answers: dict[str, str]) -> None:
    rows = client.get("/api/questions", params={"chapterIds": "E01-C00", "setId": "02"}).json()
    assert len(rows) == 4

    payload = {
        "questionId": "E01-C01-01-001",
        "bookId": "E01",
        "chapterId": "E01-C01",
        "setId": "01",
        "questionText": "Past tense of go?",
        "optionA": "goed",
        "optionB": "went",
        "optionC": "gone",
        "optionD": "going",
        "correctAnswer": "b",
    }
    created = client.post("/api/questions", json=payload)
    assert created.status_code == 201
    assert created.json()["correctAnswer"] == "B"

    bad = dict(payload, questionId="E01-C01-01-002", correctAnswer="E")
    assert client.post("/api/questions", json=bad).status_code == 422


def test_chapter_items_and_pages(client: TestClient, answers: dict[str, str]) -> None:
    items = client.get("/api/chapter-items", params={"chapterId": "E01-C00"}).json()
    assert [i["itemId"] for i in items] == ["E01-C00-I01", "E01-C00-I02", "E01-C00-I03"]
    assert client.get("/api/chapter-items/E01-C00-I02").json()["title"] == "Verbs"
    assert client.get("/api/chapter-items/missing").status_code == 404

    pages = client.get("/api/textbook-pages", params={"pageRef": "P16-P18", "bookId": "E01"})
    assert [i["itemId"] for i in pages.json()["items"]] == ["E01-C00-I03"]
    assert client.get("/api/textbook-pages").status_code == 400
    assert client.get("/api/textbook-pages", params={"pageRef": "none"}).status_code == 400


def test_feedback_review(client: TestClient) -> None:
    response = client.post(
        "/api/feedback",
        json={
            "feedbackType": "question_error",
            "feedbackCategories": ["typo"],
            "feedbackContent": "Spelling in option B",
            "questionId": "E01-C00-01-001",
        },
    )
    assert response.json()["success"] is True
    feedback_id = response.json()["feedbackId"]

    pending = client.get("/api/admin/feedback", params={"status": "pending"}).json()
    assert [f["id"] for f in pending] == [feedback_id]
    assert pending[0]["feedbackCategories"] == ["typo"]

    updated = client.patch(f"/api/admin/feedback/{feedback_id}", json={"status": "resolved"})
    assert updated.json()["status"] == "resolved"
    assert client.get("/api/admin/feedback", params={"status": "pending"}).json() == []
    assert client.patch("/api/admin/feedback/999", json={"status": "resolved"}).status_code == 404
    assert client.patch(f"/api/admin/feedback/{feedback_id}", json={"status": "done"}).status_code == 422


def test_admin_maintenance(client: TestClient, answers: dict[str, str]) -> None:
    summary = client.post("/api/admin/update-set-ids").json()["summary"]
    assert summary == {"success": len(answers), "failed": 0, "total": len(answers)}

    deleted = client.delete("/api/admin/textbooks/E01").json()
    assert deleted["questionsDeleted"] == len(answers)
    assert client.get("/api/textbooks").json() == []
    assert client.delete("/api/admin/textbooks/E01").status_code == 404


def test_health(client: TestClient) -> None:
    assert client.get("/api/health").json() == {"status": "ok"}


def test_duplicate_question_is_rejected(client: TestClient, answers: dict[str, str]) -> None:
    payload = {
        "questionId": "E01-C00-01-001",
        "bookId": "E01",
        "chapterId": "E01-C00",
        "questionText": "Duplicate",
        "optionA": "a",
        "optionB": "b",
        "optionC": "c",
        "optionD": "d",
        "correctAnswer": "A",
    }
    assert client.post("/api/questions", json=payload).status_code == 400
