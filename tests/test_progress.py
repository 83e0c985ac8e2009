def test_track_access_and_completion(client, user):
    res = client.post("/api/progress/lesson/2/access", headers=user["headers"])
    assert res.json() == {"message": "Progress tracked"}

    res = client.post("/api/progress/lesson/3/complete", headers=user["headers"])
    assert res.json() == {"message": "Lesson marked as completed"}

    progress = client.get("/api/progress/progress", headers=user["headers"]).json()["progress"]
    assert progress["2"]["completed"] is False
    assert progress["3"]["completed"] is True
    assert progress["3"]["lastAccessed"] is not None


def test_access_after_completion_keeps_completed(client, user):
    client.post("/api/progress/lesson/1/complete", headers=user["headers"])
    client.post("/api/progress/lesson/1/access", headers=user["headers"])
    progress = client.get("/api/progress/progress", headers=user["headers"]).json()["progress"]
    assert len(progress) == 1
    assert progress["1"]["completed"] is True


def test_unknown_lesson_is_404(client, user):
    res = client.post("/api/progress/lesson/999/complete", headers=user["headers"])
    assert res.status_code == 404
    assert res.json() == {"error": "Lesson not found"}


def test_progress_requires_auth(client):
    assert client.get("/api/progress/progress").status_code == 401
    assert client.get("/api/progress/stats").status_code == 401


def test_stats_for_new_user(client, user):
    stats = client.get("/api/progress/stats", headers=user["headers"]).json()
    assert stats == {
        "totalLessons": 5,
        "completedLessons": 0,
        "totalQuizzes": 0,
        "avgScore": 0,
        "progressPercentage": 0,
    }


def test_stats_average_quiz_percentage(client, user):
    quiz = client.post("/api/lesson/1/generate-quiz", headers=user["headers"]).json()["quiz"]
    for correct in (5, 2):
        answers = {
            str(q["id"]): q["correctAnswer"] if i < correct else "a"
            for i, q in enumerate(quiz["questions"])
        }
        client.post(f"/api/quiz/{quiz['id']}/submit", json={"answers": answers}, headers=user["headers"])

    stats = client.get("/api/progress/stats", headers=user["headers"]).json()
    assert stats["totalQuizzes"] == 2
    assert stats["avgScore"] == 70
    assert stats["completedLessons"] == 1
    assert stats["progressPercentage"] == 20
