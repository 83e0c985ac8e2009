def test_new_user_streak(client, user):
    res = client.get("/api/streak", headers=user["headers"])
    assert res.status_code == 200
    body = res.json()
    assert body["currentStreak"] == 0
    assert body["longestStreak"] == 0
    assert body["todayActivityCount"] == 0
    assert body["isActiveToday"] is False
    assert body["badges"] == []
    assert body["nextBadge"]["type"] == "streak_7"


def test_record_activity(client, user):
    payload = {"activityType": "lesson", "activityId": 1, "points": 5}
    res = client.post("/api/streak/activity", json=payload, headers=user["headers"])
    assert res.json() == {"message": "Activity recorded", "pointsEarned": 5, "newBadges": []}

    res = client.post("/api/streak/activity", json=payload, headers=user["headers"])
    assert res.json()["message"] == "Activity already recorded today"

    body = client.get("/api/streak", headers=user["headers"]).json()
    assert body["currentStreak"] == 1
    assert body["todayActivityCount"] == 1
    assert body["isActiveToday"] is True


def test_activity_requires_type(client, user):
    res = client.post("/api/streak/activity", json={"activityId": 1}, headers=user["headers"])
    assert res.status_code == 400
    assert res.json() == {"error": "Activity type is required"}


def test_today_challenge_anonymous_and_completion(client, user):
    anon = client.get("/api/streak/challenge/today").json()
    challenge = anon["challenge"]
    assert challenge is not None
    assert anon["completed"] is False

    res = client.post(
        "/api/streak/challenge/complete",
        json={"challengeId": challenge["id"]},
        headers=user["headers"],
    )
    assert res.json()["message"] == "Challenge completed"
    assert res.json()["pointsEarned"] == 10

    res = client.post(
        "/api/streak/challenge/complete",
        json={"challengeId": challenge["id"]},
        headers=user["headers"],
    )
    assert res.json()["message"] == "Challenge already completed"

    mine = client.get("/api/streak/challenge/today", headers=user["headers"]).json()
    assert mine["challenge"]["id"] == challenge["id"]
    assert mine["completed"] is True

    streak = client.get("/api/streak", headers=user["headers"]).json()
    assert streak["todayChallenge"]["completed"] is True
    assert streak["currentStreak"] == 1


def test_complete_challenge_validation(client, user):
    res = client.post("/api/streak/challenge/complete", json={}, headers=user["headers"])
    assert res.status_code == 400
    res = client.post("/api/streak/challenge/complete", json={"challengeId": 999}, headers=user["headers"])
    assert res.status_code == 404
    assert res.json() == {"error": "Challenge not found"}


def test_streak_requires_auth(client):
    assert client.get("/api/streak").status_code == 401
    assert client.post("/api/streak/activity", json={"activityType": "quiz"}).status_code == 401
