def test_review_returns_score_and_suggestions(client, user):
    res = client.post("/api/code-review/review", json={"code": '<img src="a.png">'}, headers=user["headers"])
    assert res.status_code == 200, res.text
    body = res.json()
    assert body["score"] == 72
    assert body["summary"] == "Nice start!"
    assert body["suggestions"][0]["type"] == "accessibility"
    assert body["suggestions"][0]["newCode"] == '<img src="a.png" alt="A">'


def test_review_of_empty_code_skips_ai(client, user, fake_tutor):
    res = client.post("/api/code-review/review", json={"code": "  \n"}, headers=user["headers"])
    assert res.json() == {
        "score": 100,
        "summary": None,
        "suggestions": [],
        "message": "Code is empty. Start typing to get suggestions!",
    }
    assert fake_tutor.calls == []


def test_review_validation_and_auth(client, user):
    assert client.post("/api/code-review/review", json={"code": "<p></p>"}).status_code == 401
    res = client.post("/api/code-review/review", json={}, headers=user["headers"])
    assert res.status_code == 400
    assert res.json() == {"error": "Code is required"}


def test_review_ai_failure(client, user, fake_tutor):
    fake_tutor.fail = True
    res = client.post("/api/code-review/review", json={"code": "<p></p>"}, headers=user["headers"])
    assert res.status_code == 500
    assert res.json()["error"] == "Failed to review code"


def test_suggestions(client, user, fake_tutor):
    res = client.post("/api/code-review/suggestions", json={"code": "<p></p>"}, headers=user["headers"])
    assert res.status_code == 400
    assert res.json() == {"error": "Code and issue are required"}

    res = client.post(
        "/api/code-review/suggestions",
        json={"code": '<img src="a.png">', "issue": "screen readers skip my image", "language": "html"},
        headers=user["headers"],
    )
    assert res.status_code == 200
    assert res.json()["suggestions"][0]["message"] == "Add alt text"
    assert fake_tutor.calls[0][0] == "suggest_fixes"


def test_apply_suggestion(client, user):
    code = '<h1>Hi</h1>\n<img src="a.png">'
    suggestion = {"message": "Add alt text", "oldCode": '<img src="a.png">', "newCode": '<img src="a.png" alt="A">'}
    res = client.post("/api/code-review/apply", json={"code": code, "suggestion": suggestion}, headers=user["headers"])
    assert res.json() == {"code": '<h1>Hi</h1>\n<img src="a.png" alt="A">'}


def test_apply_suggestion_out_of_range(client, user):
    suggestion = {"message": "x", "startLine": 5, "newCode": "<p></p>"}
    res = client.post("/api/code-review/apply", json={"code": "<p>", "suggestion": suggestion}, headers=user["headers"])
    assert res.status_code == 400
    assert "outside the code" in res.json()["error"]


def test_preview_combines_html_and_css(client):
    html = "<html>\n<head>\n</head>\n<body></body>\n</html>"
    res = client.post("/api/code-review/preview", json={"html": html, "css": "p { color: red; }"})
    assert res.status_code == 200
    document = res.json()["document"]
    assert "<style>\np { color: red; }\n  </style>\n</head>" in document


def test_review_drops_malformed_suggestions(client, user, fake_tutor):
    fake_tutor.review["suggestions"] = [
        {"message": "Fix lines", "line": "3-5", "priority": 1, "newCode": "<p></p>"},
        {"message": "Close the tag", "startLine": 1, "newCode": "<p></p>"},
    ]
    res = client.post("/api/code-review/review", json={"code": "<p>"}, headers=user["headers"])
    assert res.status_code == 200, res.text
    assert [s["message"] for s in res.json()["suggestions"]] == ["Close the tag"]

    res = client.post(
        "/api/code-review/suggestions",
        json={"code": "<p>", "issue": "tag never closes"},
        headers=user["headers"],
    )
    assert res.status_code == 200, res.text
    assert [s["message"] for s in res.json()["suggestions"]] == ["Close the tag"]
