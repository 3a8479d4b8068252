from helpdesk.main import app


def test_rate_limit_on_login(client, create_user):
    limiter = app.state.limiter
    user = create_user(password="pw1")

    limiter.reset()
    limiter.enabled = True
    try:
        statuses = [
            client.post("/routes/login", json={"email": user.email, "senha": "wrong"}).status_code
            for _ in range(8)
        ]
    finally:
        limiter.enabled = False
        limiter.reset()

    assert statuses[0] == 401
    assert 429 in statuses
    last = statuses.index(429)
    assert all(code == 401 for code in statuses[:last])
