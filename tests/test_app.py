def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_root(client):
    data = client.get("/").json()
    assert data["app"] == "AI Fitness Coach API"
    assert data["docs"] == "/docs"


def test_malformed_json_is_a_client_error(client, fake_openai):
    response = client.post(
        "/api/generate-plan",
        content=b'{"name": "Ana",',
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert response.json()["error"] == "Invalid request body"
    assert fake_openai.calls == []


def test_settings_are_shared_with_services(app, settings):
    assert app.state.settings is settings
    assert app.state.plan_service.settings is settings
    assert app.state.image_service.settings is settings
    assert app.state.speech_service.settings is settings


def test_json_log_formatter_escapes_messages():
    import json
    import logging

    from app.logging_config import JsonFormatter

    record = logging.LogRecord("app.plans", logging.ERROR, __file__, 1, 'bad "quote" %s', ("x",), None)
    payload = json.loads(JsonFormatter().format(record))

    assert payload["level"] == "ERROR"
    assert payload["logger"] == "app.plans"
    assert payload["message"] == 'bad "quote" x'
