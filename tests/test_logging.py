import logging
import uuid

from config.settings import mask_sensitive_data


class TestCorrelationIdMiddleware:
    def test_returns_provided_request_id(self, client):
        custom_id = "my-custom-request-id-123"
        response = client.get("/health", HTTP_X_REQUEST_ID=custom_id)
        assert response["X-Request-ID"] == custom_id

    def test_generates_uuid_when_no_request_id(self, client):
        request_id = client.get("/health")["X-Request-ID"]
        parsed = uuid.UUID(request_id, version=4)
        assert str(parsed) == request_id

    def test_correlation_id_in_logs(self, client, caplog):
        custom_id = "log-test-correlation-456"
        with caplog.at_level(logging.INFO):
            client.get("/health", HTTP_X_REQUEST_ID=custom_id)
        found = any(custom_id in record.getMessage() for record in caplog.records)
        assert found, (
            f"correlation_id '{custom_id}' not found in log records: "
            f"{[r.getMessage() for r in caplog.records]}"
        )

    def test_request_line_logged(self, client, caplog):
        with caplog.at_level(logging.INFO):
            client.get("/health")
        messages = [record.getMessage() for record in caplog.records]
        assert any("http.request" in message and "/health" in message for message in messages)


class TestSensitiveDataMasking:
    def test_phone_masked(self):
        event_dict = {"event": "customer.created", "phone": "+919847012345"}
        result = mask_sensitive_data(None, None, event_dict)
        assert "9847012345" not in result["phone"]
        assert "***MASKED***" in result["phone"]

    def test_phone_inside_text_masked(self):
        event_dict = {"event": "test", "note": "call 9847012345 before noon"}
        result = mask_sensitive_data(None, None, event_dict)
        assert result["note"] == "call ***MASKED*** before noon"

    def test_email_masked(self):
        event_dict = {"event": "test", "email": "arjun@example.com"}
        result = mask_sensitive_data(None, None, event_dict)
        assert "arjun@example.com" not in result["email"]

    def test_password_masked(self):
        event_dict = {"event": "test", "data": "password='s3cret123'"}
        result = mask_sensitive_data(None, None, event_dict)
        assert "s3cret123" not in result["data"]
        assert "***MASKED***" in result["data"]

    def test_token_masked(self):
        event_dict = {"event": "test", "header": "token=abc123xyz"}
        result = mask_sensitive_data(None, None, event_dict)
        assert "abc123xyz" not in result["header"]

    def test_order_numbers_left_alone(self):
        event_dict = {"event": "test", "order_number": "ORD-KCH-20260301-001"}
        result = mask_sensitive_data(None, None, event_dict)
        assert result["order_number"] == "ORD-KCH-20260301-001"

    def test_non_string_values_untouched(self):
        event_dict = {"event": "test", "count": 9847012345}
        result = mask_sensitive_data(None, None, event_dict)
        assert result["count"] == 9847012345
