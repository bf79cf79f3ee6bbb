"""
Advisory text generation tests.

The external API is replaced with httpx.MockTransport; every failure mode
must produce the fallback text rather than an exception.
"""

import json

import httpx
import pytest

from stitchflow.services import advisory_service, measurement_service, customer_service
from stitchflow.validation import ValidationError


def _reply(text):
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


@pytest.fixture
def advisory(app, ctx):
    """Configure the advisory client with a key and a scripted transport."""
    requests = []

    def configure(handler):
        def recording_handler(request):
            requests.append(request)
            return handler(request)

        app.config.update(
            ADVISORY_API_KEY="test-key",
            ADVISORY_TRANSPORT=httpx.MockTransport(recording_handler),
        )
        return requests

    return configure


class TestGenerateAdvice:

    def test_success(self, advisory):
        requests = advisory(lambda request: httpx.Response(200, json=_reply("Go for a spread collar.")))

        text = advisory_service.generate_advice(
            "prompt", system_instruction=advisory_service.STYLIST_INSTRUCTION, fallback="fallback"
        )
        assert text == "Go for a spread collar."

        request = requests[0]
        assert request.headers["x-goog-api-key"] == "test-key"
        assert request.url.path.endswith(":generateContent")
        body = json.loads(request.content)
        assert body["contents"][0]["parts"][0]["text"] == "prompt"
        assert body["systemInstruction"]["parts"][0]["text"] == advisory_service.STYLIST_INSTRUCTION

    def test_http_error_falls_back(self, advisory):
        advisory(lambda request: httpx.Response(500, json={"error": "quota"}))
        assert advisory_service.generate_advice("prompt", fallback="fallback") == "fallback"

    def test_malformed_payload_falls_back(self, advisory):
        advisory(lambda request: httpx.Response(200, json={"candidates": []}))
        assert advisory_service.generate_advice("prompt", fallback="fallback") == "fallback"

    def test_non_json_falls_back(self, advisory):
        advisory(lambda request: httpx.Response(200, text="<html>"))
        assert advisory_service.generate_advice("prompt", fallback="fallback") == "fallback"

    def test_transport_error_falls_back(self, advisory):
        def fail(request):
            raise httpx.ConnectTimeout("timed out", request=request)

        advisory(fail)
        assert advisory_service.generate_advice("prompt", fallback="fallback") == "fallback"

    def test_missing_key_skips_the_call(self, app, ctx):
        calls = []
        app.config.update(
            ADVISORY_API_KEY="",
            ADVISORY_TRANSPORT=httpx.MockTransport(lambda request: calls.append(request)),
        )
        assert advisory_service.generate_advice("prompt") == advisory_service.DEFAULT_FALLBACK
        assert calls == []

    def test_request_advice_raises(self, app, ctx):
        app.config.update(ADVISORY_API_KEY="")
        with pytest.raises(advisory_service.AdvisoryUnavailable):
            advisory_service.request_advice("prompt")


class TestStylingTips:

    def test_prompt_lists_dimensions(self):
        prompt = measurement_service.styling_prompt("Shirt", {"Chest": "40", "Collar": "15.5"})
        assert "Client Measurements for a Shirt:" in prompt
        assert "- Chest: 40 inches" in prompt
        assert "- Collar: 15.5 inches" in prompt

    def test_requires_two_dimensions(self, ctx):
        with pytest.raises(ValidationError):
            measurement_service.suggest_styling("Shirt", {"Chest": "40"})

    def test_fallback_tip_without_key(self, ctx):
        advice = measurement_service.suggest_styling("Shirt", {"Chest": "40", "Collar": "15"})
        assert advice == advisory_service.STYLING_FALLBACK

    def test_apply_tips_appends_to_remarks(self, state, advisory):
        advisory(lambda request: httpx.Response(200, json=_reply("Slim fit, button-down collar.")))
        customer = customer_service.add_customer(state, {"name": "Asha", "phone": "111"})
        measurement = measurement_service.add_measurement(state, {
            "customer_id": customer.id,
            "type": "Shirt",
            "details": {"Chest": "40", "Collar": "15"},
            "remarks": "Prefers cotton",
        })

        updated = measurement_service.apply_styling_tips(state, measurement.id)
        assert updated.remarks == "Prefers cotton\n\nAI Tip: Slim fit, button-down collar."

    def test_append_tip_without_remarks(self):
        assert measurement_service.append_tip(None, "Classic") == "AI Tip: Classic"
