"""
Integration tests for the /chat-advisor endpoint.
"""

import pytest
from unittest.mock import AsyncMock
from fastapi.testclient import TestClient
import httpx

from travel_proxy.core.config import Settings, get_global_settings
from travel_proxy.core.dependencies import get_chat_advisor
from travel_proxy.main import app
from travel_proxy.services.chat_advisor import ChatAdvisor
from travel_proxy.services.http_client import AsyncHttpClient
from tests.fixtures import OllamaFixtures, json_response


class TestChatAdvisorEndpoint:
    """Test cases for POST /chat-advisor."""

    @pytest.fixture
    def client(self):
        return TestClient(app)

    @pytest.fixture
    def mock_http_client(self):
        client = AsyncMock(spec=AsyncHttpClient)
        client.request.return_value = json_response(
            OllamaFixtures.generate_response(OllamaFixtures.GENERATED_TEXT)
        )
        return client

    @pytest.fixture
    def override_advisor(self, mock_http_client):
        """Install a ChatAdvisor backed by the mock HTTP client."""
        advisor = ChatAdvisor(http_client=mock_http_client)
        app.dependency_overrides[get_chat_advisor] = lambda: advisor
        yield advisor
        app.dependency_overrides.clear()

    def test_model_answer(self, client, override_advisor, mock_http_client):
        response = client.post("/chat-advisor", json={
            "message": "How far is Nerja from Malaga?",
            "conversationHistory": [{"text": "I'm staying in Nerja", "isUser": True}],
            "userProfile": {"name": "Sam"},
        })

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["ai_powered"] is True
        assert data["response"] == OllamaFixtures.ANSWER
        assert data["suggestions"] == ["Bus schedules?", "Car rental tips?", "Malaga attractions?"]

        prompt = mock_http_client.request.call_args[1]["json"]["prompt"]
        assert "User: I'm staying in Nerja" in prompt

    def test_history_is_optional(self, client, override_advisor, mock_http_client):
        response = client.post("/chat-advisor", json={"message": "Best food in Sofia?", "conversationHistory": None})

        assert response.status_code == 200
        assert response.json()["ai_powered"] is True

    @pytest.mark.parametrize("body", [{}, {"message": ""}, {"message": "  "}, {"message": None}])
    def test_message_required(self, client, override_advisor, mock_http_client, body):
        response = client.post("/chat-advisor", json=body)

        assert response.status_code == 400
        data = response.json()
        assert data["success"] is False
        assert data["error"] == "Message is required"
        mock_http_client.request.assert_not_called()

    def test_model_unreachable_falls_back(self, client, override_advisor, mock_http_client):
        mock_http_client.request.side_effect = httpx.ConnectError("Connection refused")

        response = client.post("/chat-advisor", json={"message": "Is it safe to walk at night?"})

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["ai_powered"] is False
        assert data["suggestions"] == ["Emergency contacts?", "Common scams?", "Safe areas?"]

    def test_advisor_built_from_settings(self, client):
        """Test the Ollama URL and model come from settings."""
        settings = Settings(
            _env_file=None,
            OLLAMA_URL="http://ollama.internal:11434/",
            OLLAMA_MODEL="mistral:7b",
            CHAT_TIMEOUT=5,
        )
        app.dependency_overrides[get_global_settings] = lambda: settings
        captured = {}

        async def fake_generate(advisor, prompt):
            captured["advisor"] = advisor
            return "Sofia is great in spring and autumn.", ["Day trips?"]

        try:
            with pytest.MonkeyPatch.context() as mp:
                mp.setattr(ChatAdvisor, "generate", fake_generate)
                response = client.post("/chat-advisor", json={"message": "When should I visit Sofia?"})
        finally:
            app.dependency_overrides.clear()

        assert response.status_code == 200
        assert response.json()["suggestions"] == ["Day trips?"]
        advisor = captured["advisor"]
        assert advisor.ollama_url == "http://ollama.internal:11434"
        assert advisor.model == "mistral:7b"
        assert advisor.timeout == 5
