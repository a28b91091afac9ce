"""
Scripted assistant tests: canned replies, fallback and the message API.
"""
import pytest

from luma.core.exceptions import ValidationError
from luma.data.mock_data import ASSISTANT_FALLBACK, SUGGESTED_QUESTIONS
from luma.services import assistant_service

API = "/api/v1/assistant"


class TestAssistantService:
    @pytest.mark.parametrize("question", SUGGESTED_QUESTIONS)
    def test_every_suggestion_has_a_scripted_answer(self, question):
        assert assistant_service.answer_for(question) != ASSISTANT_FALLBACK

    def test_surrounding_whitespace_ignored(self):
        assert "$199.99" in assistant_service.answer_for("  Recommend AWS courses \n")

    def test_fallback(self):
        assert assistant_service.answer_for("What is the meaning of life?") == ASSISTANT_FALLBACK

    def test_reply_pair(self):
        user, bot = assistant_service.reply("Show my learning progress")
        assert user.role == "user"
        assert user.content == "Show my learning progress"
        assert bot.role == "assistant"
        assert "Courses in Progress" in bot.content
        assert user.id != bot.id

    @pytest.mark.parametrize("message", [None, "", "   "])
    def test_blank_message_rejected(self, message):
        with pytest.raises(ValidationError):
            assistant_service.reply(message)

    def test_typing_delay(self, monkeypatch):
        slept = []
        monkeypatch.setattr(assistant_service.time, "sleep", slept.append)
        assistant_service.reply("hello", delay_seconds=1.5)
        assert slept == [1.5]

    def test_no_delay_by_default(self, monkeypatch):
        slept = []
        monkeypatch.setattr(assistant_service.time, "sleep", slept.append)
        assistant_service.reply("hello")
        assert slept == []


class TestAssistantAPI:
    def test_suggestions(self, client, auth, employee):
        res = client.get(f"{API}/suggestions", headers=auth(employee))
        assert res.status_code == 200
        data = res.get_json()
        assert data["greeting"]["role"] == "assistant"
        assert data["greeting"]["content"].startswith("Hi!")
        assert data["suggestions"] == SUGGESTED_QUESTIONS

    def test_message(self, client, auth, employee):
        res = client.post(f"{API}/messages", json={"message": "Recommend AWS courses"}, headers=auth(employee))
        assert res.status_code == 200
        user, bot = res.get_json()["messages"]
        assert user["role"] == "user"
        assert user["content"] == "Recommend AWS courses"
        assert bot["role"] == "assistant"
        assert "AWS Solutions Architect Certification" in bot["content"]

    def test_blank_message(self, client, auth, employee):
        res = client.post(f"{API}/messages", json={"message": "  "}, headers=auth(employee))
        assert res.status_code == 422

    def test_non_string_message(self, client, auth, employee):
        res = client.post(f"{API}/messages", json={"message": ["hi"]}, headers=auth(employee))
        assert res.status_code == 400

    def test_requires_profile(self, client):
        assert client.get(f"{API}/suggestions").status_code == 401
