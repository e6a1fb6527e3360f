"""
Tests for Quiz Generator API Endpoints

Generation against a mocked LLM, saved-quiz browsing and text exports.
"""

import json
from uuid import uuid4

import httpx
import pytest
from httpx import AsyncClient
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from teachassist.ai.client import AIClient, get_ai_client
from teachassist.core.models import Quiz, UserProfile


def _questions(topic: str, count: int) -> list[dict]:
    return [
        {
            "question": f"{topic} question {i}?",
            "options": [f"Option {i}A", f"Option {i}B", f"Option {i}C", f"Option {i}D"],
            "correctAnswer": f"Option {i}A",
            "explanation": f"Explanation {i}.",
        }
        for i in range(1, count + 1)
    ]


class FakeLLM:
    """Minimal chat-completion API served through httpx.MockTransport."""

    def __init__(self):
        self.completion = json.dumps(_questions("Photosynthesis", 5))
        self.models_response = httpx.Response(200, json={"object": "list", "data": []})
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.path.endswith("/models"):
            return self.models_response
        return httpx.Response(
            200,
            json={
                "id": "chatcmpl-test",
                "object": "chat.completion",
                "created": 1700000000,
                "model": "gpt-3.5-turbo",
                "choices": [
                    {
                        "index": 0,
                        "message": {"role": "assistant", "content": self.completion},
                        "finish_reason": "stop",
                    }
                ],
            },
        )


@pytest.fixture
def fake_llm() -> FakeLLM:
    return FakeLLM()


@pytest.fixture
async def quiz_client(client: AsyncClient, fake_llm: FakeLLM) -> AsyncClient:
    """Test client whose LLM calls hit the fake."""
    from teachassist.main import app

    def override_ai_client() -> AIClient:
        return AIClient(
            api_key="sk-test",
            base_url="https://llm.test/v1",
            http_client=httpx.AsyncClient(transport=httpx.MockTransport(fake_llm.handler)),
        )

    app.dependency_overrides[get_ai_client] = override_ai_client
    return client


@pytest.fixture
async def saved_quiz(db_session: AsyncSession, teacher: UserProfile) -> Quiz:
    quiz = Quiz(
        user_id=teacher.id,
        topic="World War II",
        difficulty="hard",
        questions=_questions("WWII", 3),
    )
    db_session.add(quiz)
    await db_session.commit()
    await db_session.refresh(quiz)
    return quiz


class TestGenerate:
    """Test quiz generation."""

    async def test_photosynthesis_quiz(
        self, quiz_client: AsyncClient, db_session: AsyncSession, teacher: UserProfile, auth_headers
    ) -> None:
        """Generate five medium questions, persist them and render both sheets."""
        response = await quiz_client.post(
            "/api/v1/quizzes/generate",
            json={"topic": "Photosynthesis", "num_questions": 5, "difficulty": "medium"},
            headers=auth_headers,
        )

        assert response.status_code == 200
        data = response.json()
        assert data["persisted"] is True
        assert data["message"] == "Quiz generated successfully!"
        assert len(data["questions"]) == 5
        assert data["questions"][0]["correctAnswer"] == "Option 1A"

        student = data["documents"]["student"]
        assert "Question 5:" in student
        assert "Question 6:" not in student
        assert "Topic: Photosynthesis" in student
        assert "Difficulty Level: Medium" in student
        assert data["documents"]["questions_filename"] == "Photosynthesis_questions.txt"

        stored = (await db_session.execute(select(Quiz).where(Quiz.user_id == teacher.id))).scalars().all()
        assert len(stored) == 1
        assert str(stored[0].id) == data["quiz_id"]
        assert len(stored[0].questions) == 5

    async def test_preflight_precedes_generation(
        self, quiz_client: AsyncClient, fake_llm: FakeLLM, auth_headers
    ) -> None:
        await quiz_client.post(
            "/api/v1/quizzes/generate", json={"topic": "Photosynthesis"}, headers=auth_headers
        )

        paths = [r.url.path for r in fake_llm.requests]
        assert paths == ["/v1/models", "/v1/chat/completions"]

    async def test_quota_error(
        self, quiz_client: AsyncClient, fake_llm: FakeLLM, db_session: AsyncSession, auth_headers
    ) -> None:
        fake_llm.models_response = httpx.Response(
            429,
            json={"error": {"message": "quota", "type": "insufficient_quota", "code": "insufficient_quota"}},
        )

        response = await quiz_client.post(
            "/api/v1/quizzes/generate", json={"topic": "Photosynthesis"}, headers=auth_headers
        )

        assert response.status_code == 402
        body = response.json()
        assert "valid billing information" in body["detail"]
        assert len(body["remediation"]) == 3
        assert body["billing_url"] == "https://platform.openai.com/account/billing"
        assert (await db_session.execute(select(Quiz))).scalars().all() == []

    async def test_malformed_completion(
        self, quiz_client: AsyncClient, fake_llm: FakeLLM, auth_headers
    ) -> None:
        fake_llm.completion = "I'm sorry, here are some thoughts about plants."

        response = await quiz_client.post(
            "/api/v1/quizzes/generate", json={"topic": "Photosynthesis"}, headers=auth_headers
        )

        assert response.status_code == 502
        assert response.json()["detail"] == (
            "Failed to generate quiz. Please try again with a different topic or wording."
        )

    async def test_blank_topic(self, quiz_client: AsyncClient, fake_llm: FakeLLM, auth_headers) -> None:
        response = await quiz_client.post(
            "/api/v1/quizzes/generate", json={"topic": "  "}, headers=auth_headers
        )

        assert response.status_code == 422
        assert fake_llm.requests == []

    async def test_anonymous(self, quiz_client: AsyncClient) -> None:
        response = await quiz_client.post("/api/v1/quizzes/generate", json={"topic": "Photosynthesis"})

        assert response.status_code == 401


class TestCredentials:
    """Test the preflight endpoint."""

    async def test_ok(self, quiz_client: AsyncClient) -> None:
        response = await quiz_client.get("/api/v1/quizzes/credentials")

        assert response.json() == {"ok": True, "detail": None}

    async def test_rejected_key(self, quiz_client: AsyncClient, fake_llm: FakeLLM) -> None:
        fake_llm.models_response = httpx.Response(
            401, json={"error": {"message": "bad key", "type": "invalid_request_error", "code": "invalid_api_key"}}
        )

        response = await quiz_client.get("/api/v1/quizzes/credentials")

        assert response.json()["ok"] is False


class TestSavedQuizzes:
    """Test browsing, exports and deletion."""

    async def test_list(self, quiz_client: AsyncClient, saved_quiz: Quiz, auth_headers) -> None:
        response = await quiz_client.get("/api/v1/quizzes/", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()[0]["id"] == str(saved_quiz.id)
        assert response.json()[0]["question_count"] == 3

    async def test_list_anonymous(self, quiz_client: AsyncClient, saved_quiz: Quiz) -> None:
        assert (await quiz_client.get("/api/v1/quizzes/")).json() == []

    async def test_get(self, quiz_client: AsyncClient, saved_quiz: Quiz, auth_headers) -> None:
        response = await quiz_client.get(f"/api/v1/quizzes/{saved_quiz.id}", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["topic"] == "World War II"
        assert len(response.json()["questions"]) == 3

    async def test_get_other_users_quiz(
        self, quiz_client: AsyncClient, saved_quiz: Quiz, other_auth_headers
    ) -> None:
        response = await quiz_client.get(f"/api/v1/quizzes/{saved_quiz.id}", headers=other_auth_headers)

        assert response.status_code == 404

    async def test_documents(self, quiz_client: AsyncClient, saved_quiz: Quiz, auth_headers) -> None:
        response = await quiz_client.get(
            f"/api/v1/quizzes/{saved_quiz.id}/document", headers=auth_headers
        )

        documents = response.json()
        assert "End of Answer Key" in documents["answer_key"]
        assert "Good luck!" in documents["student"]
        assert documents["answers_filename"] == "World_War_II_answers.txt"

    async def test_download_questions(self, quiz_client: AsyncClient, saved_quiz: Quiz, auth_headers) -> None:
        response = await quiz_client.get(
            f"/api/v1/quizzes/{saved_quiz.id}/download", params={"kind": "questions"}, headers=auth_headers
        )

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/plain")
        assert (
            response.headers["content-disposition"]
            == 'attachment; filename="World_War_II_questions.txt"'
        )
        assert "Good luck!" in response.text
        assert "Correct Answer" not in response.text

    async def test_download_answers_without_header(
        self, quiz_client: AsyncClient, saved_quiz: Quiz, auth_headers
    ) -> None:
        response = await quiz_client.get(
            f"/api/v1/quizzes/{saved_quiz.id}/download",
            params={"kind": "answers", "include_header": False},
            headers=auth_headers,
        )

        assert response.text.startswith("Question 1:")
        assert "Correct Answer: Option 1A" in response.text
        assert "World_War_II_answers.txt" in response.headers["content-disposition"]

    async def test_delete(
        self, quiz_client: AsyncClient, saved_quiz: Quiz, db_session: AsyncSession, auth_headers
    ) -> None:
        response = await quiz_client.delete(f"/api/v1/quizzes/{saved_quiz.id}", headers=auth_headers)

        assert response.status_code == 200
        assert (await db_session.execute(select(Quiz))).scalars().all() == []

    async def test_delete_missing(self, quiz_client: AsyncClient, auth_headers) -> None:
        response = await quiz_client.delete(f"/api/v1/quizzes/{uuid4()}", headers=auth_headers)

        assert response.status_code == 404
