"""Tests for the Groq-backed summary and translation collaborator."""

import pytest
import requests

from newsnorm.config import Settings
from newsnorm.models import SourceVariant
from newsnorm.services.text_generation import (
    MAX_SUMMARY_INPUT_CHARS,
    ApiKeyError,
    ContentTooLongError,
    GenerationRateLimitError,
    GroqTextGenerator,
    TextGenerationError,
    UnsupportedLanguagePairError,
    build_summary_prompt,
    build_translation_prompt,
    clean_summary,
    clean_translation,
    detect_content_source,
    truncate,
    validate_api_key,
)

API_KEY = "gsk_test_key"


class FakeResponse:
    def __init__(self, status_code=200, payload=None, text=""):
        self.status_code = status_code
        self._payload = payload
        self.text = text

    def json(self):
        if self._payload is None:
            raise ValueError("no json")
        return self._payload


class FakeSession:
    def __init__(self, response=None, exc=None):
        self.response = response
        self.exc = exc
        self.posts = []

    def post(self, url, json=None, headers=None, timeout=None):
        self.posts.append({"url": url, "json": json, "headers": headers})
        if self.exc is not None:
            raise self.exc
        return self.response


def completion(content):
    return FakeResponse(payload={"choices": [{"message": {"content": content}}]})


def make_generator(response=None, exc=None, **settings_kwargs):
    settings = Settings(groq_api_key=API_KEY, **settings_kwargs)
    session = FakeSession(response=response, exc=exc)
    return GroqTextGenerator(settings=settings, session=session), session


class TestPrompts:
    def test_truncate(self):
        assert truncate("abcdef", 3) == "abc..."
        assert truncate("abc", 3) == "abc"

    @pytest.mark.parametrize(
        "content,expected",
        [
            ("Read more at vnexpress.net", SourceVariant.VNEXPRESS),
            ('<div class="main_fck_detail">', SourceVariant.VNEXPRESS),
            ("Source: nytimes.com", SourceVariant.NYTIMES),
            ("Plain article text", SourceVariant.UNKNOWN),
        ],
    )
    def test_detect_content_source(self, content, expected):
        assert detect_content_source(content) is expected

    def test_summary_prompt_per_source(self):
        assert "New York Times" in build_summary_prompt("From nytimes.com today")
        assert "VNExpress" in build_summary_prompt("Theo vnexpress.net")
        assert build_summary_prompt("Tin tức").startswith("Hãy tóm tắt bài báo")

    def test_summary_prompt_truncates_long_content(self):
        prompt = build_summary_prompt("a" * (MAX_SUMMARY_INPUT_CHARS + 100))
        assert "a" * MAX_SUMMARY_INPUT_CHARS + "..." in prompt
        assert "a" * (MAX_SUMMARY_INPUT_CHARS + 1) not in prompt

    def test_translation_prompts(self):
        assert "English article to Vietnamese" in build_translation_prompt("x", "en", "vi")
        assert "Vietnamese article to English" in build_translation_prompt("x", "vi", "en")

    @pytest.mark.parametrize("pair", [("vi", "vi"), ("en", "fr")])
    def test_unsupported_language_pair(self, pair):
        with pytest.raises(UnsupportedLanguagePairError):
            build_translation_prompt("x", *pair)


class TestOutputCleanup:
    def test_clean_summary(self):
        assert clean_summary("Tóm tắt: Nội dung chính.") == "Nội dung chính."
        assert clean_summary("Summary (in Vietnamese): Nội dung.") == "Nội dung."

    def test_clean_translation(self):
        assert clean_translation("English translation: Hello.") == "Hello."
        assert clean_translation("Hello.") == "Hello."


class TestApiKey:
    @pytest.mark.parametrize(
        "key,message",
        [
            (None, "API key not configured"),
            ("your_groq_api_key_here", "Please configure a valid API key"),
            ("sk-other", "Invalid API key format"),
        ],
    )
    def test_invalid_keys(self, key, message):
        with pytest.raises(ApiKeyError, match=message):
            validate_api_key(key)

    def test_generator_requires_key(self):
        with pytest.raises(ApiKeyError):
            GroqTextGenerator(settings=Settings(), session=FakeSession())


class TestGroqTextGenerator:
    def test_summarize_posts_chat_completion(self):
        generator, session = make_generator(completion("Tóm tắt: Bão đổ bộ."))

        assert generator.summarize("The storm made landfall.") == "Bão đổ bộ."

        post = session.posts[0]
        assert post["url"] == "https://api.groq.com/openai/v1/chat/completions"
        assert post["headers"]["Authorization"] == f"Bearer {API_KEY}"
        assert post["json"]["model"] == "llama-3.3-70b-versatile"
        assert post["json"]["messages"][0]["role"] == "user"

    def test_translate_uses_translation_model(self):
        generator, session = make_generator(
            completion("Vietnamese translation: Xin chào."),
            translation_model="custom-model",
        )

        assert generator.translate("Hello.", "en", "vi") == "Xin chào."
        assert session.posts[0]["json"]["model"] == "custom-model"

    def test_empty_content_is_rejected(self):
        generator, session = make_generator(completion("x"))
        with pytest.raises(TextGenerationError, match="Content is required"):
            generator.summarize("")
        assert session.posts == []

    @pytest.mark.parametrize(
        "status,text,error",
        [
            (401, "", ApiKeyError),
            (400, '{"error": {"code": "invalid_api_key"}}', ApiKeyError),
            (429, "", GenerationRateLimitError),
            (400, "Please reduce the context length", ContentTooLongError),
            (400, "model has been decommissioned", TextGenerationError),
            (500, "boom", TextGenerationError),
        ],
    )
    def test_error_responses(self, status, text, error):
        generator, _ = make_generator(FakeResponse(status_code=status, text=text))
        with pytest.raises(error):
            generator.summarize("Some article text.")

    def test_transport_failure(self):
        generator, _ = make_generator(exc=requests.ConnectionError("down"))
        with pytest.raises(TextGenerationError, match="request failed"):
            generator.summarize("Some article text.")

    def test_malformed_payload(self):
        generator, _ = make_generator(FakeResponse(payload={"choices": []}))
        with pytest.raises(TextGenerationError, match="Malformed"):
            generator.summarize("Some article text.")
