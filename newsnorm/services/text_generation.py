"""Summaries and translations of extracted article bodies.

The extraction engine hands plain text to a ``TextGenerator`` and receives
plain text back. ``GroqTextGenerator`` implements the contract over the Groq
chat completions API (OpenAI-compatible) using ``requests``.
"""

from __future__ import annotations

import logging
import re
from typing import Optional, Protocol

import requests

from newsnorm.config import Settings, load_settings
from newsnorm.crawler.errors import NewsNormError
from newsnorm.models import SourceVariant

logger = logging.getLogger(__name__)

MAX_SUMMARY_INPUT_CHARS = 16000
MAX_TRANSLATION_INPUT_CHARS = 8000
MAX_OUTPUT_TOKENS = 2000
TEMPERATURE = 0.3

PLACEHOLDER_API_KEY = "your_groq_api_key_here"
API_KEY_PREFIX = "gsk_"

SUPPORTED_LANGUAGE_PAIRS = {("en", "vi"), ("vi", "en")}


class TextGenerationError(NewsNormError):
    """Raised when summary or translation generation fails."""


class ApiKeyError(TextGenerationError):
    pass


class GenerationRateLimitError(TextGenerationError):
    pass


class ContentTooLongError(TextGenerationError):
    pass


class UnsupportedLanguagePairError(TextGenerationError):
    def __init__(self, source_language: str, target_language: str):
        self.source_language = source_language
        self.target_language = target_language
        super().__init__(
            "Unsupported language pair. Only Vietnamese-English and "
            "English-Vietnamese are supported."
        )


class TextGenerator(Protocol):
    def summarize(self, text: str) -> str: ...

    def translate(
        self, text: str, source_language: str, target_language: str
    ) -> str: ...


def truncate(text: str, limit: int) -> str:
    if len(text) > limit:
        return text[:limit] + "..."
    return text


def detect_content_source(content: str) -> SourceVariant:
    """Guess which site an article body came from, from markers in the text."""
    if "vnexpress.net" in content or 'class="main_fck_detail"' in content:
        return SourceVariant.VNEXPRESS
    if "nytimes.com" in content or "nyt-a-" in content:
        return SourceVariant.NYTIMES
    return SourceVariant.UNKNOWN


def build_summary_prompt(content: str) -> str:
    body = truncate(content, MAX_SUMMARY_INPUT_CHARS)
    source = detect_content_source(content)

    if source is SourceVariant.NYTIMES:
        return (
            "Please summarize the following New York Times article in "
            "Vietnamese. The summary should:\n"
            "- Be concise but include all main information\n"
            "- Retain important numbers and statistics\n"
            "- Include key points and conclusions\n"
            "- Be approximately 150-300 words\n"
            "- Use clear and understandable language\n"
            "- Maintain the journalistic style of the New York Times\n\n"
            f"Article content:\n{body}\n\n"
            "Summary (in Vietnamese):"
        )

    if source in (SourceVariant.VNEXPRESS, SourceVariant.VNEXPRESS_EN):
        return (
            "Hãy tóm tắt bài viết VNExpress sau đây bằng tiếng Việt. "
            "Tóm tắt cần:\n"
            "- Chi tiết và đầy đủ thông tin quan trọng\n"
            "- Giữ lại tất cả con số, thống kê, tên riêng\n"
            "- Bao gồm nguyên nhân, diễn biến và hệ quả\n"
            "- Độ dài từ 150-300 từ\n"
            "- Chia thành các đoạn rõ ràng\n"
            "- Sử dụng ngôn ngữ chính xác, dễ hiểu\n\n"
            f"Nội dung bài viết:\n{body}\n\n"
            "Tóm tắt:"
        )

    return (
        "Hãy tóm tắt bài báo sau đây bằng tiếng Việt. Tóm tắt cần:\n"
        "- Ngắn gọn nhưng đầy đủ thông tin chính\n"
        "- Giữ lại các con số, thống kê quan trọng\n"
        "- Bao gồm các điểm chính và kết luận\n"
        "- Độ dài khoảng 150-300 từ\n"
        "- Sử dụng ngôn ngữ rõ ràng, dễ hiểu\n"
        "- Giữ lại phong cách báo chí chuyên nghiệp\n\n"
        f"Nội dung bài viết:\n{body}\n\n"
        "Tóm tắt:"
    )


def build_translation_prompt(
    content: str, source_language: str, target_language: str
) -> str:
    pair = (source_language, target_language)
    if pair not in SUPPORTED_LANGUAGE_PAIRS:
        raise UnsupportedLanguagePairError(source_language, target_language)

    body = truncate(content, MAX_TRANSLATION_INPUT_CHARS)
    if pair == ("en", "vi"):
        return (
            "Translate the following English article to Vietnamese. Make the "
            "translation natural and fluent while preserving all important "
            "information, numbers, and proper nouns. Use Vietnamese "
            "journalistic style.\n\n"
            f"English content:\n{body}\n\n"
            "Vietnamese translation:"
        )
    return (
        "Translate the following Vietnamese article to English. Make the "
        "translation natural and fluent while preserving all important "
        "information, numbers, and proper nouns. Use proper English "
        "journalistic style.\n\n"
        f"Vietnamese content:\n{body}\n\n"
        "English translation:"
    )


_SUMMARY_PREFIXES = (
    re.compile(r"^Tóm tắt:\s*", re.IGNORECASE),
    re.compile(r"^Summary.*?:\s*", re.IGNORECASE),
    re.compile(r"^\s*-\s*"),
)
_TRANSLATION_PREFIX = re.compile(r"^.*?translation:\s*", re.IGNORECASE)


def clean_summary(text: str) -> str:
    for pattern in _SUMMARY_PREFIXES:
        text = pattern.sub("", text, count=1)
    return text.strip()


def clean_translation(text: str) -> str:
    return _TRANSLATION_PREFIX.sub("", text, count=1).strip()


def validate_api_key(api_key: Optional[str]) -> str:
    if not api_key:
        raise ApiKeyError("API key not configured")
    if api_key == PLACEHOLDER_API_KEY:
        raise ApiKeyError("Please configure a valid API key")
    if not api_key.startswith(API_KEY_PREFIX):
        raise ApiKeyError("Invalid API key format")
    return api_key


class GroqTextGenerator:
    """``TextGenerator`` backed by the Groq chat completions endpoint."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        session: Optional[requests.Session] = None,
        timeout: float = 60.0,
    ):
        self.settings = settings or load_settings()
        self.api_key = validate_api_key(self.settings.groq_api_key)
        self.session = session or requests.Session()
        self.timeout = timeout

    def summarize(self, text: str) -> str:
        if not text:
            raise TextGenerationError("Content is required")
        prompt = build_summary_prompt(text)
        output = self._complete(prompt, self.settings.summary_model)
        summary = clean_summary(output)
        logger.info(
            "Summarized %d chars into %d chars", len(text), len(summary)
        )
        return summary

    def translate(
        self, text: str, source_language: str, target_language: str
    ) -> str:
        if not text:
            raise TextGenerationError("Content is required")
        prompt = build_translation_prompt(text, source_language, target_language)
        output = self._complete(prompt, self.settings.translation_model)
        return clean_translation(output)

    def _complete(self, prompt: str, model: str) -> str:
        url = self.settings.groq_base_url.rstrip("/") + "/chat/completions"
        payload = {
            "model": model,
            "messages": [{"role": "user", "content": prompt}],
            "max_tokens": MAX_OUTPUT_TOKENS,
            "temperature": TEMPERATURE,
        }
        try:
            resp = self.session.post(
                url,
                json=payload,
                headers={"Authorization": f"Bearer {self.api_key}"},
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise TextGenerationError(f"Text generation request failed: {exc}") from exc

        if resp.status_code != 200:
            self._raise_for_response(resp)

        try:
            data = resp.json()
            return data["choices"][0]["message"]["content"] or ""
        except (ValueError, KeyError, IndexError, TypeError) as exc:
            raise TextGenerationError("Malformed text generation response") from exc

    @staticmethod
    def _raise_for_response(resp: requests.Response) -> None:
        body = resp.text or ""
        lowered = body.lower()
        logger.warning("Text generation returned HTTP %s", resp.status_code)

        if resp.status_code == 401 or "invalid_api_key" in lowered:
            raise ApiKeyError(
                "Invalid API key. Please check your Groq API key configuration."
            )
        if resp.status_code == 429 or "rate limit" in lowered:
            raise GenerationRateLimitError(
                "Rate limit exceeded. Please try again later."
            )
        if "context length" in lowered or "context_length" in lowered:
            raise ContentTooLongError(
                "Article is too long. Please try with a shorter article."
            )
        if "decommissioned" in lowered:
            raise TextGenerationError(
                "Model is no longer supported. Please update the application."
            )
        raise TextGenerationError(
            f"Text generation failed: HTTP {resp.status_code}"
        )
