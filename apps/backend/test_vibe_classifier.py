import os
import unittest
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

from agents.brand.exceptions import VibeResponseError
from agents.brand.vibe_classifier import (
    DEFAULT_VIBE_BACKENDS,
    DEMO_MODE_VIBE,
    GeminiVibeBackend,
    OpenAIVibeBackend,
    VibeBackend,
    VibeCredentials,
    classify_vibe,
    parse_vibe_response,
    select_backend,
    strip_code_fences,
)
from models.brand import VibeAnalysis

VIBE_JSON = '{"tone": "Minimalist Tech", "audience": "Developers", "summary": "Flat monochrome with sharp grids."}'


class FakeBackend(VibeBackend):
    def __init__(self, name, key_field, result=None, error=None):
        self.name = name
        self.key_field = key_field
        self.result = result
        self.error = error
        self.calls = []

    def is_configured(self, credentials):
        return bool(getattr(credentials, self.key_field))

    async def classify(self, raw_text, credentials):
        self.calls.append(raw_text)
        if self.error is not None:
            raise self.error
        return self.result


class ParseResponseTests(unittest.TestCase):
    def test_strip_code_fences(self):
        self.assertEqual(strip_code_fences('```json\n{"a": 1}\n```'), '{"a": 1}')
        self.assertEqual(strip_code_fences('  ```{"a": 1}```  '), '{"a": 1}')
        self.assertEqual(strip_code_fences('{"a": 1}'), '{"a": 1}')

    def test_fenced_json_parses(self):
        vibe = parse_vibe_response(f"```json\n{VIBE_JSON}\n```")
        self.assertEqual(vibe.tone, "Minimalist Tech")
        self.assertEqual(vibe.summary, "Flat monochrome with sharp grids.")

    def test_vibe_key_is_accepted_as_summary(self):
        vibe = parse_vibe_response('{"tone": "Playful Modern", "audience": "Designers", "vibe": "Corporate Memphis"}')
        self.assertEqual(vibe.summary, "Corporate Memphis")
        self.assertEqual(vibe.model_dump(), {"tone": "Playful Modern", "audience": "Designers", "summary": "Corporate Memphis"})

    def test_invalid_responses(self):
        for text in ("not json", "[1, 2]", '{"tone": "x"}', "", None):
            with self.subTest(text=text):
                with self.assertRaises(VibeResponseError):
                    parse_vibe_response(text)


class CredentialsTests(unittest.TestCase):
    def test_from_env(self):
        with patch.dict(os.environ, {"GOOGLE_API_KEY": "g-key", "OPENAI_API_KEY": ""}, clear=True):
            credentials = VibeCredentials.from_env()
        self.assertEqual(credentials.google_api_key, "g-key")
        self.assertIsNone(credentials.openai_api_key)

    def test_gemini_key_alias(self):
        with patch.dict(os.environ, {"GEMINI_API_KEY": "gem"}, clear=True):
            self.assertEqual(VibeCredentials.from_env().google_api_key, "gem")

    def test_describe_hides_values(self):
        described = VibeCredentials(google_api_key="secret").describe()
        self.assertEqual(described, {"google": True, "openai": False})
        self.assertNotIn("secret", str(described))


class SelectBackendTests(unittest.TestCase):
    def test_default_priority(self):
        both = VibeCredentials(google_api_key="g", openai_api_key="o")
        self.assertIsInstance(select_backend(both), GeminiVibeBackend)
        self.assertIsInstance(select_backend(VibeCredentials(openai_api_key="o")), OpenAIVibeBackend)
        self.assertIsNone(select_backend(VibeCredentials()))

    def test_default_backends_order(self):
        self.assertEqual([b.name for b in DEFAULT_VIBE_BACKENDS], ["gemini", "openai"])


class ClassifyVibeTests(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.primary = FakeBackend("primary", "google_api_key", result=VibeAnalysis(tone="A", audience="A", summary="A"))
        self.secondary = FakeBackend("secondary", "openai_api_key", result=VibeAnalysis(tone="B", audience="B", summary="B"))
        self.backends = (self.primary, self.secondary)

    async def test_primary_preferred_when_both_configured(self):
        credentials = VibeCredentials(google_api_key="g", openai_api_key="o")
        vibe = await classify_vibe("text", credentials, self.backends)
        self.assertEqual(vibe.tone, "A")
        self.assertEqual(self.primary.calls, ["text"])
        self.assertEqual(self.secondary.calls, [])

    async def test_secondary_used_when_only_it_is_configured(self):
        vibe = await classify_vibe("text", VibeCredentials(openai_api_key="o"), self.backends)
        self.assertEqual(vibe.tone, "B")
        self.assertEqual(self.primary.calls, [])

    async def test_demo_mode_without_credentials(self):
        vibe = await classify_vibe("text", VibeCredentials(), self.backends)
        self.assertEqual(vibe, DEMO_MODE_VIBE)
        self.assertEqual(
            (vibe.tone, vibe.audience, vibe.summary),
            ("Demo Mode", "No API Key", "Key missing. Check .env file and restart server."),
        )
        self.assertEqual(self.primary.calls + self.secondary.calls, [])

    async def test_backend_failure_becomes_error_vibe(self):
        self.primary.error = RuntimeError("quota exceeded")
        credentials = VibeCredentials(google_api_key="g", openai_api_key="o")
        vibe = await classify_vibe("text", credentials, self.backends)
        self.assertEqual((vibe.tone, vibe.audience), ("Error", "Analysis Failed"))
        self.assertEqual(vibe.summary, "Error: quota exceeded")
        # No fallback to the next backend
        self.assertEqual(self.secondary.calls, [])

    async def test_failure_without_message_uses_exception_name(self):
        self.primary.error = TimeoutError()
        vibe = await classify_vibe("text", VibeCredentials(google_api_key="g"), self.backends)
        self.assertEqual(vibe.summary, "Error: TimeoutError")

    async def test_parse_failure_becomes_error_vibe(self):
        self.primary.error = VibeResponseError("Response is not valid JSON")
        vibe = await classify_vibe("text", VibeCredentials(google_api_key="g"), self.backends)
        self.assertEqual(vibe.tone, "Error")
        self.assertTrue(vibe.summary.startswith("Error: Response is not valid JSON"))


class GeminiBackendTests(unittest.IsolatedAsyncioTestCase):
    async def test_classify(self):
        client = MagicMock()
        client.aio.models.generate_content = AsyncMock(return_value=SimpleNamespace(text=f"```json\n{VIBE_JSON}\n```"))
        with patch("agents.brand.vibe_classifier.get_client", return_value=(client, "gemini-3-flash-preview")) as get_client:
            vibe = await GeminiVibeBackend().classify("Heading: Acme", VibeCredentials(google_api_key="g-key"))

        get_client.assert_called_once_with("gemini-3-flash-preview", "g-key")
        kwargs = client.aio.models.generate_content.call_args.kwargs
        self.assertEqual(kwargs["model"], "gemini-3-flash-preview")
        self.assertIn("Heading: Acme", kwargs["contents"])
        self.assertIn('"tone"', kwargs["contents"])
        self.assertEqual(vibe.audience, "Developers")

    async def test_empty_response_fails_through_classifier(self):
        client = MagicMock()
        client.aio.models.generate_content = AsyncMock(return_value=SimpleNamespace(text=""))
        with patch("agents.brand.vibe_classifier.get_client", return_value=(client, "gemini-3-flash-preview")):
            vibe = await classify_vibe("x", VibeCredentials(google_api_key="g-key"))
        self.assertEqual(vibe.tone, "Error")
        self.assertIn("empty response", vibe.summary)


class OpenAIBackendTests(unittest.IsolatedAsyncioTestCase):
    async def test_classify(self):
        completion = SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=VIBE_JSON))])
        client = MagicMock()
        client.chat.completions.create = AsyncMock(return_value=completion)
        with patch("agents.brand.vibe_classifier.get_client", return_value=(client, "gpt-3.5-turbo")) as get_client:
            vibe = await OpenAIVibeBackend().classify("Heading: Acme", VibeCredentials(openai_api_key="o-key"))

        get_client.assert_called_once_with("gpt-3.5-turbo", "o-key")
        kwargs = client.chat.completions.create.call_args.kwargs
        self.assertEqual(kwargs["response_format"], {"type": "json_object"})
        self.assertEqual(kwargs["messages"][0]["role"], "system")
        self.assertIn("Heading: Acme", kwargs["messages"][1]["content"])
        self.assertEqual(vibe.tone, "Minimalist Tech")


if __name__ == "__main__":
    unittest.main()
