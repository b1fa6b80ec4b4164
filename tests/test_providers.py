"""
Tests for the OpenAI and Anthropic backends using mocked vendor clients.
"""

import unittest
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

from docsum.config import Config
from docsum.exceptions import SummarizationError
from docsum.providers import ProviderRegistry
from docsum.providers.anthropic_provider import AnthropicService, to_anthropic_messages
from docsum.providers.openai_provider import OpenAIService
from docsum.summarization import ChatMessage, SummarizationOptions


def openai_response(content, total_tokens=50):
    return SimpleNamespace(
        choices=[SimpleNamespace(message=SimpleNamespace(content=content))],
        usage=SimpleNamespace(total_tokens=total_tokens),
    )


def anthropic_response(text, input_tokens=30, output_tokens=20):
    return SimpleNamespace(
        content=[SimpleNamespace(type="text", text=text)],
        usage=SimpleNamespace(input_tokens=input_tokens, output_tokens=output_tokens),
    )


class ProviderTestCase(unittest.TestCase):
    def setUp(self):
        patcher = patch("docsum.summarization.engine.estimate_token_count", return_value=0)
        patcher.start()
        self.addCleanup(patcher.stop)


class TestOpenAIService(ProviderTestCase):
    """Test cases for OpenAIService."""

    def test_availability_follows_api_key(self):
        self.assertTrue(OpenAIService(api_key="sk-test").is_available())
        self.assertFalse(OpenAIService(api_key=None).is_available())
        self.assertFalse(OpenAIService(api_key="").is_available())

    def test_complete_request(self):
        """Test the chat completion request and response mapping."""
        client = MagicMock()
        client.chat.completions.create.return_value = openai_response("  A summary.  ", 123)
        service = OpenAIService(api_key="sk-test", model="gpt-4-turbo-preview", client=client)

        completion = service.complete(
            [ChatMessage("system", "sys"), ChatMessage("user", "text")], temperature=0.3, max_tokens=4000
        )

        self.assertEqual(completion.text, "A summary.")
        self.assertEqual(completion.tokens_used, 123)
        client.chat.completions.create.assert_called_once_with(
            model="gpt-4-turbo-preview",
            messages=[{"role": "system", "content": "sys"}, {"role": "user", "content": "text"}],
            max_tokens=4000,
            temperature=0.3,
        )

    def test_reasoning_models_skip_temperature(self):
        """Test temperature is not sent to o-series models."""
        client = MagicMock()
        client.chat.completions.create.return_value = openai_response("ok")
        service = OpenAIService(api_key="sk-test", model="o1-mini", client=client)

        service.complete([ChatMessage("user", "text")], temperature=0.3, max_tokens=100)

        self.assertNotIn("temperature", client.chat.completions.create.call_args.kwargs)

    def test_summarize_multi_chunk(self):
        """Test a two-chunk run issues three calls and sums tokens."""
        client = MagicMock()
        client.chat.completions.create.side_effect = [
            openai_response("S1", 10),
            openai_response("S2", 20),
            openai_response("Final", 30),
        ]
        service = OpenAIService(api_key="sk-test", client=client)

        result = service.summarize(["part one", "part two"], SummarizationOptions(format="academic"))

        self.assertEqual(result.summary, "Final")
        self.assertEqual(result.tokens_used, 60)
        self.assertEqual(result.provider, "openai")
        self.assertEqual(client.chat.completions.create.call_count, 3)

    def test_api_error_wrapped(self):
        """Test vendor errors surface as SummarizationError."""
        client = MagicMock()
        client.chat.completions.create.side_effect = RuntimeError("rate limited")
        service = OpenAIService(api_key="sk-test", client=client)

        with self.assertRaises(SummarizationError) as cm:
            service.summarize(["part"], SummarizationOptions())

        self.assertEqual(cm.exception.provider, "openai")
        self.assertIn("rate limited", str(cm.exception))

    def test_check_credentials(self):
        """Test credential verification against the models endpoint."""
        client = MagicMock()
        service = OpenAIService(api_key="sk-test", client=client)
        self.assertEqual(service.check_credentials(), (True, None))

        client.models.list.side_effect = RuntimeError("401")
        self.assertEqual(service.check_credentials(), (False, "Invalid OpenAI API key"))

        self.assertEqual(
            OpenAIService(api_key=None).check_credentials(), (False, "OPENAI_API_KEY is not set")
        )


class TestAnthropicService(ProviderTestCase):
    """Test cases for AnthropicService."""

    def test_to_anthropic_messages_folds_leading_context(self):
        """Test system turns are split out and leading assistant context folded."""
        system, messages = to_anthropic_messages(
            [
                ChatMessage("system", "Be brief."),
                ChatMessage("assistant", "Previous summary so far:\nS1"),
                ChatMessage("user", "Continue summarizing with this additional context:\n\nB"),
            ]
        )

        self.assertEqual(system, "Be brief.")
        self.assertEqual(len(messages), 1)
        self.assertEqual(messages[0]["role"], "user")
        self.assertTrue(messages[0]["content"].startswith("Previous summary so far:\nS1\n\n"))
        self.assertTrue(messages[0]["content"].endswith("additional context:\n\nB"))

    def test_to_anthropic_messages_plain(self):
        """Test a conversation that already opens with a user turn is unchanged."""
        system, messages = to_anthropic_messages(
            [ChatMessage("user", "hi"), ChatMessage("assistant", "hello")]
        )

        self.assertEqual(system, "")
        self.assertEqual(
            messages, [{"role": "user", "content": "hi"}, {"role": "assistant", "content": "hello"}]
        )

    def test_complete_request(self):
        """Test the Messages API request and response mapping."""
        client = MagicMock()
        client.messages.create.return_value = anthropic_response("Summary.", 30, 20)
        service = AnthropicService(api_key="sk-ant", client=client)

        completion = service.complete(
            [ChatMessage("system", "sys"), ChatMessage("user", "text")], temperature=0.3, max_tokens=4000
        )

        self.assertEqual(completion.text, "Summary.")
        self.assertEqual(completion.tokens_used, 50)
        client.messages.create.assert_called_once_with(
            model="claude-3-opus-20240229",
            max_tokens=4000,
            temperature=0.3,
            messages=[{"role": "user", "content": "text"}],
            system="sys",
        )

    def test_summarize_multi_chunk(self):
        """Test a three-chunk run over the Anthropic backend."""
        client = MagicMock()
        client.messages.create.side_effect = [
            anthropic_response("S1"),
            anthropic_response("S2"),
            anthropic_response("S3"),
            anthropic_response("Final"),
        ]
        service = AnthropicService(api_key="sk-ant", client=client)

        result = service.summarize(["A", "B", "C"], SummarizationOptions(provider="anthropic"))

        self.assertEqual(result.summary, "Final")
        self.assertEqual(result.tokens_used, 200)
        self.assertEqual(client.messages.create.call_count, 4)
        # Every request opens with a user turn
        for call in client.messages.create.call_args_list:
            self.assertEqual(call.kwargs["messages"][0]["role"], "user")

    def test_temperature_clamped_to_anthropic_range(self):
        """Test a temperature above 1.0 is sent as 1.0 with a warning."""
        client = MagicMock()
        client.messages.create.return_value = anthropic_response("Summary.")
        service = AnthropicService(api_key="sk-ant", client=client)

        with self.assertLogs("docsum.providers.anthropic_provider", level="WARNING") as logs:
            service.complete([ChatMessage("user", "text")], temperature=1.5, max_tokens=100)

        self.assertEqual(client.messages.create.call_args.kwargs["temperature"], 1.0)
        self.assertIn("above the Anthropic maximum", logs.output[0])

    def test_temperature_in_range_unchanged(self):
        client = MagicMock()
        client.messages.create.return_value = anthropic_response("Summary.")
        service = AnthropicService(api_key="sk-ant", client=client)

        service.complete([ChatMessage("user", "text")], temperature=0.7, max_tokens=100)

        self.assertEqual(client.messages.create.call_args.kwargs["temperature"], 0.7)


class TestRegistryFromConfig(unittest.TestCase):
    """Test cases for building the registry from configuration."""

    def test_from_config_registers_keyed_backends(self):
        config = Config(openai_api_key=None, anthropic_api_key="sk-ant", anthropic_model="claude-3-haiku-20240307")

        registry = ProviderRegistry.from_config(config)

        self.assertEqual(registry.get_available_providers(), {"anthropic"})
        self.assertEqual(registry.get_service("anthropic").model, "claude-3-haiku-20240307")

    def test_from_config_without_keys(self):
        registry = ProviderRegistry.from_config(Config())
        self.assertEqual(registry.get_available_providers(), set())


if __name__ == "__main__":
    unittest.main()
