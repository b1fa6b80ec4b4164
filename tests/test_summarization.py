"""
Tests for the sequential summarization engine, the provider registry and the
summarize entry point.
"""

import logging
import tempfile
import unittest
from pathlib import Path
from unittest.mock import MagicMock, patch

from docsum.config import Config
from docsum.exceptions import (
    ConfigurationError,
    ExtractionError,
    ProviderUnavailableError,
    SummarizationError,
)
from docsum.extraction import ProcessedDocument
from docsum.providers import ChatSummarizationService, ProviderRegistry
from docsum.summarization import (
    ChatMessage,
    Completion,
    RunState,
    SummarizationOptions,
    SummarizationRun,
    summarize,
    summarize_document,
)


class ScriptedService(ChatSummarizationService):
    """Chat backend that answers from a script and records every request."""

    provider = "scripted"

    def __init__(self, responses, available=True, fail_on_call=None, tokens_per_call=10):
        super().__init__(model="scripted-model", max_tokens=4000)
        self.responses = list(responses)
        self.available = available
        self.fail_on_call = fail_on_call
        self.tokens_per_call = tokens_per_call
        self.requests = []

    def is_available(self):
        return self.available

    def get_provider(self):
        return self.provider

    def complete(self, messages, temperature, max_tokens):
        self.requests.append({"messages": messages, "temperature": temperature, "max_tokens": max_tokens})
        if self.fail_on_call is not None and len(self.requests) == self.fail_on_call:
            raise RuntimeError("upstream timeout")
        return Completion(text=self.responses[len(self.requests) - 1], tokens_used=self.tokens_per_call)


class EngineTestCase(unittest.TestCase):
    """Shared setup that keeps token estimation offline."""

    def setUp(self):
        patcher = patch("docsum.summarization.engine.estimate_token_count", return_value=0)
        patcher.start()
        self.addCleanup(patcher.stop)
        self.options = SummarizationOptions(provider="scripted", temperature=0.7)


class TestSummarizationRun(EngineTestCase):
    """Test cases for SummarizationRun."""

    def _run(self, service):
        return SummarizationRun(
            complete=service.complete,
            instruction="INSTRUCTION",
            options=self.options,
            provider=service.get_provider(),
            model=service.model,
            max_tokens=service.max_tokens,
        )

    def test_single_chunk_single_call(self):
        """Test one chunk means exactly one call and no reconciliation."""
        service = ScriptedService(["Summary of A"])
        run = self._run(service)

        result = run.execute(["chunk A"])

        self.assertEqual(len(service.requests), 1)
        self.assertEqual(result.summary, "Summary of A")
        self.assertEqual(result.tokens_used, 10)
        self.assertEqual(result.provider, "scripted")
        self.assertEqual(result.model, "scripted-model")
        self.assertIs(run.state, RunState.COMPLETED)

        messages = service.requests[0]["messages"]
        self.assertEqual(
            messages,
            [
                ChatMessage("system", "INSTRUCTION"),
                ChatMessage("user", "Summarize the following text:\n\nchunk A"),
            ],
        )

    def test_three_chunks_reconciled(self):
        """Test N chunks mean N chunk calls plus one reconciliation call."""
        service = ScriptedService(["S1", "S2", "S3", "FINAL"])
        run = self._run(service)

        result = run.execute(["A", "B", "C"])

        self.assertEqual(len(service.requests), 4)
        self.assertEqual(result.summary, "FINAL")
        self.assertEqual(result.tokens_used, 40)
        self.assertEqual(run.calls_made, 4)

        second = service.requests[1]["messages"]
        self.assertEqual([m.role for m in second], ["system", "assistant", "user"])
        self.assertEqual(second[1].content, "Previous summary so far:\nS1")
        self.assertEqual(second[2].content, "Continue summarizing with this additional context:\n\nB")

        third = service.requests[2]["messages"]
        self.assertEqual(third[1].content, "Previous summary so far:\nS2")

        reconciliation = service.requests[3]["messages"]
        self.assertEqual([m.role for m in reconciliation], ["system", "user"])
        self.assertEqual(reconciliation[0].content, "INSTRUCTION Provide a final coherent summary.")
        self.assertIn("Previous summaries:\nS2", reconciliation[1].content)
        self.assertIn("Final part summary:\nS3", reconciliation[1].content)

    def test_options_passed_to_every_call(self):
        """Test temperature and token ceiling are forwarded on each call."""
        service = ScriptedService(["S1", "S2", "FINAL"])

        self._run(service).execute(["A", "B"])

        for request in service.requests:
            self.assertEqual(request["temperature"], 0.7)
            self.assertEqual(request["max_tokens"], 4000)

    def test_empty_chunks_rejected(self):
        """Test that an empty chunk sequence fails without calling the model."""
        service = ScriptedService([])
        run = self._run(service)

        with self.assertRaises(SummarizationError) as cm:
            run.execute([])

        self.assertIn("Nothing to summarize", str(cm.exception))
        self.assertEqual(service.requests, [])
        self.assertIs(run.state, RunState.FAILED)

    def test_failure_aborts_run(self):
        """Test a failed call stops the run and reports where it failed."""
        service = ScriptedService(["S1", "S2", "S3"], fail_on_call=2)
        run = self._run(service)

        with self.assertRaises(SummarizationError) as cm:
            run.execute(["A", "B", "C"])

        self.assertEqual(len(service.requests), 2)
        self.assertIs(run.state, RunState.FAILED)
        self.assertEqual(cm.exception.chunk_index, 1)
        self.assertEqual(cm.exception.calls_made, 1)
        self.assertIsInstance(cm.exception.__cause__, RuntimeError)

    def test_reconciliation_failure(self):
        """Test a failed merge call has no chunk index."""
        service = ScriptedService(["S1", "S2"], fail_on_call=3)

        with self.assertRaises(SummarizationError) as cm:
            self._run(service).execute(["A", "B"])

        self.assertIsNone(cm.exception.chunk_index)

    def test_run_executes_once(self):
        """Test that a finished run cannot be executed again."""
        service = ScriptedService(["S1"])
        run = self._run(service)
        run.execute(["A"])

        with self.assertRaises(SummarizationError):
            run.execute(["A"])
        self.assertEqual(len(service.requests), 1)

class TestPromptTokenEstimate(unittest.TestCase):
    """Test cases for the per-call prompt size log."""

    def _run(self, service):
        return SummarizationRun(
            complete=service.complete,
            instruction="INSTRUCTION",
            options=SummarizationOptions(provider="scripted"),
            provider=service.get_provider(),
            model=service.model,
            max_tokens=service.max_tokens,
        )

    @patch("docsum.utils.tiktoken.get_encoding", side_effect=ConnectionError("encoding download blocked"))
    def test_encoding_failure_does_not_fail_run(self, mock_get_encoding):
        """Test an unavailable tokenizer only drops the estimate from the debug log."""
        service = ScriptedService(["Summary of A"])
        run = self._run(service)

        with self.assertLogs("docsum.summarization.engine", level="DEBUG") as logs:
            result = run.execute(["A"])

        mock_get_encoding.assert_called()
        self.assertEqual(result.summary, "Summary of A")
        self.assertIs(run.state, RunState.COMPLETED)
        self.assertTrue(any("prompt size unknown" in line for line in logs.output))

    @patch("docsum.summarization.engine.estimate_token_count")
    def test_estimate_skipped_unless_debug(self, mock_estimate):
        """Test the tokenizer is not touched when debug logging is off."""
        service = ScriptedService(["Summary of A"])
        engine_logger = logging.getLogger("docsum.summarization.engine")
        previous_level = engine_logger.level
        engine_logger.setLevel(logging.INFO)
        self.addCleanup(engine_logger.setLevel, previous_level)

        self._run(service).execute(["A"])

        mock_estimate.assert_not_called()



class TestChatSummarizationService(EngineTestCase):
    """Test cases for the chat backend base class."""

    def test_summarize_composes_instruction(self):
        """Test the system turn carries the composed instruction."""
        service = ScriptedService(["Resumen"])
        options = SummarizationOptions(provider="scripted", format="technical", language="Spanish")

        result = service.summarize(["chunk"], options)

        self.assertEqual(result.summary, "Resumen")
        system = service.requests[0]["messages"][0].content
        self.assertIn("Provide the summary in Spanish.", system)
        self.assertIn("Technical Overview", system)

    def test_unavailable_service_refuses(self):
        """Test an unconfigured backend raises before calling the model."""
        service = ScriptedService(["unused"], available=False)

        with self.assertRaises(ConfigurationError):
            service.summarize(["chunk"], self.options)
        self.assertEqual(service.requests, [])


class TestProviderRegistry(EngineTestCase):
    """Test cases for ProviderRegistry and the summarize entry point."""

    def test_only_available_backends_registered(self):
        """Test availability is probed once at construction."""
        available = ScriptedService([])
        unavailable = MagicMock()
        unavailable.get_provider.return_value = "anthropic"
        unavailable.is_available.return_value = False

        registry = ProviderRegistry([available, unavailable])

        self.assertEqual(registry.get_available_providers(), {"scripted"})
        self.assertTrue(registry.is_available("scripted"))
        self.assertFalse(registry.is_available("anthropic"))
        unavailable.is_available.assert_called_once()
        self.assertIs(registry.get_service("scripted"), available)

    def test_unknown_provider(self):
        """Test an unregistered provider raises ProviderUnavailableError."""
        registry = ProviderRegistry([])

        with self.assertRaises(ProviderUnavailableError) as cm:
            registry.get_service("google")

        self.assertEqual(str(cm.exception), "AI service provider 'google' is not available")
        self.assertIsInstance(cm.exception, ConfigurationError)

    def test_summarize_unavailable_provider_makes_no_calls(self):
        """Test a request for a missing provider never reaches any backend."""
        service = ScriptedService(["unused"])
        registry = ProviderRegistry([service])

        with self.assertRaises(ProviderUnavailableError):
            summarize(["A"], SummarizationOptions(provider="anthropic"), registry)

        self.assertEqual(service.requests, [])

    def test_summarize_routes_to_provider(self):
        """Test summarize dispatches to the selected backend."""
        service = ScriptedService(["S1", "S2", "FINAL"])
        registry = ProviderRegistry([service])

        result = summarize(("A", "B"), self.options, registry)

        self.assertEqual(result.summary, "FINAL")
        self.assertEqual(len(service.requests), 3)


class TestSummarizeDocument(EngineTestCase):
    """Test cases for summarize_document."""

    def setUp(self):
        super().setUp()
        self.temp_dir = tempfile.TemporaryDirectory()
        self.pdf_path = Path(self.temp_dir.name) / "report.pdf"
        self.pdf_path.write_bytes(b"%PDF-1.4")
        self.config = Config(chunk_size=1000, chunk_overlap=50)

    def tearDown(self):
        self.temp_dir.cleanup()

    @patch("docsum.summarization.orchestration.process_pdf")
    def test_extracts_chunks_and_summarizes(self, mock_process_pdf):
        mock_process_pdf.return_value = ProcessedDocument(
            chunks=["A", "B"], metadata={"file_name": "report.pdf", "total_pages": 4}
        )
        service = ScriptedService(["S1", "S2", "FINAL"])

        result, metadata = summarize_document(self.pdf_path, self.options, ProviderRegistry([service]), self.config)

        mock_process_pdf.assert_called_once_with(self.pdf_path, chunk_size=1000, overlap=50)
        self.assertEqual(result.summary, "FINAL")
        self.assertEqual(metadata, {"file_name": "report.pdf", "total_pages": 4, "num_chunks": 2})

    @patch("docsum.summarization.orchestration.process_pdf")
    def test_unavailable_provider_checked_before_extraction(self, mock_process_pdf):
        with self.assertRaises(ProviderUnavailableError):
            summarize_document(
                self.pdf_path, SummarizationOptions(provider="openai"), ProviderRegistry([]), self.config
            )
        mock_process_pdf.assert_not_called()

    @patch("docsum.summarization.orchestration.process_pdf")
    def test_document_without_text_never_reaches_backend(self, mock_process_pdf):
        """Test a scanned PDF with no text layer is reported as an extraction failure."""
        mock_process_pdf.return_value = ProcessedDocument(chunks=[], metadata={"file_name": "report.pdf"})
        service = ScriptedService(["unused"])

        with patch.object(service, "summarize", wraps=service.summarize) as spy:
            with self.assertRaises(ExtractionError) as cm:
                summarize_document(self.pdf_path, self.options, ProviderRegistry([service]), self.config)

        self.assertEqual(str(cm.exception), "No extractable text found in report.pdf")
        spy.assert_not_called()
        self.assertEqual(service.requests, [])


if __name__ == "__main__":
    unittest.main()
