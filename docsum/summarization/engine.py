"""
Sequential, context-carrying summarization engine.

A run walks the chunks strictly in order with one model call per chunk. The
first call summarizes chunk 0; every later call also receives the running
summary as a prior assistant turn and its response replaces the running
summary. When there is more than one chunk, a final reconciliation call
merges the running summary with the last chunk's standalone summary.

States: IDLE -> RUNNING -> (RECONCILING) -> COMPLETED, or FAILED from any
non-terminal state. A run object executes exactly once.
"""

import logging
from typing import Callable, Sequence

from ..exceptions import SummarizationError
from ..prompts import compose_reconciliation_instruction
from ..utils import estimate_token_count
from .types import ChatMessage, Completion, RunState, SummarizationOptions, SummarizationResult


logger = logging.getLogger(__name__)

# complete(messages, temperature, max_tokens) -> Completion
CompleteFn = Callable[[list[ChatMessage], float, int], Completion]

FIRST_CHUNK_PROMPT = "Summarize the following text:\n\n{chunk}"
NEXT_CHUNK_PROMPT = "Continue summarizing with this additional context:\n\n{chunk}"
PRIOR_CONTEXT_PROMPT = "Previous summary so far:\n{summary}"
RECONCILIATION_PROMPT = (
    "Based on all the previous summaries and this final part, provide a coherent final summary:"
    "\n\nPrevious summaries:\n{running_summary}\n\nFinal part summary:\n{final_part}"
)


class SummarizationRun:
    """
    One summarization run over an ordered chunk sequence.

    Args:
        complete: Callable issuing a single model call
        instruction: Composed system instruction for the run
        options: Run options (temperature is passed through to every call)
        provider: Provider id reported in the result
        model: Model id reported in the result
        max_tokens: Completion token ceiling per call
    """

    def __init__(
        self,
        complete: CompleteFn,
        instruction: str,
        options: SummarizationOptions,
        provider: str,
        model: str,
        max_tokens: int,
    ):
        self._complete = complete
        self.instruction = instruction
        self.options = options
        self.provider = provider
        self.model = model
        self.max_tokens = max_tokens

        self.state = RunState.IDLE
        self.running_summary = ""
        self.tokens_used = 0
        self.calls_made = 0

    def execute(self, chunks: Sequence[str]) -> SummarizationResult:
        """
        Drive the run to completion.

        Raises:
            SummarizationError: On an empty chunk sequence, a repeated
                execution, or any failed model call (no partial result)
        """
        if self.state is not RunState.IDLE:
            raise SummarizationError(
                f"Summarization run already {self.state.value}", provider=self.provider
            )

        if not chunks:
            self.state = RunState.FAILED
            raise SummarizationError("Nothing to summarize: no chunks were provided", provider=self.provider)

        self.state = RunState.RUNNING
        last_index = len(chunks) - 1
        logger.info(f"Summarizing {len(chunks)} chunks with {self.provider}/{self.model}")

        for index, chunk in enumerate(chunks):
            logger.debug(f"Summarization step {index + 1}/{len(chunks)}")
            chunk_summary = self._summarize_chunk(index, chunk)

            if index == 0 or index < last_index:
                self.running_summary = chunk_summary
            else:
                self.state = RunState.RECONCILING
                self.running_summary = self._reconcile(chunk_summary)

        self.state = RunState.COMPLETED
        logger.info(f"Summarization completed: {self.calls_made} calls, {self.tokens_used} tokens")

        return SummarizationResult(
            summary=self.running_summary,
            provider=self.provider,
            model=self.model,
            tokens_used=self.tokens_used,
        )

    def _summarize_chunk(self, index: int, chunk: str) -> str:
        messages = [ChatMessage("system", self.instruction)]

        if index == 0:
            messages.append(ChatMessage("user", FIRST_CHUNK_PROMPT.format(chunk=chunk)))
        else:
            messages.append(
                ChatMessage("assistant", PRIOR_CONTEXT_PROMPT.format(summary=self.running_summary))
            )
            messages.append(ChatMessage("user", NEXT_CHUNK_PROMPT.format(chunk=chunk)))

        return self._call(messages, chunk_index=index)

    def _reconcile(self, final_part: str) -> str:
        messages = [
            ChatMessage("system", compose_reconciliation_instruction(self.instruction)),
            ChatMessage(
                "user",
                RECONCILIATION_PROMPT.format(
                    running_summary=self.running_summary, final_part=final_part
                ),
            ),
        ]
        return self._call(messages, chunk_index=None)

    def _estimate_prompt_tokens(self, messages: list[ChatMessage]) -> int | None:
        # tiktoken may download its encoding on first use; a failure only drops the estimate
        try:
            return estimate_token_count([m.to_dict() for m in messages], self.model)
        except Exception as e:
            logger.debug(f"Prompt token estimate unavailable: {e}")
            return None

    def _call(self, messages: list[ChatMessage], chunk_index: int | None) -> str:
        label = "reconciliation" if chunk_index is None else f"chunk {chunk_index}"
        if logger.isEnabledFor(logging.DEBUG):
            estimate = self._estimate_prompt_tokens(messages)
            size = f"~{estimate} prompt tokens" if estimate is not None else "prompt size unknown"
            logger.debug(f"Calling {self.provider}/{self.model} for {label} ({size})")

        try:
            completion = self._complete(messages, self.options.temperature, self.max_tokens)
        except Exception as e:
            self.state = RunState.FAILED
            logger.error(f"{self.provider} call failed for {label}: {e}")
            raise SummarizationError(
                f"{self.provider} call failed for {label}: {e}",
                provider=self.provider,
                chunk_index=chunk_index,
                calls_made=self.calls_made,
            ) from e

        self.calls_made += 1
        self.tokens_used += completion.tokens_used
        return completion.text
