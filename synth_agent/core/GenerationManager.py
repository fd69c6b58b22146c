#  Copyright © 2025 Dr.-Ing. Paul Wilhelm <paul@wilhelm.dev>
#  This file is part of Synth Agent.

import logging
from contextlib import nullcontext
from enum import Enum
from typing import Any, List, Optional

from synth_agent.ai.AiManager import AiManager
from synth_agent.core.CliManager import CliManager
from synth_agent.generate.AiGenerate import AiGenerate
from synth_agent.generate.GenerationError import CompletionError, ExtractionError, GenerationError
from synth_agent.generate.GenerationSchema import DataFormat, GenerationOutput, GenerationRequest
from synth_agent.generate.chunk_plan import ChunkPlan, get_temperature, plan_chunks
from synth_agent.generate.extract import extract_data
from synth_agent.generate.merge import count_records, merge_chunks
from synth_agent.generate.similarity import remove_similarities

logger = logging.getLogger(__name__)


class GenerationState(Enum):
    PLANNING = 'planning'
    GENERATING = 'generating'
    VALIDATING = 'validating'
    FILTERING = 'filtering'
    MERGING = 'merging'
    DONE = 'done'
    FAILED = 'failed'


class GenerationManager:
    """
    Generation manager.

    Drives one generation request chunk by chunk:
    PLANNING → (GENERATING → VALIDATING → FILTERING) per chunk → MERGING → DONE,
    with FAILED reachable from GENERATING and VALIDATING.

    Chunks are generated strictly sequentially, as each prompt depends on the chunks accepted before it.
    A single failed chunk fails the whole generation; no partial dataset is returned.
    NOTE: Holds per-request state, so use one instance per request.
    """

    def __init__(self, ai: AiManager, cli: Optional[CliManager] = None):
        """
        Initialize generation manager.
        :param ai: AI manager.
        :param cli: CLI manager (optional, enables progress display).
        """
        self.ai = ai
        self.cli = cli

        self.state = GenerationState.PLANNING
        self.chunk_index = 0
        self.chunks: List[Any] = []
        self.error: Optional[GenerationError] = None
        self.total_tokens = 0

    def _set_state(self, state: GenerationState) -> None:
        logger.debug(f"Generation state: {self.state.value} → {state.value} (chunk {self.chunk_index + 1})")
        self.state = state

    def _fail(self, error: GenerationError) -> GenerationError:
        self.error = error
        self._set_state(GenerationState.FAILED)
        logger.error(f"Generation failed at chunk ({self.chunk_index + 1}): {error}")
        return error

    def generate(self, request: GenerationRequest) -> GenerationOutput:
        """
        Generate data for request.
        :param request: Generation request.
        :return: Generation output.
        :raises CompletionError: If a model call fails, times out, or returns empty content.
        :raises ExtractionError: If a chunk does not yield valid data for the requested format.
        """
        self.state = GenerationState.PLANNING
        self.chunk_index = 0
        self.chunks = []
        self.error = None
        self.total_tokens = 0

        plan = plan_chunks(request.size_tier)
        logger.info(
            f"Generating {request.format.value} data in ({plan.chunks}) chunk(s) "
            f"of up to ({plan.tokens_per_chunk}) token(s)"
        )

        progress = self.cli.progress_context("Generating", total=plan.chunks) if self.cli is not None else nullcontext()

        with progress as advance:
            for chunk_index in range(plan.chunks):
                self.chunk_index = chunk_index
                chunk = self._generate_chunk(request, plan, chunk_index)
                self.chunks.append(chunk)
                if advance is not None:
                    advance()

        self._set_state(GenerationState.MERGING)
        merged = merge_chunks(self.chunks, request.format)

        output = GenerationOutput(
            data=merged,
            format=request.format,
            chunks_count=len(self.chunks),
            total_records=count_records(merged, request.format),
            total_tokens=self.total_tokens,
        )

        self._set_state(GenerationState.DONE)
        logger.info(f"Chunks merged: ({output.total_records}) record(s) from ({output.chunks_count}) chunk(s)")
        return output

    def _generate_chunk(self, request: GenerationRequest, plan: ChunkPlan, chunk_index: int) -> Any:
        """
        Generate, validate, and filter one chunk.
        :param request: Generation request.
        :param plan: Chunk plan.
        :param chunk_index: Chunk index (0-based).
        :return: Accepted chunk.
        """
        self._set_state(GenerationState.GENERATING)

        temperature = get_temperature(chunk_index, plan.chunks)
        prompt = AiGenerate.get_prompt_generate(
            base_prompt=request.prompt,
            chunk_index=chunk_index,
            chunks_total=plan.chunks,
            previous_chunks=self.chunks,
            data_format=request.format,
        )

        try:
            result = self.ai.generate(
                system_prompt=AiGenerate.get_system_prompt(request.format),
                prompt=prompt,
                temperature=temperature,
                max_tokens=plan.tokens_per_chunk,
                chunk_index=chunk_index,
                chunks_total=plan.chunks,
            )
        except CompletionError as e:
            raise self._fail(e)

        self.total_tokens += result.total_tokens

        if not result.output_text.strip():
            raise self._fail(CompletionError(f"Empty response for chunk ({chunk_index + 1}/{plan.chunks})"))

        self._set_state(GenerationState.VALIDATING)

        try:
            chunk = self._validate(extract_data(result.output_text, request.format), request.format)
        except ExtractionError as e:
            raise self._fail(e)

        if chunk_index == 0:
            logger.info(f"Chunk ({chunk_index + 1}/{plan.chunks}) accepted at temperature {temperature:.2f}")
            return chunk

        self._set_state(GenerationState.FILTERING)

        filtered = remove_similarities(chunk, self.chunks, request.format)
        logger.info(
            f"Chunk ({chunk_index + 1}/{plan.chunks}) accepted at temperature {temperature:.2f}, "
            f"{self._describe_dropped(chunk, filtered, request.format)}"
        )
        return filtered

    @staticmethod
    def _validate(chunk: Any, data_format: DataFormat) -> Any:
        """
        Check the extracted chunk has the type expected for the format.
        A single JSON object is wrapped into a list of one record.
        :param chunk: Extracted chunk.
        :param data_format: Data format.
        :return: Validated chunk.
        :raises ExtractionError: If the chunk has the wrong type.
        """
        if data_format == DataFormat.JSON:
            if isinstance(chunk, dict):
                return [chunk]
            if isinstance(chunk, list):
                return chunk
        elif isinstance(chunk, str):
            return chunk

        raise ExtractionError(f"Invalid {data_format.value} data generated ({type(chunk).__name__})")

    @staticmethod
    def _describe_dropped(chunk: Any, filtered: Any, data_format: DataFormat) -> str:
        if data_format == DataFormat.JSON and isinstance(filtered, list):
            return f"dropped ({len(chunk) - len(filtered)}) similar record(s)"
        if data_format == DataFormat.CSV:
            dropped = len(chunk.split("\n")) - len(filtered.split("\n"))
            return f"dropped ({dropped}) duplicate line(s)"
        dropped = len(chunk.split(". ")) - len(filtered.split(". "))
        return f"dropped ({dropped}) similar sentence(s)"
