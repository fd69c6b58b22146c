#  Copyright © 2025 Dr.-Ing. Paul Wilhelm <paul@wilhelm.dev>
#  This file is part of Synth Agent.

import json
from typing import Any, List, Sequence

from synth_agent.generate.GenerationSchema import DataFormat


class AiGenerate:

    SUMMARY_CHARS = 100

    DIVERSITY_MODIFIERS: List[str] = [
        "Focus on common scenarios",
        "Include edge cases and unusual scenarios",
        "Emphasize extreme or rare cases",
        "Mix different categories or types",
        "Use contrasting or opposing elements",
        "Incorporate unexpected or surprising elements",
        "Focus on niche or specialized scenarios",
        "Blend multiple perspectives or approaches",
    ]

    @staticmethod
    def get_system_prompt(data_format: DataFormat) -> str:
        if data_format == DataFormat.JSON:
            return " ".join([
                "You are a synthetic data generator.",
                "Always respond with valid JSON data only.",
                "Do not include any explanatory text, markdown formatting, or code blocks.",
                "Just return the raw JSON array or object.",
            ])
        if data_format == DataFormat.CSV:
            return " ".join([
                "You are a synthetic data generator.",
                "Always respond with CSV data only: one header row, then one record per row.",
                "Do not include any explanatory text.",
            ])
        return " ".join([
            "You are a synthetic data generator.",
            "Always respond with plain text made of complete sentences.",
            "Do not include any headings, lists, or markdown formatting.",
        ])

    @staticmethod
    def summarize_chunk(chunk: Any) -> str:
        """
        Summarize a previously accepted chunk by its first characters.
        :param chunk: Chunk (records or text).
        :return: Summary.
        """
        text = chunk if isinstance(chunk, str) else json.dumps(chunk, ensure_ascii=False)
        return text[:AiGenerate.SUMMARY_CHARS]

    @staticmethod
    def get_modifier(chunk_index: int) -> str:
        return AiGenerate.DIVERSITY_MODIFIERS[chunk_index % len(AiGenerate.DIVERSITY_MODIFIERS)]

    @staticmethod
    def get_diversity_instructions(chunk_index: int, previous_chunks: Sequence[Any]) -> str:
        if chunk_index == 0 or not previous_chunks:
            return ""

        previous_summary = " ".join(AiGenerate.summarize_chunk(chunk) for chunk in previous_chunks)
        return (
            f"Generate completely different data from the following examples: {previous_summary}. "
            f"Ensure maximum diversity and uniqueness."
        )

    @staticmethod
    def get_format_instructions(data_format: DataFormat) -> str:
        if data_format == DataFormat.JSON:
            return "Ensure the output is in valid JSON format. Do not include any explanatory text outside the JSON structure."
        if data_format == DataFormat.CSV:
            return "Ensure the output is valid CSV with a header row. Do not include any explanatory text outside the CSV rows."
        return "Write the output as plain sentences separated by periods."

    @staticmethod
    def get_prompt_generate(
            base_prompt: str,
            chunk_index: int,
            chunks_total: int,
            previous_chunks: Sequence[Any],
            data_format: DataFormat,
    ) -> str:
        """
        Get prompt for one chunk.
        :param base_prompt: Prompt given by the user.
        :param chunk_index: Chunk index (0-based).
        :param chunks_total: Total number of chunks.
        :param previous_chunks: Chunks accepted so far.
        :param data_format: Data format.
        :return: Prompt.
        """
        modifier = AiGenerate.get_modifier(chunk_index)
        diversity_instructions = AiGenerate.get_diversity_instructions(chunk_index, previous_chunks)
        format_instructions = AiGenerate.get_format_instructions(data_format)

        return "\n".join([
            f"{base_prompt} {modifier}. {diversity_instructions} {format_instructions}",
            f"- This is batch {chunk_index + 1} of {chunks_total}.",
            f"- If generating data for training language models, structure the data as an array of question-answer pairs.",
            f"- If the prompt involves real-world data projection, provide data that extends the trend.",
            f"- For common data types (e.g., user profiles, transactions), ensure data realism and field completeness.",
        ])
