#  Copyright © 2025 Dr.-Ing. Paul Wilhelm <paul@wilhelm.dev>
#  This file is part of Synth Agent.

from synth_agent.generate.AiGenerate import AiGenerate
from synth_agent.generate.GenerationSchema import DataFormat


class TestGetPromptGenerate:
    """Test suite for per-chunk prompt construction."""

    def test_first_chunk_has_no_diversity_instructions(self):
        """Test the first chunk only gets modifier, format hint, and batch position."""
        prompt = AiGenerate.get_prompt_generate(
            base_prompt="user profiles",
            chunk_index=0,
            chunks_total=3,
            previous_chunks=[],
            data_format=DataFormat.JSON,
        )
        first_line = prompt.split("\n")[0]
        assert first_line.startswith("user profiles Focus on common scenarios.")
        assert "Generate completely different data" not in prompt
        assert "valid JSON format" in prompt
        assert "- This is batch 1 of 3." in prompt

    def test_later_chunk_summarizes_previous_chunks(self):
        """Test previous chunks are summarized and the modifier rotates."""
        previous = [[{"name": "Alice", "age": 30}]]
        prompt = AiGenerate.get_prompt_generate(
            base_prompt="user profiles",
            chunk_index=1,
            chunks_total=3,
            previous_chunks=previous,
            data_format=DataFormat.JSON,
        )
        assert "Include edge cases and unusual scenarios" in prompt
        assert "Generate completely different data from the following examples:" in prompt
        assert '"name": "Alice"' in prompt
        assert "Ensure maximum diversity and uniqueness." in prompt
        assert "- This is batch 2 of 3." in prompt

    def test_format_instructions_per_format(self):
        """Test each format gets its own output hint."""
        csv_prompt = AiGenerate.get_prompt_generate("orders", 0, 1, [], DataFormat.CSV)
        text_prompt = AiGenerate.get_prompt_generate("stories", 0, 1, [], DataFormat.TEXT)
        assert "valid CSV with a header row" in csv_prompt
        assert "plain sentences" in text_prompt

    def test_additional_instructions_present(self):
        """Test the fixed trailing instructions are always included."""
        prompt = AiGenerate.get_prompt_generate("anything", 0, 1, [], DataFormat.TEXT)
        assert "question-answer pairs" in prompt
        assert "extends the trend" in prompt
        assert "field completeness" in prompt


def test_modifier_rotates_with_period_eight():
    assert AiGenerate.get_modifier(0) == AiGenerate.get_modifier(8)
    assert AiGenerate.get_modifier(3) == "Mix different categories or types"
    assert len(set(AiGenerate.get_modifier(i) for i in range(8))) == 8


def test_summarize_chunk_truncates():
    long_text = "x" * 500
    assert AiGenerate.summarize_chunk(long_text) == "x" * AiGenerate.SUMMARY_CHARS
    assert AiGenerate.summarize_chunk([1, 2]) == "[1, 2]"


def test_system_prompt_mentions_format():
    assert "JSON" in AiGenerate.get_system_prompt(DataFormat.JSON)
    assert "CSV" in AiGenerate.get_system_prompt(DataFormat.CSV)
    assert "plain text" in AiGenerate.get_system_prompt(DataFormat.TEXT)
