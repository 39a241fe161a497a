"""Prompt templates used by the chunk gate."""

RELEVANCE_RATING_SYSTEM = """You are a strict relevance rater for a retrieval system.
Reply with a single number between 0.0 and 1.0 and nothing else."""

RELEVANCE_RATING_PROMPT = """Rate the relevance of this text chunk to the query.
Query: {query}
Chunk: {content_preview}

Provide a relevance score from 0.0 to 1.0 where:
- 0.0 = completely irrelevant
- 0.5 = somewhat relevant
- 1.0 = highly relevant

Output only the numeric score."""


def format_content_preview(content: str, max_chars: int) -> str:
    """Truncate chunk content for inclusion in a prompt."""
    if len(content) > max_chars:
        return content[:max_chars] + "..."
    return content
