"""
Prompt assembly for grounded answer generation.

Builds the single prompt sent to the answer generator: behavior policy,
conversation so far, numbered knowledge contexts, the new question and the
closing answer style block, always in that order. Pure and deterministic.

Dependencies: langchain_core.prompts
System role: Prompt template for grounded RAG answers
"""

from typing import Sequence

from langchain_core.prompts import PromptTemplate

from docqa.core.rag.schemas import ConversationMessage, RetrievedContext

BEHAVIOR_POLICY = """You are a helpful and conversational AI assistant.
Answer using ONLY the Relevant Knowledge Context below.

Tone Guidelines:
- Be calm, neutral, and professional.
- Avoid sounding judgmental, strict, or harsh.
- Do not lecture the user.
- Do not exaggerate consequences.
- Present policies factually and neutrally.
- Be supportive and understanding in tone.

Response Style:
- Keep answers easy to read.
- Use bullet points when helpful.
- Use short paragraphs.
- If explaining consequences, present them matter-of-factly.
- Avoid dramatic phrasing.
- Avoid phrases like "you are in trouble" or "serious consequences".

Grounding Rules:
- If the context is empty or does not answer the question, reply with a short, neutral apology saying you do not have that information.
- Never fill gaps with outside or general knowledge."""

ANSWER_STYLE = """Answer:
- Write in a natural conversational tone.
- Keep it easy to read.
- Use bullet points when listing items.
- Use short paragraphs.
- Use numbered steps if explaining a process."""

RAG_ANSWER_PROMPT = PromptTemplate.from_template(
    """{policy}

Conversation So Far:
{conversation}

Relevant Knowledge Context:
{context}

User's New Question:
{question}

{answer_style}"""
)

_ROLE_LABELS = {"user": "User", "assistant": "Assistant"}


def format_history(history: Sequence[ConversationMessage]) -> str:
    """Render history as "User: ..." / "Assistant: ..." lines in original order."""
    return "".join(f"{_ROLE_LABELS[message.role]}: {message.content}\n" for message in history)


def format_contexts(contexts: Sequence[RetrievedContext]) -> str:
    """Render contexts as "Context n:" blocks in rank order."""
    return "".join(f"Context {context.number}:\n{context.content}\n\n" for context in contexts)


def assemble(
    question: str,
    contexts: Sequence[RetrievedContext],
    history: Sequence[ConversationMessage] = (),
) -> str:
    """
    Assemble the grounded answer prompt.

    Args:
        question: User question, included verbatim
        contexts: Retrieved contexts in rank order
        history: Prior conversation in original order

    Returns:
        str: Prompt text
    """
    return RAG_ANSWER_PROMPT.format(
        policy=BEHAVIOR_POLICY,
        conversation=format_history(history),
        context=format_contexts(contexts),
        question=question,
        answer_style=ANSWER_STYLE,
    )
