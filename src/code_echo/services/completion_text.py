"""Prompt assembly and clean-up of raw model output."""

import re

from code_echo.entities import EditContext

EXISTING_CODE_LABEL = "EXISTING CODE (DO NOT REPEAT THIS):"

SYSTEM_RULES = (
    "You are a code completion assistant. Your task is to ONLY complete the remaining part of the code. "
    "IMPORTANT RULES:\n"
    "1. NEVER repeat any code that is already written\n"
    "2. ONLY provide the part that should come AFTER the cursor\n"
    "3. If the existing code is 'def square(', you should ONLY return 'number): return number ** 2'\n"
    "4. DO NOT include any markdown formatting\n"
    "5. DO NOT include any explanations or comments\n"
    "6. Preserve the indentation level of the current line\n"
    "7. For new lines, use the same indentation as the current line\n"
)

INSTRUCTIONS = (
    "INSTRUCTIONS: Complete the code starting from where the cursor is. "
    "DO NOT repeat any existing code. Only provide the completion part."
)

_FENCE_OPEN = re.compile(r"```[\w+-]*\n")


def build_prompt(context: EditContext) -> str:
    """Build the single user message sent to the model.

    Layout: the rule block, the already-typed prefix under a do-not-repeat
    label, the surrounding lines and a closing instruction.
    """
    return (
        f"{SYSTEM_RULES}"
        "Here is the context:\n"
        f"{EXISTING_CODE_LABEL}\n{context.prefix_text}\n\n"
        f"CONTEXT:\n{context.surrounding_text}\n\n"
        f"{INSTRUCTIONS}"
    )


def strip_markdown_fences(text: str) -> str:
    return _FENCE_OPEN.sub("", text).replace("```", "")


def strip_echoed_prefix(text: str, prefix: str) -> str:
    """Drop the typed prefix if the model repeated it.

    The comparison ignores the prefix's indentation because the reply has
    already been trimmed.
    """
    typed = prefix.strip()
    if typed and text.startswith(typed):
        return text[len(typed) :]
    return text


def reindent(text: str, base_indentation: str) -> str:
    """Fit a multi-line completion to the cursor's line.

    The first line continues the current line, so it loses its leading
    whitespace. Every following non-blank line gets the base indentation in
    front of its own relative indentation.
    """
    lines = text.split("\n")
    fixed = [lines[0].lstrip()]
    for line in lines[1:]:
        fixed.append(base_indentation + line if line.strip() else "")
    return "\n".join(fixed)


def normalize_completion(raw: str, prefix: str) -> str:
    """Turn a raw model reply into insertable text.

    Args:
        raw: Text returned by the model
        prefix: Text from the start of the line up to the cursor

    Returns:
        The cleaned completion; empty if nothing usable is left
    """
    text = strip_markdown_fences(raw).strip()
    text = strip_echoed_prefix(text, prefix)
    base_indentation = prefix[: len(prefix) - len(prefix.lstrip())]
    text = reindent(text, base_indentation)
    return text if text.strip() else ""
