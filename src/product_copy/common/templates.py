"""Prompt templating helpers."""
from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path

DEFAULT_LANGUAGE = "Vietnamese"

MISSING_INFO_MARKER = "(missing information: ...)"

OUTPUT_REQUIREMENTS = "\n".join([
    "- Rewrite the content following the TEMPLATE structure exactly.",
    f'- If a fact is missing, mark it explicitly as "{MISSING_INFO_MARKER}" instead of inventing it.',
    "- Output only the final article content as markdown, with no preamble or commentary.",
])


@dataclass(frozen=True)
class PromptDocument:
    """System instruction plus user message for one generation call."""
    system: str
    user: str

    def messages(self) -> list[dict[str, str]]:
        return [
            {"role": "system", "content": self.system},
            {"role": "user", "content": self.user},
        ]


def system_instruction(language: str = DEFAULT_LANGUAGE) -> str:
    return " ".join([
        "You are an editor writing product introductions for e-commerce.",
        "Strictly apply the structure and formatting of the TEMPLATE provided by the user.",
        "Keep every fact from PRODUCT_INFO as given; never invent figures or data.",
        f"Language: {language}, clear and concise, using markdown headings and bold the way the template does.",
    ])


def build_prompt(
    template: str,
    product_info: str,
    extra_prompt: str = "",
    language: str = DEFAULT_LANGUAGE,
) -> PromptDocument:
    """
    Assemble the prompt sent to the generation service.

    Args:
        template: Markdown template whose structure the output must follow.
        product_info: Product facts to rewrite.
        extra_prompt: Optional extra instructions; skipped when blank.
        language: Target output language.

    Returns:
        The prompt as a :class:`PromptDocument`.
    """
    blocks = [
        f"# TEMPLATE\n{template}",
        f"# PRODUCT_INFO\n{product_info}",
    ]
    if extra_prompt and extra_prompt.strip():
        blocks.append(f"# EXTRA_INSTRUCTIONS\n{extra_prompt.strip()}")
    blocks.append(f"# OUTPUT_REQUIREMENTS\n{OUTPUT_REQUIREMENTS}")
    return PromptDocument(system=system_instruction(language), user="\n\n".join(blocks))


def load_template(path: str) -> str:
    """
    Load a template or product-info file.

    Args:
        path: Path to a UTF-8 text file.
    """
    return Path(path).read_text(encoding="utf-8")
