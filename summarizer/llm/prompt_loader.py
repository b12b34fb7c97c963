from pathlib import Path

from summarizer.llm.exceptions import SummarizationError

_DEFAULT_PROMPT_DIR = Path(__file__).parent / "prompts"


def load_prompt_template(path: Path | None = None) -> str:
    """Load the summary prompt template from a file.

    Args:
        path: Path to the prompt template file.
              Defaults to the bundled summary_prompt.txt.

    Returns:
        The raw template string with ``{user_prompt}`` and ``{pdf_text}`` placeholders.

    Raises:
        SummarizationError: if the file cannot be read or lacks a placeholder.
    """
    if path is None:
        path = _DEFAULT_PROMPT_DIR / "summary_prompt.txt"
    try:
        template = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise SummarizationError(f"Failed to load prompt template: {exc}") from exc
    for placeholder in ("{user_prompt}", "{pdf_text}"):
        if placeholder not in template:
            raise SummarizationError(
                f"Prompt template {path} is missing the {placeholder} placeholder"
            )
    return template
