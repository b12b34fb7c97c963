import re
from pathlib import Path

from summarizer.llm.prompt_loader import load_prompt_template

_PLACEHOLDER = re.compile(r"\{(user_prompt|pdf_text)\}")


class PromptBuilder:
    """Combines the user's instruction and a document's text into one prompt.

    Only the two named placeholders are substituted, in a single pass. Any other
    braces in the template or in the inputs are kept as written.
    """

    def __init__(self, template_path: Path | None = None) -> None:
        self._template = load_prompt_template(template_path)

    def build(self, user_prompt: str, extracted_text: str) -> str:
        values = {"user_prompt": user_prompt, "pdf_text": extracted_text}
        return _PLACEHOLDER.sub(lambda match: values[match.group(1)], self._template)
