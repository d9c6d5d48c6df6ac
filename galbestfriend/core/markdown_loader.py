"""
Prompt markdown loader
Reads ID-keyed prompt sections from a markdown file with markdown-it
"""

import re
from pathlib import Path

from markdown_it import MarkdownIt

from .exceptions import ConfigurationError
from .logging import get_logger

logger = get_logger(__name__)

DEFAULT_PROMPT_FILE = Path(__file__).parent.parent / "prompts" / "COMPANION.md"

_ID_PATTERN = re.compile(r"\*\*ID\*\*:\s*`([^`]+)`")


class PromptMarkdownLoader:
    """
    Loads prompt sections

    A section starts at an H3 heading, is named by a ``**ID**: `name` ``
    line and its text is the first fenced block that follows.
    """

    def __init__(self, path: str | Path = DEFAULT_PROMPT_FILE):
        self.path = Path(path)
        self.sections: dict[str, str] = {}
        self.titles: dict[str, str] = {}
        self._parser = MarkdownIt()
        self._load()

    def _load(self) -> None:
        if not self.path.exists():
            raise ConfigurationError(
                f"Prompt file not found at {self.path}",
                details={"path": str(self.path)},
            )

        tokens = self._parser.parse(self.path.read_text(encoding="utf-8"))

        title = ""
        section_id: str | None = None
        in_heading = False
        for token in tokens:
            if token.type == "heading_open" and token.tag == "h3":
                title, section_id, in_heading = "", None, True
            elif token.type == "heading_close":
                in_heading = False
            elif token.type == "inline" and in_heading:
                title = token.content.strip()
            elif token.type == "inline":
                match = _ID_PATTERN.search(token.content)
                if match:
                    section_id = match.group(1)
            elif token.type == "fence" and section_id and section_id not in self.sections:
                self.sections[section_id] = token.content.strip()
                self.titles[section_id] = title

        logger.debug(f"Loaded {len(self.sections)} prompt sections from {self.path.name}")

    def get(self, section_id: str) -> str:
        """Section text; raises ConfigurationError when missing"""
        try:
            return self.sections[section_id]
        except KeyError:
            raise ConfigurationError(
                f"Prompt section '{section_id}' missing from {self.path.name}",
                details={"section": section_id},
            ) from None
