"""Prompt management module.

Prompts live in text files next to this module. Hosts that want a different
wording point the service at their own file explicitly.
"""

from functools import lru_cache
from pathlib import Path

_PROMPTS_DIR = Path(__file__).parent

PREDICT_NEXT_MESSAGE = "predict_next_message"


def read_prompt_file(path: str | Path) -> str:
    """Read a prompt from an explicit file.

    Args:
        path: Path to a UTF-8 text file

    Returns:
        Prompt text with surrounding whitespace stripped

    Raises:
        OSError: If the file cannot be read
        UnicodeDecodeError: If the file is not valid UTF-8
        ValueError: If the file is empty
    """
    text = Path(path).read_text(encoding="utf-8").strip()
    if not text:
        raise ValueError(f"Prompt file is empty: {path}")
    return text


@lru_cache(maxsize=16)
def load_prompt(name: str) -> str:
    """Load a prompt bundled with the package.

    Args:
        name: Prompt name (without .txt extension)

    Returns:
        Prompt text with surrounding whitespace stripped

    Raises:
        FileNotFoundError: If no bundled prompt has that name
    """
    package_path = _PROMPTS_DIR / f"{name}.txt"
    if not package_path.is_file():
        raise FileNotFoundError(f"Prompt '{name}' not found at {package_path}")
    return read_prompt_file(package_path)


def get_prediction_prompt() -> str:
    """Get the system instruction for next-message prediction."""
    return load_prompt(PREDICT_NEXT_MESSAGE)


def clear_cache() -> None:
    """Clear the prompt cache (useful after modifying prompt files)."""
    load_prompt.cache_clear()


__all__ = [
    "PREDICT_NEXT_MESSAGE",
    "load_prompt",
    "read_prompt_file",
    "get_prediction_prompt",
    "clear_cache",
]
