"""Prompt assets for the extraction and verification stages.

Each template is a versioned Markdown file under ``llm/prompts``. Templates are
treated as opaque configuration: code only selects and concatenates them, the
output-format contract lives in the text itself.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

_PROMPTS_DIR = Path(__file__).resolve().parent / "prompts"

_EXTRACTION_FILES = {
    "normalized": "extraction_normalized.md",
    "quadrilateral": "extraction_quadrilateral.md",
}
_VERIFICATION_FILE = "verification.md"


def available_variants() -> list[str]:
    return sorted(_EXTRACTION_FILES)


def available_prompts() -> list[str]:
    """Names accepted by :func:`load_prompt`."""
    return sorted(Path(name).stem for name in [*_EXTRACTION_FILES.values(), _VERIFICATION_FILE])


def load_extraction_prompt(variant: str = "normalized") -> str:
    try:
        filename = _EXTRACTION_FILES[variant]
    except KeyError:
        raise ValueError(
            f"Unknown extraction variant {variant!r}; expected one of {available_variants()}"
        ) from None
    return _read_prompt(filename)


def load_verification_prompt() -> str:
    return _read_prompt(_VERIFICATION_FILE)


def load_prompt(name: str) -> str:
    if name not in available_prompts():
        raise ValueError(f"Unknown prompt {name!r}; expected one of {available_prompts()}")
    return _read_prompt(f"{name}.md")


def build_verification_prompt(raw_csv: str, template: str | None = None) -> str:
    """Append the extraction-stage CSV to the verification template verbatim."""
    if template is None:
        template = load_verification_prompt()
    return f"{template}\n{raw_csv}"


@lru_cache(maxsize=None)
def _read_prompt(filename: str) -> str:
    return (_PROMPTS_DIR / filename).read_text(encoding="utf-8").strip()


__all__ = [
    "available_prompts",
    "available_variants",
    "build_verification_prompt",
    "load_extraction_prompt",
    "load_prompt",
    "load_verification_prompt",
]
