from __future__ import annotations

from pathlib import Path

import pytest

from llm import templates
from utils.book_csv import check_book_csv

PROMPT_DIR = Path(__file__).resolve().parents[2] / "src" / "llm" / "prompts"


def _example_output(prompt: str) -> str:
    """Return the worked example CSV that follows the last 'Example Output' marker."""
    tail = prompt.rsplit("Example Output", 1)[1]
    lines = tail.splitlines()[1:]
    block: list[str] = []
    for line in lines:
        if not line.strip():
            break
        block.append(line)
    return "\n".join(block)


def test_prompts_loaded_from_files() -> None:
    expected = (PROMPT_DIR / "verification.md").read_text(encoding="utf-8").strip()
    assert templates.load_verification_prompt() == expected
    expected = (PROMPT_DIR / "extraction_normalized.md").read_text(encoding="utf-8").strip()
    assert templates.load_extraction_prompt() == expected


@pytest.mark.parametrize("variant", ["normalized", "quadrilateral"])
def test_extraction_prompts_state_csv_contract(variant: str) -> None:
    prompt = templates.load_extraction_prompt(variant)
    assert "title,author,coordinates" in prompt
    assert "double quotes" in prompt
    assert "Unknown" in prompt
    assert check_book_csv(_example_output(prompt)) == []


def test_normalized_variant_uses_unit_interval_boxes() -> None:
    prompt = templates.load_extraction_prompt("normalized")
    assert "[ymin, xmin, ymax, xmax]" in prompt
    assert "between 0.0 and 1.0" in prompt
    assert "not to correct it" in prompt


def test_quadrilateral_variant_uses_pixel_corners() -> None:
    prompt = templates.load_extraction_prompt("quadrilateral")
    assert "[x1, y1, x2, y2, x3, y3, x4, y4]" in prompt
    assert "pixel" in prompt
    example = _example_output(prompt).splitlines()[1]
    coordinates = example.rsplit('","', 1)[1].rstrip('"')
    assert len(coordinates.strip("[]").split(",")) == 8


def test_verification_prompt_keeps_coordinates_and_contract() -> None:
    prompt = templates.load_verification_prompt()
    assert "exactly as-is" in prompt
    assert "title,author,coordinates" in prompt
    assert check_book_csv(_example_output(prompt)) == []
    assert prompt.endswith("Here is the csv input:")


def test_build_verification_prompt_appends_raw_csv(raw_csv: str) -> None:
    prompt = templates.build_verification_prompt(raw_csv)
    assert prompt.startswith(templates.load_verification_prompt())
    assert prompt.endswith("\n" + raw_csv)


def test_build_verification_prompt_with_custom_template() -> None:
    assert templates.build_verification_prompt("a,b", template="Fix:") == "Fix:\na,b"


def test_unknown_variant_rejected() -> None:
    with pytest.raises(ValueError, match="normalized"):
        templates.load_extraction_prompt("polygon")


def test_load_prompt_by_name() -> None:
    assert templates.available_prompts() == [
        "extraction_normalized",
        "extraction_quadrilateral",
        "verification",
    ]
    assert templates.load_prompt("verification") == templates.load_verification_prompt()
    with pytest.raises(ValueError):
        templates.load_prompt("../secrets")
