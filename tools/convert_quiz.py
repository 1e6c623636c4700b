#!/usr/bin/env python
"""
Convert a plain-text question list into the JSON catalog.

Input: blocks separated by blank lines, e.g.

    12. Which planet is largest? (2分)
    选项: A. Mars B. Jupiter
    C. Venus D. Earth
    答案: B. Jupiter
"""

import argparse
import json
import re
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from catalog import parse_catalog  # noqa: E402
from engine.errors import LoadError  # noqa: E402

_LEADING_NUMBER_RE = re.compile(r"^\d+\.\s*")
_SCORE_RE = re.compile(r"[（(]\s*(\d+(?:\.\d+)?)\s*分\s*[）)]")
_TRAILING_SCORE_RE = re.compile(r"[（(]\s*\d+(?:\.\d+)?\s*分\s*[）)]\s*$")
_OPTION_RE = re.compile(r"([A-Z])\.\s*(.+?)(?=(?:\s+[A-Z]\.)|$)")
_ANSWER_RE = re.compile(r"^答案[:：]\s*([A-Z])\.\s*(.+)$")
_OPTIONS_PREFIX_RE = re.compile(r"^选项[:：]\s*")
_ANSWER_PREFIXES = ("答案:", "答案：")


def normalize_question(raw: str) -> str:
    text = _LEADING_NUMBER_RE.sub("", raw)
    return _TRAILING_SCORE_RE.sub("", text).strip()


def parse_score(raw: str) -> Optional[float]:
    m = _SCORE_RE.search(raw)
    return float(m.group(1)) if m else None


def parse_options(option_text: str) -> List[Dict[str, str]]:
    return [
        {"label": m.group(1), "text": m.group(2).strip()}
        for m in _OPTION_RE.finditer(option_text)
    ]


def parse_answer(line: str) -> Dict[str, str]:
    m = _ANSWER_RE.match(line)
    if not m:
        raise ValueError(f"Could not parse answer line: {line}")
    return {"label": m.group(1), "text": m.group(2).strip()}


def convert(raw: str) -> List[Dict[str, Any]]:
    blocks = [b.strip() for b in re.split(r"\n\s*\n", raw) if b.strip()]
    questions: List[Dict[str, Any]] = []

    for block in blocks:
        lines = [ln.strip() for ln in block.split("\n") if ln.strip()]
        if len(lines) < 3:
            continue

        head = lines[0]
        answer_line = next((ln for ln in lines if ln.startswith(_ANSWER_PREFIXES)), None)
        if answer_line is None:
            raise ValueError(f"Block has no answer line: {block}")

        option_lines = []
        for ln in lines[1:]:
            if ln.startswith(_ANSWER_PREFIXES):
                break
            option_lines.append(_OPTIONS_PREFIX_RE.sub("", ln).strip())

        questions.append(
            {
                "id": len(questions) + 1,
                "question": normalize_question(head),
                "score": parse_score(head),
                "options": parse_options(" ".join(option_lines)),
                "answer": parse_answer(answer_line),
            }
        )
    return questions


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(description="Convert a text quiz into the JSON catalog.")
    ap.add_argument("input", type=Path, help="plain-text quiz file")
    ap.add_argument("output", type=Path, help="where to write the JSON catalog")
    args = ap.parse_args(argv)

    try:
        questions = convert(args.input.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        print(f"Error: {e}")
        return 1

    # refuse to write something the engine would reject
    try:
        parse_catalog(questions)
    except LoadError as e:
        print(f"Error: {e}")
        return 1

    args.output.parent.mkdir(parents=True, exist_ok=True)
    args.output.write_text(json.dumps(questions, ensure_ascii=False, indent=2), encoding="utf-8")
    print(f"Wrote {len(questions)} questions to {args.output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
