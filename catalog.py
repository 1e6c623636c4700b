# catalog.py

from __future__ import annotations

import asyncio
import json
import logging
import os
from pathlib import Path
from typing import Any, List, Optional

import httpx
from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from engine.errors import LoadError

logger = logging.getLogger(__name__)

_BASE = Path(__file__).resolve().parent
_DEFAULT_SOURCE = _BASE / "data" / "quiz.json"

CATALOG_SOURCE = os.getenv("QUIZ_CATALOG_SOURCE", str(_DEFAULT_SOURCE))
FETCH_TIMEOUT = 10.0


class Option(BaseModel):
    model_config = ConfigDict(frozen=True)

    label: str
    text: str


class Question(BaseModel):
    # Wire names follow the published catalog JSON: "question" and "answer".
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: int
    text: str = Field(alias="question")
    score: Optional[float] = None
    options: List[Option]
    correct_answer: Option = Field(alias="answer")


def parse_catalog(payload: Any) -> List[Question]:
    """
    Validate a decoded catalog payload. All-or-nothing: one bad record
    rejects the whole catalog.
    """
    if not isinstance(payload, list):
        raise LoadError("Catalog payload must be a JSON list of questions.")
    questions: List[Question] = []
    for pos, raw in enumerate(payload):
        try:
            questions.append(Question.model_validate(raw))
        except PydanticValidationError as e:
            raise LoadError(
                f"Invalid question at position {pos}: {e.error_count()} validation error(s)."
            ) from e
    return questions


def _is_url(source: str) -> bool:
    return source.startswith(("http://", "https://"))


def _read_json_file(p: Path) -> Any:
    try:
        with p.open("r", encoding="utf-8") as f:
            return json.load(f)
    except OSError as e:
        raise LoadError(f"Could not read catalog file {p}: {e}") from e
    except json.JSONDecodeError as e:
        raise LoadError(f"Catalog file {p} is not valid JSON: {e}") from e


async def _fetch_url(source: str, client: Optional[httpx.AsyncClient]) -> Any:
    owns_client = client is None
    if client is None:
        client = httpx.AsyncClient(timeout=FETCH_TIMEOUT)
    try:
        response = await client.get(source)
    except httpx.HTTPError as e:
        raise LoadError(f"Catalog request failed: {e}") from e
    finally:
        if owns_client:
            await client.aclose()

    if response.is_error:
        raise LoadError(
            f"Catalog request failed: {response.status_code} {response.reason_phrase}"
        )
    try:
        return response.json()
    except ValueError as e:
        raise LoadError(f"Catalog response is not valid JSON: {e}") from e


async def fetch_catalog(
    source: Optional[str] = None, *, client: Optional[httpx.AsyncClient] = None
) -> List[Question]:
    source = source or CATALOG_SOURCE
    if _is_url(source):
        payload = await _fetch_url(source, client)
    else:
        payload = await asyncio.to_thread(_read_json_file, Path(source))
    questions = parse_catalog(payload)
    logger.info("loaded %d questions from %s", len(questions), source)
    return questions


class CatalogLoad:
    """
    A single cancellable catalog fetch.

    ``run()`` returns the catalog, or None when ``abort()`` was called before
    the fetch finished. An aborted load raises nothing and changes nothing.
    """

    def __init__(
        self, source: Optional[str] = None, *, client: Optional[httpx.AsyncClient] = None
    ) -> None:
        self.source = source or CATALOG_SOURCE
        self._client = client
        self._task: Optional[asyncio.Task] = None
        self._aborted = False

    @property
    def aborted(self) -> bool:
        return self._aborted

    async def run(self) -> Optional[List[Question]]:
        if self._aborted:
            return None
        self._task = asyncio.ensure_future(fetch_catalog(self.source, client=self._client))
        try:
            return await self._task
        except asyncio.CancelledError:
            if not self._aborted:
                raise
            logger.info("catalog load aborted: %s", self.source)
            return None

    def abort(self) -> None:
        self._aborted = True
        if self._task is not None and not self._task.done():
            self._task.cancel()
