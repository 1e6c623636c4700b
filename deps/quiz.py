# deps/quiz.py
from __future__ import annotations

import asyncio
import logging
import threading
from typing import Optional

from fastapi import Depends, HTTPException, Request

from catalog import CatalogLoad
from engine.errors import LoadError
from engine.session import QuizSession, StorageBackend
from storage import make_storage

logger = logging.getLogger(__name__)


class QuizRuntime:
    """
    Per-app holder for the quiz session.

    The catalog is loaded lazily on first use. A failed load is sticky: every
    request gets the same error until ``reload()`` succeeds.
    """

    def __init__(
        self, source: Optional[str] = None, backend: Optional[StorageBackend] = None
    ) -> None:
        self.source = source
        self.backend = backend if backend is not None else make_storage()
        self.session: Optional[QuizSession] = None
        self.load_error: Optional[str] = None
        # actions run in the threadpool; one at a time
        self.lock = threading.Lock()
        self._load_lock = asyncio.Lock()
        self._load: Optional[CatalogLoad] = None

    async def ensure_loaded(self) -> QuizSession:
        if self.session is None and self.load_error is None:
            async with self._load_lock:
                # another request may have finished the load while we waited
                if self.session is None and self.load_error is None:
                    await self._load_catalog()
        if self.session is None:
            raise LoadError(self.load_error or "Catalog load was aborted.")
        return self.session

    async def reload(self) -> QuizSession:
        self.abort()
        async with self._load_lock:
            await self._load_catalog()
        if self.session is None:
            raise LoadError("Catalog load was aborted.")
        return self.session

    async def _load_catalog(self) -> None:
        load = CatalogLoad(self.source)
        self._load = load
        try:
            catalog = await load.run()
        except LoadError as e:
            self.load_error = str(e)
            logger.error("catalog load failed: %s", e)
            raise
        finally:
            if self._load is load:
                self._load = None

        if catalog is None:
            return
        quiz = QuizSession.start(catalog, self.backend)
        with self.lock:
            self.session = quiz
            self.load_error = None

    def abort(self) -> None:
        if self._load is not None:
            self._load.abort()


def get_runtime(request: Request) -> QuizRuntime:
    return request.app.state.quiz


async def get_quiz(runtime: QuizRuntime = Depends(get_runtime)) -> QuizSession:
    try:
        return await runtime.ensure_loaded()
    except LoadError as e:
        raise HTTPException(status_code=503, detail=f"catalog unavailable: {e}")
