from __future__ import annotations

from fastapi import APIRouter, Depends

from deps.auth import require_admin
from deps.quiz import QuizRuntime, get_runtime
from engine.errors import LoadError

router = APIRouter(prefix="/admin", tags=["admin"], dependencies=[Depends(require_admin)])


@router.post("/reload")
async def reload_catalog(runtime: QuizRuntime = Depends(get_runtime)):
    try:
        quiz = await runtime.reload()
    except LoadError as e:
        return {"ok": False, "error": str(e)}
    return {"ok": True, "count": len(quiz.catalog)}
