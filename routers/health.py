# routers/health.py
from pathlib import Path

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import text

from alembic.config import Config
from alembic.script import ScriptDirectory
from db import engine
from deps.quiz import QuizRuntime, get_runtime

router = APIRouter(prefix="/health", tags=["health"])

_ALEMBIC_INI = Path(__file__).resolve().parent.parent / "alembic.ini"


@router.get("/db")
def health_db():
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"db_error: {type(e).__name__}: {e}")
    return {"ok": True}


@router.get("/catalog")
def health_catalog(runtime: QuizRuntime = Depends(get_runtime)):
    # does not trigger a load; reports what the last load did
    quiz = runtime.session
    return {
        "ok": quiz is not None,
        "loaded": quiz is not None,
        "count": len(quiz.catalog) if quiz is not None else 0,
        "error": runtime.load_error,
    }


def _code_heads() -> list[str]:
    script = ScriptDirectory.from_config(Config(str(_ALEMBIC_INI)))
    return list(script.get_heads())


def _db_revision():
    with engine.connect() as conn:
        try:
            return conn.execute(text("SELECT version_num FROM alembic_version")).scalar_one_or_none()
        except Exception:
            # table missing: migrations never ran against this database
            return None


@router.get("/migrations")
def health_migrations():
    try:
        heads = _code_heads()
    except Exception:
        heads = []

    try:
        db_ver = _db_revision()
    except Exception as e:
        return {"ok": False, "error": f"db_connect_failed: {e}", "code_heads": heads, "db_version": None}

    synced = db_ver in heads if heads else False
    return {"ok": synced, "synced": synced, "db_version": db_ver, "code_heads": heads}
