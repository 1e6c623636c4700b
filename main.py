import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from deps.quiz import QuizRuntime

# Routers
from routers.admin import router as admin_router
from routers.health import router as health_router
from routers.questions import router as questions_router
from routers.quiz import router as quiz_router

logger = logging.getLogger("quiz-engine")
logging.basicConfig(level=logging.INFO)


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    # an in-flight catalog fetch must not outlive the app
    app.state.quiz.abort()
    logger.info("quiz engine stopped")


app = FastAPI(title="Quiz Engine API", lifespan=lifespan)
app.state.quiz = QuizRuntime()

# Allow calls from a local front-end dev server
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:5173",
        "http://127.0.0.1:5173",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*", "x-admin-token"],
)


@app.get("/")
def health_root():
    return {"ok": True}


app.include_router(quiz_router)  # /quiz/...
app.include_router(questions_router)  # /questions, /questions/{qid}
app.include_router(admin_router)  # /admin/reload
app.include_router(health_router)  # /health/...
