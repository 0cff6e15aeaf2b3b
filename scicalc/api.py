# api.py
"""
HTTP API for the calculator.

``POST /compute`` is a pure call into the expression pipeline. The
``/session`` routes drive a single CalculatorSession (buffer, angle mode,
memory and history), provided through a dependency so tests can swap it.
"""

import logging
import threading
from contextlib import asynccontextmanager
from typing import List, Literal, Optional

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from .calculator import calculate
from .config import configure_logging, load_settings
from .errors import CalculatorError
from .evaluator import AngleMode
from .session import CalculatorSession

logger = logging.getLogger(__name__)

# ----- Pydantic Models -----

class ComputeRequest(BaseModel):
    """Expression to evaluate and the angle mode to use."""
    expression: str = Field(..., description="Expression as typed, e.g. 'sin(90) + 5!'")
    angle_mode: AngleMode = AngleMode.DEGREES


class ComputeResponse(BaseModel):
    expression: str
    result: str
    angle_mode: AngleMode


class ErrorResponse(BaseModel):
    """Model for error responses."""
    detail: str
    kind: Optional[str] = None


class HistoryItem(BaseModel):
    expression: str
    result: str


class SessionState(BaseModel):
    expression: str
    last_result: str
    angle_mode: AngleMode
    memory: str
    history: List[HistoryItem]


class ExpressionInput(BaseModel):
    expression: str


class AngleModeInput(BaseModel):
    angle_mode: AngleMode


# ----- Session Initialization -----

settings = load_settings()
calculator_session = CalculatorSession(settings.angle_mode, settings.history_limit)
_session_lock = threading.Lock()


def get_session() -> CalculatorSession:
    """
    Dependency for the calculator session.
    In normal operation, returns the global instance.
    For testing, this can be overridden with a fresh session.
    """
    return calculator_session


def _state(session: CalculatorSession) -> SessionState:
    return SessionState(**session.snapshot())


# ----- Application Lifecycle -----

@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(settings)
    logger.info("Calculator API starting up")
    yield
    logger.info("Calculator API shutting down")


app = FastAPI(
    title="Scientific Calculator API",
    description="Evaluate calculator expressions with degree/radian trigonometry, memory and history",
    version="1.0.0",
    lifespan=lifespan,
)


@app.exception_handler(CalculatorError)
async def calculator_error_handler(request: Request, exc: CalculatorError):
    logger.info(f"{request.url.path}: {exc.kind}: {exc}")
    return JSONResponse(status_code=422, content={"detail": str(exc), "kind": exc.kind})


# ----- API Routes -----

@app.post(
    "/compute",
    response_model=ComputeResponse,
    responses={422: {"model": ErrorResponse}},
    summary="Evaluate an expression",
)
def compute_expression(body: ComputeRequest):
    calc = calculate(body.expression, body.angle_mode)
    return ComputeResponse(expression=calc.expression, result=calc.display, angle_mode=body.angle_mode)


@app.get("/session", response_model=SessionState, summary="Current session state")
def read_session(session: CalculatorSession = Depends(get_session)):
    return _state(session)


@app.post("/session/evaluate", response_model=SessionState, summary="Evaluate through the session")
def evaluate_in_session(body: ExpressionInput, session: CalculatorSession = Depends(get_session)):
    """Failed evaluations are reported as last_result 'Error' and are not added to the history."""
    with _session_lock:
        session.set_expression(body.expression)
        session.evaluate()
        return _state(session)


@app.post("/session/angle", response_model=SessionState, summary="Set the angle mode")
def set_angle_mode(body: AngleModeInput, session: CalculatorSession = Depends(get_session)):
    with _session_lock:
        session.set_angle_mode(body.angle_mode)
        return _state(session)


@app.post("/session/memory/{action}", response_model=SessionState, summary="Memory register operations")
def memory_action(
    action: Literal["clear", "add", "subtract", "recall"],
    session: CalculatorSession = Depends(get_session),
):
    with _session_lock:
        if action == "clear":
            session.memory_clear()
        elif action == "add":
            session.memory_add()
        elif action == "subtract":
            session.memory_subtract()
        else:
            session.memory_recall()
        return _state(session)


@app.post(
    "/session/history/{index}",
    response_model=SessionState,
    responses={404: {"model": ErrorResponse}},
    summary="Recall a history entry (0 = most recent)",
)
def recall_history(index: int, session: CalculatorSession = Depends(get_session)):
    with _session_lock:
        try:
            session.recall_history(index)
        except IndexError as e:
            raise HTTPException(status_code=404, detail=str(e))
        return _state(session)


# ----- Main Entry Point -----

def run() -> None:
    import uvicorn
    uvicorn.run("scicalc.api:app", host="0.0.0.0", port=8000)


if __name__ == "__main__":
    run()
