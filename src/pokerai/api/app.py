import logging
import os
import threading
from contextlib import asynccontextmanager
from typing import Any, Dict, Optional

import uvicorn
from fastapi import FastAPI, HTTPException
from fastapi.concurrency import run_in_threadpool
from pydantic import BaseModel

from pokerai.actions import encode_action
from pokerai.cli import load_evaluator
from pokerai.constants import DEFAULT_CHECK_EVERY
from pokerai.engine import EngineConfig, PokerAI
from pokerai.state_decoder import StateDecodeError

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# --- Global State ---
ENGINE: Optional[PokerAI] = None
# One decision cycle at a time: a new state must not land while workers run.
ENGINE_LOCK = threading.Lock()


# --- Pydantic Models ---
class DecisionResponse(BaseModel):
    action: str  # FOLD / CALL / BET
    amount: int = 0
    encoded: str  # e.g. "action_name=bet&amount=40"
    win_probability: float
    games_played: int
    games_won: int


def config_from_env() -> EngineConfig:
    return EngineConfig(
        num_threads=int(os.getenv("POKERAI_THREADS", "4")),
        timeout_ms=int(os.getenv("POKERAI_TIMEOUT_MS", "1000")),
        check_every=int(os.getenv("POKERAI_CHECK_EVERY", str(DEFAULT_CHECK_EVERY))),
    )


# --- Lifespan & Startup ---
@asynccontextmanager
async def lifespan(app: FastAPI):
    # Build the evaluator once; tests may install their own engine beforehand.
    global ENGINE
    if ENGINE is None:
        cfg = config_from_env()
        logger.info(f"Starting engine with {cfg.num_threads} workers, {cfg.timeout_ms} ms budget")
        ENGINE = PokerAI(cfg, load_evaluator(os.getenv("POKERAI_LUT_PATH")))
    yield


# --- Application ---
app = FastAPI(lifespan=lifespan)


@app.get("/health")
def health() -> dict[str, bool]:
    return {"ready": ENGINE is not None}


@app.post("/decision", response_model=DecisionResponse)
async def decision(req: Dict[str, Any]) -> DecisionResponse:
    if ENGINE is None:
        raise HTTPException(status_code=503, detail="Engine not initialized")
    return await run_in_threadpool(_decide, ENGINE, req)


def _decide(engine: PokerAI, req: Dict[str, Any]) -> DecisionResponse:
    with ENGINE_LOCK:
        try:
            engine.update_state(req)
        except StateDecodeError as e:
            raise HTTPException(status_code=400, detail=str(e))

        if not engine.is_my_turn():
            raise HTTPException(status_code=409, detail="Not my turn")

        action = engine.compute_decision()
        outcome = engine.last_outcome

    return DecisionResponse(
        action=action.type.name,
        amount=action.amount,
        encoded=encode_action(action),
        win_probability=outcome.win_probability,
        games_played=outcome.games_played,
        games_won=outcome.games_won,
    )


if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
