from __future__ import annotations

import logging
from typing import Dict, List, Literal, Optional

from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, Field

from .error import (
    exception_handler,
    http_exception_handler,
    request_validation_exception_handler,
)
from .logging_middleware import RequestIDLoggingMiddleware
from .session import InMemorySessionStore
from ... import __version__
from ...engine.board import Color, Piece
from ...engine.game import Game, GameStatus


logger = logging.getLogger(__name__)

SideName = Literal["white", "black"]


class PieceModel(BaseModel):
    kind: str
    color: str
    symbol: str


class StatusModel(BaseModel):
    side: str
    in_check: bool
    has_moves: bool
    checkmate: bool
    stalemate: bool


class GameState(BaseModel):
    game_id: str
    side_to_move: str
    board: List[PieceModel] = Field(..., description="64 squares, index 0 = a8, 63 = h1")
    en_passant: Optional[int]
    status: StatusModel


class SelectResponse(BaseModel):
    square: int
    moves: List[int]


class MoveRequest(BaseModel):
    from_sq: int = Field(..., description="Origin square index")
    to_sq: int = Field(..., description="Destination square index")


class MoveResponse(BaseModel):
    legal: bool
    state: GameState


def create_app(log_level: int | str = logging.INFO) -> FastAPI:
    app = FastAPI(title="Chess Rules API", version=__version__)

    logging.basicConfig(level=log_level)

    # Middleware & error handling
    app.add_middleware(RequestIDLoggingMiddleware)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
    app.add_exception_handler(Exception, exception_handler)

    store = InMemorySessionStore()
    app.state.store = store

    @app.get("/healthz")
    async def healthz() -> Dict[str, str]:
        return {"status": "ok"}

    @app.post("/api/games", response_model=GameState)
    async def create_game() -> GameState:
        game_id = store.create(Game.new())
        logger.info("game created", extra={"game_id": game_id})
        with store.checkout(game_id) as game:
            return _state(game_id, _require(game))

    @app.delete("/api/games/{game_id}")
    async def delete_game(game_id: str) -> Dict[str, str]:
        if not store.delete(game_id):
            raise HTTPException(status_code=404, detail="game not found")
        return {"status": "deleted"}

    @app.post("/api/games/{game_id}/reset", response_model=GameState)
    async def reset_game(game_id: str) -> GameState:
        with store.checkout(game_id) as game:
            g = _require(game)
            g.initialize()
            return _state(game_id, g)

    @app.get("/api/games/{game_id}/state", response_model=GameState)
    async def get_state(game_id: str) -> GameState:
        with store.checkout(game_id) as game:
            return _state(game_id, _require(game))

    @app.get("/api/games/{game_id}/status", response_model=StatusModel)
    async def get_status(game_id: str, side: Optional[SideName] = None) -> StatusModel:
        with store.checkout(game_id) as game:
            g = _require(game)
            color = g.side_to_move if side is None else Color[side.upper()]
            return _status(color, g.status(color))

    @app.get("/api/games/{game_id}/squares/{square}", response_model=PieceModel)
    async def get_square(game_id: str, square: int) -> PieceModel:
        with store.checkout(game_id) as game:
            return _piece(_require(game).piece_at(square))

    @app.get("/api/games/{game_id}/squares/{square}/moves", response_model=SelectResponse)
    async def select(game_id: str, square: int) -> SelectResponse:
        with store.checkout(game_id) as game:
            return SelectResponse(square=square, moves=_require(game).select(square))

    @app.post("/api/games/{game_id}/move", response_model=MoveResponse)
    async def make_move(game_id: str, req: MoveRequest) -> MoveResponse:
        with store.checkout(game_id) as game:
            g = _require(game)
            legal = g.try_move(req.from_sq, req.to_sq)
            if not legal:
                logger.info(
                    "illegal move rejected",
                    extra={"game_id": game_id, "from_sq": req.from_sq, "to_sq": req.to_sq},
                )
            return MoveResponse(legal=legal, state=_state(game_id, g))

    return app


def _require(game: Optional[Game]) -> Game:
    if game is None:
        raise HTTPException(status_code=404, detail="game not found")
    return game


def _piece(piece: Piece) -> PieceModel:
    return PieceModel(
        kind=piece.kind.name.lower(),
        color=piece.color.name.lower(),
        symbol=piece.symbol,
    )


def _status(side: Color, st: GameStatus) -> StatusModel:
    return StatusModel(
        side=side.name.lower(),
        in_check=st.in_check,
        has_moves=st.has_moves,
        checkmate=st.checkmate,
        stalemate=st.stalemate,
    )


def _state(game_id: str, game: Game) -> GameState:
    board = game.board
    side = board.side_to_move
    return GameState(
        game_id=game_id,
        side_to_move=side.name.lower(),
        board=[_piece(p) for p in board.squares],
        en_passant=board.en_passant.square if board.en_passant is not None else None,
        status=_status(side, game.status(side)),
    )


# Default app for non-factory servers
app = create_app()
