from fastapi import APIRouter
from loguru import logger

from src.api.v1.endpoints import auth, games, leaderboard, players

logger.info("Initializing API v1 router")
api_router = APIRouter(prefix="/api/v1")

logger.debug("Registering auth endpoint")
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
logger.debug("Registering players endpoint")
api_router.include_router(players.router, prefix="/players", tags=["players"])
logger.debug("Registering games endpoint")
api_router.include_router(games.router, prefix="/games", tags=["games"])
logger.debug("Registering leaderboard endpoint")
api_router.include_router(leaderboard.router, prefix="/leaderboard", tags=["leaderboard"])
logger.success("API v1 router initialized successfully")
