from fastapi                        import APIRouter
from .statistics.statistics         import router as statistics_router
from .goals.goals                   import router as goals_router


api_router = APIRouter(prefix="/api/v1")

api_router.include_router(statistics_router)
api_router.include_router(goals_router)
