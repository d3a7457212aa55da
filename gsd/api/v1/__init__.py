from fastapi import APIRouter

from gsd.api.v1 import auth, done, health, lists, metrics, tasks

api_router = APIRouter()
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(lists.router, prefix="/lists", tags=["lists"])
api_router.include_router(tasks.router, prefix="/tasks", tags=["tasks"])
api_router.include_router(done.router, prefix="/done", tags=["done"])
api_router.include_router(metrics.router, prefix="/metrics", tags=["metrics"])
api_router.include_router(health.router, prefix="/health", tags=["health"])
