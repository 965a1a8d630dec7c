from fastapi import APIRouter

from sowplan.api.v1.endpoints import auth, crop_plans, seasons, users

api_router = APIRouter()

api_router.include_router(auth.router)
api_router.include_router(users.router)
api_router.include_router(crop_plans.router)
api_router.include_router(seasons.router)
