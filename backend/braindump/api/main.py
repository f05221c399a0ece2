from fastapi import APIRouter

from braindump.api.routes import posts

api_router = APIRouter()
api_router.include_router(posts.router)
