from fastapi import APIRouter

from gitcal.api.v1 import auth, git, llm, notion

api_router = APIRouter(prefix="/api/v1")

api_router.include_router(git.router)
api_router.include_router(auth.router)
api_router.include_router(llm.router)
api_router.include_router(notion.router)
