from fastapi import APIRouter

from app.api.v1.endpoints import projects, public, question_types

api_v1_router = APIRouter()

api_v1_router.include_router(projects.router, prefix="/projects", tags=["projects"])
api_v1_router.include_router(question_types.router, prefix="/question-types", tags=["question-types"])
api_v1_router.include_router(public.router, prefix="/public", tags=["public"])
