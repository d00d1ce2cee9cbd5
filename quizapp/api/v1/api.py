# quizapp/api/v1/api.py
from fastapi import APIRouter

from quizapp.api.v1.endpoints import attempts, grades, health, quizzes, stats, take_quiz

api_router = APIRouter()
api_router.include_router(health.router)
api_router.include_router(quizzes.router)
api_router.include_router(take_quiz.router)
api_router.include_router(attempts.router)
api_router.include_router(grades.router)
api_router.include_router(stats.router)
