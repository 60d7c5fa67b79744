# main.py
"""
Point d'entrée de l'API ICP Readiness.
Enregistre tous les modules via leurs routers.

Architecture : modules verticaux quasi-autonomes + engine de scoring pur.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from app.core.config import settings
from app.core.logging import setup_logging

from app.modules.auth.router        import router as auth_router
from app.modules.assessment.router  import router as assessment_router
from app.modules.admin.router       import router as admin_router
from app.modules.users.router       import router as users_router
from app.modules.billing.router     import router as billing_router
from app.modules.profile.router     import router as profile_router

setup_logging()

app = FastAPI(
    title=settings.PROJECT_NAME,
    version="1.0.0",
    docs_url="/docs" if settings.DEBUG else None,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth_router)
app.include_router(assessment_router)
app.include_router(admin_router)
app.include_router(users_router)
app.include_router(billing_router)
app.include_router(profile_router)


@app.get("/health")
async def health():
    return {"status": "ok", "version": "1.0.0"}
