"""Tathmini Submission Engine - Main Application"""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.api.dashboard import router as dashboard_router
from src.api.validation import router as validation_router
from src.common.config import settings
from src.common.logging import setup_logging

setup_logging()

app = FastAPI(
    title="Tathmini Submission Engine",
    description="Validation and dashboard aggregation for survey submissions",
    version="0.1.0",
    debug=settings.app.debug
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(validation_router)
app.include_router(dashboard_router)

@app.get("/")
async def root():
    return {"message": "Tathmini Submission Engine", "status": "running"}

@app.get("/health")
async def health():
    return {"status": "healthy"}
