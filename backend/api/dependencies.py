"""Shared dependencies for API routes."""

from fastapi import Depends

from config import Settings, get_settings
from services.gemini_client import ModelClient, get_client


def get_model_client(settings: Settings = Depends(get_settings)) -> ModelClient | None:
    return get_client(settings)
