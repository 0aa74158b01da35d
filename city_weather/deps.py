# ABOUTME: Dependency container for the weather screen using Pydantic BaseModel.
# ABOUTME: Holds the httpx.AsyncClient and the Visual Crossing API key read from the environment.

import logging
import os

import httpx
from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict

logger = logging.getLogger(__name__)

API_KEY_ENV = "VISUAL_CROSSING_API_KEY"


class ForecastDeps(BaseModel):
    """Dependencies injected into the forecast view controller."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    http_client: httpx.AsyncClient
    api_key: str = ""


def create_http_client() -> httpx.AsyncClient:
    """Create the shared httpx client.

    No retry transport: each query is a single attempt. The default httpx timeout
    applies, so a hung request fails instead of loading forever.
    """
    return httpx.AsyncClient()


def load_deps() -> ForecastDeps:
    """Build ForecastDeps from the environment, loading a .env file first if one exists."""
    load_dotenv()
    api_key = os.environ.get(API_KEY_ENV, "")
    if not api_key:
        logger.warning("%s is not set, weather queries will be rejected by the API", API_KEY_ENV)
    return ForecastDeps(http_client=create_http_client(), api_key=api_key)
