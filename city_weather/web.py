# ABOUTME: ASGI web entry point serving the weather screen as JSON.
# ABOUTME: Creates a Starlette app whose routes drive a single ForecastViewController.

import json
import logging
from contextlib import asynccontextmanager

from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route

from city_weather.controller import ForecastViewController
from city_weather.deps import ForecastDeps, load_deps
from city_weather.models import ViewState
from city_weather.presentation import render_screen

logger = logging.getLogger(__name__)


class BadRequestBody(Exception):
    pass


def extract_text(body: bytes, field: str) -> str | None:
    """Extract a string field from a JSON request body.

    An empty body or a missing field yields None. A body that is not a JSON object,
    or a field that is not valid Unicode text, raises BadRequestBody.
    """
    if not body.strip():
        return None
    try:
        data = json.loads(body)
    except json.JSONDecodeError as e:
        raise BadRequestBody(f"Request body is not valid JSON: {e.msg}") from e
    if not isinstance(data, dict):
        raise BadRequestBody("Request body must be a JSON object")
    value = data.get(field)
    if value is None:
        return None
    if not isinstance(value, str):
        raise BadRequestBody(f"'{field}' must be a string")
    try:
        # JSON escapes can produce lone surrogates, which cannot be echoed back as UTF-8
        value.encode("utf-8")
    except UnicodeEncodeError as e:
        raise BadRequestBody(f"'{field}' is not valid Unicode text") from e
    return value


def screen_response(state: ViewState) -> JSONResponse:
    return JSONResponse(render_screen(state).model_dump(mode="json"))


def bad_request(error: BadRequestBody) -> JSONResponse:
    logger.info("Rejected request body: %s", error)
    return JSONResponse({"error": str(error)}, status_code=400)


def create_app(deps: ForecastDeps | None = None) -> Starlette:
    """Build the Starlette app around one screen controller."""
    deps = deps if deps is not None else load_deps()
    controller = ForecastViewController(deps)

    @asynccontextmanager
    async def lifespan(app: Starlette):
        yield
        await deps.http_client.aclose()

    async def get_screen(request: Request) -> JSONResponse:
        return screen_response(controller.state)

    async def put_place_name(request: Request) -> JSONResponse:
        try:
            text = extract_text(await request.body(), "text")
        except BadRequestBody as e:
            return bad_request(e)
        if text is None:
            return bad_request(BadRequestBody("'text' is required"))
        return screen_response(controller.set_place_name(text))

    async def post_search(request: Request) -> JSONResponse:
        try:
            city = extract_text(await request.body(), "city")
        except BadRequestBody as e:
            return bad_request(e)
        # No city in the body submits whatever is in the search box
        return screen_response(await controller.submit_query(city))

    async def post_clear(request: Request) -> JSONResponse:
        return screen_response(controller.clear())

    async def post_toggle_forecast(request: Request) -> JSONResponse:
        return screen_response(controller.toggle_forecast_expansion())

    app = Starlette(
        routes=[
            Route("/api/screen", get_screen, methods=["GET"]),
            Route("/api/place-name", put_place_name, methods=["PUT"]),
            Route("/api/search", post_search, methods=["POST"]),
            Route("/api/clear", post_clear, methods=["POST"]),
            Route("/api/forecast/toggle", post_toggle_forecast, methods=["POST"]),
        ],
        lifespan=lifespan,
    )
    app.state.controller = controller
    return app


app = create_app()
