import contextlib
import logging
import os
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route
from starlette.status import HTTP_401_UNAUTHORIZED, HTTP_404_NOT_FOUND

from maxviews_quota.di import Container
from maxviews_quota.quota.course_report import evaluate_course
from maxviews_quota.quota.evaluator import QuotaEvaluator
from maxviews_quota.quota.scanner import ModuleScanner

logger = logging.getLogger(__name__)


def create_container() -> Container:
    """Create the container with configuration from `config.yml` and the environment."""
    load_dotenv()
    container = Container()
    container.config.from_yaml(Path(__file__).parent / "config.yml")
    return container


async def health(_request: Request) -> JSONResponse:
    """Health check endpoint.
    Args:
        _request: The incoming request (unused).
    Returns:
        A JSON response with status "ok".
    """
    return JSONResponse({"status": "ok"})


@contextlib.asynccontextmanager
async def lifespan(app: Starlette):  # type: ignore
    """Initialize the application and its components."""

    uvicorn_logger = logging.getLogger("uvicorn")
    root_logger = logging.getLogger()
    for handler in uvicorn_logger.handlers:
        root_logger.addHandler(handler)

    app.state.container = create_container()

    log_level = app.state.container.config.log_level().upper()
    root_logger.setLevel(log_level)
    logger.info("Starting max views quota server with log level %s...", log_level)

    logger.info("Configured log reader: %s", app.state.container.log_reader())
    logger.info("Configured override store: %s", app.state.container.override_store())
    logger.info("Configured content catalog: %s", app.state.container.content_catalog())
    for name, extractor_provider in app.state.container.user_id_extractors.providers.items():
        logger.info("Configured user id extractor: %s: %s", name, extractor_provider())

    yield
    logger.info("Shutting down max views quota server...")


async def _user_id(request: Request) -> Optional[str]:
    container: Container = request.app.state.container
    extractor_name = container.config.user_id_extractor() or ""
    extractor_provider = container.user_id_extractors.providers.get(extractor_name)
    if not extractor_provider:
        logger.warning("No user id extractor found for: %s", extractor_name)
        return None
    extractor = extractor_provider()
    return await extractor(request)


def _unauthorized() -> JSONResponse:
    return JSONResponse({"error": "unauthenticated"}, status_code=HTTP_401_UNAUTHORIZED)


async def course_views(request: Request) -> JSONResponse:
    """Views used and left by the requesting user on each view-limited item of a course."""
    user_id = await _user_id(request)
    if not user_id:
        return _unauthorized()

    container: Container = request.app.state.container
    course_id = request.path_params["course_id"]
    evaluations = await evaluate_course(
        container.scanner(), container.evaluator(), course_id, user_id
    )
    return JSONResponse(
        {
            "course_id": course_id,
            "user_id": user_id,
            "items": [evaluation.to_dict() for evaluation in evaluations],
        }
    )


async def item_views(request: Request) -> JSONResponse:
    """Views used and left by the requesting user on one item of a course."""
    user_id = await _user_id(request)
    if not user_id:
        return _unauthorized()

    container: Container = request.app.state.container
    course_id = request.path_params["course_id"]
    item_id = request.path_params["item_id"]

    scanner: ModuleScanner = container.scanner()
    items = [
        item
        for item in await scanner.find_restricted_visible(course_id, user_id)
        if item.id == item_id
    ]
    if not items:
        return JSONResponse({"error": "not found"}, status_code=HTTP_404_NOT_FOUND)

    evaluator: QuotaEvaluator = container.evaluator()
    [evaluation] = await evaluator.evaluate_many(items, user_id)
    return JSONResponse(evaluation.to_dict())


routes: List[Route] = [
    Route("/health", endpoint=health),
    Route("/courses/{course_id:str}/views", endpoint=course_views),
    Route("/courses/{course_id:str}/items/{item_id:str}/views", endpoint=item_views),
]

app: Starlette = Starlette(routes=routes, lifespan=lifespan)

if __name__ == "__main__":
    import uvicorn

    port = int(os.environ.get("PORT", 8000))
    uvicorn.run(app, host="0.0.0.0", port=port, access_log=False)
