"""
Offline NLP - Local HTTP API.

============================================================
PURPOSE
============================================================
Thin HTTP surface over one engine instance, for host
applications that talk to the analyzer over loopback.

PRINCIPLES:
- Binds to 127.0.0.1 by default
- No persistence, no outbound calls
- Request bodies validated by pydantic
- Caller errors map to 400, never to 500

============================================================
ENDPOINTS
============================================================
POST /analyze          {text, options?}
POST /sentiment/quick  {text}
GET  /stats
POST /patterns         {name, regex, priority, category, description?}
POST /words            {positive?, negative?}
GET  /health

============================================================
"""

import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Type, TypeVar

from aiohttp import web
from pydantic import BaseModel, ValidationError

from .engine import AnalysisPipeline
from .exceptions import OfflineNLPError
from .schemas import (
    AnalyzeRequest,
    CustomPatternRequest,
    CustomWordsRequest,
    EngineStatsSchema,
    QuickSentimentRequest,
    QuickSentimentSchema,
)


logger = logging.getLogger(__name__)

RequestModel = TypeVar("RequestModel", bound=BaseModel)

ENGINE_KEY = web.AppKey("engine", AnalysisPipeline)


def json_response(data: Any, status: int = 200) -> web.Response:
    """Create JSON response."""
    return web.Response(
        text=json.dumps(data, ensure_ascii=False),
        status=status,
        content_type="application/json",
    )


def error_response(error: Dict[str, Any], status: int = 400) -> web.Response:
    return json_response({"status": "error", "error": error}, status=status)


class RequestValidationError(Exception):
    """Request body could not be parsed or validated."""

    def __init__(self, message: str, errors: Optional[list] = None):
        super().__init__(message)
        self.message = message
        self.errors = errors or []

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error_type": "RequestValidationError",
            "message": self.message,
            "errors": self.errors,
        }


def _contains_surrogate(value: Any) -> bool:
    """True if any string in a decoded JSON value holds a lone surrogate."""
    if isinstance(value, str):
        return any("\ud800" <= ch <= "\udfff" for ch in value)
    if isinstance(value, dict):
        return any(_contains_surrogate(k) or _contains_surrogate(v) for k, v in value.items())
    if isinstance(value, list):
        return any(_contains_surrogate(item) for item in value)
    return False


# ============================================================
# API HANDLERS
# ============================================================

class NLPApi:
    """
    HTTP handlers for the analysis engine.
    """

    @staticmethod
    def _engine(request: web.Request) -> AnalysisPipeline:
        return request.app[ENGINE_KEY]

    # --------------------------------------------------------
    # ANALYSIS ENDPOINTS
    # --------------------------------------------------------

    async def analyze(self, request: web.Request) -> web.Response:
        """
        POST /analyze

        Run the full pipeline over one transcript.
        """
        try:
            body = await self._parse(request, AnalyzeRequest)
            result = await self._engine(request).aprocess_text(body.text, body.options)
            return json_response({
                "status": "ok",
                "data": result.to_schema().model_dump(mode="json"),
            })
        except (RequestValidationError, OfflineNLPError) as e:
            logger.warning(f"Rejected analyze request: {e}")
            return error_response(e.to_dict())

    async def quick_sentiment(self, request: web.Request) -> web.Response:
        """
        POST /sentiment/quick

        Count-only sentiment estimate.
        """
        try:
            body = await self._parse(request, QuickSentimentRequest)
        except RequestValidationError as e:
            return error_response(e.to_dict())

        estimate = self._engine(request).quick_sentiment(body.text)
        return json_response({
            "status": "ok",
            "data": QuickSentimentSchema(**estimate.to_dict()).model_dump(mode="json"),
        })

    async def get_stats(self, request: web.Request) -> web.Response:
        """
        GET /stats

        Engine statistics.
        """
        stats = EngineStatsSchema(**self._engine(request).get_stats())
        return json_response({
            "status": "ok",
            "data": stats.model_dump(mode="json"),
        })

    # --------------------------------------------------------
    # EXTENSION ENDPOINTS
    # --------------------------------------------------------

    async def add_pattern(self, request: web.Request) -> web.Response:
        """
        POST /patterns

        Register a custom action pattern.
        """
        try:
            body = await self._parse(request, CustomPatternRequest)
            entry = self._engine(request).add_custom_pattern(
                body.name,
                body.regex,
                body.priority.value,
                body.category,
                body.description,
            )
        except (RequestValidationError, OfflineNLPError) as e:
            logger.warning(f"Rejected custom pattern: {e}")
            return error_response(e.to_dict())

        return json_response({"status": "ok", "data": entry.to_dict()}, status=201)

    async def add_words(self, request: web.Request) -> web.Response:
        """
        POST /words

        Add custom sentiment words.
        """
        try:
            body = await self._parse(request, CustomWordsRequest)
            self._engine(request).add_custom_words(body.positive, body.negative)
        except (RequestValidationError, OfflineNLPError) as e:
            logger.warning(f"Rejected custom words: {e}")
            return error_response(e.to_dict())

        return json_response({
            "status": "ok",
            "data": {
                "added": {
                    "positive": len(body.positive),
                    "negative": len(body.negative),
                },
                "dictionarySize": self._engine(request).get_stats()["dictionarySize"],
            },
        })

    async def health(self, request: web.Request) -> web.Response:
        """
        GET /health

        Service health check.
        """
        return json_response({
            "status": "ok",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "service": "offline-nlp",
        })

    # --------------------------------------------------------
    # HELPERS
    # --------------------------------------------------------

    @staticmethod
    async def _parse(
        request: web.Request,
        model: Type[RequestModel],
    ) -> RequestModel:
        try:
            payload = await request.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise RequestValidationError(f"Request body is not valid JSON: {e}") from e

        if _contains_surrogate(payload):
            raise RequestValidationError("Request body contains unpaired surrogate code points")

        try:
            return model.model_validate(payload)
        except ValidationError as e:
            raise RequestValidationError(
                f"Invalid {model.__name__}",
                errors=json.loads(e.json()),
            ) from e


# ============================================================
# APPLICATION FACTORY
# ============================================================

def create_app(engine: AnalysisPipeline) -> web.Application:
    """
    Create the API application.

    Returns an aiohttp Application with all routes configured.
    """
    api = NLPApi()

    app = web.Application()
    app[ENGINE_KEY] = engine

    app.router.add_get("/health", api.health)
    app.router.add_get("/stats", api.get_stats)
    app.router.add_post("/analyze", api.analyze)
    app.router.add_post("/sentiment/quick", api.quick_sentiment)

    # Mutating endpoints (affect subsequent analyses only)
    app.router.add_post("/patterns", api.add_pattern)
    app.router.add_post("/words", api.add_words)

    return app


def run_server(
    engine: AnalysisPipeline,
    host: Optional[str] = None,
    port: Optional[int] = None,
) -> None:
    """Serve the API until interrupted."""
    host = host or engine.config.api_host
    port = port or engine.config.api_port

    logger.info(f"Starting offline NLP API on http://{host}:{port}")
    web.run_app(create_app(engine), host=host, port=port, print=None)


__all__ = [
    "NLPApi",
    "RequestValidationError",
    "create_app",
    "run_server",
    "json_response",
    "ENGINE_KEY",
]
