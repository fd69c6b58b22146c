#  Copyright © 2025 Dr.-Ing. Paul Wilhelm <paul@wilhelm.dev>
#  This file is part of Synth Agent.

import logging
from typing import Any, Callable, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ValidationError
import uvicorn

import synth_agent
from synth_agent.core.GenerationManager import GenerationManager
from synth_agent.core.HistoryManager import HistoryManager
from synth_agent.generate.GenerationError import GenerationError
from synth_agent.generate.GenerationSchema import GenerationRequest

logger = logging.getLogger(__name__)


class GenerateDataBody(BaseModel):
    prompt: str
    format: str = "JSON"
    dataSize: str = "small"


def _error_response(status_code: int, details: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error": "An error occurred while generating data",
            "details": details,
            "type": "error",
        },
    )


class GenerateServer:
    """
    HTTP server for data generation.

    Every request gets its own generation manager, so concurrent requests share no state.
    """

    def __init__(
            self,
            get_generator: Callable[[], GenerationManager],
            history: Optional[HistoryManager] = None,
            host: str = "127.0.0.1",
            port: int = 8009,
    ):
        """
        Initialize generate server.
        :param get_generator: Factory returning a new generation manager.
        :param history: History manager (optional, disables storage if not given).
        :param host: Host.
        :param port: Port.
        """
        self.get_generator = get_generator
        self.history = history
        self.host = host
        self.port = port

        self.app = FastAPI(title="Synth Agent")
        self._setup_routes()

    def start(self) -> None:
        """
        Start the Uvicorn server.
        """
        logger.info(f"Generate server running on http://{self.host}:{self.port}/")
        uvicorn.run(self.app, host=self.host, port=self.port, log_level="info")

    def _setup_routes(self) -> None:
        """
        Define the HTTP routes.
        """
        @self.app.exception_handler(RequestValidationError)
        async def invalid_body(_request: Request, exc: RequestValidationError) -> JSONResponse:
            return _error_response(422, str(exc))

        @self.app.get("/api/health")
        async def health() -> Dict[str, Any]:
            return {"status": "ok", "version": synth_agent.__version__}

        @self.app.post("/api/generate-data")
        async def generate_data(body: GenerateDataBody):
            try:
                request = GenerationRequest(prompt=body.prompt, format=body.format, size_tier=body.dataSize)
            except ValidationError as e:
                return _error_response(422, str(e))

            generator = self.get_generator()

            try:
                output = await run_in_threadpool(generator.generate, request)
            except GenerationError as e:
                return _error_response(500, str(e))

            response: Dict[str, Any] = {
                "data": output.data,
                "type": "complete",
                "metadata": output.get_metadata(),
            }

            if self.history is None:
                response["stored"] = False
                return response

            store_result = await run_in_threadpool(self.history.store, request, output)
            response["stored"] = store_result.stored
            if store_result.stored:
                response["record_id"] = store_result.record_id
            else:
                response["storage_error"] = store_result.error

            return response
