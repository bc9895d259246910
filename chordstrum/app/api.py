"""
REST API for chordstrum.

Run with:
    uvicorn chordstrum.app.api:app --reload
or:
    chordstrum-api

Endpoints:
    GET  /health          liveness check
    POST /api/midi        chord progression -> audio/midi bytes
    POST /api/transpose   batch chord transposition

Request bodies are bound straight to the pydantic models, so bad JSON and
bad fields both come back as 400 with {"error": ..., "details": [...]}.
"""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response

from chordstrum import __version__
from chordstrum.app.generate import generate_midi, summarize_errors, transpose
from chordstrum.config import API_HOST, API_PORT, MIDI_MEDIA_TYPE
from chordstrum.data.schema import MidiRequest, TransposeRequest, TransposeResponse
from chordstrum.logger_config import logger

app = FastAPI(title="chordstrum", version=__version__)


@app.exception_handler(RequestValidationError)
async def invalid_request_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # ctx can hold exception objects, which do not serialize
    errors = [
        {key: value for key, value in err.items() if key not in ("ctx", "url")}
        for err in exc.errors()
    ]
    logger.warning("Rejected %s: %d validation error(s)", request.url.path, len(errors))
    return JSONResponse(
        status_code=400,
        content={"error": summarize_errors(errors), "details": jsonable_encoder(errors)},
    )


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}


@app.post("/api/midi")
def midi(request: MidiRequest) -> Response:
    data = generate_midi(request)
    logger.info("Generated MIDI file: %d bytes", len(data))
    return Response(content=data, media_type=MIDI_MEDIA_TYPE)


@app.post("/api/transpose", response_model=TransposeResponse)
def transpose_chords(request: TransposeRequest) -> TransposeResponse:
    return transpose(request)


def main():
    import uvicorn

    uvicorn.run(app, host=API_HOST, port=API_PORT)


if __name__ == "__main__":
    main()
