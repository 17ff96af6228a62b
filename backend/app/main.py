# backend/app/main.py
from __future__ import annotations

"""
FastAPI-gateway för Figma → No-code-konverteringen.

Kör:
    uvicorn backend.app.main:app --reload
"""

import logging
from typing import Any, Dict

from fastapi import Body, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from backend.tasks.nocode_converter import SequentialIdGenerator, convert_figma_to_nocode, log_level

# ── Logging ───────────────────────────────────────────────────────────────
logging.basicConfig(level=log_level())
logger = logging.getLogger("figma-nocode/api")

# ── FastAPI + CORS ────────────────────────────────────────────────────────
app = FastAPI(title="Figma → No-code converter")
app.add_middleware(
  CORSMiddleware,
  allow_origins=["*"],      # begränsa i prod
  allow_methods=["*"],
  allow_headers=["*"],
)

# ── Healthcheck ───────────────────────────────────────────────────────────
@app.get("/healthz")
async def healthz() -> Dict[str, str]:
  return {"status": "ok"}

# ── POST /convert ─────────────────────────────────────────────────────────
# Tar emot Figma nodes-JSON ({"Result": {"nodes": ...}} eller {"nodes": ...}).
@app.post("/convert")
def convert(payload: Dict[str, Any] = Body(...), deterministic: bool = False) -> Dict[str, Any]:
  gen = SequentialIdGenerator() if deterministic else None
  try:
    doc = convert_figma_to_nocode(payload, id_generator=gen)
  except ValueError as e:
    logger.warning("Ogiltig payload: %s", e)
    raise HTTPException(400, str(e))
  logger.info("Konverterade payload → %d block", len(doc.blocks))
  return doc.to_json_dict()


# Lokalt dev-körläge:
#   uvicorn backend.app.main:app --host 127.0.0.1 --port 8000 --reload
if __name__ == "__main__":  # pragma: no cover
  import uvicorn

  uvicorn.run("backend.app.main:app", host="127.0.0.1", port=8000, reload=True)
