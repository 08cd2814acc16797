from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from mlfq.api.routes_sim import router as sim_router
from mlfq.api.ws import router as ws_router
from mlfq.logging_setup import configure_logging

configure_logging()

app = FastAPI(title="MLFQ Scheduler Simulator API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(sim_router)
app.include_router(ws_router)


@app.get("/")
def root():
    return {"ok": True, "hint": "Use /health, /docs, or /sim/state"}
