"""
FastAPI app for ridepool.

Capa API HTTP sobre el motor de viajes y reservas.
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ridepool.api.router import router
from ridepool.application.config import CORS_ORIGINS, LOG_LEVEL

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title="Ridepool API",
    description="Employee ride sharing for the current workday",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(router)


@app.get("/")
def root():
    """Endpoint raíz"""
    return {"message": "Ridepool API", "status": "ok"}


# Bloque para ejecutar con uvicorn
if __name__ == "__main__":
    import uvicorn
    uvicorn.run("ridepool.api.main:app", host="0.0.0.0", port=8000, reload=True)
