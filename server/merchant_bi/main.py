import logging
import os

from fastapi import FastAPI

from .routers import customers, health, merchants, search

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title="Merchant BI API")

app.include_router(health.router)
app.include_router(search.router)
app.include_router(merchants.router)
app.include_router(customers.router)


@app.get("/")
def root():
    return {"status": "ok"}
