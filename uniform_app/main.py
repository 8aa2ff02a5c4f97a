import logging

from fastapi import FastAPI

from uniform_app.config import LOG_LEVEL
from uniform_app.errors import setup_exception_handlers
from uniform_app.routers import inventory, issuance, students

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s [%(levelname)s]: %(message)s"
)

app = FastAPI(
    title="School Uniform API",
    description="API for managing school uniform stock and issuance.",
    version="1.0.0"
)

setup_exception_handlers(app)

app.include_router(inventory.router)
app.include_router(issuance.router)
app.include_router(students.router)

@app.get("/health", tags=["Health Check"])
def health_check():
    return {"status": "ok"}
