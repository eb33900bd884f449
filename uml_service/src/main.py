# uml_service/src/main.py
from fastapi import FastAPI

from uml_service.src.api.v1.uml_graph_api import router as uml_graph_router
from uml_service.src.config import configure_logging, load_settings


def create_app() -> FastAPI:
    configure_logging(load_settings())
    app = FastAPI(title="UML Graph Service")
    app.include_router(uml_graph_router)
    return app
