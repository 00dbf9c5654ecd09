import os

os.environ["ENV"] = "test"

from fastapi import FastAPI, HTTPException
from fastapi.testclient import TestClient
import pytest
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.common.errors import CsrfTokenError, PageNotFound
from app.common.exception_handlers import propagate_http_exception
from app.common.handle_errors import HandleErrorsMiddleware
from app.infra.config import Settings, settings
from app.services.page_renderer import PageRenderer


class RecordingReporter:
    """代替 FailBot，记录上报内容"""

    def __init__(self):
        self.reports = []

    async def report(self, error, metadata=None):
        self.reports.append((error, dict(metadata or {})))


class GoneError(Exception):
    status = 410


class CodedError(Exception):
    def __init__(self, code):
        super().__init__(f"failed with {code}")
        self.code = code


@pytest.fixture
def reporter():
    return RecordingReporter()


@pytest.fixture
def renderer():
    return PageRenderer(settings.TEMPLATES_DIR, site_name="Test Docs")


@pytest.fixture
def make_settings():
    def _make_settings(**overrides):
        values = {"ENV": "test", "PRODUCTION_APP": False}
        values.update(overrides)
        return Settings(**values)

    return _make_settings


def build_error_app(renderer, reporter, app_settings) -> FastAPI:
    app = FastAPI()

    @app.get("/boom")
    async def boom():
        raise RuntimeError("kaboom")

    @app.get("/missing")
    async def missing():
        raise PageNotFound("/missing")

    @app.get("/teapot")
    async def teapot():
        raise HTTPException(status_code=418)

    @app.get("/gone")
    async def gone():
        raise GoneError("gone for good")

    @app.get("/csrf")
    async def csrf():
        raise CsrfTokenError()

    @app.get("/coded/{code}")
    async def coded(code: str):
        raise CodedError(code)

    @app.get("/reset")
    async def reset():
        raise ConnectionResetError()

    @app.get("/assets/boom.css")
    async def asset_boom():
        raise RuntimeError("asset kaboom")

    @app.get("/assets/missing.css")
    async def asset_missing():
        raise PageNotFound("/assets/missing.css")

    @app.get("/_next/static/chunk.js")
    async def next_chunk():
        raise HTTPException(status_code=404, headers={"set-cookie": "_csrf=abc; Path=/"})

    app.add_middleware(
        HandleErrorsMiddleware,
        renderer=renderer,
        reporter=reporter,
        settings=app_settings,
    )
    app.add_exception_handler(StarletteHTTPException, propagate_http_exception)
    return app


@pytest.fixture
def make_client(renderer, reporter, make_settings):
    def _make_client(renderer_override=None, reporter_override=None, raise_server_exceptions=False, **setting_overrides):
        app = build_error_app(
            renderer_override or renderer,
            reporter_override or reporter,
            make_settings(**setting_overrides),
        )
        return TestClient(app, raise_server_exceptions=raise_server_exceptions)

    return _make_client


@pytest.fixture
def client(make_client):
    return make_client()


@pytest.fixture
def production_client(make_client):
    return make_client(ENV="production", PRODUCTION_APP=True)
