import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from fastapi import APIRouter, Depends, FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from fastapi.staticfiles import StaticFiles

from .clicks import ClickEvent
from .config import Config, config
from .store import ClickStore, StoreError

logger = logging.getLogger(__name__)

STATIC_DIR = Path(__file__).resolve().parent / "static"

router = APIRouter()


def get_store(request: Request) -> ClickStore:
    # the single handle opened in lifespan; never rebuilt per request
    return request.app.state.store


@asynccontextmanager
async def lifespan(app: FastAPI):
    store: ClickStore = app.state.store
    # StoreError escapes here on purpose: no store, no serving
    store.connect()
    yield
    store.close()


@router.get("/")
def homepage():
    return FileResponse(STATIC_DIR / "index.html")


@router.get("/health")
def health(store: ClickStore = Depends(get_store)):
    return {"ok": True, "service": "clicktracker-api", "store": store.ping()}


@router.post("/clicked", status_code=201)
def clicked(store: ClickStore = Depends(get_store)):
    """
    Record one click stamped with the server's clock.
    Any request body is ignored.
    """
    try:
        store.insert(ClickEvent.now())
    except StoreError as e:
        logger.exception("Could not record click: %s", e)
        return JSONResponse(status_code=503, content={"error": str(e)})
    return Response(status_code=201)


@router.get("/clicks")
def clicks(store: ClickStore = Depends(get_store)):
    try:
        events = store.all()
    except StoreError as e:
        logger.exception("Could not read clicks: %s", e)
        return JSONResponse(status_code=503, content={"error": str(e)})
    return [ev.model_dump(mode="json") for ev in events]


def create_app(store: Optional[ClickStore] = None, settings: Optional[Config] = None) -> FastAPI:
    settings = settings or config
    if store is None:
        store = ClickStore.from_url(settings.STORE_URL, key=settings.CLICKS_KEY, timeout=settings.STORE_TIMEOUT)

    app = FastAPI(title="Click Tracker API", version="0.1.0", lifespan=lifespan)
    app.state.store = store

    # CORS so a page served elsewhere can still POST clicks
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.include_router(router)
    app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")
    return app


app = create_app()
