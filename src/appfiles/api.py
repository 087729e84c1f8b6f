"""FastAPI application exposing an app data folder over HTTP."""

from __future__ import annotations

from fastapi import Depends, FastAPI, HTTPException, Query, Request, Response, status
from pydantic import BaseModel, Field

from .config import Settings, get_settings
from .errors import InvalidPathError
from .storage.files import OperationResult, ScopedStore
from .storage.paths import SubfolderPath

app = FastAPI(title="App Files", version="0.1.0")


class WriteTextRequest(BaseModel):
    content: str
    subfolder: str = Field(default="", description="Folder relative to the app root.")


class WriteResponse(BaseModel):
    path: str


class TextResponse(BaseModel):
    content: str


class ListResponse(BaseModel):
    files: list[str] = Field(default_factory=list)


def _unwrap(result: OperationResult) -> object:
    if result.ok:
        return result.value
    if isinstance(result.error, InvalidPathError):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=result.reason)
    if isinstance(result.error, (FileNotFoundError, IsADirectoryError, NotADirectoryError)):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="File not found")
    raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=result.reason)


def _stored_path(subfolder: str, file_name: str) -> str:
    return "/".join(part for part in (str(SubfolderPath.parse(subfolder)), file_name) if part)


async def get_store(settings: Settings = Depends(get_settings)) -> ScopedStore:
    if not hasattr(app.state, "store"):
        app.state.store = ScopedStore(settings.app_name, settings.company_name, settings.root_dir)
    return app.state.store


@app.get("/healthz")
async def healthcheck() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/files", response_model=ListResponse)
async def list_files(
    subfolder: str = Query(default=""),
    pattern: str = Query(default="*"),
    store: ScopedStore = Depends(get_store),
):
    files = _unwrap(store.try_list_directory(subfolder, pattern))
    return ListResponse(files=files)


@app.get("/files/text/{file_name}", response_model=TextResponse)
async def read_text(
    file_name: str,
    subfolder: str = Query(default=""),
    store: ScopedStore = Depends(get_store),
):
    content = _unwrap(store.try_load_text(file_name, subfolder))
    return TextResponse(content=content)


@app.put("/files/text/{file_name}", response_model=WriteResponse)
async def write_text(
    file_name: str,
    payload: WriteTextRequest,
    store: ScopedStore = Depends(get_store),
):
    _unwrap(store.try_save_text(file_name, payload.content, payload.subfolder))
    return WriteResponse(path=_stored_path(payload.subfolder, file_name))


@app.get("/files/binary/{file_name}", response_class=Response)
async def read_binary(
    file_name: str,
    subfolder: str = Query(default=""),
    store: ScopedStore = Depends(get_store),
):
    content = _unwrap(store.try_load_binary(file_name, subfolder))
    return Response(content=content, media_type="application/octet-stream")


@app.put("/files/binary/{file_name}", response_model=WriteResponse)
async def write_binary(
    file_name: str,
    request: Request,
    subfolder: str = Query(default=""),
    store: ScopedStore = Depends(get_store),
):
    content = await request.body()
    _unwrap(store.try_save_binary(file_name, content, subfolder))
    return WriteResponse(path=_stored_path(subfolder, file_name))
