from __future__ import annotations

from contextlib import contextmanager

from fastapi import APIRouter, HTTPException, Request

from lombard.domain.errors import (
    ClientNotFoundError,
    ClientValidationError,
    DuplicateClientError,
    StorageError,
)
from lombard.routers.schemas import ClientIn, ClientOut, ClientSummaryOut
from lombard.services.client_service import ClientService

router = APIRouter(prefix="/clients", tags=["clients"])


def _get_client_service(request: Request) -> ClientService:
    svc = getattr(getattr(request.app, "state", None), "client_service", None)
    if not svc:
        raise RuntimeError("ClientService not configured")
    return svc


@contextmanager
def _http_errors():
    try:
        yield
    except ClientNotFoundError as exc:
        raise HTTPException(404, str(exc)) from exc
    except DuplicateClientError as exc:
        raise HTTPException(409, str(exc)) from exc
    except ClientValidationError as exc:
        raise HTTPException(422, str(exc)) from exc
    except StorageError as exc:
        raise HTTPException(503, "Client storage unavailable") from exc


@router.get("", response_model=list[ClientSummaryOut])
def list_clients(request: Request, offset: int = 0, count: int = 20):
    svc = _get_client_service(request)
    with _http_errors():
        return [ClientSummaryOut.from_summary(s) for s in svc.list_page(offset, count)]


@router.get("/count")
def count_clients(request: Request):
    svc = _get_client_service(request)
    with _http_errors():
        return {"count": svc.count()}


@router.get("/search", response_model=list[ClientOut])
def search_clients(request: Request, last_name: str = "", phone: str = ""):
    svc = _get_client_service(request)
    with _http_errors():
        return [ClientOut.from_client(c) for c in svc.search(last_name=last_name, phone=phone)]


@router.post("/sort")
def sort_clients(request: Request, field: str = "last_name", ascending: bool = True):
    svc = _get_client_service(request)
    with _http_errors():
        svc.sort(field, ascending)
    return {"ok": True}


@router.get("/{client_id}", response_model=ClientOut)
def get_client(client_id: int, request: Request):
    svc = _get_client_service(request)
    with _http_errors():
        return ClientOut.from_client(svc.get(client_id))


@router.post("", response_model=ClientOut, status_code=201)
def create_client(payload: ClientIn, request: Request):
    svc = _get_client_service(request)
    with _http_errors():
        return ClientOut.from_client(svc.register(payload.model_dump()))


@router.put("/{client_id}", response_model=ClientOut)
def update_client(client_id: int, payload: ClientIn, request: Request):
    svc = _get_client_service(request)
    with _http_errors():
        return ClientOut.from_client(svc.edit(client_id, payload.model_dump()))


@router.delete("/{client_id}")
def delete_client(client_id: int, request: Request):
    svc = _get_client_service(request)
    with _http_errors():
        removed = svc.remove(client_id)
    if not removed:
        raise HTTPException(404, f"Client with ID {client_id} not found")
    return {"ok": True}
