"""
FastAPI backend: REST API over the address book store.
Run with uvicorn: uvicorn api.main:app --reload
"""

import logging
import threading
from collections.abc import Iterator
from contextlib import asynccontextmanager, contextmanager
from dataclasses import asdict

from fastapi import FastAPI, HTTPException, Request, Response
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from addressbook.application import (
    ContactRow,
    ContactStore,
    CorruptStore,
    NotFound,
    StoreIOError,
    ValidationError,
)
from addressbook.config import Settings, load_settings
from addressbook.domain import ContactRecord, Sex
from addressbook.infrastructure import (
    normalize_phone_columns,
    open_file_store,
    parse_birthday,
)

settings = load_settings()

logging.basicConfig(
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    level=getattr(logging, settings.log_level, logging.INFO),
)
logger = logging.getLogger(__name__)


def _settings(request: Request) -> Settings:
    return getattr(request.app.state, "settings", None) or settings


@contextmanager
def locked_store(request: Request) -> Iterator[ContactStore]:
    """The shared store, held under app.state.store_lock so calls run one at a time."""
    with request.app.state.store_lock:
        if getattr(request.app.state, "store", None) is None:
            request.app.state.store = open_file_store(_settings(request).data_file)
        yield request.app.state.store


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.settings = getattr(app.state, "settings", None) or settings
    with app.state.store_lock:
        app.state.store = open_file_store(app.state.settings.data_file)
    if app.state.store.load_error is not None:
        logger.error(
            "Starting with an empty address book: %s", app.state.store.load_error
        )
    logger.info(
        "Address book bound to %s (%d contacts)",
        app.state.store.location,
        len(app.state.store),
    )
    yield


app = FastAPI(title="Address Book API", lifespan=lifespan)
app.state.store_lock = threading.Lock()


# --- error mapping ---


@app.exception_handler(ValidationError)
async def _validation_error(request: Request, exc: ValidationError):
    return JSONResponse(status_code=400, content={"detail": str(exc)})


@app.exception_handler(NotFound)
async def _not_found(request: Request, exc: NotFound):
    return JSONResponse(status_code=404, content={"detail": str(exc)})


@app.exception_handler(CorruptStore)
async def _corrupt_store(request: Request, exc: CorruptStore):
    return JSONResponse(status_code=409, content={"detail": str(exc)})


@app.exception_handler(StoreIOError)
async def _store_io_error(request: Request, exc: StoreIOError):
    logger.error("Storage failure: %s", exc)
    return JSONResponse(status_code=500, content={"detail": str(exc)})


# --- REST: health ---


@app.get("/health")
def health():
    return {"status": "ok"}


# --- REST: contacts ---


class ContactBody(BaseModel):
    name: str
    sex: Sex = Sex.MALE
    address: str = ""
    company: str = ""
    postal_code: str = ""
    home_phone: str = ""
    office_phone: str = ""
    fax: str = ""
    cell_phone: str = ""
    email: str = ""
    instant_messenger: str = ""
    birthday: str = ""
    memo: str = ""


class StorageBody(BaseModel):
    location: str


def _record_from_body(body: ContactBody, record_id: int, cfg: Settings) -> ContactRecord:
    """Trim every field, normalize phones, parse the birthday."""
    fields = {
        k: (v or "").strip()
        for k, v in body.model_dump(exclude={"sex", "birthday"}).items()
    }
    fields = normalize_phone_columns(fields, cfg.phone_region)
    try:
        birthday = parse_birthday(body.birthday)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    return ContactRecord(id=record_id, sex=body.sex, birthday=birthday, **fields)


@app.get("/contacts")
def list_contacts(request: Request):
    with locked_store(request) as store:
        return [asdict(row) for row in store.rows()]


@app.get("/contacts/search")
def search_contacts(request: Request, q: str = ""):
    with locked_store(request) as store:
        return [asdict(row) for row in store.search_rows(q)]


@app.get("/contacts/{contact_id}")
def get_contact(contact_id: int, request: Request):
    with locked_store(request) as store:
        return asdict(ContactRow.from_record(store.get(contact_id)))


@app.post("/contacts")
def create_contact(body: ContactBody, request: Request):
    record = _record_from_body(body, 0, _settings(request))
    with locked_store(request) as store:
        record_id = store.add(record)
    return JSONResponse(content={"id": record_id}, status_code=201)


@app.put("/contacts/{contact_id}")
def update_contact(contact_id: int, body: ContactBody, request: Request):
    record = _record_from_body(body, contact_id, _settings(request))
    with locked_store(request) as store:
        store.update(record)
    return {"id": contact_id}


@app.delete("/contacts/{contact_id}")
def delete_contact(contact_id: int, request: Request):
    with locked_store(request) as store:
        store.remove(contact_id)
    return Response(status_code=204)


# --- REST: storage binding ---


def _storage_info(store: ContactStore) -> dict:
    return {"location": str(store.location), "next_id": store.next_id, "count": len(store)}


@app.get("/storage")
def get_storage(request: Request):
    with locked_store(request) as store:
        return _storage_info(store)


@app.put("/storage")
def rebind_storage(body: StorageBody, request: Request):
    location = body.location.strip()
    if not location:
        raise HTTPException(status_code=400, detail="Location is required")
    with locked_store(request) as store:
        store.rebind(location)
        return _storage_info(store)
