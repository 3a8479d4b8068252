"""Generic CRUD route factory shared by the helpdesk entities.

Each business entity is described once by a `Resource` (model, schemas, query
filters, ordering, pagination, enabled operations) and `register_resource`
turns that description into the create/read/update/delete/list endpoints.

Handler contract:
- create -> 201 with the record, integrity violations -> 400
- read   -> 200 with the record or 404
- update -> only the supplied fields are written; 200, 404 or 400
- delete -> 200 with a confirmation echoing the deleted record, or 404
- list   -> {"data": [...]}; paginated resources add total/page/limit/totalPages

Anything else raised inside a handler is logged and returned as a generic 500.

Endpoints are closures annotated with per-resource schema classes, so this
module must not use `from __future__ import annotations`.
"""

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import date, datetime, time, timezone
from typing import Any, Iterator, Mapping, Optional, Sequence, Tuple, Type

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from pydantic import BaseModel
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from helpdesk.database import get_db
from helpdesk.errors import INTERNAL_ERROR_MESSAGE, api_error

logger = logging.getLogger(__name__)

ALL_OPERATIONS = frozenset({"create", "read", "update", "delete", "list"})

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100


@dataclass(frozen=True)
class Filter:
    """Maps one query-string parameter onto a model column.

    `match` is one of:
    - "exact": column == value
    - "contains": case-insensitive substring
    - "from" / "to": inclusive lower / upper date bound
    """

    param: str
    column: str
    match: str = "exact"


DATE_RANGE = ("dataInicio", "dataFim")


def date_range(column: str) -> Tuple[Filter, Filter]:
    start, end = DATE_RANGE
    return Filter(start, column, "from"), Filter(end, column, "to")


@dataclass(frozen=True)
class Resource:
    path: str
    label: str
    model: Any
    create_schema: Type[BaseModel]
    update_schema: Type[BaseModel]
    response_schema: Type[BaseModel]
    filters: Sequence[Filter] = ()
    order_by: Optional[str] = None
    descending: bool = False
    paginated: bool = False
    operations: frozenset = ALL_OPERATIONS
    # Public listing (reference data): reduced schema and its own filters
    reference_schema: Optional[Type[BaseModel]] = None
    reference_filters: Sequence[Filter] = ()

    @property
    def code(self) -> str:
        return self.label.lower().replace(" ", "_")


@contextmanager
def store_errors(db: Session, action: str, label: str) -> Iterator[None]:
    """Handler boundary: map store failures onto API errors.

    HTTP errors raised inside the block pass through untouched; integrity
    violations become 400; anything else is logged and becomes a generic 500.
    """
    try:
        yield
    except HTTPException:
        raise
    except IntegrityError as exc:
        db.rollback()
        logger.warning("Constraint violation during %s of %s: %s", action, label, exc.orig)
        raise api_error(
            status.HTTP_400_BAD_REQUEST,
            "constraint_violation",
            f"{label} violates a uniqueness or integrity constraint",
        ) from exc
    except Exception as exc:
        db.rollback()
        logger.exception("Unexpected error during %s of %s", action, label)
        raise api_error(status.HTTP_500_INTERNAL_SERVER_ERROR, "internal_error", INTERNAL_ERROR_MESSAGE) from exc


def get_or_404(db: Session, model: Any, cod: str, label: str) -> Any:
    obj = db.query(model).filter(model.cod == cod).first()
    if obj is None:
        code = label.lower().replace(" ", "_")
        raise api_error(status.HTTP_404_NOT_FOUND, f"{code}_not_found", f"{label} not found")
    return obj


def parse_date_param(param: str, value: str, end_of_day: bool = False) -> datetime:
    """Parse an ISO-8601 date or datetime query value into an aware UTC datetime.

    A bare date used as an upper bound covers the whole day.
    """
    raw = value.strip()
    try:
        if len(raw) == 10:
            day = date.fromisoformat(raw)
            parsed = datetime.combine(day, time.max if end_of_day else time.min)
        else:
            parsed = datetime.fromisoformat(raw.replace("Z", "+00:00"))
        if parsed.tzinfo is None:
            return parsed.replace(tzinfo=timezone.utc)
        # out-of-range offsets near year 1 or 9999 raise OverflowError
        return parsed.astimezone(timezone.utc)
    except (ValueError, OverflowError):
        raise api_error(status.HTTP_400_BAD_REQUEST, "invalid_date", f"Invalid date supplied for '{param}'")


def apply_filters(query: Any, model: Any, filters: Sequence[Filter], params: Mapping[str, str]) -> Any:
    conditions = []
    for f in filters:
        value = params.get(f.param)
        if value is None or value == "":
            continue
        column = getattr(model, f.column)
        if f.match == "contains":
            conditions.append(column.icontains(value, autoescape=True))
        elif f.match == "from":
            conditions.append(column >= parse_date_param(f.param, value))
        elif f.match == "to":
            conditions.append(column <= parse_date_param(f.param, value, end_of_day=True))
        else:
            conditions.append(column == value)
    if conditions:
        query = query.filter(*conditions)
    return query


def apply_ordering(query: Any, resource: Resource) -> Any:
    if resource.order_by is None:
        return query
    column = getattr(resource.model, resource.order_by)
    return query.order_by(column.desc() if resource.descending else column.asc(), resource.model.cod)


def paginate(query: Any, page: int, limit: int, schema: Type[BaseModel]) -> dict:
    total = query.count()
    offset = (page - 1) * limit
    items = query.offset(offset).limit(limit).all()
    return {
        "total": total,
        "page": page,
        "limit": limit,
        "totalPages": (total + limit - 1) // limit,
        "data": [schema.model_validate(obj) for obj in items],
    }


def _filter_parameters(filters: Sequence[Filter]) -> dict:
    """OpenAPI description of the dynamic query filters."""
    params = []
    for f in filters:
        schema: dict = {"type": "string"}
        if f.match in ("from", "to"):
            schema["format"] = "date-time"
        params.append({"name": f.param, "in": "query", "required": False, "schema": schema})
    return {"parameters": params} if params else {}


def _add_create(router: APIRouter, resource: Resource) -> None:
    create_schema = resource.create_schema
    response_schema = resource.response_schema

    @router.post(f"/{resource.path}", status_code=status.HTTP_201_CREATED, response_model=response_schema, name=f"create_{resource.code}", summary=f"Create {resource.label}")
    def create(payload: create_schema, db: Session = Depends(get_db)):
        with store_errors(db, "create", resource.label):
            obj = resource.model(**payload.model_dump())
            db.add(obj)
            db.commit()
            db.refresh(obj)
            logger.info("Created %s %s", resource.label, obj.cod)
            return response_schema.model_validate(obj)


def _add_read(router: APIRouter, resource: Resource) -> None:
    response_schema = resource.response_schema

    @router.get(f"/{resource.path}/{{cod}}", response_model=response_schema, name=f"get_{resource.code}", summary=f"Get {resource.label}")
    def read(cod: str, db: Session = Depends(get_db)):
        with store_errors(db, "read", resource.label):
            obj = get_or_404(db, resource.model, cod, resource.label)
            return response_schema.model_validate(obj)


def _add_update(router: APIRouter, resource: Resource) -> None:
    update_schema = resource.update_schema
    response_schema = resource.response_schema

    @router.put(f"/{resource.path}/{{cod}}", response_model=response_schema, name=f"update_{resource.code}", summary=f"Update {resource.label}")
    def update(cod: str, payload: update_schema, db: Session = Depends(get_db)):
        with store_errors(db, "update", resource.label):
            obj = get_or_404(db, resource.model, cod, resource.label)
            for key, value in payload.model_dump(exclude_unset=True).items():
                setattr(obj, key, value)
            db.commit()
            db.refresh(obj)
            logger.info("Updated %s %s", resource.label, cod)
            return response_schema.model_validate(obj)


def _add_delete(router: APIRouter, resource: Resource) -> None:
    response_schema = resource.response_schema

    @router.delete(f"/{resource.path}/{{cod}}", name=f"delete_{resource.code}", summary=f"Delete {resource.label}")
    def delete(cod: str, db: Session = Depends(get_db)):
        with store_errors(db, "delete", resource.label):
            obj = get_or_404(db, resource.model, cod, resource.label)
            deleted = response_schema.model_validate(obj)
            db.delete(obj)
            db.commit()
            logger.info("Deleted %s %s", resource.label, cod)
            return {"message": f"{resource.label} deleted", "data": deleted}


def _add_list(router: APIRouter, resource: Resource) -> None:
    response_schema = resource.response_schema
    path = f"/{resource.path}"
    extra = _filter_parameters(resource.filters)

    def filtered(db: Session, request: Request) -> Any:
        query = apply_filters(db.query(resource.model), resource.model, resource.filters, request.query_params)
        return apply_ordering(query, resource)

    if resource.paginated:

        @router.get(path, name=f"list_{resource.code}", summary=f"List {resource.label} records (paginated)", openapi_extra=extra or None)
        def list_paginated(
            request: Request,
            page: int = Query(1, ge=1),
            limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
            db: Session = Depends(get_db),
        ):
            with store_errors(db, "list", resource.label):
                return paginate(filtered(db, request), page, limit, response_schema)

    else:

        @router.get(path, name=f"list_{resource.code}", summary=f"List {resource.label} records", openapi_extra=extra or None)
        def list_all(request: Request, db: Session = Depends(get_db)):
            with store_errors(db, "list", resource.label):
                return {"data": [response_schema.model_validate(obj) for obj in filtered(db, request).all()]}


def register_resource(router: APIRouter, resource: Resource) -> None:
    """Add the endpoints enabled in `resource.operations` to `router`."""
    if "list" in resource.operations:
        _add_list(router, resource)
    if "create" in resource.operations:
        _add_create(router, resource)
    if "read" in resource.operations:
        _add_read(router, resource)
    if "update" in resource.operations:
        _add_update(router, resource)
    if "delete" in resource.operations:
        _add_delete(router, resource)


def register_reference_listing(router: APIRouter, resource: Resource) -> None:
    """Add the reduced, public `GET /<path>` listing used for reference data."""
    schema = resource.reference_schema or resource.response_schema
    extra = _filter_parameters(resource.reference_filters)

    @router.get(f"/{resource.path}", name=f"list_{resource.code}_reference", summary=f"List {resource.label} reference data", openapi_extra=extra or None)
    def list_reference(request: Request, db: Session = Depends(get_db)):
        with store_errors(db, "list", resource.label):
            query = apply_filters(db.query(resource.model), resource.model, resource.reference_filters, request.query_params)
            query = apply_ordering(query, resource)
            return {"data": [schema.model_validate(obj) for obj in query.all()]}


__all__ = [
    "ALL_OPERATIONS",
    "Filter",
    "Resource",
    "apply_filters",
    "date_range",
    "get_or_404",
    "paginate",
    "parse_date_param",
    "register_reference_listing",
    "register_resource",
    "store_errors",
]
