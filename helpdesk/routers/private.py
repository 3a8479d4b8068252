"""Protected routes: entity CRUD, user management and the caller's identity.

The router is mounted with the `require_identity` dependency, so every
endpoint here runs only for requests carrying a valid token.
"""

import logging

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from helpdesk import models, schemas, users
from helpdesk.auth import require_identity
from helpdesk.crud import (
    DEFAULT_PAGE_SIZE,
    MAX_PAGE_SIZE,
    get_or_404,
    paginate,
    register_resource,
    store_errors,
)
from helpdesk.database import get_db
from helpdesk.resources import PROTECTED_RESOURCES

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Protected"])

USER_LABEL = "User"


@router.get("/me", response_model=schemas.TokenClaims, summary="Current identity")
def me(identity: schemas.TokenClaims = Depends(require_identity)):
    return identity


@router.get("/utilizadores", summary="List Users (paginated)")
def list_users(
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    db: Session = Depends(get_db),
):
    with store_errors(db, "list", USER_LABEL):
        query = db.query(models.UtilizadorModel).order_by(
            models.UtilizadorModel.data_criacao.desc(), models.UtilizadorModel.cod
        )
        return paginate(query, page, limit, schemas.UtilizadorResponse)


@router.get("/utilizadores/{cod}", response_model=schemas.UtilizadorResponse, summary="Get User")
def get_user(cod: str, db: Session = Depends(get_db)):
    with store_errors(db, "read", USER_LABEL):
        user = get_or_404(db, models.UtilizadorModel, cod, USER_LABEL)
        return schemas.UtilizadorResponse.model_validate(user)


@router.put("/utilizadores/{cod}", response_model=schemas.UtilizadorResponse, summary="Update User")
def update_user(cod: str, payload: schemas.UtilizadorUpdate, db: Session = Depends(get_db)):
    with store_errors(db, "update", USER_LABEL):
        user = get_or_404(db, models.UtilizadorModel, cod, USER_LABEL)
        user = users.update_user(db, user, payload)
        return schemas.UtilizadorResponse.model_validate(user)


@router.delete("/utilizadores/{cod}", summary="Delete User")
def delete_user(cod: str, db: Session = Depends(get_db)):
    with store_errors(db, "delete", USER_LABEL):
        user = get_or_404(db, models.UtilizadorModel, cod, USER_LABEL)
        deleted = schemas.UtilizadorResponse.model_validate(user)
        db.delete(user)
        db.commit()
        logger.info("Deleted user %s", cod)
        return {"message": f"{USER_LABEL} deleted", "data": deleted}


@router.get("/tipos-utilizadores", response_model=schemas.TiposUtilizadoresResponse, summary="Distinct user types")
def user_types(db: Session = Depends(get_db)):
    with store_errors(db, "list", "User type"):
        return schemas.TiposUtilizadoresResponse(tipos=users.list_user_types(db))


@router.get("/conversas/{cod_ticket}", summary="List a ticket's conversation")
def ticket_conversation(cod_ticket: str, db: Session = Depends(get_db)):
    """Messages exchanged on one ticket, oldest first."""
    with store_errors(db, "list", "Conversation"):
        rows = (
            db.query(models.ConversaModel)
            .filter(models.ConversaModel.cod_ticket == cod_ticket)
            .order_by(models.ConversaModel.data_criacao.asc(), models.ConversaModel.cod)
            .all()
        )
        return {"data": [schemas.ConversaResponse.model_validate(row) for row in rows]}


for _resource in PROTECTED_RESOURCES:
    register_resource(router, _resource)
