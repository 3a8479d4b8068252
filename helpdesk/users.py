"""User store operations shared by the routers and the command-line scripts."""

from __future__ import annotations

import logging
from typing import List

from fastapi import status
from sqlalchemy.orm import Session

from helpdesk import models, schemas
from helpdesk.auth import get_password_hash, normalize_email
from helpdesk.errors import api_error

logger = logging.getLogger(__name__)


def _ensure_email_free(db: Session, email: str, exclude_cod: str | None = None) -> None:
    q = db.query(models.UtilizadorModel).filter(models.UtilizadorModel.email == normalize_email(email))
    if exclude_cod is not None:
        q = q.filter(models.UtilizadorModel.cod != exclude_cod)
    if q.first() is not None:
        raise api_error(status.HTTP_400_BAD_REQUEST, "email_in_use", "Email already in use")


def create_user(db: Session, user_in: schemas.UtilizadorCreate) -> models.UtilizadorModel:
    """Register a user, storing a salted hash of the password. 400 when the email is taken."""
    _ensure_email_free(db, user_in.email)

    data = user_in.model_dump()
    data["senha"] = get_password_hash(user_in.senha)
    user = models.UtilizadorModel(**data)

    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("Registered user %s", user.cod)
    return user


def update_user(db: Session, user: models.UtilizadorModel, payload: schemas.UtilizadorUpdate) -> models.UtilizadorModel:
    """Apply the supplied fields to `user`; a new password is re-hashed."""
    changes = payload.model_dump(exclude_unset=True)

    if "senha" in changes and changes["senha"] is None:
        raise api_error(status.HTTP_400_BAD_REQUEST, "constraint_violation", "User violates a uniqueness or integrity constraint")

    if changes.get("email") and changes["email"] != user.email:
        _ensure_email_free(db, changes["email"], exclude_cod=user.cod)

    for key, value in changes.items():
        if key == "senha":
            user.senha = get_password_hash(value)
        else:
            setattr(user, key, value)

    db.commit()
    db.refresh(user)
    logger.info("Updated user %s", user.cod)
    return user


def list_user_types(db: Session) -> List[str]:
    rows = (
        db.query(models.UtilizadorModel.tipo_utilizador)
        .filter(models.UtilizadorModel.tipo_utilizador.isnot(None))
        .group_by(models.UtilizadorModel.tipo_utilizador)
        .order_by(models.UtilizadorModel.tipo_utilizador)
        .all()
    )
    return [row[0] for row in rows]


__all__ = ["create_user", "update_user", "list_user_types"]
