"""Public routes: registration, login and the reference-data listings.

No identity is required here. The login endpoint is wrapped by the slowapi
decorator, which resolves annotations through its own globals, so this module
keeps real (non-string) annotations.
"""

import logging

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from helpdesk import schemas, users
from helpdesk.auth import authenticate_user, claims_for_user, create_access_token
from helpdesk.crud import register_reference_listing, store_errors
from helpdesk.database import get_db
from helpdesk.errors import api_error
from helpdesk.limits import LOGIN_RATE_LIMIT, limiter
from helpdesk.resources import REFERENCE_RESOURCES

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Public"])


@router.post("/utilizadores", status_code=status.HTTP_201_CREATED, response_model=schemas.UtilizadorResponse, summary="Register User")
def register(user_in: schemas.UtilizadorCreate, db: Session = Depends(get_db)):
    with store_errors(db, "create", "User"):
        user = users.create_user(db, user_in)
        return schemas.UtilizadorResponse.model_validate(user)


@router.post("/login", response_model=schemas.LoginResponse, summary="Login")
@limiter.limit(LOGIN_RATE_LIMIT)
def login(request: Request, credentials: schemas.LoginRequest, db: Session = Depends(get_db)):
    """Exchange email and password for an access token and a minimal profile."""
    with store_errors(db, "login", "User"):
        user = authenticate_user(db, credentials.email, credentials.senha)
        if user is None:
            logger.info("Failed login from %s", request.client.host if request.client else None)
            raise api_error(status.HTTP_401_UNAUTHORIZED, "invalid_credentials", "Invalid email or password")

        claims = claims_for_user(user)
        token = create_access_token(claims)

        return schemas.LoginResponse(
            message="Login successful",
            token=token,
            user=schemas.LoginUser(
                cod=user.cod,
                nome=user.nome,
                email=user.email,
                tipo_utilizador=user.tipo_utilizador,
                foto=user.foto_perfil,
                empresa=user.empresa,
                funcao=user.funcao,
            ),
        )


for _resource in REFERENCE_RESOURCES:
    register_reference_listing(router, _resource)
