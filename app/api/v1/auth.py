from fastapi import APIRouter, Depends, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
import logging

from app.config.database import get_db
from app.core.auth.service import AuthService
from app.core.auth.schemas import UserLogin, TokenResponse, UserResponse, UserCreateRequest
from app.core.auth.dependencies import get_current_user, get_admin_principal
from app.core.exceptions import AuthorizationError, ForbiddenError, PersistenceError, ValidationError
from app.shared.database.models import User

logger = logging.getLogger(__name__)

router = APIRouter()


def _authenticate(db: Session, email: str, password: str) -> User:
    user = db.query(User).filter(User.email == email).first()

    if not user or not AuthService.verify_password(password, user.password_hash):
        raise AuthorizationError("Email o contraseña incorrectos")

    if not user.is_active:
        raise ForbiddenError("Usuario inactivo")

    return user


def _token_response(user: User) -> TokenResponse:
    token_data = {
        "user_id": user.id,
        "email": user.email,
        "role": user.role
    }
    access_token = AuthService.create_access_token(data=token_data)
    logger.info(f"Login exitoso - Operador: {user.id} ({user.role})")

    return TokenResponse(
        access_token=access_token,
        token_type="bearer",
        user=UserResponse.model_validate(user)
    )


@router.post("/login", response_model=TokenResponse)
def login(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(get_db)
):
    """
    Endpoint de login para obtener token de acceso

    **Parámetros:**
    - **username**: Email del operador
    - **password**: Contraseña del operador
    """
    user = _authenticate(db, form_data.username, form_data.password)
    return _token_response(user)


@router.post("/login-json", response_model=TokenResponse)
def login_json(
    user_login: UserLogin,
    db: Session = Depends(get_db)
):
    """Endpoint de login alternativo que acepta JSON"""
    user = _authenticate(db, user_login.email, user_login.password)
    return _token_response(user)


@router.get("/me", response_model=UserResponse)
def get_current_user_info(
    current_user: User = Depends(get_current_user)
):
    """
    Obtener información del operador actual

    **Headers requeridos:**
    - Authorization: Bearer {token}
    """
    return UserResponse.model_validate(current_user)


@router.post("/users", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def create_user(
    user_data: UserCreateRequest,
    _admin = Depends(get_admin_principal),
    db: Session = Depends(get_db)
):
    """Crear operador (solo administradores)"""
    if db.query(User).filter(User.email == user_data.email).first():
        raise ValidationError(f"El email {user_data.email} ya está registrado")

    user = User(
        name=user_data.name,
        email=user_data.email,
        password_hash=AuthService.get_password_hash(user_data.password),
        role=user_data.role.value,
        is_active=True
    )

    try:
        db.add(user)
        db.commit()
        db.refresh(user)
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Error creando operador")
        raise PersistenceError("Error al crear el operador") from e

    logger.info(f"Operador {user.id} creado con rol {user.role}")
    return UserResponse.model_validate(user)
