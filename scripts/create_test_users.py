"""
Script para crear operadores de prueba (un admin y un colaborador)
"""
import logging

from app.config.database import SessionLocal, init_db
from app.shared.database.models import User
from app.core.auth.service import AuthService

logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)

TEST_USERS = [
    {
        "email": "admin@pdv.com",
        "password": "admin123",
        "name": "Ana Administradora",
        "role": "admin"
    },
    {
        "email": "colaborador@pdv.com",
        "password": "colaborador123",
        "name": "Juan Colaborador",
        "role": "collaborator"
    }
]

def create_test_users():
    """Crear operadores de prueba para cada rol"""
    init_db()
    db = SessionLocal()

    try:
        existing_users = db.query(User).count()
        if existing_users > 0:
            logger.info(f"Ya existen {existing_users} operadores en la base de datos")
            return

        for user_data in TEST_USERS:
            user = User(
                email=user_data["email"],
                password_hash=AuthService.get_password_hash(user_data["password"]),
                name=user_data["name"],
                role=user_data["role"],
                is_active=True
            )
            db.add(user)

        db.commit()

        for user_data in TEST_USERS:
            logger.info(f"{user_data['role']}: {user_data['email']} / {user_data['password']}")

    except Exception:
        db.rollback()
        logger.exception("Error creando operadores de prueba")
        raise
    finally:
        db.close()

if __name__ == "__main__":
    create_test_users()
