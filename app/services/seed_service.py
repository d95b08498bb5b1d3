"""
Carga de datos demo: dos laboratorios y cinco usuarios.

Es idempotente: laboratorios por nombre y usuarios por email. A los
usuarios existentes se les restablece contraseña, nombre y estado.
"""

import logging

from app.core.security import generate_password, hash_password
from app.models.user import UserRole, UserStatus
from app.schemas.admin import InitDataResponse, SeedCredential
from app.storage import Storage

logger = logging.getLogger(__name__)

PRODUCTION_CONFIRMATION = "INITIALIZE_PRODUCTION_DATA_CONFIRMED"

FIXED_PASSWORDS = {
    "superadmin": "SuperAdmin123!",
    "laboratory": "LabManager123!",
    "doctor": "Doctor123!",
}

DEMO_LABS = [
    {
        "name": "Laboratorio Dental Sonrisa",
        "address": "Av. Principal 123, Madrid",
        "phone": "555-1234",
        "email": "info@sonrisa.com",
        "status": UserStatus.ACTIVE,
    },
    {
        "name": "Efecto Dental",
        "address": "Calle Efecto 456, Barcelona",
        "phone": "555-5678",
        "email": "info@efectodental.com",
        "status": UserStatus.ACTIVE,
    },
]

# (nombre, email, teléfono, rol, índice del laboratorio, clave de contraseña)
DEMO_USERS = [
    ("Super Admin", "admin@dental.com", None, UserRole.SUPERADMIN, None, "superadmin"),
    ("Lab Manager", "lab@dental.com", "555-1234", UserRole.LABORATORIO, 0, "laboratory"),
    ("Manuel Conde", "manuel@efectodental.com", "555-5678", UserRole.LABORATORIO, 1, "laboratory"),
    ("Dr. María González", "doctor@dental.com", "555-9999", UserRole.DOCTOR, 0, "doctor"),
    ("Dr. David Vázquez", "davaz3@hotmail.com", "555-7777", UserRole.DOCTOR, 1, "doctor"),
]


def random_passwords() -> dict[str, str]:
    return {key: generate_password() for key in FIXED_PASSWORDS}


async def seed_demo_data(
    storage: Storage,
    passwords: dict[str, str] | None = None,
    message: str = "Datos demo inicializados",
) -> InitDataResponse:
    passwords = passwords or FIXED_PASSWORDS
    hashed = {key: hash_password(value) for key, value in passwords.items()}

    labs = []
    labs_created = 0
    for lab_data in DEMO_LABS:
        lab = await storage.get_laboratory_by_name(lab_data["name"])
        if not lab:
            lab = await storage.create_laboratory(dict(lab_data))
            labs_created += 1
            logger.info("Laboratorio demo creado: %s", lab.name)
        labs.append(lab)

    users_created = 0
    users_updated = 0
    for name, email, phone, role, lab_index, password_key in DEMO_USERS:
        existing = await storage.get_user_by_email(email)
        if existing:
            await storage.update_user(existing.id, {
                "password": hashed[password_key],
                "name": name,
                "status": UserStatus.ACTIVE,
            })
            users_updated += 1
            logger.info("Usuario demo actualizado: %s", email)
        else:
            await storage.create_user({
                "name": name,
                "email": email,
                "password": hashed[password_key],
                "phone": phone,
                "role": role,
                "status": UserStatus.ACTIVE,
                "lab_id": labs[lab_index].id if lab_index is not None else None,
            })
            users_created += 1
            logger.info("Usuario demo creado: %s", email)

    return InitDataResponse(
        message=message,
        laboratories_created=labs_created,
        users_created=users_created,
        users_updated=users_updated,
        credentials={
            "superadmin": SeedCredential(email="admin@dental.com", password=passwords["superadmin"]),
            "laboratory": SeedCredential(email="lab@dental.com", password=passwords["laboratory"]),
            "doctor": SeedCredential(email="doctor@dental.com", password=passwords["doctor"]),
        },
    )
