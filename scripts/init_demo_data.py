"""
Carga los laboratorios y usuarios demo en la base de DATABASE_URL.

Uso:
    python scripts/init_demo_data.py [--random-passwords]

Es idempotente: los usuarios existentes recuperan su contraseña demo.
"""

import asyncio
import sys
from pathlib import Path

# Agregar el directorio raíz al path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from app.database import async_session_factory, engine  # noqa: E402
from app.services import seed_service  # noqa: E402
from app.storage import SQLStorage  # noqa: E402


async def init_demo_data(random_passwords: bool) -> None:
    passwords = seed_service.random_passwords() if random_passwords else None

    async with async_session_factory() as db:
        result = await seed_service.seed_demo_data(SQLStorage(db), passwords)
        await db.commit()

    await engine.dispose()

    print(
        f"Seed completado: {result.laboratories_created} laboratorios, "
        f"{result.users_created} usuarios creados, "
        f"{result.users_updated} actualizados."
    )
    for role, cred in result.credentials.items():
        print(f"  {role:<11} {cred.email}  {cred.password}")


def main():
    asyncio.run(init_demo_data("--random-passwords" in sys.argv[1:]))


if __name__ == "__main__":
    main()
