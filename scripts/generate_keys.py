"""
Script para generar el par de claves RSA usado cuando JWT_ALGORITHM=RS256.

    python scripts/generate_keys.py [--force]

Con HS256 (por defecto) no hace falta: basta con JWT_SECRET_KEY.
"""

import sys
from pathlib import Path

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa


def generate_rsa_keys(force: bool = False) -> None:
    keys_dir = Path(__file__).parent.parent / "keys"
    keys_dir.mkdir(exist_ok=True)

    private_key_path = keys_dir / "private.pem"
    public_key_path = keys_dir / "public.pem"

    if private_key_path.exists() and not force:
        print(f"Las claves ya existen en {keys_dir}")
        response = input("¿Desea regenerarlas? (s/N): ").strip().lower()
        if response != "s":
            print("Cancelado.")
            return

    # Clave privada RSA 2048
    private_key = rsa.generate_private_key(
        public_exponent=65537,
        key_size=2048,
    )

    private_pem = private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    )
    private_key_path.write_bytes(private_pem)
    private_key_path.chmod(0o600)
    print(f"Clave privada generada: {private_key_path}")

    public_pem = private_key.public_key().public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    )
    public_key_path.write_bytes(public_pem)
    print(f"Clave pública generada: {public_key_path}")

    print("\nAgrega a tu .env:")
    print("   JWT_ALGORITHM=RS256")
    print("   JWT_PRIVATE_KEY_PATH=./keys/private.pem")
    print("   JWT_PUBLIC_KEY_PATH=./keys/public.pem")


if __name__ == "__main__":
    generate_rsa_keys(force="--force" in sys.argv[1:])
