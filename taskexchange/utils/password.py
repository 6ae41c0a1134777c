from passlib.context import CryptContext

# taskexchange/utils/password.py

# pbkdf2_sha256 is pure python inside passlib, no native bcrypt backend needed
pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)
