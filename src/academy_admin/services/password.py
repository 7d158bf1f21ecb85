"""Password hashing and verification utilities"""
import bcrypt


def hash_password(password: str) -> str:
    salt = bcrypt.gensalt()
    hashed = bcrypt.hashpw(password.encode('utf-8'), salt)
    return hashed.decode('utf-8')


def verify_password(password: str, password_hash: str) -> bool:
    if not password_hash:
        return False
    try:
        return bcrypt.checkpw(password.encode('utf-8'), password_hash.encode('utf-8'))
    except ValueError:
        return False


def default_password(first_name: str, reg_no: str) -> str:
    """First name in lowercase followed by the last three characters of the registration number."""
    first = (first_name or "").strip().split(" ")[0].lower()
    return first + (reg_no or "")[-3:]
