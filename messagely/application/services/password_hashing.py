"""Password hashing strategies."""

from __future__ import annotations

from werkzeug.security import check_password_hash, generate_password_hash

from messagely.domain.users.repositories import PasswordHasher


class WerkzeugPasswordHasher(PasswordHasher):
    """PBKDF2-SHA256 hasher; ``work_factor`` is the iteration count."""

    def __init__(self, work_factor: int) -> None:
        self._method = f"pbkdf2:sha256:{int(work_factor)}"

    def hash(self, password: str) -> str:
        return str(generate_password_hash(password, method=self._method))

    def verify(self, password: str, hashed: str) -> bool:
        return bool(check_password_hash(hashed, password))
