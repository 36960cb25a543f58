import hmac

import bcrypt

from webcam_live.config import Settings


class AdminCredentials:
    def __init__(self, username: str, password_hash: bytes):
        self.username = username
        self._password_hash = password_hash

    @classmethod
    def from_settings(cls, settings: Settings) -> "AdminCredentials":
        if settings.admin_password_hash:
            password_hash = settings.admin_password_hash.encode()
        else:
            password_hash = bcrypt.hashpw(settings.admin_password.encode(), bcrypt.gensalt())
        return cls(settings.admin_username, password_hash)

    def verify(self, username: str, password: str) -> bool:
        if not hmac.compare_digest(username.encode(), self.username.encode()):
            return False
        return bcrypt.checkpw(password.encode(), self._password_hash)
