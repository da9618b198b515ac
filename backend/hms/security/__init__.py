# Security module
from hms.security.auth import (
    get_password_hash, verify_password, create_access_token,
    get_current_user, require_admin
)

__all__ = [
    'get_password_hash', 'verify_password', 'create_access_token',
    'get_current_user', 'require_admin'
]
