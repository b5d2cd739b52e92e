"""HTTP basic auth for operator routes (stats)."""

import os
import secrets

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBasic, HTTPBasicCredentials

USERNAME_ENV = "ULIDKIT_API_USERNAME"
PASSWORD_ENV = "ULIDKIT_API_PASSWORD"

operator_security = HTTPBasic(realm="ulidkit")


def operator_credentials():
    """(username, password) from the environment, read on every request."""
    return os.environ.get(USERNAME_ENV, "admin"), os.environ.get(PASSWORD_ENV, "admin123")


def require_operator(credentials: HTTPBasicCredentials = Depends(operator_security)):
    username, password = operator_credentials()
    username_ok = secrets.compare_digest(credentials.username.encode(), username.encode())
    password_ok = secrets.compare_digest(credentials.password.encode(), password.encode())
    if not (username_ok and password_ok):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Operator credentials required",
            headers={"WWW-Authenticate": 'Basic realm="ulidkit"'},
        )
    return credentials.username
