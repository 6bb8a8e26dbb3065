# fittrack/deps/auth.py
import logging
from typing import Optional

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from jose.exceptions import ExpiredSignatureError, JWTError

from fittrack.schemas.identity import Identity
from fittrack.security import identity_from_token

log = logging.getLogger(__name__)

# Exposes Bearer auth in Swagger. auto_error=False: a missing token is not an
# HTTP error here, the facade reports it as AuthenticationRequired.
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login", auto_error=False)

def get_current_identity(token: Optional[str] = Depends(oauth2_scheme)) -> Optional[Identity]:
    if not token:
        return None
    try:
        return identity_from_token(token)
    except ExpiredSignatureError:
        log.info("expired identity token")
        return None
    except JWTError:
        log.info("invalid identity token")
        return None
