from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from bell_api.core.security import verify_upload_key
from bell_api.core.config import settings

bearer_scheme = HTTPBearer(auto_error=False)

def require_upload_key(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
):
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="missing bearer token")

    if not verify_upload_key(credentials.credentials, settings.UPLOAD_KEY):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="unauthorized")

    return True
