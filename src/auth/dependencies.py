from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer

from src.auth.read_model import IdentityReadModel, SqlIdentityReadModel
from src.auth.tokens import InvalidTokenError, decode_access_token
from src.events.dtos import CallerDTO

# tokenUrl is only used for the OpenAPI docs, tokens are issued by the CLI
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="token")
oauth2_scheme_optional = OAuth2PasswordBearer(tokenUrl="token", auto_error=False)


def get_identity_read_model() -> IdentityReadModel:
    """Dependency to get identity read model instance."""
    return SqlIdentityReadModel()


async def get_current_caller(
    token: str = Depends(oauth2_scheme),
    read_model: IdentityReadModel = Depends(get_identity_read_model),
) -> CallerDTO:
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    try:
        user_id = decode_access_token(token)
    except InvalidTokenError:
        raise credentials_exception

    caller = await read_model.get_caller(user_id)
    if caller is None:
        raise credentials_exception
    return caller


async def get_optional_caller(
    token: str | None = Depends(oauth2_scheme_optional),
    read_model: IdentityReadModel = Depends(get_identity_read_model),
) -> CallerDTO | None:
    """Like get_current_caller, but anonymous or invalid tokens yield None."""
    if token is None:
        return None
    try:
        user_id = decode_access_token(token)
    except InvalidTokenError:
        return None
    return await read_model.get_caller(user_id)
