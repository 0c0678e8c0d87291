"""
app/api/deps.py

Dependências compartilhadas pelos routers: sessão de banco e
autenticação por bearer token.
"""

from typing import Annotated

from fastapi import Depends, Request, Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_session
from app.errors import UnauthorizedError
from app.security.tokens import verify_token

bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_user_id(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Security(bearer_scheme),
) -> str:
    """
    Valida o header `Authorization: Bearer <token>` e guarda o id do
    usuário em `request.state.user_id` para o restante do request.
    """
    if credentials is None:
        raise UnauthorizedError("Not authorized, no token")

    user_id = verify_token(credentials.credentials)
    request.state.user_id = user_id
    return user_id


# scope="function": o commit acontece antes de a resposta ser enviada
Session = Annotated[AsyncSession, Depends(get_session, scope="function")]
CurrentUserId = Annotated[str, Depends(get_current_user_id)]
