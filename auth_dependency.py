from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials
from auth import security, token_verifier


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security)
) -> dict:
    token = credentials.credentials
    claims = token_verifier.verify_token(token)

    return {
        'user_id': str(claims.get('sub')),
        'email': claims.get('email'),
        'claims': claims
    }
