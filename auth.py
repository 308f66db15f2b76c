import logging
from fastapi import HTTPException, status
from fastapi.security import HTTPBearer
from jose import ExpiredSignatureError, JWTError, jwt

from config import JWT_SECRET, JWT_ALGORITHM

logger = logging.getLogger(__name__)

security = HTTPBearer()


class TokenVerifier:
    """Verifies access tokens issued by the auth service (HMAC-signed JWT)."""

    def __init__(self, secret: str, algorithm: str = "HS256"):
        self.secret = secret
        self.algorithm = algorithm

    def verify_token(self, token: str) -> dict:
        if not self.secret:
            logger.error("JWT_SECRET is not configured")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail='Token verification is not configured'
            )

        try:
            claims = jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except ExpiredSignatureError:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail='Token is expired'
            )
        except JWTError as e:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail=f'Unable to verify token: {str(e)}'
            )

        if not claims.get('sub'):
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail='Token has no subject'
            )

        return claims


token_verifier = TokenVerifier(JWT_SECRET, JWT_ALGORITHM)
