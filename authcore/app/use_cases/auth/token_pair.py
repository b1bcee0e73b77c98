"""
Token pair issuance shared by login and refresh.
"""

from dataclasses import dataclass
from uuid import uuid4

from authcore.app.services.token_codec import ITokenCodec
from authcore.domain.entities import TokenKind, User, UserRole


@dataclass(frozen=True)
class IssuedTokenPair:
    access_token: str
    refresh_token: str
    jti: str


def issue_token_pair(codec: ITokenCodec, user: User, device_id: str) -> IssuedTokenPair:
    """Issue an access/refresh pair sharing a fresh jti"""
    jti = str(uuid4())
    access_token = codec.issue(
        TokenKind.access,
        {
            "sub": user.public_id,
            "email": user.email,
            "name": user.full_name,
            "role": UserRole(user.role).value,
            "account_id": user.active_account_id,
            "device_id": device_id,
            "jti": jti,
        },
    )
    refresh_token = codec.issue(
        TokenKind.refresh,
        {"sub": user.public_id, "jti": jti, "device_id": device_id},
    )
    return IssuedTokenPair(access_token=access_token, refresh_token=refresh_token, jti=jti)
