from api.schemas.stamps import ChallengeResponse, VerifyRequest, VerifyResponse

__all__ = [
    "ChallengeResponse",
    "VerifyRequest",
    "VerifyResponse",
]
