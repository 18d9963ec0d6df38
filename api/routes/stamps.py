from __future__ import annotations

from fastapi import APIRouter, Depends

from api.deps import get_hashcash_config
from api.schemas.stamps import ChallengeResponse, VerifyRequest, VerifyResponse
from hashcash import STAMP_VERSION
from hashcash.core.difficulty import fingerprint
from hashcash.core.models import HashcashConfig
from hashcash.core.policy import ExactResource
from hashcash.core.verifier import Verifier

router = APIRouter()


@router.get("/challenge", response_model=ChallengeResponse)
def challenge(config: HashcashConfig = Depends(get_hashcash_config)) -> ChallengeResponse:
    return ChallengeResponse(
        version=STAMP_VERSION,
        bits=config.bits,
        expiry_seconds=int(config.expiry.total_seconds()),
        future_seconds=int(config.future.total_seconds()),
    )


@router.post("/verify", response_model=VerifyResponse)
def verify(req: VerifyRequest, config: HashcashConfig = Depends(get_hashcash_config)) -> VerifyResponse:
    policy = ExactResource(req.resource) if req.resource is not None else None
    # Rejections propagate to the handlers in api.errors.
    Verifier(config, policy).verify(req.stamp)
    return VerifyResponse(accepted=True, fingerprint=fingerprint(req.stamp))
