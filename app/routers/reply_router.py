from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db_session
from app.dependencies import get_current_identity
from app.jwt.token_service import IdentityClaim
from app.schemas.common_schema import DataResponse
from app.schemas.tweet_schema import ReplyCreateRequest, ReplyResponse
from app.services.tweet_service import ReplyService

router = APIRouter(prefix="/replies", tags=["Replies"])


@router.post("", response_model=DataResponse[ReplyResponse])
async def post_reply(
    req: ReplyCreateRequest,
    identity: IdentityClaim = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db_session),
):
    reply = await ReplyService(db).create_reply(identity, req.tweet_id, req.content)
    return DataResponse[ReplyResponse](
        data=ReplyResponse.model_validate(reply),
        message="Reply was posted successfully!",
    )
