import logging

from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db_session
from app.dependencies import get_session_cookie, get_token_service
from app.jwt.cookies import SessionCookie
from app.jwt.token_service import TokenService
from app.schemas.auth_schema import SignInRequest, SignUpRequest
from app.schemas.common_schema import DataResponse, MessageResponse
from app.schemas.user_schema import UserResponse
from app.services.auth_service import AuthService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Auth"])


@router.post("/sign-up", response_model=DataResponse[UserResponse])
async def sign_up(
    req: SignUpRequest,
    response: Response,
    db: AsyncSession = Depends(get_db_session),
    token_service: TokenService = Depends(get_token_service),
    cookie: SessionCookie = Depends(get_session_cookie),
) -> DataResponse[UserResponse]:
    """
    1) create the account (userName and email must be unused)
    2) set the session cookie
    """
    user, token = await AuthService(db, token_service).sign_up(req)
    cookie.set(response, token)
    return DataResponse[UserResponse](data=UserResponse.model_validate(user), message="ok")


@router.post("/sign-in", response_model=DataResponse[UserResponse])
async def sign_in(
    req: SignInRequest,
    response: Response,
    db: AsyncSession = Depends(get_db_session),
    token_service: TokenService = Depends(get_token_service),
    cookie: SessionCookie = Depends(get_session_cookie),
) -> DataResponse[UserResponse]:
    """
    userName or email + password, then the session cookie
    """
    user, token = await AuthService(db, token_service).sign_in(req)
    cookie.set(response, token)
    return DataResponse[UserResponse](
        data=UserResponse.model_validate(user),
        message="Signed-in successfully!",
    )


@router.post("/sign-out", response_model=MessageResponse)
async def sign_out(
    response: Response,
    cookie: SessionCookie = Depends(get_session_cookie),
) -> MessageResponse:
    """
    Clear the session cookie
    - the token itself stays valid until it expires
    """
    cookie.clear(response)
    return MessageResponse(message="Signed-out successfully!")
