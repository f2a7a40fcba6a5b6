import logging

from fastapi import Request, APIRouter
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from pwdlib import PasswordHash

from limiter import limiter
from auth import authentication, identityDep
from config import settings
from database import sessionDep
from exceptions import (
    AppError,
    DuplicateEmailError,
    InternalError,
    InvalidCredentialsError,
    MissingFieldError,
    UserNotFoundError,
)
from models.usermodel import UserModel
from schemas.userschema import (
    CreateAccountSchema,
    UserCredsSchema,
    UserPublicSchema,
    UserSchema,
)
from constants import LIMIT_VALUE_AUTH, SCOPE_AUTH

router_auth = APIRouter(tags=["Authentication"])
hasher = PasswordHash.recommended()
logger = logging.getLogger("notes.auth")


def store_password(password: str) -> str:
    if settings.password_hashing:
        return hasher.hash(password)
    return password


def check_password(password: str, stored: str) -> bool:
    if settings.password_hashing:
        return hasher.verify(password, stored)
    return password == stored


def dump_user(user: UserModel) -> dict:
    return UserSchema.model_validate(user).model_dump(mode="json", by_alias=True)


@router_auth.post(
    "/create-account",
    status_code=201,
    description="Accepts full name, email and password. Creates the account and returns it with an access token, error if a field is missing or the email is taken",
    summary="Register user",
)
@limiter.shared_limit(LIMIT_VALUE_AUTH, SCOPE_AUTH)
async def create_account(
    newUser: CreateAccountSchema, request: Request, session: sessionDep
):
    if not newUser.full_name or not newUser.email or not newUser.password:
        raise MissingFieldError("Full Name, Email, and Password are required.")

    try:
        query = select(UserModel).where(UserModel.email == newUser.email)
        result = await session.execute(query)
        user = result.scalar_one_or_none()

        if user is not None:
            raise DuplicateEmailError()

        new_user = UserModel(
            full_name=newUser.full_name,
            email=newUser.email,
            password=store_password(newUser.password),
        )
        session.add(new_user)
        try:
            await session.commit()
        except IntegrityError as e:
            # a concurrent registration took the email after the lookup
            await session.rollback()
            raise DuplicateEmailError() from e
        await session.refresh(new_user)

        user_data = dump_user(new_user)
        access_token = authentication.create_access_token(user_data)
        logger.info("Registered user id=%s", new_user.id)

        return {
            "error": False,
            "user": user_data,
            "accessToken": access_token,
            "message": "Registration successful.",
        }
    except AppError:
        raise
    except Exception as e:
        logger.exception("Something went wrong [Create account]")

        raise InternalError() from e


@router_auth.post(
    "/login",
    description="Accepts email and password. Returns the user and a fresh access token if the credentials match",
    summary="Login user",
)
@limiter.shared_limit(LIMIT_VALUE_AUTH, SCOPE_AUTH)
async def login(creds: UserCredsSchema, request: Request, session: sessionDep):
    if not creds.email or not creds.password:
        raise MissingFieldError("Email and Password are required.")

    try:
        query = select(UserModel).where(UserModel.email == creds.email)
        result = await session.execute(query)
        user = result.scalar_one_or_none()

        if user is None:
            raise UserNotFoundError("User not found. Please register first.")

        if not check_password(creds.password, user.password):
            raise InvalidCredentialsError()

        user_data = dump_user(user)
        access_token = authentication.create_access_token(user_data)

        return {
            "error": False,
            "user": user_data,
            "accessToken": access_token,
            "message": "Login successful.",
        }
    except AppError:
        raise
    except Exception as e:
        logger.exception("Something went wrong [Login]")

        raise InternalError() from e


@router_auth.get(
    "/get-user",
    description="Accepts bearer access token. Returns the current user without the password",
    summary="Get current user",
)
@limiter.shared_limit(LIMIT_VALUE_AUTH, SCOPE_AUTH)
async def get_user(request: Request, session: sessionDep, identity: identityDep):
    try:
        query = select(UserModel).where(UserModel.id == identity["id"])
        result = await session.execute(query)
        user = result.scalar_one_or_none()

        if user is None:
            raise UserNotFoundError()

        return {
            "error": False,
            "user": UserPublicSchema.model_validate(user).model_dump(
                mode="json", by_alias=True
            ),
            "message": "User fetched successfully.",
        }
    except AppError:
        raise
    except Exception as e:
        logger.exception("Something went wrong [Get user]")

        raise InternalError() from e
