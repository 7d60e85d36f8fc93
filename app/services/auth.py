"""Account registration, credential login and current-user lookup.

Functions here raise the taxonomy in app.core.errors for expected failures and
let anything else propagate; the HTTP layer maps the latter to a generic 500.
"""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.errors import AuthError, ConflictError, NotFoundError, ValidationError
from app.core.security import TokenClaims, TokenCodec, hash_password, verify_password
from app.models.user import User
from app.schemas.auth import LoginRequest, RegisterRequest
from app.utils.validation import sanitize_string, validate_email, validate_phone

logger = logging.getLogger(__name__)

# Same message for unknown email, password-less account and wrong password.
INVALID_CREDENTIALS = "Invalid email or password"


def _present(value: str | None) -> bool:
    return value is not None and value.strip() != ""


def get_user_by_email(session: Session, email: str) -> User | None:
    return session.query(User).filter(User.email == email).first()


def register_user(
    session: Session,
    body: RegisterRequest,
    bcrypt_rounds: int,
    role: str | None = None,
) -> User:
    """
    Create a user in a single commit. Does not issue a token.

    role is left to the store default unless given; only provisioning scripts pass it.

    Raises ValidationError for missing/malformed fields and ConflictError when
    the email is already registered.
    """
    if not (_present(body.name) and _present(body.email) and _present(body.password)):
        raise ValidationError("Name, email, and password are required")
    name = sanitize_string(body.name)
    email = body.email.strip()
    phone = sanitize_string(body.phone) if _present(body.phone) else None
    if not name:
        raise ValidationError("Name, email, and password are required")
    if not validate_email(email):
        raise ValidationError("Invalid email address")
    if phone is not None and not validate_phone(phone):
        raise ValidationError("Invalid phone number")

    if get_user_by_email(session, email) is not None:
        raise ConflictError("User already exists with this email")

    user = User(
        name=name,
        email=email,
        password=hash_password(body.password, rounds=bcrypt_rounds),
        phone=phone,
    )
    if role is not None:
        user.role = role
    session.add(user)
    try:
        session.commit()
    except IntegrityError:
        # Lost a race with a concurrent registration for the same email.
        session.rollback()
        raise ConflictError("User already exists with this email")
    session.refresh(user)
    logger.info("Registered user id=%s", user.id)
    return user


def authenticate(session: Session, body: LoginRequest, codec: TokenCodec) -> tuple[str, User]:
    """
    Check email/password and issue an access token.

    Every credential failure raises the same AuthError so callers cannot tell
    an unknown email from a wrong password.
    """
    if not (_present(body.email) and _present(body.password)):
        raise ValidationError("Email and password are required")

    user = get_user_by_email(session, body.email.strip())
    if user is None or not user.password:
        logger.info("Login rejected", extra={"reason": "unknown_or_passwordless"})
        raise AuthError(INVALID_CREDENTIALS)
    if not verify_password(body.password, user.password):
        logger.info("Login rejected", extra={"reason": "bad_password", "user_id": user.id})
        raise AuthError(INVALID_CREDENTIALS)

    token = codec.sign(TokenClaims(userId=str(user.id), email=user.email, role=user.role))
    return token, user


def load_current_user(session: Session, claims: TokenClaims) -> User:
    """Re-read the user named by verified claims; the claims only establish identity."""
    try:
        user_id = int(claims.userId)
    except (TypeError, ValueError):
        raise AuthError("Unauthorized")
    user = session.query(User).filter(User.id == user_id).first()
    if user is None:
        raise NotFoundError("User not found")
    return user


def list_users(session: Session) -> list[User]:
    """All users, newest first."""
    return session.query(User).order_by(User.created_at.desc(), User.id.desc()).all()
