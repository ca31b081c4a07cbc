"""
Authentication service for storefront customers.

Handles registration and email/password login. Session state (user id in
the Flask session, the per-user cart) is managed by the auth blueprint.
"""
import re
import logging
from typing import List

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from fuelshop.exceptions import BusinessLogicError, UnauthorizedError
from fuelshop.models import Profile, ProfileRole

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$')
MIN_PASSWORD_LENGTH = 6


def is_valid_email(email: str) -> bool:
    """Validate email format."""
    return EMAIL_PATTERN.match(email or '') is not None


def _text(value) -> str:
    """Form value as a string; anything that is not text counts as empty."""
    return value if isinstance(value, str) else ''


def validate_registration(form: dict) -> List[str]:
    """Validate registration fields and return a list of errors."""
    errors = []
    email = _text(form.get('email')).strip()
    password = _text(form.get('password'))
    full_name = _text(form.get('full_name')).strip()
    phone_number = _text(form.get('phone_number')).strip()

    if not email or not password or not full_name or not phone_number:
        errors.append('Please fill in all fields.')

    if email and not is_valid_email(email):
        errors.append('Invalid email address.')

    if password and len(password) < MIN_PASSWORD_LENGTH:
        errors.append(f'Password must be at least {MIN_PASSWORD_LENGTH} characters.')

    return errors


def register_user(session: Session, form: dict) -> Profile:
    """
    Create a customer profile.

    Raises:
        BusinessLogicError: invalid fields or email already registered
    """
    errors = validate_registration(form)
    if errors:
        raise BusinessLogicError(' '.join(errors), payload={'errors': errors})

    email = form['email'].strip().lower()

    existing = session.query(Profile).filter(func.lower(Profile.email) == email).first()
    if existing:
        raise BusinessLogicError('This email is already registered.', status_code=409)

    profile = Profile(
        email=email,
        full_name=form['full_name'].strip(),
        phone_number=form['phone_number'].strip(),
        role=ProfileRole.CUSTOMER,
        active=True,
    )
    profile.set_password(form['password'])

    try:
        session.add(profile)
        session.commit()
    except IntegrityError as e:
        session.rollback()
        logger.error(f"Error creating profile (IntegrityError): {str(e)}")
        raise BusinessLogicError('This email is already registered.', status_code=409)

    logger.info(f"New customer registered: {email}")
    return profile


def authenticate(session: Session, email: str, password: str) -> Profile:
    """
    Return the active profile matching the credentials.

    Raises:
        UnauthorizedError: unknown email, wrong password or inactive account
    """
    email = _text(email).strip().lower()
    password = _text(password)
    if not email or not password:
        raise UnauthorizedError('Please enter your email and password.')

    profile = session.query(Profile).filter(func.lower(Profile.email) == email).first()

    if not profile or not profile.check_password(password):
        logger.warning(f"Failed login attempt for {email}")
        raise UnauthorizedError('Invalid email or password.')

    if not profile.active:
        raise UnauthorizedError('This account is disabled.', status_code=403)

    return profile
