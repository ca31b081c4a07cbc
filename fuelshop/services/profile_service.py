"""Profile service."""
from sqlalchemy.orm import Session

from fuelshop.exceptions import BusinessLogicError, NotFoundError
from fuelshop.models import Profile

EDITABLE_FIELDS = ('full_name', 'phone_number', 'address')


def get_profile(session: Session, user_id: int) -> Profile:
    profile = session.query(Profile).filter_by(id=user_id, active=True).first()
    if not profile:
        raise NotFoundError('Profile not found.')
    return profile


def update_profile(session: Session, user_id: int, data: dict) -> Profile:
    """Update name, phone and default delivery address; other keys are ignored."""
    profile = get_profile(session, user_id)

    for field in EDITABLE_FIELDS:
        value = data.get(field)
        if value is not None and not isinstance(value, str):
            raise BusinessLogicError(f'Invalid value for {field}.')

    for field in EDITABLE_FIELDS:
        if field in data:
            value = data.get(field)
            setattr(profile, field, value.strip() if isinstance(value, str) else value)

    if not (profile.full_name or '').strip():
        session.rollback()
        raise BusinessLogicError('Full name is required.')

    session.commit()
    return profile
