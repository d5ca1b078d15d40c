"""
Registration and login for patients and hospitals.

Each account is a :class:`User` plus a profile row.  Patients may be
registered by a hospital without a password; in that case a strong one
is generated and handed back once so it can be passed to the patient.
"""
import logging
import secrets
from typing import Optional

from django.contrib.auth.password_validation import validate_password
from django.core.exceptions import ValidationError
from django.db import transaction
from rest_framework.exceptions import AuthenticationFailed, ValidationError as DRFValidation
from rest_framework_simplejwt.tokens import RefreshToken

from records.models import Hospital, Patient, User
from records.services import ids

logger = logging.getLogger(__name__)


def _check_password(password: str, user: Optional[User] = None) -> None:
    try:
        validate_password(password, user=user)
    except ValidationError as e:
        raise DRFValidation({'password': e.messages})


def _ensure_email_free(model, email: str) -> None:
    if model.objects.filter(email__iexact=email).exists():
        raise DRFValidation({'email': ['Email exists']})


@transaction.atomic
def register_patient(*, name, email, date_of_birth, blood_group, emergency_contact, address,
                     password=None, registered_by=None):
    """Create a patient account; returns ``(patient, initial_password)``.

    ``initial_password`` is ``None`` when the caller chose the password.
    """
    _ensure_email_free(Patient, email)
    initial_password = None
    if password:
        _check_password(password)
    else:
        password = initial_password = secrets.token_urlsafe(12)

    patient_id = ids.generate_unique_id(ids.PATIENT)
    user = User.objects.create_user(
        username=patient_id, email=email, password=password,
        first_name=name[:150], role=User.ROLE_PATIENT,
    )
    patient = Patient.objects.create(
        user=user, patient_id=patient_id, name=name, email=email,
        date_of_birth=date_of_birth, blood_group=blood_group,
        emergency_contact=emergency_contact, address=address,
        registered_by=registered_by or 'self',
    )
    logger.info('Registered patient %s (by %s)', patient_id, patient.registered_by)
    return patient, initial_password


@transaction.atomic
def register_hospital(*, name, email, password):
    _ensure_email_free(Hospital, email)
    _check_password(password)
    hospital_id = ids.generate_unique_id(ids.HOSPITAL)
    user = User.objects.create_user(
        username=hospital_id, email=email, password=password,
        first_name=name[:150], role=User.ROLE_HOSPITAL,
    )
    hospital = Hospital.objects.create(user=user, hospital_id=hospital_id, name=name, email=email)
    logger.info('Registered hospital %s', hospital_id)
    return hospital


def authenticate_profile(model, *, email: str, password: str, public_id: Optional[str] = None):
    """Return the profile whose email/password match, or raise ``AuthenticationFailed``.

    When ``public_id`` is given it must match the profile's identifier too.
    """
    profile = model.objects.select_related('user').filter(email__iexact=email).first()
    if profile is None or not profile.user.is_active or not profile.user.check_password(password):
        raise AuthenticationFailed('Invalid credentials')
    if public_id and public_id != profile.user.username:
        raise AuthenticationFailed('Invalid credentials')
    return profile


def issue_tokens(user: User) -> dict:
    refresh = RefreshToken.for_user(user)
    refresh['role'] = user.role
    refresh['publicId'] = user.username
    return {'token': str(refresh.access_token), 'jwt_refresh': str(refresh)}


def format_patient(patient: Patient) -> dict:
    return {
        'userId': patient.patient_id,
        'name': patient.name,
        'email': patient.email,
        'bloodGroup': patient.blood_group,
        'dateOfBirth': patient.date_of_birth.isoformat(),
        'emergencyContact': patient.emergency_contact,
        'address': patient.address,
        'registeredBy': patient.registered_by,
        'createdAt': patient.created_at.isoformat(),
    }


def format_hospital(hospital: Hospital) -> dict:
    return {
        'hospitalId': hospital.hospital_id,
        'hospitalName': hospital.name,
        'email': hospital.email,
    }
