"""
Helpers shared by the record, blood bank and alert views.
"""
from typing import Optional

from rest_framework.exceptions import PermissionDenied

from records.exceptions import MissingField, NotFound
from records.models import Hospital, User


def resolve_hospital(request, hospital_id: Optional[str]) -> Hospital:
    """Hospital the request acts for.

    Hospital accounts always act for themselves and may not name another
    hospital; administrators must say which hospital they act for.
    """
    user = request.user
    if user.role == User.ROLE_HOSPITAL:
        hospital = Hospital.objects.filter(user=user).first()
        if hospital is None:
            raise PermissionDenied('No hospital profile for this account')
        if hospital_id and hospital_id != hospital.hospital_id:
            raise PermissionDenied('Cannot act for another hospital')
        return hospital
    if not hospital_id:
        raise MissingField('hospitalId')
    hospital = Hospital.objects.filter(hospital_id=hospital_id).first()
    if hospital is None:
        raise NotFound('Hospital not found')
    return hospital


def check_patient_scope(request, patient_id: str) -> None:
    """Patients may only read their own records."""
    user = request.user
    if user.role == User.ROLE_PATIENT and user.username != patient_id:
        raise PermissionDenied('forbidden for this patient')


def display_name(request, hospital: Hospital, requested: Optional[str]) -> str:
    """Name recorded for ``hospital``; only administrators may supply their own."""
    if request.user.role == User.ROLE_ADMIN and requested:
        return requested
    return hospital.name
