"""
Registration, login and token endpoints.

Patients and hospitals log in with email and password (optionally with
their public id as an extra check) and receive a JWT access token for
the ``Authorization: Bearer`` header plus a refresh token.
"""
from __future__ import annotations

from rest_framework.decorators import api_view, permission_classes, throttle_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.throttling import ScopedRateThrottle
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.token_blacklist.models import BlacklistedToken, OutstandingToken
from rest_framework_simplejwt.tokens import RefreshToken
from rest_framework_simplejwt.views import TokenRefreshView

from records.models import Hospital, Patient, User
from records.serializers.auth import (
    HospitalLoginSerializer,
    HospitalRegisterSerializer,
    PatientLoginSerializer,
    PatientRegisterSerializer,
)
from records.services.accounts import (
    authenticate_profile,
    format_hospital,
    format_patient,
    issue_tokens,
    register_hospital,
    register_patient,
)


# ---------------------------------------------------------------------
# Registration
# ---------------------------------------------------------------------
@api_view(['POST'])
@permission_classes([AllowAny])
def register_patient_view(request):
    """
    Register a patient, either self-service or on behalf of a hospital.
    When no password is supplied a strong one is generated and returned
    once as ``initialPassword``.
    """
    s = PatientRegisterSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    vd = s.validated_data
    patient, initial_password = register_patient(
        name=vd['name'],
        email=vd['email'],
        date_of_birth=vd['dateOfBirth'],
        blood_group=vd['bloodGroup'],
        emergency_contact=vd['emergencyContact'],
        address=vd['address'],
        password=vd.get('password'),
        registered_by=vd.get('registeredBy'),
    )
    payload: dict[str, object] = {'ok': True, 'userId': patient.patient_id, 'name': patient.name}
    if initial_password:
        payload['initialPassword'] = initial_password
    return Response(payload, status=201)


@api_view(['POST'])
@permission_classes([AllowAny])
def register_hospital_view(request):
    s = HospitalRegisterSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    vd = s.validated_data
    hospital = register_hospital(name=vd['hospitalName'], email=vd['email'], password=vd['password'])
    return Response({'ok': True, 'hospitalId': hospital.hospital_id, 'hospitalName': hospital.name}, status=201)


# ---------------------------------------------------------------------
# Login
# ---------------------------------------------------------------------
@api_view(['POST'])
@permission_classes([AllowAny])
@throttle_classes([ScopedRateThrottle])
def login_patient_view(request):
    s = PatientLoginSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    vd = s.validated_data
    patient = authenticate_profile(Patient, email=vd['email'], password=vd['password'], public_id=vd.get('userId'))
    return Response({'ok': True, **issue_tokens(patient.user), 'role': User.ROLE_PATIENT,
                     'user': format_patient(patient)})


login_patient_view.cls.throttle_scope = 'login'


@api_view(['POST'])
@permission_classes([AllowAny])
@throttle_classes([ScopedRateThrottle])
def login_hospital_view(request):
    s = HospitalLoginSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    vd = s.validated_data
    hospital = authenticate_profile(Hospital, email=vd['email'], password=vd['password'],
                                    public_id=vd.get('hospitalId'))
    return Response({'ok': True, **issue_tokens(hospital.user), 'role': User.ROLE_HOSPITAL,
                     'hospital': format_hospital(hospital)})


login_hospital_view.cls.throttle_scope = 'login'


# ---------------------------------------------------------------------
# JWT: refresh & logout
# ---------------------------------------------------------------------
@api_view(['POST'])
@permission_classes([AllowAny])
def jwt_refresh_view(request):
    """Return a new access token from a refresh token."""
    view = TokenRefreshView.as_view()
    resp = view(request._request)
    data = dict(resp.data)
    if 'access' in data:
        data['token'] = data.pop('access')
    if 'refresh' in data:
        data['jwt_refresh'] = data.pop('refresh')
    return Response(data, status=resp.status_code)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def jwt_logout_view(request):
    """Blacklist one refresh token, or every outstanding token of the user."""
    refresh = request.data.get('refresh')
    count = 0
    if refresh:
        try:
            RefreshToken(refresh).blacklist()
            count = 1
        except TokenError:
            return Response({'ok': False, 'error': {'code': 'token_invalid', 'message': 'Invalid refresh token'}},
                            status=400)
    else:
        for token in OutstandingToken.objects.filter(user=request.user):
            _, created = BlacklistedToken.objects.get_or_create(token=token)
            count += int(created)
    return Response({'ok': True, 'blacklisted': count})
