"""
Patient record views: profile, visit history and the hospital-side search.
"""
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from records.permissions import IsHospitalOrAdmin
from records.services.accounts import format_patient
from records.services.visits import format_visit, get_patient_or_404, visits_for
from records.views.common import check_patient_scope


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def patient_detail(request, patient_id):
    check_patient_scope(request, patient_id)
    patient = get_patient_or_404(patient_id)
    return Response({'ok': True, 'user': format_patient(patient)})


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsHospitalOrAdmin])
def patient_search(request, patient_id):
    """Profile and full visit history, for the attending hospital."""
    patient = get_patient_or_404(patient_id)
    return Response({
        'ok': True,
        'user': format_patient(patient),
        'visits': [format_visit(v) for v in visits_for(patient)],
    })
