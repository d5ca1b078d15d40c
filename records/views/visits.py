import logging

from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from records.permissions import IsHospitalOrAdmin
from records.serializers.records import VisitCreateSerializer
from records.services.visits import add_visit, format_visit, get_patient_or_404, visits_for
from records.views.common import check_patient_scope, display_name, resolve_hospital

logger = logging.getLogger(__name__)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def list_visits(request, patient_id):
    check_patient_scope(request, patient_id)
    patient = get_patient_or_404(patient_id)
    return Response({'ok': True, 'visits': [format_visit(v) for v in visits_for(patient)]})


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsHospitalOrAdmin])
def create_visit(request):
    s = VisitCreateSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    vd = s.validated_data
    hospital = resolve_hospital(request, vd.get('hospitalId'))
    patient = get_patient_or_404(vd['userId'])
    visit = add_visit(
        hospital, patient,
        diagnosis=vd['diagnosis'],
        prescription=vd['prescription'],
        doctor_name=vd['doctorName'],
        hospital_name=display_name(request, hospital, vd.get('hospitalName')),
        lab_results=vd.get('labResults', ''),
        notes=vd.get('notes', ''),
    )
    logger.info('Visit %s added for %s by %s', visit.visit_id, patient.patient_id, hospital.hospital_id)
    return Response({'ok': True, 'visit': format_visit(visit)}, status=201)
