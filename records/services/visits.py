from typing import Optional

from records.exceptions import NotFound
from records.models import Hospital, HospitalVisit, Patient
from records.services import ids


def get_patient_or_404(patient_id: str) -> Patient:
    patient = Patient.objects.filter(patient_id=patient_id).first()
    if patient is None:
        raise NotFound('Patient not found')
    return patient


def add_visit(hospital: Hospital, patient: Patient, *, diagnosis: str, prescription: str, doctor_name: str,
              hospital_name: Optional[str] = None, lab_results: str = '', notes: str = '') -> HospitalVisit:
    return HospitalVisit.objects.create(
        visit_id=ids.generate_unique_id(ids.VISIT),
        patient=patient,
        hospital=hospital,
        hospital_name=hospital_name or hospital.name,
        diagnosis=diagnosis,
        prescription=prescription,
        doctor_name=doctor_name,
        lab_results=lab_results or '',
        notes=notes or '',
    )


def visits_for(patient: Patient):
    """Visits of a patient, most recent first."""
    return patient.visits.select_related('hospital').order_by('-visit_date', '-id')


def format_visit(visit: HospitalVisit) -> dict:
    return {
        'visitId': visit.visit_id,
        'userId': visit.patient.patient_id,
        'hospitalId': visit.hospital.hospital_id if visit.hospital else None,
        'hospitalName': visit.hospital_name,
        'visitDate': visit.visit_date.isoformat(),
        'diagnosis': visit.diagnosis,
        'prescription': visit.prescription,
        'labResults': visit.lab_results,
        'doctorName': visit.doctor_name,
        'notes': visit.notes,
    }
