# records/management/commands/ensure_demo_accounts.py
import datetime

from django.core.management.base import BaseCommand
from django.db import transaction

from records.models import Hospital, Patient, User
from records.services import ids

DEMO_PASSWORD = "Demo@12345"


class Command(BaseCommand):
    help = "Ensure a demo admin, hospital and patient exist with a known password (idempotent)."

    def add_arguments(self, parser):
        parser.add_argument("--password", default=DEMO_PASSWORD)

    @transaction.atomic
    def handle(self, *args, **opts):
        password = opts["password"]

        admin, _ = User.objects.get_or_create(
            username="admin", defaults={"email": "admin@medsys.local", "role": User.ROLE_ADMIN},
        )
        self._reset(admin, password, User.ROLE_ADMIN, staff=True)
        self.stdout.write(self.style.SUCCESS("ok: admin (admin)"))

        hospital = Hospital.objects.filter(email="hospital@medsys.local").first()
        if hospital is None:
            hospital_id = ids.generate_unique_id(ids.HOSPITAL)
            user = User.objects.create_user(username=hospital_id, email="hospital@medsys.local",
                                            role=User.ROLE_HOSPITAL)
            hospital = Hospital.objects.create(user=user, hospital_id=hospital_id,
                                               name="Demo General Hospital", email="hospital@medsys.local")
        self._reset(hospital.user, password, User.ROLE_HOSPITAL)
        self.stdout.write(self.style.SUCCESS(f"ok: {hospital.hospital_id} (hospital)"))

        patient = Patient.objects.filter(email="patient@medsys.local").first()
        if patient is None:
            patient_id = ids.generate_unique_id(ids.PATIENT)
            user = User.objects.create_user(username=patient_id, email="patient@medsys.local",
                                            role=User.ROLE_PATIENT)
            patient = Patient.objects.create(
                user=user, patient_id=patient_id, name="Demo Patient", email="patient@medsys.local",
                date_of_birth=datetime.date(1990, 1, 1), blood_group="O+",
                emergency_contact="+1-555-0100", address="1 Demo Street",
                registered_by=hospital.hospital_id,
            )
        self._reset(patient.user, password, User.ROLE_PATIENT)
        self.stdout.write(self.style.SUCCESS(f"ok: {patient.patient_id} (patient)"))
        self.stdout.write(self.style.SUCCESS("All demo accounts ensured."))

    def _reset(self, user, password, role, staff=False):
        user.set_password(password)
        user.role = role
        user.is_active = True
        user.is_staff = staff or user.is_staff
        user.is_superuser = staff or user.is_superuser
        user.save(update_fields=["password", "role", "is_active", "is_staff", "is_superuser"])
