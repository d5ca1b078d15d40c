"""
Database models for the medical records backend.

Patients and hospitals are both accounts: each owns a :class:`User`
(carrying the role used for access control) plus a profile row with the
public identifier handed out at registration (``PAT-…`` / ``HOSP-…``).
Blood stock is kept per (hospital, blood type) pair; stock alerts and
emergency alerts each keep their own acknowledgement trail.
"""
from __future__ import annotations

from django.contrib.auth.models import AbstractUser
from django.db import models
from django.utils import timezone


BLOOD_TYPES = ['A+', 'A-', 'B+', 'B-', 'AB+', 'AB-', 'O+', 'O-']
BLOOD_TYPE_CHOICES = [(t, t) for t in BLOOD_TYPES]


class User(AbstractUser):
    """Login account with a role.

    ``username`` holds the public identifier of the owning profile
    (``PAT-…``, ``HOSP-…``) so tokens and admin screens show the same id
    the frontend uses.
    """
    ROLE_PATIENT = 'patient'
    ROLE_HOSPITAL = 'hospital'
    ROLE_ADMIN = 'admin'
    ROLE_CHOICES = [
        (ROLE_PATIENT, 'Patient'),
        (ROLE_HOSPITAL, 'Hospital'),
        (ROLE_ADMIN, 'Administrator'),
    ]
    role = models.CharField(max_length=10, choices=ROLE_CHOICES, default=ROLE_PATIENT, db_index=True)

    def __str__(self) -> str:
        return f"{self.username} ({self.role})"


class Patient(models.Model):
    """Patient demographics, registered by the patient or by a hospital."""
    user = models.OneToOneField(User, on_delete=models.CASCADE, related_name='patient')
    patient_id = models.CharField(max_length=40, unique=True)
    name = models.CharField(max_length=255)
    email = models.EmailField(unique=True)
    date_of_birth = models.DateField()
    blood_group = models.CharField(max_length=3, choices=BLOOD_TYPE_CHOICES)
    emergency_contact = models.CharField(max_length=255)
    address = models.TextField()
    registered_by = models.CharField(max_length=64, default='self')
    created_at = models.DateTimeField(default=timezone.now)

    def __str__(self) -> str:
        return f"{self.name} ({self.patient_id})"


class Hospital(models.Model):
    user = models.OneToOneField(User, on_delete=models.CASCADE, related_name='hospital')
    hospital_id = models.CharField(max_length=40, unique=True)
    name = models.CharField(max_length=255)
    email = models.EmailField(unique=True)
    created_at = models.DateTimeField(default=timezone.now)

    def __str__(self) -> str:
        return f"{self.name} ({self.hospital_id})"


class HospitalVisit(models.Model):
    """A single medical visit recorded by a hospital for a patient."""
    visit_id = models.CharField(max_length=40, unique=True)
    patient = models.ForeignKey(Patient, on_delete=models.CASCADE, related_name='visits')
    hospital = models.ForeignKey(Hospital, null=True, blank=True, on_delete=models.SET_NULL, related_name='visits')
    # snapshot of the name at the time of the visit
    hospital_name = models.CharField(max_length=255)
    visit_date = models.DateTimeField(default=timezone.now)
    diagnosis = models.TextField()
    prescription = models.TextField()
    lab_results = models.TextField(blank=True)
    doctor_name = models.CharField(max_length=255)
    notes = models.TextField(blank=True)

    class Meta:
        indexes = [
            models.Index(fields=['patient', 'visit_date'], name='visit_patient_date_idx'),
        ]

    def __str__(self) -> str:
        return f"{self.visit_id} {self.patient_id}@{self.hospital_name}"


class BloodStock(models.Model):
    """Available units for one (hospital, blood type) pair.

    Created on first write and never deleted; add/remove/set mutate the
    row in place.
    """
    hospital = models.ForeignKey(Hospital, on_delete=models.CASCADE, related_name='blood_stock')
    blood_type = models.CharField(max_length=3, choices=BLOOD_TYPE_CHOICES)
    available_units = models.PositiveIntegerField(default=0)
    last_updated = models.DateTimeField(default=timezone.now)

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=['hospital', 'blood_type'], name='unique_stock_per_pair'),
        ]

    def __str__(self) -> str:
        return f"{self.hospital_id}/{self.blood_type}: {self.available_units}"


class AlertStatus(models.TextChoices):
    ACTIVE = 'active', 'Active'
    RESOLVED = 'resolved', 'Resolved'


class CriticalStockAlert(models.Model):
    """Raised when a pair drops below the configured threshold."""
    alert_id = models.CharField(max_length=40, unique=True)
    hospital = models.ForeignKey(Hospital, on_delete=models.CASCADE, related_name='stock_alerts')
    hospital_name = models.CharField(max_length=255)
    blood_type = models.CharField(max_length=3, choices=BLOOD_TYPE_CHOICES)
    current_units = models.PositiveIntegerField()
    threshold = models.PositiveIntegerField()
    status = models.CharField(max_length=10, choices=AlertStatus.choices, default=AlertStatus.ACTIVE, db_index=True)
    created_at = models.DateTimeField(default=timezone.now)
    resolved_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        indexes = [
            models.Index(fields=['hospital', 'blood_type', 'status'], name='stock_alert_pair_status_idx'),
        ]

    def __str__(self) -> str:
        return f"{self.alert_id} {self.blood_type}@{self.hospital_name} ({self.status})"


class EmergencyAlert(models.Model):
    """Free-form emergency notice broadcast by a hospital.

    ``status`` is set once at creation; nothing in the application
    resolves emergency alerts.
    """
    alert_id = models.CharField(max_length=40, unique=True)
    hospital = models.ForeignKey(Hospital, on_delete=models.CASCADE, related_name='emergency_alerts')
    hospital_name = models.CharField(max_length=255)
    message = models.TextField()
    alert_type = models.CharField(max_length=50, default='general')
    priority = models.CharField(max_length=20, default='medium')
    status = models.CharField(max_length=10, choices=AlertStatus.choices, default=AlertStatus.ACTIVE, db_index=True)
    created_at = models.DateTimeField(default=timezone.now)

    def __str__(self) -> str:
        return f"{self.alert_id} {self.alert_type}/{self.priority} by {self.hospital_name}"


class Acknowledgement(models.Model):
    """One response to an alert; entries are only ever appended."""
    hospital_code = models.CharField(max_length=40, blank=True)
    hospital_name = models.CharField(max_length=255, blank=True)
    response = models.TextField(blank=True)
    timestamp = models.DateTimeField(default=timezone.now)

    class Meta:
        abstract = True
        ordering = ['timestamp', 'id']


class StockAlertAcknowledgement(Acknowledgement):
    alert = models.ForeignKey(CriticalStockAlert, on_delete=models.CASCADE, related_name='acknowledgements')

    class Meta(Acknowledgement.Meta):
        pass


class EmergencyAlertAcknowledgement(Acknowledgement):
    alert = models.ForeignKey(EmergencyAlert, on_delete=models.CASCADE, related_name='acknowledgements')

    class Meta(Acknowledgement.Meta):
        pass
