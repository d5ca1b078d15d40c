"""
Django admin registrations for the records models.

Administrators use ``/admin/`` to inspect accounts, visits and stock and
to resolve emergency alerts by hand.
"""

from django.contrib import admin

from .models import (
    BloodStock,
    CriticalStockAlert,
    EmergencyAlert,
    EmergencyAlertAcknowledgement,
    Hospital,
    HospitalVisit,
    Patient,
    StockAlertAcknowledgement,
    User,
)


@admin.register(User)
class UserAdmin(admin.ModelAdmin):
    list_display = ('username', 'email', 'role', 'is_staff', 'is_superuser')
    list_filter = ('role',)
    search_fields = ('username', 'email')


@admin.register(Patient)
class PatientAdmin(admin.ModelAdmin):
    list_display = ('patient_id', 'name', 'email', 'blood_group', 'registered_by', 'created_at')
    list_filter = ('blood_group',)
    search_fields = ('patient_id', 'name', 'email')


@admin.register(Hospital)
class HospitalAdmin(admin.ModelAdmin):
    list_display = ('hospital_id', 'name', 'email', 'created_at')
    search_fields = ('hospital_id', 'name', 'email')


@admin.register(HospitalVisit)
class HospitalVisitAdmin(admin.ModelAdmin):
    list_display = ('visit_id', 'patient', 'hospital_name', 'doctor_name', 'visit_date')
    search_fields = ('visit_id', 'patient__patient_id', 'doctor_name')


@admin.register(BloodStock)
class BloodStockAdmin(admin.ModelAdmin):
    list_display = ('hospital', 'blood_type', 'available_units', 'last_updated')
    list_filter = ('blood_type',)


class StockAlertAcknowledgementInline(admin.TabularInline):
    model = StockAlertAcknowledgement
    extra = 0


@admin.register(CriticalStockAlert)
class CriticalStockAlertAdmin(admin.ModelAdmin):
    list_display = ('alert_id', 'hospital_name', 'blood_type', 'current_units', 'threshold', 'status', 'created_at')
    list_filter = ('status', 'blood_type')
    inlines = [StockAlertAcknowledgementInline]


class EmergencyAlertAcknowledgementInline(admin.TabularInline):
    model = EmergencyAlertAcknowledgement
    extra = 0


@admin.register(EmergencyAlert)
class EmergencyAlertAdmin(admin.ModelAdmin):
    list_display = ('alert_id', 'hospital_name', 'alert_type', 'priority', 'status', 'created_at')
    list_filter = ('status', 'priority')
    inlines = [EmergencyAlertAcknowledgementInline]
