"""
URL mappings for the medical records API.

Paths follow the routes the web front end already calls; trailing
slashes are deliberately omitted.
"""
from django.urls import path, include

from .auth_views import (
    jwt_logout_view,
    jwt_refresh_view,
    login_hospital_view,
    login_patient_view,
    register_hospital_view,
    register_patient_view,
)
from .views import alerts, blood, chatbot, health, patients, visits


urlpatterns = [
    path('metrics', include('django_prometheus.urls')),
    path('healthz', health.healthz, name='healthz'),
    # Authentication
    path('api/register/patient', register_patient_view, name='register_patient'),
    path('api/register/hospital', register_hospital_view, name='register_hospital'),
    path('api/login/patient', login_patient_view, name='login_patient'),
    path('api/login/hospital', login_hospital_view, name='login_hospital'),
    path('api/auth/refresh', jwt_refresh_view, name='jwt_refresh'),
    path('api/auth/logout', jwt_logout_view, name='jwt_logout'),
    # Patients and visits
    path('api/user/<str:patient_id>', patients.patient_detail, name='patient_detail'),
    path('api/patient/search/<str:patient_id>', patients.patient_search, name='patient_search'),
    path('api/visits/<str:patient_id>', visits.list_visits, name='list_visits'),
    path('api/addVisit', visits.create_visit, name='add_visit'),
    # Blood bank
    path('api/blood/add', blood.add_stock, name='blood_add'),
    path('api/blood/remove', blood.remove_stock, name='blood_remove'),
    path('api/blood/update', blood.update_stock, name='blood_update'),
    path('api/blood/<str:hospital_id>', blood.list_stock, name='blood_list'),
    # Alerts
    path('api/alerts/critical', alerts.critical_alerts, name='critical_alerts'),
    path('api/alerts/critical/acknowledge', alerts.acknowledge_critical, name='critical_acknowledge'),
    path('api/alerts/emergency', alerts.emergency_alerts, name='emergency_alerts'),
    path('api/alerts/emergency/acknowledge', alerts.acknowledge_emergency, name='emergency_acknowledge'),
    # Chatbot
    path('api/chatbot', chatbot.chatbot, name='chatbot'),
    path('api/test-ai', chatbot.test_ai, name='test_ai'),
]
