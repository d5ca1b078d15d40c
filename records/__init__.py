"""Records application for the medical backend.

This package contains models, services, serializers, views and route
registrations for patient records, the blood bank, alerts and the
health chatbot.
"""
