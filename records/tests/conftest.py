import datetime

import pytest
from django.core.cache import cache

from records.services.accounts import register_hospital, register_patient
from records.services.chatbot import reset_chatbot_service

PASSWORD = 'Str0ng!Passw0rd'


@pytest.fixture(autouse=True)
def _fresh_process_state():
    # throttle counters live in the cache
    cache.clear()
    reset_chatbot_service()
    yield
    reset_chatbot_service()


@pytest.fixture
def hospital(db):
    return register_hospital(name='City General', email='city@example.com', password=PASSWORD)


@pytest.fixture
def other_hospital(db):
    return register_hospital(name='County Clinic', email='county@example.com', password=PASSWORD)


@pytest.fixture
def patient(db):
    p, _ = register_patient(
        name='Ada Lovelace', email='ada@example.com', date_of_birth=datetime.date(1985, 12, 10),
        blood_group='O+', emergency_contact='+44 20 7946 0000', address='12 St James Square',
        password=PASSWORD,
    )
    return p


@pytest.fixture
def notifications():
    """Collects notifier payloads instead of broadcasting them."""
    sent = []
    return sent
