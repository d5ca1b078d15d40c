import pytest
from django.urls import reverse
from rest_framework.test import APIClient

from records.models import Patient, User

pytestmark = pytest.mark.django_db

PASSWORD = 'Str0ng!Passw0rd'

PATIENT_BODY = {
    'name': 'Mary Seacole',
    'email': 'mary@example.com',
    'dateOfBirth': '1985-11-23',
    'bloodGroup': 'AB+',
    'emergencyContact': '+44 20 0000 0000',
    'address': 'Kingston',
}


def login_patient(client, email, password, **extra):
    return client.post(reverse('login_patient'), {'email': email, 'password': password, **extra}, format='json')


def test_patient_registration_generates_strong_password_when_missing():
    client = APIClient()
    r = client.post(reverse('register_patient'), PATIENT_BODY, format='json')
    assert r.status_code == 201
    assert r.data['userId'].startswith('PAT-')
    assert r.data['initialPassword'] and len(r.data['initialPassword']) >= 12
    r = login_patient(client, 'mary@example.com', r.data['initialPassword'])
    assert r.status_code == 200


def test_registration_with_password_does_not_echo_it():
    r = APIClient().post(reverse('register_patient'), {**PATIENT_BODY, 'password': PASSWORD}, format='json')
    assert r.status_code == 201
    assert 'initialPassword' not in r.data
    assert Patient.objects.get().registered_by == 'self'


def test_duplicate_email_rejected():
    client = APIClient()
    assert client.post(reverse('register_patient'), PATIENT_BODY, format='json').status_code == 201
    r = client.post(reverse('register_patient'), PATIENT_BODY, format='json')
    assert r.status_code == 400
    assert Patient.objects.count() == 1


def test_weak_hospital_password_rejected():
    r = APIClient().post(reverse('register_hospital'),
                         {'hospitalName': 'St Thomas', 'email': 'st@example.com', 'password': '123'},
                         format='json')
    assert r.status_code == 400
    assert not User.objects.exists()


def test_login_returns_bearer_token_usable_on_api():
    client = APIClient()
    reg = client.post(reverse('register_patient'), {**PATIENT_BODY, 'password': PASSWORD}, format='json')
    patient_id = reg.data['userId']
    r = login_patient(client, 'mary@example.com', PASSWORD, userId=patient_id)
    assert r.status_code == 200
    assert r.data['token'] and r.data['jwt_refresh']
    assert r.data['role'] == 'patient'
    assert r.data['user']['userId'] == patient_id

    client.credentials(HTTP_AUTHORIZATION=f"Bearer {r.data['token']}")
    r = client.get(f'/api/user/{patient_id}')
    assert r.status_code == 200
    assert r.data['user']['bloodGroup'] == 'AB+'


def test_login_failures_are_401():
    client = APIClient()
    reg = client.post(reverse('register_patient'), {**PATIENT_BODY, 'password': PASSWORD}, format='json')
    assert login_patient(client, 'mary@example.com', 'wrong-Passw0rd').status_code == 401
    assert login_patient(client, 'nobody@example.com', PASSWORD).status_code == 401
    r = login_patient(client, 'mary@example.com', PASSWORD, userId='PAT-OTHER-000000')
    assert r.status_code == 401
    assert reg.data['userId'] != 'PAT-OTHER-000000'


def test_patient_credentials_do_not_open_hospital_login():
    client = APIClient()
    client.post(reverse('register_patient'), {**PATIENT_BODY, 'password': PASSWORD}, format='json')
    r = client.post(reverse('login_hospital'), {'email': 'mary@example.com', 'password': PASSWORD}, format='json')
    assert r.status_code == 401


def test_hospital_login_and_refresh():
    client = APIClient()
    reg = client.post(reverse('register_hospital'),
                      {'hospitalName': 'St Thomas', 'email': 'st@example.com', 'password': PASSWORD},
                      format='json')
    assert reg.status_code == 201
    r = client.post(reverse('login_hospital'),
                    {'email': 'st@example.com', 'password': PASSWORD, 'hospitalId': reg.data['hospitalId']},
                    format='json')
    assert r.status_code == 200
    assert r.data['hospital']['hospitalName'] == 'St Thomas'

    refreshed = client.post(reverse('jwt_refresh'), {'refresh': r.data['jwt_refresh']}, format='json')
    assert refreshed.status_code == 200
    assert refreshed.data['token']


def test_logout_blacklists_refresh_token():
    client = APIClient()
    client.post(reverse('register_hospital'),
                {'hospitalName': 'St Thomas', 'email': 'st@example.com', 'password': PASSWORD}, format='json')
    r = client.post(reverse('login_hospital'), {'email': 'st@example.com', 'password': PASSWORD}, format='json')
    refresh = r.data['jwt_refresh']
    client.credentials(HTTP_AUTHORIZATION=f"Bearer {r.data['token']}")
    out = client.post(reverse('jwt_logout'), {'refresh': refresh}, format='json')
    assert out.status_code == 200 and out.data['blacklisted'] == 1

    again = APIClient().post(reverse('jwt_refresh'), {'refresh': refresh}, format='json')
    assert again.status_code == 401


def test_bad_bearer_token_is_rejected():
    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION='Bearer not-a-token')
    assert client.get('/api/alerts/emergency').status_code == 401


def test_test_ai_is_admin_only(settings):
    settings.GOOGLE_AI_API_KEY = ''
    admin = User.objects.create_user(username='root', password=PASSWORD, role=User.ROLE_ADMIN)
    hospital_user = User.objects.create_user(username='HOSP-1', password=PASSWORD, role=User.ROLE_HOSPITAL)
    client = APIClient()
    client.force_authenticate(user=hospital_user)
    assert client.get(reverse('test_ai')).status_code == 403
    client.force_authenticate(user=admin)
    r = client.get(reverse('test_ai'))
    assert r.status_code == 503
    assert r.data['configured'] is False
