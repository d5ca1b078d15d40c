"""
Chatbot behaviour: keyword fallback, the insertion-ordered response
cache and degradation when the AI provider misbehaves.
"""
import pytest
import requests
from rest_framework.test import APIClient

from records.services import chatbot as chatbot_module
from records.services.chatbot import (
    DEFAULT_MENU,
    FALLBACK_TOPICS,
    ChatbotService,
    GeminiClient,
    GenerativeAIError,
    ResponseCache,
    fallback_response,
)


def _advice(keyword):
    for keywords, advice in FALLBACK_TOPICS:
        if keyword in keywords:
            return advice
    raise AssertionError(keyword)


class FakeResponse:
    def __init__(self, status_code=200, data=None, bad_json=False):
        self.status_code = status_code
        self._data = data
        self._bad_json = bad_json

    def json(self):
        if self._bad_json:
            raise ValueError('not json')
        return self._data


class FakeSession:
    def __init__(self, response=None, exc=None):
        self.response = response
        self.exc = exc
        self.calls = []

    def post(self, url, **kwargs):
        self.calls.append((url, kwargs))
        if self.exc is not None:
            raise self.exc
        return self.response


class FakeClient:
    model = 'fake-model'

    def __init__(self, answer='Drink water.', error=None):
        self.answer = answer
        self.error = error
        self.prompts = []

    def generate(self, prompt, config=None):
        self.prompts.append(prompt)
        if self.error:
            raise GenerativeAIError(self.error)
        return self.answer


def _ok_body(text):
    return {'candidates': [{'content': {'parts': [{'text': text}]}}]}


# ---------------------------------------------------------------------
# Fallback
# ---------------------------------------------------------------------
def test_fallback_first_topic_in_order_wins():
    assert fallback_response('diet and exercise tips') == _advice('diet')
    assert fallback_response('Blood SUGAR levels') == _advice('diabetes')
    assert fallback_response('my heart') == _advice('heart')


def test_fallback_default_menu_and_none():
    assert fallback_response('hello') == DEFAULT_MENU
    assert fallback_response(None) == DEFAULT_MENU
    assert fallback_response('') == DEFAULT_MENU


# ---------------------------------------------------------------------
# Cache
# ---------------------------------------------------------------------
def test_cache_evicts_oldest_inserted_not_least_recently_used():
    cache = ResponseCache(capacity=3)
    for k in 'abc':
        cache.put(k, k.upper())
    assert cache.get('a') == 'A'
    cache.put('d', 'D')
    assert cache.keys() == ['b', 'c', 'd']
    assert 'a' not in cache


def test_cache_overwrite_keeps_size_and_position():
    cache = ResponseCache(capacity=2)
    cache.put('a', '1')
    cache.put('b', '2')
    cache.put('a', '3')
    assert len(cache) == 2
    assert cache.get('a') == '3'
    cache.put('c', '4')
    assert cache.keys() == ['b', 'c']


def test_default_cache_drops_first_entry_on_101st_insert():
    cache = ResponseCache()
    for i in range(101):
        cache.put(f'question {i}', str(i))
    assert len(cache) == 100
    assert 'question 0' not in cache
    assert cache.keys()[0] == 'question 1'


def test_cache_capacity_must_be_positive():
    with pytest.raises(ValueError):
        ResponseCache(capacity=0)


# ---------------------------------------------------------------------
# Provider client
# ---------------------------------------------------------------------
def test_client_posts_prompt_and_extracts_text():
    session = FakeSession(FakeResponse(200, _ok_body('Sleep well.')))
    client = GeminiClient('k3y', model='gemini-test', base_url='https://ai.example/v1/', timeout=5, session=session)
    assert client.generate('how to sleep') == 'Sleep well.'
    url, kwargs = session.calls[0]
    assert url == 'https://ai.example/v1/models/gemini-test:generateContent'
    assert kwargs['params'] == {'key': 'k3y'}
    assert kwargs['timeout'] == 5
    assert kwargs['json']['contents'][0]['parts'][0]['text'] == 'how to sleep'


@pytest.mark.parametrize('session', [
    FakeSession(FakeResponse(500, {})),
    FakeSession(FakeResponse(200, bad_json=True)),
    FakeSession(FakeResponse(200, {'candidates': []})),
    FakeSession(exc=requests.Timeout('slow')),
])
def test_client_errors_become_generative_ai_error(session):
    client = GeminiClient('k3y', session=session)
    with pytest.raises(GenerativeAIError):
        client.generate('hi')


# ---------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------
def test_fresh_answer_is_cached_under_normalized_key():
    client = FakeClient('Eat more greens.')
    service = ChatbotService(client=client, cache=ResponseCache(10))
    first = service.reply('  What should I EAT? ')
    second = service.reply('what should i eat?')
    assert (first.cached, first.fallback) == (False, False)
    assert second.cached is True
    assert second.response == 'Eat more greens.'
    assert len(client.prompts) == 1


def test_provider_failure_falls_back_and_is_not_cached():
    service = ChatbotService(client=FakeClient(error='HTTP 503'), cache=ResponseCache(10))
    reply = service.reply('tips for stress')
    assert reply.fallback is True
    assert reply.response == _advice('stress')
    assert reply.as_payload()['error'] == 'HTTP 503'
    assert len(service.cache) == 0


def test_no_provider_means_fallback():
    reply = ChatbotService(client=None).reply('how much water')
    assert reply.fallback is True
    assert reply.response == _advice('water')
    assert 'error' not in reply.as_payload()


def test_service_without_api_key_has_no_client(settings):
    settings.GOOGLE_AI_API_KEY = ''
    assert chatbot_module.build_chatbot_service().client is None


# ---------------------------------------------------------------------
# Endpoint
# ---------------------------------------------------------------------
@pytest.fixture
def patient_client(patient):
    client = APIClient()
    client.force_authenticate(user=patient.user)
    return client


@pytest.mark.django_db
def test_chatbot_endpoint_rejects_anonymous(monkeypatch):
    service = ChatbotService(client=FakeClient('Walk daily.'), cache=ResponseCache(10))
    monkeypatch.setattr(chatbot_module, '_service', service)
    r = APIClient().post('/api/chatbot', {'message': 'diet'}, format='json')
    assert r.status_code == 401
    assert service.client.prompts == []


def test_chatbot_endpoint_requires_message(patient_client):
    r = patient_client.post('/api/chatbot', {}, format='json')
    assert r.status_code == 400
    assert r.data['ok'] is False
    assert r.data['error']['code'] == 'missing_field'


def test_chatbot_endpoint_uses_service(monkeypatch, patient_client):
    service = ChatbotService(client=FakeClient('Walk daily.'), cache=ResponseCache(10))
    monkeypatch.setattr(chatbot_module, '_service', service)
    r = patient_client.post('/api/chatbot', {'message': 'fitness?'}, format='json')
    assert r.status_code == 200
    assert r.data == {'ok': True, 'response': 'Walk daily.', 'cached': False, 'fallback': False}
    r = patient_client.post('/api/chatbot', {'message': 'Fitness?'}, format='json')
    assert r.data['cached'] is True
