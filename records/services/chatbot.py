"""
Health chatbot: Google generative AI behind a response cache, with a
keyword based fallback.

The outward contract of :meth:`ChatbotService.reply` is that it always
produces a usable answer.  A missing API key, a timeout, a non-200
status or a payload without text all degrade to
:func:`fallback_response`; only fresh AI answers are cached.
"""
from __future__ import annotations

import logging
from collections import OrderedDict
from dataclasses import dataclass
from typing import Optional

import requests
from django.conf import settings

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------
# Keyword fallback
# ---------------------------------------------------------------------
FALLBACK_TOPICS = [
    (('diet', 'food', 'nutrition', 'eat'),
     '🥗 **Healthy Diet Tips:** Eat 5 servings of colorful fruits and vegetables daily. '
     'Choose whole grains over refined grains. Include lean proteins like fish, chicken, and legumes. '
     'Stay hydrated with 8 glasses of water. Limit processed foods, added sugars, and excessive salt.'),
    (('exercise', 'workout', 'fitness', 'physical'),
     '💪 **Exercise Guidelines:** Aim for 150 minutes of moderate aerobic activity weekly. '
     'Include strength training 2-3 times per week. Start slowly and gradually increase intensity. '
     'Walking, swimming, cycling are excellent choices. Always warm up before and cool down after exercise.'),
    (('diabetes', 'sugar', 'blood sugar'),
     '🩺 **Diabetes Management:** Monitor blood sugar levels regularly as prescribed. '
     'Follow a balanced diet with controlled carbohydrates. Exercise 30 minutes daily. '
     'Take medications exactly as directed. Avoid sugary drinks and maintain healthy weight. '
     'Schedule regular check-ups with your healthcare provider.'),
    (('pressure', 'bp', 'hypertension'),
     '💓 **Blood Pressure Control:** Reduce sodium intake to less than 2,300mg daily. '
     'Exercise regularly (150 min/week). Maintain a healthy weight. Limit alcohol consumption. '
     'Manage stress through relaxation techniques. Monitor BP daily and keep a log. Avoid smoking.'),
    (('sleep', 'insomnia', 'rest', 'tired'),
     '😴 **Better Sleep Habits:** Maintain consistent sleep schedule (same bedtime/wake time). '
     'Aim for 7-9 hours nightly. Avoid screens 1 hour before bed. '
     'Keep bedroom cool (60-67°F), dark, and quiet. Avoid caffeine after 2 PM. Practice relaxation before sleep.'),
    (('stress', 'anxiety', 'mental', 'worry', 'depression'),
     '🧘 **Stress Management:** Practice deep breathing exercises (4-7-8 technique). '
     'Try meditation or mindfulness 10 minutes daily. Regular physical activity reduces stress hormones. '
     'Maintain social connections. Get adequate sleep (7-9 hours). '
     'Consider professional counseling if stress is overwhelming.'),
    (('weight', 'lose', 'obesity', 'fat', 'overweight'),
     '⚖️ **Healthy Weight Management:** Set realistic goals (1-2 pounds per week). '
     'Balance diet with portion control. Combine cardio and strength training. '
     'Track food intake using a journal or app. Stay hydrated throughout the day. '
     'Focus on lifestyle changes, not crash diets.'),
    (('heart', 'cardiac', 'cholesterol', 'cardiovascular'),
     '❤️ **Heart Health:** Eat heart-healthy fats (olive oil, avocados, nuts). '
     'Increase fiber from whole grains and vegetables. Limit saturated fats and avoid trans fats. '
     'Exercise regularly to strengthen your heart. Manage stress effectively. '
     'Quit smoking and limit alcohol. Monitor cholesterol and blood pressure.'),
    (('water', 'hydration', 'drink'),
     '💧 **Hydration Tips:** Drink 8 glasses (64 oz) of water daily. '
     'Increase intake during exercise or hot weather. Start your day with a glass of water. '
     'Carry a reusable water bottle. Eat water-rich foods like fruits and vegetables. '
     'Limit sugary drinks and excessive caffeine.'),
    (('health', 'healthy', 'wellness'),
     '🌟 **Overall Health Tips:** Eat a balanced diet with variety. Exercise regularly (30 min most days). '
     'Get 7-9 hours of quality sleep. Manage stress effectively. Stay hydrated. Maintain healthy weight. '
     'Schedule regular check-ups. Avoid smoking and limit alcohol. Stay socially connected.'),
]

DEFAULT_MENU = (
    '🩺 **I can help you with:**\n\n'
    '• 🥗 Diet & Nutrition advice\n'
    '• 💪 Exercise & Fitness tips\n'
    '• 🩺 Diabetes management\n'
    '• 💓 Blood pressure control\n'
    '• 😴 Sleep improvement\n'
    '• 🧘 Stress & anxiety management\n'
    '• ⚖️ Weight management\n'
    '• ❤️ Heart health\n'
    '• 💧 Hydration tips\n\n'
    '**Ask me anything about these health topics!** For example: '
    '"What are healthy eating tips?" or "How can I manage stress?"'
)


def fallback_response(message: Optional[str]) -> str:
    """Canned advice for the first topic whose keyword occurs in ``message``.

    Substring matching, topics tried in list order; never raises.
    """
    msg = (message or '').lower()
    for keywords, advice in FALLBACK_TOPICS:
        if any(k in msg for k in keywords):
            return advice
    return DEFAULT_MENU


# ---------------------------------------------------------------------
# Response cache
# ---------------------------------------------------------------------
def normalize_message(message: str) -> str:
    return message.lower().strip()


class ResponseCache:
    """Size-capped message -> answer table.

    Eviction drops the oldest *inserted* entry; lookups do not refresh
    an entry's position.
    """

    def __init__(self, capacity: int = 100):
        if capacity < 1:
            raise ValueError('capacity must be at least 1')
        self.capacity = capacity
        self._entries: OrderedDict[str, str] = OrderedDict()

    def get(self, key: str) -> Optional[str]:
        return self._entries.get(key)

    def put(self, key: str, value: str) -> None:
        if key in self._entries:
            self._entries[key] = value
            return
        if len(self._entries) >= self.capacity:
            evicted, _ = self._entries.popitem(last=False)
            logger.debug('Chat cache full, evicted %r', evicted)
        self._entries[key] = value

    def keys(self) -> list[str]:
        return list(self._entries)

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, key: str) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)


# ---------------------------------------------------------------------
# Google generative AI client
# ---------------------------------------------------------------------
class GenerativeAIError(RuntimeError):
    """The provider could not produce an answer (transport, status or payload)."""


@dataclass
class GenerationConfig:
    temperature: float = 0.7
    max_output_tokens: int = 500
    top_p: float = 0.8
    top_k: int = 40

    def as_payload(self) -> dict:
        return {
            'temperature': self.temperature,
            'maxOutputTokens': self.max_output_tokens,
            'topP': self.top_p,
            'topK': self.top_k,
        }


class GeminiClient:
    def __init__(self, api_key: str, *, model: str = 'gemini-2.5-flash',
                 base_url: str = 'https://generativelanguage.googleapis.com/v1beta',
                 timeout: float = 20, session: Optional[requests.Session] = None):
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.session = session or requests.Session()

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/models/{self.model}:generateContent"

    def generate(self, prompt: str, config: Optional[GenerationConfig] = None) -> str:
        body = {'contents': [{'parts': [{'text': prompt}]}]}
        if config is not None:
            body['generationConfig'] = config.as_payload()
        try:
            r = self.session.post(
                self.endpoint,
                params={'key': self.api_key},
                json=body,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise GenerativeAIError(f'request failed: {e}') from e
        if r.status_code != 200:
            raise GenerativeAIError(f'provider returned HTTP {r.status_code}')
        try:
            data = r.json()
        except ValueError as e:
            raise GenerativeAIError('provider returned invalid JSON') from e
        text = extract_text(data)
        if not text:
            raise GenerativeAIError('no text in provider response')
        return text


def extract_text(data) -> Optional[str]:
    """Pull ``candidates[0].content.parts[0].text`` out of a response body."""
    try:
        text = data['candidates'][0]['content']['parts'][0]['text']
    except (KeyError, IndexError, TypeError):
        return None
    return text if isinstance(text, str) and text else None


# ---------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------
PROMPT_TEMPLATE = (
    'You are a helpful medical health assistant. Provide clear, accurate health advice in 2-3 sentences. '
    'Be friendly and supportive.\n\nUser question: {message}\n\nYour response:'
)


@dataclass
class ChatReply:
    response: str
    cached: bool = False
    fallback: bool = False
    error: Optional[str] = None

    def as_payload(self) -> dict:
        payload = {'ok': True, 'response': self.response, 'cached': self.cached, 'fallback': self.fallback}
        if self.error:
            payload['error'] = self.error
        return payload


class ChatbotService:
    def __init__(self, client: Optional[GeminiClient] = None, cache: Optional[ResponseCache] = None,
                 generation: Optional[GenerationConfig] = None):
        self.client = client
        self.cache = cache if cache is not None else ResponseCache()
        self.generation = generation or GenerationConfig()

    def reply(self, message: str) -> ChatReply:
        key = normalize_message(message)
        cached = self.cache.get(key)
        if cached is not None:
            logger.info('Chatbot cache hit (%d chars)', len(cached))
            return ChatReply(cached, cached=True)

        if self.client is None:
            logger.info('Chatbot has no AI provider configured, using fallback')
            return ChatReply(fallback_response(message), fallback=True)

        try:
            answer = self.client.generate(PROMPT_TEMPLATE.format(message=message), self.generation)
        except GenerativeAIError as e:
            logger.warning('AI provider failed, using fallback: %s', e)
            return ChatReply(fallback_response(message), fallback=True, error=str(e))

        logger.info('Chatbot fresh AI response (%d chars)', len(answer))
        logger.debug('AI response: %s', answer)
        self.cache.put(key, answer)
        return ChatReply(answer)


def build_chatbot_service() -> ChatbotService:
    client = None
    if settings.GOOGLE_AI_API_KEY:
        client = GeminiClient(
            settings.GOOGLE_AI_API_KEY,
            model=settings.GOOGLE_AI_MODEL,
            base_url=settings.GOOGLE_AI_BASE_URL,
            timeout=settings.GOOGLE_AI_TIMEOUT,
        )
    return ChatbotService(client=client, cache=ResponseCache(settings.CHATBOT_CACHE_SIZE))


_service: Optional[ChatbotService] = None


def get_chatbot_service() -> ChatbotService:
    """Process-wide service; its cache lives as long as the worker."""
    global _service
    if _service is None:
        _service = build_chatbot_service()
    return _service


def reset_chatbot_service() -> None:
    global _service
    _service = None
