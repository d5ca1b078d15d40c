"""
Health chatbot endpoints.
"""
from rest_framework.decorators import api_view, permission_classes, throttle_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.throttling import ScopedRateThrottle

from records.exceptions import MissingField
from records.permissions import IsAdminRole
from records.services.chatbot import GenerativeAIError, get_chatbot_service


@api_view(['POST'])
@permission_classes([IsAuthenticated])
@throttle_classes([ScopedRateThrottle])
def chatbot(request):
    message = request.data.get('message')
    if not isinstance(message, str) or not message.strip():
        raise MissingField('message')
    reply = get_chatbot_service().reply(message)
    return Response(reply.as_payload())


chatbot.cls.throttle_scope = 'chatbot'


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdminRole])
def test_ai(request):
    """Send a fixed prompt straight to the provider, bypassing cache and fallback."""
    service = get_chatbot_service()
    if service.client is None:
        return Response({'ok': False, 'configured': False, 'error': 'GOOGLE_AI_API_KEY is not set'}, status=503)
    try:
        text = service.client.generate('Say "Hello, I am working!" in one sentence.')
    except GenerativeAIError as e:
        return Response({'ok': False, 'configured': True, 'model': service.client.model, 'error': str(e)},
                        status=502)
    return Response({'ok': True, 'configured': True, 'model': service.client.model, 'response': text})
