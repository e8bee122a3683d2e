from django.db import connection
from django.http import JsonResponse


def health_check(request):
    """Liveness probe; also verifies the database answers."""
    with connection.cursor() as cursor:
        cursor.execute('SELECT 1')
    return JsonResponse({'status': 'ok'})


def error_404(request, exception):
    """Custom 404 handler."""
    return JsonResponse({
        'message': 'Not found',
        'status': 404
    }, status=404)


def error_500(request):
    """Custom 500 handler."""
    return JsonResponse({
        'message': 'Internal server error',
        'status': 500
    }, status=500)
