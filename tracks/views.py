from django.apps import apps
from django.http import JsonResponse
from django.views.decorators.http import require_http_methods

from tracks.operations import (
    MetadataUnavailable,
    MissingParameter,
    NoResults,
    process_request,
)
from tracks.service.config import debug_log_enabled


def debug_log(message):
    """Print a [DEBUG] line when TUBEPCM_DEBUG_LOG is on"""
    if debug_log_enabled():
        print(f'[DEBUG] {message}')


def get_youtube_client():
    return apps.get_app_config('tracks').youtube_client


@require_http_methods(['GET'])
def process_view(request):
    """
    Resolve a video and make sure its decoded PCM is cached.

    Params:
        q (optional): Search query, first hit is used
        url (optional): Watch URL, short link or video ID (wins over q)

    Returns:
        JSON response with success, metadata, search_results, local_path,
        db_status and error (empty keys omitted)
    """
    query = request.GET.get('q', '').strip()
    url = request.GET.get('url', '').strip()

    try:
        result = process_request(get_youtube_client(), query=query, url=url, logger=debug_log)
    except MissingParameter as e:
        return JsonResponse({'success': False, 'error': str(e)}, status=400)
    except NoResults as e:
        return JsonResponse({'success': False, 'error': str(e)}, status=404)
    except MetadataUnavailable as e:
        return JsonResponse({'success': False, 'error': str(e)}, status=502)

    return JsonResponse(
        result.as_dict(),
        status=200 if result.success else 500,
        json_dumps_params={'ensure_ascii': False},
    )
