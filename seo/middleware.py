# seo/middleware.py
import logging

from django.conf import settings

from .slugs import SkipList, classify_detail_path, classify_path

logger = logging.getLogger(__name__)

DEFAULT_SKIP_PREFIXES = [
    '/favicon',
    '/referrals',
    '/companies',
    '/search-referrals',
    '/login',
    '/register',
    '/forgot-password',
    '/profile',
    '/my-referrals',
    '/post-referral',
    '/refer',
]


def build_skip_list():
    """
    Skip list from settings, plus the static and media URL roots.
    """
    prefixes = list(getattr(settings, 'SEO_SKIP_PREFIXES', DEFAULT_SKIP_PREFIXES))
    for url in (getattr(settings, 'STATIC_URL', None), getattr(settings, 'MEDIA_URL', None)):
        if url and url.startswith('/'):
            prefixes.append(url)
    return SkipList(prefixes)


class SeoRewriteMiddleware:
    """
    Internally rewrite root-level SEO slugs onto the listing and detail views.

    The browser-visible URL (request.path) is left alone; only path_info,
    which Django resolves against, changes. The slug's rewrite parameters
    are merged into a copy of request.GET so existing ones (experience,
    page, ...) survive.
    """

    def __init__(self, get_response):
        self.get_response = get_response
        self.skip_list = build_skip_list()

    def __call__(self, request):
        request.seo_slug = None
        path = request.path_info
        decision = classify_detail_path(path, self.skip_list) or classify_path(path, self.skip_list)
        if decision is not None:
            self.apply(request, decision)
        return self.get_response(request)

    def apply(self, request, decision):
        request.seo_slug = request.path_info.strip('/').lower()
        if decision.query:
            query = request.GET.copy()
            for key, value in decision.query.items():
                query[key] = value
            request.GET = query
        logger.debug("SEO rewrite %s -> %s %s", request.path_info, decision.target_path, decision.query)
        request.path_info = decision.target_path
