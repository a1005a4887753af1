# referrals/views.py
import logging

from django.conf import settings
from django.core.paginator import EmptyPage, Paginator
from django.shortcuts import redirect, render
from django.views.decorators.http import require_http_methods

from seo.metadata import listing_metadata
from seo.slugs import SEO_PARAM, SearchFilters, build_search_url, classify_slug

from .catalogue import get_company, get_referral, referrals_for_company
from .forms import ReferralSearchForm
from .search import filters_for_listing, search_referrals

logger = logging.getLogger(__name__)

PAGE_SIZE = 20


def _site_origin(request):
    return (getattr(settings, 'SITE_URL', '') or request.build_absolute_uri('/')).rstrip('/')


def _page_url(request, number):
    """
    Query string for another page of the same search. On rewritten slug
    pages the seo tag comes from the path, so it is left out.
    """
    query = request.GET.copy()
    if getattr(request, 'seo_slug', None):
        query.pop(SEO_PARAM, None)
    query['page'] = str(number)
    return f'?{query.urlencode()}'


# -------------------------
# Listing
# -------------------------
def referral_list(request):
    """
    Referral listing. Reached directly at /referrals or through an SEO slug
    rewritten by seo.middleware.SeoRewriteMiddleware (?seo=<slug>).
    """
    seo_slug = request.GET.get(SEO_PARAM, '').strip().lower()
    if seo_slug and not classify_slug(seo_slug).matched:
        seo_slug = ''

    filters = filters_for_listing(seo_slug, request.GET)
    results = search_referrals(filters, fuzzy_threshold=settings.REFERRAL_FUZZY_THRESHOLD)

    try:
        page = int(request.GET.get('page', 1))
    except ValueError:
        page = 1

    paginator = Paginator(results, PAGE_SIZE)
    try:
        page_obj = paginator.page(page)
    except EmptyPage:
        page_obj = paginator.page(paginator.num_pages)

    metadata = listing_metadata(
        seo_slug,
        _site_origin(request),
        page_obj.object_list,
        total=paginator.count,
        site_name=settings.SITE_NAME,
    )

    return render(
        request,
        'referrals/referral_list.html',
        {
            'referrals': page_obj.object_list,
            'page_obj': page_obj,
            'previous_page_url': _page_url(request, page_obj.previous_page_number()) if page_obj.has_previous() else '',
            'next_page_url': _page_url(request, page_obj.next_page_number()) if page_obj.has_next() else '',
            'filters': filters,
            'seo_slug': seo_slug,
            'metadata': metadata,
            'form': ReferralSearchForm(initial=vars(filters)),
        },
    )


# -------------------------
# Search form
# -------------------------
@require_http_methods(['GET', 'POST'])
def search(request):
    """
    Search page. A valid submission navigates to the canonical slug URL,
    with experience carried as a query parameter.
    """
    if request.method == 'POST':
        form = ReferralSearchForm(request.POST)
        if form.is_valid():
            url = build_search_url(form.to_filters())
            logger.info("Search submitted, redirecting to %s", url)
            return redirect(url)
    else:
        form = ReferralSearchForm(initial=vars(SearchFilters.from_query(request.GET)))
    return render(request, 'referrals/search.html', {'form': form})


# -------------------------
# Detail pages
# -------------------------
def referral_detail(request, referral_id):
    referral = get_referral(referral_id)
    return render(
        request,
        'referrals/referral_detail.html',
        {
            'referral': referral,
            'canonical_url': f'{_site_origin(request)}{referral.seo_path}',
        },
    )


def company_detail(request, company_id):
    company = get_company(company_id)
    return render(
        request,
        'referrals/company_detail.html',
        {
            'company': company,
            'referrals': referrals_for_company(company.id),
            'canonical_url': f'{_site_origin(request)}{company.seo_path}',
        },
    )
