# seo/metadata.py
"""
Page metadata and schema.org JSON-LD for the referral listing.
"""
import json

from .slugs import LISTING_PATH, classify_slug, derive_display

SCHEMA_CONTEXT = 'https://schema.org'


def to_json_ld(data):
    """
    Serialize for embedding inside <script type="application/ld+json">.
    """
    return json.dumps(data).replace('<', '\\u003c')


def breadcrumb_schema(origin, listing_url, crumb_name):
    return {
        '@context': SCHEMA_CONTEXT,
        '@type': 'BreadcrumbList',
        'itemListElement': [
            {'@type': 'ListItem', 'position': 1, 'item': {'@id': f'{origin}/', 'name': 'Home'}},
            {'@type': 'ListItem', 'position': 2, 'item': {'@id': listing_url, 'name': crumb_name}},
        ],
    }


def item_list_schema(origin, listing_url, crumb_name, referrals, total):
    return {
        '@context': SCHEMA_CONTEXT,
        '@type': 'ItemList',
        'numberOfItems': total,
        'url': listing_url,
        'name': crumb_name,
        'itemListElement': [
            {
                '@type': 'ListItem',
                'position': index,
                'url': f'{origin}{referral.seo_path}',
                'name': referral.title,
            }
            for index, referral in enumerate(referrals, start=1)
        ],
    }


def listing_metadata(seo_slug, origin, referrals=(), total=None, site_name='TymblHub'):
    """
    Title, description, canonical URL and JSON-LD for a listing page.

    `seo_slug` is the tag left by the rewrite middleware (empty for the
    plain /referrals page); `referrals` is the page of results shown.
    """
    origin = origin.rstrip('/')
    referrals = list(referrals)
    if total is None:
        total = len(referrals)

    if seo_slug and classify_slug(seo_slug).matched:
        display = derive_display(seo_slug)
        base_path = f'/{seo_slug.lower()}'
    else:
        display = derive_display('')
        base_path = LISTING_PATH
    keyword, suffix = display

    if keyword:
        crumb_name = f'{keyword} Jobs'
        title = f'{keyword} Jobs{suffix} | {site_name}'
        description = (
            f'Browse {total or "the latest"} {keyword} jobs{suffix}. '
            f'Apply now on {site_name}.'
        )
    elif suffix:
        crumb_name = f'Jobs{suffix}'
        title = f'Jobs{suffix} | {site_name}'
        description = f'Discover curated job referrals{suffix}. Apply now on {site_name}.'
    else:
        crumb_name = 'Referrals'
        title = f'Referrals | {site_name}'
        description = f'Discover curated job referrals. Apply now on {site_name}.'

    listing_url = f'{origin}{base_path}'
    breadcrumb = breadcrumb_schema(origin, listing_url, crumb_name)
    item_list = item_list_schema(origin, listing_url, crumb_name, referrals, total)

    return {
        'title': title,
        'description': description,
        'canonical_url': listing_url,
        'crumb_name': crumb_name,
        'keyword': keyword,
        'location_suffix': suffix,
        'breadcrumb': breadcrumb,
        'item_list': item_list,
        'breadcrumb_json': to_json_ld(breadcrumb),
        'item_list_json': to_json_ld(item_list),
    }
