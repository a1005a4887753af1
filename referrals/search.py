# referrals/search.py
from rapidfuzz import fuzz

from seo.slugs import SearchFilters, classify_slug, location_fragment, to_display_text, to_slug_fragment

from .catalogue import REFERRALS, known_locations


def resolve_location(fragment):
    """
    Resolve a slug location fragment to (city, country).
    Cities are tried first, then "city-country" pairs, then countries;
    anything unknown is treated as a country name.
    """
    if not fragment:
        return '', ''
    locations = known_locations()

    for city, country in locations:
        if city and to_slug_fragment(city) == fragment:
            return city, ''
    for city, country in locations:
        if city and country and location_fragment(city, country) == fragment:
            return city, country
    for city, country in locations:
        if to_slug_fragment(country) == fragment:
            return '', country
    return '', to_display_text(fragment)


def filters_for_listing(seo_slug, params):
    """
    Search filters for the listing page: the seo tag left by the rewrite
    middleware, overridden by any explicit query parameters.
    """
    filters = SearchFilters()
    match = classify_slug(seo_slug) if seo_slug else None
    if match is not None and match.matched:
        filters.keyword = to_display_text(match.keyword)
        filters.city, filters.country = resolve_location(match.location)

    explicit = SearchFilters.from_query(params)
    for name in ('keyword', 'country', 'city', 'experience'):
        value = getattr(explicit, name)
        if value:
            setattr(filters, name, value)
    return filters


def _haystack(referral):
    parts = [referral.title, referral.company.name, ' '.join(referral.skills)]
    return ' '.join(parts).lower()


def matches_keyword(referral, keyword, fuzzy_threshold=80):
    """
    Matching strategy:
      1) substring match on title / company / skills
      2) fuzzy partial match (RapidFuzz)
    """
    k = keyword.strip().lower()
    if not k:
        return True
    text = _haystack(referral)
    if k in text:
        return True
    return fuzz.partial_ratio(k, text) >= fuzzy_threshold


def parse_years(value):
    """
    Whole years from an ASCII digit string, or None.
    """
    value = (value or '').strip()
    if not (value.isascii() and value.isdigit()):
        return None
    return int(value)


def matches_experience(referral, experience):
    years = parse_years(experience)
    if years is None:
        return True
    return referral.min_experience <= years <= referral.max_experience


def search_referrals(filters, fuzzy_threshold=80, referrals=None):
    results = []
    for referral in REFERRALS if referrals is None else referrals:
        if filters.city and referral.city.lower() != filters.city.lower():
            continue
        if filters.country and referral.country.lower() != filters.country.lower():
            continue
        if not matches_experience(referral, filters.experience):
            continue
        if not matches_keyword(referral, filters.keyword, fuzzy_threshold):
            continue
        results.append(referral)
    return results
