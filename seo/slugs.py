# seo/slugs.py
"""
SEO slug parsing and building for the referral listing.

A job-search slug is a single root-level path segment in one of three shapes:

    <keyword>-jobs
    jobs-in-<location>
    <keyword>-jobs-in-<location>

classify_path() turns an inbound path into a rewrite onto the listing page,
build_seo_path() does the reverse for a set of search filters, and
derive_display() turns a slug back into display strings for page titles.
All three share classify_slug() so the shape rules live in one place.
"""
import re
from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple, Optional
from urllib.parse import urlencode

LISTING_PATH = '/referrals'
SEO_PARAM = 'seo'

LOCATION_PREFIX = 'jobs-in-'
KEYWORD_LOCATION_INFIX = '-jobs-in-'
KEYWORD_SUFFIX = '-jobs'


# -------------------------
# Normalization helpers
# -------------------------
_WHITESPACE_RE = re.compile(r'\s+')
_INVALID_CHARS_RE = re.compile(r'[^a-z0-9-]')
_HYPHEN_RUN_RE = re.compile(r'-{2,}')


def to_slug_fragment(text):
    """
    Lowercase, trim, hyphenate whitespace and drop anything outside [a-z0-9-].
    Idempotent: feeding the output back in returns it unchanged.
    """
    text = (text or '').lower().strip().replace('&', 'and')
    text = _WHITESPACE_RE.sub('-', text)
    text = _INVALID_CHARS_RE.sub('', text)
    text = _HYPHEN_RUN_RE.sub('-', text)
    return text.strip('-')


def to_display_text(fragment):
    """
    Turn a slug fragment into title-cased words ("data-scientist" -> "Data Scientist").

    This is lossy: original capitalisation, punctuation and spacing were
    thrown away by to_slug_fragment() and cannot be recovered.
    """
    words = (fragment or '').replace('-', ' ').split()
    return ' '.join(word[:1].upper() + word[1:] for word in words)


# -------------------------
# Types
# -------------------------
class SlugShape(Enum):
    NO_MATCH = 'no_match'
    KEYWORD_ONLY = 'keyword_only'
    LOCATION_ONLY = 'location_only'
    KEYWORD_AND_LOCATION = 'keyword_and_location'


class SlugMatch(NamedTuple):
    shape: SlugShape
    keyword: Optional[str] = None
    location: Optional[str] = None

    @property
    def matched(self):
        return self.shape is not SlugShape.NO_MATCH


NO_MATCH = SlugMatch(SlugShape.NO_MATCH)


class Rewrite(NamedTuple):
    target_path: str
    query: dict


class SlugDisplay(NamedTuple):
    keyword: str
    location_suffix: str


@dataclass
class SearchFilters:
    keyword: str = ''
    country: str = ''
    city: str = ''
    experience: str = ''

    @classmethod
    def from_query(cls, params):
        """
        Build filters from a QueryDict / mapping of request parameters.
        """
        return cls(**{
            name: (params.get(name) or '').strip()
            for name in ('keyword', 'country', 'city', 'experience')
        })


class SkipList:
    """
    Reserved path prefixes that are never treated as search slugs.

    Entries are stored in a set; a lookup probes each prefix of the path
    (bounded by the longest entry) instead of scanning every entry.
    """

    def __init__(self, prefixes=()):
        self._prefixes = frozenset(p.lower() for p in prefixes if p)
        self._longest = max((len(p) for p in self._prefixes), default=0)

    def __contains__(self, path):
        return self.matches(path)

    def __len__(self):
        return len(self._prefixes)

    def matches(self, path):
        path = (path or '').lower()
        limit = min(len(path), self._longest)
        return any(path[:end] in self._prefixes for end in range(1, limit + 1))


# -------------------------
# Shared classification
# -------------------------
def classify_slug(slug):
    """
    Decide which search shape a slug has. The order matters: the
    "jobs-in-" prefix is tested before the "-jobs-in-" infix, and the
    infix is split on its first occurrence.
    """
    slug = (slug or '').lower()
    if slug.startswith(LOCATION_PREFIX):
        return SlugMatch(SlugShape.LOCATION_ONLY, location=slug[len(LOCATION_PREFIX):])
    keyword, sep, location = slug.partition(KEYWORD_LOCATION_INFIX)
    if sep:
        return SlugMatch(SlugShape.KEYWORD_AND_LOCATION, keyword=keyword, location=location)
    if slug.endswith(KEYWORD_SUFFIX):
        return SlugMatch(SlugShape.KEYWORD_ONLY, keyword=slug[:-len(KEYWORD_SUFFIX)])
    return NO_MATCH


def _root_slug(path, skip_list):
    """
    Return the lowercased single root segment of `path`, or None when the
    path has a different number of segments or is reserved.
    """
    lower = (path or '').lower()
    if not lower.startswith('/'):
        lower = '/' + lower
    segments = [s for s in lower.split('/') if s]
    if len(segments) != 1:
        return None
    if skip_list is not None and skip_list.matches(lower):
        return None
    return segments[0] or None


# -------------------------
# Parser / deriver / builder
# -------------------------
def classify_path(path, skip_list=None):
    """
    Map an inbound request path to a listing Rewrite, or None to let the
    request through untouched.
    """
    slug = _root_slug(path, skip_list)
    if slug is None:
        return None
    if not classify_slug(slug).matched:
        return None
    return Rewrite(LISTING_PATH, {SEO_PARAM: slug})


def derive_display(slug):
    match = classify_slug(slug)
    keyword = to_display_text(match.keyword) if match.keyword else ''
    location_suffix = ' in ' + to_display_text(match.location) if match.location else ''
    return SlugDisplay(keyword, location_suffix)


def location_fragment(city, country):
    """
    City and country are fragmented separately and joined city first.
    """
    parts = [to_slug_fragment(city), to_slug_fragment(country)]
    return '-'.join(p for p in parts if p)


def build_seo_path(filters):
    """
    Canonical path for a set of search filters. Experience never goes into
    the slug; see build_search_url().
    """
    keyword = to_slug_fragment(filters.keyword)
    location = location_fragment(filters.city, filters.country)

    if keyword and location:
        return f'/{keyword}{KEYWORD_LOCATION_INFIX}{location}'
    if keyword:
        return f'/{keyword}{KEYWORD_SUFFIX}'
    if location:
        return f'/{LOCATION_PREFIX}{location}'
    return LISTING_PATH


def build_search_url(filters):
    path = build_seo_path(filters)
    experience = (filters.experience or '').strip()
    if experience:
        return f'{path}?{urlencode({"experience": experience})}'
    return path


# -------------------------
# Detail pages (referral / company)
# -------------------------
class JobDetailsSlug(NamedTuple):
    job_id: int
    title: str = ''
    location: str = ''
    company: str = ''
    min_experience: Optional[int] = None
    max_experience: Optional[int] = None


class CompanySlug(NamedTuple):
    company_id: int
    company_name: str = ''


FRESHER = 'for-fresher'

_JID_TAIL_RE = re.compile(r'-jid-(\d+)$')
_JOB_DETAILS_RE = re.compile(
    r'^(?P<title>.+?)-jobs-in-(?P<location>.+?)-in-(?P<company>.+?)-'
    r'(?:(?P<min>\d+)-to-(?P<max>\d+)-years|for-fresher)-jid-(?P<id>\d+)$'
)
_COMPANY_RE = re.compile(r'^(?P<name>.*?)(?:-careers)?-cid-(?P<id>\d+)$')


def build_job_details_path(title, city, country, company, min_experience, max_experience, job_id):
    location = to_slug_fragment(city or country)
    if min_experience == 0 and max_experience == 0:
        experience = FRESHER
    else:
        experience = f'{min_experience}-to-{max_experience}-years'
    return (
        f'/{to_slug_fragment(title)}-jobs-in-{location}'
        f'-in-{to_slug_fragment(company)}-{experience}-jid-{job_id}'
    )


def parse_job_details_slug(slug):
    """
    Parse a referral detail slug. Returns None when there is no -jid-<n>
    tail; returns just the id when the rest of the slug is malformed.
    """
    slug = (slug or '').lower()
    tail = _JID_TAIL_RE.search(slug)
    if not tail:
        return None
    job_id = int(tail.group(1))

    m = _JOB_DETAILS_RE.match(slug)
    if not m:
        return JobDetailsSlug(job_id)

    if m.group('min') is None:
        min_experience = max_experience = 0
    else:
        min_experience, max_experience = int(m.group('min')), int(m.group('max'))
    return JobDetailsSlug(
        job_id=job_id,
        title=to_display_text(m.group('title')),
        location=to_display_text(m.group('location')),
        company=to_display_text(m.group('company')),
        min_experience=min_experience,
        max_experience=max_experience,
    )


def build_company_path(name, company_id):
    return f'/{to_slug_fragment(name)}-careers-cid-{company_id}'


def parse_company_slug(slug):
    m = _COMPANY_RE.match((slug or '').lower())
    if not m:
        return None
    return CompanySlug(int(m.group('id')), to_display_text(m.group('name')))


def classify_detail_path(path, skip_list=None):
    """
    Rewrite referral / company detail slugs onto their id-based routes.
    Must be consulted before classify_path(): detail slugs contain "-jobs-in-".
    """
    slug = _root_slug(path, skip_list)
    if slug is None:
        return None
    job = parse_job_details_slug(slug)
    if job is not None:
        return Rewrite(f'{LISTING_PATH}/{job.job_id}/', {})
    company = parse_company_slug(slug)
    if company is not None:
        return Rewrite(f'/companies/{company.company_id}/', {})
    return None
