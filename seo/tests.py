# seo/tests.py
import json

from django.http import HttpResponse
from django.test import RequestFactory, SimpleTestCase, override_settings

from .metadata import listing_metadata, to_json_ld
from .middleware import DEFAULT_SKIP_PREFIXES, SeoRewriteMiddleware, build_skip_list
from .slugs import (
    LISTING_PATH, SearchFilters, SkipList, SlugShape, build_company_path,
    build_job_details_path, build_search_url, build_seo_path, classify_detail_path,
    classify_path, classify_slug, derive_display, parse_company_slug,
    parse_job_details_slug, to_display_text, to_slug_fragment,
)

SKIP = SkipList(DEFAULT_SKIP_PREFIXES)


class NormalizationTest(SimpleTestCase):
    def test_slug_fragment(self):
        self.assertEqual(to_slug_fragment('  Senior   Engineer '), 'senior-engineer')
        self.assertEqual(to_slug_fragment('C++ & Go'), 'c-and-go')
        self.assertEqual(to_slug_fragment('Node.js / React'), 'nodejs-react')
        self.assertEqual(to_slug_fragment('--Data--Scientist--'), 'data-scientist')
        self.assertEqual(to_slug_fragment(''), '')
        self.assertEqual(to_slug_fragment(None), '')

    def test_slug_fragment_is_idempotent(self):
        samples = [
            'Senior Engineer', '  a  -  b ', 'R&D', 'Zürich', '--x--', 'Node.js / React',
            'São Paulo', 'C#', '\tmulti\nline\ttext ', '---', '100% remote!', 'a - - b',
        ]
        for s in samples:
            once = to_slug_fragment(s)
            self.assertEqual(to_slug_fragment(once), once, s)

    def test_display_text(self):
        self.assertEqual(to_display_text('data-scientist'), 'Data Scientist')
        self.assertEqual(to_display_text('bangalore'), 'Bangalore')
        self.assertEqual(to_display_text('new-york'), 'New York')
        # no percent-decoding
        self.assertEqual(to_display_text('a%41'), 'A%41')
        self.assertEqual(to_display_text(''), '')

    def test_display_text_is_lossy(self):
        # capitalisation and punctuation are not recovered
        self.assertEqual(to_display_text(to_slug_fragment('iOS Developer')), 'Ios Developer')


class ClassifySlugTest(SimpleTestCase):
    def test_location_prefix_wins(self):
        match = classify_slug('jobs-in-bangalore')
        self.assertEqual(match.shape, SlugShape.LOCATION_ONLY)
        self.assertEqual(match.location, 'bangalore')
        self.assertIsNone(match.keyword)

    def test_keyword_and_location_splits_on_first_infix(self):
        match = classify_slug('java-jobs-in-jobs-in-pune')
        self.assertEqual(match.shape, SlugShape.KEYWORD_AND_LOCATION)
        self.assertEqual(match.keyword, 'java')
        self.assertEqual(match.location, 'jobs-in-pune')

    def test_keyword_only(self):
        match = classify_slug('Senior-Engineer-Jobs')
        self.assertEqual(match.shape, SlugShape.KEYWORD_ONLY)
        self.assertEqual(match.keyword, 'senior-engineer')
        self.assertIsNone(match.location)

    def test_no_match(self):
        for slug in ('about-us', 'jobs', 'jobsearch', ''):
            self.assertFalse(classify_slug(slug).matched, slug)


class SkipListTest(SimpleTestCase):
    def test_prefix_and_exact_matches(self):
        self.assertTrue(SKIP.matches('/referrals'))
        self.assertTrue(SKIP.matches('/REFERRALS/12'))
        self.assertTrue(SKIP.matches('/favicon.ico'))
        self.assertTrue(SKIP.matches('/login-jobs'))
        self.assertIn('/profile', SKIP)

    def test_non_matches(self):
        self.assertFalse(SKIP.matches('/python-jobs'))
        self.assertFalse(SKIP.matches('/'))
        self.assertFalse(SKIP.matches(''))
        self.assertFalse(SkipList().matches('/anything'))

    def test_settings_skip_list_includes_static_and_media(self):
        skip = build_skip_list()
        self.assertTrue(skip.matches('/static/app.css'))
        self.assertTrue(skip.matches('/media/logo.png'))


class ClassifyPathTest(SimpleTestCase):
    def test_rewrites_search_slugs(self):
        for path in ('/senior-engineer-jobs', '/jobs-in-bangalore', '/data-scientist-jobs-in-pune'):
            decision = classify_path(path, SKIP)
            self.assertIsNotNone(decision, path)
            self.assertEqual(decision.target_path, LISTING_PATH)
            self.assertEqual(decision.query, {'seo': path[1:]})

    def test_slug_is_lowercased(self):
        decision = classify_path('/Python-Jobs-In-Pune', SKIP)
        self.assertEqual(decision.query, {'seo': 'python-jobs-in-pune'})

    def test_trailing_slash_and_missing_leading_slash(self):
        self.assertEqual(classify_path('/python-jobs/', SKIP).query, {'seo': 'python-jobs'})
        self.assertEqual(classify_path('senior-engineer-jobs', SKIP).query, {'seo': 'senior-engineer-jobs'})

    def test_skip_list_takes_precedence(self):
        for path in ('/referrals', '/login', '/referrals-jobs', '/profile-jobs-in-pune', '/refer-jobs'):
            self.assertIsNone(classify_path(path, SKIP), path)

    def test_multi_segment_and_root_rejected(self):
        for path in ('/foo/bar-jobs', '/jobs-in-pune/extra', '/', '', '//'):
            self.assertIsNone(classify_path(path, SKIP), path)

    def test_non_search_slug_passes_through(self):
        self.assertIsNone(classify_path('/about-us', SKIP))

    def test_admin_like_keywords_are_not_reserved(self):
        path = build_seo_path(SearchFilters(keyword='Administrator'))
        self.assertEqual(path, '/administrator-jobs')
        self.assertEqual(classify_path(path, build_skip_list()).query, {'seo': 'administrator-jobs'})
        self.assertIsNotNone(classify_path('/admin-assistant-jobs-in-pune', SKIP))

    def test_without_skip_list(self):
        self.assertIsNotNone(classify_path('/referrals-jobs'))


class DeriveDisplayTest(SimpleTestCase):
    def test_shapes(self):
        self.assertEqual(derive_display('senior-engineer-jobs'), ('Senior Engineer', ''))
        self.assertEqual(derive_display('jobs-in-bangalore'), ('', ' in Bangalore'))
        self.assertEqual(derive_display('data-scientist-jobs-in-pune'), ('Data Scientist', ' in Pune'))
        self.assertEqual(derive_display('about-us'), ('', ''))


class BuildSeoPathTest(SimpleTestCase):
    def test_decision_table(self):
        self.assertEqual(build_seo_path(SearchFilters(keyword='Senior Engineer')), '/senior-engineer-jobs')
        self.assertEqual(build_seo_path(SearchFilters(country='India', city='Bangalore')), '/jobs-in-bangalore-india')
        self.assertEqual(build_seo_path(SearchFilters(keyword='Data Scientist', city='Pune')), '/data-scientist-jobs-in-pune')
        self.assertEqual(build_seo_path(SearchFilters(keyword='Python', country='India')), '/python-jobs-in-india')
        self.assertEqual(build_seo_path(SearchFilters()), '/referrals')

    def test_inputs_that_normalize_to_nothing_fall_back(self):
        self.assertEqual(build_seo_path(SearchFilters(keyword='  !!  ', city='???')), '/referrals')

    def test_experience_is_never_in_the_slug(self):
        filters = SearchFilters(keyword='Python', experience='3')
        self.assertEqual(build_seo_path(filters), '/python-jobs')
        self.assertEqual(build_search_url(filters), '/python-jobs?experience=3')
        self.assertEqual(build_search_url(SearchFilters(experience='2')), '/referrals?experience=2')
        self.assertEqual(build_search_url(SearchFilters(keyword='Python')), '/python-jobs')

    def test_from_query(self):
        filters = SearchFilters.from_query({'keyword': ' Go ', 'city': 'Pune', 'seo': 'x'})
        self.assertEqual(filters, SearchFilters(keyword='Go', city='Pune'))


class RoundTripTest(SimpleTestCase):
    def test_keyword_only(self):
        path = build_seo_path(SearchFilters(keyword='Senior Engineer'))
        self.assertEqual(path, '/senior-engineer-jobs')
        decision = classify_path(path[1:], SKIP)
        self.assertEqual(decision.query['seo'], 'senior-engineer-jobs')
        self.assertEqual(derive_display(decision.query['seo']), ('Senior Engineer', ''))

    def test_location_only(self):
        path = build_seo_path(SearchFilters(country='India', city='Bangalore'))
        self.assertEqual(path, '/jobs-in-bangalore-india')
        match = classify_slug(classify_path(path, SKIP).query['seo'])
        self.assertEqual(match.shape, SlugShape.LOCATION_ONLY)
        self.assertEqual(match.location, 'bangalore-india')

    def test_keyword_and_location(self):
        path = build_seo_path(SearchFilters(keyword='Data Scientist', city='Pune'))
        self.assertEqual(path, '/data-scientist-jobs-in-pune')
        seo = classify_path(path, SKIP).query['seo']
        match = classify_slug(seo)
        self.assertEqual(match.shape, SlugShape.KEYWORD_AND_LOCATION)
        self.assertEqual((match.keyword, match.location), ('data-scientist', 'pune'))
        self.assertEqual(derive_display(seo), ('Data Scientist', ' in Pune'))

    def test_fragments_survive(self):
        cases = [
            SearchFilters(keyword='Machine Learning Engineer', city='New York', country='USA'),
            SearchFilters(keyword='C++ & Rust'),
            SearchFilters(country='United Kingdom'),
            SearchFilters(keyword='Site Reliability', city='São Paulo'),
        ]
        for filters in cases:
            path = build_seo_path(filters)
            decision = classify_path(path, SKIP)
            self.assertIsNotNone(decision, path)
            match = classify_slug(decision.query['seo'])
            expected_location = '-'.join(
                p for p in (to_slug_fragment(filters.city), to_slug_fragment(filters.country)) if p
            )
            self.assertEqual(to_slug_fragment(match.keyword or ''), to_slug_fragment(filters.keyword))
            self.assertEqual(to_slug_fragment(match.location or ''), expected_location)


class DetailSlugTest(SimpleTestCase):
    def test_job_details_round_trip(self):
        path = build_job_details_path('Senior Engineer', 'Bangalore', 'India', 'Google', 5, 10, 42)
        self.assertEqual(path, '/senior-engineer-jobs-in-bangalore-in-google-5-to-10-years-jid-42')
        parsed = parse_job_details_slug(path[1:])
        self.assertEqual(parsed.job_id, 42)
        self.assertEqual(parsed.title, 'Senior Engineer')
        self.assertEqual(parsed.location, 'Bangalore')
        self.assertEqual(parsed.company, 'Google')
        self.assertEqual((parsed.min_experience, parsed.max_experience), (5, 10))

    def test_job_details_fresher_and_country_fallback(self):
        path = build_job_details_path('Software Engineer', '', 'India', 'Infosys', 0, 0, 4)
        self.assertEqual(path, '/software-engineer-jobs-in-india-in-infosys-for-fresher-jid-4')
        parsed = parse_job_details_slug(path[1:])
        self.assertEqual((parsed.min_experience, parsed.max_experience), (0, 0))
        self.assertEqual(parsed.location, 'India')

    def test_job_details_malformed_body_keeps_id(self):
        parsed = parse_job_details_slug('whatever-jid-9')
        self.assertEqual(parsed.job_id, 9)
        self.assertEqual(parsed.title, '')
        self.assertIsNone(parsed.min_experience)
        self.assertIsNone(parse_job_details_slug('python-jobs-in-pune'))

    def test_company(self):
        path = build_company_path('Google', 1)
        self.assertEqual(path, '/google-careers-cid-1')
        self.assertEqual(parse_company_slug(path[1:]), (1, 'Google'))
        self.assertIsNone(parse_company_slug('google-careers'))

    def test_classify_detail_path(self):
        self.assertEqual(
            classify_detail_path('/senior-engineer-jobs-in-bangalore-in-google-5-to-10-years-jid-42', SKIP).target_path,
            '/referrals/42/',
        )
        self.assertEqual(classify_detail_path('/google-careers-cid-1', SKIP).target_path, '/companies/1/')
        self.assertIsNone(classify_detail_path('/python-jobs', SKIP))
        self.assertIsNone(classify_detail_path('/a/google-careers-cid-1', SKIP))


class MetadataTest(SimpleTestCase):
    def test_keyword_and_location(self):
        meta = listing_metadata('data-scientist-jobs-in-pune', 'https://tymblhub.com/', total=3)
        self.assertEqual(meta['title'], 'Data Scientist Jobs in Pune | TymblHub')
        self.assertEqual(meta['canonical_url'], 'https://tymblhub.com/data-scientist-jobs-in-pune')
        self.assertIn('Browse 3 Data Scientist jobs in Pune', meta['description'])
        crumbs = meta['breadcrumb']['itemListElement']
        self.assertEqual(crumbs[0]['item']['@id'], 'https://tymblhub.com/')
        self.assertEqual(crumbs[1]['item']['name'], 'Data Scientist Jobs')

    def test_location_only_and_plain_listing(self):
        self.assertEqual(listing_metadata('jobs-in-bangalore', 'http://x')['title'], 'Jobs in Bangalore | TymblHub')
        meta = listing_metadata('', 'http://x', site_name='Hub')
        self.assertEqual(meta['title'], 'Referrals | Hub')
        self.assertEqual(meta['canonical_url'], 'http://x/referrals')
        self.assertEqual(meta['item_list']['numberOfItems'], 0)

    def test_json_ld_is_script_safe(self):
        encoded = to_json_ld({'name': '</script><b>'})
        self.assertNotIn('<', encoded)
        self.assertEqual(json.loads(encoded), {'name': '</script><b>'})


@override_settings(SEO_SKIP_PREFIXES=['/referrals', '/login'])
class MiddlewareTest(SimpleTestCase):
    def setUp(self):
        self.factory = RequestFactory()
        self.seen = {}

        def get_response(request):
            self.seen['path_info'] = request.path_info
            self.seen['path'] = request.path
            self.seen['GET'] = request.GET.dict()
            self.seen['seo_slug'] = request.seo_slug
            return HttpResponse('ok')

        self.middleware = SeoRewriteMiddleware(get_response)

    def test_rewrite_keeps_visible_path_and_existing_params(self):
        self.middleware(self.factory.get('/Python-Jobs-In-Pune', {'experience': '3'}))
        self.assertEqual(self.seen['path_info'], '/referrals')
        self.assertEqual(self.seen['path'], '/Python-Jobs-In-Pune')
        self.assertEqual(self.seen['GET'], {'experience': '3', 'seo': 'python-jobs-in-pune'})
        self.assertEqual(self.seen['seo_slug'], 'python-jobs-in-pune')

    def test_detail_slug_routes_to_detail(self):
        self.middleware(self.factory.get('/senior-engineer-jobs-in-bangalore-in-google-5-to-10-years-jid-1'))
        self.assertEqual(self.seen['path_info'], '/referrals/1/')
        self.assertEqual(self.seen['GET'], {})

    def test_pass_through(self):
        for path in ('/login', '/about-us', '/a/b-jobs', '/'):
            self.middleware(self.factory.get(path))
            self.assertEqual(self.seen['path_info'], path)
            self.assertIsNone(self.seen['seo_slug'])
